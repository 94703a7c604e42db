"""
Ordered lookup of path overrides.

A path override can be supplied in-process (set_property) or through the OS
environment. Lookups walk an ordered list of sources and stop at the first
non-empty value, so in-process properties win over environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from pathlib import Path

LookupSource = Callable[[str], "str | None"]

_process_properties: dict[str, str] = {}


def set_property(name: str, value: str) -> None:
    """Set an in-process override, e.g. set_property("NODE_BINARY_PATH", "/opt/node")."""
    _process_properties[name] = value


def clear_property(name: str) -> None:
    """Remove an in-process override if present."""
    _process_properties.pop(name, None)


def process_property(name: str) -> str | None:
    """Lookup source reading in-process overrides."""
    return _process_properties.get(name)


def environment_variable(name: str) -> str | None:
    """Lookup source reading the OS environment."""
    return os.environ.get(name)


DEFAULT_LOOKUP_SOURCES: tuple[LookupSource, ...] = (process_property, environment_variable)


def lookup_path(name: str, sources: Iterable[LookupSource] = DEFAULT_LOOKUP_SOURCES) -> Path | None:
    """
    Resolve a path override by name.

    Args:
        name: Property / environment variable name
        sources: Lookup sources, consulted in order

    Returns:
        Path from the first source with a non-empty value, or None
    """
    for source in sources:
        value = source(name)
        if value:
            return Path(value)
    return None
