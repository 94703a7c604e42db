"""
Serialization of capabilities into a single command-line token.

The default form is plain JSON. On Windows the process launcher re-parses
the command line and mangles ordinary JSON quoting, so callers can opt into
a form where every key and string value is wrapped in escaped quotes.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

# Capabilities whose values are file system paths; the server expects
# forward slashes in them even on Windows.
PATH_CAPABILITIES = frozenset(
    {
        "chromedriverExecutable",
        "keystorePath",
        "app",
        "appPackage",
        "appium:chromedriverExecutable",
        "appium:keystorePath",
        "appium:app",
        "appium:appPackage",
    }
)

_QUOTE = '\\"'


def _render_plain(value: Any) -> str:
    """Unquoted text form: true/false, [a, b] for sequences, {k=v} for mappings."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Mapping):
        return "{" + ", ".join(f"{k}={_render_plain(v)}" for k, v in value.items()) + "}"
    if isinstance(value, (list, tuple, set, frozenset)):
        return "[" + ", ".join(_render_plain(v) for v in value) + "]"
    return str(value)


def to_json_arg(capabilities: Mapping[str, Any]) -> str:
    """Serialize as compact JSON, keeping null values and non-ASCII text as-is."""
    return json.dumps(dict(capabilities), ensure_ascii=False, separators=(",", ":"), default=str)


def to_quoted_arg(capabilities: Mapping[str, Any] | None) -> str:
    """
    Serialize with escaped quotes around every key and string value.

    Capabilities set to None are left out. Non-string values are written in
    their plain text form without quotes.
    """
    if capabilities is None:
        return "{}"

    parts: list[str] = []
    for name, value in capabilities.items():
        if value is None:
            continue

        if isinstance(value, str):
            if name in PATH_CAPABILITIES:
                value = value.replace("\\", "/")
            rendered = f"{_QUOTE}{value}{_QUOTE}"
        else:
            rendered = _render_plain(value)

        parts.append(f"{_QUOTE}{name}{_QUOTE}: {rendered}")

    return "{" + ", ".join(parts) + "}"


def capabilities_to_cmdline_arg(
    capabilities: Mapping[str, Any],
    auto_quote_on_windows: bool,
    on_windows: bool,
) -> str:
    """Pick the serialization form from the quoting flag and the host OS."""
    if auto_quote_on_windows and on_windows:
        return to_quoted_arg(capabilities)
    return to_json_arg(capabilities)
