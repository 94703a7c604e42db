"""
Capability set passed to the launched server as default session capabilities.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

PLATFORM_NAME = "platformName"
BROWSER_NAME = "browserName"


class Capabilities(Mapping[str, Any]):
    """
    Ordered, read-only mapping of capability names to arbitrary values.

    Capability sets are combined with merge(), which returns a new set where
    the keys of the merged-in set override those of this one.

    Usage:
        caps = Capabilities(platformName="Android")
        caps = caps.merge({"appium:app": "/tmp/app.apk"})
    """

    def __init__(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> None:
        self._values: dict[str, Any] = {}
        if values:
            self._values.update(values)
        self._values.update(kwargs)

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Capabilities({self._values!r})"

    def get_capability(self, name: str) -> Any:
        """Return the capability value, or None when it is not set."""
        return self._values.get(name)

    @property
    def browser_name(self) -> str:
        return str(self._values.get(BROWSER_NAME) or "")

    def merge(self, other: Mapping[str, Any] | None) -> Capabilities:
        """Return a new capability set with ``other`` applied over this one."""
        merged = dict(self._values)
        if other:
            merged.update(other)
        return Capabilities(merged)

    def as_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the capabilities as a plain dict."""
        return dict(self._values)
