"""
Discovery of the Node.js executable and the main Appium script.
"""

from .executables import (
    APPIUM_PATH,
    APPIUM_PATH_SUFFIX,
    NODE_PATH,
    ExecutableLocator,
    is_windows,
)
from .sources import (
    DEFAULT_LOOKUP_SOURCES,
    clear_property,
    environment_variable,
    lookup_path,
    process_property,
    set_property,
)

__all__ = [
    "APPIUM_PATH",
    "APPIUM_PATH_SUFFIX",
    "DEFAULT_LOOKUP_SOURCES",
    "NODE_PATH",
    "ExecutableLocator",
    "clear_property",
    "environment_variable",
    "is_windows",
    "lookup_path",
    "process_property",
    "set_property",
]
