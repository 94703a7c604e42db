"""
Protocol definitions for appium-launcher's service interfaces.
"""

from .logger import ILogger
from .service import IDriverService, ServerArgument

__all__ = [
    "IDriverService",
    "ILogger",
    "ServerArgument",
]
