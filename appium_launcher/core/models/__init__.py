"""
Pydantic models and value types used by appium-launcher.
"""

from .base import LauncherBaseModel
from .capabilities import Capabilities
from .config import (
    BROADCAST_IP4_ADDRESS,
    BROADCAST_IP6_ADDRESS,
    DEFAULT_APPIUM_PORT,
    LoggingConfig,
    ServerConfig,
)

__all__ = [
    "BROADCAST_IP4_ADDRESS",
    "BROADCAST_IP6_ADDRESS",
    "DEFAULT_APPIUM_PORT",
    "Capabilities",
    "LauncherBaseModel",
    "LoggingConfig",
    "ServerConfig",
]
