"""
Core infrastructure for appium-launcher.

This module provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Protocol definitions for service interfaces
- Custom exception hierarchy
"""

from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container
from .exceptions import (
    InvalidArgumentError,
    InvalidServerInstanceError,
    LauncherConfigError,
    LauncherException,
    LauncherServiceError,
    ServerNotRunningError,
    ServerStartupError,
)

__all__ = [
    "InvalidArgumentError",
    "InvalidServerInstanceError",
    "LauncherConfigError",
    "LauncherException",
    "LauncherServiceError",
    "ServerNotRunningError",
    "ServerStartupError",
    "ServiceContainer",
    "bootstrap",
    "get_container",
    "is_initialized",
    "reset",
]
