"""
appium-launcher: configure and launch a local Appium server.

Usage:
    from appium_launcher import AppiumServiceBuilder

    with AppiumServiceBuilder().using_any_free_port().build() as service:
        print(service.url)
"""

from .core.exceptions import InvalidArgumentError, InvalidServerInstanceError, LauncherException
from .core.models.capabilities import Capabilities
from .services.server import (
    BROADCAST_IP4_ADDRESS,
    BROADCAST_IP6_ADDRESS,
    DEFAULT_APPIUM_PORT,
    AppiumLocalService,
    AppiumServiceBuilder,
    GeneralServerFlag,
)

__all__ = [
    "BROADCAST_IP4_ADDRESS",
    "BROADCAST_IP6_ADDRESS",
    "DEFAULT_APPIUM_PORT",
    "AppiumLocalService",
    "AppiumServiceBuilder",
    "Capabilities",
    "GeneralServerFlag",
    "InvalidArgumentError",
    "InvalidServerInstanceError",
    "LauncherException",
]
