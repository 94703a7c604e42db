"""
Appium server service: builder, command-line construction and process handle.
"""

from ...core.models.config import BROADCAST_IP4_ADDRESS, BROADCAST_IP6_ADDRESS, DEFAULT_APPIUM_PORT
from .appium_builder import AppiumServiceBuilder, sanitize_base_path
from .capabilities_arg import PATH_CAPABILITIES, capabilities_to_cmdline_arg, to_json_arg, to_quoted_arg
from .driver_service import DriverServiceBuilder, find_free_port
from .flags import BASEPATH_ALIAS, GeneralServerFlag
from .local_service import AppiumLocalService

__all__ = [
    "BASEPATH_ALIAS",
    "BROADCAST_IP4_ADDRESS",
    "BROADCAST_IP6_ADDRESS",
    "DEFAULT_APPIUM_PORT",
    "PATH_CAPABILITIES",
    "AppiumLocalService",
    "AppiumServiceBuilder",
    "DriverServiceBuilder",
    "GeneralServerFlag",
    "capabilities_to_cmdline_arg",
    "find_free_port",
    "sanitize_base_path",
    "to_json_arg",
    "to_quoted_arg",
]
