"""
Well-known Appium server command-line flags.
"""

from enum import Enum


class GeneralServerFlag(str, Enum):
    """Server flags understood by every Appium 2.x server.

    Members satisfy the ServerArgument protocol, so they can be passed
    straight to AppiumServiceBuilder.with_argument().
    """

    SHELL = "--shell"
    ALLOW_CORS = "--allow-cors"
    RELAXED_SECURITY = "--relaxed-security"
    ALLOW_INSECURE = "--allow-insecure"
    DENY_INSECURE = "--deny-insecure"
    CALLBACK_ADDRESS = "--callback-address"
    CALLBACK_PORT = "--callback-port"
    SESSION_OVERRIDE = "--session-override"
    LOG_LEVEL = "--log-level"
    LOG_TIMESTAMP = "--log-timestamp"
    LOCAL_TIMEZONE = "--local-timezone"
    LOG_NO_COLORS = "--log-no-colors"
    LOG_FILTERS = "--log-filters"
    WEB_HOOK = "--webhook"
    CONFIGURATION_FILE = "--config"
    KEEP_ALIVE_TIMEOUT = "--keep-alive-timeout"
    BASEPATH = "--base-path"
    STRICT_CAPS = "--strict-caps"
    USE_DRIVERS = "--use-drivers"
    USE_PLUGINS = "--use-plugins"

    @property
    def argument(self) -> str:
        return self.value


# Short alias some configurations use for --base-path
BASEPATH_ALIAS = "-pa"
