"""
Builder for a locally launched Appium server.

Collects the server settings (port, address, log file, server flags and
default capabilities) and turns them into a node command line:

    node <main.js> --port 4723 --address 0.0.0.0 [--log <file>]
         [<flag> [<value>] ...] [--default-capabilities <caps>]
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import IO, Any

from ...core.exceptions import InvalidArgumentError
from ...core.interfaces.logger import ILogger
from ...core.interfaces.service import ServerArgument
from ...core.models.capabilities import PLATFORM_NAME, Capabilities
from ...core.models.config import BROADCAST_IP4_ADDRESS, ServerConfig
from ..discovery.executables import ExecutableLocator, is_windows
from .capabilities_arg import capabilities_to_cmdline_arg
from .driver_service import DriverServiceBuilder
from .flags import BASEPATH_ALIAS, GeneralServerFlag
from .local_service import AppiumLocalService

_PORT_FLAGS = ("--port", "-p")
_ADDRESS_FLAGS = ("--address", "-a")
_LOG_FLAGS = ("--log", "-g")

_SCORED_BROWSERS = ("chrome", "android", "safari")


def _argument_name(argument: ServerArgument | str) -> str:
    if isinstance(argument, str) and not isinstance(argument, GeneralServerFlag):
        return argument
    return argument.argument


def sanitize_base_path(base_path: str | None) -> str:
    """Trim the base path and make sure it ends with exactly one slash."""
    value = (base_path or "").strip()
    if not value:
        raise InvalidArgumentError(
            "Given base path is not valid - blank or empty values are not allowed for base path",
            argument=GeneralServerFlag.BASEPATH.argument,
            value=base_path,
        )
    return value if value.endswith("/") else value + "/"


def _registered_server_config() -> ServerConfig:
    """Server defaults from bootstrapped settings, or the built-in defaults."""
    from ...core.container import get_container
    from ...core.settings import LauncherSettings

    settings = get_container().try_resolve(LauncherSettings)
    return settings.server if settings is not None else ServerConfig()


class AppiumServiceBuilder(DriverServiceBuilder[AppiumLocalService]):
    """
    Configures and creates an AppiumLocalService.

    Usage:
        service = (
            AppiumServiceBuilder()
            .using_any_free_port()
            .with_argument(GeneralServerFlag.RELAXED_SECURITY)
            .with_argument("--log-level", "debug")
            .with_capabilities(Capabilities(platformName="Android"))
            .build()
        )
        service.start()
    """

    def __init__(
        self,
        server_config: ServerConfig | None = None,
        locator: ExecutableLocator | None = None,
        output: IO | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize builder.

        Args:
            server_config: Server defaults (bootstrapped settings if omitted)
            locator: Resolver for node and main.js
            output: Stream receiving the launched server's console output
            logger: Logger for internal diagnostics
        """
        super().__init__(logger=logger)
        config = server_config or _registered_server_config()

        self._server_arguments: dict[str, str] = {}
        self._appium_js: Path | None = None
        self._ip_address: str | None = config.address
        self._capabilities: Capabilities | None = None
        self._auto_quote_capabilities_on_windows = False
        self._locator = locator or ExecutableLocator(npm_timeout=config.npm_timeout, logger=logger)
        self._output = output

        self.using_port(config.port)
        self.with_timeout(config.startup_timeout)
        self.with_environment(os.environ)
        if config.base_path:
            self.with_argument(GeneralServerFlag.BASEPATH, config.base_path)

    @property
    def ip_address(self) -> str | None:
        return self._ip_address

    @property
    def main_script(self) -> Path | None:
        """The main script set explicitly or resolved by a previous build, if any."""
        return self._appium_js

    @property
    def server_arguments(self) -> dict[str, str]:
        return dict(self._server_arguments)

    @property
    def capabilities(self) -> Capabilities | None:
        return self._capabilities

    def score(self, capabilities: Mapping[str, Any]) -> int:
        """
        Rate how well this service suits a session with the given capabilities.

        A score of 0 means the service has nothing specific to offer.
        """
        caps = capabilities if isinstance(capabilities, Capabilities) else Capabilities(capabilities)
        score = 0

        if caps.get_capability(PLATFORM_NAME) is not None:
            score += 1

        if caps.browser_name.lower() in _SCORED_BROWSERS:
            score += 1

        return score

    def with_argument(self, argument: ServerArgument | str, value: str | None = None) -> AppiumServiceBuilder:
        """
        Add a server argument.

        Without a value the flag is treated as a boolean switch: only the flag
        name is passed to the server. Port, address and log file flags are
        routed to their dedicated setters.

        Args:
            argument: Flag name (e.g. "--log-level") or a GeneralServerFlag
            value: Flag value, or None for presence-only flags

        Raises:
            InvalidArgumentError: If a port or base path value is invalid
        """
        name = _argument_name(argument)

        if value is None:
            self._server_arguments[name] = ""
            return self

        if name in _PORT_FLAGS:
            try:
                port = int(value)
            except ValueError as e:
                raise InvalidArgumentError(
                    "Port number must be an integer", argument=name, value=value, cause=e
                ) from e
            self.using_port(port)
        elif name in _ADDRESS_FLAGS:
            self.with_ip_address(value)
        elif name in _LOG_FLAGS:
            self.with_log_file(Path(value))
        elif name == GeneralServerFlag.BASEPATH.argument:
            self._server_arguments[name] = sanitize_base_path(value)
        else:
            self._server_arguments[name] = value
        return self

    def with_capabilities(
        self,
        capabilities: Mapping[str, Any],
        auto_quote_capabilities_on_windows: bool | None = None,
    ) -> AppiumServiceBuilder:
        """
        Add default session capabilities, merged over any added before.

        Args:
            capabilities: Capabilities to add
            auto_quote_capabilities_on_windows: Escape-quote the capabilities
                argument when running on Windows (left unchanged if None)
        """
        if auto_quote_capabilities_on_windows is not None:
            self._auto_quote_capabilities_on_windows = auto_quote_capabilities_on_windows

        base = self._capabilities if self._capabilities is not None else Capabilities()
        self._capabilities = base.merge(capabilities)
        return self

    def with_appium_js(self, appium_js: Path | str) -> AppiumServiceBuilder:
        """Set the main Appium script (main.js)."""
        self._appium_js = Path(appium_js)
        return self

    def with_ip_address(self, ip_address: str | None) -> AppiumServiceBuilder:
        self._ip_address = ip_address
        return self

    def resolve_executable(self) -> Path:
        return self._locator.resolve_node(self.executable)

    def _capabilities_to_cmdline_arg(self, capabilities: Capabilities) -> str:
        return capabilities_to_cmdline_arg(
            capabilities,
            auto_quote_on_windows=self._auto_quote_capabilities_on_windows,
            on_windows=is_windows(),
        )

    def build_arguments(self) -> list[str]:
        """
        Build the node arguments, resolving the main script first.

        Raises:
            InvalidServerInstanceError: If the main script cannot be found
        """
        self._appium_js = self._locator.resolve_main_script(self._appium_js)

        args = [str(self._appium_js.absolute()), "--port", str(self.port)]

        if not self._ip_address:
            self._ip_address = BROADCAST_IP4_ADDRESS
        args.extend(["--address", self._ip_address])

        if self.log_file is not None:
            args.extend(["--log", str(self.log_file.absolute())])

        for argument, value in self._server_arguments.items():
            if not argument or value is None:
                continue
            args.append(argument)
            if value:
                args.append(value)

        if self._capabilities is not None:
            args.extend(["--default-capabilities", self._capabilities_to_cmdline_arg(self._capabilities)])

        return args

    def instantiate_service(
        self,
        executable: Path,
        port: int,
        startup_timeout: float,
        arguments: list[str],
        environment: dict[str, str],
    ) -> AppiumLocalService:
        base_path = self._server_arguments.get(
            GeneralServerFlag.BASEPATH.argument,
            self._server_arguments.get(BASEPATH_ALIAS),
        )
        service = AppiumLocalService(
            self._ip_address or BROADCAST_IP4_ADDRESS,
            executable,
            port,
            startup_timeout,
            arguments,
            environment,
            output=self._output,
            logger=self._logger,
        )
        return service.with_base_path(base_path)
