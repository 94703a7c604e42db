"""
Generic builder for locally launched driver services.

Holds the settings every launched service needs (executable, port, startup
timeout, environment, log file) and drives the build sequence. Concrete
builders fill in three hooks:

- resolve_executable(): locate the program to launch
- build_arguments(): produce its command-line arguments
- instantiate_service(): wrap everything in a service handle
"""

from __future__ import annotations

import socket
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Generic, TypeVar

from ...core.exceptions import InvalidArgumentError
from ...core.interfaces.logger import ILogger

S = TypeVar("S")
B = TypeVar("B", bound="DriverServiceBuilder")

DEFAULT_STARTUP_TIMEOUT = 20.0


def find_free_port() -> int:
    """Ask the OS for a currently unused TCP port."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class DriverServiceBuilder(ABC, Generic[S]):
    """
    Base class for service builders.

    Setters return the builder so calls can be chained:

        service = builder.using_port(4725).with_timeout(30).build()
    """

    def __init__(self, logger: ILogger | None = None) -> None:
        self._executable: Path | None = None
        self._port = 0
        self._startup_timeout = DEFAULT_STARTUP_TIMEOUT
        self._environment: dict[str, str] = {}
        self._log_file: Path | None = None
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def executable(self) -> Path | None:
        """The executable set explicitly or resolved by a previous build, if any."""
        return self._executable

    @property
    def port(self) -> int:
        return self._port

    @property
    def startup_timeout(self) -> float:
        return self._startup_timeout

    @property
    def environment(self) -> dict[str, str]:
        return dict(self._environment)

    @property
    def log_file(self) -> Path | None:
        return self._log_file

    def using_driver_executable(self: B, executable: Path | str) -> B:
        """Set the program to launch."""
        self._executable = Path(executable)
        return self

    def using_port(self: B, port: int) -> B:
        """
        Set the port the service listens on.

        Args:
            port: Port number; 0 picks any free port at build time

        Raises:
            InvalidArgumentError: If the port is negative
        """
        if port < 0:
            raise InvalidArgumentError("Port number must be non-negative", argument="port", value=str(port))
        self._port = port
        return self

    def using_any_free_port(self: B) -> B:
        """Let the service start on any free port."""
        self._port = 0
        return self

    def with_timeout(self: B, seconds: float) -> B:
        """Set how long to wait for the service to become ready."""
        if seconds <= 0:
            raise InvalidArgumentError(
                "Startup timeout must be positive", argument="timeout", value=str(seconds)
            )
        self._startup_timeout = seconds
        return self

    def with_environment(self: B, environment: Mapping[str, str]) -> B:
        """Replace the environment the service is launched with."""
        self._environment = dict(environment)
        return self

    def with_log_file(self: B, log_file: Path | str | None) -> B:
        """Configure the service to write its log to the given file."""
        self._log_file = Path(log_file) if log_file is not None else None
        return self

    def build(self) -> S:
        """
        Resolve the executable, build the arguments and create the service.

        Nothing is launched here; call start() on the returned handle.
        """
        if self._port == 0:
            self._port = find_free_port()
            self.logger.debug("Picked free port %d", self._port)

        self._executable = self.resolve_executable()
        arguments = self.build_arguments()
        self.logger.debug("Service command: %s %s", self._executable, arguments)

        return self.instantiate_service(
            self._executable,
            self._port,
            self._startup_timeout,
            arguments,
            dict(self._environment),
        )

    @abstractmethod
    def resolve_executable(self) -> Path:
        """Return a validated path to the program to launch."""
        pass

    @abstractmethod
    def build_arguments(self) -> list[str]:
        """Return the command-line arguments for the program."""
        pass

    @abstractmethod
    def instantiate_service(
        self,
        executable: Path,
        port: int,
        startup_timeout: float,
        arguments: list[str],
        environment: dict[str, str],
    ) -> S:
        """Wrap the resolved launch parameters in a service handle."""
        pass
