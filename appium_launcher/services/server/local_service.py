"""
Handle for an Appium server running as a local subprocess.
"""

from __future__ import annotations

import subprocess
import time
import urllib.error
import urllib.request
from pathlib import Path
from typing import IO

from ...core.exceptions import ServerNotRunningError, ServerStartupError
from ...core.interfaces.logger import ILogger
from ...core.models.config import BROADCAST_IP4_ADDRESS, BROADCAST_IP6_ADDRESS
from ..logging import ServerOutputPipe

POLL_INTERVAL = 0.5
PING_TIMEOUT = 1.0
STOP_GRACE_PERIOD = 5.0


def _connect_host(ip_address: str) -> str:
    """Map a bind address to a host clients can connect to."""
    if ip_address == BROADCAST_IP4_ADDRESS:
        return "127.0.0.1"
    if ip_address == BROADCAST_IP6_ADDRESS:
        return "[::1]"
    if ":" in ip_address and not ip_address.startswith("["):
        return f"[{ip_address}]"
    return ip_address


class AppiumLocalService:
    """
    A launched (or launchable) Appium server process.

    Usage:
        with AppiumServiceBuilder().using_any_free_port().build() as service:
            driver = webdriver.Remote(service.url, options=options)
    """

    def __init__(
        self,
        ip_address: str,
        executable: Path,
        port: int,
        startup_timeout: float,
        arguments: list[str],
        environment: dict[str, str],
        output: IO | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize service handle.

        Args:
            ip_address: Address the server binds to
            executable: Node.js executable
            port: Port the server listens on
            startup_timeout: Seconds to wait for the status endpoint
            arguments: Arguments passed to node (main script first)
            environment: Environment for the child process
            output: Stream receiving the server's stdout/stderr (logged at
                debug level through the logger if None)
            logger: Logger for internal diagnostics
        """
        self._ip_address = ip_address
        self._executable = executable
        self._port = port
        self._startup_timeout = startup_timeout
        self._arguments = list(arguments)
        self._environment = dict(environment)
        self._output = output
        self._base_path: str | None = None
        self._process: subprocess.Popen | None = None
        self._output_pipe: ServerOutputPipe | None = None
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    def with_base_path(self, base_path: str | None) -> AppiumLocalService:
        """Set the URL path prefix the server exposes its API under."""
        self._base_path = base_path
        return self

    @property
    def base_path(self) -> str | None:
        return self._base_path

    @property
    def port(self) -> int:
        return self._port

    @property
    def command(self) -> list[str]:
        """Full command line used to launch the server."""
        return [str(self._executable), *self._arguments]

    @property
    def url(self) -> str:
        """Base URL of the server, always ending with a slash."""
        path = "/"
        if self._base_path:
            path = "/" + self._base_path.strip("/") + "/"
            if path == "//":
                path = "/"
        return f"http://{_connect_host(self._ip_address)}:{self._port}{path}"

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process is not None else None

    def _ping(self) -> bool:
        """Check if the server's status endpoint answers."""
        try:
            with urllib.request.urlopen(self.url + "status", timeout=PING_TIMEOUT) as resp:
                return resp.status == 200
        except (urllib.error.URLError, OSError):
            return False

    def is_running(self) -> bool:
        """Check whether the process is alive and its status endpoint answers."""
        if self._process is None or self._process.poll() is not None:
            return False
        return self._ping()

    def start(self) -> None:
        """
        Launch the server and block until it is ready.

        Raises:
            ServerStartupError: If the process cannot be spawned, exits early,
                or does not answer before the startup timeout
        """
        if self._process is not None and self._process.poll() is None:
            self.logger.debug("Server already started: pid=%d", self._process.pid)
            return

        self.logger.info("Starting Appium server: %s", self.command)
        stream = self._output
        if stream is None:
            stream = self._output_pipe = ServerOutputPipe(self.logger)
        try:
            self._process = subprocess.Popen(
                self.command,
                env=self._environment,
                stdout=stream,
                stderr=subprocess.STDOUT,
            )
        except OSError as e:
            self._release_output()
            raise ServerStartupError(
                f"Cannot launch the Appium server with '{self._executable}'",
                url=self.url,
                cause=e,
            ) from e

        if self._output_pipe is not None:
            self._output_pipe.close()
        self.logger.debug("Process started: pid=%d", self._process.pid)
        self._wait_until_ready()

    def _wait_until_ready(self) -> None:
        assert self._process is not None
        deadline = time.monotonic() + self._startup_timeout

        while time.monotonic() < deadline:
            exit_code = self._process.poll()
            if exit_code is not None:
                self._process = None
                self._release_output()
                raise ServerStartupError(
                    "The Appium server process exited before it became ready",
                    url=self.url,
                    exit_code=exit_code,
                )
            if self._ping():
                self.logger.info("Appium server is ready at %s", self.url)
                return
            time.sleep(POLL_INTERVAL)

        self.logger.warning("Appium server did not answer within %.1fs, stopping it", self._startup_timeout)
        self.stop()
        raise ServerStartupError(
            f"The Appium server did not become ready within {self._startup_timeout} seconds",
            url=self.url,
        )

    def stop(self) -> None:
        """Terminate the server, killing it if it ignores the request."""
        if self._process is None:
            return

        process = self._process
        self._process = None
        if process.poll() is not None:
            self._release_output()
            return

        self.logger.debug("Stopping Appium server: pid=%d", process.pid)
        process.terminate()
        try:
            process.wait(timeout=STOP_GRACE_PERIOD)
        except subprocess.TimeoutExpired:
            self.logger.warning("Appium server ignored terminate, killing pid=%d", process.pid)
            process.kill()
            process.wait()
        self._release_output()

    def _release_output(self) -> None:
        if self._output_pipe is None:
            return
        pipe = self._output_pipe
        self._output_pipe = None
        pipe.close()
        pipe.join(timeout=STOP_GRACE_PERIOD)

    def wait(self) -> int:
        """
        Block until the server process exits.

        Raises:
            ServerNotRunningError: If the server was never started
        """
        if self._process is None:
            raise ServerNotRunningError("The Appium server has not been started")
        return self._process.wait()

    def __enter__(self) -> AppiumLocalService:
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
