"""
Launcher diagnostics and Appium server console capture.

LauncherLogger applies a LoggingConfig section to the "appium_launcher"
logger hierarchy. ServerOutputPipe is handed to the server process as its
stdout so that every console line ends up in the same log.
"""

from __future__ import annotations

import logging
import os
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

from ..core.interfaces.logger import ILogger
from ..core.models.config import LoggingConfig

DEFAULT_LOG_FILE = Path.home() / ".appium-launcher" / "launcher.log"
MAX_FILE_SIZE = 5 * 1024 * 1024
BACKUP_COUNT = 2

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_CONSOLE_FORMAT = "%(levelname)s %(name)s: %(message)s"


class LauncherLogger(ILogger):
    """ILogger over stdlib logging, configured from the [logging] section."""

    def __init__(self, config: LoggingConfig | None = None, name: str = "appium_launcher") -> None:
        config = config or LoggingConfig()
        self.log_file: Path | None = None

        self._logger = logging.getLogger(name)
        self._logger.handlers.clear()
        self._logger.propagate = False
        self.set_level(config.level)

        if config.console:
            console = logging.StreamHandler(sys.stderr)
            console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
            self._logger.addHandler(console)

        if config.file:
            self.log_file = config.file_path or DEFAULT_LOG_FILE
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = RotatingFileHandler(self.log_file, maxBytes=MAX_FILE_SIZE, backupCount=BACKUP_COUNT)
            handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
            self._logger.addHandler(handler)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        self._logger.setLevel(getattr(logging, level.upper(), logging.WARNING))


class NullLogger(ILogger):
    """Discards everything; used when nothing was bootstrapped."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        pass

    def set_level(self, level: str) -> None:
        pass


class ServerOutputPipe:
    """
    OS pipe whose write end is passed to the server process.

    A daemon thread reads the other end line by line and logs each line at
    debug level, prefixed with the server name. Call close() once the
    process has been started (or failed to start) so the reader sees EOF
    when the server exits.
    """

    def __init__(self, logger: ILogger, prefix: str = "appium") -> None:
        self._logger = logger
        self._prefix = prefix
        read_fd, self._write_fd = os.pipe()
        self._write_closed = False
        self._reader = threading.Thread(target=self._pump, args=(read_fd,), name="appium-output", daemon=True)
        self._reader.start()

    def fileno(self) -> int:
        return self._write_fd

    def _pump(self, read_fd: int) -> None:
        with os.fdopen(read_fd, encoding="utf-8", errors="replace") as reader:
            for line in reader:
                line = line.rstrip()
                if line:
                    self._logger.debug("[%s] %s", self._prefix, line)

    def close(self) -> None:
        """Release the write end held by this process."""
        if not self._write_closed:
            self._write_closed = True
            os.close(self._write_fd)

    def join(self, timeout: float | None = None) -> None:
        """Wait for the reader to drain everything written so far."""
        self._reader.join(timeout)
