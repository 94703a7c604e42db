"""
Locator for the Node.js executable and the main Appium script.

Both paths are resolved with the same fallback chain:
1. An explicit path given by the caller
2. A path override (in-process property, then environment variable)
3. Auto-discovery (PATH search for node, `npm root -g` for the script)
"""

from __future__ import annotations

import platform
import shutil
import subprocess
from collections.abc import Iterable
from pathlib import Path

from ...core.exceptions import InvalidServerInstanceError
from ...core.interfaces.logger import ILogger
from .sources import DEFAULT_LOOKUP_SOURCES, LookupSource, lookup_path

# Path to main.js of the Appium server
APPIUM_PATH = "APPIUM_BINARY_PATH"
# Path to the node (node.exe on Windows) executable
NODE_PATH = "NODE_BINARY_PATH"

APPIUM_PATH_SUFFIX = Path("appium", "build", "lib", "main.js")

DEFAULT_NPM_TIMEOUT = 60.0


def is_windows() -> bool:
    """Check if the host OS is Windows."""
    return platform.system() == "Windows"


def _script_missing(path: Path) -> str:
    return f"The main Appium script does not exist at '{path.absolute()}'"


def _node_missing(path: Path) -> str:
    return f"The main NodeJS executable does not exist at '{path.absolute()}'"


class ExecutableLocator:
    """
    Resolves and validates the paths needed to launch the server.

    Usage:
        locator = ExecutableLocator()
        node = locator.resolve_node()
        main_js = locator.resolve_main_script()
    """

    def __init__(
        self,
        sources: Iterable[LookupSource] = DEFAULT_LOOKUP_SOURCES,
        npm_timeout: float = DEFAULT_NPM_TIMEOUT,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize locator.

        Args:
            sources: Ordered lookup sources for path overrides
            npm_timeout: Seconds to wait for `npm root -g`
            logger: Logger for internal diagnostics
        """
        self._sources = tuple(sources)
        self._npm_timeout = npm_timeout
        self._logger = logger

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @staticmethod
    def validate_path(path: Path | None, message: str) -> Path:
        """Return the path if it exists, else raise InvalidServerInstanceError."""
        if path is None or not path.exists():
            raise InvalidServerInstanceError(message, path=str(path) if path else None)
        return path

    def find_binary(self, name: str, message: str) -> Path:
        """Search PATH for an executable."""
        self.logger.debug("Searching PATH for %s", name)
        found = shutil.which(name)
        if found:
            self.logger.debug("Found %s at: %s", name, found)
        return self.validate_path(Path(found) if found else None, message)

    def find_npm(self) -> Path:
        return self.find_binary(
            "npm",
            "Node Package Manager (npm) is either not installed or its executable is not present in PATH",
        )

    def _npm_root_command(self, npm: Path) -> list[str]:
        if is_windows():
            # npm is a batch script on Windows, so it has to go through cmd.exe
            return ["cmd.exe", "/c", str(npm.absolute()), "root", "-g"]
        return [str(npm.absolute()), "root", "-g"]

    def find_main_script(self) -> Path:
        """
        Locate main.js under the global node_modules root reported by npm.

        Raises:
            InvalidServerInstanceError: If npm is missing, fails, times out,
                or the script is not installed
        """
        npm = self.find_npm()
        cmd = self._npm_root_command(npm)
        self.logger.debug("Querying global modules root: %s", cmd)
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=self._npm_timeout,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise InvalidServerInstanceError(
                "Cannot retrieve the path to the folder where NodeJS modules are located",
                context={"command": " ".join(cmd)},
                cause=e,
            ) from e

        modules_root = result.stdout.strip()
        self.logger.debug("Global modules root: %s", modules_root)
        main_js = Path(modules_root) / APPIUM_PATH_SUFFIX
        return self.validate_path(main_js, _script_missing(main_js))

    def resolve_node(self, explicit: Path | None = None) -> Path:
        """Resolve the Node.js executable."""
        if explicit is not None:
            return self.validate_path(explicit, _node_missing(explicit))

        override = lookup_path(NODE_PATH, self._sources)
        if override is not None:
            self.logger.debug("Using node from %s: %s", NODE_PATH, override)
            return self.validate_path(override, _node_missing(override))

        return self.find_binary("node", "NodeJS is either not installed or its executable not present in PATH")

    def resolve_main_script(self, explicit: Path | None = None) -> Path:
        """Resolve the main Appium script."""
        if explicit is not None:
            return self.validate_path(explicit, _script_missing(explicit))

        override = lookup_path(APPIUM_PATH, self._sources)
        if override is not None:
            self.logger.debug("Using main script from %s: %s", APPIUM_PATH, override)
            return self.validate_path(override, _script_missing(override))

        return self.find_main_script()
