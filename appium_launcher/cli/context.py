"""
Click context extension for the appium-launcher CLI.

Provides LauncherContext, created once by the command group and passed to
commands via ctx.obj.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.bootstrap import bootstrap
from ..core.interfaces.logger import ILogger
from ..core.settings import LauncherSettings, load_settings


@dataclass
class LauncherContext:
    """Extended context passed through the Click command chain.

    Attributes:
        settings: Loaded launcher settings
        logger: Logger configured from the settings
        cwd: Current working directory
    """

    settings: LauncherSettings
    logger: ILogger
    cwd: Path

    @classmethod
    def create(
        cls,
        config_path: Path | None = None,
        verbose: bool = False,
        cwd: Path | None = None,
    ) -> LauncherContext:
        """Load settings, bootstrap services and build the context.

        Args:
            config_path: Explicit config file (searched from cwd otherwise)
            verbose: Force debug logging to stderr
            cwd: Working directory override (defaults to Path.cwd())
        """
        if cwd is None:
            cwd = Path.cwd()

        settings = load_settings(config_path=config_path, start_dir=str(cwd))
        if verbose:
            settings.logging.level = "debug"
            settings.logging.console = True

        container = bootstrap(settings)
        logger = container.resolve(ILogger)  # type: ignore[type-abstract]
        return cls(settings=settings, logger=logger, cwd=cwd)
