"""
Application bootstrap for appium-launcher.

Initializes the DI container with the configured services.
Call once at application startup.
"""

from .container import ServiceContainer, get_container
from .interfaces.logger import ILogger
from .settings import LauncherSettings, load_settings

_initialized = False


def bootstrap(settings: LauncherSettings | None = None) -> ServiceContainer:
    """
    Bootstrap the launcher.

    Registers the settings and a logger configured from them.

    Args:
        settings: Preloaded settings (loaded from disk/env when omitted)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    if settings is None:
        settings = load_settings()

    _register_core_services(container, settings)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: LauncherSettings) -> None:
    """Register core application services."""
    from ..services.logging import LauncherLogger

    container.register_singleton(LauncherSettings, implementation=settings)

    def create_logger() -> ILogger:
        return LauncherLogger(settings.logging)

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
