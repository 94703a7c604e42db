"""
Custom exception hierarchy for appium-launcher.

Every failure raised while configuring or launching the server derives from
LauncherException, so callers (and the CLI) can handle them uniformly.
"""

from __future__ import annotations


class LauncherException(Exception):
    """
    Base exception for all appium-launcher errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (file paths, commands, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = True

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class LauncherConfigError(LauncherException):
    """Base class for configuration-related errors."""

    pass


class InvalidServerInstanceError(LauncherConfigError):
    """
    The server cannot be launched from the current local environment.

    Raised when the Node.js executable or the main Appium script cannot be
    located, or when npm fails to report its global modules root. These
    describe a broken installation, so retrying does not help.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


class InvalidArgumentError(LauncherConfigError, ValueError):
    """
    Invalid builder argument.

    Inherits from ValueError so callers validating plain input can
    catch it without importing the hierarchy.
    """

    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        argument: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if argument:
            ctx["argument"] = argument
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Service Errors
# =============================================================================


class LauncherServiceError(LauncherException):
    """Base class for errors managing the launched server process."""

    pass


class ServerStartupError(LauncherServiceError):
    """
    The server process failed to start or never became reachable.

    Raised when the process exits early or its status endpoint does not
    answer within the startup timeout.
    """

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        exit_code: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if url:
            ctx["url"] = url
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        super().__init__(message, context=ctx, cause=cause)


class ServerNotRunningError(LauncherServiceError):
    """An operation required a running server but none was started."""

    pass
