"""
Protocol definitions for launched services and server flags.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class IDriverService(Protocol):
    """Protocol for a locally launched server process."""

    @property
    def url(self) -> str:
        """Base URL the server answers on."""
        ...

    def start(self) -> None:
        """Start the process and wait until it is ready."""
        ...

    def stop(self) -> None:
        """Stop the process if it is running."""
        ...

    def is_running(self) -> bool:
        """Check whether the process is alive and answering."""
        ...


@runtime_checkable
class ServerArgument(Protocol):
    """Anything naming a server command-line flag."""

    @property
    def argument(self) -> str:
        """The flag as written on the command line, e.g. '--relaxed-security'."""
        ...
