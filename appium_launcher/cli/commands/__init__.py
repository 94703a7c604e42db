"""
Click command implementations for the appium-launcher CLI.

Commands are registered with the main CLI group via register_commands()
in appium_launcher.cli.
"""

from .args import args
from .start import start

COMMANDS = [
    args,
    start,
]

__all__ = [
    "COMMANDS",
    "args",
    "start",
]
