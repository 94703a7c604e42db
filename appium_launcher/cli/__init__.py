"""
Click-based CLI for appium-launcher.

Usage:
    from appium_launcher.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

from pathlib import Path

import click

from .context import LauncherContext

try:
    from importlib.metadata import version

    __version__ = version("appium-launcher")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="appium-launcher")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Config file (default: nearest .appium-launcher/config.toml).",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool) -> None:
    """appium-launcher - configure and launch a local Appium server

    \b
    Commands:
        appium-launcher args     Print the server command line
        appium-launcher start    Launch the server and wait
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        ctx.obj = LauncherContext.create(config_path=config_path, verbose=verbose)


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "LauncherContext",
    "__version__",
    "cli",
    "register_commands",
]
