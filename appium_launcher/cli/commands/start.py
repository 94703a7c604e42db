"""
Native Click implementation of the start command.

Usage: appium-launcher start [options]
"""

from __future__ import annotations

import sys

import click

from ..context import LauncherContext
from ..options import builder_from_options, handle_launcher_errors, server_options


@click.command("start")
@server_options
@click.option("--console", is_flag=True, help="Show the server's console output.")
@click.pass_obj
@handle_launcher_errors
def start(ctx: LauncherContext, console: bool, **options) -> None:
    """Launch the server and keep it running until interrupted.

    \b
    Examples:

        appium-launcher start

        appium-launcher start -p 0 --arg --base-path=/wd/hub --console
    """
    builder = builder_from_options(ctx, output=sys.stdout if console else None, **options)
    service = builder.build()

    service.start()
    click.echo(f"Appium server running at {service.url}")
    click.echo("Press Ctrl+C to stop.")

    try:
        exit_code = service.wait()
    except KeyboardInterrupt:
        click.echo("\nStopping Appium server...")
        service.stop()
        return

    if exit_code != 0:
        raise click.ClickException(f"Appium server exited with code {exit_code}")
