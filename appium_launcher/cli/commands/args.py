"""
Native Click implementation of the args command.

Usage: appium-launcher args [options]
"""

from __future__ import annotations

import json
import shlex

import click

from ..context import LauncherContext
from ..options import builder_from_options, handle_launcher_errors, server_options


@click.command("args")
@server_options
@click.option("--json", "as_json", is_flag=True, help="Print the command as a JSON array.")
@click.pass_obj
@handle_launcher_errors
def args(ctx: LauncherContext, as_json: bool, **options) -> None:
    """Print the command line that would launch the server.

    Resolves node and the main script exactly like `start`, but does not
    launch anything.

    \b
    Examples:

        appium-launcher args --port 4725 --arg --relaxed-security

        appium-launcher args --caps '{"platformName": "Android"}' --json
    """
    service = builder_from_options(ctx, **options).build()
    if as_json:
        click.echo(json.dumps(service.command))
    else:
        click.echo(shlex.join(service.command))
