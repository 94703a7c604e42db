"""
Shared server options for CLI commands.

server_options() attaches the builder options to a command and
builder_from_options() turns the parsed values into an AppiumServiceBuilder.
"""

from __future__ import annotations

import functools
import json
from collections.abc import Callable
from pathlib import Path
from typing import IO, Any, TypeVar

import click

from ..core.exceptions import LauncherException
from ..services.server import AppiumServiceBuilder
from .context import LauncherContext

F = TypeVar("F", bound=Callable[..., Any])


def server_options(f: F) -> F:
    """Decorator adding the options every server command accepts."""
    options = [
        click.option("--port", "-p", type=click.IntRange(min=0), default=None,
                     help="Port to listen on (0 = any free port)."),
        click.option("--address", "-a", default=None, help="IP address to bind to."),
        click.option("--log-file", "-g", type=click.Path(path_type=Path), default=None,
                     help="File the server writes its log to."),
        click.option("--node", type=click.Path(path_type=Path), default=None,
                     help="Node.js executable (default: NODE_BINARY_PATH or PATH)."),
        click.option("--main-script", type=click.Path(path_type=Path), default=None,
                     help="Appium main.js (default: APPIUM_BINARY_PATH or npm root -g)."),
        click.option("--arg", "server_args", multiple=True, metavar="FLAG[=VALUE]",
                     help="Extra server flag, repeatable. Omit the value for switches."),
        click.option("--caps", default=None, metavar="JSON",
                     help="Default capabilities as a JSON object."),
        click.option("--quote-caps-on-windows", is_flag=True,
                     help="Escape-quote the capabilities argument on Windows."),
        click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None,
                     help="Seconds to wait for the server to become ready."),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def parse_server_arg(raw: str) -> tuple[str, str | None]:
    """Split 'FLAG=VALUE' into its parts; a bare 'FLAG' has no value."""
    if "=" in raw:
        flag, value = raw.split("=", 1)
        return flag, value
    return raw, None


def parse_capabilities(raw: str) -> dict[str, Any]:
    """Parse the --caps JSON object."""
    try:
        caps = json.loads(raw)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--caps") from e
    if not isinstance(caps, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--caps")
    return caps


def builder_from_options(
    ctx: LauncherContext,
    *,
    port: int | None,
    address: str | None,
    log_file: Path | None,
    node: Path | None,
    main_script: Path | None,
    server_args: tuple[str, ...],
    caps: str | None,
    quote_caps_on_windows: bool,
    timeout: float | None,
    output: IO | None = None,
) -> AppiumServiceBuilder:
    """Create a builder from the settings and the parsed CLI options."""
    builder = AppiumServiceBuilder(
        server_config=ctx.settings.server,
        output=output,
        logger=ctx.logger,
    )
    if port is not None:
        builder.using_port(port)
    if address is not None:
        builder.with_ip_address(address)
    if log_file is not None:
        builder.with_log_file(log_file)
    if node is not None:
        builder.using_driver_executable(node)
    if main_script is not None:
        builder.with_appium_js(main_script)
    if timeout is not None:
        builder.with_timeout(timeout)
    for raw in server_args:
        flag, value = parse_server_arg(raw)
        builder.with_argument(flag, value)
    if caps is not None:
        builder.with_capabilities(parse_capabilities(caps), quote_caps_on_windows)
    return builder


def handle_launcher_errors(f: F) -> F:
    """Report LauncherException as a clean CLI error instead of a traceback."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except LauncherException as e:
            raise click.ClickException(str(e)) from e

    return wrapper  # type: ignore[return-value]
