"""Rich-click command line interface.

Purpose
-------
Offer a small CLI for smoke tests and for showing the override rules on a
real console.

Contents
--------
* :func:`cli` - command group with ``info``, ``hello``, ``fail`` and ``logdemo``.
* :func:`main` - entry point running the group through ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import os
from typing import Sequence

import lib_cli_exit_tools
import rich_click as click
from rich.console import Console

from . import __init__conf__
from . import config as log_config
from .domain.levels import InvalidSeverity, Severity
from .lib_log_local import hello_world, i_should_fail, logdemo, summary_info

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    default=None,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load environment variables from the nearest .env (also enabled by {log_config.DOTENV_ENV_VAR}=1).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool | None, use_dotenv: bool | None) -> None:
    """Root command storing global flags."""

    if traceback is not None:
        lib_cli_exit_tools.config.traceback = traceback
        lib_cli_exit_tools.config.traceback_force_color = traceback
    env_toggle = os.getenv(log_config.DOTENV_ENV_VAR)
    if log_config.should_use_dotenv(explicit=use_dotenv, env_value=env_toggle):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the package metadata banner."""

    click.echo(summary_info(), nl=False)


@cli.command("hello", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_hello() -> None:
    """Print the Hello World greeting."""

    hello_world()


@cli.command("fail", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_fail() -> None:
    """Raise the intentional failure used to test error handling."""

    i_should_fail()


def _parse_level(_ctx: click.Context, _param: click.Parameter, value: str) -> Severity:
    try:
        return Severity.coerce(value)
    except InvalidSeverity as exc:
        raise click.BadParameter(str(exc)) from exc


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--parent-level",
    default="warn",
    show_default=True,
    callback=_parse_level,
    help="Level of the parent logger; the local logger always logs at DEBUG.",
)
@click.option("--no-color", is_flag=True, help="Disable console colours.")
def cli_logdemo(parent_level: Severity, no_color: bool) -> None:
    """Emit demo entries through a parent logger and a local logger."""

    console = Console(no_color=no_color, highlight=False)
    result = logdemo(parent_level=parent_level, console=console, no_color=no_color)
    click.echo(f"=== Parent level: {result.parent_level.label} ===")
    click.echo(f"emitted {len(result.entries)} entries")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences changed by ``--traceback`` are restored afterwards.
    """

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
