"""Root CLI group for namectl with global flags and command registration."""

from __future__ import annotations

import click

from namectl import __version__
from namectl.commands import register_commands
from namectl.commands._base import NameGroup
from namectl.commands._context import AppContext
from namectl.config.settings import NamectlSettings


@click.group(
    cls=NameGroup,
    invoke_without_command=True,
    examples="""\
  namectl zone extract data/root.zone
  namectl corpus ranked data/top-1m.csv
  namectl compile
  namectl lookup google""",
)
@click.version_option(version=__version__, prog_name="namectl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """namectl: reserved-name table compiler."""
    ctx.ensure_object(dict)
    settings = NamectlSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
