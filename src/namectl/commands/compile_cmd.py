"""Command: compile the corpus into reports and the name database."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from namectl.commands._base import NameCommand

if TYPE_CHECKING:
    from namectl.commands._context import AppContext

_COMPILE_EXAMPLES = """\
  namectl compile
  namectl compile --dry-run
  namectl -v compile
  namectl --json compile"""


@click.command("compile", cls=NameCommand, examples=_COMPILE_EXAMPLES)
@click.option("--dry-run", is_flag=True, help="Run every stage and check without writing.")
@click.pass_obj
def compile_cmd(app: AppContext, dry_run: bool) -> None:
    """Compile the reserved-name table from the corpus."""
    from namectl.services.compile import CompileService

    app.emit(CompileService(app.workspace).compile(dry_run=dry_run))
