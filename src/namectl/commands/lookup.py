"""Command: look up a name in the compiled database."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from namectl.commands._base import NameCommand

if TYPE_CHECKING:
    from namectl.commands._context import AppContext


@click.command(
    cls=NameCommand,
    examples="""\
  namectl lookup google
  namectl lookup com
  namectl -q lookup github
  namectl --json lookup example --db build/names.db""",
)
@click.argument("name")
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Database file (default: <build>/names.db).",
)
@click.pass_obj
def lookup(app: AppContext, name: str, db_path: Path | None) -> None:
    """Show the database record reserved for NAME."""
    from namectl.services.lookup import LookupService

    app.emit(LookupService(app.workspace).lookup(name, db_path=db_path))
