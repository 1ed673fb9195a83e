"""Command group: root zone snapshot processing."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from namectl.commands._base import NameGroup

if TYPE_CHECKING:
    from namectl.commands._context import AppContext

_ZONE_EXAMPLES = """\
  namectl zone extract
  namectl zone extract data/root.zone"""


@click.group(cls=NameGroup, examples=_ZONE_EXAMPLES)
def zone() -> None:
    """Work with root zone snapshots."""


@zone.command(
    examples="""\
  namectl zone extract
  namectl zone extract /tmp/root.zone
  namectl --json zone extract"""
)
@click.argument(
    "zone_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.pass_obj
def extract(app: AppContext, zone_file: Path | None) -> None:
    """Write root.json and the rtld.json corpus list from ZONE_FILE."""
    from namectl.services.zone import ZoneService

    app.emit(ZoneService(app.workspace).extract(zone_file))
