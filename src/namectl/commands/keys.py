"""Command group: DNSSEC trust anchors for root names."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from namectl.commands._base import NameGroup

if TYPE_CHECKING:
    from namectl.commands._context import AppContext


@click.group(
    cls=NameGroup,
    examples="""\
  namectl keys verify data/dnskeys.zone""",
)
def keys() -> None:
    """Check DNSKEY records against the root zone DS records."""


@keys.command(
    examples="""\
  namectl keys verify data/dnskeys.zone
  namectl keys verify data/dnskeys.zone --root build/root.json"""
)
@click.argument("dnskey_file", type=click.Path(dir_okay=False, path_type=Path))
@click.option(
    "--root",
    "root_json",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="root.json from 'zone extract' (default: <build>/root.json).",
)
@click.pass_obj
def verify(app: AppContext, dnskey_file: Path, root_json: Path | None) -> None:
    """Write keys.zone with the DNSKEY records that chain-verify."""
    from namectl.services.keys import KeysService

    app.emit(KeysService(app.workspace).verify(dnskey_file, root_json=root_json))
