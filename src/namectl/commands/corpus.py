"""Command group: convert raw sources into corpus files."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from namectl.commands._base import NameGroup

if TYPE_CHECKING:
    from namectl.commands._context import AppContext

_CORPUS_EXAMPLES = """\
  namectl corpus words /usr/share/dict/words
  namectl corpus ranked data/top-1m.csv"""

_SOURCE = click.Path(exists=True, dir_okay=False, path_type=Path)


@click.group(cls=NameGroup, examples=_CORPUS_EXAMPLES)
def corpus() -> None:
    """Import raw sources into the corpus directory."""


@corpus.command(
    examples="""\
  namectl corpus words /usr/share/dict/words"""
)
@click.argument("source", type=_SOURCE)
@click.pass_obj
def words(app: AppContext, source: Path) -> None:
    """Write words.json from a one-word-per-line dictionary."""
    from namectl.services.corpus import CorpusService

    app.emit(CorpusService(app.workspace).import_words(source))


@corpus.command(
    examples="""\
  namectl corpus ranked data/top-1m.csv
  namectl -c ci.toml corpus ranked data/top-100.csv"""
)
@click.argument("source", type=_SOURCE)
@click.pass_obj
def ranked(app: AppContext, source: Path) -> None:
    """Write the ranked corpus file from a rank,domain CSV."""
    from namectl.services.corpus import CorpusService

    app.emit(CorpusService(app.workspace).import_ranked(source))
