"""CorpusService: convert raw sources into the corpus directory layout."""

from __future__ import annotations

import json
from pathlib import Path

from namectl.domain.errors import CompilationError
from namectl.infrastructure.corpus import read_ranked_csv, read_words, render_ranked
from namectl.services.base import BaseService
from namectl.services.result import ServiceError, ServiceResult
from namectl.services.telemetry import traced

WORDS_JSON = "words.json"


def _dump(data: object) -> str:
    return json.dumps(data, indent=2) + "\n"


class CorpusService(BaseService):
    """Import the stop-word list and the popularity ranking."""

    @traced
    def import_words(self, source: Path) -> ServiceResult:
        """Keep dictionary words that satisfy the name charset rule."""
        if not source.is_file():
            return self._missing("import_words", source)

        words = read_words(source)
        target = self._workspace.corpus_path(WORDS_JSON)
        with self._workspace.transaction() as txn:
            txn.write_text(target, _dump(words))

        return ServiceResult(
            ok=True,
            op="import_words",
            data={"source": str(source), "output": str(target), "count": len(words)},
        )

    @traced
    def import_ranked(self, source: Path) -> ServiceResult:
        """Validate a ``rank,domain`` CSV and write the ranked corpus file."""
        if not source.is_file():
            return self._missing("import_ranked", source)

        settings = self._workspace.settings
        try:
            ranked = read_ranked_csv(source, expected_count=settings.corpus.ranked_count)
        except CompilationError as exc:
            return self._failure("import_ranked", exc)

        rendered = render_ranked(ranked)
        target = self._workspace.corpus_path(settings.corpus.ranked_file)
        with self._workspace.transaction() as txn:
            txn.write_text(target, _dump(rendered))

        warnings: list[str] = []
        if rendered and not isinstance(rendered[0], str):
            warnings.append("Ranking has gaps; wrote explicit [rank, domain] pairs")

        return ServiceResult(
            ok=True,
            op="import_ranked",
            data={"source": str(source), "output": str(target), "count": len(ranked)},
            warnings=warnings,
        )

    @staticmethod
    def _missing(op: str, source: Path) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="SOURCE_NOT_FOUND",
                message=f"Source file not found: {source}",
                detail={"path": str(source)},
            ),
        )
