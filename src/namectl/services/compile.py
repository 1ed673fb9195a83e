"""CompileService: the reserved-name pipeline.

Load -> Filter -> Resolve -> Allocate -> Serialize -> verify -> write.

Every stage owns its collections and hands them to the next; nothing is
persisted between stages. Artifacts are rendered fully in memory and
written in a single workspace transaction, so a fatal error leaves the
previous build untouched. Re-running on unchanged input is
byte-identical.
"""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING, Any

from namectl.domain.allocation import Allocation, AllocationPolicy, allocate
from namectl.domain.compiler import compile_names
from namectl.domain.errors import CompilationError, InvariantViolation
from namectl.domain.policy import PolicyFilter
from namectl.infrastructure.corpus import load_corpus
from namectl.infrastructure.namedb import NameDatabase, encode, sort_by_hash
from namectl.infrastructure.reports import render_invalid, render_names, render_valid
from namectl.services.base import BaseService
from namectl.services.result import ServiceResult
from namectl.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from namectl.domain.resolver import NameTable

VALID_JSON = "valid.json"
VALID_BY_NAME_JSON = "valid-by-name.json"
INVALID_JSON = "invalid.json"
NAMES_JSON = "names.json"
NAMES_DB = "names.db"


def render_artifacts(table: NameTable, allocation: Allocation) -> dict[str, bytes]:
    """Render every output artifact, keyed by filename."""
    ordered = sort_by_hash(allocation.items)
    values = {"name_value": allocation.name_value, "root_value": allocation.root_value}
    return {
        VALID_JSON: render_valid(table.names, order="rank").encode("utf-8"),
        VALID_BY_NAME_JSON: render_valid(table.names, order="name").encode("utf-8"),
        INVALID_JSON: render_invalid(table.invalid).encode("utf-8"),
        NAMES_JSON: render_names(ordered, **values).encode("utf-8"),
        NAMES_DB: encode(ordered, **values),
    }


def verify_database(raw: bytes, allocation: Allocation) -> None:
    """Decode the encoded database and check it against the allocation."""
    db = NameDatabase.from_bytes(raw)
    if db.count != len(allocation.items):
        msg = f"Database holds {db.count} entries, expected {len(allocation.items)}"
        raise InvariantViolation(msg)
    if len({item.hash for item in allocation.items}) != len(allocation.items):
        msg = "Duplicate name hash in allocation"
        raise InvariantViolation(msg)
    if (db.name_value, db.root_value) != (allocation.name_value, allocation.root_value):
        msg = "Database header does not match allocation"
        raise InvariantViolation(msg)


class CompileService(BaseService):
    """Compile the corpus into reports and the binary name database."""

    def _allocation_policy(self) -> AllocationPolicy:
        cfg = self._workspace.settings.allocation
        return AllocationPolicy(
            share=cfg.share_tokens * cfg.unit,
            extra_value=cfg.extra_tokens * cfg.unit,
            unit=cfg.unit,
            expected_total=cfg.expected_total if cfg.verify_total else None,
        )

    @traced
    def compile(self, *, dry_run: bool = False) -> ServiceResult:
        """Run the full pipeline.

        With *dry_run* every stage and check runs but nothing is written.
        """
        settings = self._workspace.settings
        try:
            with trace_span("load") as span:
                corpus = load_corpus(
                    self._workspace.corpus_dir,
                    ranked_file=settings.corpus.ranked_file,
                )
                if span:
                    span.annotate("ranked", len(corpus.ranked))
                    span.annotate("roots", len(corpus.roots))

            with trace_span("resolve") as span:
                policy = PolicyFilter(
                    blacklist=corpus.blacklist,
                    stop_words=corpus.words,
                    strict_rank=settings.policy.strict_rank,
                )
                table = compile_names(
                    corpus,
                    policy=policy,
                    ranked_count=settings.corpus.ranked_count,
                )
                if span:
                    span.annotate("accepted", len(table.names))
                    span.annotate("rejected", len(table.invalid))

            with trace_span("allocate") as span:
                allocation = allocate(
                    table.names,
                    root_count=len(corpus.roots),
                    values=corpus.values,
                    policy=self._allocation_policy(),
                )
                if span:
                    span.annotate("total_value", allocation.total_value)

            with trace_span("serialize"):
                artifacts = render_artifacts(table, allocation)
                verify_database(artifacts[NAMES_DB], allocation)

            written: list[str] = []
            if not dry_run:
                with self._workspace.transaction() as txn:
                    for filename, content in artifacts.items():
                        txn.write_bytes(self._workspace.build_path(filename), content)
                written = [str(p) for p in txn.written]
        except CompilationError as exc:
            return self._failure("compile", exc)

        reasons = Counter(str(record.reason) for record in table.invalid)
        data: dict[str, Any] = {
            **allocation.to_dict(),
            "rejected": len(table.invalid),
            "reasons": dict(sorted(reasons.items())),
            "output_dir": str(self._workspace.build_dir),
            "artifacts": written,
            "dry_run": dry_run,
        }
        return ServiceResult(ok=True, op="compile", data=data)
