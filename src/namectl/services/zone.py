"""ZoneService: extract top-level names from a root zone snapshot."""

from __future__ import annotations

import json
from pathlib import Path

from namectl.domain.errors import CompilationError
from namectl.domain.zone import extract_roots, parse_zone
from namectl.infrastructure.corpus import CORPUS_FILES
from namectl.services.base import BaseService
from namectl.services.result import ServiceError, ServiceResult
from namectl.services.telemetry import trace_span, traced

ROOT_JSON = "root.json"


class ZoneService(BaseService):
    """Write ``root.json`` (delegation data) and the ``rtld.json`` corpus list."""

    @traced
    def extract(self, zone_file: Path | None = None) -> ServiceResult:
        settings = self._workspace.settings
        path = zone_file or self._workspace.resolve(settings.zone.file)
        if not path.is_file():
            return ServiceResult(
                ok=False,
                op="extract",
                error=ServiceError(
                    code="SOURCE_NOT_FOUND",
                    message=f"Zone file not found: {path}",
                    detail={"path": str(path)},
                ),
            )

        try:
            with trace_span("parse") as span:
                records = parse_zone(path.read_text(encoding="utf-8"))
                if span:
                    span.annotate("records", len(records))
            with trace_span("extract") as span:
                roots = extract_roots(records)
                if span:
                    span.annotate("names", len(roots))
        except CompilationError as exc:
            return self._failure("extract", exc)

        root_json = self._workspace.build_path(ROOT_JSON)
        rtld_json = self._workspace.corpus_path(CORPUS_FILES["roots"])
        with self._workspace.transaction() as txn:
            txn.write_text(root_json, json.dumps(roots, indent=2) + "\n")
            txn.write_text(rtld_json, json.dumps(list(roots), indent=2) + "\n")

        with_ds = sum(
            1 for entry in roots.values() if any(r["type"] == "DS" for r in entry["records"])
        )
        return ServiceResult(
            ok=True,
            op="extract",
            data={
                "source": str(path),
                "names": len(roots),
                "signed": with_ds,
                "artifacts": [str(root_json), str(rtld_json)],
            },
        )
