"""KeysService: offline DS/DNSKEY chain verification for root names."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from namectl.domain.dnssec import DNSKEYRecord, DSRecord, group_by_key_tag, verify_keys
from namectl.domain.errors import CompilationError, CorpusError
from namectl.domain.zone import parse_zone
from namectl.services.base import BaseService
from namectl.services.result import ServiceError, ServiceResult
from namectl.services.telemetry import traced
from namectl.services.zone import ROOT_JSON

KEYS_ZONE = "keys.zone"


def _keys_by_name(dnskey_file: Path) -> dict[str, list[DNSKEYRecord]]:
    keys_by_name: dict[str, list[DNSKEYRecord]] = {}
    for rr in parse_zone(dnskey_file.read_text(encoding="utf-8")):
        if rr.type == "DNSKEY":
            keys_by_name.setdefault(rr.name.rstrip("."), []).append(DNSKEYRecord.from_zone(rr))
    return keys_by_name


def _ds_by_name(roots: Any, source: Path) -> Iterator[tuple[str, list[DSRecord]]]:
    """Yield ``(name, ds_records)`` for every name in ``root.json`` that has DS data."""
    if not isinstance(roots, dict):
        msg = f"{source.name} must map names to record lists"
        raise CorpusError(msg, path=str(source))
    for name in sorted(roots):
        entry = roots[name]
        records = entry.get("records") if isinstance(entry, dict) else None
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            msg = f"{source.name}: malformed entry for {name}"
            raise CorpusError(msg, path=str(source), name=name)
        ds = [DSRecord.from_dict(r) for r in records if r.get("type") == "DS"]
        if ds:
            yield name, ds


def render_keys(groups: list[list[DNSKEYRecord]]) -> str:
    """One key per line; a blank line closes each name's group."""
    lines: list[str] = []
    for keys in groups:
        lines.extend(key.to_text() for key in keys)
        lines.append("")
    return "\n".join(lines) + "\n" if lines else ""


class KeysService(BaseService):
    """Select the DNSKEY records that chain to the DS records in ``root.json``."""

    @traced
    def verify(self, dnskey_file: Path, *, root_json: Path | None = None) -> ServiceResult:
        root_path = root_json or self._workspace.build_path(ROOT_JSON)
        for path in (dnskey_file, root_path):
            if not path.is_file():
                return ServiceResult(
                    ok=False,
                    op="verify",
                    error=ServiceError(
                        code="SOURCE_NOT_FOUND",
                        message=f"File not found: {path}",
                        detail={"path": str(path)},
                    ),
                )

        try:
            roots = self._workspace.read_json(root_path)
        except json.JSONDecodeError as exc:
            return self._failure("verify", CorpusError(f"Invalid JSON in {root_path}: {exc}"))

        groups: list[list[DNSKEYRecord]] = []
        warnings: list[str] = []
        checked = 0
        try:
            keys_by_name = _keys_by_name(dnskey_file)
            for name, ds in _ds_by_name(roots, root_path):
                checked += 1
                tags = len(group_by_key_tag(ds))
                verified = verify_keys(keys_by_name.get(name, []), ds)
                if verified:
                    groups.append(verified)
                if len(verified) < tags:
                    warnings.append(f"Missing DNS keys for: {name} ({len(verified)} < {tags})")
        except CompilationError as exc:
            return self._failure("verify", exc)

        target = self._workspace.build_path(KEYS_ZONE)
        with self._workspace.transaction() as txn:
            txn.write_text(target, render_keys(groups))

        return ServiceResult(
            ok=True,
            op="verify",
            data={
                "checked": checked,
                "verified_names": len(groups),
                "verified_keys": sum(len(g) for g in groups),
                "output": str(target),
            },
            warnings=warnings,
        )
