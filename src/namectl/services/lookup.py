"""LookupService: point queries against the compiled name database."""

from __future__ import annotations

from pathlib import Path

from namectl.domain.allocation import hash_name
from namectl.domain.labels import is_valid_name
from namectl.domain.types import NameFlags
from namectl.infrastructure.namedb import DatabaseError, NameDatabase
from namectl.services.base import BaseService
from namectl.services.compile import NAMES_DB
from namectl.services.result import ServiceError, ServiceResult
from namectl.services.telemetry import traced


class LookupService(BaseService):
    """Resolve a name to its database record by binary search on its hash."""

    @traced
    def lookup(self, name: str, *, db_path: Path | None = None) -> ServiceResult:
        name = name.lower().rstrip(".")
        if not is_valid_name(name):
            return ServiceResult(
                ok=False,
                op="lookup",
                error=ServiceError(code="INVALID_NAME", message=f"Not a valid name: {name!r}"),
            )

        path = db_path or self._workspace.build_path(NAMES_DB)
        if not path.is_file():
            return ServiceResult(
                ok=False,
                op="lookup",
                error=ServiceError(
                    code="NO_DATABASE",
                    message=f"Name database not found: {path}",
                    detail={"path": str(path)},
                ),
            )

        try:
            db = NameDatabase.open(path)
            record = db.lookup_hash(hash_name(name))
        except DatabaseError as exc:
            return self._failure("lookup", exc)

        if record is None:
            return ServiceResult(
                ok=False,
                op="lookup",
                error=ServiceError(
                    code="NOT_FOUND",
                    message=f"Name not reserved: {name}",
                    detail={"name": name, "hash": hash_name(name).hex()},
                ),
            )

        embargoed = NameFlags.EMBARGOED in record.flags
        root = NameFlags.ROOT in record.flags
        value = 0
        if not embargoed:
            value = (db.root_value if root else db.name_value) + (record.custom or 0)

        return ServiceResult(
            ok=True,
            op="lookup",
            data={
                "name": record.name,
                "hash": record.hash.hex(),
                "target": record.target,
                "flags": [flag.name.lower() for flag in NameFlags if flag and flag in record.flags],
                "root": root,
                "embargoed": embargoed,
                "custom": record.custom,
                "value": value,
            },
        )
