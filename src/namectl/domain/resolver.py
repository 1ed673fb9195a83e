"""Single-owner name table.

The table is filled in strict precedence order: custom names, trademark
claims, root names, then ranked domains by ascending rank. Because of that
ordering, first-writer-wins is the same as highest-priority-wins: an
existing entry is never displaced.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from namectl.domain.models import AcceptedName, InvalidRecord
from namectl.domain.types import RejectReason

logger = logging.getLogger(__name__)


class NameTable:
    """Canonical ``name -> AcceptedName`` table plus its rejection log.

    ``names`` preserves insertion order; ``invalid`` collects every
    rejection recorded through :meth:`reject` or :meth:`insert`.
    """

    def __init__(self, blacklist: Iterable[str] = ()) -> None:
        self.blacklist = frozenset(blacklist)
        self.names: list[AcceptedName] = []
        self.invalid: list[InvalidRecord] = []
        self._table: dict[str, AcceptedName] = {}

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, name: object) -> bool:
        return name in self._table

    def get(self, name: str) -> AcceptedName | None:
        return self._table.get(name)

    def reject(
        self,
        domain: str,
        rank: int,
        reason: RejectReason,
        winner: AcceptedName | None = None,
    ) -> InvalidRecord:
        record = InvalidRecord(domain=domain, rank=rank, reason=reason, winner=winner)
        self.invalid.append(record)
        logger.debug("Ignoring %s (%d) (reason=%s).", domain, rank, record.describe())
        return record

    def insert(self, domain: str, rank: int, name: str, tld: str) -> AcceptedName | None:
        """Claim *name* for *domain*.

        Returns the new entry, or None when the name is blacklisted or
        already owned (the owner's ``collision_count`` is incremented).
        """
        if name in self.blacklist:
            self.reject(domain, rank, RejectReason.BLACKLIST)
            return None

        existing = self._table.get(name)
        if existing is not None:
            self.reject(domain, rank, RejectReason.COLLISION, existing)
            existing.collision_count += 1
            return None

        item = AcceptedName(domain=domain, name=name, tld=tld, rank=rank)
        self._table[name] = item
        self.names.append(item)
        return item
