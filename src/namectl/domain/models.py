"""Records flowing through the compilation pipeline.

Candidate -> AcceptedName / InvalidRecord -> ValuedName.

INVARIANT: Records are only mutated by the stage that owns them.
``AcceptedName.collision_count`` is the one counter the resolver bumps;
everything downstream of allocation is frozen.
"""

from __future__ import annotations

from dataclasses import dataclass

from namectl.domain.types import NameFlags, RejectReason, SourceClass


@dataclass(frozen=True, slots=True)
class Candidate:
    """A raw domain entry before policy evaluation."""

    domain: str
    rank: int
    source: SourceClass


@dataclass(slots=True)
class AcceptedName:
    """A label that owns its slot in the name table."""

    domain: str
    name: str
    tld: str
    rank: int
    collision_count: int = 0

    def sort_key(self) -> tuple[int, str]:
        return (self.rank, self.name)


@dataclass(frozen=True, slots=True)
class InvalidRecord:
    """A rejected candidate, kept for the audit report.

    ``winner`` is set only for collisions and points at the entry that
    already held the name.
    """

    domain: str
    rank: int
    reason: RejectReason
    winner: AcceptedName | None = None

    def sort_key(self) -> tuple[int, str]:
        return (self.rank, self.domain)

    def describe(self) -> str:
        if self.winner is None:
            return str(self.reason)
        return f"{self.reason} with {self.winner.domain} ({self.winner.rank})"


@dataclass(frozen=True, slots=True)
class ValuedName:
    """An accepted name with its hash, flags, and allocated value.

    Attributes:
        value: Allocated micro-units (0 when embargoed).
        custom: Override micro-units when ``CUSTOM_VALUE`` is set, else None.
    """

    name: str
    domain: str
    tld: str
    rank: int
    collision_count: int
    hash: bytes
    flags: NameFlags
    value: int
    custom: int | None = None

    @property
    def target(self) -> str:
        """Fully-qualified target stored in the database record."""
        return f"{self.domain}."

    @property
    def is_root(self) -> bool:
        return NameFlags.ROOT in self.flags

    @property
    def is_embargoed(self) -> bool:
        return NameFlags.EMBARGOED in self.flags
