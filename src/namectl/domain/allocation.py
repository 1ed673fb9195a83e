"""Value allocation over the accepted name set.

All arithmetic is in integer micro-units (1 token = 1,000,000 units).

The share is split into two halves with floor division. One half is
spread evenly over every non-embargoed name (``name_value``); the other
half is spread over non-embargoed root names only and added on top for
them (``root_value``). Embargoed names keep their slot and flags but are
allocated nothing. Per-domain overrides add whole tokens on top of the
base value.

INVARIANT: ``total_value + extra_value`` must match the expected total
exactly; the floor-division residue is reported, never redistributed.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from namectl.domain.errors import InvariantViolation
from namectl.domain.models import AcceptedName, ValuedName
from namectl.domain.types import ROOT_RANK, NameFlags

UNIT = 1_000_000

# 7.5% of the supply.
SHARE_TOKENS = 102_000_000

# Paid out through another channel to a recipient that preferred an
# address over a name; it still counts against the share.
EXTRA_TOKENS = 10_200_000

# Known total for the published corpus.
EXPECTED_TOTAL = 203_999_999_936_738

# Jurisdictions under trade embargo: names are reserved but carry no value.
EMBARGOES: frozenset[str] = frozenset(
    {
        "ir",  # Iran
        "xn--mgba3a4f16a",  # Iran (punycode)
        "kp",  # North Korea
        "sy",  # Syria
        "xn--ogbpf8fl",  # Syria (punycode)
        "sd",  # Sudan
        "xn--mgbpl2fh",  # Sudan (punycode)
        "cu",  # Cuba
        "ve",  # Venezuela
    }
)


def hash_name(name: str) -> bytes:
    """SHA3-256 digest of a name, the database lookup key."""
    return hashlib.sha3_256(name.encode("ascii")).digest()


@dataclass(frozen=True)
class AllocationPolicy:
    """Supply parameters. Defaults reproduce the published table."""

    share: int = SHARE_TOKENS * UNIT
    extra_value: int = EXTRA_TOKENS * UNIT
    unit: int = UNIT
    expected_total: int | None = EXPECTED_TOTAL
    embargoes: frozenset[str] = EMBARGOES

    @property
    def supply(self) -> int:
        """Upper bound on everything the table may hand out."""
        return self.share * 2


@dataclass(frozen=True)
class Allocation:
    """Allocator output: valued names in input order plus the ledger."""

    items: tuple[ValuedName, ...]
    name_value: int
    root_value: int
    total_value: int
    extra_value: int
    base_total: int
    residue: int
    root_count: int
    embargo_count: int
    custom_count: int

    def to_dict(self) -> dict[str, int]:
        return {
            "names": len(self.items),
            "name_value": self.name_value,
            "root_value": self.root_value,
            "total_value": self.total_value,
            "extra_value": self.extra_value,
            "residue": self.residue,
            "roots": self.root_count,
            "embargoed": self.embargo_count,
            "custom_values": self.custom_count,
        }


def unit_values(name_count: int, root_count: int, policy: AllocationPolicy) -> tuple[int, int]:
    """Return ``(name_value, root_value)`` for a corpus of the given size."""
    embargoed = len(policy.embargoes)
    name_divisor = name_count - embargoed
    root_divisor = root_count - embargoed
    if name_divisor <= 0 or root_divisor <= 0:
        msg = (
            f"Cannot split value over {name_count} names / {root_count} roots "
            f"with {embargoed} embargoes"
        )
        raise InvariantViolation(msg, names=name_count, roots=root_count, embargoes=embargoed)

    half = policy.share // 2
    name_value = half // name_divisor
    root_value = name_value + half // root_divisor
    return name_value, root_value


def allocate(
    names: Iterable[AcceptedName],
    *,
    root_count: int,
    values: Mapping[str, int] | None = None,
    policy: AllocationPolicy | None = None,
) -> Allocation:
    """Assign flags and value to every accepted name.

    Args:
        names: Final accepted name set (any order; output keeps it).
        root_count: Number of root names ingested from the zone snapshot.
        values: Per-domain overrides in whole tokens. Not mutated.
        policy: Supply parameters.

    Raises:
        InvariantViolation: root/embargo counts disagree, an override is
            left unconsumed, or the total does not reconcile.
    """
    policy = policy or AllocationPolicy()
    names = list(names)
    name_value, root_value = unit_values(len(names), root_count, policy)
    pending = dict(values or {})

    items: list[ValuedName] = []
    roots = 0
    embargoed = 0
    customs = 0
    base_total = 0
    total_value = 0

    for entry in names:
        flags = NameFlags.NONE
        custom: int | None = None

        if entry.rank == ROOT_RANK:
            flags |= NameFlags.ROOT
            roots += 1

        if entry.domain in policy.embargoes:
            flags |= NameFlags.EMBARGOED
            embargoed += 1

        if entry.domain in pending:
            flags |= NameFlags.CUSTOM_VALUE
            custom = pending.pop(entry.domain) * policy.unit
            customs += 1

        value = 0
        if NameFlags.EMBARGOED not in flags:
            base = root_value if NameFlags.ROOT in flags else name_value
            base_total += base
            value = base + (custom or 0)
            total_value += value

        items.append(
            ValuedName(
                name=entry.name,
                domain=entry.domain,
                tld=entry.tld,
                rank=entry.rank,
                collision_count=entry.collision_count,
                hash=hash_name(entry.name),
                flags=flags,
                value=value,
                custom=custom,
            )
        )

    if roots != root_count:
        msg = f"Root name count mismatch: {roots} != {root_count}"
        raise InvariantViolation(msg, flagged=roots, ingested=root_count)

    if embargoed != len(policy.embargoes):
        msg = f"Embargo count mismatch: {embargoed} != {len(policy.embargoes)}"
        raise InvariantViolation(msg, flagged=embargoed, expected=len(policy.embargoes))

    if pending:
        msg = f"Custom values not satisfied: {', '.join(sorted(pending))}"
        raise InvariantViolation(msg, unmatched=dict(sorted(pending.items())))

    granted = total_value + policy.extra_value
    if granted > policy.supply:
        msg = f"Allocated value {granted} exceeds supply {policy.supply}"
        raise InvariantViolation(msg, granted=granted, supply=policy.supply)

    if policy.expected_total is not None and granted != policy.expected_total:
        msg = f"Total value {granted} != expected {policy.expected_total}"
        raise InvariantViolation(msg, granted=granted, expected=policy.expected_total)

    return Allocation(
        items=tuple(items),
        name_value=name_value,
        root_value=root_value,
        total_value=total_value,
        extra_value=policy.extra_value,
        base_total=base_total,
        residue=policy.share - base_total,
        root_count=roots,
        embargo_count=embargoed,
        custom_count=customs,
    )
