"""DS/DNSKEY chain checks for top-level trust anchors.

Given the DS records published in the root zone for a name and a set of
DNSKEY records obtained for it, select the keys that chain-verify: the
key tag matches a DS record, the DS digest recomputed from the key
equals the published one, and the algorithms agree exactly.

INVARIANT: When a key tag has DS records under several digest types,
the SHA-1 digest alone is never accepted as proof.
"""

from __future__ import annotations

import base64
import hashlib
import struct
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from namectl.domain.errors import CorpusError
from namectl.domain.zone import ZoneRecord


class DigestType(IntEnum):
    SHA1 = 1
    SHA256 = 2
    SHA384 = 4


_DIGESTS: dict[int, Callable[[bytes], Any]] = {
    DigestType.SHA1: hashlib.sha1,
    DigestType.SHA256: hashlib.sha256,
    DigestType.SHA384: hashlib.sha384,
}

# RSA/MD5 computes its key tag from the modulus, not the rdata checksum.
_ALG_RSAMD5 = 1


def name_to_wire(name: str) -> bytes:
    """Canonical (lowercase, uncompressed) wire form of a domain name."""
    out = bytearray()
    for label in name.rstrip(".").lower().split("."):
        if not label:
            continue
        raw = label.encode("ascii")
        out.append(len(raw))
        out += raw
    out.append(0)
    return bytes(out)


@dataclass(frozen=True, slots=True)
class DSRecord:
    key_tag: int
    algorithm: int
    digest_type: int
    digest: bytes

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DSRecord:
        """Build from a ``root.json`` DS entry.

        Raises:
            CorpusError: a field is missing or malformed.
        """
        try:
            return cls(
                key_tag=int(data["keyTag"]),
                algorithm=int(data["algorithm"]),
                digest_type=int(data["digestType"]),
                digest=bytes.fromhex(data["digest"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"Malformed DS record {data!r}: {exc}"
            raise CorpusError(msg, record=data) from exc


@dataclass(frozen=True, slots=True)
class DNSKEYRecord:
    name: str
    ttl: int
    flags: int
    protocol: int
    algorithm: int
    public_key: bytes

    @classmethod
    def from_zone(cls, rr: ZoneRecord) -> DNSKEYRecord:
        if len(rr.data) < 4:
            msg = f"DNSKEY for {rr.name} needs flags, protocol, algorithm and key"
            raise CorpusError(msg, name=rr.name, data=list(rr.data))
        if not rr.name.isascii():
            msg = f"DNSKEY owner name is not ASCII: {rr.name}"
            raise CorpusError(msg, name=rr.name)
        flags, protocol, algorithm, *key = rr.data
        try:
            record = cls(
                name=rr.name,
                ttl=rr.ttl,
                flags=int(flags),
                protocol=int(protocol),
                algorithm=int(algorithm),
                public_key=base64.b64decode("".join(key), validate=True),
            )
        except ValueError as exc:
            msg = f"Malformed DNSKEY for {rr.name}: {exc}"
            raise CorpusError(msg, name=rr.name) from exc
        if not 0 <= record.flags <= 0xFFFF or not all(
            0 <= field <= 0xFF for field in (record.protocol, record.algorithm)
        ):
            msg = f"DNSKEY field out of range for {rr.name}"
            raise CorpusError(msg, name=rr.name)
        return record

    def rdata(self) -> bytes:
        return struct.pack("!HBB", self.flags, self.protocol, self.algorithm) + self.public_key

    def key_tag(self) -> int:
        """RFC 4034 Appendix B key tag."""
        if self.algorithm == _ALG_RSAMD5:
            if len(self.public_key) < 3:
                return 0
            return (self.public_key[-3] << 8) | self.public_key[-2]

        acc = 0
        for i, byte in enumerate(self.rdata()):
            acc += byte if i & 1 else byte << 8
        acc += (acc >> 16) & 0xFFFF
        return acc & 0xFFFF

    def to_text(self) -> str:
        key = base64.b64encode(self.public_key).decode("ascii")
        return (
            f"{self.name} {self.ttl} IN DNSKEY "
            f"{self.flags} {self.protocol} {self.algorithm} {key}"
        )


def create_ds_digest(key: DNSKEYRecord, digest_type: int) -> bytes | None:
    """Digest of owner name + DNSKEY rdata, or None for unknown digest types."""
    digest = _DIGESTS.get(digest_type)
    if digest is None:
        return None
    return digest(name_to_wire(key.name) + key.rdata()).digest()


def group_by_key_tag(ds_records: Iterable[DSRecord]) -> dict[int, dict[int, DSRecord]]:
    """``{key_tag: {digest_type: ds}}``; later duplicates replace earlier ones."""
    groups: dict[int, dict[int, DSRecord]] = {}
    for ds in ds_records:
        groups.setdefault(ds.key_tag, {})[ds.digest_type] = ds
    return groups


def verify_keys(
    keys: Iterable[DNSKEYRecord],
    ds_records: Iterable[DSRecord],
) -> list[DNSKEYRecord]:
    """Return the keys that chain-verify against at least one DS digest."""
    groups = group_by_key_tag(ds_records)
    verified: list[DNSKEYRecord] = []

    for key in keys:
        group = groups.get(key.key_tag())
        if not group:
            continue
        for parent in group.values():
            if parent.digest_type == DigestType.SHA1 and len(group) > 1:
                continue
            if parent.algorithm != key.algorithm:
                continue
            if create_ds_digest(key, parent.digest_type) != parent.digest:
                continue
            verified.append(key)
            break

    return verified
