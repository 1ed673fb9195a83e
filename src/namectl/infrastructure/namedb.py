"""Binary name database: encoder and binary-search reader.

Layout (all integers little-endian)::

    header   u32 count | u64 name_value | u64 root_value
    index    count x ( 32-byte hash | u32 record offset )   sorted by hash
    records  u8 len | ascii target | u8 flags | u8 dot index | [u64 custom]

Record offsets are absolute positions in the file. The trailing ``u64``
is present only when the ``CUSTOM_VALUE`` flag is set. The dot index is
the position of the first ``.`` in the target, so a reader can split off
the name without scanning.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from namectl.domain.allocation import hash_name
from namectl.domain.errors import CompilationError
from namectl.domain.models import ValuedName
from namectl.domain.types import NameFlags

HASH_SIZE = 32
MAX_TARGET_SIZE = 255

_HEADER = struct.Struct("<IQQ")
_OFFSET = struct.Struct("<I")
_U64 = struct.Struct("<Q")
INDEX_ENTRY_SIZE = HASH_SIZE + _OFFSET.size


class DatabaseError(CompilationError):
    """Raised for records that cannot be encoded or bytes that cannot be decoded."""

    code = "DATABASE_INVALID"


@dataclass(frozen=True, slots=True)
class NameRecord:
    """One decoded database record."""

    hash: bytes
    target: str
    flags: NameFlags
    dot: int
    custom: int | None = None

    @property
    def name(self) -> str:
        return self.target[: self.dot]


def sort_by_hash(items: Iterable[ValuedName]) -> list[ValuedName]:
    """Unsigned byte-wise ascending hash order."""
    return sorted(items, key=lambda item: item.hash)


def encode(items: Iterable[ValuedName], *, name_value: int, root_value: int) -> bytes:
    """Serialize *items* (any order) into the database format."""
    ordered = sort_by_hash(items)

    records = bytearray()
    index = bytearray()
    base = _HEADER.size + len(ordered) * INDEX_ENTRY_SIZE

    for item in ordered:
        if len(item.hash) != HASH_SIZE:
            msg = f"Hash for {item.name} is {len(item.hash)} bytes"
            raise DatabaseError(msg)

        try:
            target = item.target.encode("ascii")
        except UnicodeEncodeError as exc:
            msg = f"Target is not ASCII: {item.target}"
            raise DatabaseError(msg, target=item.target) from exc
        if len(target) > MAX_TARGET_SIZE:
            msg = f"Target too long ({len(target)} bytes): {item.target}"
            raise DatabaseError(msg)

        dot = target.find(b".")
        if dot == -1:
            msg = f"Target has no dot: {item.target}"
            raise DatabaseError(msg)

        index += item.hash
        index += _OFFSET.pack(base + len(records))

        records.append(len(target))
        records += target
        records.append(int(item.flags))
        records.append(dot)
        if NameFlags.CUSTOM_VALUE in item.flags:
            records += _U64.pack(item.custom or 0)

    return _HEADER.pack(len(ordered), name_value, root_value) + bytes(index) + bytes(records)


class NameDatabase:
    """Read-only view over an encoded database.

    Usage::

        db = NameDatabase.open(Path("build/names.db"))
        record = db.lookup("example")  # NameRecord or None
    """

    def __init__(self, data: bytes) -> None:
        if len(data) < _HEADER.size:
            msg = "Truncated database header"
            raise DatabaseError(msg)
        self._data = data
        self.count, self.name_value, self.root_value = _HEADER.unpack_from(data, 0)
        if len(data) < _HEADER.size + self.count * INDEX_ENTRY_SIZE:
            msg = f"Truncated index for {self.count} entries"
            raise DatabaseError(msg)

    @classmethod
    def from_bytes(cls, data: bytes) -> NameDatabase:
        return cls(data)

    @classmethod
    def open(cls, path: Path) -> NameDatabase:
        return cls(path.read_bytes())

    def __len__(self) -> int:
        return self.count

    def _hash_at(self, i: int) -> bytes:
        pos = _HEADER.size + i * INDEX_ENTRY_SIZE
        return self._data[pos : pos + HASH_SIZE]

    def _read_record(self, i: int) -> NameRecord:
        pos = _HEADER.size + i * INDEX_ENTRY_SIZE
        digest = self._data[pos : pos + HASH_SIZE]
        (offset,) = _OFFSET.unpack_from(self._data, pos + HASH_SIZE)

        try:
            size = self._data[offset]
            start = offset + 1
            target = self._data[start : start + size].decode("ascii")
            flags = NameFlags(self._data[start + size])
            dot = self._data[start + size + 1]
            custom = None
            if NameFlags.CUSTOM_VALUE in flags:
                (custom,) = _U64.unpack_from(self._data, start + size + 2)
        except (IndexError, UnicodeDecodeError, struct.error) as exc:
            msg = f"Corrupt record at offset {offset}"
            raise DatabaseError(msg) from exc

        return NameRecord(hash=digest, target=target, flags=flags, dot=dot, custom=custom)

    def lookup_hash(self, digest: bytes) -> NameRecord | None:
        """Binary search the index; None when *digest* is absent."""
        if len(digest) != HASH_SIZE:
            return None
        lo, hi = 0, self.count
        while lo < hi:
            mid = (lo + hi) // 2
            current = self._hash_at(mid)
            if current == digest:
                return self._read_record(mid)
            if current < digest:
                lo = mid + 1
            else:
                hi = mid
        return None

    def lookup(self, name: str) -> NameRecord | None:
        return self.lookup_hash(hash_name(name))

    def __iter__(self) -> Iterator[NameRecord]:
        for i in range(self.count):
            yield self._read_record(i)
