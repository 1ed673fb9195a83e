"""Root zone snapshot parsing.

Reads the one-record-per-line presentation format published for the
root zone (``name ttl class type rdata...``) and extracts every
top-level name that carries delegation (NS) or trust-anchor (DS) data,
together with the glue addresses of its nameservers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from namectl.domain.errors import CorpusError
from namectl.domain.labels import count_labels

# Stable order for a name's records in root.json.
_RECORD_ORDER = ("DS", "GLUE4", "GLUE6", "NS")


@dataclass(frozen=True, slots=True)
class ZoneRecord:
    name: str
    ttl: int
    rclass: str
    type: str
    data: tuple[str, ...]


def parse_zone(text: str) -> list[ZoneRecord]:
    """Parse zone text into records.

    Blank lines, ``;`` comments and ``$`` directives are skipped. Every
    record line must carry an explicit TTL and class.
    """
    records: list[ZoneRecord] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith((";", "$")):
            continue
        fields = line.split()
        if len(fields) < 5 or not fields[1].isdigit():
            msg = f"Malformed zone record on line {lineno}: {line!r}"
            raise CorpusError(msg, line=lineno)
        name, ttl, rclass, rtype, *data = fields
        records.append(
            ZoneRecord(
                name=name.lower(),
                ttl=int(ttl),
                rclass=rclass.upper(),
                type=rtype.upper(),
                data=tuple(data),
            )
        )
    return records


def extract_roots(records: list[ZoneRecord]) -> dict[str, dict[str, Any]]:
    """Group NS/glue/DS data per top-level name.

    Returns ``{name: {"records": [...]}}`` keyed by the bare label
    (no trailing dot), sorted by name.

    Raises:
        CorpusError: a delegation points at a nameserver with no glue.
    """
    glue: dict[str, dict[str, list[str]]] = {}
    for rr in records:
        if rr.type in ("A", "AAAA"):
            entry = glue.setdefault(rr.name, {"inet4": [], "inet6": []})
            entry["inet4" if rr.type == "A" else "inet6"].append(rr.data[0])

    domains: dict[str, list[dict[str, Any]]] = {}
    for rr in records:
        if count_labels(rr.name) != 1 or rr.type not in ("NS", "DS"):
            continue

        items = domains.setdefault(rr.name.rstrip("."), [])

        if rr.type == "NS":
            ns = rr.data[0].lower()
            auth = glue.get(ns)
            if auth is None:
                msg = f"No glue for nameserver {ns} of {rr.name}"
                raise CorpusError(msg, name=rr.name, ns=ns)
            items.append({"type": "NS", "ns": ns})
            items.extend({"type": "GLUE4", "ns": ns, "address": a} for a in auth["inet4"])
            items.extend({"type": "GLUE6", "ns": ns, "address": a} for a in auth["inet6"])
        else:
            key_tag, algorithm, digest_type, *digest = rr.data
            items.append(
                {
                    "type": "DS",
                    "keyTag": int(key_tag),
                    "algorithm": int(algorithm),
                    "digestType": int(digest_type),
                    "digest": "".join(digest).lower(),
                }
            )

    return {
        name: {"records": sorted(items, key=lambda item: _RECORD_ORDER.index(item["type"]))}
        for name, items in sorted(domains.items())
    }
