"""JSON audit reports and the JSON mirror of the name database.

Every report is rendered one row per line through :func:`render_object`
or :func:`render_array`, so diffs between builds stay line-oriented and
the byte output is fully determined by row order.

Reports:
- ``valid.json``          ``{name: [tld, rank, collisions]}`` by (rank, name)
- ``valid-by-name.json``  same rows by name
- ``invalid.json``        ``[domain, rank, reason(, [winner, winnerRank])]``
- ``names.json``          ``{hash: [target, flags(, custom)]}`` by hash,
                          headed by the zero-hash header record
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from typing import Any, Literal

from namectl.domain.models import AcceptedName, InvalidRecord, ValuedName

ZERO_HASH = "00" * 32

NameOrder = Literal["rank", "name"]


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=True)


def render_object(rows: Iterable[tuple[str, Any]]) -> str:
    body = [f"  {_dump(key)}: {_dump(value)}" for key, value in rows]
    return "\n".join(["{", ",\n".join(body), "}", ""]) if body else "{\n}\n"


def render_array(rows: Iterable[Any]) -> str:
    body = [f"  {_dump(row)}" for row in rows]
    return "\n".join(["[", ",\n".join(body), "]", ""]) if body else "[\n]\n"


def render_valid(names: Iterable[AcceptedName | ValuedName], *, order: NameOrder = "rank") -> str:
    if order == "rank":
        rows = sorted(names, key=lambda n: (n.rank, n.name))
    else:
        rows = sorted(names, key=lambda n: n.name)
    return render_object((n.name, [n.tld, n.rank, n.collision_count]) for n in rows)


def invalid_row(record: InvalidRecord) -> list[Any]:
    row: list[Any] = [record.domain, record.rank, str(record.reason)]
    if record.winner is not None:
        row.append([record.winner.domain, record.winner.rank])
    return row


def render_invalid(records: Iterable[InvalidRecord]) -> str:
    rows = sorted(records, key=InvalidRecord.sort_key)
    return render_array(invalid_row(r) for r in rows)


def render_names(items: Sequence[ValuedName], *, name_value: int, root_value: int) -> str:
    """JSON mirror of ``names.db``. *items* must already be in hash order."""

    def rows() -> Iterable[tuple[str, list[Any]]]:
        yield ZERO_HASH, [len(items), name_value, root_value]
        for item in items:
            entry: list[Any] = [item.target, int(item.flags)]
            if item.custom is not None:
                entry.append(item.custom)
            yield item.hash.hex(), entry

    return render_object(rows())
