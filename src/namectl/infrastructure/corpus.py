"""Corpus loading and raw-source import.

The corpus directory holds one JSON file per input list (see
:data:`CORPUS_FILES`). Raw sources (a ``rank,domain`` CSV ranking and a
dictionary word list) are converted into that layout by the import
helpers below.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from namectl.domain.compiler import Corpus
from namectl.domain.errors import CorpusError
from namectl.domain.labels import is_valid_name

logger = logging.getLogger(__name__)

CORPUS_FILES: dict[str, str] = {
    "blacklist": "blacklist.json",
    "custom": "custom.json",
    "trademarks": "trademarks.json",
    "roots": "rtld.json",
    "words": "words.json",
    "values": "values.json",
}

# Files that must exist; the rest default to empty.
REQUIRED = frozenset({"roots"})

_CSV_SPLIT = re.compile(r"\s*,\s*")


# ---------------------------------------------------------------------------
# Shape validation
# ---------------------------------------------------------------------------


def _read(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise CorpusError(msg, path=str(path)) from exc


def _string_list(data: Any, path: Path) -> list[str]:
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        msg = f"{path.name} must be a JSON list of strings"
        raise CorpusError(msg, path=str(path))
    return data


def _pair_list(data: Any, path: Path) -> list[tuple[str, str]]:
    if not isinstance(data, list):
        msg = f"{path.name} must be a JSON list of [name, domain] pairs"
        raise CorpusError(msg, path=str(path))
    pairs: list[tuple[str, str]] = []
    for item in data:
        if (
            not isinstance(item, list)
            or len(item) != 2
            or not all(isinstance(part, str) for part in item)
        ):
            msg = f"{path.name}: malformed entry {item!r}"
            raise CorpusError(msg, path=str(path))
        pairs.append((item[0], item[1]))
    return pairs


def _values(data: Any, path: Path) -> dict[str, int]:
    """Accept ``{domain: tokens}`` or ``[[domain, tokens], ...]``."""
    items = data.items() if isinstance(data, dict) else data
    if not isinstance(items, Iterable):
        msg = f"{path.name} must map domains to token amounts"
        raise CorpusError(msg, path=str(path))

    values: dict[str, int] = {}
    for item in items:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            msg = f"{path.name}: malformed value override {item!r}"
            raise CorpusError(msg, path=str(path))
        domain, amount = item
        if not isinstance(domain, str) or not isinstance(amount, int) or amount < 0:
            msg = f"{path.name}: malformed value override {item!r}"
            raise CorpusError(msg, path=str(path))
        if domain in values:
            msg = f"{path.name}: duplicate value override for {domain}"
            raise CorpusError(msg, path=str(path), domain=domain)
        values[domain] = amount
    return values


def check_ranks(ranked: Iterable[tuple[int, str]], source: str) -> list[tuple[int, str]]:
    """Enforce strictly increasing ranks starting at 1.

    Gaps are logged as warnings; a rank that repeats or moves backward
    is fatal.
    """
    out: list[tuple[int, str]] = []
    expected = 1
    for rank, domain in ranked:
        if rank < expected:
            msg = f"{source}: rank {rank} ({domain}) moves backward (expected {expected})"
            raise CorpusError(msg, rank=rank, expected=expected, domain=domain)
        if rank > expected:
            logger.warning("%s: rank gap %d..%d before %s", source, expected, rank - 1, domain)
        out.append((rank, domain))
        expected = rank + 1
    return out


def _ranked(data: Any, path: Path) -> list[tuple[int, str]]:
    """Plain strings carry implicit ranks; ``[rank, domain]`` pairs are explicit."""
    if not isinstance(data, list):
        msg = f"{path.name} must be a JSON list"
        raise CorpusError(msg, path=str(path))
    pairs: list[tuple[int, str]] = []
    for i, item in enumerate(data, start=1):
        if isinstance(item, str):
            pairs.append((i, item))
        elif (
            isinstance(item, list)
            and len(item) == 2
            and isinstance(item[0], int)
            and isinstance(item[1], str)
        ):
            pairs.append((item[0], item[1]))
        else:
            msg = f"{path.name}: malformed ranked entry {item!r}"
            raise CorpusError(msg, path=str(path))
    return check_ranks(pairs, path.name)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_corpus(directory: Path, *, ranked_file: str = "alexa.json") -> Corpus:
    """Read and validate every corpus list under *directory*.

    Raises:
        CorpusError: a required file is missing or any file is malformed.
    """
    raw: dict[str, Any] = {}
    for key, filename in CORPUS_FILES.items():
        path = directory / filename
        if not path.is_file():
            if key in REQUIRED:
                msg = f"Missing corpus file: {path}"
                raise CorpusError(msg, path=str(path))
            continue
        raw[key] = _read(path)

    ranked_path = directory / ranked_file
    if not ranked_path.is_file():
        msg = f"Missing ranked corpus: {ranked_path}"
        raise CorpusError(msg, path=str(ranked_path))

    def path_of(key: str) -> Path:
        return directory / CORPUS_FILES[key]

    corpus = Corpus(
        blacklist=frozenset(_string_list(raw.get("blacklist", []), path_of("blacklist"))),
        custom=tuple(_pair_list(raw.get("custom", []), path_of("custom"))),
        trademarks=tuple(_pair_list(raw.get("trademarks", []), path_of("trademarks"))),
        roots=tuple(_string_list(raw["roots"], path_of("roots"))),
        ranked=tuple(_ranked(_read(ranked_path), ranked_path)),
        words=frozenset(_string_list(raw.get("words", []), path_of("words"))),
        values=_values(raw.get("values", []), path_of("values")),
    )
    logger.debug(
        "Loaded corpus from %s: %d roots, %d ranked, %d overrides",
        directory,
        len(corpus.roots),
        len(corpus.ranked),
        len(corpus.custom) + len(corpus.trademarks),
    )
    return corpus


# ---------------------------------------------------------------------------
# Raw-source import
# ---------------------------------------------------------------------------


def read_ranked_csv(path: Path, *, expected_count: int | None) -> list[tuple[int, str]]:
    """Parse a ``rank,domain`` ranking CSV (lowercased, blank lines skipped)."""
    pairs: list[tuple[int, str]] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        ln = line.strip().lower()
        if not ln:
            continue
        items = _CSV_SPLIT.split(ln)
        if len(items) != 2 or not items[0].isdigit():
            msg = f"{path.name}:{lineno}: expected 'rank,domain', got {line!r}"
            raise CorpusError(msg, line=lineno)
        pairs.append((int(items[0]), items[1]))

    ranked = check_ranks(pairs, path.name)
    if expected_count is not None and len(ranked) != expected_count:
        msg = f"{path.name} has {len(ranked)} entries, expected {expected_count}"
        raise CorpusError(msg, found=len(ranked), expected=expected_count)
    return ranked


def render_ranked(ranked: list[tuple[int, str]]) -> list[Any]:
    """JSON shape for ``alexa.json``: plain domains unless ranks have gaps."""
    if all(rank == i for i, (rank, _) in enumerate(ranked, start=1)):
        return [domain for _, domain in ranked]
    return [[rank, domain] for rank, domain in ranked]


def read_words(path: Path) -> list[str]:
    """Dictionary words that are themselves valid names, first occurrence kept."""
    seen: set[str] = set()
    words: list[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        word = line.strip()
        if word in seen or not is_valid_name(word):
            continue
        seen.add(word)
        words.append(word)
    return words
