"""Filter and resolve stages: corpus in, canonical name table out."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from namectl.domain.errors import CorpusError
from namectl.domain.labels import is_valid_name, split_domain
from namectl.domain.models import Candidate
from namectl.domain.policy import Accept, PolicyFilter
from namectl.domain.resolver import NameTable
from namectl.domain.types import SOURCE_RANKS, SourceClass

RANKED_COUNT = 1_000_000


@dataclass(frozen=True)
class Corpus:
    """Validated input lists, in the shapes the loader produces.

    ``custom`` and ``trademarks`` are ordered ``(name, domain)`` pairs.
    ``ranked`` holds ``(rank, domain)`` pairs in ascending rank.
    ``values`` maps a full domain to an override in whole tokens.
    """

    blacklist: frozenset[str] = field(default_factory=frozenset)
    custom: tuple[tuple[str, str], ...] = ()
    trademarks: tuple[tuple[str, str], ...] = ()
    roots: tuple[str, ...] = ()
    ranked: tuple[tuple[int, str], ...] = ()
    words: frozenset[str] = field(default_factory=frozenset)
    values: Mapping[str, int] = field(default_factory=dict)


def compile_names(
    corpus: Corpus,
    *,
    policy: PolicyFilter | None = None,
    ranked_count: int | None = RANKED_COUNT,
) -> NameTable:
    """Run the filter and resolver over *corpus*.

    Raises:
        CorpusError: an override or root name is not a valid name, an
            override name is blacklisted, an override domain is not ASCII,
            or the ranked list does not hold exactly *ranked_count* entries.
    """
    if ranked_count is not None and len(corpus.ranked) != ranked_count:
        msg = f"Ranked corpus has {len(corpus.ranked)} entries, expected {ranked_count}"
        raise CorpusError(msg, found=len(corpus.ranked), expected=ranked_count)

    if policy is None:
        policy = PolicyFilter(blacklist=corpus.blacklist, stop_words=corpus.words)

    table = NameTable(corpus.blacklist)

    # Existing naming projects, then trademark claims.
    for source, pairs in (
        (SourceClass.CUSTOM, corpus.custom),
        (SourceClass.TRADEMARK, corpus.trademarks),
    ):
        for name, domain in pairs:
            if not is_valid_name(name):
                msg = f"{source} name {name!r} is not a valid name"
                raise CorpusError(msg, name=name, domain=domain)
            if not domain.isascii():
                msg = f"{source} domain {domain!r} is not ASCII"
                raise CorpusError(msg, name=name, domain=domain)
            if name in corpus.blacklist:
                msg = f"{source} name {name!r} is blacklisted"
                raise CorpusError(msg, name=name, domain=domain)
            table.insert(domain, SOURCE_RANKS[source], name, split_domain(domain)[1])

    for name in corpus.roots:
        if not is_valid_name(name):
            msg = f"Root name {name!r} is not a valid name"
            raise CorpusError(msg, name=name)
        table.insert(name, SOURCE_RANKS[SourceClass.ROOT], name, "")

    previous = 0
    for rank, domain in corpus.ranked:
        if rank <= previous:
            msg = f"Rank {rank} ({domain}) does not follow rank {previous}"
            raise CorpusError(msg, rank=rank, previous=previous, domain=domain)
        previous = rank
        verdict = policy.evaluate(Candidate(domain, rank, SourceClass.RANKED))
        if isinstance(verdict, Accept):
            table.insert(domain, rank, verdict.name, verdict.tld)
        else:
            table.reject(domain, rank, verdict.reason)

    return table
