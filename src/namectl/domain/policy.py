"""Policy filter for ranked candidates.

The filter is an explicit, ordered rule list evaluated top-to-bottom.
Each rule either rejects the candidate with a :class:`RejectReason` or
passes it on (possibly after narrowing the working labels). The first
rejection wins; a candidate surviving every rule is accepted.

Rule order:
  1. strip_www          drop leading ``www`` labels; bare ``www`` rejects
  2. too_many_labels    more than three labels
  3. third_level        ``<name>.<sld>.<cctld>`` with an allowed SLD only
  4. extract_name       lowest label becomes the name, the rest the tld
  5. charset            name syntax and length
  6. one_letter         single-character names
  7. strict_tail        past the strict rank: two letters, stop words
  8. blacklisted        globally disallowed names
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from namectl.domain.errors import CorpusError
from namectl.domain.labels import ALLOWED_SLDS, is_cctld, is_valid_name
from namectl.domain.models import Candidate
from namectl.domain.types import RejectReason, SourceClass

# Rank past which two-letter names and dictionary words are dropped.
STRICT_RANK = 50_000


@dataclass(frozen=True, slots=True)
class Accept:
    name: str
    tld: str


@dataclass(frozen=True, slots=True)
class Reject:
    reason: RejectReason


Verdict = Accept | Reject


@dataclass(slots=True)
class FilterState:
    """Working state for one candidate as it moves through the rules."""

    candidate: Candidate
    labels: list[str]
    name: str = ""
    tld: str = ""


@dataclass(frozen=True)
class PolicyContext:
    """Static lookup sets shared by every rule."""

    blacklist: frozenset[str] = field(default_factory=frozenset)
    stop_words: frozenset[str] = field(default_factory=frozenset)
    strict_rank: int = STRICT_RANK


Rule = Callable[[FilterState, PolicyContext], RejectReason | None]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def strip_www(state: FilterState, ctx: PolicyContext) -> RejectReason | None:
    labels = state.labels
    while len(labels) > 2 and labels[0] == "www":
        labels.pop(0)
    if labels[0] == "www":
        return RejectReason.PLAIN_WWW
    return None


def too_many_labels(state: FilterState, ctx: PolicyContext) -> RejectReason | None:
    if len(state.labels) > 3:
        return RejectReason.DEEPLY_NESTED
    return None


def third_level(state: FilterState, ctx: PolicyContext) -> RejectReason | None:
    """Allow ``foo.co.uk`` style names: ccTLD on top, known SLD below it."""
    if len(state.labels) != 3:
        return None
    _, sld, top = state.labels
    if not is_cctld(top) or sld not in ALLOWED_SLDS:
        return RejectReason.DEEPLY_NESTED
    return None


def extract_name(state: FilterState, ctx: PolicyContext) -> RejectReason | None:
    state.name = state.labels[0]
    state.tld = ".".join(state.labels[1:])
    return None


def charset(state: FilterState, ctx: PolicyContext) -> RejectReason | None:
    """The name must be a valid label; the rest of the domain must be ASCII."""
    if not is_valid_name(state.name) or not state.tld.isascii():
        return RejectReason.INVALID_CHARSET
    return None


def one_letter(state: FilterState, ctx: PolicyContext) -> RejectReason | None:
    if state.candidate.source is SourceClass.RANKED and len(state.name) == 1:
        return RejectReason.ONE_LETTER
    return None


def strict_tail(state: FilterState, ctx: PolicyContext) -> RejectReason | None:
    if state.candidate.rank <= ctx.strict_rank:
        return None
    if len(state.name) == 2:
        return RejectReason.TWO_LETTER
    if state.name in ctx.stop_words:
        return RejectReason.ENGLISH_WORD
    return None


def blacklisted(state: FilterState, ctx: PolicyContext) -> RejectReason | None:
    if state.name in ctx.blacklist:
        return RejectReason.BLACKLIST
    return None


RULES: tuple[tuple[str, Rule], ...] = (
    ("strip_www", strip_www),
    ("too_many_labels", too_many_labels),
    ("third_level", third_level),
    ("extract_name", extract_name),
    ("charset", charset),
    ("one_letter", one_letter),
    ("strict_tail", strict_tail),
    ("blacklisted", blacklisted),
)


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------


class PolicyFilter:
    """Classify ranked candidates as accepted or rejected.

    Usage::

        policy = PolicyFilter(blacklist={"test"}, stop_words={"hello"})
        verdict = policy.evaluate(Candidate("foo.co.uk", 12, SourceClass.RANKED))
        # Accept(name="foo", tld="co.uk")
    """

    def __init__(
        self,
        *,
        blacklist: Iterable[str] = (),
        stop_words: Iterable[str] = (),
        strict_rank: int = STRICT_RANK,
        rules: tuple[tuple[str, Rule], ...] = RULES,
    ) -> None:
        self.context = PolicyContext(
            blacklist=frozenset(blacklist),
            stop_words=frozenset(stop_words),
            strict_rank=strict_rank,
        )
        self.rules = rules

    def evaluate(self, candidate: Candidate) -> Verdict:
        labels = candidate.domain.split(".")
        if len(labels) < 2:
            msg = f"Ranked domain has fewer than two labels: {candidate.domain!r}"
            raise CorpusError(msg, domain=candidate.domain, rank=candidate.rank)

        state = FilterState(candidate=candidate, labels=labels)
        for _name, rule in self.rules:
            reason = rule(state, self.context)
            if reason is not None:
                return Reject(reason)
        return Accept(state.name, state.tld)
