"""Tests for the ranked-candidate policy filter."""

from __future__ import annotations

import pytest

from namectl.domain.errors import CorpusError
from namectl.domain.models import Candidate
from namectl.domain.policy import RULES, Accept, PolicyFilter, Reject
from namectl.domain.types import RejectReason, SourceClass


def _ranked(domain: str, rank: int = 100) -> Candidate:
    return Candidate(domain, rank, SourceClass.RANKED)


@pytest.fixture
def policy() -> PolicyFilter:
    return PolicyFilter(blacklist={"test", "example"}, stop_words={"hello", "world"})


class TestAccept:
    @pytest.mark.parametrize(
        ("domain", "name", "tld"),
        [
            ("google.com", "google", "com"),
            ("www.example.org", "example", "org"),
            ("www.www.github.io", "github", "io"),
            ("bbc.co.uk", "bbc", "co.uk"),
            ("baidu.com.cn", "baidu", "com.cn"),
            ("gov.gob.mx", "gov", "gob.mx"),
            ("my-site.net", "my-site", "net"),
            ("under_score.net", "under_score", "net"),
            ("123.com", "123", "com"),
            ("foo.xn--p1ai", "foo", "xn--p1ai"),
        ],
    )
    def test_accepted(self, domain: str, name: str, tld: str) -> None:
        verdict = PolicyFilter(blacklist={"test"}).evaluate(_ranked(domain))
        assert verdict == Accept(name, tld)

    def test_www_stripped_only_while_labels_remain(self) -> None:
        verdict = PolicyFilter().evaluate(_ranked("www.example.com"))
        assert verdict == Accept("example", "com")

    def test_sixty_three_characters_allowed(self) -> None:
        name = "a" * 63
        assert PolicyFilter().evaluate(_ranked(f"{name}.com")) == Accept(name, "com")


class TestReject:
    @pytest.mark.parametrize(
        ("domain", "reason"),
        [
            ("www.com", RejectReason.PLAIN_WWW),
            ("www.www.com", RejectReason.PLAIN_WWW),
            ("a.b.c.d", RejectReason.DEEPLY_NESTED),
            ("foo.bar.com", RejectReason.DEEPLY_NESTED),
            ("foo.xyz.uk", RejectReason.DEEPLY_NESTED),
            ("foo.co.example", RejectReason.DEEPLY_NESTED),
            ("-foo.com", RejectReason.INVALID_CHARSET),
            ("foo-.com", RejectReason.INVALID_CHARSET),
            ("_foo.com", RejectReason.INVALID_CHARSET),
            ("fo!o.com", RejectReason.INVALID_CHARSET),
            ("Foo.com", RejectReason.INVALID_CHARSET),
            ("a" * 64 + ".com", RejectReason.INVALID_CHARSET),
            ("amazon.рф", RejectReason.INVALID_CHARSET),
            ("x.com", RejectReason.ONE_LETTER),
            ("test.com", RejectReason.BLACKLIST),
            ("example.co.uk", RejectReason.BLACKLIST),
        ],
    )
    def test_rejected(self, policy: PolicyFilter, domain: str, reason: RejectReason) -> None:
        assert policy.evaluate(_ranked(domain)) == Reject(reason)

    def test_fewer_than_two_labels_is_fatal(self, policy: PolicyFilter) -> None:
        with pytest.raises(CorpusError, match="fewer than two labels"):
            policy.evaluate(_ranked("localhost"))


class TestStrictTail:
    def test_two_letter_allowed_at_strict_rank(self, policy: PolicyFilter) -> None:
        assert policy.evaluate(_ranked("ab.com", 50_000)) == Accept("ab", "com")

    def test_two_letter_rejected_past_strict_rank(self, policy: PolicyFilter) -> None:
        verdict = policy.evaluate(_ranked("ab.com", 50_001))
        assert verdict == Reject(RejectReason.TWO_LETTER)

    def test_stop_word_allowed_within_strict_rank(self, policy: PolicyFilter) -> None:
        assert policy.evaluate(_ranked("hello.com", 10)) == Accept("hello", "com")

    def test_stop_word_rejected_past_strict_rank(self, policy: PolicyFilter) -> None:
        verdict = policy.evaluate(_ranked("hello.com", 60_000))
        assert verdict == Reject(RejectReason.ENGLISH_WORD)

    def test_custom_strict_rank(self) -> None:
        policy = PolicyFilter(strict_rank=5)
        assert policy.evaluate(_ranked("ab.com", 6)) == Reject(RejectReason.TWO_LETTER)

    def test_one_letter_wins_over_strict_tail(self, policy: PolicyFilter) -> None:
        verdict = policy.evaluate(_ranked("q.com", 90_000))
        assert verdict == Reject(RejectReason.ONE_LETTER)


class TestRuleOrder:
    def test_rule_names(self) -> None:
        assert [name for name, _ in RULES] == [
            "strip_www",
            "too_many_labels",
            "third_level",
            "extract_name",
            "charset",
            "one_letter",
            "strict_tail",
            "blacklisted",
        ]

    def test_charset_checked_before_blacklist(self) -> None:
        policy = PolicyFilter(blacklist={"bad_"})
        assert policy.evaluate(_ranked("bad_.com")) == Reject(RejectReason.INVALID_CHARSET)

    def test_custom_rule_list(self) -> None:
        rules = tuple((n, r) for n, r in RULES if n != "one_letter")
        policy = PolicyFilter(rules=rules)
        assert policy.evaluate(_ranked("x.com")) == Accept("x", "com")
