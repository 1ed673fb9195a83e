"""Label syntax rules and country-code TLD classification.

A reserved name is a single DNS label restricted to ``[a-z0-9\\-_]``,
1 to 63 bytes, that neither starts nor ends with ``-`` or ``_``.
"""

from __future__ import annotations

import re

MAX_NAME_SIZE = 63

_NAME_CHARSET = re.compile(r"[a-z0-9\-_]+")
_NAME_EDGES = re.compile(r"^[\-_]|[\-_]$")

# Internationalized country-code TLDs (punycode).
# https://www.icann.org/resources/pages/string-evaluation-completion-2014-02-19-en
ICCTLDS: frozenset[str] = frozenset(
    {
        "xn--lgbbat1ad8j",
        "xn--y9a3aq",
        "xn--54b7fta0cc",
        "xn--90ais",
        "xn--90ae",
        "xn--fiqs8s",
        "xn--fiqz9s",
        "xn--wgbh1c",
        "xn--e1a4c",
        "xn--node",
        "xn--qxam",
        "xn--j6w193g",
        "xn--h2brj9c",
        "xn--mgbbh1a71e",
        "xn--fpcrj9c3d",
        "xn--gecrj9c",
        "xn--s9brj9c",
        "xn--45brj9c",
        "xn--xkc2dl3a5ee0h",
        "xn--2scrj9c",
        "xn--rvc1e0am3e",
        "xn--45br5cyl",
        "xn--3hcrj9c",
        "xn--mgbbh1a",
        "xn--h2breg3eve",
        "xn--h2brj9c8c",
        "xn--mgbgu82a",
        "xn--mgba3a4f16a",
        "xn--mgba3a4fra",
        "xn--mgbtx2b",
        "xn--mgbayh7gpa",
        "xn--80ao21a",
        "xn--3e0b707e",
        "xn--mix891f",
        "xn--mix082f",
        "xn--d1alf",
        "xn--mgbx4cd0ab",
        "xn--mgbah1a3hjkrd",
        "xn--l1acc",
        "xn--mgbc0a9azcg",
        "xn--mgb9awbf",
        "xn--mgbai9azgqp6j",
        "xn--mgbai9a5eva00b",
        "xn--ygbi2ammx",
        "xn--wgbl6a",
        "xn--p1ai",
        "xn--mgberp4a5d4ar",
        "xn--mgberp4a5d4a87g",
        "xn--mgbqly7c0a67fbc",
        "xn--mgbqly7cvafr",
        "xn--90a3ac",
        "xn--yfro4i67o",
        "xn--clchc0ea0b2g2a9gcd",
        "xn--fzc2c9e2c",
        "xn--xkc2al3hye2a",
        "xn--mgbpl2fh",
        "xn--ogbpf8fl",
        "xn--mgbtf8fl",
        "xn--kpry57d",
        "xn--kprw13d",
        "xn--nnx388a",
        "xn--o3cw4h",
        "xn--pgbs0dh",
        "xn--j1amh",
        "xn--mgbaam7a8h",
        "xn--mgb2ddes",
        "xn--qxa6a",
        "xn--4dbrk0ce",
        "xn--wgv71a",
        "xn--vcst06ab2a",
        "xn--q7ce6a",
        "xn--mgbb7fyab",
    }
)

# Second-level labels accepted under a ccTLD (e.g. ``co.uk``, ``com.cn``).
# Counts are occurrences in the top 100k of the ranking.
ALLOWED_SLDS: frozenset[str] = frozenset(
    {
        "com",
        "edu",
        "gov",
        "mil",
        "net",
        "org",
        "co",  # common everywhere (1795)
        "ac",  # common everywhere (572)
        "go",  # govt for jp, kr, id, ke, th, tz (169)
        "gob",  # govt for mx, ar, ve, pe, es (134)
        "nic",  # govt for in (97)
        "or",  # common in jp, kr, id (64)
        "ne",  # common in jp (55)
        "gouv",  # govt for fr (32)
        "jus",  # govt for br (28)
        "gc",  # govt for ca (19)
        "lg",  # common in jp (15)
        "in",  # common in th (14)
        "govt",  # govt for nz (11)
        "gv",  # common in au (8)
        "spb",  # common in ru (6)
        "on",  # ontario, ca (6)
        "gen",  # common in tr (6)
        "res",  # common in in (6)
        "qc",  # quebec, ca (5)
        "kiev",  # kiev, ua (5)
        "fi",  # common in cr (4)
        "ab",  # alberta, ca (3)
        "dn",  # common in ua (3)
        "ed",  # common in ao and jp (3)
    }
)


def is_valid_name(name: str) -> bool:
    """Check *name* against the reserved-name charset and length rule."""
    if not name or len(name) > MAX_NAME_SIZE:
        return False
    if _NAME_CHARSET.fullmatch(name) is None:
        return False
    return _NAME_EDGES.search(name) is None


def is_cctld(label: str) -> bool:
    """Two-letter ASCII codes and the designated IDN country codes."""
    return (len(label) == 2 and label.isascii()) or label in ICCTLDS


def count_labels(fqdn: str) -> int:
    """Number of labels in a (possibly fully-qualified) domain name."""
    trimmed = fqdn.rstrip(".")
    if not trimmed:
        return 0
    return trimmed.count(".") + 1


def split_domain(domain: str) -> tuple[str, str]:
    """Split *domain* into its lowest-level label and the remainder."""
    name, _, rest = domain.partition(".")
    return name, rest
