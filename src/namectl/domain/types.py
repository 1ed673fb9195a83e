"""Classification enums for candidates, rejections, and database flags."""

from __future__ import annotations

from enum import IntFlag, StrEnum


class SourceClass(StrEnum):
    """Where a candidate came from, in precedence order (highest first)."""

    CUSTOM = "custom"
    TRADEMARK = "trademark"
    ROOT = "root"
    RANKED = "ranked"


class RejectReason(StrEnum):
    """Why a candidate did not make it into the name table."""

    BLACKLIST = "blacklist"
    COLLISION = "collision"
    PLAIN_WWW = "plain-www"
    DEEPLY_NESTED = "deeply-nested"
    INVALID_CHARSET = "invalid-charset"
    ONE_LETTER = "one-letter"
    TWO_LETTER = "two-letter"
    ENGLISH_WORD = "english-word"


class NameFlags(IntFlag):
    """Per-record flag byte stored in the name database."""

    NONE = 0
    ROOT = 1
    EMBARGOED = 2
    CUSTOM_VALUE = 4


# Rank sentinels for the non-ranked source classes.
CUSTOM_RANK = -2
TRADEMARK_RANK = -1
ROOT_RANK = 0

SOURCE_RANKS: dict[SourceClass, int] = {
    SourceClass.CUSTOM: CUSTOM_RANK,
    SourceClass.TRADEMARK: TRADEMARK_RANK,
    SourceClass.ROOT: ROOT_RANK,
}
