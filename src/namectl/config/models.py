"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, namectl.toml only contains
overrides. The defaults reproduce the published reserved-name table.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from namectl.domain.allocation import EXPECTED_TOTAL, EXTRA_TOKENS, SHARE_TOKENS, UNIT
from namectl.domain.compiler import RANKED_COUNT
from namectl.domain.policy import STRICT_RANK

# --- namectl.toml sections ---


class CorpusConfig(BaseModel):
    """[corpus] section."""

    model_config = {"frozen": True}

    directory: str = "names"
    ranked_file: str = "alexa.json"
    ranked_count: int | None = RANKED_COUNT


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    directory: str = "build"


class PolicyConfig(BaseModel):
    """[policy] section."""

    model_config = {"frozen": True}

    strict_rank: int = STRICT_RANK


class AllocationConfig(BaseModel):
    """[allocation] section.

    ``expected_total`` pins the reconciled total (micro-units, extra value
    included). Set ``verify_total = false`` for synthetic corpora.
    """

    model_config = {"frozen": True}

    share_tokens: int = Field(default=SHARE_TOKENS, gt=0)
    extra_tokens: int = Field(default=EXTRA_TOKENS, ge=0)
    unit: int = Field(default=UNIT, gt=0)
    expected_total: int | None = EXPECTED_TOTAL
    verify_total: bool = True


class ZoneConfig(BaseModel):
    """[zone] section."""

    model_config = {"frozen": True}

    file: str = "data/root.zone"
