"""Result envelope shared by the compile, lookup, zone, corpus and keys services.

INVARIANT: Every public service method returns a ServiceResult.
Fatal compilation errors are converted to ``ok=False`` results carrying
the error's machine code; they never escape the service layer.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Failure payload: a machine code (``CORPUS_INVALID``, ``NOT_FOUND``, ...) plus context."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one namectl operation, rendered by the CLI in the selected output mode.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"compile"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (telemetry span tree in verbose mode).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None
