"""Fatal compilation errors.

INVARIANT: A fatal error means the corpus itself is inconsistent.
Per-candidate rejections are never raised; they are recorded as
:class:`~namectl.domain.models.InvalidRecord` rows instead.
"""

from __future__ import annotations

from typing import Any


class CompilationError(Exception):
    """Base class for conditions that abort a compilation run.

    Attributes:
        code: Machine-readable error code surfaced in ``ServiceError.code``.
        detail: Extra context for ``--verbose`` error rendering.
    """

    code = "COMPILATION_FAILED"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class CorpusError(CompilationError):
    """Input corpus is malformed (size, ordering, shape)."""

    code = "CORPUS_INVALID"


class InvariantViolation(CompilationError):
    """A numeric or structural invariant failed after a stage completed."""

    code = "INVARIANT_VIOLATION"
