"""BaseService: foundation for all namectl services.

Every service receives a :class:`Workspace` at construction time. The
Workspace resolves corpus and build paths and owns the all-or-nothing
artifact transaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from namectl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from namectl.domain.errors import CompilationError
    from namectl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CompileService(BaseService):
            def compile(self) -> ServiceResult:
                with self._workspace.transaction() as txn:
                    ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @staticmethod
    def _failure(
        op: str,
        exc: CompilationError,
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Convert a fatal compilation error into a failed result."""
        logger.error("%s failed: %s", op, exc.message)
        return ServiceResult(
            ok=False,
            op=op,
            warnings=warnings or [],
            error=ServiceError(code=exc.code, message=exc.message, detail=exc.detail),
        )
