"""Workspace: corpus and build directories with all-or-nothing artifact writes.

The Workspace is the single dependency injected into every service. It
resolves the corpus, build and data paths from settings, and its
:meth:`transaction` context manager tracks every artifact write so that
a failed run leaves the previous build untouched:

- Newly created files are deleted on rollback.
- Overwritten files are restored from an in-memory backup.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

    from namectl.config.settings import NamectlSettings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# File operation tracking for compensation-based rollback
# ---------------------------------------------------------------------------


@dataclass
class _FileOp:
    """A tracked artifact write within a build transaction."""

    path: Path
    backup: bytes | None  # previous content, None if the file was created

    def rollback(self) -> None:
        """Undo this write (best-effort)."""
        try:
            if self.backup is not None:
                self.path.write_bytes(self.backup)
            else:
                self.path.unlink(missing_ok=True)
        except OSError:
            logger.warning("Failed to rollback artifact write: %s", self.path)


@dataclass
class BuildTransaction:
    """Active transaction; all artifact writes go through :meth:`write_bytes`."""

    _file_ops: list[_FileOp] = field(default_factory=list, repr=False)
    written: list[Path] = field(default_factory=list)

    def write_bytes(self, path: Path, content: bytes) -> None:
        backup: bytes | None = None
        if path.exists():
            backup = path.read_bytes()

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        self._file_ops.append(_FileOp(path=path, backup=backup))
        self.written.append(path)

    def write_text(self, path: Path, content: str) -> None:
        self.write_bytes(path, content.encode("utf-8"))


# ---------------------------------------------------------------------------
# Workspace
# ---------------------------------------------------------------------------


class Workspace:
    """Resolved directory layout for one compiler workspace.

    Constructed lazily by the CLI from :class:`NamectlSettings`. Services
    receive it via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: NamectlSettings) -> None:
        self._settings = settings

    @property
    def settings(self) -> NamectlSettings:
        return self._settings

    @property
    def root(self) -> Path:
        """The workspace root directory."""
        return self._settings.workspace_root

    @property
    def corpus_dir(self) -> Path:
        return self.root / self._settings.corpus.directory

    @property
    def build_dir(self) -> Path:
        return self.root / self._settings.build.directory

    def corpus_path(self, filename: str) -> Path:
        return self.corpus_dir / filename

    def build_path(self, filename: str) -> Path:
        return self.build_dir / filename

    def resolve(self, path: str | Path) -> Path:
        """Resolve a user-supplied path relative to the workspace root."""
        p = Path(path)
        return p if p.is_absolute() else self.root / p

    def read_json(self, path: Path) -> Any:
        return json.loads(path.read_text(encoding="utf-8"))

    @contextmanager
    def transaction(self) -> Iterator[BuildTransaction]:
        """Track artifact writes; undo all of them if the block raises.

        Usage::

            with workspace.transaction() as txn:
                txn.write_text(workspace.build_path("valid.json"), text)
                txn.write_bytes(workspace.build_path("names.db"), raw)
        """
        txn = BuildTransaction()
        try:
            yield txn
        except BaseException:
            for op in reversed(txn._file_ops):
                op.rollback()
            raise
