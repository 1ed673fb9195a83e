"""Tests for workspace paths and the all-or-nothing build transaction."""

from __future__ import annotations

from pathlib import Path

import pytest

from namectl.infrastructure.workspace import Workspace


class TestPaths:
    def test_layout(self, workspace: Workspace, workspace_root: Path) -> None:
        assert workspace.root == workspace_root
        assert workspace.corpus_dir == workspace_root / "names"
        assert workspace.build_path("names.db") == workspace_root / "build" / "names.db"

    def test_resolve(self, workspace: Workspace, workspace_root: Path) -> None:
        assert workspace.resolve("data/root.zone") == workspace_root / "data" / "root.zone"
        assert workspace.resolve("/abs/root.zone") == Path("/abs/root.zone")


class TestTransaction:
    def test_commit(self, workspace: Workspace) -> None:
        target = workspace.build_path("valid.json")
        with workspace.transaction() as txn:
            txn.write_text(target, "{\n}\n")
        assert target.read_text() == "{\n}\n"
        assert txn.written == [target]

    def test_rollback_restores_and_removes(self, workspace: Workspace) -> None:
        existing = workspace.build_path("valid.json")
        existing.parent.mkdir(parents=True)
        existing.write_bytes(b"old")
        created = workspace.build_path("names.db")

        with pytest.raises(RuntimeError), workspace.transaction() as txn:
            txn.write_bytes(existing, b"new")
            txn.write_bytes(created, b"db")
            raise RuntimeError("boom")

        assert existing.read_bytes() == b"old"
        assert not created.exists()
