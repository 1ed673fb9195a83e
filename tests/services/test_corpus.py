"""Tests for CorpusService imports."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from namectl.config.settings import NamectlSettings
from namectl.infrastructure.workspace import Workspace
from namectl.services.corpus import CorpusService


@pytest.fixture
def small(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Workspace:
    monkeypatch.delenv("NAMECTL_CONFIG", raising=False)
    (tmp_path / "namectl.toml").write_text("[corpus]\nranked_count = 3\n", encoding="utf-8")
    return Workspace(NamectlSettings.from_cli(workspace_root=tmp_path))


class TestImportWords:
    def test_filters_words(self, small: Workspace, tmp_path: Path) -> None:
        source = tmp_path / "words"
        source.write_text("hello\nworld\nHello\nit's\nhello\n", encoding="utf-8")
        result = CorpusService(small).import_words(source)
        assert result.ok
        assert result.data["count"] == 2
        assert json.loads(small.corpus_path("words.json").read_text()) == ["hello", "world"]

    def test_missing_source(self, small: Workspace, tmp_path: Path) -> None:
        result = CorpusService(small).import_words(tmp_path / "nope")
        assert result.error is not None
        assert result.error.code == "SOURCE_NOT_FOUND"


class TestImportRanked:
    def test_contiguous(self, small: Workspace, tmp_path: Path) -> None:
        source = tmp_path / "top.csv"
        source.write_text("1,google.com\n2,youtube.com\n3,Facebook.com\n", encoding="utf-8")
        result = CorpusService(small).import_ranked(source)
        assert result.ok, result.error
        assert result.warnings == []
        assert json.loads(small.corpus_path("alexa.json").read_text()) == [
            "google.com",
            "youtube.com",
            "facebook.com",
        ]

    def test_gaps_written_as_pairs(self, small: Workspace, tmp_path: Path) -> None:
        source = tmp_path / "top.csv"
        source.write_text("1,google.com\n2,youtube.com\n5,facebook.com\n", encoding="utf-8")
        result = CorpusService(small).import_ranked(source)
        assert result.ok
        assert len(result.warnings) == 1
        data = json.loads(small.corpus_path("alexa.json").read_text())
        assert data[-1] == [5, "facebook.com"]

    def test_wrong_count(self, small: Workspace, tmp_path: Path) -> None:
        source = tmp_path / "top.csv"
        source.write_text("1,google.com\n", encoding="utf-8")
        result = CorpusService(small).import_ranked(source)
        assert result.error is not None
        assert result.error.code == "CORPUS_INVALID"
        assert not small.corpus_path("alexa.json").exists()
