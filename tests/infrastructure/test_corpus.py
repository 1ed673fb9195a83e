"""Tests for corpus loading and raw-source import."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from namectl.domain.errors import CorpusError
from namectl.infrastructure.corpus import (
    check_ranks,
    load_corpus,
    read_ranked_csv,
    read_words,
    render_ranked,
)


def _write(directory: Path, filename: str, data: object) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    (directory / filename).write_text(json.dumps(data), encoding="utf-8")


@pytest.fixture
def minimal(tmp_path: Path) -> Path:
    _write(tmp_path, "rtld.json", ["com"])
    _write(tmp_path, "alexa.json", ["google.com"])
    return tmp_path


class TestLoadCorpus:
    def test_synthetic_corpus(self, workspace_root: Path) -> None:
        corpus = load_corpus(workspace_root / "names")
        assert corpus.custom == (("handshake", "handshake.org"),)
        assert corpus.trademarks[0] == ("nike", "nike.com")
        assert corpus.ranked[0] == (1, "google.com")
        assert corpus.ranked[-1] == (15, "amazon.com")
        assert corpus.values == {"handshake.org": 1000}
        assert "hello" in corpus.words

    def test_optional_files_default_empty(self, minimal: Path) -> None:
        corpus = load_corpus(minimal)
        assert corpus.blacklist == frozenset()
        assert corpus.custom == ()
        assert corpus.values == {}

    def test_missing_roots(self, minimal: Path) -> None:
        (minimal / "rtld.json").unlink()
        with pytest.raises(CorpusError, match="Missing corpus file"):
            load_corpus(minimal)

    def test_missing_ranked(self, minimal: Path) -> None:
        with pytest.raises(CorpusError, match="Missing ranked corpus"):
            load_corpus(minimal, ranked_file="top.json")

    def test_invalid_json(self, minimal: Path) -> None:
        (minimal / "custom.json").write_text("[", encoding="utf-8")
        with pytest.raises(CorpusError, match="Invalid JSON"):
            load_corpus(minimal)

    @pytest.mark.parametrize(
        ("filename", "data"),
        [
            ("custom.json", [["foo"]]),
            ("trademarks.json", {"foo": "foo.com"}),
            ("blacklist.json", [1, 2]),
            ("values.json", [["foo.com", -1]]),
            ("values.json", [["foo.com", 1], ["foo.com", 2]]),
            ("values.json", 5),
            ("alexa.json", [["google.com", 1]]),
        ],
    )
    def test_malformed(self, minimal: Path, filename: str, data: object) -> None:
        _write(minimal, filename, data)
        with pytest.raises(CorpusError):
            load_corpus(minimal)

    def test_values_as_pairs(self, minimal: Path) -> None:
        _write(minimal, "values.json", [["foo.com", 3]])
        assert load_corpus(minimal).values == {"foo.com": 3}

    def test_explicit_ranks(self, minimal: Path) -> None:
        _write(minimal, "alexa.json", [[1, "google.com"], [3, "youtube.com"]])
        assert load_corpus(minimal).ranked == ((1, "google.com"), (3, "youtube.com"))


class TestCheckRanks:
    def test_gap_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="namectl"):
            ranked = check_ranks([(1, "a.com"), (4, "b.com")], "top.csv")
        assert ranked == [(1, "a.com"), (4, "b.com")]
        assert "rank gap 2..3" in caplog.text

    @pytest.mark.parametrize("pairs", [[(1, "a.com"), (1, "b.com")], [(2, "a.com"), (1, "b.com")]])
    def test_backward_is_fatal(self, pairs: list[tuple[int, str]]) -> None:
        with pytest.raises(CorpusError, match="moves backward"):
            check_ranks(pairs, "top.csv")


class TestImport:
    def test_read_ranked_csv(self, tmp_path: Path) -> None:
        path = tmp_path / "top.csv"
        path.write_text("1,Google.com\n2 , youtube.com\n\n3,facebook.com\n", encoding="utf-8")
        assert read_ranked_csv(path, expected_count=3) == [
            (1, "google.com"),
            (2, "youtube.com"),
            (3, "facebook.com"),
        ]

    def test_read_ranked_csv_count(self, tmp_path: Path) -> None:
        path = tmp_path / "top.csv"
        path.write_text("1,google.com\n", encoding="utf-8")
        with pytest.raises(CorpusError, match="expected 2"):
            read_ranked_csv(path, expected_count=2)

    def test_read_ranked_csv_bad_line(self, tmp_path: Path) -> None:
        path = tmp_path / "top.csv"
        path.write_text("1,google.com\ntwo,youtube.com\n", encoding="utf-8")
        with pytest.raises(CorpusError, match="top.csv:2"):
            read_ranked_csv(path, expected_count=None)

    def test_render_ranked(self) -> None:
        assert render_ranked([(1, "a.com"), (2, "b.com")]) == ["a.com", "b.com"]
        assert render_ranked([(1, "a.com"), (3, "b.com")]) == [[1, "a.com"], [3, "b.com"]]

    def test_read_words(self, tmp_path: Path) -> None:
        path = tmp_path / "words"
        path.write_text("hello\nHello\nworld\nhello\ndon't\n\n-dash\n", encoding="utf-8")
        assert read_words(path) == ["hello", "world"]
