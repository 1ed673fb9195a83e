"""Shared pytest fixtures for namectl tests.

The synthetic corpus below exercises every rejection reason and every
precedence class while staying small enough to reason about by hand:

    accepted  22 = 1 custom + 2 trademarks + 14 roots + 5 ranked
    rejected  10 (see RANKED)
"""

from __future__ import annotations

import json
import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from namectl.config.settings import NamectlSettings
from namectl.domain.allocation import EMBARGOES
from namectl.infrastructure.workspace import Workspace
from namectl.services.telemetry import _current_span, disable_telemetry

ROOTS: list[str] = ["com", "io", "net", "org", "uk", *sorted(EMBARGOES)]

# (rank, domain) -> outcome with strict_rank = 10
RANKED: list[str] = [
    "google.com",  # 1  accepted
    "youtube.com",  # 2  accepted
    "www.facebook.com",  # 3  accepted as facebook
    "x.com",  # 4  one-letter
    "github.com",  # 5  collision with the trademark
    "test.com",  # 6  blacklist
    "foo.bar.com",  # 7  deeply-nested
    "bbc.co.uk",  # 8  accepted, tld co.uk
    "google.co.uk",  # 9  collision with rank 1
    "www.com",  # 10 plain-www
    "com.net",  # 11 collision with the root
    "hello.com",  # 12 english-word
    "ab.com",  # 13 two-letter
    "bad_.com",  # 14 invalid-charset
    "amazon.com",  # 15 accepted
]

CORPUS: dict[str, Any] = {
    "blacklist.json": ["test", "localhost", "example"],
    "custom.json": [["handshake", "handshake.org"]],
    "trademarks.json": [["nike", "nike.com"], ["github", "github.com"]],
    "rtld.json": ROOTS,
    "words.json": ["hello", "world"],
    "values.json": {"handshake.org": 1000},
    "alexa.json": RANKED,
}

CONFIG = f"""\
[corpus]
ranked_count = {len(RANKED)}

[policy]
strict_rank = 10

[allocation]
verify_total = false
"""


def write_corpus(root: Path, **overrides: Any) -> Path:
    """Write the synthetic corpus under ``root/names``.

    Keyword overrides replace a file's content (``alexa_json=[...]``);
    passing None removes the file.
    """
    directory = root / "names"
    directory.mkdir(parents=True, exist_ok=True)
    files = dict(CORPUS)
    for key, value in overrides.items():
        files[key.replace("_json", ".json")] = value
    for filename, content in files.items():
        path = directory / filename
        if content is None:
            path.unlink(missing_ok=True)
        else:
            path.write_text(json.dumps(content, indent=2) + "\n", encoding="utf-8")
    return directory


@pytest.fixture(autouse=True)
def _reset_global_state() -> Generator[None]:
    """Undo the logging and telemetry setup a CLI invocation leaves behind."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("namectl").setLevel(logging.NOTSET)
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def workspace_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary workspace holding namectl.toml and the synthetic corpus."""
    monkeypatch.delenv("NAMECTL_CONFIG", raising=False)
    (tmp_path / "namectl.toml").write_text(CONFIG, encoding="utf-8")
    write_corpus(tmp_path)
    return tmp_path


@pytest.fixture
def workspace(workspace_root: Path) -> Workspace:
    """Workspace over the synthetic corpus."""
    return Workspace(NamectlSettings.from_cli(workspace_root=workspace_root))


@pytest.fixture
def compiled(workspace: Workspace) -> Workspace:
    """Workspace whose build directory holds a successful compile."""
    from namectl.services.compile import CompileService

    result = CompileService(workspace).compile()
    assert result.ok, result.error
    return workspace


@pytest.fixture
def _isolated_workspace(workspace_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the workspace root so the CLI discovers namectl.toml.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.chdir(workspace_root)


@pytest.fixture
def corpus_writer() -> Any:
    """The :func:`write_corpus` helper, for tests that reshape the corpus."""
    return write_corpus
