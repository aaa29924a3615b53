"""Shared test fixtures for lsai tests."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from langchain_core.messages import AIMessage

from tools.dir_summary.models import DirectoryEntry, EntryKind

ENV_VARS = (
    "LLM_BACKEND",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "OPENAI_BASE_URL",
    "OLLAMA_MODEL",
    "LSAI_MAX_OUTPUT_TOKENS",
    "LSAI_RESPONSE_LANGUAGE",
    "DISABLED_TOOLS",
)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Clear lsai configuration, run from a temporary directory and log there."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LSAI_LOG_DIR", str(tmp_path / "logs"))
    # Keep .env files near the real working directory out of the CLI tests
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler changes made by setup_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)


def file_entry(name: str, size: int | None = 0) -> DirectoryEntry:
    """Build a file entry the way the collector would."""
    from tools.dir_summary.collect_dir import extension_of

    return DirectoryEntry(
        name=name,
        kind=EntryKind.FILE,
        extension=extension_of(name),
        size_bytes=size,
        is_hidden=name.startswith("."),
    )


def dir_entry(name: str) -> DirectoryEntry:
    """Build a directory entry the way the collector would."""
    return DirectoryEntry(name=name, kind=EntryKind.DIRECTORY, is_hidden=name.startswith("."))


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Directory with README.md (10 B), Cargo.toml (5 B), .env (0 B) and a .git directory."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "README.md").write_bytes(b"0123456789")
    (root / "Cargo.toml").write_bytes(b"[pkg]")
    (root / ".env").write_bytes(b"")
    (root / ".git").mkdir()
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
    return root


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    root = tmp_path / "empty"
    root.mkdir()
    return root


class FakeChatModel:
    """Chat model stand-in recording the messages it receives."""

    def __init__(self, content="This looks like a Rust crate.", error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls = []

    async def ainvoke(self, messages):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content)


@pytest.fixture
def fake_llm() -> FakeChatModel:
    return FakeChatModel()
