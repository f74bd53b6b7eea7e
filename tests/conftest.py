"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from release_prep.models import ReleaseConfig

CARGO_TOML = """\
[package]
name = "rash"
version = "1.2.3"
edition = "2021"

[dependencies]
rash_core = { path = "rash_core", version = "1.2.3" }
"""


@pytest.fixture
def repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory that looks like a repo root with a Cargo.toml."""
    (tmp_path / ".git").mkdir()
    (tmp_path / "Cargo.toml").write_text(CARGO_TOML)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def config() -> ReleaseConfig:
    """Default configuration with a fixed editor."""
    return ReleaseConfig(editor="vim")
