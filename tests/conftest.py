"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from a temp directory so no stray cacheprime.yml is found."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Return a (not yet created) data directory path."""
    return tmp_path / "data"


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a cacheprime.yml into tmp_path and return its path."""

    def _write(content: str, name: str = "cacheprime.yml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
