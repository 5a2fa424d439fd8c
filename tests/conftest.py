"""Shared pytest fixtures for scical tests."""

from pathlib import Path

import pytest

from scical.core.expression_lang.evaluator import FactorialCache
from scical.core.settings import SETTINGS_FILENAME


@pytest.fixture
def factorial_cache() -> FactorialCache:
    """A fresh cache, so tests never observe each other's entries."""
    return FactorialCache()


@pytest.fixture
def settings_file(tmp_path: Path):
    """Return a helper that writes scical.toml into tmp_path."""

    def write(content: str) -> Path:
        path = tmp_path / SETTINGS_FILENAME
        path.write_text(content, encoding="utf-8")
        return path

    return write
