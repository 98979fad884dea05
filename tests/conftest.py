"""Shared fixtures for the test suite."""

import pytest


@pytest.fixture
def write_sdku(tmp_path):
    """Write .sdku text to a file under tmp_path and return its path."""
    def _write(text: str, name: str = "puzzle.sdku"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write
