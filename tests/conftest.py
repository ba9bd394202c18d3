"""Pytest configuration for test isolation.

Settings are read from ``MAPLE_DIARY_*`` environment variables and the CLI
loads a ``.env`` from the working directory. A developer's local environment
would otherwise leak into assertions about currency names or piece prices, so
every test starts from a clean environment and a fresh logging setup.
"""

# ruff: noqa: E402, I001
from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `maple_diary` is importable
_ROOT = Path(__file__).resolve().parents[1]
_PKG_DIR = _ROOT / "packages"
# Ensure `packages/` precedes the repo root on sys.path so local packages resolve first.
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from maple_diary.logging_setup import _reset_for_tests


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop ``MAPLE_DIARY_*`` variables and run from an empty directory."""

    for name in list(os.environ):
        if name.startswith("MAPLE_DIARY_"):
            monkeypatch.delenv(name, raising=False)
    # No stray .env is picked up by the CLI callback.
    monkeypatch.chdir(tmp_path)
    _reset_for_tests()
    yield
    _reset_for_tests()
