from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so the package imports uninstalled.
2. Isolates every test from the user's home directory and from state kept
   by the process-wide repository locator.
"""

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME (and LOCALAPPDATA) at a throwaway directory."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.setenv("LOCALAPPDATA", str(home))
    return home


@pytest.fixture(autouse=True)
def reset_repo_cache() -> Iterator[None]:
    """Clear the default locator's cached root before and after each test."""
    from cs01.core.repo_locator import reset_default_locator

    reset_default_locator()
    yield
    reset_default_locator()


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """An empty directory guaranteed to sit outside any repository."""
    d = tmp_path / "work"
    d.mkdir()
    return d
