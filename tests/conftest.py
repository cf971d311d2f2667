from __future__ import annotations

import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    """Ensure src/ is importable in tests."""
    repo_root = Path(__file__).resolve().parent.parent
    src = repo_root / "src"
    sys.path.insert(0, str(src))


@pytest.fixture
def clean_ghost_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset GHOST_* variables so defaults apply."""
    for name in (
        "GHOST_MAX_PER_MESSAGE",
        "GHOST_MAX_TEXT_LENGTH",
        "GHOST_OVERFLOW_POLICY",
        "GHOST_SEND_DELAY",
        "GHOST_CASCADE_DELAY",
        "GHOST_PREFIX",
        "GHOST_SUFFIX",
    ):
        monkeypatch.delenv(name, raising=False)
