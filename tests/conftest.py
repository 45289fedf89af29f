from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TERMASSIST_DATA_DIR", "TERMASSIST_HOME", "TERMASSIST_TICK_INTERVAL_MS", "TERMASSIST_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"
