"""Shared fixtures for the show configuration tests."""
from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.tests.fake_tmdb import PREVIOUS_CONFIG, FakeTMDB  # noqa: E402


@pytest.fixture()
def fake_tmdb() -> FakeTMDB:
    return FakeTMDB()


@pytest.fixture()
def previous_config_path(tmp_path: Path) -> Path:
    path = tmp_path / "previous.json"
    path.write_text(json.dumps(PREVIOUS_CONFIG), encoding="utf-8")
    return path
