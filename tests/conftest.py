"""Shared test fixtures."""

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def opera_manifest_path() -> Path:
    return FIXTURES_DIR / "cookbook-0026-opera-toc.json"


@pytest.fixture
def opera_manifest(opera_manifest_path: Path) -> dict:
    return json.loads(opera_manifest_path.read_text(encoding="utf-8"))


@pytest.fixture
def multi_canvas_manifest() -> dict:
    path = FIXTURES_DIR / "cookbook-0065-opera-multi-canvas.json"
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.fixture
def oral_history_vtt_path() -> Path:
    return FIXTURES_DIR / "oral-history.vtt"
