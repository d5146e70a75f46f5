from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))
sys.path.insert(0, str(Path(__file__).resolve().parent))

from kitchen_fakes import InMemoryStore, seeded_store


@pytest.fixture
def store() -> InMemoryStore:
    return seeded_store()
