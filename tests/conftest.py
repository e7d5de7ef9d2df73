from __future__ import annotations

import os
import tempfile

# Must be set before azkar.config resolves its paths.
os.environ.setdefault("AZKAR_DATA_DIR", tempfile.mkdtemp(prefix="azkar-test-"))

import pytest

from azkar.models import SchedulerState
from azkar.store import StateStore

TODAY = "2026-10-17"


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "azkar_data.json"


@pytest.fixture
def store(data_file) -> StateStore:
    return StateStore(data_file, SchedulerState.default(TODAY))
