"""
Shared fixtures.

The app module builds its storage adapter at import time, so the
environment is pinned to the JSON backend in a throwaway directory
before anything imports `main`.
"""
import os
import sys
import tempfile

_TMP_DATA = tempfile.mkdtemp(prefix="pothole-pulse-tests-")
os.environ["STORAGE_BACKEND"] = "json"
os.environ["DATA_DIR"] = _TMP_DATA
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["SNAPSHOT_TTL_S"] = "15"

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

from adapters.json import JsonAdapter
from core import snapshot
from core.seed_local import sample_potholes, seed


@pytest.fixture(autouse=True)
def fresh_snapshot():
    snapshot.reset()
    yield
    snapshot.reset()


@pytest.fixture
def potholes():
    """The six demo defects as domain records."""
    return sample_potholes()


@pytest.fixture
def storage(tmp_path):
    """Seeded JSON adapter in a per-test directory."""
    adapter = JsonAdapter(str(tmp_path))
    seed(adapter)
    return adapter


@pytest.fixture
def client(storage, monkeypatch):
    from fastapi.testclient import TestClient

    import main

    monkeypatch.setattr(main, "storage_adapter", storage)
    with TestClient(main.app) as c:
        yield c
