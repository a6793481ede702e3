"""
Tests for the cached pothole list.

Run with: pytest tests/test_snapshot.py -v
"""
import pytest

from adapters import StorageError
from core import snapshot
from core.lifecycle import advance


class CountingStorage:
    def __init__(self, rows):
        self.rows = rows
        self.calls = 0

    def list_potholes(self):
        self.calls += 1
        return list(self.rows)


@pytest.fixture
def counting(potholes):
    return CountingStorage([p.to_storage() for p in potholes])


class TestSnapshot:
    def test_second_read_is_served_from_cache(self, counting):
        first = snapshot.load_potholes(counting)
        second = snapshot.load_potholes(counting)
        assert counting.calls == 1
        assert [p.id for p in first] == [p.id for p in second]
        assert snapshot.stats == {"hits": 1, "misses": 1}

    def test_invalidate_forces_reload(self, counting):
        snapshot.load_potholes(counting)
        snapshot.invalidate()
        snapshot.load_potholes(counting)
        assert counting.calls == 2

    def test_patch_replaces_record_in_place(self, counting):
        loaded = snapshot.load_potholes(counting)
        moved = advance(loaded[0])
        snapshot.patch_pothole(moved)
        again = snapshot.load_potholes(counting)
        assert again[0].status == moved.status
        assert [p.id for p in again] == [p.id for p in loaded]
        assert counting.calls == 1

    def test_patch_without_snapshot_is_noop(self, potholes):
        snapshot.patch_pothole(potholes[0])

    def test_invalid_rows_skipped(self, counting):
        counting.rows.append({"id": "x", "severity": "nope", "status": "reported"})
        counting.rows.append({"id": "y", "severity": "low", "status": "reported", "latitude": 123})
        assert len(snapshot.load_potholes(counting)) == 6

    def test_storage_error_propagates(self):
        class Broken:
            def list_potholes(self):
                raise StorageError("down")

        with pytest.raises(StorageError):
            snapshot.load_potholes(Broken())

    def test_zero_ttl_disables_cache(self, counting, monkeypatch):
        import settings

        monkeypatch.setattr(settings.get_settings(), "snapshot_ttl_s", 0)
        snapshot.reset()
        snapshot.load_potholes(counting)
        snapshot.load_potholes(counting)
        assert counting.calls == 2
