"""Tests for repositories.train_repo.TrainRepository."""

import threading

import pytest

from core.exceptions import DatabaseError
from repositories.train_repo import TrainRepository


@pytest.fixture
def populated(train_repo):
    train_repo.add("file-1", "alice", {"id": "asset-1", "status": "created"})
    train_repo.add("file-2", "bob", {"id": "asset-2"})
    train_repo.add("file-3", "carol", {"error": "No face found in image"})
    train_repo.add("file-4", "dave", None)
    return train_repo


def test_all_asset_ids_when_no_ids_given(populated):
    assert populated.asset_ids() == ["asset-1", "asset-2"]
    assert populated.asset_ids([]) == ["asset-1", "asset-2"]


def test_subset_by_file_id(populated):
    assert populated.asset_ids(["file-2"]) == ["asset-2"]


def test_missing_asset_ids_are_skipped(populated):
    assert populated.asset_ids(["file-1", "file-3", "file-4", "file-unknown"]) == ["asset-1"]


def test_schema_created_on_disk(tmp_path):
    repo = TrainRepository(str(tmp_path / "nested" / "store.db"))
    try:
        repo.add("file-1", "alice", {"id": "asset-1"})
        assert repo.asset_ids() == ["asset-1"]
    finally:
        repo.close()
    assert (tmp_path / "nested" / "store.db").exists()


def test_sqlite_errors_become_database_errors(train_repo):
    with pytest.raises(DatabaseError) as exc_info:
        train_repo._fetch("broken", "SELECT nope FROM missing_table")
    assert exc_info.value.details == {"operation": "train.broken"}


def test_concurrent_writers_keep_every_record(tmp_path):
    repo = TrainRepository(str(tmp_path / "store.db"))
    errors = []

    def worker(n):
        try:
            for i in range(50):
                repo.add(f"file-{n}-{i}", "alice", {"id": f"asset-{n}-{i}"})
                repo.asset_ids([f"file-{n}-{i}"])
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    try:
        assert errors == []
        ids = repo.asset_ids()
        assert len(ids) == 400
        assert len(set(ids)) == 400
    finally:
        repo.close()
