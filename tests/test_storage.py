"""Tests for the SQLite generation store."""

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from verified_resume.errors import StorageError
from verified_resume.models.generation import GenerationRecord
from verified_resume.storage.generation_store import GenerationStore


@pytest.fixture
def store(tmp_path):
    return GenerationStore(tmp_path / "nested" / "gen.db")


def _record(generation_id: str, user_id: str = "anonymous", minutes: int = 0, **fields) -> GenerationRecord:
    created = datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=minutes)
    return GenerationRecord(generation_id=generation_id, user_id=user_id, created_at=created, **fields)


class TestGenerationStore:
    def test_creates_parent_directory(self, tmp_path):
        GenerationStore(tmp_path / "a" / "b" / "gen.db")
        assert (tmp_path / "a" / "b" / "gen.db").exists()

    def test_save_and_get(self, store, sample_tailored_resume):
        record = _record("gen_1_aaaaaaaaa", tailored_resume_json=sample_tailored_resume, truth_score=72)
        store.save(record)

        loaded = store.get("gen_1_aaaaaaaaa")
        assert loaded == record

    def test_get_missing(self, store):
        assert store.get("gen_missing") is None

    def test_duplicate_id_not_overwritten(self, store):
        store.save(_record("gen_1_aaaaaaaaa", truth_score=90))

        with pytest.raises(StorageError, match="already stored"):
            store.save(_record("gen_1_aaaaaaaaa", truth_score=10))

        assert store.get("gen_1_aaaaaaaaa").truth_score == 90

    def test_database_failure_is_storage_error(self, store):
        conn = sqlite3.connect(str(store.db_path))
        conn.execute("DROP TABLE generations")
        conn.commit()
        conn.close()

        with pytest.raises(StorageError, match="Could not store generation"):
            store.save(_record("gen_1_aaaaaaaaa"))

    def test_list_newest_first_per_user(self, store):
        store.save(_record("gen_old", "u1", minutes=0, truth_score=50))
        store.save(_record("gen_new", "u1", minutes=5, truth_score=80))
        store.save(_record("gen_other", "u2", minutes=10))

        rows = store.list_generations("u1")

        assert [r["generation_id"] for r in rows] == ["gen_new", "gen_old"]
        assert rows[0]["truth_score"] == 80
        assert rows[0]["flags_count"] == 0

    def test_list_pagination(self, store):
        for i in range(5):
            store.save(_record(f"gen_{i}", minutes=i))

        page = store.list_generations(limit=2, skip=1)

        assert [r["generation_id"] for r in page] == ["gen_3", "gen_2"]

    def test_count(self, store):
        store.save(_record("gen_a", "u1"))
        store.save(_record("gen_b", "u2"))

        assert store.count() == 2
        assert store.count("u1") == 1
        assert store.count("nobody") == 0
