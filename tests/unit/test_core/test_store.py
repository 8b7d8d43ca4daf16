"""
test_store.py - RecordStore 테스트

검증 포인트:
1. 원자적 쓰기 (temp 파일 잔존 없음, 실패 시 원본 보존)
2. 락 타임아웃 → STORE_LOCK_TIMEOUT
3. 손상 JSON → RECORD_CORRUPT
4. 경로 조작 ID 거부
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from filelock import FileLock

from src.core.store import RecordStore, atomic_write_json, load_json
from src.domain.errors import InvalidRecordId, RecordNotFound, StoreError
from src.domain.schemas import UserProfile

# =============================================================================
# atomic_write_json
# =============================================================================


class TestAtomicWriteJson:

    def test_writes_json(self, tmp_path: Path):
        path = tmp_path / "nested" / "record.json"

        atomic_write_json(path, {"name": "홍길동"})

        assert json.loads(path.read_text(encoding="utf-8")) == {"name": "홍길동"}
        assert list(path.parent.glob("*.tmp")) == []

    def test_failure_keeps_original(self, tmp_path: Path):
        path = tmp_path / "record.json"
        atomic_write_json(path, {"v": 1})

        with patch("src.core.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                atomic_write_json(path, {"v": 2})

        assert load_json(path) == {"v": 1}
        assert list(tmp_path.glob("*.tmp")) == []

    def test_corrupt_json(self, tmp_path: Path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(StoreError) as exc_info:
            load_json(path)

        assert exc_info.value.code == "RECORD_CORRUPT"


# =============================================================================
# RecordStore
# =============================================================================


class TestRecordStore:

    def test_profile_roundtrip(self, store: RecordStore):
        store.save_profile(UserProfile(user_id="u1", industry="finance", skills=["Excel"]))

        profile = store.get_profile("u1")

        assert profile.industry == "finance"
        assert profile.skills == ["Excel"]
        assert profile.experience is None

    def test_missing_profile(self, store: RecordStore):
        with pytest.raises(RecordNotFound) as exc_info:
            store.get_profile("nobody")

        assert exc_info.value.code == "USER_NOT_FOUND"

    @pytest.mark.parametrize("bad_id", ["../etc", "a/b", "", "x y"])
    def test_rejects_unsafe_ids(self, store: RecordStore, bad_id: str):
        with pytest.raises(StoreError) as exc_info:
            store.get_resume(bad_id)

        assert exc_info.value.code == "INVALID_RECORD_ID"
        assert isinstance(exc_info.value, InvalidRecordId)

    def test_resume_upsert_keeps_created_at(self, store: RecordStore):
        first = store.save_resume("u1", "v1")
        second = store.save_resume("u1", "v2")

        assert second["created_at"] == first["created_at"]
        assert store.get_resume("u1")["content"] == "v2"

    def test_get_resume_missing(self, store: RecordStore):
        assert store.get_resume("u1") is None

    def test_assessments_oldest_first(self, store: RecordStore):
        store.add_assessment({"id": "ASM-2", "user_id": "u1", "created_at": "2024-02-01"})
        store.add_assessment({"id": "ASM-1", "user_id": "u1", "created_at": "2024-01-01"})

        ids = [r["id"] for r in store.list_assessments("u1")]

        assert ids == ["ASM-1", "ASM-2"]

    def test_cover_letters_are_per_user(self, store: RecordStore):
        store.add_cover_letter({"id": "CL-1", "user_id": "u1", "created_at": "1"})
        store.add_cover_letter({"id": "CL-2", "user_id": "u2", "created_at": "1"})

        assert [r["id"] for r in store.list_cover_letters("u1")] == ["CL-1"]
        assert store.get_cover_letter("u2", "CL-1") is None
        assert store.delete_cover_letter("u2", "CL-1") is False

    def test_insights_keyed_by_industry(self, store: RecordStore):
        store.save_insights("Tech / Software", {"growthRate": 3})
        store.save_insights("Finance", {"growthRate": 1})

        assert store.get_insights("Tech / Software")["growthRate"] == 3
        assert store.get_insights("unknown") is None
        assert sorted(store.list_industries()) == ["Finance", "Tech / Software"]

    def test_lock_timeout(self, store: RecordStore, monkeypatch):
        monkeypatch.setattr(RecordStore, "LOCK_TIMEOUT", 0.05)
        relative = Path("users") / "u1.json"
        lock_path = store.root / ".locks" / "users__u1.json.lock"
        lock_path.parent.mkdir(parents=True)

        holder = FileLock(lock_path)
        holder.acquire()
        try:
            with pytest.raises(StoreError) as exc_info:
                store.write(relative, {"user_id": "u1"})
        finally:
            holder.release()

        assert exc_info.value.code == "STORE_LOCK_TIMEOUT"
