"""
레코드 저장소: JSON 문서 파일.

규칙:
- 레코드 1개 = JSON 파일 1개 (스키마 설계 없음)
- 원자적 쓰기: temp → rename + fsync
- 레코드별 파일 락 (filelock): 동시 수정 방지
- 경로 조작 방지: user_id / record_id는 안전 문자만 허용

파일시스템 안정성 (best-effort):
- fsync 실패 시 경고 남기고 계속 진행
"""

import json
import logging
import os
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout

from src.core.ids import industry_slug, is_safe_id
from src.domain.constants import (
    ASSESSMENTS_DIR,
    COVER_LETTERS_DIR,
    INSIGHTS_DIR,
    LOCKS_DIR,
    RESUMES_DIR,
    USERS_DIR,
)
from src.domain.errors import (
    ErrorCodes,
    InvalidRecordId,
    RecordNotFound,
    StoreError,
)
from src.domain.schemas import UserProfile

logger = logging.getLogger(__name__)


# =============================================================================
# Atomic Write
# =============================================================================


def _fsync_dir(dir_path: Path) -> None:
    """rename 결과(디렉토리 엔트리) 동기화. 미지원 환경은 경고만."""
    try:
        dir_fd = os.open(dir_path, os.O_RDONLY | os.O_DIRECTORY)
    except (OSError, AttributeError) as e:
        logger.warning(f"Cannot open {dir_path} for fsync: {e}")
        return
    try:
        os.fsync(dir_fd)
    except OSError as e:
        logger.warning(f"Directory fsync failed for {dir_path}: {e}")
    finally:
        os.close(dir_fd)


def atomic_write_json(path: Path, data: dict) -> None:
    """
    레코드 파일 교체 (같은 디렉토리 temp 파일 → os.replace).

    실패하면 temp 파일을 지우고 기존 레코드는 그대로 둔다.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f"{path.stem}-", suffix=".tmp"
    )
    temp_path = Path(temp_name)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise

    _fsync_dir(path.parent)


def load_json(path: Path) -> dict[str, Any]:
    """
    JSON 레코드 로드.

    Raises:
        StoreError: RECORD_CORRUPT (JSON 파싱 실패)
    """
    try:
        data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
        return data
    except json.JSONDecodeError as e:
        raise StoreError(
            ErrorCodes.RECORD_CORRUPT,
            path=str(path),
            error=str(e),
        ) from e


def _now() -> str:
    return datetime.now(UTC).isoformat()


# =============================================================================
# Record Store
# =============================================================================


class RecordStore:
    """
    유저별 레코드 저장소.

    Usage:
        store = RecordStore(Path("data"))
        store.save_profile(UserProfile(user_id="u1", industry="tech"))
        letters = store.list_cover_letters("u1")
    """

    # 락 획득 대기 시간 (초)
    LOCK_TIMEOUT = 10.0

    def __init__(self, root: Path):
        self.root = Path(root)
        self._locks_dir = self.root / LOCKS_DIR

    # =========================================================================
    # Low-level
    # =========================================================================

    @contextmanager
    def _record_lock(self, relative: Path) -> Generator[None, None, None]:
        """
        레코드별 락 획득.

        Raises:
            StoreError: STORE_LOCK_TIMEOUT
        """
        self._locks_dir.mkdir(parents=True, exist_ok=True)
        lock_name = "__".join(relative.parts)
        lock = FileLock(self._locks_dir / f"{lock_name}.lock", timeout=self.LOCK_TIMEOUT)

        try:
            lock.acquire()
        except Timeout as e:
            raise StoreError(
                ErrorCodes.STORE_LOCK_TIMEOUT,
                record=relative.as_posix(),
                timeout=self.LOCK_TIMEOUT,
            ) from e
        try:
            yield
        finally:
            lock.release()

    def _check_id(self, value: str) -> str:
        if not is_safe_id(value):
            raise InvalidRecordId(ErrorCodes.INVALID_RECORD_ID, value=value)
        return value

    def read(self, relative: Path) -> dict[str, Any] | None:
        """레코드 읽기. 없으면 None."""
        path = self.root / relative
        if not path.exists():
            return None
        return load_json(path)

    def write(self, relative: Path, data: dict[str, Any]) -> dict[str, Any]:
        """레코드 쓰기 (락 + 원자적)."""
        with self._record_lock(relative):
            atomic_write_json(self.root / relative, data)
        return data

    def delete(self, relative: Path) -> bool:
        """레코드 삭제. 삭제했으면 True."""
        with self._record_lock(relative):
            path = self.root / relative
            if not path.exists():
                return False
            path.unlink()
            return True

    def list_dir(self, relative_dir: Path) -> list[dict[str, Any]]:
        """디렉토리 내 모든 레코드."""
        dir_path = self.root / relative_dir
        if not dir_path.exists():
            return []
        return [load_json(p) for p in sorted(dir_path.glob("*.json"))]

    # =========================================================================
    # Users
    # =========================================================================

    def save_profile(self, profile: UserProfile) -> UserProfile:
        user_id = self._check_id(profile.user_id)
        self.write(Path(USERS_DIR) / f"{user_id}.json", profile.to_dict())
        return profile

    def get_profile(self, user_id: str) -> UserProfile:
        """
        유저 프로필 조회.

        Raises:
            RecordNotFound: USER_NOT_FOUND
        """
        data = self.read(Path(USERS_DIR) / f"{self._check_id(user_id)}.json")
        if data is None:
            raise RecordNotFound(ErrorCodes.USER_NOT_FOUND, user_id=user_id)
        return UserProfile.from_dict(data)

    # =========================================================================
    # Resumes
    # =========================================================================

    def save_resume(self, user_id: str, content: str) -> dict[str, Any]:
        """이력서 upsert (유저당 1개)."""
        relative = Path(RESUMES_DIR) / f"{self._check_id(user_id)}.json"
        existing = self.read(relative) or {}
        now = _now()
        record = {
            "user_id": user_id,
            "content": content,
            "created_at": existing.get("created_at", now),
            "updated_at": now,
        }
        return self.write(relative, record)

    def get_resume(self, user_id: str) -> dict[str, Any] | None:
        return self.read(Path(RESUMES_DIR) / f"{self._check_id(user_id)}.json")

    # =========================================================================
    # Cover Letters
    # =========================================================================

    def add_cover_letter(self, record: dict[str, Any]) -> dict[str, Any]:
        user_id = self._check_id(record["user_id"])
        record_id = self._check_id(record["id"])
        return self.write(
            Path(COVER_LETTERS_DIR) / user_id / f"{record_id}.json", record
        )

    def list_cover_letters(self, user_id: str) -> list[dict[str, Any]]:
        """커버레터 목록 (최신순)."""
        records = self.list_dir(Path(COVER_LETTERS_DIR) / self._check_id(user_id))
        records.sort(key=lambda r: r.get("created_at", ""), reverse=True)
        return records

    def get_cover_letter(self, user_id: str, record_id: str) -> dict[str, Any] | None:
        return self.read(
            Path(COVER_LETTERS_DIR)
            / self._check_id(user_id)
            / f"{self._check_id(record_id)}.json"
        )

    def delete_cover_letter(self, user_id: str, record_id: str) -> bool:
        return self.delete(
            Path(COVER_LETTERS_DIR)
            / self._check_id(user_id)
            / f"{self._check_id(record_id)}.json"
        )

    # =========================================================================
    # Assessments
    # =========================================================================

    def add_assessment(self, record: dict[str, Any]) -> dict[str, Any]:
        user_id = self._check_id(record["user_id"])
        record_id = self._check_id(record["id"])
        return self.write(
            Path(ASSESSMENTS_DIR) / user_id / f"{record_id}.json", record
        )

    def list_assessments(self, user_id: str) -> list[dict[str, Any]]:
        """평가 목록 (오래된 순)."""
        records = self.list_dir(Path(ASSESSMENTS_DIR) / self._check_id(user_id))
        records.sort(key=lambda r: r.get("created_at", ""))
        return records

    # =========================================================================
    # Industry Insights
    # =========================================================================

    def save_insights(self, industry: str, record: dict[str, Any]) -> dict[str, Any]:
        return self.write(
            Path(INSIGHTS_DIR) / f"{industry_slug(industry)}.json",
            {**record, "industry": industry},
        )

    def get_insights(self, industry: str) -> dict[str, Any] | None:
        return self.read(Path(INSIGHTS_DIR) / f"{industry_slug(industry)}.json")

    def list_industries(self) -> list[str]:
        """저장된 인사이트의 산업명 목록."""
        return [r["industry"] for r in self.list_dir(Path(INSIGHTS_DIR)) if "industry" in r]
