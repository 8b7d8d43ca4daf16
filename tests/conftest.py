"""
Pytest fixtures for the action layer tests.

테스트 구성:
- 백엔드는 AsyncMock (실제 API 호출 없음)
- rate limit 대기는 AsyncMock sleep으로 기록만
- 저장소는 tmp_path 기반 RecordStore
"""

import json
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import yaml

from src.app.providers.base import TextBackend
from src.app.services.generator import ResilientTextGenerator
from src.core.store import RecordStore
from src.domain.errors import BackendError
from src.domain.schemas import UserProfile

# =============================================================================
# Helpers
# =============================================================================


def build_rate_limit_error(retry_delay: str | None = "2s") -> BackendError:
    """429 + RetryInfo를 담은 BackendError."""
    details = []
    if retry_delay is not None:
        details.append(
            {
                "@type": "type.googleapis.com/google.rpc.RetryInfo",
                "retryDelay": retry_delay,
            }
        )
    body = {
        "error": {
            "code": 429,
            "message": "You exceeded your current quota.",
            "status": "RESOURCE_EXHAUSTED",
            "details": details,
        }
    }
    return BackendError(json.dumps(body), status_code=429, status="RESOURCE_EXHAUSTED")


# =============================================================================
# Path / Config Fixtures
# =============================================================================


@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config(project_root: Path) -> dict:
    """기본 설정 로드."""
    with open(project_root / "default.yaml", encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Generation Fixtures
# =============================================================================


@pytest.fixture
def backend() -> AsyncMock:
    """Mock 백엔드. 테스트에서 invoke.side_effect / return_value 지정."""
    return AsyncMock(spec=TextBackend)


@pytest.fixture
def sleep() -> AsyncMock:
    """rate limit 대기 기록용 sleep."""
    return AsyncMock()


@pytest.fixture
def generator(backend: AsyncMock, sleep: AsyncMock) -> ResilientTextGenerator:
    return ResilientTextGenerator(
        backend,
        primary_model="gemini-2.5-pro",
        fallback_model="gemini-2.0-flash",
        sleep=sleep,
    )


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def store(tmp_path: Path) -> RecordStore:
    return RecordStore(tmp_path / "data")


@pytest.fixture
def profile(store: RecordStore) -> UserProfile:
    """저장된 기본 유저 프로필."""
    return store.save_profile(
        UserProfile(
            user_id="user_1",
            industry="tech-software",
            experience=5,
            skills=["Python", "SQL"],
            bio="Backend engineer",
        )
    )


@pytest.fixture
def make_rate_limit_error():
    """429 BackendError 팩토리 (retry_delay=None이면 RetryInfo 없음)."""
    return build_rate_limit_error
