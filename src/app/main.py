"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.app.providers import GeminiBackend
from src.app.routes import cover_letters, insights, interview, resume, users
from src.app.services import ResilientTextGenerator
from src.core.store import RecordStore
from src.domain.constants import DEFAULT_FALLBACK_MODEL, DEFAULT_PRIMARY_MODEL
from src.domain.errors import (
    GenerationError,
    InvalidRecordId,
    RecordNotFound,
    StoreError,
)

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def build_generator(config: dict) -> ResilientTextGenerator:
    """config의 ai 섹션으로 생성기 구성 (프로세스당 1회)."""
    ai_config = config.get("ai", {})
    backend = GeminiBackend(timeout=ai_config.get("generation_timeout", 120.0))
    return ResilientTextGenerator(
        backend,
        primary_model=ai_config.get("primary_model", DEFAULT_PRIMARY_MODEL),
        fallback_model=ai_config.get("fallback_model", DEFAULT_FALLBACK_MODEL),
    )


def build_store(config: dict) -> RecordStore:
    root = Path(config.get("storage", {}).get("root", "data"))
    if not root.is_absolute():
        root = PROJECT_ROOT / root
    return RecordStore(root)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: .env/설정 로드, 생성기/저장소 초기화
    """
    load_dotenv()
    app.state.config = load_config()
    app.state.generator = build_generator(app.state.config)
    app.state.store = build_store(app.state.config)

    yield


# =============================================================================
# Error Handlers
# =============================================================================


async def record_not_found_handler(request: Request, exc: RecordNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content=exc.to_dict())


async def invalid_record_id_handler(
    request: Request, exc: InvalidRecordId
) -> JSONResponse:
    return JSONResponse(status_code=400, content=exc.to_dict())


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    logger.error(f"Store error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content=exc.to_dict())


async def generation_error_handler(
    request: Request, exc: GenerationError
) -> JSONResponse:
    logger.error(f"Generation failed on {request.url.path}: {exc}")
    return JSONResponse(status_code=502, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """도메인 에러 → HTTP 상태 매핑 (404 / 400 / 500 / 502)."""
    app.add_exception_handler(RecordNotFound, record_not_found_handler)
    app.add_exception_handler(InvalidRecordId, invalid_record_id_handler)
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(GenerationError, generation_error_handler)


def include_api_routers(app: FastAPI) -> None:
    app.include_router(users.api_router, prefix="/api/users", tags=["Users API"])
    app.include_router(resume.api_router, prefix="/api/resume", tags=["Resume API"])
    app.include_router(
        cover_letters.api_router,
        prefix="/api/cover-letters",
        tags=["Cover Letters API"],
    )
    app.include_router(
        insights.api_router, prefix="/api/insights", tags=["Insights API"]
    )
    app.include_router(
        interview.api_router, prefix="/api/interview", tags=["Interview API"]
    )


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Career Coach AI",
    description="이력서/커버레터/면접 준비 + 산업 인사이트 (Gemini)",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)
include_api_routers(app)


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
