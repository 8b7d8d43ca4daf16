"""
라우트 공통: 호출자 식별 + 서비스 조회.

인증은 호스팅 플랫폼 담당. 앱은 X-User-Id 헤더만 신뢰.
"""

from fastapi import Header, HTTPException, Request

from src.app.services import (
    CoverLetterService,
    InsightService,
    InterviewService,
    ResumeService,
)
from src.core.store import RecordStore
from src.domain.constants import INSIGHTS_REFRESH_DAYS, QUIZ_QUESTION_COUNT


async def current_user_id(x_user_id: str | None = Header(None)) -> str:
    """X-User-Id 헤더 → user_id. 없으면 401."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id


def get_store(request: Request) -> RecordStore:
    store: RecordStore = request.app.state.store
    return store


def get_resume_service(request: Request) -> ResumeService:
    return ResumeService(get_store(request), request.app.state.generator)


def get_cover_letter_service(request: Request) -> CoverLetterService:
    return CoverLetterService(get_store(request), request.app.state.generator)


def get_insight_service(request: Request) -> InsightService:
    config = request.app.state.config.get("insights", {})
    return InsightService(
        get_store(request),
        request.app.state.generator,
        refresh_days=config.get("refresh_days", INSIGHTS_REFRESH_DAYS),
    )


def get_interview_service(request: Request) -> InterviewService:
    config = request.app.state.config.get("interview", {})
    return InterviewService(
        get_store(request),
        request.app.state.generator,
        question_count=config.get("question_count", QUIZ_QUESTION_COUNT),
    )
