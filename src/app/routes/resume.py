"""
Resume Routes.

- PUT /api/resume → 이력서 저장 (upsert)
- GET /api/resume → 이력서 조회 (없으면 null)
- POST /api/resume/improve → 항목 문장 개선
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from src.app.services import ResumeService

from .common import current_user_id, get_resume_service

api_router = APIRouter()


class ResumeBody(BaseModel):
    content: str


class ImproveBody(BaseModel):
    current: str = Field(min_length=1)
    type: str = Field(min_length=1)


@api_router.put("")
async def save_resume(
    body: ResumeBody,
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> dict[str, Any]:
    return service.save_resume(user_id, body.content)


@api_router.get("")
async def get_resume(
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> dict[str, Any] | None:
    return service.get_resume(user_id)


@api_router.post("/improve")
async def improve_resume(
    body: ImproveBody,
    user_id: str = Depends(current_user_id),
    service: ResumeService = Depends(get_resume_service),
) -> dict[str, str]:
    """개선된 문단 반환."""
    content = await service.improve_with_ai(user_id, body.current, body.type)
    return {"content": content}
