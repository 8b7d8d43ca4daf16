"""
Cover Letter Routes.

- POST /api/cover-letters → 생성
- GET /api/cover-letters → 목록 (최신순)
- GET /api/cover-letters/{id} → 상세
- DELETE /api/cover-letters/{id} → 삭제
"""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from src.app.services import CoverLetterService

from .common import current_user_id, get_cover_letter_service

api_router = APIRouter()


class CoverLetterBody(BaseModel):
    job_title: str = Field(min_length=1)
    company_name: str = Field(min_length=1)
    job_description: str = ""


@api_router.post("")
async def generate_cover_letter(
    body: CoverLetterBody,
    user_id: str = Depends(current_user_id),
    service: CoverLetterService = Depends(get_cover_letter_service),
) -> dict[str, Any]:
    return await service.generate_cover_letter(
        user_id,
        job_title=body.job_title,
        company_name=body.company_name,
        job_description=body.job_description,
    )


@api_router.get("")
async def list_cover_letters(
    user_id: str = Depends(current_user_id),
    service: CoverLetterService = Depends(get_cover_letter_service),
) -> list[dict[str, Any]]:
    return service.list_cover_letters(user_id)


@api_router.get("/{letter_id}")
async def get_cover_letter(
    letter_id: str,
    user_id: str = Depends(current_user_id),
    service: CoverLetterService = Depends(get_cover_letter_service),
) -> dict[str, Any]:
    record = service.get_cover_letter(user_id, letter_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Cover letter not found")
    return record


@api_router.delete("/{letter_id}")
async def delete_cover_letter(
    letter_id: str,
    user_id: str = Depends(current_user_id),
    service: CoverLetterService = Depends(get_cover_letter_service),
) -> dict[str, str]:
    service.delete_cover_letter(user_id, letter_id)
    return {"status": "deleted", "id": letter_id}
