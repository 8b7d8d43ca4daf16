"""
User Routes: 유저 프로필 (프롬프트 구성용).

- PUT /api/users/me → 프로필 upsert
- GET /api/users/me → 프로필 조회
"""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field

from src.domain.schemas import UserProfile

from .common import current_user_id, get_store

api_router = APIRouter()


class ProfileBody(BaseModel):
    industry: str = Field(min_length=1)
    experience: int | None = Field(default=None, ge=0)
    skills: list[str] = Field(default_factory=list)
    bio: str | None = None


@api_router.put("/me")
async def update_profile(
    body: ProfileBody,
    request: Request,
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    """프로필 저장."""
    profile = UserProfile(user_id=user_id, **body.model_dump())
    return get_store(request).save_profile(profile).to_dict()


@api_router.get("/me")
async def get_profile(
    request: Request,
    user_id: str = Depends(current_user_id),
) -> dict[str, Any]:
    """프로필 조회."""
    return get_store(request).get_profile(user_id).to_dict()
