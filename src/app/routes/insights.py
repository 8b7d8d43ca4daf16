"""
Insight Routes.

- GET /api/insights → 유저 산업의 인사이트 (없으면 생성)
"""

from typing import Any

from fastapi import APIRouter, Depends

from src.app.services import InsightService

from .common import current_user_id, get_insight_service

api_router = APIRouter()


@api_router.get("")
async def get_industry_insights(
    user_id: str = Depends(current_user_id),
    service: InsightService = Depends(get_insight_service),
) -> dict[str, Any]:
    return await service.get_industry_insights(user_id)
