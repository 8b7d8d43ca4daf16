"""
Insight Service: 산업 인사이트 생성/조회/주기 갱신.

- 인사이트는 산업 단위로 공유 (유저별 아님)
- 최초 조회 시 없으면 생성 (lazy)
- 주기 갱신은 외부 스케줄러가 refresh_all() 호출 (scripts/refresh_insights.py)
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

from src.app.services.generator import ResilientTextGenerator
from src.app.services.prompts import build_insights_prompt
from src.core.store import RecordStore
from src.domain.constants import INSIGHTS_REFRESH_DAYS
from src.domain.errors import GenerationError, InvalidJson
from src.domain.schemas import ExpectFormat

logger = logging.getLogger(__name__)


class InsightService:
    """산업 인사이트 서비스."""

    def __init__(
        self,
        store: RecordStore,
        generator: ResilientTextGenerator,
        refresh_days: int = INSIGHTS_REFRESH_DAYS,
    ):
        self.store = store
        self.generator = generator
        self.refresh_days = refresh_days

    async def generate_insights(self, industry: str) -> dict[str, Any]:
        """
        인사이트 JSON 생성 (저장 안 함).

        Raises:
            InvalidJson: JSON 객체가 아님
        """
        result = await self.generator.generate_text(
            self.generator.request(
                build_insights_prompt(industry),
                expect_format=ExpectFormat.JSON,
            )
        )
        if not isinstance(result.parsed, dict):
            raise InvalidJson(result.raw_text, "expected a JSON object")
        return result.parsed

    async def update_insights(self, industry: str) -> dict[str, Any]:
        """인사이트 생성 후 저장 (last_updated, next_update 갱신)."""
        insights = await self.generate_insights(industry)
        now = datetime.now(UTC)
        record = {
            **insights,
            "last_updated": now.isoformat(),
            "next_update": (now + timedelta(days=self.refresh_days)).isoformat(),
        }
        return self.store.save_insights(industry, record)

    async def get_industry_insights(self, user_id: str) -> dict[str, Any]:
        """유저 산업의 인사이트. 없으면 생성."""
        profile = self.store.get_profile(user_id)
        existing = self.store.get_insights(profile.industry)
        if existing is not None:
            return existing

        logger.info(f"No insights for {profile.industry!r}, generating")
        return await self.update_insights(profile.industry)

    async def refresh_all(self, industries: list[str] | None = None) -> int:
        """
        저장된 모든 산업 인사이트 갱신.

        산업별 실패는 로그만 남기고 계속 진행.

        Returns:
            갱신 성공한 산업 수
        """
        targets = industries if industries is not None else self.store.list_industries()
        refreshed = 0
        for industry in targets:
            try:
                await self.update_insights(industry)
                refreshed += 1
                logger.info(f"Updated {industry} insights")
            except GenerationError as e:
                logger.error(f"Failed to refresh {industry} insights: {e}")
        return refreshed
