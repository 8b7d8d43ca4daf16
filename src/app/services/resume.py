"""
Resume Service: 이력서 저장/조회 + AI 문장 개선.
"""

import logging
from typing import Any

from src.app.services.generator import ResilientTextGenerator
from src.app.services.prompts import build_resume_improve_prompt
from src.core.store import RecordStore

logger = logging.getLogger(__name__)


class ResumeService:
    """이력서 서비스 (유저당 이력서 1개)."""

    def __init__(self, store: RecordStore, generator: ResilientTextGenerator):
        self.store = store
        self.generator = generator

    def save_resume(self, user_id: str, content: str) -> dict[str, Any]:
        """이력서 upsert. 프로필 없는 유저는 RecordNotFound."""
        self.store.get_profile(user_id)
        record = self.store.save_resume(user_id, content)
        logger.info(f"Saved resume for {user_id}")
        return record

    def get_resume(self, user_id: str) -> dict[str, Any] | None:
        self.store.get_profile(user_id)
        return self.store.get_resume(user_id)

    async def improve_with_ai(self, user_id: str, current: str, section: str) -> str:
        """
        이력서 항목 문장 개선.

        Args:
            user_id: 유저 ID
            current: 현재 내용
            section: 항목 종류 (experience, project 등)

        Returns:
            개선된 단일 문단 (앞뒤 공백 제거)
        """
        profile = self.store.get_profile(user_id)
        prompt = build_resume_improve_prompt(profile, current, section)
        return await self.generator.generate_plain(prompt)
