"""
Cover Letter Service: 커버레터 생성/조회/삭제.

생성은 기본 모델 → (rate limit 시) fallback 모델.
실패 시 레코드 저장 안 함 (부분 결과 없음).
"""

import logging
from datetime import UTC, datetime
from typing import Any

from src.app.services.generator import ResilientTextGenerator
from src.app.services.prompts import build_cover_letter_prompt
from src.core.ids import generate_record_id
from src.core.store import RecordStore
from src.domain.constants import COVER_LETTER_STATUS_COMPLETED
from src.domain.errors import ErrorCodes, RecordNotFound

logger = logging.getLogger(__name__)


class CoverLetterService:
    """커버레터 서비스."""

    ID_PREFIX = "CL"

    def __init__(self, store: RecordStore, generator: ResilientTextGenerator):
        self.store = store
        self.generator = generator

    async def generate_cover_letter(
        self,
        user_id: str,
        job_title: str,
        company_name: str,
        job_description: str,
    ) -> dict[str, Any]:
        """
        커버레터 생성 후 저장.

        Returns:
            저장된 레코드 (id, content, status, model_used 등)

        Raises:
            RecordNotFound: 유저 프로필 없음
            GenerationError: 생성 실패
        """
        profile = self.store.get_profile(user_id)
        prompt = build_cover_letter_prompt(
            profile, job_title, company_name, job_description
        )

        result = await self.generator.generate_text(self.generator.request(prompt))

        record = {
            "id": generate_record_id(self.ID_PREFIX),
            "user_id": user_id,
            "content": result.raw_text.strip(),
            "job_description": job_description,
            "company_name": company_name,
            "job_title": job_title,
            "status": COVER_LETTER_STATUS_COMPLETED,
            "model_used": result.model_used,
            "fallback_triggered": result.fallback_triggered,
            "created_at": datetime.now(UTC).isoformat(),
        }
        self.store.add_cover_letter(record)
        logger.info(
            f"Generated cover letter {record['id']} for {user_id} "
            f"with {result.model_used}"
        )
        return record

    def list_cover_letters(self, user_id: str) -> list[dict[str, Any]]:
        self.store.get_profile(user_id)
        return self.store.list_cover_letters(user_id)

    def get_cover_letter(self, user_id: str, record_id: str) -> dict[str, Any] | None:
        self.store.get_profile(user_id)
        return self.store.get_cover_letter(user_id, record_id)

    def delete_cover_letter(self, user_id: str, record_id: str) -> None:
        """
        Raises:
            RecordNotFound: COVER_LETTER_NOT_FOUND
        """
        self.store.get_profile(user_id)
        if not self.store.delete_cover_letter(user_id, record_id):
            raise RecordNotFound(
                ErrorCodes.COVER_LETTER_NOT_FOUND,
                user_id=user_id,
                id=record_id,
            )
