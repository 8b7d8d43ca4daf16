"""
Interview Service: 모의 면접 퀴즈 생성 + 채점 결과 저장.

- 퀴즈: JSON 모드, questions 목록 반환
- 개선 팁: 오답이 있을 때만 요청
  팁 생성 실패는 로그만 남기고 계속 (평가 저장은 진행)
"""

import logging
from datetime import UTC, datetime
from typing import Any

from src.app.services.generator import ResilientTextGenerator
from src.app.services.prompts import (
    build_improvement_tip_prompt,
    build_quiz_prompt,
)
from src.core.ids import generate_record_id
from src.core.store import RecordStore
from src.domain.constants import ASSESSMENT_CATEGORY, QUIZ_QUESTION_COUNT
from src.domain.errors import GenerationError, InvalidJson
from src.domain.schemas import Assessment, ExpectFormat, QuestionResult

logger = logging.getLogger(__name__)


def grade_answers(
    questions: list[dict[str, Any]],
    answers: list[str | None],
) -> list[QuestionResult]:
    """
    문항별 채점.

    answers가 questions보다 짧으면 남은 문항은 미응답(None)으로 오답 처리.
    """
    results = []
    for index, question in enumerate(questions):
        user_answer = answers[index] if index < len(answers) else None
        correct = question.get("correctAnswer")
        results.append(
            QuestionResult(
                question=question.get("question", ""),
                answer=correct,
                user_answer=user_answer,
                is_correct=user_answer is not None and correct == user_answer,
                explanation=question.get("explanation"),
            )
        )
    return results


class InterviewService:
    """모의 면접 서비스."""

    ID_PREFIX = "ASM"

    def __init__(
        self,
        store: RecordStore,
        generator: ResilientTextGenerator,
        question_count: int = QUIZ_QUESTION_COUNT,
    ):
        self.store = store
        self.generator = generator
        self.question_count = question_count

    async def generate_quiz(self, user_id: str) -> list[dict[str, Any]]:
        """
        유저 산업/스킬 기반 객관식 퀴즈 생성.

        Raises:
            InvalidJson: JSON이 아니거나 questions 목록 없음
        """
        profile = self.store.get_profile(user_id)
        result = await self.generator.generate_text(
            self.generator.request(
                build_quiz_prompt(profile, self.question_count),
                expect_format=ExpectFormat.JSON,
            )
        )

        questions = (
            result.parsed.get("questions") if isinstance(result.parsed, dict) else None
        )
        if not isinstance(questions, list):
            raise InvalidJson(result.raw_text, "missing 'questions' list")
        return questions

    async def improvement_tip(self, wrong_answers: list[QuestionResult]) -> str | None:
        """오답 기반 개선 팁. 실패 시 None."""
        if not wrong_answers:
            return None

        try:
            return await self.generator.generate_plain(
                build_improvement_tip_prompt(wrong_answers)
            )
        except GenerationError as e:
            logger.error(f"Error generating improvement tip: {e}")
            return None

    async def save_quiz_result(
        self,
        user_id: str,
        questions: list[dict[str, Any]],
        answers: list[str | None],
        score: float,
    ) -> dict[str, Any]:
        """
        채점 결과 + 개선 팁을 평가 레코드로 저장.

        Returns:
            저장된 평가 레코드
        """
        self.store.get_profile(user_id)
        question_results = grade_answers(questions, answers)
        wrong_answers = [q for q in question_results if not q.is_correct]

        assessment = Assessment(
            id=generate_record_id(self.ID_PREFIX),
            user_id=user_id,
            quiz_score=score,
            questions=question_results,
            category=ASSESSMENT_CATEGORY,
            improvement_tip=await self.improvement_tip(wrong_answers),
            created_at=datetime.now(UTC).isoformat(),
        )
        return self.store.add_assessment(assessment.to_dict())

    def get_assessments(self, user_id: str) -> list[dict[str, Any]]:
        self.store.get_profile(user_id)
        return self.store.list_assessments(user_id)
