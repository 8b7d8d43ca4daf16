"""
Interview Routes.

- POST /api/interview/quiz → 퀴즈 생성
- POST /api/interview/assessments → 채점 결과 저장
- GET /api/interview/assessments → 평가 목록 (오래된 순)
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.app.services import InterviewService

from .common import current_user_id, get_interview_service

api_router = APIRouter()


class QuizResultBody(BaseModel):
    questions: list[dict[str, Any]]
    answers: list[str | None]
    score: float


@api_router.post("/quiz")
async def generate_quiz(
    user_id: str = Depends(current_user_id),
    service: InterviewService = Depends(get_interview_service),
) -> dict[str, Any]:
    questions = await service.generate_quiz(user_id)
    return {"questions": questions}


@api_router.post("/assessments")
async def save_quiz_result(
    body: QuizResultBody,
    user_id: str = Depends(current_user_id),
    service: InterviewService = Depends(get_interview_service),
) -> dict[str, Any]:
    return await service.save_quiz_result(
        user_id, body.questions, body.answers, body.score
    )


@api_router.get("/assessments")
async def get_assessments(
    user_id: str = Depends(current_user_id),
    service: InterviewService = Depends(get_interview_service),
) -> list[dict[str, Any]]:
    return service.get_assessments(user_id)
