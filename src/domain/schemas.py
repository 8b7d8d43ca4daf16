"""
Data schemas for the action layer.

규칙:
- GenerationRequest / RateLimitInfo는 불변 (호출마다 생성)
- GenerationResult.parsed는 raw_text에서 결정론적으로 파생
- 저장 레코드는 to_dict()로 JSON 직렬화
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

# =============================================================================
# Generation
# =============================================================================


class ExpectFormat(str, Enum):
    """호출자가 기대하는 응답 형식."""
    PLAIN_TEXT = "plain_text"
    JSON = "json"


@dataclass(frozen=True)
class GenerationRequest:
    """단일 생성 요청. 호출마다 새로 생성."""
    prompt: str
    primary_model: str
    fallback_model: str
    expect_format: ExpectFormat = ExpectFormat.PLAIN_TEXT


@dataclass
class GenerationResult:
    """
    생성 결과.

    parsed: expect_format=JSON이고 파싱 성공 시에만 존재

    모델 추적:
    - model_requested: 요청한 기본 모델
    - model_used: 실제 응답한 모델 (fallback 시 다름)
    - fallback_triggered: fallback 발생 여부
    """
    raw_text: str
    parsed: Any = None
    model_requested: str | None = None
    model_used: str | None = None
    fallback_triggered: bool = False

    def to_dict(self) -> dict[str, Any]:
        result = {
            "raw_text": self.raw_text,
            "parsed": self.parsed,
            "model_requested": self.model_requested,
            "model_used": self.model_used,
            "fallback_triggered": self.fallback_triggered,
        }
        return {k: v for k, v in result.items() if v is not None}


@dataclass(frozen=True)
class RateLimitInfo:
    """백엔드 에러에서 파생된 rate limit 정보."""
    is_rate_limited: bool
    retry_after_ms: int | None = None

    @property
    def wait_seconds(self) -> float:
        """대기 시간(초). 제안값이 없으면 0."""
        if not self.retry_after_ms:
            return 0.0
        return self.retry_after_ms / 1000


# =============================================================================
# Stored Records
# =============================================================================


@dataclass
class UserProfile:
    """유저 프로필 (프롬프트 구성용)."""
    user_id: str
    industry: str
    experience: int | None = None
    skills: list[str] = field(default_factory=list)
    bio: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserProfile":
        return cls(
            user_id=data["user_id"],
            industry=data["industry"],
            experience=data.get("experience"),
            skills=list(data.get("skills") or []),
            bio=data.get("bio"),
        )


@dataclass
class QuestionResult:
    """퀴즈 문항별 채점 결과."""
    question: str
    answer: str
    user_answer: str | None
    is_correct: bool
    explanation: str | None = None


@dataclass
class Assessment:
    """퀴즈 평가 기록."""
    id: str
    user_id: str
    quiz_score: float
    questions: list[QuestionResult]
    category: str
    improvement_tip: str | None
    created_at: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
