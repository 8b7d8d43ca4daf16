"""
Generator Service: 프롬프트 → GenerationResult.

흐름:
1. ResilientInvoker: 기본 모델 → (rate limit 시) fallback 모델
2. extract_text: envelope 형태 정규화
3. expect_format=JSON이면 fence 제거 후 JSON 파싱

실패 시 부분 결과 없음: BackendError / MalformedResponse / InvalidJson 전파.
"""

import logging

from src.app.providers.base import TextBackend
from src.app.providers.response import extract_json, extract_text
from src.domain.constants import DEFAULT_FALLBACK_MODEL, DEFAULT_PRIMARY_MODEL
from src.domain.errors import MalformedResponse
from src.domain.schemas import (
    ExpectFormat,
    GenerationRequest,
    GenerationResult,
)
from src.utils.retry import ResilientInvoker, SleepFunc

logger = logging.getLogger(__name__)


class ResilientTextGenerator:
    """
    텍스트 생성기.

    백엔드 핸들은 호출자가 소유 (프로세스당 1회 생성 후 주입).

    Usage:
        generator = ResilientTextGenerator(GeminiBackend())
        result = await generator.generate_text(request)
    """

    def __init__(
        self,
        backend: TextBackend,
        primary_model: str = DEFAULT_PRIMARY_MODEL,
        fallback_model: str = DEFAULT_FALLBACK_MODEL,
        sleep: SleepFunc | None = None,
    ):
        """
        Args:
            backend: 생성 백엔드
            primary_model: request() 기본 모델 (config에서 주입)
            fallback_model: request() fallback 모델
            sleep: rate limit 대기 함수 (테스트 주입용)
        """
        self.backend = backend
        self.primary_model = primary_model
        self.fallback_model = fallback_model
        if sleep is None:
            self.invoker = ResilientInvoker(backend)
        else:
            self.invoker = ResilientInvoker(backend, sleep=sleep)

    def request(
        self,
        prompt: str,
        expect_format: ExpectFormat = ExpectFormat.PLAIN_TEXT,
    ) -> GenerationRequest:
        """설정된 모델로 GenerationRequest 생성."""
        return GenerationRequest(
            prompt=prompt,
            primary_model=self.primary_model,
            fallback_model=self.fallback_model,
            expect_format=expect_format,
        )

    async def generate_text(self, request: GenerationRequest) -> GenerationResult:
        """
        단일 생성 요청 처리.

        Raises:
            BackendError: 1차 실패(rate limit 아님) 또는 fallback 실패
            MalformedResponse: 알 수 없는 응답 형태
            InvalidJson: JSON 요청인데 파싱 불가
        """
        invocation = await self.invoker.invoke(
            request.primary_model,
            request.fallback_model,
            request.prompt,
        )

        try:
            raw_text = extract_text(invocation.envelope)
        except MalformedResponse:
            logger.error(
                f"Unexpected response shape from {invocation.model_used}: "
                f"{invocation.envelope!r}"
            )
            raise

        parsed = None
        if request.expect_format == ExpectFormat.JSON:
            parsed = extract_json(raw_text)

        return GenerationResult(
            raw_text=raw_text,
            parsed=parsed,
            model_requested=request.primary_model,
            model_used=invocation.model_used,
            fallback_triggered=invocation.fallback_triggered,
        )

    async def generate_plain(self, prompt: str) -> str:
        """plain text 생성 후 앞뒤 공백 제거."""
        result = await self.generate_text(self.request(prompt))
        return result.raw_text.strip()

    async def generate_json(self, prompt: str) -> object:
        """JSON 생성 후 파싱 결과 반환."""
        result = await self.generate_text(self.request(prompt, ExpectFormat.JSON))
        return result.parsed
