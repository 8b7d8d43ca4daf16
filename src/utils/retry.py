"""
재시도 로직 유틸리티: 단일 재시도 + 단일 fallback.

상태:
    Trying-Primary → (rate limit) → 대기 → Trying-Fallback → Done / Failed

- rate limit이 아닌 1차 실패: 즉시 전파 (fallback 호출 안 함)
- rate limit: 제안된 대기 후 fallback 모델로 정확히 1회 호출
- fallback 실패: 두 번째 에러를 전파 (1차 에러는 __cause__로 연결)
- 요청당 백엔드 호출은 최대 2회, 지수 백오프 루프 없음
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from src.app.providers.base import TextBackend
from src.domain.schemas import RateLimitInfo

from .rate_limit import classify_rate_limit

logger = logging.getLogger(__name__)

SleepFunc = Callable[[float], Awaitable[Any]]


@dataclass
class Invocation:
    """백엔드 호출 결과 (envelope + 실제 사용 모델)."""
    envelope: Any
    model_used: str
    fallback_triggered: bool = False


class ResilientInvoker:
    """
    기본 모델 → fallback 모델 단일 fallback 호출기.

    대기는 주입된 sleep 함수로 수행 (기본 asyncio.sleep).
    호출자는 asyncio 표준 취소로 대기/호출을 감쌀 수 있음.

    Usage:
        invoker = ResilientInvoker(backend)
        invocation = await invoker.invoke("gemini-2.5-pro", "gemini-2.0-flash", prompt)
    """

    def __init__(
        self,
        backend: TextBackend,
        sleep: SleepFunc = asyncio.sleep,
    ):
        self.backend = backend
        self._sleep = sleep

    def plan_fallback(self, error: Exception) -> RateLimitInfo:
        """1차 실패 후 fallback 여부와 대기 시간 결정."""
        return classify_rate_limit(error)

    async def invoke(
        self,
        primary_model: str,
        fallback_model: str,
        prompt: str,
    ) -> Invocation:
        """
        기본 모델 호출, rate limit 시 fallback 1회.

        Raises:
            1차 에러 (rate limit 아님) 또는 fallback 에러
        """
        try:
            envelope = await self.backend.invoke(primary_model, prompt)
            return Invocation(envelope=envelope, model_used=primary_model)
        except Exception as primary_error:
            rate_limit = self.plan_fallback(primary_error)
            if not rate_limit.is_rate_limited:
                raise

            logger.warning(
                f"Quota hit for {primary_model}. "
                f"Waiting {rate_limit.retry_after_ms or 0}ms "
                f"then trying fallback model {fallback_model}: {primary_error}"
            )

            if rate_limit.wait_seconds > 0:
                await self._sleep(rate_limit.wait_seconds)

            try:
                envelope = await self.backend.invoke(fallback_model, prompt)
            except Exception as fallback_error:
                logger.error(
                    f"Both preferred model ({primary_model}) and "
                    f"fallback model ({fallback_model}) failed: {fallback_error}"
                )
                raise fallback_error from primary_error

            logger.info(f"Fallback model {fallback_model} succeeded")
            return Invocation(
                envelope=envelope,
                model_used=fallback_model,
                fallback_triggered=True,
            )
