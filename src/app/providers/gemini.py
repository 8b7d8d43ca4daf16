"""
Google Gemini 생성 백엔드 (google-genai SDK).

예외 정책:
- SDK APIError → BackendError(status_code, status, message)
  message는 에러 응답 JSON 원문을 유지 (RetryInfo 파싱에 필요)
- 타임아웃/네트워크 오류 → BackendError (status_code 없음, fallback 안 탐)
- fallback 판단은 하지 않음 (utils.retry 담당)
"""

import asyncio
import json
import logging
import os
from typing import Any

import httpx
from google import genai
from google.genai import errors as genai_errors

from src.domain.errors import BackendError, ErrorCodes

from .base import TextBackend

logger = logging.getLogger(__name__)


class GeminiBackend(TextBackend):
    """
    Gemini 텍스트 생성 백엔드.

    Usage:
        backend = GeminiBackend(api_key=os.environ["GEMINI_API_KEY"])
        envelope = await backend.invoke("gemini-2.5-pro", prompt)
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = 120.0,
    ):
        """
        Args:
            api_key: API 키 (환경변수 GEMINI_API_KEY 또는 GOOGLE_API_KEY 사용 가능)
            timeout: 호출당 타임아웃(초). None이면 무제한
        """
        self.api_key = (
            api_key
            or os.environ.get("GEMINI_API_KEY")
            or os.environ.get("GOOGLE_API_KEY")
        )
        self.timeout = timeout
        self._client: Any = None

    def _get_client(self) -> Any:
        """Gemini 클라이언트 (lazy init)."""
        if self._client is None:
            if not self.api_key:
                raise BackendError(
                    "Gemini API 키가 없습니다. "
                    "GEMINI_API_KEY 또는 GOOGLE_API_KEY 환경변수를 설정하세요.",
                    reason=ErrorCodes.GEMINI_KEY_MISSING,
                )
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def invoke(self, target: str, prompt: str) -> Any:
        """generate_content 호출 후 응답 객체를 그대로 반환."""
        client = self._get_client()
        call = client.aio.models.generate_content(model=target, contents=prompt)

        try:
            if self.timeout is None:
                return await call
            return await asyncio.wait_for(call, timeout=self.timeout)
        except genai_errors.APIError as e:
            raise self._to_backend_error(e, target) from e
        except asyncio.TimeoutError as e:
            logger.error(f"Gemini call to {target} timed out after {self.timeout}s")
            raise BackendError(
                f"Request to {target} timed out after {self.timeout}s",
                model=target,
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Gemini call to {target} failed in transport: {e!r}")
            raise BackendError(str(e) or type(e).__name__, model=target) from e

    def _to_backend_error(self, error: Any, target: str) -> BackendError:
        """SDK APIError → BackendError. 응답 JSON이 있으면 message로 보존."""
        details = getattr(error, "details", None)
        if isinstance(details, dict) and "error" not in details:
            if "code" in details or "details" in details:
                # error 래핑 없이 본문만 온 경우
                details = {"error": details}
        if isinstance(details, dict) and "error" in details:
            message = json.dumps(details, ensure_ascii=False)
        else:
            message = getattr(error, "message", None) or str(error)

        return BackendError(
            message,
            status_code=getattr(error, "code", None),
            status=getattr(error, "status", None),
            model=target,
        )
