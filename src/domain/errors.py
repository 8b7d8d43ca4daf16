"""
Error definitions for the action layer.

규칙:
- 조용한 실패 금지 → 타입이 있는 에러로 명시적 실패
- 부분 결과 반환 금지: 성공 시 완전한 결과, 실패 시 예외
- rate limit으로 분류된 BackendError만 fallback 1회 허용
"""

from typing import Any


class GenerationError(Exception):
    """
    텍스트 생성 관련 에러의 공통 베이스.

    Usage:
        raise MalformedResponse(envelope=result)
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
        }


class BackendError(GenerationError):
    """
    백엔드(생성 API) 호출 실패.

    rate limit 분류에 쓰이는 status_code / status / message를 보존.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status: str | None = None,
        **context: Any,
    ) -> None:
        self.status_code = status_code
        self.status = status
        super().__init__(ErrorCodes.BACKEND_ERROR, message, **context)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        data["status"] = self.status
        return data


class MalformedResponse(GenerationError):
    """알 수 없는 응답 형태. 재시도해도 형태는 바뀌지 않으므로 항상 fatal."""

    def __init__(self, envelope: Any) -> None:
        self.envelope = envelope
        super().__init__(
            ErrorCodes.MALFORMED_RESPONSE,
            "AI returned no text",
        )


class InvalidJson(GenerationError):
    """fence 제거 후에도 JSON 파싱 불가. 복구 시도 없음."""

    def __init__(self, text: str, reason: str) -> None:
        self.text = text
        super().__init__(
            ErrorCodes.INVALID_JSON,
            f"AI response is not valid JSON: {reason}",
        )


# =============================================================================
# Store Errors
# =============================================================================

class StoreError(Exception):
    """
    레코드 저장소 에러.

    Usage:
        raise StoreError("STORE_LOCK_TIMEOUT", path=str(path))
    """

    def __init__(self, code: str, **context: Any) -> None:
        self.code = code
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"[{self.code}] {ctx_str}" if ctx_str else f"[{self.code}]"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            **self.context,
        }


class RecordNotFound(StoreError):
    """요청한 레코드(유저 프로필, 커버레터 등)가 없음."""
    pass


class InvalidRecordId(StoreError):
    """경로에 쓸 수 없는 user_id / record_id (클라이언트 입력 오류)."""
    pass


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Generation ===
    BACKEND_ERROR = "BACKEND_ERROR"
    MALFORMED_RESPONSE = "MALFORMED_RESPONSE"
    INVALID_JSON = "INVALID_JSON"
    GEMINI_KEY_MISSING = "GEMINI_KEY_MISSING"

    # === Store ===
    STORE_LOCK_TIMEOUT = "STORE_LOCK_TIMEOUT"
    RECORD_CORRUPT = "RECORD_CORRUPT"
    INVALID_RECORD_ID = "INVALID_RECORD_ID"

    # === Not Found ===
    USER_NOT_FOUND = "USER_NOT_FOUND"
    COVER_LETTER_NOT_FOUND = "COVER_LETTER_NOT_FOUND"
