"""
Rate limit 분류: 백엔드 에러가 일시적 쿼터 초과인지 판정.

판정 규칙 (백엔드 실제 에러 포맷과의 호환에 필요, 변경 금지):
- status code == 429
- message에 "RESOURCE_EXHAUSTED" 또는 "Quota exceeded" 포함
- message가 JSON이고 error.code == 429 또는 error.status == "RESOURCE_EXHAUSTED"

대기 시간:
- error.details[] 중 @type에 "RetryInfo" 포함 + retryDelay "42.85s" 형식
- 밀리초로 변환, 올림
"""

import json
import math
import re
from decimal import Decimal
from typing import Any

from src.domain.constants import (
    RATE_LIMIT_MESSAGE_MARKERS,
    RATE_LIMIT_STATUS,
    RATE_LIMIT_STATUS_CODE,
    RETRY_INFO_TYPE_MARKER,
)
from src.domain.schemas import RateLimitInfo

RETRY_DELAY_PATTERN = re.compile(r"([0-9]+(?:\.[0-9]+)?)s")


def _status_code_of(error: Any) -> int | None:
    """status_code → code → status 순서로 정수 상태 코드 조회."""
    for attr in ("status_code", "code", "status"):
        value = getattr(error, attr, None)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None


def _message_of(error: Any) -> str:
    message = getattr(error, "message", None)
    if isinstance(message, str):
        return message
    return str(error)


def _parse_error_body(message: str) -> dict[str, Any] | None:
    """message가 JSON 객체면 error 필드 반환."""
    if not message.strip().startswith("{"):
        return None
    try:
        body = json.loads(message)
    except json.JSONDecodeError:
        return None
    if not isinstance(body, dict):
        return None
    error_body = body.get("error")
    return error_body if isinstance(error_body, dict) else None


def parse_retry_delay_ms(message: str) -> int | None:
    """
    에러 message의 RetryInfo에서 대기 시간(ms) 추출.

    Returns:
        밀리초 (올림). 파싱 불가 시 None
    """
    error_body = _parse_error_body(message)
    if error_body is None:
        return None

    details = error_body.get("details")
    if not isinstance(details, list):
        return None

    for detail in details:
        if not isinstance(detail, dict):
            continue
        type_name = detail.get("@type")
        retry_delay = detail.get("retryDelay")
        if not isinstance(type_name, str) or RETRY_INFO_TYPE_MARKER not in type_name:
            continue
        if not isinstance(retry_delay, str):
            continue
        match = RETRY_DELAY_PATTERN.search(retry_delay)
        if match:
            return math.ceil(Decimal(match.group(1)) * 1000)

    return None


def is_rate_limited(error: Any) -> bool:
    """에러가 rate limit(쿼터 초과)인지 판정."""
    if error is None:
        return False

    if _status_code_of(error) == RATE_LIMIT_STATUS_CODE:
        return True

    message = _message_of(error)
    if any(marker in message for marker in RATE_LIMIT_MESSAGE_MARKERS):
        return True

    error_body = _parse_error_body(message)
    if error_body is not None:
        if error_body.get("code") == RATE_LIMIT_STATUS_CODE:
            return True
        if error_body.get("status") == RATE_LIMIT_STATUS:
            return True

    return False


def classify_rate_limit(error: Any) -> RateLimitInfo:
    """
    백엔드 에러 → RateLimitInfo.

    rate limit이 아니면 retry_after_ms는 항상 None.
    """
    if not is_rate_limited(error):
        return RateLimitInfo(is_rate_limited=False)

    return RateLimitInfo(
        is_rate_limited=True,
        retry_after_ms=parse_retry_delay_ms(_message_of(error)),
    )
