"""
응답 정규화: envelope → 텍스트, 텍스트 → JSON.

SDK 버전에 따라 응답 형태가 다름:
1. response.text (신규 SDK의 text 속성)
2. response.response.text (구 통합 방식)
3. response.response.candidates[0].content.parts[*].text
"""

import json
import re
from typing import Any

from src.domain.errors import InvalidJson, MalformedResponse

# ```json / ``` + 선택적 개행 (태그는 대소문자 구분)
FENCE_PATTERN = re.compile(r"```(?:json)?\n?")

_MISSING = object()


def _field(value: Any, name: str) -> Any:
    """속성 또는 키로 필드 조회. 없으면 _MISSING."""
    if value is None or value is _MISSING:
        return _MISSING
    if isinstance(value, dict):
        return value.get(name, _MISSING)
    return getattr(value, name, _MISSING)


def _parts_of(envelope: Any) -> list | None:
    """response.candidates[0].content.parts 조회."""
    candidates = _field(_field(envelope, "response"), "candidates")
    if not isinstance(candidates, (list, tuple)) or not candidates:
        return None
    parts = _field(_field(candidates[0], "content"), "parts")
    if isinstance(parts, (list, tuple)):
        return list(parts)
    return None


def extract_text(envelope: Any) -> str:
    """
    envelope에서 텍스트 추출 (먼저 맞는 형태 우선).

    Args:
        envelope: 백엔드 응답 (객체 또는 dict)

    Returns:
        추출된 텍스트 (가공하지 않음)

    Raises:
        MalformedResponse: 알려진 형태가 아님
    """
    text = _field(envelope, "text")
    if isinstance(text, str):
        return text

    nested_text = _field(_field(envelope, "response"), "text")
    if isinstance(nested_text, str):
        return nested_text

    parts = _parts_of(envelope)
    if parts is not None:
        fragments = []
        for part in parts:
            fragment = _field(part, "text")
            fragments.append(fragment if isinstance(fragment, str) else "")
        return "".join(fragments)

    raise MalformedResponse(envelope)


def strip_code_fences(text: str) -> str:
    """마크다운 코드 fence 제거 후 trim."""
    return FENCE_PATTERN.sub("", text).strip()


def extract_json(text: str) -> Any:
    """
    fence로 감싸져 있을 수 있는 텍스트에서 JSON 복원.

    스키마 검증은 하지 않음 (문법적 파싱만).

    Raises:
        InvalidJson: fence 제거 후에도 JSON이 아님
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise InvalidJson(text, str(e)) from e
