"""
ID 생성: record_id, industry slug

규칙:
- record_id 수정 금지, 생성 시 1회 발급
- industry slug는 결정론적 (동일 산업명 → 동일 파일명)
"""

import hashlib
import re
import uuid
from datetime import UTC, datetime


def generate_record_id(prefix: str) -> str:
    """
    레코드 ID 생성.

    고유성 보장: UUID v4
    포맷: {PREFIX}-{timestamp}-{uuid[:8]}

    Args:
        prefix: 레코드 종류 (CL, ASM 등)

    Returns:
        record_id 문자열
    """
    timestamp = datetime.now(UTC).strftime("%Y%m%d%H%M%S")
    unique_part = uuid.uuid4().hex[:8]
    return f"{prefix}-{timestamp}-{unique_part}"


def industry_slug(industry: str) -> str:
    """
    산업명 → 파일명용 slug.

    결정론적: 동일 산업명 → 동일 slug
    포맷: {sanitized}-{hash[:8]}

    Example:
        "Tech / Software" → "tech-software-1a2b3c4d"
    """
    normalized = industry.strip().lower()
    hash_value = hashlib.sha256(normalized.encode()).hexdigest()[:8]
    safe = _sanitize_for_id(normalized)
    return f"{safe}-{hash_value}" if safe else hash_value


def is_safe_id(value: str) -> bool:
    """경로 조작 없는 ID인지 (영숫자, -, _ 만 허용)."""
    return bool(value) and re.fullmatch(r"[A-Za-z0-9_-]+", value) is not None


def _sanitize_for_id(value: str) -> str:
    """
    파일명 안전 문자로 변환.

    - 영숫자 외 문자 → 하이픈
    - 연속 하이픈 → 단일
    - 앞뒤 하이픈 제거
    """
    sanitized = re.sub(r"[^a-z0-9]+", "-", value)
    return sanitized.strip("-")[:40]
