"""
Core layer: 저장소 핵심 모듈.

역할:
- 레코드 저장 (원자적 쓰기, 파일 락), ID 생성
"""

from .ids import generate_record_id, industry_slug
from .store import RecordStore, atomic_write_json, load_json

__all__ = [
    # store
    "RecordStore",
    "atomic_write_json",
    "load_json",
    # ids
    "generate_record_id",
    "industry_slug",
]
