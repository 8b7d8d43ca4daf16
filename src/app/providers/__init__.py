"""
Generation Backend Abstraction.

백엔드 교체 가능하게 설계.
모델명은 config만 SSOT.
"""

from .base import TextBackend
from .gemini import GeminiBackend
from .response import extract_json, extract_text, strip_code_fences

__all__ = [
    "TextBackend",
    "GeminiBackend",
    "extract_text",
    "extract_json",
    "strip_code_fences",
]
