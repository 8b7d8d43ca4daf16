"""
Application Services.

역할:
- generator: 기본/fallback 모델 생성 + 응답 정규화
- resume: 이력서 저장 + 문장 개선
- cover_letter: 커버레터 생성/관리
- insights: 산업 인사이트 생성/주기 갱신
- interview: 퀴즈 생성 + 평가 저장
"""

from .cover_letter import CoverLetterService
from .generator import ResilientTextGenerator
from .insights import InsightService
from .interview import InterviewService
from .resume import ResumeService

__all__ = [
    "ResilientTextGenerator",
    "ResumeService",
    "CoverLetterService",
    "InsightService",
    "InterviewService",
]
