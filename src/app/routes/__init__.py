"""
FastAPI Routes.

API 라우트 (REST, JSON)
"""

from . import cover_letters, insights, interview, resume, users

__all__ = ["cover_letters", "insights", "interview", "resume", "users"]
