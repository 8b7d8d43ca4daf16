"""
Domain Constants: 전역 상수.

모델 기본값, 저장소 디렉토리 구조 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Model Defaults (모델 기본값)
# =============================================================================
# config(default.yaml)가 SSOT. 아래는 설정 누락 시 기본값.

DEFAULT_PRIMARY_MODEL = "gemini-2.5-pro"
DEFAULT_FALLBACK_MODEL = "gemini-2.0-flash"

# =============================================================================
# Rate Limit Markers (rate limit 판정 문자열)
# =============================================================================

RATE_LIMIT_STATUS_CODE = 429
RATE_LIMIT_STATUS = "RESOURCE_EXHAUSTED"
RATE_LIMIT_MESSAGE_MARKERS = ("RESOURCE_EXHAUSTED", "Quota exceeded")
RETRY_INFO_TYPE_MARKER = "RetryInfo"

# =============================================================================
# Store Directory Structure (저장소 디렉토리 구조)
# =============================================================================
# <storage.root>/
# ├── users/<user_id>.json
# ├── resumes/<user_id>.json
# ├── cover_letters/<user_id>/<id>.json
# ├── assessments/<user_id>/<id>.json
# ├── insights/<industry_slug>.json
# └── .locks/

USERS_DIR = "users"
RESUMES_DIR = "resumes"
COVER_LETTERS_DIR = "cover_letters"
ASSESSMENTS_DIR = "assessments"
INSIGHTS_DIR = "insights"
LOCKS_DIR = ".locks"

# =============================================================================
# Record Defaults
# =============================================================================

INSIGHTS_REFRESH_DAYS = 7
QUIZ_QUESTION_COUNT = 10
ASSESSMENT_CATEGORY = "Technical"
COVER_LETTER_STATUS_COMPLETED = "completed"
