"""Domain layer: errors and schemas."""

from .errors import (
    BackendError,
    GenerationError,
    InvalidJson,
    MalformedResponse,
    InvalidRecordId,
    RecordNotFound,
    StoreError,
)
from .schemas import (
    ExpectFormat,
    GenerationRequest,
    GenerationResult,
    RateLimitInfo,
    UserProfile,
)

__all__ = [
    "GenerationError",
    "BackendError",
    "MalformedResponse",
    "InvalidJson",
    "StoreError",
    "RecordNotFound",
    "InvalidRecordId",
    "ExpectFormat",
    "GenerationRequest",
    "GenerationResult",
    "RateLimitInfo",
    "UserProfile",
]
