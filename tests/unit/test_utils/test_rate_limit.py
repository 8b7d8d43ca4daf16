"""
test_rate_limit.py - rate limit 분류 테스트

판정 규칙:
- status 429
- message에 RESOURCE_EXHAUSTED / Quota exceeded
- message JSON의 error.code == 429 / error.status == RESOURCE_EXHAUSTED
대기 시간:
- RetryInfo.retryDelay "N.Ns" → ms 올림
"""

import json

import pytest

from src.domain.errors import BackendError
from src.utils.rate_limit import (
    classify_rate_limit,
    is_rate_limited,
    parse_retry_delay_ms,
)


def _retry_message(retry_delay, type_name="type.googleapis.com/google.rpc.RetryInfo"):
    return json.dumps(
        {
            "error": {
                "code": 429,
                "status": "RESOURCE_EXHAUSTED",
                "details": [
                    {"@type": "type.googleapis.com/google.rpc.QuotaFailure"},
                    {"@type": type_name, "retryDelay": retry_delay},
                ],
            }
        }
    )


# =============================================================================
# is_rate_limited
# =============================================================================


class TestIsRateLimited:
    """rate limit 판정."""

    def test_status_429_regardless_of_message(self):
        assert is_rate_limited(BackendError("anything at all", status_code=429))

    def test_status_429_with_empty_message(self):
        assert is_rate_limited(BackendError("", status_code=429))

    def test_resource_exhausted_in_message(self):
        assert is_rate_limited(BackendError("429 RESOURCE_EXHAUSTED. try later"))

    def test_quota_exceeded_in_message(self):
        assert is_rate_limited(
            BackendError("Quota exceeded for metric generate_requests", status_code=400)
        )

    def test_json_error_code_429(self):
        message = json.dumps({"error": {"code": 429, "message": "slow down"}})
        assert is_rate_limited(BackendError(message))

    def test_json_error_status(self):
        message = json.dumps({"error": {"code": 400, "status": "RESOURCE_EXHAUSTED"}})
        assert is_rate_limited(BackendError(message, status_code=400))

    def test_server_error_is_not_rate_limited(self):
        assert not is_rate_limited(BackendError("Internal error", status_code=500))

    def test_json_other_error_is_not_rate_limited(self):
        message = json.dumps({"error": {"code": 503, "status": "UNAVAILABLE"}})
        assert not is_rate_limited(BackendError(message, status_code=503))

    def test_case_sensitive_markers(self):
        assert not is_rate_limited(BackendError("quota exceeded", status_code=400))

    def test_none_is_not_rate_limited(self):
        assert not is_rate_limited(None)

    def test_plain_exception_uses_str(self):
        assert is_rate_limited(RuntimeError("RESOURCE_EXHAUSTED"))
        assert not is_rate_limited(RuntimeError("boom"))

    def test_sdk_style_code_attribute(self):
        """SDK 예외처럼 code 속성에 상태 코드가 있는 경우."""

        class SdkError(Exception):
            code = 429
            message = "rate limited"

        assert is_rate_limited(SdkError())


# =============================================================================
# parse_retry_delay_ms
# =============================================================================


class TestParseRetryDelay:
    """RetryInfo 대기 시간 추출."""

    def test_fractional_seconds(self):
        assert parse_retry_delay_ms(_retry_message("3.5s")) == 3500

    def test_whole_seconds(self):
        assert parse_retry_delay_ms(_retry_message("42s")) == 42000

    def test_rounds_up(self):
        assert parse_retry_delay_ms(_retry_message("42.854797884s")) == 42855

    def test_sub_millisecond_rounds_up(self):
        assert parse_retry_delay_ms(_retry_message("0.0001s")) == 1

    def test_no_retry_info(self):
        message = json.dumps({"error": {"code": 429, "details": []}})
        assert parse_retry_delay_ms(message) is None

    def test_other_type_ignored(self):
        message = _retry_message("5s", type_name="type.googleapis.com/google.rpc.Help")
        assert parse_retry_delay_ms(message) is None

    def test_unparseable_delay(self):
        assert parse_retry_delay_ms(_retry_message("soon")) is None

    @pytest.mark.parametrize(
        "message",
        ["", "Quota exceeded", "{not json", "[1, 2]", '{"error": "string"}'],
    )
    def test_non_json_message(self, message):
        assert parse_retry_delay_ms(message) is None


# =============================================================================
# classify_rate_limit
# =============================================================================


class TestClassifyRateLimit:
    """RateLimitInfo 생성."""

    def test_rate_limited_with_delay(self, make_rate_limit_error):
        info = classify_rate_limit(make_rate_limit_error("2s"))

        assert info.is_rate_limited is True
        assert info.retry_after_ms == 2000
        assert info.wait_seconds == 2.0

    def test_rate_limited_without_delay(self, make_rate_limit_error):
        info = classify_rate_limit(make_rate_limit_error(None))

        assert info.is_rate_limited is True
        assert info.retry_after_ms is None
        assert info.wait_seconds == 0.0

    def test_not_rate_limited_has_no_delay(self):
        """rate limit이 아니면 RetryInfo가 있어도 대기 없음."""
        message = json.dumps(
            {
                "error": {
                    "code": 500,
                    "details": [
                        {
                            "@type": "type.googleapis.com/google.rpc.RetryInfo",
                            "retryDelay": "9s",
                        }
                    ],
                }
            }
        )
        info = classify_rate_limit(BackendError(message, status_code=500))

        assert info.is_rate_limited is False
        assert info.retry_after_ms is None
