"""
test_api.py - API Routes 유닛 테스트

검증 포인트:
1. X-User-Id 헤더 없으면 401
2. 프로필 → 커버레터 → 인사이트 → 퀴즈 흐름
3. 도메인 에러 → HTTP 상태 매핑 (400 / 404 / 502)
"""

from types import SimpleNamespace

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.app.main import include_api_routers, register_exception_handlers
from src.domain.errors import BackendError

HEADERS = {"X-User-Id": "user_1"}

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def app(store, generator) -> FastAPI:
    """테스트용 FastAPI 앱 (lifespan 없이 state 직접 주입)."""
    app = FastAPI()
    register_exception_handlers(app)
    include_api_routers(app)

    app.state.config = {"interview": {"question_count": 2}}
    app.state.store = store
    app.state.generator = generator

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """테스트 클라이언트."""
    return TestClient(app)


@pytest.fixture
def registered(client: TestClient) -> None:
    """user_1 프로필 등록."""
    response = client.put(
        "/api/users/me",
        json={"industry": "tech-software", "experience": 5, "skills": ["Python"]},
        headers=HEADERS,
    )
    assert response.status_code == 200


# =============================================================================
# 인증
# =============================================================================


class TestAuth:

    @pytest.mark.parametrize(
        "method,path",
        [
            ("get", "/api/users/me"),
            ("get", "/api/resume"),
            ("get", "/api/cover-letters"),
            ("get", "/api/insights"),
            ("get", "/api/interview/assessments"),
        ],
    )
    def test_missing_header_is_401(self, client: TestClient, method, path):
        response = getattr(client, method)(path)

        assert response.status_code == 401

    def test_unsafe_user_id_is_400(self, client: TestClient):
        response = client.get(
            "/api/users/me", headers={"X-User-Id": "user@example.com"}
        )

        assert response.status_code == 400
        assert response.json() == {
            "code": "INVALID_RECORD_ID",
            "value": "user@example.com",
        }


# =============================================================================
# Users
# =============================================================================


class TestUsers:

    def test_profile_roundtrip(self, client: TestClient, registered):
        response = client.get("/api/users/me", headers=HEADERS)

        assert response.status_code == 200
        body = response.json()
        assert body["user_id"] == "user_1"
        assert body["industry"] == "tech-software"
        assert body["skills"] == ["Python"]

    def test_unknown_profile_is_404(self, client: TestClient):
        response = client.get("/api/users/me", headers={"X-User-Id": "ghost"})

        assert response.status_code == 404
        assert response.json()["code"] == "USER_NOT_FOUND"

    def test_empty_industry_rejected(self, client: TestClient):
        response = client.put(
            "/api/users/me", json={"industry": ""}, headers=HEADERS
        )

        assert response.status_code == 422


# =============================================================================
# Resume
# =============================================================================


class TestResume:

    def test_empty_resume_is_null(self, client: TestClient, registered):
        response = client.get("/api/resume", headers=HEADERS)

        assert response.status_code == 200
        assert response.json() is None

    def test_improve(self, client: TestClient, registered, backend):
        backend.invoke.return_value = SimpleNamespace(text=" Improved line ")

        response = client.post(
            "/api/resume/improve",
            json={"current": "did stuff", "type": "summary"},
            headers=HEADERS,
        )

        assert response.status_code == 200
        assert response.json() == {"content": "Improved line"}


# =============================================================================
# Cover Letters
# =============================================================================


class TestCoverLetters:

    def test_generate_get_delete(self, client: TestClient, registered, backend):
        backend.invoke.return_value = SimpleNamespace(text="Dear team,")

        created = client.post(
            "/api/cover-letters",
            json={"job_title": "SRE", "company_name": "Acme"},
            headers=HEADERS,
        )
        assert created.status_code == 200
        letter_id = created.json()["id"]

        fetched = client.get(f"/api/cover-letters/{letter_id}", headers=HEADERS)
        assert fetched.json()["content"] == "Dear team,"

        deleted = client.delete(f"/api/cover-letters/{letter_id}", headers=HEADERS)
        assert deleted.json() == {"status": "deleted", "id": letter_id}

        missing = client.get(f"/api/cover-letters/{letter_id}", headers=HEADERS)
        assert missing.status_code == 404

    def test_unsafe_letter_id_is_400(self, client: TestClient, registered):
        response = client.get("/api/cover-letters/bad.id", headers=HEADERS)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_RECORD_ID"

    def test_delete_missing_is_404(self, client: TestClient, registered):
        response = client.delete("/api/cover-letters/CL-nope", headers=HEADERS)

        assert response.status_code == 404
        assert response.json()["code"] == "COVER_LETTER_NOT_FOUND"

    def test_backend_failure_is_502(self, client: TestClient, registered, backend):
        backend.invoke.side_effect = BackendError("Internal error", status_code=500)

        response = client.post(
            "/api/cover-letters",
            json={"job_title": "SRE", "company_name": "Acme"},
            headers=HEADERS,
        )

        assert response.status_code == 502
        body = response.json()
        assert body["code"] == "BACKEND_ERROR"
        assert body["status_code"] == 500


# =============================================================================
# Insights / Interview
# =============================================================================


class TestInsights:

    def test_generated_on_first_request(self, client: TestClient, registered, backend):
        backend.invoke.return_value = SimpleNamespace(text='{"demandLevel": "High"}')

        response = client.get("/api/insights", headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["demandLevel"] == "High"

    def test_invalid_json_is_502(self, client: TestClient, registered, backend):
        backend.invoke.return_value = SimpleNamespace(text="no json here")

        response = client.get("/api/insights", headers=HEADERS)

        assert response.status_code == 502
        assert response.json()["code"] == "INVALID_JSON"


class TestInterview:

    def test_quiz_uses_configured_count(self, client: TestClient, registered, backend):
        backend.invoke.return_value = SimpleNamespace(
            text='{"questions": [{"question": "Q1"}]}'
        )

        response = client.post("/api/interview/quiz", headers=HEADERS)

        assert response.status_code == 200
        assert response.json() == {"questions": [{"question": "Q1"}]}
        assert "Generate 2 technical" in backend.invoke.await_args.args[1]

    def test_save_and_list_assessments(self, client: TestClient, registered, backend):
        questions = [
            {"question": "Q1", "correctAnswer": "a", "explanation": "e1"},
        ]

        saved = client.post(
            "/api/interview/assessments",
            json={"questions": questions, "answers": ["a"], "score": 100.0},
            headers=HEADERS,
        )

        assert saved.status_code == 200
        assert saved.json()["improvement_tip"] is None
        backend.invoke.assert_not_awaited()

        listed = client.get("/api/interview/assessments", headers=HEADERS)
        assert [r["id"] for r in listed.json()] == [saved.json()["id"]]
