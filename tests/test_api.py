"""HTTP 接口测试"""

import pytest
from fastapi.testclient import TestClient

from talenthub.core import session as session_module
from talenthub.core.session import init_session_manager
from talenthub.integrations import gemini_api
from talenthub.main import GENERIC_FAILURE_MESSAGE, app

from conftest import WORK_EXPERIENCE, FakeModelService


@pytest.fixture
def model_service(monkeypatch):
    service = FakeModelService()
    monkeypatch.setattr(gemini_api, "_api_instance", service.api())
    return service


@pytest.fixture
def client(monkeypatch, identity_provider, model_service):
    monkeypatch.setattr(session_module, "_session_manager", None)
    init_session_manager(identity_provider.api())
    with TestClient(app) as test_client:
        yield test_client


def _login(client, role="applicant"):
    response = client.post("/auth/login", json={
        "email": "jane@example.com", "password": "correct-horse", "role": role,
    })
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['session_id']}"}


@pytest.fixture
def applicant(client):
    return _login(client, "applicant")


@pytest.fixture
def recruiter(client):
    return _login(client, "recruiter")


class TestPublicEndpoints:

    def test_root_and_health(self, client):
        assert client.get("/").json()["status"] == "running"
        assert client.get("/health").json()["status"] == "healthy"

    @pytest.mark.parametrize("method,path", [
        ("get", "/api/navigation"),
        ("get", "/api/talent"),
        ("post", "/api/resume-rating"),
        ("get", "/auth/session"),
    ])
    def test_requires_session(self, client, method, path):
        kwargs = {"json": {}} if method == "post" else {}
        response = getattr(client, method)(path, **kwargs)
        assert response.status_code == 401

    def test_unknown_session(self, client):
        response = client.get("/auth/session", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401


class TestAuth:

    def test_login_returns_session(self, client):
        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "correct-horse"})

        body = response.json()
        assert body["state"] == "authenticated"
        assert body["role"] == "applicant"
        assert body["email"] == "jane@example.com"

    def test_wrong_password(self, client):
        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "not-the-one"})

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_LOGIN_CREDENTIALS"

    def test_short_password_rejected_before_provider(self, client, identity_provider):
        response = client.post("/auth/login", json={"email": "jane@example.com", "password": "123"})

        assert response.status_code == 422
        assert identity_provider.calls == []

    def test_signup_existing_email(self, client):
        response = client.post("/auth/signup", json={"email": "jane@example.com", "password": "secret-pass"})

        assert response.status_code == 401
        assert response.json()["code"] == "EMAIL_EXISTS"

    def test_signup_then_session(self, client):
        response = client.post("/auth/signup", json={
            "email": "new@example.com", "password": "secret-pass", "display_name": "New User",
        })
        headers = {"Authorization": f"Bearer {response.json()['session_id']}"}

        body = client.get("/auth/session", headers=headers).json()
        assert body["display_name"] == "New User"

    def test_logout(self, client, applicant):
        assert client.post("/auth/logout", headers=applicant).status_code == 200
        assert client.get("/auth/session", headers=applicant).status_code == 401

    def test_role_switch_changes_navigation(self, client, applicant):
        tools = client.get("/api/navigation", headers=applicant).json()["tools"]
        assert [tool["key"] for tool in tools] == ["resume-screening", "skill-gap-analysis", "wellness", "settings"]

        response = client.put("/auth/role", json={"role": "recruiter"}, headers=applicant)
        assert response.json()["role"] == "recruiter"

        tools = client.get("/api/navigation", headers=applicant).json()["tools"]
        assert [tool["key"] for tool in tools] == ["talent-sourcing", "appraisal", "settings"]


class TestApplicantTools:

    def test_resume_rating(self, client, applicant, model_service, resume_data_uri):
        model_service.output = {"score": 81, "aiComments": "Strong fit for web roles."}

        response = client.post("/api/resume-rating", headers=applicant, json={
            "jobField": "Web Development",
            "resumeDataUri": resume_data_uri,
            "workExperience": WORK_EXPERIENCE,
        })

        assert response.status_code == 200
        assert response.json() == {"score": 81.0, "aiComments": "Strong fit for web roles."}

    def test_invalid_input_lists_every_field(self, client, applicant, model_service):
        response = client.post("/api/resume-rating", headers=applicant, json={
            "jobField": "", "workExperience": "too short",
        })

        assert response.status_code == 422
        body = response.json()
        assert {v["field"] for v in body["violations"]} == {"job_field", "resume", "work_experience"}
        assert body["errors"]["resume"]
        assert model_service.requests == []

    def test_model_failure_returns_generic_message(self, client, applicant, model_service, resume_data_uri):
        model_service.status_code = 503

        response = client.post("/api/skill-gap", headers=applicant, json={
            "resumeDataUri": resume_data_uri, "targetRole": "Backend Developer",
        })

        assert response.status_code == 502
        assert response.json() == {"detail": GENERIC_FAILURE_MESSAGE}

    def test_schema_violation_returns_generic_message(self, client, applicant, model_service):
        model_service.output = {"advice": "missing the suggestion key"}

        response = client.post("/api/wellbeing", headers=applicant, json={"mood": "Tired"})

        assert response.status_code == 502
        assert response.json()["detail"] == GENERIC_FAILURE_MESSAGE

    def test_skill_gap(self, client, applicant, model_service, resume_data_uri, skill_gap_output):
        model_service.output = skill_gap_output

        response = client.post("/api/skill-gap", headers=applicant, json={
            "resumeDataUri": resume_data_uri, "targetRole": "Backend Developer",
        })

        body = response.json()
        assert response.status_code == 200
        assert len(body["analysis"]) == 6
        assert all(entry["fullMark"] == 100 for entry in body["analysis"])
        assert body["score"] == 62

    def test_recruiter_tools_forbidden(self, client, applicant):
        assert client.get("/api/talent", headers=applicant).status_code == 403
        assert client.post("/api/appraisal", headers=applicant, json={}).status_code == 403


class TestRecruiterTools:

    def test_talent_search(self, client, recruiter):
        response = client.get("/api/talent", headers=recruiter, params={"search": "python", "min_score": 96})

        body = response.json()
        assert body["total"] == 1
        assert body["candidates"][0]["name"] == "Sophia Loren"

    def test_talent_search_invalid_filter(self, client, recruiter):
        response = client.get("/api/talent", headers=recruiter, params={"min_score": 150})
        assert response.status_code == 422

    def test_talent_roles(self, client, recruiter):
        roles = client.get("/api/talent/roles", headers=recruiter).json()["roles"]
        assert "DevOps Engineer" in roles

    def test_appraisal(self, client, recruiter, model_service):
        model_service.output = {
            "summary": "Dependable.",
            "keyInsights": "Owns incidents end to end.",
            "recommendations": "Lead a project next quarter.",
        }

        response = client.post("/api/appraisal", headers=recruiter, json={
            "employeeName": "Jane Smith",
            "jobTitle": "Software Engineer",
            "feedbackText": "Jane handled every production incident this quarter and mentored two new hires.",
        })

        assert response.status_code == 200
        assert response.json()["keyInsights"] == "Owns incidents end to end."

    def test_applicant_tools_forbidden(self, client, recruiter):
        response = client.post("/api/wellbeing", headers=recruiter, json={"mood": "Fine"})
        assert response.status_code == 403
