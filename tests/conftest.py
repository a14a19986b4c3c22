"""测试公共夹具"""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest

from talenthub.integrations.firebase_auth import FirebaseAuthAPI
from talenthub.integrations.gemini_api import GeminiAPI
from talenthub.utils.helpers import encode_data_uri

PDF_MEDIA_TYPE = "application/pdf"
DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
RESUME_BYTES = b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\nJane Applicant - Web Developer\n%%EOF"

WORK_EXPERIENCE = (
    "Three years building React and Node.js applications for an e-commerce startup, "
    "including payment integration and performance tuning."
)


class FakeModelService:
    """模拟 Gemini generateContent 接口"""

    def __init__(self, output: Any = None, raw_text: Optional[str] = None,
                 status_code: int = 200, error: Optional[Exception] = None,
                 body: Optional[Dict[str, Any]] = None):
        self.output = output
        self.raw_text = raw_text
        self.status_code = status_code
        self.error = error
        self.body = body
        self.requests: List[Dict[str, Any]] = []
        self.urls: List[str] = []
        self.headers: List[httpx.Headers] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(json.loads(request.content))
        self.urls.append(str(request.url))
        self.headers.append(request.headers)

        if self.error is not None:
            raise self.error
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"code": self.status_code, "message": "unavailable"}})
        if self.body is not None:
            return httpx.Response(200, json=self.body)

        text = self.raw_text if self.raw_text is not None else json.dumps(self.output)
        return httpx.Response(200, json={
            "candidates": [{
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }],
            "usageMetadata": {"promptTokenCount": 120, "candidatesTokenCount": 60},
        })

    def api(self) -> GeminiAPI:
        return GeminiAPI(transport=httpx.MockTransport(self))

    @property
    def last_parts(self) -> List[Dict[str, Any]]:
        return self.requests[-1]["contents"][0]["parts"]

    @property
    def last_prompt_text(self) -> str:
        return "".join(part.get("text", "") for part in self.last_parts)


class FakeIdentityProvider:
    """模拟 Firebase Identity Toolkit 接口"""

    def __init__(self, password: str = "correct-horse"):
        self.password = password
        self.accounts: Dict[str, str] = {"jane@example.com": password}
        self.calls: List[str] = []

    def _error(self, message: str) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 400, "message": message}})

    def _ok(self, email: str, display_name: str = "") -> httpx.Response:
        return httpx.Response(200, json={
            "localId": f"uid-{email.split('@')[0]}",
            "email": email,
            "idToken": "id-token",
            "refreshToken": "refresh-token",
            "displayName": display_name,
        })

    def __call__(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.rsplit("/", 1)[-1]
        self.calls.append(endpoint)
        body = json.loads(request.content)

        if endpoint == "accounts:signInWithPassword":
            if self.accounts.get(body["email"]) != body["password"]:
                return self._error("INVALID_LOGIN_CREDENTIALS")
            return self._ok(body["email"])
        if endpoint == "accounts:signUp":
            if body["email"] in self.accounts:
                return self._error("EMAIL_EXISTS")
            if len(body["password"]) < 6:
                return self._error("WEAK_PASSWORD : Password should be at least 6 characters")
            self.accounts[body["email"]] = body["password"]
            return self._ok(body["email"])
        if endpoint == "accounts:update":
            return httpx.Response(200, json={"displayName": body.get("displayName")})
        return httpx.Response(404, json={"error": {"message": "NOT_FOUND"}})

    def api(self) -> FirebaseAuthAPI:
        return FirebaseAuthAPI(transport=httpx.MockTransport(self))


@pytest.fixture
def resume_payload() -> Dict[str, Any]:
    return {"content": RESUME_BYTES, "media_type": PDF_MEDIA_TYPE}


@pytest.fixture
def resume_data_uri() -> str:
    return encode_data_uri(RESUME_BYTES, PDF_MEDIA_TYPE)


@pytest.fixture
def rating_payload(resume_payload) -> Dict[str, Any]:
    return {
        "jobField": "Web Development",
        "resume": resume_payload,
        "workExperience": WORK_EXPERIENCE,
    }


@pytest.fixture
def skill_gap_output() -> Dict[str, Any]:
    return {
        "analysis": [
            {"subject": "Python", "your": 70, "required": 85, "fullMark": 100},
            {"subject": "SQL", "your": 60, "required": 80, "fullMark": 100},
            {"subject": "REST APIs", "your": 75, "required": 85, "fullMark": 100},
            {"subject": "Docker", "your": 40, "required": 70, "fullMark": 100},
            {"subject": "System Design", "your": 35, "required": 75, "fullMark": 100},
            {"subject": "Testing", "your": 55, "required": 70},
        ],
        "recommendations": [
            {"skill": "System Design", "recommendation": "Study distributed system patterns and design a small service end to end."},
            {"skill": "Docker", "recommendation": "Containerize an existing project and deploy it with docker compose."},
        ],
        "score": 62,
    }


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()
