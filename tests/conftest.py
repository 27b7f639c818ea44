"""
Pytest configuration and fixtures
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from backend import app
from interview_prep.database import DatabaseManager, get_db_manager
from interview_prep.services.llm import get_completion_client
from interview_prep.services.storage import LocalImageStorage, get_image_storage


class FakeCompletionClient:
    """Stands in for Gemini: returns queued completions in order."""

    def __init__(self):
        self.responses = []
        self.prompts = []

    def queue(self, *responses):
        self.responses.extend(responses)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError("No fake completion queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def db_manager():
    manager = DatabaseManager("sqlite://", poolclass=StaticPool)
    manager.connect()
    yield manager
    manager.dispose()


@pytest.fixture
def db(db_manager):
    session = db_manager.session()
    yield session
    session.close()


@pytest.fixture
def fake_llm():
    return FakeCompletionClient()


@pytest.fixture
def client(db_manager, fake_llm, tmp_path):
    app.dependency_overrides[get_db_manager] = lambda: db_manager
    app.dependency_overrides[get_completion_client] = lambda: fake_llm
    app.dependency_overrides[get_image_storage] = lambda: LocalImageStorage(
        directory=str(tmp_path), base_url="http://testserver"
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    """Register a user and return (user_json, auth_headers)."""

    def _register(email="alice@prepmail.io", password="s3cret-pass", full_name="Alice Doe"):
        r = client.post(
            "/api/v1/auth/register",
            json={"fullName": full_name, "email": email, "password": password},
        )
        assert r.status_code == 201, r.text
        body = r.json()
        return body["user"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture
def auth_headers(register_user):
    _, headers = register_user()
    return headers
