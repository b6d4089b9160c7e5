import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Ensure backend package is importable when running from the repo root
backend_root = Path(__file__).resolve().parents[1]
if str(backend_root) not in sys.path:
    sys.path.insert(0, str(backend_root))


class FakeLLM:
    """Scripted stand-in for the Chat Completions API."""

    def __init__(self):
        self.requests = []
        self._replies = []

    def reply(self, content, status_code=200):
        self._replies.append((status_code, content))

    def fail(self, status_code, text):
        self._replies.append((status_code, text))

    def next_response(self):
        status_code, content = self._replies.pop(0) if self._replies else (200, "Hello from mock")
        return FakeResponse(status_code, content)

    @property
    def last_prompt(self):
        return self.requests[-1]["json"]["messages"][-1]["content"]


class FakeResponse:
    def __init__(self, status_code, content):
        self.status_code = status_code
        self._content = content

    @property
    def text(self):
        return self._content

    def json(self):
        return {"choices": [{"message": {"content": self._content}}]}


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace httpx.AsyncClient used by the generation client to avoid network."""
    from career_tools import llm_client

    llm = FakeLLM()

    class FakeAsyncClient:
        def __init__(self, *args, **kwargs):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def post(self, url, headers=None, json=None):
            llm.requests.append({"url": url, "headers": headers, "json": json})
            return llm.next_response()

    monkeypatch.setattr(llm_client.httpx, "AsyncClient", FakeAsyncClient)
    return llm


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Provide a FastAPI TestClient with an isolated SQLite DB."""
    monkeypatch.setenv("GROQ_API_KEY", "gsk_test_key_1234")
    monkeypatch.setenv("GROQ_BASE_URL", "https://llm.example.test/v1")
    monkeypatch.setenv("AI_MODEL", "llama-3.1-8b-instant")
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'app.db'}")
    monkeypatch.setenv("RECORD_AI_INTERACTIONS", "true")
    monkeypatch.setenv("CORS_ORIGINS", "*")

    # Import app and DB after env is set
    from career_tools import db
    import career_tools.models  # noqa: F401

    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db.Base.metadata.create_all(bind=engine)

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    from career_tools.main import app

    app.dependency_overrides[db.get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
