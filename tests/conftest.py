from __future__ import annotations

import json
from pathlib import Path

import httpx
import pytest

from bookingdesk.api.deps import get_brain, get_script_client
from bookingdesk.config import Settings, get_settings
from bookingdesk.integrations.google_script import GoogleScriptClient
from bookingdesk.main import app

BUSINESSES_DIR = str(Path(__file__).resolve().parent.parent / "businesses")
SCRIPT_URL = "https://script.example.test/exec"
SCRIPT_SECRET = "script-secret"
SESSION_SECRET = "session-secret"


class FakeBackend:
    """Stands in for the Apps Script endpoint and records every request body."""

    def __init__(self, body=None, status_code: int = 200, text: str | None = None, exc: Exception | None = None):
        self.body = body if body is not None else {"ok": True}
        self.status_code = status_code
        self.text = text
        self.exc = exc
        self.calls: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(json.loads(request.content))
        if self.exc is not None:
            raise self.exc
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.body)

    def client(self, url: str = SCRIPT_URL, secret: str = SCRIPT_SECRET) -> GoogleScriptClient:
        return GoogleScriptClient(url=url, secret=secret, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        google_script_url=SCRIPT_URL,
        google_script_secret=SCRIPT_SECRET,
        admin_session_secret=SESSION_SECRET,
        admin_password="letmein",
        openai_api_key="",
        business_slug="idee-per-la-testa",
        businesses_dir=BUSINESSES_DIR,
    )


@pytest.fixture
def overrides(settings: Settings):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_brain] = lambda: None
    try:
        yield app.dependency_overrides
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def use_backend(overrides):
    def _use(backend: FakeBackend, **client_kwargs) -> FakeBackend:
        overrides[get_script_client] = lambda: backend.client(**client_kwargs)
        return backend

    return _use


@pytest.fixture
def http():
    """Async HTTP client bound to the ASGI app."""
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")
