"""Pytest configuration - loads .env for integration tests, provides a fake transport."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from oaiwire.core import transport
from oaiwire.core.types import HttpRequest, HttpResponse
from oaiwire.sdk import OpenAIClient

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)

CONFIG_ENV_VARS = ("OPENAI_API_KEY", "OPENAI_BASE_URL", "OPENAI_ORG_ID", "OPENAI_PROJECT_ID")


class FakeTransport:
    """Stands in for transport.perform_request and records every call."""

    def __init__(self) -> None:
        self.requests: list[HttpRequest] = []
        self.timeouts: list[float] = []
        self._responses: list[HttpResponse] = []

    def queue(self, status: int = 200, body: bytes = b"{}", content_type: str | None = "application/json") -> None:
        """Queue the next response to return."""
        self._responses.append(HttpResponse(status=status, body=body, content_type=content_type))

    @property
    def last(self) -> HttpRequest:
        return self.requests[-1]

    def __call__(self, request: HttpRequest, timeout: float) -> HttpResponse:
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self._responses:
            return self._responses.pop(0)
        return HttpResponse(status=200, body=b"{}", content_type="application/json")


@pytest.fixture
def clean_env(monkeypatch):
    """Remove OpenAI configuration variables from the environment."""
    for var in CONFIG_ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def fake_transport(monkeypatch) -> FakeTransport:
    """Replace the network transport with a recording fake."""
    fake = FakeTransport()
    monkeypatch.setattr(transport, "perform_request", fake)
    return fake


@pytest.fixture
def client(clean_env, fake_transport) -> OpenAIClient:
    """Client with a test key, wired to the fake transport."""
    return OpenAIClient(api_key="sk-test")
