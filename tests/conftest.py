"""
Shared fixtures: an app wired to an in-memory stand-in for the provider.
"""
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from explain_relay.app import create_app
from explain_relay.config.settings import Settings
from explain_relay.services.completion_client import CompletionClient


def make_completion(content: Optional[str]) -> SimpleNamespace:
    """Build a chat-completions response shaped like the SDK's."""
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(role="assistant", content=content))]
    )


class StubCompletions:
    """Records ``create`` calls and replays a canned response or error."""

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.response: Any = make_completion("This code prints 1.")
        self.error: Optional[Exception] = None

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class StubOpenAI:
    def __init__(self):
        self.completions = StubCompletions()
        self.chat = SimpleNamespace(completions=self.completions)
        self.closed = False

    async def close(self):
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        api_key="test-key",
        llm_base_url="https://llm.example.test/v1/",
        frontend_url="http://localhost:3000",
        enable_request_logging=True,
    )


@pytest.fixture
def openai_stub() -> StubOpenAI:
    return StubOpenAI()


@pytest.fixture
def upstream(openai_stub) -> StubCompletions:
    return openai_stub.completions


@pytest.fixture
def app(settings, openai_stub):
    return create_app(settings, CompletionClient(settings, client=openai_stub))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
