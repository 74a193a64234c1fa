"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- FakeProvider: an AIProvider whose model replies are scripted
- Sample task lists
- Test client (FastAPI TestClient) with the service dependency overridden

No test touches the network; SDK clients are always mocked.
"""

from typing import Generator, List, Optional
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from adhd_assist.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from adhd_assist.ai.providers.config import GeminiConfig
from adhd_assist.deps import get_task_ai_service
from adhd_assist.main import app
from adhd_assist.schemas.task import Task


# ---------------------------------------------------------------------------
# PROVIDER TEST DOUBLE
# ---------------------------------------------------------------------------

def make_response(content: str, success: bool = True, error: Optional[str] = None) -> AIResponse:
    """Build a transport result as a provider would return it."""
    return AIResponse(
        content=content,
        provider=ProviderType.GEMINI,
        model="fake-model",
        usage=TokenUsage(prompt_tokens=10, completion_tokens=5),
        success=success,
        error=error,
    )


class FakeProvider(AIProvider):
    """
    Provider with a scripted transport.

    Each model call pops the next reply: a string becomes a successful
    AIResponse, an AIResponse is returned as-is and an exception is raised.
    Every call is recorded in `calls`.
    """

    provider_type = ProviderType.GEMINI
    config_class = GeminiConfig

    def __init__(self, config_or_api_key="test-key", replies=None):
        self.replies: List = list(replies or [])
        self.calls: List[dict] = []
        self.clients_created = 0
        super().__init__(config_or_api_key)

    def _create_client(self):
        self.clients_created += 1
        return object()

    async def _complete(self, prompt, system_prompt, acknowledgement=None, temperature=0.7, max_tokens=2048):
        self.calls.append({
            "prompt": prompt,
            "system_prompt": system_prompt,
            "acknowledgement": acknowledgement,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, AIResponse):
            return reply
        return make_response(reply)


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


# ---------------------------------------------------------------------------
# TASK FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_tasks() -> List[Task]:
    """Priorities [low, high, medium, high], all open."""
    return [
        Task(id=1, title="Water plants", priority="low", energy_level="low", estimated_duration=5),
        Task(id=2, title="Pay rent", priority="high", due_date="2026-10-20"),
        Task(id=3, title="Reply to emails", priority="medium", estimated_duration=20),
        Task(id=4, title="Book dentist", priority="high", description="Call before noon"),
    ]


# ---------------------------------------------------------------------------
# API CLIENT FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_service() -> MagicMock:
    """A TaskAIService stand-in; AI methods must be set per test as AsyncMocks."""
    return MagicMock()


@pytest.fixture
def client(mock_service: MagicMock) -> Generator[TestClient, None, None]:
    """
    Create a test client whose routes use `mock_service`.

    Overrides the get_task_ai_service dependency.
    """
    app.dependency_overrides[get_task_ai_service] = lambda: mock_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
