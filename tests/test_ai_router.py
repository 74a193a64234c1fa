"""
Tests for the AI Router - HTTP surface of the task AI features.

The TaskAIService is replaced through app.dependency_overrides (see the
`client` fixture), so these tests cover request validation, camelCase
serialization and error mapping only.
"""

from unittest.mock import AsyncMock, patch

from adhd_assist.ai.fallbacks import fallback_focus_suggestions, fallback_task_breakdown
from adhd_assist.ai.providers.config import GeminiConfig
from adhd_assist.ai.providers.factory import UnsupportedProviderError
from adhd_assist.ai.schemas.task_ai import NLPTaskAnalysisResponse
from adhd_assist.deps import get_task_ai_service
from adhd_assist.main import app
from adhd_assist.schemas.task import CategoryType, EnergyLevel, PriorityLevel
from adhd_assist.services.task_ai_service import TaskAIService


STATUS = {
    "provider": "gemini",
    "model": "gemini-2.5-flash",
    "configured": True,
    "config": {"api_key": "****1234", "temperature": 0.7},
}


class TestHealth:
    """Tests for /health."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestBreakdownEndpoint:
    """Tests for POST /api/tasks/breakdown."""

    def test_returns_camel_case_breakdown(self, client, mock_service):
        mock_service.analyze_and_breakdown_task = AsyncMock(return_value=fallback_task_breakdown("Clean kitchen"))

        response = client.post("/api/tasks/breakdown", json={"title": "Clean kitchen", "energyLevel": "low"})

        assert response.status_code == 200
        data = response.json()
        assert data["priority"] == "medium"
        assert data["estimatedDuration"] == 15
        assert data["steps"][0]["estimatedDuration"] == 5
        mock_service.analyze_and_breakdown_task.assert_awaited_once_with("Clean kitchen", EnergyLevel.LOW)

    def test_energy_level_defaults_to_medium(self, client, mock_service):
        mock_service.analyze_and_breakdown_task = AsyncMock(return_value=fallback_task_breakdown("Read"))

        client.post("/api/tasks/breakdown", json={"title": "Read"})

        mock_service.analyze_and_breakdown_task.assert_awaited_once_with("Read", EnergyLevel.MEDIUM)

    def test_missing_title_rejected(self, client, mock_service):
        response = client.post("/api/tasks/breakdown", json={"energyLevel": "low"})

        assert response.status_code == 422

    def test_invalid_energy_level_rejected(self, client, mock_service):
        response = client.post("/api/tasks/breakdown", json={"title": "Read", "energyLevel": "sleepy"})

        assert response.status_code == 422


class TestDailyFocusEndpoint:
    """Tests for POST /api/focus/daily."""

    def test_tasks_parsed_from_camel_case(self, client, mock_service, sample_tasks):
        mock_service.get_daily_focus_suggestions = AsyncMock(return_value=fallback_focus_suggestions(sample_tasks))
        payload = {
            "tasks": [
                {"id": 1, "title": "Water plants", "priority": "low", "energyLevel": "low",
                 "estimatedDuration": 5, "completed": False},
                {"id": 2, "title": "Pay rent", "priority": "high", "dueDate": "2026-10-20"},
            ],
            "energyLevel": "high",
        }

        response = client.post("/api/focus/daily", json=payload)

        assert response.status_code == 200
        data = response.json()
        assert [t["taskId"] for t in data["topTasks"]] == [2, 4, 3]
        assert data["motivationalMessage"] == "Focus on one task at a time!"

        tasks, energy = mock_service.get_daily_focus_suggestions.await_args.args
        assert [t.id for t in tasks] == [1, 2]
        assert tasks[0].energy_level == EnergyLevel.LOW
        assert energy == EnergyLevel.HIGH

    def test_empty_body_uses_defaults(self, client, mock_service):
        mock_service.get_daily_focus_suggestions = AsyncMock(return_value=fallback_focus_suggestions([]))

        response = client.post("/api/focus/daily", json={})

        assert response.status_code == 200
        assert response.json()["topTasks"] == []
        mock_service.get_daily_focus_suggestions.assert_awaited_once_with([], EnergyLevel.MEDIUM)


class TestEmojiEndpoint:
    """Tests for POST /api/tasks/emoji-suggestions."""

    def test_returns_emojis(self, client, mock_service):
        mock_service.predict_task_emoji = AsyncMock(return_value=["🧹", "🍽️", "🧽", "🔔", "📌"])

        response = client.post("/api/tasks/emoji-suggestions", json={"title": "Clean kitchen", "description": "Dishes"})

        assert response.status_code == 200
        assert response.json() == {"emojis": ["🧹", "🍽️", "🧽", "🔔", "📌"]}
        mock_service.predict_task_emoji.assert_awaited_once_with("Clean kitchen", "Dishes")


class TestAnalyzeNlpEndpoint:
    """Tests for POST /api/tasks/analyze-nlp."""

    def test_returns_analysis(self, client, mock_service):
        mock_service.analyze_natural_language_task = AsyncMock(return_value=NLPTaskAnalysisResponse(
            title="Call the dentist",
            priority=PriorityLevel.HIGH,
            energy_level=EnergyLevel.LOW,
            due_date="2026-10-18",
            category=CategoryType.HEALTH,
            estimated_duration=10,
        ))

        response = client.post("/api/tasks/analyze-nlp", json={"input": "Call the dentist tomorrow"})

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Call the dentist"
        assert data["energyLevel"] == "low"
        assert data["dueDate"] == "2026-10-18"
        assert data["category"] == "health"
        assert data["estimatedDuration"] == 10

    def test_input_too_short(self, client, mock_service):
        response = client.post("/api/tasks/analyze-nlp", json={"input": "hi"})

        assert response.status_code == 422


class TestProviderEndpoints:
    """Tests for /api/ai/provider and /api/ai/config."""

    def test_get_provider(self, client, mock_service):
        mock_service.describe.return_value = STATUS

        response = client.get("/api/ai/provider")

        assert response.status_code == 200
        assert response.json()["provider"] == "gemini"
        assert response.json()["config"]["api_key"] == "****1234"

    def test_switch_provider(self, client, mock_service):
        mock_service.describe.return_value = {**STATUS, "provider": "openai", "model": "gpt-4o"}

        response = client.put("/api/ai/provider", json={"provider": "openai"})

        assert response.status_code == 200
        assert response.json()["provider"] == "openai"
        mock_service.switch_provider.assert_called_once_with("openai")

    def test_switch_to_unknown_provider_is_400(self, client, mock_service):
        mock_service.switch_provider.side_effect = UnsupportedProviderError("Unsupported AI provider: 'llama'")

        response = client.put("/api/ai/provider", json={"provider": "llama"})

        assert response.status_code == 400
        assert "llama" in response.json()["detail"]

    def test_update_active_config(self, client, mock_service):
        mock_service.describe.return_value = STATUS

        response = client.patch("/api/ai/config", json={"overrides": {"temperature": 0.3}})

        assert response.status_code == 200
        mock_service.update_config.assert_called_once_with(temperature=0.3)

    def test_update_named_provider_config(self, client, mock_service):
        mock_service.describe.return_value = STATUS

        response = client.patch("/api/ai/config", json={"provider": "openai", "overrides": {"api_key": "sk-new"}})

        assert response.status_code == 200
        mock_service.update_provider_config.assert_called_once_with("openai", api_key="sk-new")

    def test_invalid_config_is_400(self, client, mock_service):
        mock_service.update_config.side_effect = ValueError("Unknown GeminiConfig field(s): colour")

        response = client.patch("/api/ai/config", json={"overrides": {"colour": "blue"}})

        assert response.status_code == 400
        assert "colour" in response.json()["detail"]

    def test_wrongly_typed_overrides_are_400_and_leave_config(self, client):
        with patch("adhd_assist.ai.providers.gemini.genai.Client"):
            service = TaskAIService("gemini", {"api_key": "k"})
        app.dependency_overrides[get_task_ai_service] = lambda: service

        for overrides in ({"max_tokens": 100.7}, {"cache_results": "no"},
                          {"model_name": 42}, {"safety_settings": "abc"}):
            response = client.patch("/api/ai/config", json={"overrides": overrides})

            assert response.status_code == 400

        assert service.get_config() == GeminiConfig(api_key="k")
