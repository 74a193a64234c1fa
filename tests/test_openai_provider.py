"""
Tests for the OpenAI provider transport.

AsyncOpenAI is replaced with a MagicMock; chat.completions.create is an
AsyncMock returning a fake completion.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from adhd_assist.ai.providers.base import ProviderType
from adhd_assist.ai.providers.config import OpenAIConfig
from adhd_assist.ai.providers.openai_provider import OpenAIProvider


def _completion(content, prompt_tokens=20, completion_tokens=10):
    completion = MagicMock()
    completion.choices = [MagicMock()]
    completion.choices[0].message.content = content
    completion.usage.prompt_tokens = prompt_tokens
    completion.usage.completion_tokens = completion_tokens
    return completion


@pytest.fixture
def mock_openai_cls():
    with patch("adhd_assist.ai.providers.openai_provider.AsyncOpenAI") as openai_cls:
        openai_cls.return_value.chat.completions.create = AsyncMock(return_value=_completion('["🧹"]'))
        yield openai_cls


def _create_mock(openai_cls) -> AsyncMock:
    return openai_cls.return_value.chat.completions.create


class TestOpenAIClient:
    """Tests for SDK client construction."""

    def test_defaults(self, mock_openai_cls):
        provider = OpenAIProvider("sk-test")

        assert provider.provider_type == ProviderType.OPENAI
        assert provider.model == "gpt-4o"
        kwargs = mock_openai_cls.call_args.kwargs
        assert kwargs["api_key"] == "sk-test"
        assert kwargs["base_url"] == "https://api.openai.com/v1"
        assert "organization" not in kwargs
        assert "timeout" not in kwargs

    def test_organization_endpoint_and_timeout(self, mock_openai_cls):
        OpenAIProvider(OpenAIConfig(
            api_key="sk-test",
            organization="org-123",
            api_endpoint="https://proxy.example.com/v1/",
            request_timeout=15,
        ))

        kwargs = mock_openai_cls.call_args.kwargs
        assert kwargs["organization"] == "org-123"
        assert kwargs["base_url"] == "https://proxy.example.com/v1"
        assert kwargs["timeout"] == 15

    def test_full_chat_completions_url_accepted(self, mock_openai_cls):
        OpenAIProvider({"api_key": "sk", "api_endpoint": "https://api.openai.com/v1/chat/completions"})

        assert mock_openai_cls.call_args.kwargs["base_url"] == "https://api.openai.com/v1"

    def test_organization_change_rebuilds_client(self, mock_openai_cls):
        provider = OpenAIProvider("sk-test")

        provider.update_config(organization="org-999")

        assert mock_openai_cls.call_count == 2

    def test_temperature_change_keeps_client(self, mock_openai_cls):
        provider = OpenAIProvider("sk-test")

        provider.update_config(temperature=0.1)

        assert mock_openai_cls.call_count == 1

    def test_no_key_no_client(self, mock_openai_cls):
        provider = OpenAIProvider(None)

        assert provider.is_configured is False
        mock_openai_cls.assert_not_called()


class TestOpenAIComplete:
    """Tests for the chat completion request."""

    @pytest.mark.asyncio
    async def test_messages_and_parameters(self, mock_openai_cls):
        provider = OpenAIProvider(OpenAIConfig(api_key="sk", top_p=0.9, frequency_penalty=0.4))

        response = await provider._complete("the prompt", "the role", acknowledgement="ignored",
                                            temperature=0.2, max_tokens=512)

        assert response.success is True
        assert response.content == '["🧹"]'
        assert response.usage.total_tokens == 30

        kwargs = _create_mock(mock_openai_cls).call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["messages"] == [
            {"role": "system", "content": "the role"},
            {"role": "user", "content": "the prompt"},
        ]
        assert kwargs["temperature"] == 0.2
        assert kwargs["max_tokens"] == 512
        assert kwargs["top_p"] == 0.9
        assert kwargs["frequency_penalty"] == 0.4
        assert kwargs["presence_penalty"] == 0.0

    @pytest.mark.asyncio
    async def test_api_error_becomes_error_response(self, mock_openai_cls):
        _create_mock(mock_openai_cls).side_effect = RuntimeError("401 invalid api key")
        provider = OpenAIProvider("sk")

        response = await provider._complete("p", "r")

        assert response.success is False
        assert "401" in response.error

    @pytest.mark.asyncio
    async def test_empty_content_is_an_error(self, mock_openai_cls):
        _create_mock(mock_openai_cls).return_value = _completion(None)
        provider = OpenAIProvider("sk")

        response = await provider._complete("p", "r")

        assert response.success is False

    @pytest.mark.asyncio
    async def test_no_choices_is_an_error(self, mock_openai_cls):
        completion = _completion("x")
        completion.choices = []
        _create_mock(mock_openai_cls).return_value = completion
        provider = OpenAIProvider("sk")

        response = await provider._complete("p", "r")

        assert response.success is False

    @pytest.mark.asyncio
    async def test_missing_key_is_an_error(self):
        provider = OpenAIProvider("")

        response = await provider._complete("p", "r")

        assert response.success is False
        assert "not configured" in response.error


class TestOpenAIOperations:
    """Operations through the mocked SDK."""

    @pytest.mark.asyncio
    async def test_emoji_prediction(self, mock_openai_cls):
        _create_mock(mock_openai_cls).return_value = _completion('```\n["💸", "🏠"]\n```')
        provider = OpenAIProvider("sk")

        result = await provider.predict_task_emoji("Pay rent")

        assert result == ["💸", "🏠", "⏰", "🔔", "📌"]
        assert _create_mock(mock_openai_cls).call_args.kwargs["max_tokens"] == 1024

    @pytest.mark.asyncio
    async def test_nlp_uses_low_temperature(self, mock_openai_cls):
        _create_mock(mock_openai_cls).return_value = _completion('{"title": "Pay rent", "category": "personal"}')
        provider = OpenAIProvider("sk")

        result = await provider.analyze_natural_language_task("pay rent by friday")

        assert result.title == "Pay rent"
        assert _create_mock(mock_openai_cls).call_args.kwargs["temperature"] == 0.1
