"""
OpenAI Provider - Chat Completions client.

The role instructions go out as the system message and the request as the
user message. The acknowledgement is not sent; a system message needs no
priming reply.

api_endpoint is the API base URL (https://api.openai.com/v1 by default),
so any OpenAI-compatible server can be used. A full
".../chat/completions" URL is accepted too.

API Documentation: https://platform.openai.com/docs/api-reference
"""

import time
import logging
from typing import Optional

from openai import AsyncOpenAI

from adhd_assist.ai.providers.base import (
    AIProvider,
    AIResponse,
    ProviderType,
    TokenUsage,
)
from adhd_assist.ai.providers.config import DEFAULT_OPENAI_ENDPOINT, OpenAIConfig

logger = logging.getLogger("adhd_assist.ai.openai")

CHAT_COMPLETIONS_PATH = "/chat/completions"


class OpenAIProvider(AIProvider):
    """
    OpenAI GPT provider implementation.

    Usage:
        provider = OpenAIProvider("sk-...")
        emojis = await provider.predict_task_emoji("Pay rent")

        provider = OpenAIProvider(OpenAIConfig(api_key="sk-...", organization="org-..."))
    """

    provider_type = ProviderType.OPENAI
    config_class = OpenAIConfig
    client_fields = AIProvider.client_fields + ("organization", "api_endpoint")

    def _create_client(self) -> AsyncOpenAI:
        kwargs = {"api_key": self._config.api_key, "base_url": self._base_url()}
        if self._config.organization:
            kwargs["organization"] = self._config.organization
        if self._config.request_timeout:
            kwargs["timeout"] = self._config.request_timeout
        return AsyncOpenAI(**kwargs)

    def _base_url(self) -> str:
        endpoint = (self._config.api_endpoint or DEFAULT_OPENAI_ENDPOINT).rstrip("/")
        if endpoint.endswith(CHAT_COMPLETIONS_PATH):
            endpoint = endpoint[:-len(CHAT_COMPLETIONS_PATH)]
        return endpoint

    async def _complete(
        self,
        prompt: str,
        system_prompt: str,
        acknowledgement: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> AIResponse:
        start_time = time.time()

        if not self._client:
            return self._create_error_response(
                error="OpenAI API key not configured",
                latency_ms=self._measure_latency(start_time)
            )

        try:
            messages = [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ]

            response = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                top_p=self._config.top_p,
                frequency_penalty=self._config.frequency_penalty,
                presence_penalty=self._config.presence_penalty,
            )

            latency_ms = self._measure_latency(start_time)

            if not response.choices:
                return self._create_error_response(error="OpenAI returned no choices", latency_ms=latency_ms)

            content = response.choices[0].message.content or ""
            if not content.strip():
                return self._create_error_response(error="Empty response from OpenAI", latency_ms=latency_ms)

            usage = TokenUsage(
                prompt_tokens=response.usage.prompt_tokens if response.usage else 0,
                completion_tokens=response.usage.completion_tokens if response.usage else 0,
            )

            logger.info(f"OpenAI request completed in {latency_ms:.0f}ms, tokens: {usage.total_tokens}")

            return AIResponse(
                content=content,
                provider=self.provider_type,
                model=self.model,
                usage=usage,
                latency_ms=latency_ms,
                success=True,
                raw_response=response,
            )

        except Exception as e:
            latency_ms = self._measure_latency(start_time)
            logger.error(f"OpenAI generation failed: {e}")
            return self._create_error_response(error=str(e), latency_ms=latency_ms)
