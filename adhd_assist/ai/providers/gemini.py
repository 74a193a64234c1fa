"""
Gemini Provider - Google's GenAI SDK.

The model is primed with a two-turn chat history: the role instructions as
a user turn and the acknowledgement as a model turn. The actual request is
then sent as the next message of that chat.
"""

import time
import logging
from typing import Optional, Any, List

from google import genai
from google.genai import types

from adhd_assist.ai.providers.base import (
    AIProvider,
    AIResponse,
    ProviderType,
    TokenUsage,
)
from adhd_assist.ai.providers.config import DEFAULT_SAFETY_SETTINGS, GeminiConfig

logger = logging.getLogger("adhd_assist.ai.gemini")

GEMINI_TOP_K = 32


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI
    config_class = GeminiConfig

    def _create_client(self) -> genai.Client:
        http_options = None
        if self._config.request_timeout:
            # HttpOptions.timeout is in milliseconds
            http_options = types.HttpOptions(timeout=int(self._config.request_timeout * 1000))
        return genai.Client(api_key=self._config.api_key, http_options=http_options)

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
            return self._error("Gemini API key not configured", start_time)

        try:
            history = [types.Content(role="user", parts=[types.Part(text=system_prompt)])]
            if acknowledgement:
                history.append(types.Content(role="model", parts=[types.Part(text=acknowledgement)]))

            chat = self._client.aio.chats.create(
                model=self.model,
                config=self._generation_config(temperature, max_tokens),
                history=history,
            )
            response = await chat.send_message(prompt)

            content = response.text or ""
            if not content.strip():
                return self._error("Empty response from Gemini", start_time)

            return AIResponse(
                content=content,
                provider=self.provider_type,
                model=self.model,
                usage=self._extract_usage(response),
                latency_ms=self._measure_latency(start_time),
                success=True,
                raw_response=response,
            )

        except Exception as e:
            logger.error(f"Gemini generation failed: {e}")
            return self._error(str(e), start_time)

    # --- HELPERS ---

    def _generation_config(self, temperature: float, max_tokens: int) -> types.GenerateContentConfig:
        # Not every Gemini model accepts penalties, so zero values are left out
        penalties = {
            name: getattr(self._config, name)
            for name in ("frequency_penalty", "presence_penalty")
            if getattr(self._config, name)
        }
        return types.GenerateContentConfig(
            temperature=temperature,
            top_k=GEMINI_TOP_K,
            top_p=self._config.top_p,
            max_output_tokens=max_tokens,
            safety_settings=self._safety_settings(),
            **penalties,
        )

    def _safety_settings(self) -> List[types.SafetySetting]:
        settings = self._config.safety_settings
        if settings is None:
            settings = DEFAULT_SAFETY_SETTINGS
        return [
            types.SafetySetting(category=item["category"], threshold=item["threshold"])
            for item in settings
        ]

    def _extract_usage(self, response: Any) -> TokenUsage:
        # The SDK leaves usage_metadata (or its counts) unset when not reported
        usage = response.usage_metadata
        if not usage:
            return TokenUsage()
        return TokenUsage(
            prompt_tokens=usage.prompt_token_count or 0,
            completion_tokens=usage.candidates_token_count or 0,
        )

    def _error(self, msg: str, start_time: float) -> AIResponse:
        return self._create_error_response(error=msg, latency_ms=self._measure_latency(start_time))
