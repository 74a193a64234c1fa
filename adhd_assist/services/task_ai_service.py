"""
Task AI Service - single point of contact for the task AI features.

Responsibilities:
=================
- Own the active AI provider instance
- Keep one stored configuration per provider type, so switching providers
  never loses the other provider's settings
- Forward the four AI operations to the active provider

NOT Responsible For:
====================
- HTTP request/response handling (router's job)
- Prompting, parsing and fallbacks (the provider's job)
- Reading the environment (only from_settings() does, at startup)

Architecture:
=============
```
┌─────────────┐
│   Router    │  ← HTTP only
└──────┬──────┘
       │
       ▼
┌─────────────┐
│   Service   │  ← Provider ownership + config (this file)
└──────┬──────┘
       │
   ┌───┴────┐
   │        │
   ▼        ▼
┌──────┐ ┌──────┐
│Gemini│ │OpenAI│  ← Providers
└──────┘ └──────┘
```

Provider changes always rebuild the provider from its stored config
instead of mutating the old instance, so a new provider never inherits the
previous one's SDK client. Calls already in flight keep the instance they
started with.

Usage:
======
```python
from adhd_assist.services.task_ai_service import TaskAIService

service = TaskAIService("gemini", {"api_key": "..."})
focus = await service.get_daily_focus_suggestions(tasks, EnergyLevel.HIGH)
service.switch_provider("openai")
```
"""

import logging
from dataclasses import fields
from typing import Optional, Any, Dict, List, Mapping, Sequence, Type, Union

from adhd_assist.ai.monitoring.logger import ai_logger
from adhd_assist.ai.providers.base import AIProvider, ProviderType
from adhd_assist.ai.providers.config import BaseAIConfig, coerce_config, merge_config
from adhd_assist.ai.providers.factory import AIProviderFactory
from adhd_assist.ai.schemas.task_ai import (
    DailyFocusResponse,
    NLPTaskAnalysisResponse,
    TaskBreakdownResponse,
)
from adhd_assist.core.config import Settings
from adhd_assist.schemas.task import EnergyLevel, Task

logger = logging.getLogger("adhd_assist.services.task_ai")

ConfigInput = Union[str, BaseAIConfig, Mapping[str, Any], None]


class TaskAIService:
    """
    Owns the active provider and the per-provider configuration map.

    Args:
        provider_type: Provider active at start ("gemini" or "openai")
        config: Partial configuration applied to the active provider's slot
            (a mapping of fields, a config object or an API key)
        provider_configs: Initial configuration per provider type; missing
            types start from defaults with an empty API key
        factory: Builds providers; replaceable in tests

    Raises:
        UnsupportedProviderError: For an unknown provider type
        ValueError: For unknown or out-of-range config fields
    """

    def __init__(
        self,
        provider_type: Union[ProviderType, str] = ProviderType.GEMINI,
        config: ConfigInput = None,
        *,
        provider_configs: Optional[Mapping[Union[ProviderType, str], ConfigInput]] = None,
        factory: Type[AIProviderFactory] = AIProviderFactory,
    ):
        self._factory = factory
        self._provider_type = factory.resolve_type(provider_type)

        seeds: Dict[ProviderType, ConfigInput] = {}
        for key, value in (provider_configs or {}).items():
            seeds[factory.resolve_type(key)] = value

        self._configs: Dict[ProviderType, BaseAIConfig] = {
            t: coerce_config(factory.config_class(t), seeds.get(t)) for t in ProviderType
        }

        if config is not None:
            self._configs[self._provider_type] = self._apply(self._provider_type, config)

        self._provider = self._build_provider()

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> "TaskAIService":
        """
        Build the service from application settings (environment / .env).

        Used by the composition root at startup.
        """
        shared = {
            "request_timeout": settings.AI_REQUEST_TIMEOUT or None,
            "cache_results": settings.AI_CACHE_RESULTS,
            "cache_ttl": settings.AI_CACHE_TTL,
        }
        provider_configs = {
            ProviderType.GEMINI: {
                "api_key": settings.GEMINI_API_KEY,
                "model_name": settings.GEMINI_MODEL,
                **shared,
            },
            ProviderType.OPENAI: {
                "api_key": settings.OPENAI_API_KEY,
                "model_name": settings.OPENAI_MODEL,
                "organization": settings.OPENAI_ORGANIZATION or None,
                "api_endpoint": settings.OPENAI_API_ENDPOINT,
                **shared,
            },
        }
        return cls(settings.AI_PROVIDER, provider_configs=provider_configs, **kwargs)

    # -----------------------------------------------------------------------
    # PROVIDER MANAGEMENT
    # -----------------------------------------------------------------------

    @property
    def provider_type(self) -> ProviderType:
        return self._provider_type

    @property
    def provider(self) -> AIProvider:
        return self._provider

    def switch_provider(self, provider_type: Union[ProviderType, str]) -> None:
        """
        Make `provider_type` the active provider.

        No-op when it is already active; otherwise the provider is rebuilt
        from that type's stored configuration.
        """
        new_type = self._factory.resolve_type(provider_type)
        if new_type == self._provider_type:
            return

        previous = self._provider_type
        self._provider = self._factory.create_provider(new_type, self._configs[new_type])
        self._provider_type = new_type

        ai_logger.log_event("provider_changed", {
            "from": previous.value,
            "to": new_type.value,
            "model": self._provider.model,
        })

    def get_config(self, provider_type: Union[ProviderType, str, None] = None) -> BaseAIConfig:
        """Return a copy of the stored config for `provider_type` (default: active)."""
        resolved = self._factory.resolve_type(provider_type) if provider_type else self._provider_type
        return coerce_config(type(self._configs[resolved]), self._configs[resolved])

    def update_config(self, **overrides: Any) -> None:
        """Merge `overrides` into the active provider's config and rebuild it."""
        self.update_provider_config(self._provider_type, **overrides)

    def update_provider_config(self, provider_type: Union[ProviderType, str], **overrides: Any) -> None:
        """
        Merge `overrides` into the stored config of `provider_type`.

        The provider is rebuilt only when that type is the active one. A
        failed merge leaves the stored config untouched.
        """
        resolved = self._factory.resolve_type(provider_type)
        merged = merge_config(self._configs[resolved], overrides)

        if resolved == self._provider_type:
            self._provider = self._factory.create_provider(resolved, merged)
        self._configs[resolved] = merged

        ai_logger.log_event("config_updated", {
            "provider": resolved.value,
            "fields": sorted(overrides),
            "active": resolved == self._provider_type,
        })

    def describe(self) -> Dict[str, Any]:
        """Active provider and its config, API key masked."""
        return {
            "provider": self._provider_type.value,
            "model": self._provider.model,
            "configured": self._provider.is_configured,
            "config": self._configs[self._provider_type].to_dict(mask_secrets=True),
        }

    def _apply(self, provider_type: ProviderType, config: ConfigInput) -> BaseAIConfig:
        """
        Merge a constructor override over the seeded slot.

        An API key string replaces only the key. A config object contributes
        the fields it sets away from their defaults (only the shared fields
        when it belongs to the other provider).
        """
        seeded = self._configs[provider_type]
        if isinstance(config, str):
            return merge_config(seeded, {"api_key": config})
        if isinstance(config, BaseAIConfig):
            names = fields(seeded) if isinstance(config, type(seeded)) else fields(BaseAIConfig)
            defaults = type(config)()
            overrides = {
                f.name: getattr(config, f.name)
                for f in names
                if getattr(config, f.name) != getattr(defaults, f.name)
            }
            return merge_config(seeded, overrides)
        if isinstance(config, Mapping):
            return merge_config(seeded, config)
        return coerce_config(self._factory.config_class(provider_type), config)

    def _build_provider(self) -> AIProvider:
        provider = self._factory.create_provider(self._provider_type, self._configs[self._provider_type])
        logger.info(f"Task AI service using {self._provider_type.value} ({provider.model})")
        return provider

    # -----------------------------------------------------------------------
    # AI OPERATIONS (delegated to the active provider)
    # -----------------------------------------------------------------------

    async def analyze_and_breakdown_task(
        self,
        title: str,
        energy_level: Union[EnergyLevel, str],
    ) -> TaskBreakdownResponse:
        return await self._provider.analyze_and_breakdown_task(title, energy_level)

    async def get_daily_focus_suggestions(
        self,
        tasks: Sequence[Task],
        current_energy_level: Union[EnergyLevel, str],
    ) -> DailyFocusResponse:
        return await self._provider.get_daily_focus_suggestions(tasks, current_energy_level)

    async def predict_task_emoji(self, title: str, description: Optional[str] = None) -> List[str]:
        return await self._provider.predict_task_emoji(title, description)

    async def analyze_natural_language_task(self, text: str) -> NLPTaskAnalysisResponse:
        return await self._provider.analyze_natural_language_task(text)
