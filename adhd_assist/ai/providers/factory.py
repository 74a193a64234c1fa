"""
Provider Factory - builds AI providers by name.

Every creation returns a fresh instance; the factory keeps no state.

Example:
    provider = AIProviderFactory.create_provider("openai", "sk-...")
    provider = AIProviderFactory.create_provider(ProviderType.GEMINI, {"api_key": "...", "temperature": 0.3})
"""

import logging
from typing import Any, Dict, Mapping, Type, Union

from adhd_assist.ai.providers.base import AIProvider, ProviderType
from adhd_assist.ai.providers.config import BaseAIConfig
from adhd_assist.ai.providers.gemini import GeminiProvider
from adhd_assist.ai.providers.openai_provider import OpenAIProvider

logger = logging.getLogger("adhd_assist.ai.factory")

ConfigInput = Union[str, BaseAIConfig, Mapping[str, Any], None]


class UnsupportedProviderError(ValueError):
    """Raised for a provider name that isn't in the registry."""


class AIProviderFactory:
    """Creates providers from a ProviderType (or its string value)."""

    _registry: Dict[ProviderType, Type[AIProvider]] = {
        ProviderType.GEMINI: GeminiProvider,
        ProviderType.OPENAI: OpenAIProvider,
    }

    @staticmethod
    def resolve_type(provider_type: Union[ProviderType, str]) -> ProviderType:
        """
        Normalize a provider name to a ProviderType.

        Raises:
            UnsupportedProviderError: For unknown names
        """
        if isinstance(provider_type, ProviderType):
            return provider_type
        try:
            return ProviderType(str(provider_type).strip().lower())
        except ValueError:
            supported = ", ".join(t.value for t in ProviderType)
            raise UnsupportedProviderError(
                f"Unsupported AI provider: {provider_type!r} (supported: {supported})"
            ) from None

    @classmethod
    def config_class(cls, provider_type: Union[ProviderType, str]) -> Type[BaseAIConfig]:
        """The config dataclass a provider type is built from."""
        return cls._provider_class(cls.resolve_type(provider_type)).config_class

    @classmethod
    def _provider_class(cls, provider_type: ProviderType) -> Type[AIProvider]:
        provider_cls = cls._registry.get(provider_type)
        if provider_cls is None:
            raise UnsupportedProviderError(f"No provider registered for {provider_type.value}")
        return provider_cls

    @classmethod
    def create_provider(
        cls,
        provider_type: Union[ProviderType, str],
        config_or_api_key: ConfigInput = None,
    ) -> AIProvider:
        resolved = cls.resolve_type(provider_type)
        provider_cls = cls._provider_class(resolved)

        logger.debug(f"Creating {resolved.value} provider")
        return provider_cls(config_or_api_key)

    @classmethod
    def create_gemini_provider(cls, config_or_api_key: ConfigInput = None) -> GeminiProvider:
        return cls.create_provider(ProviderType.GEMINI, config_or_api_key)

    @classmethod
    def create_openai_provider(cls, config_or_api_key: ConfigInput = None) -> OpenAIProvider:
        return cls.create_provider(ProviderType.OPENAI, config_or_api_key)
