"""
AI Providers Module - interchangeable LLM backends for the task AI.

- Google Gemini (default)
- OpenAI (GPT-4o or any OpenAI-compatible endpoint)

Each provider exposes the same four operations, so the TaskAIService can
switch between them at runtime:
    breakdown = await provider.analyze_and_breakdown_task(title, energy_level)
"""

from adhd_assist.ai.providers.base import AIProvider, AIResponse, ProviderType, TokenUsage
from adhd_assist.ai.providers.config import BaseAIConfig, GeminiConfig, OpenAIConfig
from adhd_assist.ai.providers.factory import AIProviderFactory, UnsupportedProviderError
from adhd_assist.ai.providers.gemini import GeminiProvider
from adhd_assist.ai.providers.openai_provider import OpenAIProvider

__all__ = [
    "AIProvider",
    "AIResponse",
    "ProviderType",
    "TokenUsage",
    "BaseAIConfig",
    "GeminiConfig",
    "OpenAIConfig",
    "AIProviderFactory",
    "UnsupportedProviderError",
    "GeminiProvider",
    "OpenAIProvider",
]
