"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.

Settings are read once, at process start, by the composition root
(adhd_assist.main). Nothing else in the package reads the environment.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export GEMINI_API_KEY=your-gemini-key
        export AI_PROVIDER=openai
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file in project root
        env_file_encoding="utf-8",
        extra="ignore",         # Ignore extra env vars not defined here
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    APP_NAME: str = "ADHD Task Assistant"
    DEBUG: bool = False

    # ---------------------------------------------------------------------------
    # AI/LLM PROVIDER SETTINGS
    # ---------------------------------------------------------------------------
    # AI_PROVIDER: Provider used when the service starts ("gemini" or "openai").
    # It can be switched at runtime through PUT /api/ai/provider.
    AI_PROVIDER: str = "gemini"

    # Missing keys are allowed: every AI call then returns its fallback.
    GEMINI_API_KEY: str = ""
    OPENAI_API_KEY: str = ""

    GEMINI_MODEL: str = "gemini-2.5-flash"
    OPENAI_MODEL: str = "gpt-4o"

    # OPENAI_ORGANIZATION: Sent as the OpenAI-Organization header when set
    OPENAI_ORGANIZATION: str = ""
    # OPENAI_API_ENDPOINT: Base URL, override for proxies or compatible servers
    OPENAI_API_ENDPOINT: str = "https://api.openai.com/v1"

    # AI request timeout in seconds (applied to both SDK clients)
    AI_REQUEST_TIMEOUT: int = 30

    # ---------------------------------------------------------------------------
    # RESULT CACHE
    # ---------------------------------------------------------------------------
    # Caches successful breakdown/emoji/NLP results per normalized input.
    AI_CACHE_RESULTS: bool = False
    AI_CACHE_TTL: int = 300


def get_settings() -> Settings:
    """Build a fresh Settings instance from the current environment."""
    return Settings()
