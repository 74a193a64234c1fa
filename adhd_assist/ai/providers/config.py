"""
Provider Configuration - typed settings for each AI provider.

A config is an immutable value. Updating it means building a new one with
merge_config(); nothing mutates a config after construction. Providers and
the TaskAIService hand out copies, never their own instance.

Example:
    config = GeminiConfig(api_key="...", temperature=0.3)
    config = merge_config(config, {"model_name": "gemini-2.5-pro"})
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Type, TypeVar, Union

C = TypeVar("C", bound="BaseAIConfig")


# ---------------------------------------------------------------------------
# DEFAULTS
# ---------------------------------------------------------------------------
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 2048
DEFAULT_TOP_P = 0.95
DEFAULT_CACHE_TTL = 300

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_OPENAI_MODEL = "gpt-4o"
DEFAULT_OPENAI_ENDPOINT = "https://api.openai.com/v1"

# Block medium-and-above severity in every harm category.
DEFAULT_SAFETY_SETTINGS: Tuple[Dict[str, str], ...] = (
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
)


@dataclass(frozen=True)
class BaseAIConfig:
    """
    Settings shared by every provider.

    Attributes:
        api_key: Provider API key. Empty means every call falls back.
        temperature: Sampling temperature (0-2)
        max_tokens: Maximum output tokens per call
        top_p: Nucleus sampling probability (0-1)
        frequency_penalty: Penalty for repeated tokens (-2..2)
        presence_penalty: Penalty for repeated topics (-2..2)
        cache_results: Cache successful results in memory
        cache_ttl: Cache entry lifetime in seconds
        request_timeout: SDK request timeout in seconds (None = SDK default)
    """
    api_key: str = ""
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    top_p: float = DEFAULT_TOP_P
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
    cache_results: bool = False
    cache_ttl: int = DEFAULT_CACHE_TTL
    request_timeout: Optional[float] = None

    def __post_init__(self):
        if self.api_key is None:
            object.__setattr__(self, "api_key", "")
        _check_str(self, "api_key", allow_empty=True)
        for name in ("temperature", "top_p", "frequency_penalty", "presence_penalty"):
            _check_number(self, name)
        for name in ("max_tokens", "cache_ttl"):
            _check_int(self, name)
        if not isinstance(self.cache_results, bool):
            raise ValueError(f"cache_results must be a boolean, got {self.cache_results!r}")
        if self.request_timeout is not None:
            _check_number(self, "request_timeout")

        if not 0 <= self.temperature <= 2:
            raise ValueError(f"temperature must be between 0 and 2, got {self.temperature}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if not 0 <= self.top_p <= 1:
            raise ValueError(f"top_p must be between 0 and 1, got {self.top_p}")
        for name in ("frequency_penalty", "presence_penalty"):
            if not -2 <= getattr(self, name) <= 2:
                raise ValueError(f"{name} must be between -2 and 2, got {getattr(self, name)}")
        if self.cache_ttl <= 0:
            raise ValueError(f"cache_ttl must be positive, got {self.cache_ttl}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """Convert to a dictionary for logging/serialization."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if mask_secrets:
            data["api_key"] = mask_api_key(self.api_key)
        return data


@dataclass(frozen=True)
class GeminiConfig(BaseAIConfig):
    """Gemini settings. safety_settings=None means DEFAULT_SAFETY_SETTINGS."""
    model_name: str = DEFAULT_GEMINI_MODEL
    safety_settings: Optional[Tuple[Dict[str, str], ...]] = None

    def __post_init__(self):
        super().__post_init__()
        _check_str(self, "model_name")
        if self.safety_settings is not None:
            object.__setattr__(self, "safety_settings", _safety_tuple(self.safety_settings))


@dataclass(frozen=True)
class OpenAIConfig(BaseAIConfig):
    """OpenAI settings. api_endpoint is the API base URL."""
    model_name: str = DEFAULT_OPENAI_MODEL
    organization: Optional[str] = None
    api_endpoint: str = DEFAULT_OPENAI_ENDPOINT

    def __post_init__(self):
        super().__post_init__()
        _check_str(self, "model_name")
        _check_str(self, "api_endpoint")
        if self.organization is not None:
            _check_str(self, "organization", allow_empty=True)


# ---------------------------------------------------------------------------
# TYPE CHECKS
# ---------------------------------------------------------------------------
# bool is an int subclass, so it is rejected explicitly where a number is
# expected ("cache_ttl": true must not become 1).

def _check_str(config: BaseAIConfig, name: str, allow_empty: bool = False) -> None:
    value = getattr(config, name)
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string, got {value!r}")
    if not allow_empty and not value.strip():
        raise ValueError(f"{name} must not be empty")


def _check_number(config: BaseAIConfig, name: str) -> None:
    value = getattr(config, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")


def _check_int(config: BaseAIConfig, name: str) -> None:
    value = getattr(config, name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _safety_tuple(settings: Any) -> Tuple[Dict[str, str], ...]:
    """Validate safety settings: a list of {category, threshold} string mappings."""
    if isinstance(settings, (str, bytes, Mapping)) or not isinstance(settings, Sequence):
        raise ValueError(f"safety_settings must be a list of mappings, got {settings!r}")

    result = []
    for entry in settings:
        if not isinstance(entry, Mapping):
            raise ValueError(f"safety setting must be a mapping, got {entry!r}")
        if set(entry) != {"category", "threshold"}:
            raise ValueError(f"safety setting needs exactly category and threshold, got {sorted(map(str, entry))}")
        if not all(isinstance(entry[key], str) and entry[key] for key in ("category", "threshold")):
            raise ValueError(f"safety setting values must be non-empty strings, got {dict(entry)!r}")
        result.append(dict(entry))
    return tuple(result)


# ---------------------------------------------------------------------------
# HELPERS
# ---------------------------------------------------------------------------

def mask_api_key(api_key: str) -> str:
    """Hide all but the last four characters of a key."""
    if not api_key:
        return ""
    if len(api_key) <= 4:
        return "****"
    return "****" + api_key[-4:]


def merge_config(config: C, overrides: Mapping[str, Any]) -> C:
    """
    Return a new config with `overrides` applied over `config`.

    Omitted fields keep their previous values.

    Raises:
        ValueError: If an override names a field the config doesn't have,
            or a merged value is out of range.
    """
    known = {f.name for f in fields(config)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(
            f"Unknown {type(config).__name__} field(s): {', '.join(unknown)}"
        )
    return replace(config, **overrides)


def coerce_config(
    config_cls: Type[C],
    config_or_api_key: Union[str, BaseAIConfig, Mapping[str, Any], None],
) -> C:
    """
    Build a `config_cls` instance from the factory's accepted inputs.

    - str: an API key; every other field takes its default
    - instance of config_cls: copied
    - any other BaseAIConfig: only the provider-neutral fields carry over,
      so a Gemini model name never reaches OpenAI
    - mapping: merged over the defaults (unknown keys raise ValueError)
    """
    if config_or_api_key is None or isinstance(config_or_api_key, str):
        return config_cls(api_key=config_or_api_key or "")

    if isinstance(config_or_api_key, config_cls):
        return replace(config_or_api_key)

    if isinstance(config_or_api_key, BaseAIConfig):
        shared = {f.name: getattr(config_or_api_key, f.name) for f in fields(BaseAIConfig)}
        return config_cls(**shared)

    if isinstance(config_or_api_key, Mapping):
        return merge_config(config_cls(), config_or_api_key)

    raise TypeError(
        f"Expected an API key, a config or a mapping, got {type(config_or_api_key).__name__}"
    )
