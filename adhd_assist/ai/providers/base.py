"""
Base AI Provider - the task AI capability set shared by all LLM providers.

This module defines the contract that all AI providers follow and carries
the logic they share: prompt building, reply parsing, validation, caching
and fallbacks. A concrete provider only supplies the transport, i.e. how
to build its SDK client and how to send one chat-style request.

Design Pattern: Strategy Pattern
================================
The base class implements the operations, each provider implements the
transport. TaskAIService swaps providers without code changes.

Guarantees:
===========
The four AI operations never raise. Network errors, missing API keys and
malformed replies all end in the operation's fallback value. Only
configuration mistakes (bad config fields) raise, synchronously.

Example:
    provider = GeminiProvider("api-key")  # or OpenAIProvider("api-key")
    breakdown = await provider.analyze_and_breakdown_task("Clean kitchen", EnergyLevel.LOW)
    print(breakdown.steps[0].description)
"""

import json
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Optional, Any, Dict, List, Mapping, Sequence, Tuple, Type, Union
import logging

from adhd_assist.ai.cache import ResponseCache, make_cache_key
from adhd_assist.ai.fallbacks import (
    DEFAULT_EMOJIS,
    MAX_FOCUS_TASKS,
    empty_focus_suggestions,
    fallback_emojis,
    fallback_focus_suggestions,
    fallback_nlp_analysis,
    fallback_task_breakdown,
    truncate_title,
)
from adhd_assist.ai.monitoring.logger import ai_logger
from adhd_assist.ai.parsing import parse_json_reply
from adhd_assist.ai.prompts.task_prompts import (
    BREAKDOWN_ACK,
    BREAKDOWN_ROLE_PROMPT,
    BREAKDOWN_TEMPLATE,
    EMOJI_ACK,
    EMOJI_ROLE_PROMPT,
    EMOJI_TEMPLATE,
    FOCUS_ACK,
    FOCUS_ROLE_PROMPT,
    FOCUS_TEMPLATE,
    NLP_ACK,
    NLP_ROLE_PROMPT,
    NLP_TEMPLATE,
)
from adhd_assist.ai.providers.config import BaseAIConfig, coerce_config, merge_config
from adhd_assist.ai.schemas.task_ai import (
    DailyFocusResponse,
    FocusSuggestion,
    NLPTaskAnalysisResponse,
    TaskBreakdownResponse,
    TaskStepSuggestion,
)
from adhd_assist.ai.validators import (
    clamp_duration,
    validate_category,
    validate_due_date,
    validate_energy_level,
    validate_priority,
)
from adhd_assist.schemas.task import CategoryType, EnergyLevel, Task

logger = logging.getLogger("adhd_assist.ai.provider")


# ---------------------------------------------------------------------------
# OPERATION CONSTANTS
# ---------------------------------------------------------------------------
# NLP extraction runs cold for repeatable results.
NLP_TEMPERATURE = 0.1

# Emoji and NLP replies are short; their token budget is capped.
COMPACT_MAX_TOKENS = 1024

EMOJI_COUNT = 5

DEFAULT_BREAKDOWN_MINUTES = 15
DEFAULT_STEP_MINUTES = 5

DEFAULT_FOCUS_REASON = "Recommended for today."
DEFAULT_FOCUS_MESSAGE = "You've got this today!"


class ProviderType(str, Enum):
    """Enum of supported AI providers."""
    GEMINI = "gemini"
    OPENAI = "openai"


@dataclass
class TokenUsage:
    """
    Token usage statistics for an AI request.

    Used for cost tracking and logging.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        """Calculate total if not provided."""
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Standardized result of one model call, whatever the provider.

    Transports never raise; a failed call comes back with success=False
    and the error message.

    Attributes:
        content: The generated text response
        provider: Which provider generated this response
        model: The specific model used
        usage: Token usage statistics
        latency_ms: How long the request took
        success: Whether the request succeeded
        error: Error message if failed
        raw_response: Original provider response (for debugging)
        created_at: Timestamp of the response
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None
    raw_response: Optional[Any] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "content": self.content[:100] + "..." if len(self.content) > 100 else self.content,
            "provider": self.provider.value,
            "model": self.model,
            "tokens": {
                "prompt": self.usage.prompt_tokens,
                "completion": self.usage.completion_tokens,
                "total": self.usage.total_tokens,
            },
            "latency_ms": self.latency_ms,
            "success": self.success,
            "error": self.error,
            "created_at": self.created_at.isoformat(),
        }


def _enum_value(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _optional_text(value: Any) -> Optional[str]:
    """Strip a string; None for non-strings, blanks and a literal "null"."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not value or value.lower() == "null":
        return None
    return value


def _task_id(value: Any) -> Optional[int]:
    """An integer id, or a string of digits; anything else (2.9, True) is None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        if value.isascii() and value.isdigit():
            return int(value)
    return None


class AIProvider(ABC):
    """
    Abstract base class for task AI providers.

    Subclasses set `provider_type` and `config_class` and implement:
    - _create_client(): build the SDK client from self._config
    - _complete(): send one chat request and return an AIResponse

    Everything else (the four operations and config management) lives here,
    so both providers behave identically apart from the transport.

    Usage:
        class MyProvider(AIProvider):
            provider_type = ProviderType.GEMINI
            config_class = GeminiConfig

            def _create_client(self):
                ...

            async def _complete(self, prompt, system_prompt, **kwargs):
                ...
    """

    provider_type: ProviderType
    config_class: Type[BaseAIConfig] = BaseAIConfig

    # Fields the SDK client is built from; changing one rebuilds the client.
    client_fields: Tuple[str, ...] = ("api_key", "request_timeout")

    def __init__(self, config_or_api_key: Union[str, BaseAIConfig, Mapping[str, Any], None] = None):
        """
        Initialize the provider.

        Args:
            config_or_api_key: An API key (all defaults), a config object or
                a mapping of config fields merged over the defaults
        """
        self._config = coerce_config(self.config_class, config_or_api_key)
        self._client = self._build_client()
        self._cache = self._build_cache()

    # -----------------------------------------------------------------------
    # CONFIGURATION
    # -----------------------------------------------------------------------

    @property
    def model(self) -> str:
        return getattr(self._config, "model_name", "unknown")

    @property
    def is_configured(self) -> bool:
        """True when an API key is set and a client exists."""
        return self._client is not None

    def get_config(self) -> BaseAIConfig:
        """Return a copy of the current configuration."""
        return replace(self._config)

    def update_config(self, **overrides: Any) -> None:
        """
        Merge `overrides` into the current configuration.

        Omitted fields keep their values. The SDK client is rebuilt when a
        client field (such as api_key) changes. Any change drops cached
        results, since they came from the previous settings.

        Raises:
            ValueError: On unknown fields or out-of-range values
        """
        previous = self._config
        self._config = merge_config(previous, overrides)

        if any(getattr(previous, name) != getattr(self._config, name) for name in self.client_fields):
            self._client = self._build_client()

        if previous != self._config:
            self._cache = self._build_cache()

    def _build_client(self) -> Optional[Any]:
        if not self._config.api_key:
            logger.warning(f"{self.provider_type.value} API key not configured - AI calls will fall back")
            return None
        client = self._create_client()
        logger.info(f"{self.provider_type.value} provider initialized with model: {self.model}")
        return client

    def _build_cache(self) -> Optional[ResponseCache]:
        if not self._config.cache_results:
            return None
        return ResponseCache(ttl_seconds=self._config.cache_ttl)

    # -----------------------------------------------------------------------
    # TRANSPORT (implemented by providers)
    # -----------------------------------------------------------------------

    @abstractmethod
    def _create_client(self) -> Any:
        """Build the SDK client from self._config (api_key is non-empty)."""

    @abstractmethod
    async def _complete(
        self,
        prompt: str,
        system_prompt: str,
        acknowledgement: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> AIResponse:
        """
        Send one chat request to the model.

        Args:
            prompt: The request itself
            system_prompt: Role instructions for the model
            acknowledgement: The model's priming reply to the role
                instructions, for providers that prime with chat history
            temperature: Sampling temperature for this call
            max_tokens: Output token budget for this call

        Returns:
            AIResponse with the raw reply text

        Raises:
            This method should NOT raise exceptions.
            Errors are captured in AIResponse.error
        """

    # -----------------------------------------------------------------------
    # AI OPERATIONS
    # -----------------------------------------------------------------------

    async def analyze_and_breakdown_task(
        self,
        title: str,
        energy_level: Union[EnergyLevel, str],
    ) -> TaskBreakdownResponse:
        """
        Break a task into 3-5 small steps with durations.

        Args:
            title: Task title
            energy_level: The user's current energy level

        Returns:
            TaskBreakdownResponse; the fixed three-step fallback on failure
        """
        operation = "task_breakdown"
        energy = _enum_value(validate_energy_level(_enum_value(energy_level)) or EnergyLevel.MEDIUM)

        cache_key = make_cache_key(operation, title, energy)
        cached = self._cache_get(cache_key, operation)
        if cached is not None:
            return cached

        request_id = self._new_request_id()
        prompt = BREAKDOWN_TEMPLATE.format(title=title, energy_level=energy)
        response = await self._call_model(
            request_id,
            operation,
            prompt,
            BREAKDOWN_ROLE_PROMPT,
            BREAKDOWN_ACK,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        if not response.success:
            return self._fallback(request_id, operation, response.error, fallback_task_breakdown(title))

        try:
            result = self._build_breakdown(parse_json_reply(response.content))
        except Exception as e:
            return self._fallback(request_id, operation, f"Invalid reply: {e}", fallback_task_breakdown(title))

        self._cache_set(cache_key, result)
        return result

    async def get_daily_focus_suggestions(
        self,
        tasks: Sequence[Task],
        current_energy_level: Union[EnergyLevel, str],
    ) -> DailyFocusResponse:
        """
        Pick up to three open tasks to focus on today.

        No model call is made when there is nothing open. A reply that names
        no known open task counts as a failure.

        Args:
            tasks: All of the user's tasks
            current_energy_level: The user's energy right now

        Returns:
            DailyFocusResponse; priority-sorted fallback on failure
        """
        operation = "daily_focus"

        if not tasks or all(task.completed for task in tasks):
            return empty_focus_suggestions()

        open_tasks = [task for task in tasks if not task.completed]
        energy = _enum_value(validate_energy_level(_enum_value(current_energy_level)) or EnergyLevel.MEDIUM)

        request_id = self._new_request_id()
        prompt = FOCUS_TEMPLATE.format(
            energy_level=energy,
            today=self._today().isoformat(),
            tasks_json=json.dumps([self._task_payload(task) for task in open_tasks], ensure_ascii=False),
        )
        response = await self._call_model(
            request_id,
            operation,
            prompt,
            FOCUS_ROLE_PROMPT,
            FOCUS_ACK,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        if not response.success:
            return self._fallback(request_id, operation, response.error, fallback_focus_suggestions(open_tasks))

        try:
            return self._build_focus(parse_json_reply(response.content), open_tasks)
        except Exception as e:
            return self._fallback(
                request_id, operation, f"Invalid reply: {e}", fallback_focus_suggestions(open_tasks)
            )

    async def predict_task_emoji(
        self,
        title: str,
        description: Optional[str] = None,
    ) -> List[str]:
        """
        Suggest exactly five emojis for a task.

        Short replies are padded from DEFAULT_EMOJIS (by position), long
        ones truncated.
        """
        operation = "emoji_prediction"

        cache_key = make_cache_key(operation, title, description)
        cached = self._cache_get(cache_key, operation)
        if cached is not None:
            return cached

        request_id = self._new_request_id()
        description_line = f'Description: "{description}"\n' if description else ""
        prompt = EMOJI_TEMPLATE.format(title=title, description_line=description_line)
        response = await self._call_model(
            request_id,
            operation,
            prompt,
            EMOJI_ROLE_PROMPT,
            EMOJI_ACK,
            temperature=self._config.temperature,
            max_tokens=min(self._config.max_tokens, COMPACT_MAX_TOKENS),
        )

        if not response.success:
            return self._fallback(request_id, operation, response.error, fallback_emojis())

        try:
            parsed = parse_json_reply(response.content, expected_type=list)
        except Exception as e:
            return self._fallback(request_id, operation, f"Invalid reply: {e}", fallback_emojis())

        emojis = [item.strip() for item in parsed if isinstance(item, str) and item.strip()]
        emojis = emojis[:EMOJI_COUNT]
        while len(emojis) < EMOJI_COUNT:
            emojis.append(DEFAULT_EMOJIS[len(emojis)])

        self._cache_set(cache_key, emojis)
        return emojis

    async def analyze_natural_language_task(self, text: str) -> NLPTaskAnalysisResponse:
        """
        Extract structured task fields from a free-text description.

        Relative dates ("tomorrow", "next week") are resolved by the model
        against today's date, which is part of the prompt.

        Args:
            text: e.g. "Call the dentist tomorrow, takes 10 minutes"

        Returns:
            NLPTaskAnalysisResponse; the raw text as title on failure
        """
        operation = "nlp_analysis"
        today = self._today().isoformat()

        cache_key = make_cache_key(operation, text, today)
        cached = self._cache_get(cache_key, operation)
        if cached is not None:
            return cached

        request_id = self._new_request_id()
        categories = [category.value for category in CategoryType]
        prompt = NLP_TEMPLATE.format(
            text=text,
            today=today,
            categories=", ".join(categories),
            category_choices="|".join(categories),
        )
        response = await self._call_model(
            request_id,
            operation,
            prompt,
            NLP_ROLE_PROMPT,
            NLP_ACK,
            temperature=NLP_TEMPERATURE,
            max_tokens=min(self._config.max_tokens, COMPACT_MAX_TOKENS),
        )

        if not response.success:
            return self._fallback(request_id, operation, response.error, fallback_nlp_analysis(text))

        try:
            result = self._build_nlp_analysis(parse_json_reply(response.content), text)
        except Exception as e:
            return self._fallback(request_id, operation, f"Invalid reply: {e}", fallback_nlp_analysis(text))

        self._cache_set(cache_key, result)
        return result

    # -----------------------------------------------------------------------
    # REPLY NORMALIZATION
    # -----------------------------------------------------------------------

    def _build_breakdown(self, data: Dict[str, Any]) -> TaskBreakdownResponse:
        steps = []
        for step in data.get("steps") or []:
            if not isinstance(step, dict):
                raise ValueError(f"Step is not an object: {step!r}")
            description = _optional_text(step.get("description"))
            if description is None:
                continue
            steps.append(TaskStepSuggestion(
                description=description,
                estimated_duration=clamp_duration(step.get("estimatedDuration"), DEFAULT_STEP_MINUTES),
            ))

        return TaskBreakdownResponse(
            priority=validate_priority(data.get("priority")),
            estimated_duration=clamp_duration(data.get("estimatedDuration"), DEFAULT_BREAKDOWN_MINUTES),
            description=_optional_text(data.get("description")) or "",
            steps=steps,
        )

    def _build_focus(self, data: Dict[str, Any], open_tasks: Sequence[Task]) -> DailyFocusResponse:
        known_ids = {task.id for task in open_tasks}
        selected: List[FocusSuggestion] = []

        for item in data.get("topTasks") or []:
            if not isinstance(item, dict):
                continue
            task_id = _task_id(item.get("taskId"))
            if task_id is None or task_id not in known_ids or any(s.task_id == task_id for s in selected):
                continue
            selected.append(FocusSuggestion(
                task_id=task_id,
                reason=_optional_text(item.get("reason")) or DEFAULT_FOCUS_REASON,
            ))
            if len(selected) == MAX_FOCUS_TASKS:
                break

        if not selected:
            raise ValueError("Reply selected none of the open tasks")

        return DailyFocusResponse(
            top_tasks=selected,
            motivational_message=_optional_text(data.get("motivationalMessage")) or DEFAULT_FOCUS_MESSAGE,
        )

    def _build_nlp_analysis(self, data: Dict[str, Any], text: str) -> NLPTaskAnalysisResponse:
        duration = data.get("estimatedDuration")
        if duration is not None and not (isinstance(duration, str) and _optional_text(duration) is None):
            # A present duration of 0 still means "very short", not unknown.
            duration = clamp_duration(duration, 1)
        else:
            duration = None

        return NLPTaskAnalysisResponse(
            title=truncate_title(_optional_text(data.get("title")) or text),
            description=_optional_text(data.get("description")),
            priority=validate_priority(data.get("priority")),
            energy_level=validate_energy_level(data.get("energyLevel")),
            due_date=validate_due_date(data.get("dueDate")),
            category=validate_category(data.get("category")),
            estimated_duration=duration,
        )

    @staticmethod
    def _task_payload(task: Task) -> Dict[str, Any]:
        """The task fields the focus prompt shows the model."""
        return {
            "id": task.id,
            "title": task.title,
            "description": task.description or "",
            "priority": _enum_value(task.priority),
            "energyLevel": _enum_value(task.energy_level) if task.energy_level else None,
            "estimatedDuration": task.estimated_duration or 0,
            "dueDate": task.due_date.isoformat() if task.due_date else None,
        }

    # -----------------------------------------------------------------------
    # HELPERS
    # -----------------------------------------------------------------------

    async def _call_model(
        self,
        request_id: str,
        operation: str,
        prompt: str,
        system_prompt: str,
        acknowledgement: Optional[str],
        temperature: float,
        max_tokens: int,
    ) -> AIResponse:
        """Run _complete with logging; any exception becomes an error response."""
        ai_logger.log_request(
            request_id=request_id,
            operation=operation,
            prompt=prompt,
            provider=self.provider_type.value,
            model=self.model,
        )

        start_time = time.time()
        try:
            response = await self._complete(
                prompt,
                system_prompt,
                acknowledgement=acknowledgement,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except Exception as e:
            logger.error(f"{self.provider_type.value} call failed: {e}")
            response = self._create_error_response(str(e), self._measure_latency(start_time))

        ai_logger.log_response(request_id=request_id, operation=operation, response=response)
        return response

    def _fallback(self, request_id: str, operation: str, reason: Optional[str], value: Any) -> Any:
        ai_logger.log_fallback(
            request_id=request_id,
            operation=operation,
            provider=self.provider_type.value,
            reason=reason or "unknown error",
        )
        return value

    def _cache_get(self, key: Tuple, operation: str) -> Optional[Any]:
        if self._cache is None:
            return None
        value = self._cache.get(key)
        if value is not None:
            ai_logger.log_cache_hit(operation=operation, provider=self.provider_type.value)
        return value

    def _cache_set(self, key: Tuple, value: Any) -> None:
        if self._cache is not None:
            self._cache.set(key, value)

    def _today(self) -> date:
        return date.today()

    @staticmethod
    def _new_request_id() -> str:
        return uuid.uuid4().hex[:12]

    def _measure_latency(self, start_time: float) -> float:
        """Calculate latency in milliseconds."""
        return (time.time() - start_time) * 1000

    def _create_error_response(self, error: str, latency_ms: float = 0.0) -> AIResponse:
        """
        Create a standardized error response.

        Used when a transport fails to ensure consistent error handling.
        """
        logger.error(f"AI Provider Error [{self.provider_type.value}]: {error}")
        return AIResponse(
            content="",
            provider=self.provider_type,
            model=self.model,
            latency_ms=latency_ms,
            success=False,
            error=error,
        )
