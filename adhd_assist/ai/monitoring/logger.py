"""
AI Logger - Structured logging for AI operations.

This module provides structured logging for every task AI operation.
It captures:
- Request details (operation, provider, model, prompt size)
- Response details (tokens, latency, success)
- Fallbacks and why they happened
- Cache hits and provider changes

Each entry is a single line with a JSON payload, so logs can be grepped
by request_id or shipped to a log pipeline as-is. Prompts are logged as a
length and a short preview only; API keys are never logged.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional, Dict, Any

if TYPE_CHECKING:
    from adhd_assist.ai.providers.base import AIResponse

# Configure the AI logger
logger = logging.getLogger("adhd_assist.ai")
logger.setLevel(logging.INFO)

# Create console handler if not exists
if not logger.handlers:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        '[%(asctime)s] %(levelname)s [%(name)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class AILogger:
    """
    Structured logger for task AI operations.

    Usage:
        ai_logger.log_request(
            request_id="abc123",
            operation="task_breakdown",
            prompt=prompt,
            provider="gemini",
            model="gemini-2.5-flash",
        )
        ai_logger.log_response(request_id="abc123", operation="task_breakdown", response=response)
        ai_logger.log_fallback(request_id="abc123", operation="task_breakdown",
                               provider="gemini", reason="Invalid JSON")
    """

    def __init__(self):
        self._logger = logger

    def log_request(
        self,
        request_id: str,
        operation: str,
        prompt: str,
        provider: str,
        model: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log an outgoing model request.

        Args:
            request_id: Unique request identifier
            operation: Which AI operation sent it
            prompt: The prompt being sent (truncated for privacy)
            provider: AI provider name
            model: Model name
            metadata: Additional metadata
        """
        log_data = {
            "event": "ai_request",
            "request_id": request_id,
            "operation": operation,
            "provider": provider,
            "model": model,
            "prompt_length": len(prompt),
            "prompt_preview": prompt[:100] + "..." if len(prompt) > 100 else prompt,
            "timestamp": _timestamp(),
        }

        if metadata:
            log_data["metadata"] = metadata

        self._logger.info(f"AI Request: {json.dumps(log_data, ensure_ascii=False)}")

    def log_response(
        self,
        request_id: str,
        operation: str,
        response: "AIResponse",
    ) -> None:
        """Log the transport result of a model call."""
        log_data = {
            "event": "ai_response",
            "request_id": request_id,
            "operation": operation,
            "provider": response.provider.value,
            "model": response.model,
            "success": response.success,
            "latency_ms": round(response.latency_ms, 2),
            "tokens": {
                "prompt": response.usage.prompt_tokens,
                "completion": response.usage.completion_tokens,
                "total": response.usage.total_tokens,
            },
            "response_length": len(response.content),
            "timestamp": _timestamp(),
        }

        if not response.success:
            log_data["error"] = response.error

        level = logging.INFO if response.success else logging.WARNING
        self._logger.log(level, f"AI Response: {json.dumps(log_data)}")

    def log_fallback(
        self,
        request_id: str,
        operation: str,
        provider: str,
        reason: str,
    ) -> None:
        """
        Log that an operation answered with its fallback.

        Args:
            request_id: Request identifier
            operation: The AI operation that fell back
            provider: Active provider name
            reason: Error message or parse failure
        """
        log_data = {
            "event": "ai_fallback",
            "request_id": request_id,
            "operation": operation,
            "provider": provider,
            "reason": reason,
            "timestamp": _timestamp(),
        }

        self._logger.warning(f"AI Fallback: {json.dumps(log_data)}")

    def log_cache_hit(self, operation: str, provider: str) -> None:
        log_data = {
            "event": "ai_cache_hit",
            "operation": operation,
            "provider": provider,
            "timestamp": _timestamp(),
        }

        self._logger.info(f"AI Cache Hit: {json.dumps(log_data)}")

    def log_event(
        self,
        event_type: str,
        data: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log a generic event (provider_changed, config_updated, ...).

        Args:
            event_type: Type of event
            data: Event-specific data (must not contain secrets)
        """
        log_data = {
            "event": event_type,
            "timestamp": _timestamp(),
        }

        if data:
            log_data.update(data)

        self._logger.info(f"AI Event: {json.dumps(log_data, default=str)}")


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
ai_logger = AILogger()
