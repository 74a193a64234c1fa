"""
Monitoring Module - structured logging for AI operations.

Usage:
======
    from adhd_assist.ai.monitoring import ai_logger

    ai_logger.log_request(request_id, operation, prompt, provider, model)
    ai_logger.log_fallback(request_id, operation, provider, reason)
"""

from adhd_assist.ai.monitoring.logger import AILogger, ai_logger

__all__ = [
    "AILogger",
    "ai_logger",
]
