"""
Services module - business logic behind the routers.
"""

from adhd_assist.services.task_ai_service import TaskAIService

__all__ = ["TaskAIService"]
