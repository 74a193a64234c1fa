"""
Dependencies module - reusable FastAPI dependencies for route handlers.
The main dependency here is get_task_ai_service, which hands routes the
process-wide TaskAIService built at startup.
"""

from fastapi import Request

from adhd_assist.services.task_ai_service import TaskAIService


def get_task_ai_service(request: Request) -> TaskAIService:
    """
    Return the TaskAIService stored on the application state.

    The service is created once by the lifespan handler in adhd_assist.main.
    Tests replace it through app.dependency_overrides.
    """
    return request.app.state.task_ai_service
