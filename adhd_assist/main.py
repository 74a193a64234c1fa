"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn adhd_assist.main:app --reload
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI  # The FastAPI framework
from fastapi.middleware.cors import CORSMiddleware  # Cross-Origin Resource Sharing

from adhd_assist.core.config import get_settings  # Application settings
from adhd_assist.routers import ai  # Task AI endpoints
from adhd_assist.services.task_ai_service import TaskAIService

logger = logging.getLogger("adhd_assist")

settings = get_settings()


# ---------------------------------------------------------------------------
# LIFESPAN
# ---------------------------------------------------------------------------
# The TaskAIService is the composition root of the AI layer: it is built once
# from the environment here and shared by every request via app.state.
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.task_ai_service = TaskAIService.from_settings(settings)
    logger.info(f"{settings.APP_NAME} started with AI provider: {app.state.task_ai_service.provider_type.value}")
    yield


# ---------------------------------------------------------------------------
# CREATE FASTAPI APPLICATION
# ---------------------------------------------------------------------------
app = FastAPI(
    title=settings.APP_NAME,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS MIDDLEWARE
# ---------------------------------------------------------------------------
# The web client is served from a different origin than the API.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# REGISTER ROUTERS
# ---------------------------------------------------------------------------
# ai.router: /api/tasks/*, /api/focus/daily, /api/ai/*
app.include_router(ai.router)


# ---------------------------------------------------------------------------
# HEALTH CHECK ENDPOINT
# ---------------------------------------------------------------------------
@app.get("/health", tags=["health"])
def health_check():
    """
    Simple health check endpoint.

    Does NOT call any AI provider; a missing API key still reports ok
    because every AI operation degrades to its fallback.

    Returns:
        {"status": "ok"}
    """
    return {"status": "ok"}
