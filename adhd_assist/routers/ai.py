"""
AI Router - HTTP endpoints for the task AI features.

Exposes the four AI operations and provider management. All logic lives in
TaskAIService; this file only translates HTTP to service calls.

Architecture:
=============
```
┌─────────────────┐
│    AI Router    │  ← HTTP handling only (this file)
│    (FastAPI)    │
└────────┬────────┘
         │
         ▼
┌─────────────────┐
│ TaskAIService   │  ← Active provider + configs
└────────┬────────┘
         │
         ▼
┌─────────────────┐
│   AIProvider    │  ← Prompt, parse, validate, fallback
└─────────────────┘
```

The AI operations always answer 200; provider failures come back as the
fallback response. Only configuration mistakes produce a 400.
"""

import logging
from typing import Optional, Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field

from adhd_assist.ai.schemas.task_ai import (
    CamelModel,
    DailyFocusResponse,
    NLPTaskAnalysisResponse,
    TaskBreakdownResponse,
)
from adhd_assist.deps import get_task_ai_service
from adhd_assist.schemas.task import EnergyLevel, Task
from adhd_assist.services.task_ai_service import TaskAIService


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api", tags=["ai"])


# ---------------------------------------------------------------------------
# REQUEST/RESPONSE SCHEMAS
# ---------------------------------------------------------------------------

class BreakdownRequest(CamelModel):
    """
    Request schema for POST /api/tasks/breakdown.

    Example:
    {
        "title": "Clean kitchen",
        "energyLevel": "low"
    }
    """
    title: str = Field(..., min_length=1, max_length=500)
    energy_level: EnergyLevel = EnergyLevel.MEDIUM


class DailyFocusRequest(CamelModel):
    """Request schema for POST /api/focus/daily."""
    tasks: List[Task] = Field(default_factory=list)
    energy_level: EnergyLevel = EnergyLevel.MEDIUM


class EmojiRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None


class EmojiResponse(CamelModel):
    emojis: List[str]


class NLPRequest(CamelModel):
    """
    Request schema for POST /api/tasks/analyze-nlp.

    Example:
    {
        "input": "Call the dentist tomorrow, takes 10 minutes"
    }
    """
    input: str = Field(..., min_length=3, max_length=1000)


class ProviderSwitchRequest(CamelModel):
    provider: str = Field(..., description="gemini or openai")


class ConfigUpdateRequest(CamelModel):
    """
    Request schema for PATCH /api/ai/config.

    `provider` defaults to the active provider. Keys of `overrides` are
    config field names (snake_case), e.g. {"temperature": 0.3}.
    """
    provider: Optional[str] = None
    overrides: Dict[str, Any] = Field(default_factory=dict)


class ProviderStatusResponse(CamelModel):
    provider: str
    model: str
    configured: bool
    config: Dict[str, Any]


# ---------------------------------------------------------------------------
# AI OPERATION ENDPOINTS
# ---------------------------------------------------------------------------

@router.post("/tasks/breakdown", response_model=TaskBreakdownResponse)
async def breakdown_task(
    request: BreakdownRequest,
    service: TaskAIService = Depends(get_task_ai_service),
):
    """Break a task into small steps matched to the user's energy."""
    return await service.analyze_and_breakdown_task(request.title, request.energy_level)


@router.post("/focus/daily", response_model=DailyFocusResponse)
async def daily_focus(
    request: DailyFocusRequest,
    service: TaskAIService = Depends(get_task_ai_service),
):
    """Pick up to three open tasks to focus on today."""
    return await service.get_daily_focus_suggestions(request.tasks, request.energy_level)


@router.post("/tasks/emoji-suggestions", response_model=EmojiResponse)
async def emoji_suggestions(
    request: EmojiRequest,
    service: TaskAIService = Depends(get_task_ai_service),
):
    emojis = await service.predict_task_emoji(request.title, request.description)
    return EmojiResponse(emojis=emojis)


@router.post("/tasks/analyze-nlp", response_model=NLPTaskAnalysisResponse)
async def analyze_nlp(
    request: NLPRequest,
    service: TaskAIService = Depends(get_task_ai_service),
):
    """Turn a free-text description into structured task fields."""
    return await service.analyze_natural_language_task(request.input)


# ---------------------------------------------------------------------------
# PROVIDER MANAGEMENT ENDPOINTS
# ---------------------------------------------------------------------------

@router.get("/ai/provider", response_model=ProviderStatusResponse)
def get_provider(service: TaskAIService = Depends(get_task_ai_service)):
    """Active provider and its configuration (API key masked)."""
    return service.describe()


@router.put("/ai/provider", response_model=ProviderStatusResponse)
def switch_provider(
    request: ProviderSwitchRequest,
    service: TaskAIService = Depends(get_task_ai_service),
):
    try:
        service.switch_provider(request.provider)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info(f"AI provider switched to {service.provider_type.value}")
    return service.describe()


@router.patch("/ai/config", response_model=ProviderStatusResponse)
def update_config(
    request: ConfigUpdateRequest,
    service: TaskAIService = Depends(get_task_ai_service),
):
    """
    Update a provider's configuration.

    Unknown fields, out-of-range values and unknown providers are a 400.
    """
    try:
        if request.provider:
            service.update_provider_config(request.provider, **request.overrides)
        else:
            service.update_config(**request.overrides)
    except (ValueError, TypeError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return service.describe()
