"""
Task AI Schemas - normalized responses of the four AI operations.

Whatever a provider receives from its model, it hands back one of these
shapes. Field names are snake_case in Python and camelCase on the wire.

Usage:
======
```python
breakdown = await service.analyze_and_breakdown_task("Clean kitchen", EnergyLevel.LOW)
for step in breakdown.steps:
    print(step.description, step.estimated_duration)

payload = breakdown.model_dump(by_alias=True)
# {"priority": "medium", "estimatedDuration": 15, "description": ..., "steps": [...]}
```
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from adhd_assist.schemas.task import CategoryType, EnergyLevel, PriorityLevel


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# TASK BREAKDOWN
# ---------------------------------------------------------------------------

class TaskStepSuggestion(CamelModel):
    """One actionable step of a broken-down task."""
    description: str
    estimated_duration: int = Field(..., ge=1, description="Minutes")


class TaskBreakdownResponse(CamelModel):
    """
    A task split into small sequential steps.

    The prompt asks for 3-5 steps; the count is not enforced.
    """
    priority: PriorityLevel
    estimated_duration: int = Field(..., ge=1, description="Total minutes")
    description: str = ""
    steps: List[TaskStepSuggestion] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# DAILY FOCUS
# ---------------------------------------------------------------------------

class FocusSuggestion(CamelModel):
    """A task recommended for today and why."""
    task_id: int
    reason: str


class DailyFocusResponse(CamelModel):
    """Up to three tasks to focus on today plus a motivational message."""
    top_tasks: List[FocusSuggestion] = Field(default_factory=list, max_length=3)
    motivational_message: str = Field(..., min_length=1)


# ---------------------------------------------------------------------------
# NATURAL LANGUAGE TASK ANALYSIS
# ---------------------------------------------------------------------------

class NLPTaskAnalysisResponse(CamelModel):
    """Structured fields extracted from a free-text task description."""
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: PriorityLevel = PriorityLevel.MEDIUM
    energy_level: Optional[EnergyLevel] = None
    due_date: Optional[str] = Field(default=None, description="YYYY-MM-DD")
    category: CategoryType
    estimated_duration: Optional[int] = Field(default=None, ge=1)
