"""
Task schemas - the task entity as seen by the AI layer.

Tasks are owned by the storage layer. The AI layer only reads them to build
prompts and never mutates them.
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PriorityLevel(str, Enum):
    """Task priority."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EnergyLevel(str, Enum):
    """Energy a task needs, or the energy the user currently has."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class CategoryType(str, Enum):
    """Closed set of task categories."""
    PERSONAL = "personal"
    WORK = "work"
    FAMILY = "family"
    HEALTH = "health"
    EDUCATION = "education"
    OTHER = "other"


class Task(BaseModel):
    """
    A task record as supplied by the caller.

    Example:
    {
        "id": 7,
        "title": "Clean kitchen",
        "priority": "high",
        "energyLevel": "low",
        "estimatedDuration": 30,
        "completed": false,
        "dueDate": "2026-10-20"
    }
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: int
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: PriorityLevel = PriorityLevel.MEDIUM
    energy_level: Optional[EnergyLevel] = None
    estimated_duration: Optional[int] = Field(default=None, ge=0)
    completed: bool = False
    due_date: Optional[Union[datetime, date]] = None
    category: Optional[CategoryType] = None
