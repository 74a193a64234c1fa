"""
Schemas module - Pydantic models shared across the API.
"""

from adhd_assist.schemas.task import (
    Task,
    PriorityLevel,
    EnergyLevel,
    CategoryType,
)

__all__ = [
    "Task",
    "PriorityLevel",
    "EnergyLevel",
    "CategoryType",
]
