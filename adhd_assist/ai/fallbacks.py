"""
Fallback Generators - deterministic responses when the model can't help.

Used whenever a provider call fails or its reply can't be parsed. These
functions make no external calls and never raise, so every AI operation
always has something valid to return.
"""

from typing import List, Sequence

from adhd_assist.ai.schemas.task_ai import (
    DailyFocusResponse,
    FocusSuggestion,
    NLPTaskAnalysisResponse,
    TaskBreakdownResponse,
    TaskStepSuggestion,
)
from adhd_assist.ai.validators import DEFAULT_CATEGORY, validate_priority
from adhd_assist.schemas.task import EnergyLevel, PriorityLevel, Task

# Returned as-is when emoji prediction fails, and used to pad short replies.
DEFAULT_EMOJIS: List[str] = ["📝", "✅", "⏰", "🔔", "📌"]

NO_OPEN_TASKS_MESSAGE = "No open tasks available. Time to plan something new!"
FALLBACK_FOCUS_MESSAGE = "Focus on one task at a time!"

MAX_FOCUS_TASKS = 3
FALLBACK_STEP_MINUTES = 5
FALLBACK_NLP_MINUTES = 30
NLP_TITLE_MAX_LENGTH = 50

_PRIORITY_RANK = {
    PriorityLevel.HIGH: 3,
    PriorityLevel.MEDIUM: 2,
    PriorityLevel.LOW: 1,
}


def fallback_task_breakdown(title: str) -> TaskBreakdownResponse:
    """Generic three-step plan: get started, continue, complete."""
    steps = [
        TaskStepSuggestion(
            description=f"First, get started with {title}",
            estimated_duration=FALLBACK_STEP_MINUTES,
        ),
        TaskStepSuggestion(
            description=f"Continue working on {title}",
            estimated_duration=FALLBACK_STEP_MINUTES,
        ),
        TaskStepSuggestion(
            description=f"Complete {title}",
            estimated_duration=FALLBACK_STEP_MINUTES,
        ),
    ]
    return TaskBreakdownResponse(
        priority=PriorityLevel.MEDIUM,
        estimated_duration=FALLBACK_STEP_MINUTES * len(steps),
        description=f"Task: {title}",
        steps=steps,
    )


def empty_focus_suggestions() -> DailyFocusResponse:
    """Response for a task list with nothing left to do."""
    return DailyFocusResponse(top_tasks=[], motivational_message=NO_OPEN_TASKS_MESSAGE)


def fallback_focus_suggestions(tasks: Sequence[Task]) -> DailyFocusResponse:
    """
    Pick up to three tasks by priority alone.

    The sort is stable, so tasks of equal priority keep their original order.

    Args:
        tasks: Candidate tasks, normally the incomplete ones

    Returns:
        DailyFocusResponse with at most MAX_FOCUS_TASKS entries
    """
    if not tasks:
        return empty_focus_suggestions()

    ranked = sorted(
        tasks,
        key=lambda task: _PRIORITY_RANK[validate_priority(task.priority)],
        reverse=True,
    )
    top_tasks = [
        FocusSuggestion(
            task_id=task.id,
            reason=f"This task has {validate_priority(task.priority).value} priority.",
        )
        for task in ranked[:MAX_FOCUS_TASKS]
    ]
    return DailyFocusResponse(top_tasks=top_tasks, motivational_message=FALLBACK_FOCUS_MESSAGE)


def fallback_emojis() -> List[str]:
    """A fresh copy of DEFAULT_EMOJIS."""
    return list(DEFAULT_EMOJIS)


def truncate_title(title: str) -> str:
    """Cap a task title at NLP_TITLE_MAX_LENGTH characters, marking the cut."""
    title = (title or "").strip()
    if len(title) > NLP_TITLE_MAX_LENGTH:
        title = title[:NLP_TITLE_MAX_LENGTH] + "..."
    return title or "New task"


def fallback_nlp_analysis(text: str) -> NLPTaskAnalysisResponse:
    """Treat the raw input as the task title, everything else default."""
    return NLPTaskAnalysisResponse(
        title=truncate_title(text),
        description=None,
        priority=PriorityLevel.MEDIUM,
        energy_level=EnergyLevel.MEDIUM,
        due_date=None,
        category=DEFAULT_CATEGORY,
        estimated_duration=FALLBACK_NLP_MINUTES,
    )
