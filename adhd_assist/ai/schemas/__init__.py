from adhd_assist.ai.schemas.task_ai import (
    TaskStepSuggestion,
    TaskBreakdownResponse,
    FocusSuggestion,
    DailyFocusResponse,
    NLPTaskAnalysisResponse,
)

__all__ = [
    "TaskStepSuggestion",
    "TaskBreakdownResponse",
    "FocusSuggestion",
    "DailyFocusResponse",
    "NLPTaskAnalysisResponse",
]
