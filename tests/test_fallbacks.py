"""
Tests for the fallback generators.

Fallbacks are what users see when the model is unreachable, so their exact
content is pinned down here.
"""

from adhd_assist.ai.fallbacks import (
    DEFAULT_EMOJIS,
    FALLBACK_FOCUS_MESSAGE,
    NO_OPEN_TASKS_MESSAGE,
    empty_focus_suggestions,
    fallback_emojis,
    fallback_focus_suggestions,
    fallback_nlp_analysis,
    fallback_task_breakdown,
)
from adhd_assist.schemas.task import CategoryType, EnergyLevel, PriorityLevel, Task


class TestFallbackTaskBreakdown:
    """Tests for fallback_task_breakdown."""

    def test_fixed_three_step_plan(self):
        result = fallback_task_breakdown("Clean kitchen")

        assert result.priority == PriorityLevel.MEDIUM
        assert result.estimated_duration == 15
        assert result.description == "Task: Clean kitchen"
        assert [s.description for s in result.steps] == [
            "First, get started with Clean kitchen",
            "Continue working on Clean kitchen",
            "Complete Clean kitchen",
        ]
        assert all(s.estimated_duration == 5 for s in result.steps)

    def test_serializes_with_camel_case(self):
        payload = fallback_task_breakdown("X").model_dump(by_alias=True)

        assert payload["estimatedDuration"] == 15
        assert payload["steps"][0]["estimatedDuration"] == 5


class TestFallbackFocusSuggestions:
    """Tests for fallback_focus_suggestions."""

    def test_empty_list(self):
        result = fallback_focus_suggestions([])

        assert result.top_tasks == []
        assert result.motivational_message == NO_OPEN_TASKS_MESSAGE

    def test_sorted_by_priority_stable(self, sample_tasks):
        """[low, high, medium, high] gives the two highs in input order, then medium."""
        result = fallback_focus_suggestions(sample_tasks)

        assert [s.task_id for s in result.top_tasks] == [2, 4, 3]
        assert result.top_tasks[0].reason == "This task has high priority."
        assert result.top_tasks[2].reason == "This task has medium priority."
        assert result.motivational_message == FALLBACK_FOCUS_MESSAGE

    def test_capped_at_three(self):
        tasks = [Task(id=i, title=f"Task {i}", priority="low") for i in range(1, 8)]

        result = fallback_focus_suggestions(tasks)

        assert [s.task_id for s in result.top_tasks] == [1, 2, 3]

    def test_empty_focus_helper(self):
        result = empty_focus_suggestions()

        assert result.top_tasks == []
        assert "plan something new" in result.motivational_message


class TestFallbackEmojis:
    """Tests for fallback_emojis."""

    def test_returns_defaults(self):
        assert fallback_emojis() == ["📝", "✅", "⏰", "🔔", "📌"]

    def test_returns_a_copy(self):
        emojis = fallback_emojis()
        emojis.append("🎉")

        assert len(DEFAULT_EMOJIS) == 5


class TestFallbackNlpAnalysis:
    """Tests for fallback_nlp_analysis."""

    def test_short_input_is_title(self):
        result = fallback_nlp_analysis("Buy milk")

        assert result.title == "Buy milk"
        assert result.description is None
        assert result.priority == PriorityLevel.MEDIUM
        assert result.energy_level == EnergyLevel.MEDIUM
        assert result.due_date is None
        assert result.category == CategoryType.PERSONAL
        assert result.estimated_duration == 30

    def test_long_input_truncated(self):
        text = "a" * 60

        result = fallback_nlp_analysis(text)

        assert result.title == "a" * 50 + "..."

    def test_exactly_fifty_chars_not_truncated(self):
        assert fallback_nlp_analysis("b" * 50).title == "b" * 50

    def test_blank_input(self):
        assert fallback_nlp_analysis("   ").title == "New task"
