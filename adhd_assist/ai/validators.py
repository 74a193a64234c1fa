"""
Response Validators - normalize untrusted model output.

Every field that comes back from an LLM passes through here before it
reaches a response object. Enum fields are coerced into their closed sets,
durations are clamped to whole positive minutes and due dates are reduced
to plain ISO dates.

These are the only copies of the validators; both providers use them.
"""

import math
from datetime import date
from typing import Any, Optional

from adhd_assist.schemas.task import CategoryType, EnergyLevel, PriorityLevel

# Category returned when the model answers with something outside the set.
DEFAULT_CATEGORY = CategoryType.PERSONAL


def _normalize(raw: Any) -> str:
    if not isinstance(raw, str):
        return ""
    return raw.strip().lower()


def validate_priority(raw: Any) -> PriorityLevel:
    """Return the matching priority, or MEDIUM for anything unknown."""
    try:
        return PriorityLevel(_normalize(raw))
    except ValueError:
        return PriorityLevel.MEDIUM


def validate_energy_level(raw: Any) -> Optional[EnergyLevel]:
    """
    Return the matching energy level or None.

    None means "not specified" as well as "invalid"; there is no default
    energy level.
    """
    if not raw:
        return None
    try:
        return EnergyLevel(_normalize(raw))
    except ValueError:
        return None


def validate_category(raw: Any) -> CategoryType:
    """Return the matching category, or DEFAULT_CATEGORY."""
    try:
        return CategoryType(_normalize(raw))
    except ValueError:
        return DEFAULT_CATEGORY


def validate_due_date(raw: Any) -> Optional[str]:
    """
    Return raw as a YYYY-MM-DD string, or None if it is not a date.

    A full ISO timestamp is accepted and truncated to its date part.
    """
    if not isinstance(raw, str) or len(raw.strip()) < 10:
        return None
    try:
        return date.fromisoformat(raw.strip()[:10]).isoformat()
    except ValueError:
        return None


def clamp_duration(raw: Any, default: int) -> int:
    """
    Round a duration in minutes half-up and clamp it to at least 1.

    Falsy values (None, 0, "") give `default`. Values that are not numbers
    raise ValueError so the caller can treat the reply as malformed.
    """
    if not raw:
        return default
    if isinstance(raw, bool):
        raise ValueError(f"Invalid duration: {raw!r}")
    try:
        value = float(raw)
    except TypeError:
        raise ValueError(f"Invalid duration: {raw!r}") from None
    if math.isnan(value) or math.isinf(value):
        raise ValueError(f"Invalid duration: {raw!r}")
    return max(1, int(math.floor(value + 0.5)))
