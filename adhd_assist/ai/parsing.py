"""
Reply parsing - turn raw model text into JSON values.

Models are asked for pure JSON but regularly wrap it in a Markdown code
fence (```json ... ```). The fence is removed before decoding.
"""

import json
from typing import Any


def strip_markdown_fence(text: str) -> str:
    """
    Remove a surrounding ``` fence (optionally tagged json) from text.

    Text that is not fenced is returned stripped of outer whitespace.
    """
    cleaned = (text or "").strip()

    if cleaned.startswith("```") and cleaned.endswith("```"):
        cleaned = cleaned[3:-3].strip()
        if cleaned.startswith("json"):
            cleaned = cleaned[4:].strip()

    return cleaned


def parse_json_reply(text: str, expected_type: type = dict) -> Any:
    """
    Decode a model reply and check its top-level type.

    Raises:
        ValueError: If the text is not JSON (json.JSONDecodeError is a
            ValueError) or the decoded value is not an `expected_type`.
    """
    data = json.loads(strip_markdown_fence(text))
    if not isinstance(data, expected_type):
        raise ValueError(
            f"Expected a JSON {expected_type.__name__}, got {type(data).__name__}"
        )
    return data
