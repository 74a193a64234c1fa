"""
Prompts Module - prompt templates for the task AI operations.
"""

from adhd_assist.ai.prompts.task_prompts import (
    BREAKDOWN_ROLE_PROMPT,
    BREAKDOWN_ACK,
    BREAKDOWN_TEMPLATE,
    FOCUS_ROLE_PROMPT,
    FOCUS_ACK,
    FOCUS_TEMPLATE,
    EMOJI_ROLE_PROMPT,
    EMOJI_ACK,
    EMOJI_TEMPLATE,
    NLP_ROLE_PROMPT,
    NLP_ACK,
    NLP_TEMPLATE,
)

__all__ = [
    "BREAKDOWN_ROLE_PROMPT",
    "BREAKDOWN_ACK",
    "BREAKDOWN_TEMPLATE",
    "FOCUS_ROLE_PROMPT",
    "FOCUS_ACK",
    "FOCUS_TEMPLATE",
    "EMOJI_ROLE_PROMPT",
    "EMOJI_ACK",
    "EMOJI_TEMPLATE",
    "NLP_ROLE_PROMPT",
    "NLP_ACK",
    "NLP_TEMPLATE",
]
