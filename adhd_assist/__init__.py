"""
ADHD Task Assistant - AI helpers for task planning.

Breaks tasks into small steps, picks today's focus tasks, suggests emojis
and turns free text into structured tasks, using Gemini or OpenAI.
"""

__version__ = "0.1.0"
