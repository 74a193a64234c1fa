"""
AI Module - the task AI layer.

Module Structure:
================
- providers/: AI provider clients (Gemini, OpenAI) and the provider factory
- prompts/: Prompt templates for the four AI operations
- schemas/: Normalized response models
- monitoring/: Structured logging of requests, responses and fallbacks
- validators.py / parsing.py: Reply normalization
- fallbacks.py: Offline answers used when a model call fails
- cache.py: Optional TTL cache of successful results

Flow:
=====
1. Caller: "Break down 'Clean kitchen', energy low"
2. Provider builds the prompt and calls the model
3. Reply is fence-stripped, parsed as JSON and validated
4. Any failure along the way: the fallback answer is returned instead
"""
