"""
Routers module - API endpoint handlers organized by feature.

- ai: Task AI operations and provider management
"""
