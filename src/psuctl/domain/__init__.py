"""Domain layer — API models, errors, and pure helpers.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
