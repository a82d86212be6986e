"""Domain layer — model declaration, compilation, and evaluation.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
