"""Domain layer — entities, rule evaluation, versioning, comparison.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
