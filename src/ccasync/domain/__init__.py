"""Domain layer: value objects, aggregates, events and specifications.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, plugins, or config.
"""
