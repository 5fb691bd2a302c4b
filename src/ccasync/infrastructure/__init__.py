"""Infrastructure layer: reference persistence for aggregates.

This layer depends on the domain layer and the stdlib only.
It must never import from services or plugins.
"""
