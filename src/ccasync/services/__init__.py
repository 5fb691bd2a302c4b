"""Service layer: orchestration returning Result.

Services may import from domain, config and infrastructure layers.
They parse raw input into value objects, call the aggregate, persist
through a repository, then publish the aggregate's events.
"""
