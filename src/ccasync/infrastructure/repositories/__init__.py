from ccasync.infrastructure.repositories.memory import InMemoryRepository

__all__ = ["InMemoryRepository"]
