"""Contracts the domain expects from its collaborators.

Persistence and event publishing live outside the domain; these
protocols describe what the services rely on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar
from uuid import UUID

from ccasync.domain.base import AggregateRoot

if TYPE_CHECKING:
    from ccasync.domain.specifications import Specification
    from ccasync.domain.value_objects import TenantId

A = TypeVar("A", bound=AggregateRoot)


class Repository(Protocol[A]):
    """Stores aggregate roots of one type.

    Implementations must honor the specification's criterion and must
    never return another tenant's aggregates when *tenant_id* is given.
    """

    def get(self, aggregate_id: UUID, *, tenant_id: TenantId | None = None) -> A | None: ...

    def find(self, spec: Specification[A], *, tenant_id: TenantId | None = None) -> list[A]: ...

    def add(self, aggregate: A) -> None: ...

    def update(self, aggregate: A) -> None: ...

    def remove(self, aggregate: A) -> None: ...


class EventPublisher(Protocol):
    """Drains an aggregate's buffered events and delivers them in raise order."""

    def publish(self, aggregate: AggregateRoot) -> list[str]:
        """Deliver the events; return warning strings for handler failures."""
        ...
