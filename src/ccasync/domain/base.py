"""Shared kernel: value object, entity and aggregate root foundations.

Value objects compare by content, entities by identity. Aggregate roots
additionally buffer the domain events they raise until an external
dispatcher drains them after a successful save.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast
from uuid import UUID, uuid4

from pydantic import BaseModel

if TYPE_CHECKING:
    from ccasync.domain.events import DomainEvent


class ValueObject(BaseModel):
    """Immutable model identified by its content.

    Subclasses override :meth:`_equality_components` to normalize what
    counts as "the same value" (e.g. case-insensitive identifiers).
    """

    model_config = {"frozen": True}

    def _equality_components(self) -> tuple[Any, ...]:
        return tuple(getattr(self, name) for name in type(self).model_fields)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._equality_components() == cast(ValueObject, other)._equality_components()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._equality_components()))


class Entity:
    """Object with a persistent identity. Equality is identity, not content."""

    def __init__(self, entity_id: UUID | None = None) -> None:
        self._id = entity_id if entity_id is not None else uuid4()

    @property
    def id(self) -> UUID:
        return self._id

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._id == cast(Entity, other)._id

    def __hash__(self) -> int:
        return hash(self._id)


class AggregateRoot(Entity):
    """Entity that guards a consistency boundary and buffers domain events.

    Events are kept in the order they were raised. The aggregate never
    publishes them itself; callers hand them to a dispatcher via
    :meth:`pull_domain_events`.
    """

    def __init__(self, entity_id: UUID | None = None) -> None:
        super().__init__(entity_id)
        self._domain_events: list[DomainEvent] = []

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        """Events raised since the last drain, oldest first."""
        return tuple(self._domain_events)

    def clear_domain_events(self) -> None:
        self._domain_events.clear()

    def pull_domain_events(self) -> tuple[DomainEvent, ...]:
        """Return the buffered events and clear the buffer."""
        events = tuple(self._domain_events)
        self._domain_events.clear()
        return events

    def _raise_event(self, event: DomainEvent) -> None:
        if event is None:
            raise TypeError("domain event is required")
        self._domain_events.append(event)
