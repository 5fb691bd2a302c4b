"""Dict-backed repository that evaluates specifications in memory."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic, TypeVar
from uuid import UUID

from ccasync.domain.base import AggregateRoot
from ccasync.domain.specifications import ForTenant, Specification

if TYPE_CHECKING:
    from ccasync.domain.value_objects import TenantId

A = TypeVar("A", bound=AggregateRoot)

logger = logging.getLogger(__name__)


class InMemoryRepository(Generic[A]):
    """Stores aggregates of one type keyed by id, in insertion order.

    Every aggregate is held fully loaded, so eager-load hints are
    accepted but have nothing to do. When *tenant_id* is passed to a
    read, results are restricted to that tenant.
    """

    def __init__(self, name: str = "aggregate") -> None:
        self._name = name
        self._items: dict[UUID, A] = {}

    def get(self, aggregate_id: UUID, *, tenant_id: TenantId | None = None) -> A | None:
        aggregate = self._items.get(aggregate_id)
        if aggregate is None:
            return None
        if tenant_id is not None and not ForTenant(tenant_id).is_satisfied_by(aggregate):
            return None
        return aggregate

    def find(self, spec: Specification[A], *, tenant_id: TenantId | None = None) -> list[A]:
        """Return every stored aggregate satisfying *spec*.

        Raises:
            TypeError: If *spec* is None.
        """
        if spec is None:
            raise TypeError("specification is required")
        if tenant_id is not None:
            spec = ForTenant(tenant_id) & spec
        if spec.includes or spec.include_paths:
            logger.debug(
                "Ignoring %d eager-load hint(s) on %s query; aggregates are fully loaded",
                len(spec.includes) + len(spec.include_paths),
                self._name,
            )
        return [item for item in self._items.values() if spec.is_satisfied_by(item)]

    def add(self, aggregate: A) -> None:
        if aggregate is None:
            raise TypeError("aggregate is required")
        if aggregate.id in self._items:
            raise KeyError(f"{self._name} {aggregate.id} already exists")
        self._items[aggregate.id] = aggregate
        logger.debug("Added %s %s", self._name, aggregate.id)

    def update(self, aggregate: A) -> None:
        if aggregate is None:
            raise TypeError("aggregate is required")
        if aggregate.id not in self._items:
            raise KeyError(f"{self._name} {aggregate.id} does not exist")
        self._items[aggregate.id] = aggregate

    def remove(self, aggregate: A) -> None:
        if aggregate is None:
            raise TypeError("aggregate is required")
        if aggregate.id not in self._items:
            raise KeyError(f"{self._name} {aggregate.id} does not exist")
        del self._items[aggregate.id]
        logger.debug("Removed %s %s", self._name, aggregate.id)

    def __len__(self) -> int:
        return len(self._items)
