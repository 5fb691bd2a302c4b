"""BaseService: shared persistence and event publishing for services.

Every service receives a repository at construction time and, optionally,
an :class:`~ccasync.domain.ports.EventPublisher`. Without a publisher the
aggregate's events are left buffered for the caller to drain.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar
from uuid import UUID

from ccasync.domain.base import AggregateRoot
from ccasync.domain.result import Result
from ccasync.domain.value_objects import TenantId

if TYPE_CHECKING:
    from ccasync.domain.ports import EventPublisher, Repository

A = TypeVar("A", bound=AggregateRoot)

logger = logging.getLogger(__name__)


class BaseService(Generic[A]):
    """Base for services that manage one aggregate type.

    Subclasses set ``_entity`` to the aggregate's error-code prefix
    (``"Customer"`` gives ``"Customer.NotFound"``).
    """

    _entity: str = "Aggregate"

    def __init__(self, repository: Repository[A], publisher: EventPublisher | None = None) -> None:
        self._repository = repository
        self._publisher = publisher

    def _load(self, tenant_id: TenantId, aggregate_id: UUID) -> Result[A]:
        aggregate = self._repository.get(aggregate_id, tenant_id=tenant_id)
        if aggregate is None:
            return Result.fail(
                f"{self._entity}.NotFound",
                f"{self._entity} {aggregate_id} was not found.",
                id=str(aggregate_id),
            )
        return Result.success(aggregate)

    def _save(self, aggregate: A, *, is_new: bool = False) -> list[str]:
        """Persist *aggregate*, then publish its events.

        Returns publisher warnings; they are logged, never raised.
        """
        if is_new:
            self._repository.add(aggregate)
        else:
            self._repository.update(aggregate)
        return self._publish(aggregate)

    def _publish(self, aggregate: A) -> list[str]:
        """INVARIANT: Plugin failures are warnings, never errors."""
        if self._publisher is None:
            return []
        try:
            warnings = self._publisher.publish(aggregate)
        except Exception:
            logger.warning("Event publishing failed for %s %s", self._entity, aggregate.id, exc_info=True)
            return [f"Event publishing failed for {self._entity} {aggregate.id}"]
        for warning in warnings:
            logger.warning("%s", warning)
        return warnings


def parse_tenant(tenant_id: TenantId | UUID | str) -> Result[TenantId]:
    """Accept an already-built TenantId or parse raw input."""
    if isinstance(tenant_id, TenantId):
        return Result.success(tenant_id)
    return TenantId.create(tenant_id)


def parse_optional(factory: Any, raw: Any) -> Result[Any]:
    """Run ``factory.create(raw)`` unless *raw* is None, which passes through."""
    if raw is None:
        return Result.success(None)
    return factory.create(raw)
