"""Pluggy hook specifications for domain event delivery.

Handlers receive each event exactly once, in the order the aggregate
raised it, after the aggregate has been persisted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import pluggy

if TYPE_CHECKING:
    from ccasync.domain.events import DomainEvent

PROJECT_NAME = "ccasync"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class CcaSyncHookSpec:
    """Hook specifications for the ccasync plugin system."""

    @hookspec
    def handle_domain_event(self, event: DomainEvent) -> None:
        """Called once per domain event. Dispatch on ``event.event_type``."""

    @hookspec
    def domain_events_dispatched(self, aggregate_id: UUID, event_types: list[str]) -> None:
        """Called once per published batch, after every event was handled."""
