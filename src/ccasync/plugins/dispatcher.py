"""Synchronous domain event dispatch via pluggy.

Drains an aggregate's buffered events and hands each one to every
``handle_domain_event`` implementation, oldest event first, then signals
the batch with ``domain_events_dispatched``. Call it only after the
aggregate was saved.

Each implementation is called separately, so a failing handler does not
keep the event from the others.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pluggy import HookCaller

    from ccasync.domain.base import AggregateRoot
    from ccasync.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class DomainEventDispatcher:
    """Delivers buffered domain events to every registered handler exactly once."""

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager

    def publish(self, aggregate: AggregateRoot) -> list[str]:
        """Deliver and clear *aggregate*'s events.

        Returns one warning string per failed handler call. The events are
        drained before delivery, so a failure is never retried here.
        """
        events = aggregate.pull_domain_events()
        if not events:
            return []

        warnings: list[str] = []
        for event in events:
            warnings.extend(self._call_each(self._pm.hook.handle_domain_event, event.event_type, event=event))
            logger.debug("Dispatched %s (%s)", event.event_type, event.event_id)

        event_types = [event.event_type for event in events]
        warnings.extend(
            self._call_each(
                self._pm.hook.domain_events_dispatched,
                "domain_events_dispatched",
                aggregate_id=aggregate.id,
                event_types=event_types,
            )
        )
        return warnings

    @staticmethod
    def _call_each(caller: HookCaller, label: str, **kwargs: Any) -> list[str]:
        """Call every implementation of *caller* in pluggy's order, isolating failures."""
        warnings: list[str] = []
        for impl in reversed(caller.get_hookimpls()):
            if impl.hookwrapper or impl.wrapper:
                continue
            try:
                impl.function(**{name: kwargs[name] for name in impl.argnames})
            except Exception:
                logger.warning("Handler %s failed for %s", impl.plugin_name, label, exc_info=True)
                warnings.append(f"Event handler {impl.plugin_name} failed for {label}")
        return warnings
