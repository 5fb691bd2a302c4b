"""Sync status and sync job lifecycle models.

Two lifecycles:
- Sync status (customers, utility accounts, LDC accounts): moved only by
  explicit mark-methods called from outside; no enforced ordering.
- Sync job status: a guarded state machine, transitions listed below.

The aggregate status of a customer can also be computed from the
statuses of its accounts, never set implicitly.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum


class SyncStatus(StrEnum):
    """Sync state of a customer, utility account or LDC account."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    SYNCED = "synced"
    FAILED = "failed"
    PARTIALLY_SUCCESSFUL = "partially_successful"


class SyncJobStatus(StrEnum):
    """Status of one synchronization run."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    PARTIALLY_COMPLETED = "partially_completed"


class SyncJobType(StrEnum):
    """What a synchronization run covers."""

    FULL_SYNC = "full_sync"
    INCREMENTAL_SYNC = "incremental_sync"
    ACCOUNT_SYNC = "account_sync"
    CUSTOMER_SYNC = "customer_sync"


# --- Transition maps ---

SYNC_JOB_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["running", "cancelled"],
    "running": ["completed", "partially_completed", "failed", "cancelled"],
    "completed": [],
    "partially_completed": [],
    "failed": [],
    "cancelled": [],
}

TERMINAL_JOB_STATUSES: frozenset[SyncJobStatus] = frozenset(
    {
        SyncJobStatus.COMPLETED,
        SyncJobStatus.PARTIALLY_COMPLETED,
        SyncJobStatus.FAILED,
        SyncJobStatus.CANCELLED,
    }
)


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed


def derive_sync_status(statuses: Iterable[SyncStatus]) -> SyncStatus:
    """Compute the aggregate status implied by a set of child statuses.

    Returns PENDING for an empty set. Any child still in progress wins;
    otherwise uniform children map to their own status and a mix of
    successes and failures is partially successful.
    """
    seen = set(statuses)
    if not seen:
        return SyncStatus.PENDING
    if SyncStatus.IN_PROGRESS in seen:
        return SyncStatus.IN_PROGRESS
    if len(seen) == 1:
        return next(iter(seen))
    if SyncStatus.SYNCED in seen and seen & {SyncStatus.FAILED, SyncStatus.PARTIALLY_SUCCESSFUL}:
        return SyncStatus.PARTIALLY_SUCCESSFUL
    if SyncStatus.PARTIALLY_SUCCESSFUL in seen:
        return SyncStatus.PARTIALLY_SUCCESSFUL
    return SyncStatus.PENDING
