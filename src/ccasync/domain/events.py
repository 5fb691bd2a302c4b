"""Domain events raised by the aggregates.

Each event is an immutable record of something that already happened.
``event_type`` is a stable dotted name handlers can dispatch on.

INVARIANT: Events never carry credentials (only usernames).
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, ClassVar
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from ccasync.domain.lifecycle import SyncJobType
from ccasync.domain.types import LdcProvider, UtilityProvider


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DomainEvent(BaseModel):
    """Base class for all domain events."""

    model_config = {"frozen": True}

    event_type: ClassVar[str] = "domain_event"

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=_utcnow)

    def to_payload(self) -> dict[str, Any]:
        """JSON-safe dict including the event type, for handlers and logs."""
        return {"event_type": self.event_type, **self.model_dump(mode="json")}


# --- Customer ---


class CustomerCreated(DomainEvent):
    event_type: ClassVar[str] = "customer.created"

    customer_id: UUID
    tenant_id: UUID
    customer_name: str
    email: str


class UtilityAccountAdded(DomainEvent):
    event_type: ClassVar[str] = "customer.utility_account_added"

    customer_id: UUID
    account_id: UUID
    account_number: str
    provider: UtilityProvider


class UtilityAccountRemoved(DomainEvent):
    event_type: ClassVar[str] = "customer.utility_account_removed"

    customer_id: UUID
    account_id: UUID


class CustomerContactInfoUpdated(DomainEvent):
    """Carries the values passed by the caller; None means not passed."""

    event_type: ClassVar[str] = "customer.contact_info_updated"

    customer_id: UUID
    email: str | None = None
    phone: str | None = None
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


class CustomerSynced(DomainEvent):
    event_type: ClassVar[str] = "customer.synced"

    customer_id: UUID
    synced_at: datetime
    account_count: int


class CustomerSyncFailed(DomainEvent):
    event_type: ClassVar[str] = "customer.sync_failed"

    customer_id: UUID
    failed_at: datetime
    reason: str


# --- LDC account ---


class LdcAccountCreated(DomainEvent):
    event_type: ClassVar[str] = "ldc_account.created"

    ldc_account_id: UUID
    tenant_id: UUID
    provider: LdcProvider
    account_name: str


class LdcAccountCredentialsUpdated(DomainEvent):
    event_type: ClassVar[str] = "ldc_account.credentials_updated"

    ldc_account_id: UUID
    username: str


class LdcAccountSyncEnabled(DomainEvent):
    event_type: ClassVar[str] = "ldc_account.sync_enabled"

    ldc_account_id: UUID
    provider: LdcProvider


class LdcAccountSyncDisabled(DomainEvent):
    event_type: ClassVar[str] = "ldc_account.sync_disabled"

    ldc_account_id: UUID
    provider: LdcProvider


# --- Sync job ---


class SyncJobCreated(DomainEvent):
    event_type: ClassVar[str] = "sync_job.created"

    sync_job_id: UUID
    tenant_id: UUID
    job_type: SyncJobType
    ldc_account_id: UUID | None = None


class SyncJobStarted(DomainEvent):
    event_type: ClassVar[str] = "sync_job.started"

    sync_job_id: UUID
    started_at: datetime


class SyncJobProgressUpdated(DomainEvent):
    event_type: ClassVar[str] = "sync_job.progress_updated"

    sync_job_id: UUID
    processed_records: int
    total_records: int
    progress_percentage: float


class SyncJobCompleted(DomainEvent):
    """Raised for both full and partial completion."""

    event_type: ClassVar[str] = "sync_job.completed"

    sync_job_id: UUID
    completed_at: datetime
    total_records: int
    successful_records: int


class SyncJobFailed(DomainEvent):
    event_type: ClassVar[str] = "sync_job.failed"

    sync_job_id: UUID
    failed_at: datetime
    reason: str


class SyncJobCancelled(DomainEvent):
    event_type: ClassVar[str] = "sync_job.cancelled"

    sync_job_id: UUID
    cancelled_at: datetime
    reason: str
