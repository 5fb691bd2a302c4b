"""Ready-made specifications over :class:`~ccasync.domain.sync_job.SyncJob`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccasync.domain.lifecycle import SyncJobStatus
from ccasync.domain.specifications.base import ForTenant, Specification
from ccasync.domain.specifications.criteria import Compare, Equals

if TYPE_CHECKING:
    from ccasync.domain.sync_job import SyncJob
    from ccasync.domain.value_objects import TenantId

ACTIVE_JOB_STATUSES: frozenset[SyncJobStatus] = frozenset({SyncJobStatus.PENDING, SyncJobStatus.RUNNING})


class SyncJobsForTenant(ForTenant["SyncJob"]):
    def __init__(self, tenant_id: TenantId) -> None:
        super().__init__(tenant_id, include_paths=("errors",))


class SyncJobsWithStatus(Specification["SyncJob"]):
    def __init__(self, status: SyncJobStatus) -> None:
        super().__init__(Equals("status", SyncJobStatus(status)))
        self.status = SyncJobStatus(status)


class ActiveSyncJobs(Specification["SyncJob"]):
    """Jobs that have not reached a terminal status."""

    def __init__(self) -> None:
        super().__init__(Compare("status", "in", ACTIVE_JOB_STATUSES))
