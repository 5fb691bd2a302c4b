"""SyncJob aggregate: the record of one synchronization run.

A job does not schedule or execute anything. An external runner drives
it through the lifecycle in :mod:`ccasync.domain.lifecycle`::

    pending -> running -> completed | partially_completed | failed
    pending | running -> cancelled

Every illegal move fails with ``SyncJob.InvalidStateTransition``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from uuid import UUID

from ccasync.domain.base import AggregateRoot, Entity, ValueObject
from ccasync.domain.events import (
    SyncJobCancelled,
    SyncJobCompleted,
    SyncJobCreated,
    SyncJobFailed,
    SyncJobProgressUpdated,
    SyncJobStarted,
)
from ccasync.domain.lifecycle import (
    SYNC_JOB_TRANSITIONS,
    TERMINAL_JOB_STATUSES,
    SyncJobStatus,
    SyncJobType,
    is_valid_transition,
)
from ccasync.domain.result import Result
from ccasync.domain.value_objects import TenantId

ERROR_CODE_MAX_LENGTH = 100
ERROR_MESSAGE_MAX_LENGTH = 2000
RECORD_IDENTIFIER_MAX_LENGTH = 500


class SyncJobStatistics(ValueObject):
    """Record counts for a run.

    ``processed_records`` counts successful, failed and skipped records
    together, so their sum never exceeds it.
    """

    total_records: int
    processed_records: int
    successful_records: int
    failed_records: int
    skipped_records: int

    @classmethod
    def create(
        cls,
        total_records: int,
        processed_records: int,
        successful_records: int,
        failed_records: int,
        skipped_records: int,
    ) -> Result[SyncJobStatistics]:
        counts = (
            ("TotalRecords", "Total", total_records),
            ("ProcessedRecords", "Processed", processed_records),
            ("SuccessfulRecords", "Successful", successful_records),
            ("FailedRecords", "Failed", failed_records),
            ("SkippedRecords", "Skipped", skipped_records),
        )
        for suffix, label, count in counts:
            if count < 0:
                return Result.fail(
                    f"SyncJobStatistics.Invalid{suffix}",
                    f"{label} records cannot be negative.",
                )

        if processed_records > total_records:
            return Result.fail(
                "SyncJobStatistics.ProcessedExceedsTotal",
                "Processed records cannot exceed total records.",
            )
        if successful_records + failed_records + skipped_records > processed_records:
            return Result.fail(
                "SyncJobStatistics.DetailExceedsProcessed",
                "Sum of successful, failed, and skipped records cannot exceed processed records.",
            )

        return Result.success(
            cls(
                total_records=total_records,
                processed_records=processed_records,
                successful_records=successful_records,
                failed_records=failed_records,
                skipped_records=skipped_records,
            )
        )

    @classmethod
    def create_initial(cls, total_records: int) -> Result[SyncJobStatistics]:
        return cls.create(total_records, 0, 0, 0, 0)

    @classmethod
    def create_empty(cls) -> SyncJobStatistics:
        return cls(
            total_records=0,
            processed_records=0,
            successful_records=0,
            failed_records=0,
            skipped_records=0,
        )

    @property
    def progress_percentage(self) -> float:
        """Processed share of the total, 0-100, rounded to 2 places."""
        if self.total_records <= 0:
            return 0.0
        return round(self.processed_records / self.total_records * 100, 2)

    def __str__(self) -> str:
        return (
            f"Total: {self.total_records}, Processed: {self.processed_records}, "
            f"Successful: {self.successful_records}, Failed: {self.failed_records}, "
            f"Skipped: {self.skipped_records} ({self.progress_percentage}%)"
        )


class SyncJobError(Entity):
    """One record-level error captured while a job was running."""

    def __init__(
        self,
        *,
        error_code: str,
        error_message: str,
        record_identifier: str | None = None,
        occurred_at: datetime | None = None,
        error_id: UUID | None = None,
    ) -> None:
        super().__init__(error_id)
        self.error_code = error_code
        self.error_message = error_message
        self.record_identifier = record_identifier
        self.occurred_at = occurred_at or datetime.now(UTC)

    @classmethod
    def create(
        cls,
        error_code: str,
        error_message: str,
        record_identifier: str | None = None,
    ) -> Result[SyncJobError]:
        if error_code is None or not error_code.strip():
            return Result.fail("SyncJobError.InvalidErrorCode", "Error code cannot be empty.")
        if len(error_code) > ERROR_CODE_MAX_LENGTH:
            return Result.fail(
                "SyncJobError.InvalidErrorCode",
                f"Error code cannot exceed {ERROR_CODE_MAX_LENGTH} characters.",
            )
        if error_message is None or not error_message.strip():
            return Result.fail("SyncJobError.InvalidErrorMessage", "Error message cannot be empty.")
        if len(error_message) > ERROR_MESSAGE_MAX_LENGTH:
            return Result.fail(
                "SyncJobError.InvalidErrorMessage",
                f"Error message cannot exceed {ERROR_MESSAGE_MAX_LENGTH} characters.",
            )
        if record_identifier is not None and len(record_identifier) > RECORD_IDENTIFIER_MAX_LENGTH:
            return Result.fail(
                "SyncJobError.InvalidRecordIdentifier",
                f"Record identifier cannot exceed {RECORD_IDENTIFIER_MAX_LENGTH} characters.",
            )

        return Result.success(
            cls(
                error_code=error_code.strip(),
                error_message=error_message.strip(),
                record_identifier=record_identifier.strip() if record_identifier is not None else None,
            )
        )

    def __repr__(self) -> str:
        return f"SyncJobError(id={self.id}, error_code={self.error_code!r})"


class SyncJob(AggregateRoot):
    """One synchronization run for a tenant, optionally scoped to an LDC account."""

    def __init__(
        self,
        *,
        tenant_id: TenantId,
        job_type: SyncJobType,
        status: SyncJobStatus = SyncJobStatus.PENDING,
        ldc_account_id: UUID | None = None,
        correlation_id: UUID | None = None,
        statistics: SyncJobStatistics | None = None,
        errors: list[SyncJobError] | None = None,
        created_at: datetime | None = None,
        started_at: datetime | None = None,
        completed_at: datetime | None = None,
        job_id: UUID | None = None,
    ) -> None:
        super().__init__(job_id)
        self._tenant_id = tenant_id
        self._job_type = job_type
        self._status = status
        self._ldc_account_id = ldc_account_id
        self._correlation_id = correlation_id
        self._statistics = statistics or SyncJobStatistics.create_empty()
        self._errors: list[SyncJobError] = list(errors or [])
        self._created_at = created_at or datetime.now(UTC)
        self._started_at = started_at
        self._completed_at = completed_at

    @classmethod
    def create(
        cls,
        tenant_id: TenantId,
        job_type: SyncJobType,
        ldc_account_id: UUID | None = None,
        correlation_id: UUID | None = None,
    ) -> Result[SyncJob]:
        if tenant_id is None:
            raise TypeError("tenant_id is required")
        if ldc_account_id is not None and ldc_account_id.int == 0:
            return Result.fail("SyncJob.InvalidLdcAccountId", "LDC account ID cannot be an empty GUID.")
        if correlation_id is not None and correlation_id.int == 0:
            return Result.fail("SyncJob.InvalidCorrelationId", "Correlation ID cannot be an empty GUID.")

        job = cls(
            tenant_id=tenant_id,
            job_type=SyncJobType(job_type),
            ldc_account_id=ldc_account_id,
            correlation_id=correlation_id,
        )
        job._raise_event(
            SyncJobCreated(
                sync_job_id=job.id,
                tenant_id=tenant_id.value,
                job_type=job.job_type,
                ldc_account_id=ldc_account_id,
            )
        )
        return Result.success(job)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def tenant_id(self) -> TenantId:
        return self._tenant_id

    @property
    def job_type(self) -> SyncJobType:
        return self._job_type

    @property
    def status(self) -> SyncJobStatus:
        return self._status

    @property
    def ldc_account_id(self) -> UUID | None:
        return self._ldc_account_id

    @property
    def correlation_id(self) -> UUID | None:
        return self._correlation_id

    @property
    def statistics(self) -> SyncJobStatistics:
        return self._statistics

    @property
    def errors(self) -> tuple[SyncJobError, ...]:
        return tuple(self._errors)

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def started_at(self) -> datetime | None:
        return self._started_at

    @property
    def completed_at(self) -> datetime | None:
        return self._completed_at

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _guard(self, target: SyncJobStatus, action: str) -> Result[None]:
        if not is_valid_transition(self._status, target, SYNC_JOB_TRANSITIONS):
            return Result.fail(
                "SyncJob.InvalidStateTransition",
                f"Cannot {action} a job that is in '{self._status}' status.",
                current=str(self._status),
                target=str(target),
            )
        return Result.success()

    def _require_running(self, action: str) -> Result[None]:
        if self._status is not SyncJobStatus.RUNNING:
            return Result.fail(
                "SyncJob.InvalidStateTransition",
                f"Cannot {action} a job that is in '{self._status}' status. Job must be in 'running' status.",
                current=str(self._status),
            )
        return Result.success()

    def start(self, total_records: int) -> Result[None]:
        guard = self._guard(SyncJobStatus.RUNNING, "start")
        if not guard.ok:
            return guard
        if total_records < 0:
            return Result.fail("SyncJob.InvalidTotalRecords", "Total records cannot be negative.")

        stats = SyncJobStatistics.create_initial(total_records)
        if not stats.ok:
            return Result.failure(stats.error)

        self._status = SyncJobStatus.RUNNING
        self._started_at = datetime.now(UTC)
        self._statistics = stats.value
        self._raise_event(SyncJobStarted(sync_job_id=self.id, started_at=self._started_at))
        return Result.success()

    def update_progress(self, statistics: SyncJobStatistics) -> Result[None]:
        if statistics is None:
            raise TypeError("statistics is required")
        guard = self._require_running("update progress of")
        if not guard.ok:
            return guard

        self._statistics = statistics
        self._raise_event(
            SyncJobProgressUpdated(
                sync_job_id=self.id,
                processed_records=statistics.processed_records,
                total_records=statistics.total_records,
                progress_percentage=statistics.progress_percentage,
            )
        )
        return Result.success()

    def record_error(
        self,
        error_code: str,
        error_message: str,
        record_identifier: str | None = None,
    ) -> Result[None]:
        """Append a record-level error. Raises no event."""
        guard = self._require_running("record errors for")
        if not guard.ok:
            return guard

        created = SyncJobError.create(error_code, error_message, record_identifier)
        if not created.ok:
            return Result.failure(created.error)
        self._errors.append(created.value)
        return Result.success()

    def complete(self, final_statistics: SyncJobStatistics) -> Result[None]:
        if final_statistics is None:
            raise TypeError("final_statistics is required")
        guard = self._guard(SyncJobStatus.COMPLETED, "complete")
        if not guard.ok:
            return guard
        return self._finish(SyncJobStatus.COMPLETED, final_statistics)

    def complete_partially(self, final_statistics: SyncJobStatistics) -> Result[None]:
        """Finish with some records failed; at least one failure is required."""
        if final_statistics is None:
            raise TypeError("final_statistics is required")
        guard = self._guard(SyncJobStatus.PARTIALLY_COMPLETED, "partially complete")
        if not guard.ok:
            return guard
        if final_statistics.failed_records == 0:
            return Result.fail(
                "SyncJob.NoFailedRecords",
                "A partially completed job must have at least one failed record. "
                "Use complete() if all records succeeded.",
            )
        return self._finish(SyncJobStatus.PARTIALLY_COMPLETED, final_statistics)

    def _finish(self, status: SyncJobStatus, final_statistics: SyncJobStatistics) -> Result[None]:
        self._status = status
        self._completed_at = datetime.now(UTC)
        self._statistics = final_statistics
        self._raise_event(
            SyncJobCompleted(
                sync_job_id=self.id,
                completed_at=self._completed_at,
                total_records=final_statistics.total_records,
                successful_records=final_statistics.successful_records,
            )
        )
        return Result.success()

    def fail(self, reason: str) -> Result[None]:
        if reason is None or not reason.strip():
            return Result.fail("SyncJob.InvalidFailureReason", "Failure reason cannot be empty.")
        guard = self._guard(SyncJobStatus.FAILED, "fail")
        if not guard.ok:
            return guard

        self._status = SyncJobStatus.FAILED
        self._completed_at = datetime.now(UTC)
        self._raise_event(SyncJobFailed(sync_job_id=self.id, failed_at=self._completed_at, reason=reason))
        return Result.success()

    def cancel(self, reason: str) -> Result[None]:
        if reason is None or not reason.strip():
            return Result.fail(
                "SyncJob.InvalidCancellationReason", "Cancellation reason cannot be empty."
            )
        guard = self._guard(SyncJobStatus.CANCELLED, "cancel")
        if not guard.ok:
            return guard

        self._status = SyncJobStatus.CANCELLED
        self._completed_at = datetime.now(UTC)
        self._raise_event(
            SyncJobCancelled(sync_job_id=self.id, cancelled_at=self._completed_at, reason=reason)
        )
        return Result.success()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def duration(self) -> timedelta | None:
        """Elapsed run time; open-ended runs measure up to now."""
        if self._started_at is None:
            return None
        end = self._completed_at or datetime.now(UTC)
        return end - self._started_at

    def is_terminal(self) -> bool:
        return self._status in TERMINAL_JOB_STATUSES

    def has_errors(self) -> bool:
        return bool(self._errors)

    def __repr__(self) -> str:
        return (
            f"SyncJob(id={self.id}, tenant_id={self._tenant_id}, "
            f"job_type={self._job_type.value}, status={self._status.value})"
        )
