"""LDC account aggregate and its sync policy.

An :class:`LdcAccount` stores a tenant's credentials for one provider
portal plus the :class:`SyncConfiguration` an external scheduler reads.
The password is stored already encrypted; this module never decrypts,
logs or renders it.

INVARIANT: SyncConfiguration is immutable. Changing any field means
building a new configuration and swapping it in.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import ClassVar
from uuid import UUID

from ccasync.domain.base import AggregateRoot, ValueObject
from ccasync.domain.events import (
    LdcAccountCreated,
    LdcAccountCredentialsUpdated,
    LdcAccountSyncDisabled,
    LdcAccountSyncEnabled,
)
from ccasync.domain.lifecycle import SyncStatus
from ccasync.domain.result import Result
from ccasync.domain.types import LdcProvider
from ccasync.domain.value_objects import TenantId

ACCOUNT_NAME_MAX_LENGTH = 200
USERNAME_MAX_LENGTH = 100


class SyncConfiguration(ValueObject):
    """Sync policy consumed by the scheduler. Nothing here enforces it."""

    MIN_SYNC_INTERVAL_MINUTES: ClassVar[int] = 5
    MAX_SYNC_INTERVAL_MINUTES: ClassVar[int] = 1440
    MAX_RETRY_ATTEMPTS: ClassVar[int] = 10

    is_enabled: bool
    sync_interval_minutes: int
    max_retries: int
    timeout_seconds: int

    @classmethod
    def create(
        cls,
        is_enabled: bool,
        sync_interval_minutes: int,
        max_retries: int,
        timeout_seconds: int,
    ) -> Result[SyncConfiguration]:
        """Validate interval, retries and timeout in that order.

        The first failing check wins.
        """
        if sync_interval_minutes < cls.MIN_SYNC_INTERVAL_MINUTES:
            return Result.fail(
                "SyncConfiguration.IntervalTooShort",
                f"Sync interval must be at least {cls.MIN_SYNC_INTERVAL_MINUTES} minutes.",
            )
        if sync_interval_minutes > cls.MAX_SYNC_INTERVAL_MINUTES:
            return Result.fail(
                "SyncConfiguration.IntervalTooLong",
                f"Sync interval cannot exceed {cls.MAX_SYNC_INTERVAL_MINUTES} minutes (24 hours).",
            )
        if max_retries < 0:
            return Result.fail("SyncConfiguration.NegativeRetries", "Max retries cannot be negative.")
        if max_retries > cls.MAX_RETRY_ATTEMPTS:
            return Result.fail(
                "SyncConfiguration.TooManyRetries",
                f"Max retries cannot exceed {cls.MAX_RETRY_ATTEMPTS}.",
            )
        if timeout_seconds <= 0:
            return Result.fail("SyncConfiguration.InvalidTimeout", "Timeout must be greater than zero.")

        return Result.success(
            cls(
                is_enabled=is_enabled,
                sync_interval_minutes=sync_interval_minutes,
                max_retries=max_retries,
                timeout_seconds=timeout_seconds,
            )
        )

    @classmethod
    def create_default(cls) -> SyncConfiguration:
        """Enabled, hourly, 3 retries, 5 minute timeout."""
        return cls(is_enabled=True, sync_interval_minutes=60, max_retries=3, timeout_seconds=300)

    @classmethod
    def create_disabled(cls) -> SyncConfiguration:
        """The default policy with sync switched off."""
        return cls(is_enabled=False, sync_interval_minutes=60, max_retries=3, timeout_seconds=300)

    @property
    def interval(self) -> timedelta:
        return timedelta(minutes=self.sync_interval_minutes)

    @property
    def timeout(self) -> timedelta:
        return timedelta(seconds=self.timeout_seconds)


def _validate_username(username: str) -> Result[None]:
    if username is None or not username.strip():
        return Result.fail("LdcAccount.InvalidUsername", "Username cannot be empty.")
    if len(username) > USERNAME_MAX_LENGTH:
        return Result.fail(
            "LdcAccount.InvalidUsername",
            f"Username cannot exceed {USERNAME_MAX_LENGTH} characters.",
        )
    return Result.success()


def _validate_password(encrypted_password: str) -> Result[None]:
    if encrypted_password is None or not encrypted_password.strip():
        return Result.fail("LdcAccount.InvalidPassword", "Password cannot be empty.")
    return Result.success()


class LdcAccount(AggregateRoot):
    """A tenant's credentials and sync policy for one LDC portal."""

    def __init__(
        self,
        *,
        tenant_id: TenantId,
        provider: LdcProvider,
        account_name: str,
        username: str,
        encrypted_password: str,
        sync_configuration: SyncConfiguration,
        sync_status: SyncStatus = SyncStatus.PENDING,
        last_synced_at: datetime | None = None,
        created_at: datetime | None = None,
        modified_at: datetime | None = None,
        account_id: UUID | None = None,
    ) -> None:
        super().__init__(account_id)
        self._tenant_id = tenant_id
        self._provider = provider
        self._account_name = account_name
        self._username = username
        self._encrypted_password = encrypted_password
        self._sync_configuration = sync_configuration
        self._sync_status = sync_status
        self._last_synced_at = last_synced_at
        self._created_at = created_at or datetime.now(UTC)
        self._modified_at = modified_at

    @classmethod
    def create(
        cls,
        tenant_id: TenantId,
        provider: LdcProvider,
        account_name: str,
        username: str,
        encrypted_password: str,
        sync_configuration: SyncConfiguration | None = None,
    ) -> Result[LdcAccount]:
        """Validate and create an account, raising ``LdcAccountCreated``.

        Falls back to :meth:`SyncConfiguration.create_default` when no
        configuration is given.

        Raises:
            TypeError: If *tenant_id* is missing.
        """
        if tenant_id is None:
            raise TypeError("tenant_id is required")

        if account_name is None or not account_name.strip():
            return Result.fail("LdcAccount.InvalidAccountName", "Account name cannot be empty.")
        if len(account_name) > ACCOUNT_NAME_MAX_LENGTH:
            return Result.fail(
                "LdcAccount.InvalidAccountName",
                f"Account name cannot exceed {ACCOUNT_NAME_MAX_LENGTH} characters.",
            )
        for check in (_validate_username(username), _validate_password(encrypted_password)):
            if not check.ok:
                return check

        account = cls(
            tenant_id=tenant_id,
            provider=LdcProvider(provider),
            account_name=account_name.strip(),
            username=username.strip(),
            encrypted_password=encrypted_password,
            sync_configuration=sync_configuration or SyncConfiguration.create_default(),
        )
        account._raise_event(
            LdcAccountCreated(
                ldc_account_id=account.id,
                tenant_id=tenant_id.value,
                provider=account.provider,
                account_name=account.account_name,
            )
        )
        return Result.success(account)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def tenant_id(self) -> TenantId:
        return self._tenant_id

    @property
    def provider(self) -> LdcProvider:
        return self._provider

    @property
    def account_name(self) -> str:
        return self._account_name

    @property
    def username(self) -> str:
        return self._username

    @property
    def encrypted_password(self) -> str:
        return self._encrypted_password

    @property
    def sync_configuration(self) -> SyncConfiguration:
        return self._sync_configuration

    @property
    def sync_status(self) -> SyncStatus:
        return self._sync_status

    @property
    def last_synced_at(self) -> datetime | None:
        return self._last_synced_at

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def modified_at(self) -> datetime | None:
        return self._modified_at

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------

    def update_credentials(self, username: str, encrypted_password: str) -> Result[None]:
        for check in (_validate_username(username), _validate_password(encrypted_password)):
            if not check.ok:
                return check

        self._username = username.strip()
        self._encrypted_password = encrypted_password
        self._modified_at = datetime.now(UTC)
        self._raise_event(LdcAccountCredentialsUpdated(ldc_account_id=self.id, username=self._username))
        return Result.success()

    # ------------------------------------------------------------------
    # Sync configuration
    # ------------------------------------------------------------------

    def enable_sync(self) -> Result[None]:
        if self._sync_configuration.is_enabled:
            return Result.fail("LdcAccount.SyncAlreadyEnabled", "Synchronization is already enabled.")
        return self._set_enabled(True)

    def disable_sync(self) -> Result[None]:
        if not self._sync_configuration.is_enabled:
            return Result.fail("LdcAccount.SyncAlreadyDisabled", "Synchronization is already disabled.")
        return self._set_enabled(False)

    def update_sync_configuration(self, sync_configuration: SyncConfiguration) -> Result[None]:
        """Replace the whole configuration.

        Raises the enabled/disabled event only when the flag actually flips.
        """
        if sync_configuration is None:
            raise TypeError("sync_configuration is required")

        was_enabled = self._sync_configuration.is_enabled
        self._sync_configuration = sync_configuration
        self._modified_at = datetime.now(UTC)

        if not was_enabled and sync_configuration.is_enabled:
            self._raise_event(LdcAccountSyncEnabled(ldc_account_id=self.id, provider=self._provider))
        elif was_enabled and not sync_configuration.is_enabled:
            self._raise_event(LdcAccountSyncDisabled(ldc_account_id=self.id, provider=self._provider))
        return Result.success()

    def _set_enabled(self, enabled: bool) -> Result[None]:
        current = self._sync_configuration
        result = SyncConfiguration.create(
            enabled,
            current.sync_interval_minutes,
            current.max_retries,
            current.timeout_seconds,
        )
        if not result.ok:
            return Result.failure(result.error)

        self._sync_configuration = result.value
        self._modified_at = datetime.now(UTC)
        event_cls = LdcAccountSyncEnabled if enabled else LdcAccountSyncDisabled
        self._raise_event(event_cls(ldc_account_id=self.id, provider=self._provider))
        return Result.success()

    # ------------------------------------------------------------------
    # Sync status
    # ------------------------------------------------------------------

    def mark_as_synced(self) -> None:
        self._sync_status = SyncStatus.SYNCED
        self._last_synced_at = datetime.now(UTC)

    def mark_sync_as_failed(self) -> None:
        self._sync_status = SyncStatus.FAILED

    def mark_sync_as_in_progress(self) -> None:
        self._sync_status = SyncStatus.IN_PROGRESS

    def is_ready_for_sync(self) -> bool:
        """Enabled, with both a username and a password on file."""
        return (
            self._sync_configuration.is_enabled
            and bool(self._username and self._username.strip())
            and bool(self._encrypted_password and self._encrypted_password.strip())
        )

    def __repr__(self) -> str:
        return (
            f"LdcAccount(id={self.id}, tenant_id={self._tenant_id}, provider={self._provider.value}, "
            f"account_name={self._account_name!r}, sync_status={self._sync_status.value})"
        )
