"""Customer aggregate and its owned utility accounts.

A customer belongs to exactly one tenant and exclusively owns its
:class:`UtilityAccount` entities: they are added and removed only
through the customer, and account numbers are unique per customer.

Sync status moves only through the explicit mark-methods; nothing here
transitions on its own.
"""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from ccasync.domain.base import AggregateRoot, Entity
from ccasync.domain.events import (
    CustomerContactInfoUpdated,
    CustomerCreated,
    CustomerSynced,
    CustomerSyncFailed,
    UtilityAccountAdded,
    UtilityAccountRemoved,
)
from ccasync.domain.lifecycle import SyncStatus, derive_sync_status
from ccasync.domain.result import Result
from ccasync.domain.types import UtilityProvider
from ccasync.domain.value_objects import (
    AccountNumber,
    Address,
    CustomerName,
    EmailAddress,
    MeterNumber,
    PhoneNumber,
    TenantId,
)


def _require(value: object, name: str) -> None:
    if value is None:
        raise TypeError(f"{name} is required")


class UtilityAccount(Entity):
    """One utility account held by a customer."""

    def __init__(
        self,
        *,
        account_number: AccountNumber,
        provider: UtilityProvider,
        meter_number: MeterNumber | None = None,
        service_address: Address | None = None,
        sync_status: SyncStatus = SyncStatus.PENDING,
        last_synced_at: datetime | None = None,
        added_at: datetime | None = None,
        account_id: UUID | None = None,
    ) -> None:
        super().__init__(account_id)
        self._account_number = account_number
        self._provider = provider
        self._meter_number = meter_number
        self._service_address = service_address
        self._sync_status = sync_status
        self._last_synced_at = last_synced_at
        self._added_at = added_at or datetime.now(UTC)

    @classmethod
    def create(
        cls,
        account_number: AccountNumber,
        provider: UtilityProvider,
        meter_number: MeterNumber | None = None,
        service_address: Address | None = None,
    ) -> Result[UtilityAccount]:
        _require(account_number, "account_number")
        return Result.success(
            cls(
                account_number=account_number,
                provider=UtilityProvider(provider),
                meter_number=meter_number,
                service_address=service_address,
            )
        )

    @property
    def account_number(self) -> AccountNumber:
        return self._account_number

    @property
    def provider(self) -> UtilityProvider:
        return self._provider

    @property
    def meter_number(self) -> MeterNumber | None:
        return self._meter_number

    @property
    def service_address(self) -> Address | None:
        return self._service_address

    @property
    def sync_status(self) -> SyncStatus:
        return self._sync_status

    @property
    def last_synced_at(self) -> datetime | None:
        return self._last_synced_at

    @property
    def added_at(self) -> datetime:
        return self._added_at

    def update_meter_number(self, meter_number: MeterNumber | None) -> None:
        self._meter_number = meter_number

    def update_service_address(self, service_address: Address | None) -> None:
        self._service_address = service_address

    def mark_as_synced(self) -> None:
        self._sync_status = SyncStatus.SYNCED
        self._last_synced_at = datetime.now(UTC)

    def mark_sync_as_failed(self) -> None:
        self._sync_status = SyncStatus.FAILED

    def mark_sync_as_in_progress(self) -> None:
        self._sync_status = SyncStatus.IN_PROGRESS

    def __repr__(self) -> str:
        return (
            f"UtilityAccount(id={self.id}, account_number={self._account_number.value!r}, "
            f"provider={self._provider.value}, sync_status={self._sync_status.value})"
        )


class Customer(AggregateRoot):
    """A tenant's enrolled customer.

    Build new customers with :meth:`create`; the constructor is for
    rehydrating existing state and raises no events.
    """

    def __init__(
        self,
        *,
        tenant_id: TenantId,
        name: CustomerName,
        email: EmailAddress,
        phone: PhoneNumber | None = None,
        service_address: Address | None = None,
        sync_status: SyncStatus = SyncStatus.PENDING,
        last_synced_at: datetime | None = None,
        created_at: datetime | None = None,
        utility_accounts: list[UtilityAccount] | None = None,
        customer_id: UUID | None = None,
    ) -> None:
        super().__init__(customer_id)
        self._tenant_id = tenant_id
        self._name = name
        self._email = email
        self._phone = phone
        self._service_address = service_address
        self._sync_status = sync_status
        self._last_synced_at = last_synced_at
        self._created_at = created_at or datetime.now(UTC)
        self._utility_accounts: list[UtilityAccount] = list(utility_accounts or [])

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    @classmethod
    def create(
        cls,
        tenant_id: TenantId,
        name: CustomerName,
        email: EmailAddress,
        phone: PhoneNumber | None = None,
        service_address: Address | None = None,
    ) -> Result[Customer]:
        """Create a pending customer and raise ``CustomerCreated``.

        Raises:
            TypeError: If *tenant_id*, *name* or *email* is missing.
        """
        _require(tenant_id, "tenant_id")
        _require(name, "name")
        _require(email, "email")

        customer = cls(
            tenant_id=tenant_id,
            name=name,
            email=email,
            phone=phone,
            service_address=service_address,
        )
        customer._raise_event(
            CustomerCreated(
                customer_id=customer.id,
                tenant_id=tenant_id.value,
                customer_name=name.full_name,
                email=email.value,
            )
        )
        return Result.success(customer)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def tenant_id(self) -> TenantId:
        return self._tenant_id

    @property
    def name(self) -> CustomerName:
        return self._name

    @property
    def email(self) -> EmailAddress:
        return self._email

    @property
    def phone(self) -> PhoneNumber | None:
        return self._phone

    @property
    def service_address(self) -> Address | None:
        return self._service_address

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
    def utility_accounts(self) -> tuple[UtilityAccount, ...]:
        """Snapshot of the owned accounts; mutate only via the customer."""
        return tuple(self._utility_accounts)

    # ------------------------------------------------------------------
    # Utility accounts
    # ------------------------------------------------------------------

    def add_utility_account(
        self,
        account_number: AccountNumber,
        provider: UtilityProvider,
        meter_number: MeterNumber | None = None,
        service_address: Address | None = None,
    ) -> Result[UtilityAccount]:
        """Attach a new account. Fails with ``UtilityAccount.Duplicate``
        if this customer already holds *account_number*."""
        _require(account_number, "account_number")

        if self.get_utility_account_by_number(account_number) is not None:
            return Result.fail(
                "UtilityAccount.Duplicate",
                f"An account with number {account_number} already exists for this customer.",
                account_number=account_number.value,
            )

        result = UtilityAccount.create(account_number, provider, meter_number, service_address)
        if not result.ok:
            return result

        account = result.value
        self._utility_accounts.append(account)
        self._raise_event(
            UtilityAccountAdded(
                customer_id=self.id,
                account_id=account.id,
                account_number=account.account_number.value,
                provider=account.provider,
            )
        )
        return Result.success(account)

    def remove_utility_account(self, account_id: UUID) -> Result[None]:
        account = self.get_utility_account(account_id)
        if account is None:
            return Result.fail(
                "UtilityAccount.NotFound",
                "The specified utility account was not found.",
            )

        self._utility_accounts.remove(account)
        self._raise_event(UtilityAccountRemoved(customer_id=self.id, account_id=account_id))
        return Result.success()

    def get_utility_account(self, account_id: UUID) -> UtilityAccount | None:
        return next((a for a in self._utility_accounts if a.id == account_id), None)

    def get_utility_account_by_number(self, account_number: AccountNumber) -> UtilityAccount | None:
        return next(
            (a for a in self._utility_accounts if a.account_number == account_number),
            None,
        )

    # ------------------------------------------------------------------
    # Contact info
    # ------------------------------------------------------------------

    def update_contact_info(
        self,
        email: EmailAddress | None = None,
        phone: PhoneNumber | None = None,
        service_address: Address | None = None,
    ) -> Result[None]:
        """Replace whichever fields were passed and differ from the current ones.

        Raises ``CustomerContactInfoUpdated`` once if anything changed; a
        call that changes nothing succeeds silently.
        """
        updated = False

        if email is not None and email != self._email:
            self._email = email
            updated = True
        if phone is not None and phone != self._phone:
            self._phone = phone
            updated = True
        if service_address is not None and service_address != self._service_address:
            self._service_address = service_address
            updated = True

        if updated:
            self._raise_event(
                CustomerContactInfoUpdated(
                    customer_id=self.id,
                    email=email.value if email is not None else None,
                    phone=phone.value if phone is not None else None,
                    street=service_address.street if service_address is not None else None,
                    city=service_address.city if service_address is not None else None,
                    state=service_address.state if service_address is not None else None,
                    zip_code=service_address.zip_code if service_address is not None else None,
                )
            )
        return Result.success()

    # ------------------------------------------------------------------
    # Sync status
    # ------------------------------------------------------------------

    def mark_as_synced(self) -> None:
        self._sync_status = SyncStatus.SYNCED
        self._last_synced_at = datetime.now(UTC)
        self._raise_event(
            CustomerSynced(
                customer_id=self.id,
                synced_at=self._last_synced_at,
                account_count=len(self._utility_accounts),
            )
        )

    def mark_sync_as_failed(self, reason: str) -> None:
        _require(reason, "reason")
        self._sync_status = SyncStatus.FAILED
        self._raise_event(
            CustomerSyncFailed(customer_id=self.id, failed_at=datetime.now(UTC), reason=reason)
        )

    def mark_sync_as_in_progress(self) -> None:
        # Raises no event, unlike the outcome marks.
        self._sync_status = SyncStatus.IN_PROGRESS

    def synced_account_count(self) -> int:
        return sum(1 for a in self._utility_accounts if a.sync_status is SyncStatus.SYNCED)

    def failed_account_count(self) -> int:
        return sum(1 for a in self._utility_accounts if a.sync_status is SyncStatus.FAILED)

    def are_all_accounts_synced(self) -> bool:
        """True only when there is at least one account and every one is synced."""
        return bool(self._utility_accounts) and all(
            a.sync_status is SyncStatus.SYNCED for a in self._utility_accounts
        )

    def has_utility_accounts(self) -> bool:
        return bool(self._utility_accounts)

    def derived_sync_status(self) -> SyncStatus:
        """Status implied by the owned accounts. Does not change :attr:`sync_status`."""
        return derive_sync_status(a.sync_status for a in self._utility_accounts)

    def __repr__(self) -> str:
        return (
            f"Customer(id={self.id}, tenant_id={self._tenant_id}, "
            f"name={self._name.full_name!r}, sync_status={self._sync_status.value})"
        )
