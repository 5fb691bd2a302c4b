"""Ready-made specifications over :class:`~ccasync.domain.customer.Customer`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ccasync.domain.lifecycle import SyncStatus
from ccasync.domain.specifications.base import ForTenant, Specification
from ccasync.domain.specifications.criteria import AnyOf, Equals

if TYPE_CHECKING:
    from ccasync.domain.customer import Customer
    from ccasync.domain.value_objects import AccountNumber, EmailAddress, TenantId


def _utility_accounts(customer: Customer) -> Any:
    return customer.utility_accounts


class CustomersForTenant(ForTenant["Customer"]):
    """All customers of one tenant, with their utility accounts."""

    def __init__(self, tenant_id: TenantId) -> None:
        super().__init__(tenant_id, includes=(_utility_accounts,))


class CustomersWithSyncStatus(Specification["Customer"]):
    def __init__(self, status: SyncStatus) -> None:
        super().__init__(Equals("sync_status", SyncStatus(status)))
        self.status = SyncStatus(status)


class CustomerByEmail(Specification["Customer"]):
    """Case-insensitive match on the customer's email address."""

    def __init__(self, email: EmailAddress) -> None:
        if email is None:
            raise TypeError("email is required")
        super().__init__(Equals("email", email))
        self.email = email


class CustomersWithAccountNumber(Specification["Customer"]):
    """Customers holding a utility account with *account_number*."""

    def __init__(self, account_number: AccountNumber) -> None:
        if account_number is None:
            raise TypeError("account_number is required")
        super().__init__(
            AnyOf("utility_accounts", Equals("account_number", account_number)),
            include_paths=("utility_accounts",),
        )
        self.account_number = account_number
