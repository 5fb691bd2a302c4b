"""Specification engine: composable predicates with eager-load hints."""

from ccasync.domain.specifications.base import (
    AndSpecification,
    ForTenant,
    NotSpecification,
    Specification,
)
from ccasync.domain.specifications.criteria import (
    And,
    AnyOf,
    Compare,
    Criterion,
    Equals,
    Not,
    Or,
    Predicate,
    resolve_path,
)
from ccasync.domain.specifications.customer import (
    CustomerByEmail,
    CustomersForTenant,
    CustomersWithAccountNumber,
    CustomersWithSyncStatus,
)
from ccasync.domain.specifications.ldc_account import (
    LdcAccountsForProvider,
    LdcAccountsForTenant,
    LdcAccountsReadyForSync,
    LdcAccountsWithSyncEnabled,
)
from ccasync.domain.specifications.sync_job import (
    ActiveSyncJobs,
    SyncJobsForTenant,
    SyncJobsWithStatus,
)

__all__ = [
    "ActiveSyncJobs",
    "And",
    "AndSpecification",
    "AnyOf",
    "Compare",
    "Criterion",
    "CustomerByEmail",
    "CustomersForTenant",
    "CustomersWithAccountNumber",
    "CustomersWithSyncStatus",
    "Equals",
    "ForTenant",
    "LdcAccountsForProvider",
    "LdcAccountsForTenant",
    "LdcAccountsReadyForSync",
    "LdcAccountsWithSyncEnabled",
    "Not",
    "NotSpecification",
    "Or",
    "Predicate",
    "Specification",
    "SyncJobsForTenant",
    "SyncJobsWithStatus",
    "resolve_path",
]
