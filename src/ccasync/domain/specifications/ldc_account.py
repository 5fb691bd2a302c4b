"""Ready-made specifications over :class:`~ccasync.domain.ldc_account.LdcAccount`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccasync.domain.specifications.base import ForTenant, Specification
from ccasync.domain.specifications.criteria import And, Equals, Predicate
from ccasync.domain.types import LdcProvider

if TYPE_CHECKING:
    from ccasync.domain.ldc_account import LdcAccount
    from ccasync.domain.value_objects import TenantId


def _is_ready_for_sync(account: LdcAccount) -> bool:
    return account.is_ready_for_sync()


class LdcAccountsForTenant(ForTenant["LdcAccount"]):
    def __init__(self, tenant_id: TenantId) -> None:
        super().__init__(tenant_id)


class LdcAccountsForProvider(Specification["LdcAccount"]):
    def __init__(self, provider: LdcProvider) -> None:
        super().__init__(Equals("provider", LdcProvider(provider)))
        self.provider = LdcProvider(provider)


class LdcAccountsWithSyncEnabled(Specification["LdcAccount"]):
    def __init__(self) -> None:
        super().__init__(Equals("sync_configuration.is_enabled", True))


class LdcAccountsReadyForSync(Specification["LdcAccount"]):
    """Enabled accounts that also have credentials on file.

    The enabled flag is a translatable criterion; the credential check
    runs in memory.
    """

    def __init__(self) -> None:
        super().__init__(
            And(
                Equals("sync_configuration.is_enabled", True),
                Predicate(_is_ready_for_sync, "ready_for_sync"),
            )
        )
