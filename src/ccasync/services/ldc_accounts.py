"""LdcAccountService: registration and sync policy of LDC accounts.

New accounts take their sync policy from the ``[sync]`` section of the
settings, validated through :meth:`SyncConfiguration.create`, so a bad
config value surfaces as a ``SyncConfiguration.*`` failure at
registration time.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID

from ccasync.config.models import SyncDefaultsConfig
from ccasync.domain.ldc_account import LdcAccount, SyncConfiguration
from ccasync.domain.result import Result
from ccasync.domain.specifications import LdcAccountsReadyForSync
from ccasync.domain.types import LdcProvider
from ccasync.domain.value_objects import TenantId
from ccasync.services.base import BaseService, parse_tenant

if TYPE_CHECKING:
    from ccasync.config.settings import CcaSyncSettings
    from ccasync.domain.ports import EventPublisher, Repository

logger = logging.getLogger(__name__)


def parse_ldc_provider(raw: LdcProvider | str) -> Result[LdcProvider]:
    try:
        return Result.success(LdcProvider(raw))
    except ValueError:
        return Result.fail(
            "LdcAccount.InvalidProvider",
            f"Unknown LDC provider {raw!r}.",
            allowed=[p.value for p in LdcProvider],
        )


class LdcAccountService(BaseService[LdcAccount]):
    _entity = "LdcAccount"

    def __init__(
        self,
        repository: Repository[LdcAccount],
        publisher: EventPublisher | None = None,
        *,
        settings: CcaSyncSettings | None = None,
    ) -> None:
        super().__init__(repository, publisher)
        self._sync_defaults = settings.sync if settings is not None else SyncDefaultsConfig()

    def default_sync_configuration(self) -> Result[SyncConfiguration]:
        d = self._sync_defaults
        return SyncConfiguration.create(d.enabled, d.interval_minutes, d.max_retries, d.timeout_seconds)

    def register_account(
        self,
        tenant_id: TenantId | UUID | str,
        provider: LdcProvider | str,
        account_name: str,
        username: str,
        encrypted_password: str,
    ) -> Result[LdcAccount]:
        """Create an account with the configured default sync policy.

        *encrypted_password* must already be encrypted; it is stored as-is.
        """
        parts: list[Result] = [
            parse_tenant(tenant_id),
            parse_ldc_provider(provider),
            self.default_sync_configuration(),
        ]
        for part in parts:
            if not part.ok:
                return part
        tenant, provider_value, sync_configuration = (p.value for p in parts)

        created = LdcAccount.create(
            tenant,
            provider_value,
            account_name,
            username,
            encrypted_password,
            sync_configuration,
        )
        if not created.ok:
            return created

        account = created.value
        self._save(account, is_new=True)
        logger.debug("Registered LDC account %s (%s) for tenant %s", account.id, account.provider, tenant)
        return created

    def update_credentials(
        self,
        tenant_id: TenantId | UUID | str,
        account_id: UUID,
        username: str,
        encrypted_password: str,
    ) -> Result[LdcAccount]:
        loaded = self._load_for(tenant_id, account_id)
        if not loaded.ok:
            return loaded
        account = loaded.value

        updated = account.update_credentials(username, encrypted_password)
        if not updated.ok:
            return updated
        self._save(account)
        return Result.success(account)

    def enable_sync(self, tenant_id: TenantId | UUID | str, account_id: UUID) -> Result[LdcAccount]:
        return self._toggle(tenant_id, account_id, enable=True)

    def disable_sync(self, tenant_id: TenantId | UUID | str, account_id: UUID) -> Result[LdcAccount]:
        return self._toggle(tenant_id, account_id, enable=False)

    def accounts_ready_for_sync(
        self,
        tenant_id: TenantId | UUID | str | None = None,
    ) -> Result[list[LdcAccount]]:
        """Accounts the scheduler may sync now, across tenants unless one is given."""
        tenant: TenantId | None = None
        if tenant_id is not None:
            parsed = parse_tenant(tenant_id)
            if not parsed.ok:
                return parsed
            tenant = parsed.value
        return Result.success(self._repository.find(LdcAccountsReadyForSync(), tenant_id=tenant))

    def _toggle(self, tenant_id: TenantId | UUID | str, account_id: UUID, *, enable: bool) -> Result[LdcAccount]:
        loaded = self._load_for(tenant_id, account_id)
        if not loaded.ok:
            return loaded
        account = loaded.value

        toggled = account.enable_sync() if enable else account.disable_sync()
        if not toggled.ok:
            return toggled
        self._save(account)
        return Result.success(account)

    def _load_for(self, tenant_id: TenantId | UUID | str, account_id: UUID) -> Result[LdcAccount]:
        return parse_tenant(tenant_id).bind(lambda tenant: self._load(tenant, account_id))
