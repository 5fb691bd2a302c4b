"""SyncContext: composition root wiring settings, storage and plugins.

A host process builds one context from :class:`CcaSyncSettings` and
reaches the services through it. Logging is configured on construction;
the plugin manager and services are created lazily on first access.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ccasync.config.logging import configure_logging
from ccasync.infrastructure.repositories import InMemoryRepository

if TYPE_CHECKING:
    from ccasync.config.settings import CcaSyncSettings
    from ccasync.domain.customer import Customer
    from ccasync.domain.ldc_account import LdcAccount
    from ccasync.domain.sync_job import SyncJob
    from ccasync.plugins.dispatcher import DomainEventDispatcher
    from ccasync.plugins.manager import PluginManager
    from ccasync.services.customers import CustomerService
    from ccasync.services.ldc_accounts import LdcAccountService


class SyncContext:
    """Shared state for one ccasync host process."""

    def __init__(self, settings: CcaSyncSettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        self.customers: InMemoryRepository[Customer] = InMemoryRepository("customer")
        self.ldc_accounts: InMemoryRepository[LdcAccount] = InMemoryRepository("ldc_account")
        self.sync_jobs: InMemoryRepository[SyncJob] = InMemoryRepository("sync_job")

        self._plugin_manager: PluginManager | None = None
        self._dispatcher: DomainEventDispatcher | None = None

    @property
    def plugin_manager(self) -> PluginManager:
        """Plugin manager, with entry-point plugins loaded unless disabled in ``[plugins]``."""
        if self._plugin_manager is None:
            from ccasync.plugins.manager import PluginManager

            pm = PluginManager()
            if self.settings.plugins.entry_points:
                pm.discover_and_load(disabled=self.settings.plugins.disabled)
            self._plugin_manager = pm
        return self._plugin_manager

    @property
    def dispatcher(self) -> DomainEventDispatcher:
        if self._dispatcher is None:
            from ccasync.plugins.dispatcher import DomainEventDispatcher

            self._dispatcher = DomainEventDispatcher(self.plugin_manager)
        return self._dispatcher

    def customer_service(self) -> CustomerService:
        from ccasync.services.customers import CustomerService

        return CustomerService(self.customers, self.dispatcher)

    def ldc_account_service(self) -> LdcAccountService:
        from ccasync.services.ldc_accounts import LdcAccountService

        return LdcAccountService(self.ldc_accounts, self.dispatcher, settings=self.settings)
