"""Shared pytest fixtures and test helpers for ccasync tests."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any
from uuid import UUID

import pytest

from ccasync.domain.customer import Customer
from ccasync.domain.events import DomainEvent
from ccasync.domain.ldc_account import LdcAccount
from ccasync.domain.result import Result
from ccasync.domain.types import LdcProvider
from ccasync.domain.value_objects import (
    AccountNumber,
    Address,
    CustomerName,
    EmailAddress,
    TenantId,
)
from ccasync.infrastructure.repositories import InMemoryRepository
from ccasync.plugins import DomainEventDispatcher, PluginManager, hookimpl

TENANT_UUID = UUID("6f1c2a4e-8b3d-4c5e-9f7a-1b2c3d4e5f60")
OTHER_TENANT_UUID = UUID("0a9b8c7d-6e5f-4a3b-8c2d-1e0f9a8b7c6d")


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's CCASYNC_* environment out of the tests."""
    monkeypatch.delenv("CCASYNC_CONFIG", raising=False)
    monkeypatch.delenv("CCASYNC_VERBOSE", raising=False)
    monkeypatch.delenv("CCASYNC_LOG_JSON", raising=False)


@pytest.fixture
def tenant() -> TenantId:
    return TenantId(value=TENANT_UUID)


@pytest.fixture
def other_tenant() -> TenantId:
    return TenantId(value=OTHER_TENANT_UUID)


@pytest.fixture
def address() -> Address:
    return Address.create("1 Market St", "San Francisco", "CA", "94105").value


@pytest.fixture
def customer(tenant: TenantId) -> Customer:
    """A freshly created customer with its CustomerCreated event buffered."""
    return make_customer(tenant)


@pytest.fixture
def ldc_account(tenant: TenantId) -> LdcAccount:
    return make_ldc_account(tenant)


@pytest.fixture
def customer_repo() -> InMemoryRepository[Customer]:
    return InMemoryRepository("customer")


@pytest.fixture
def ldc_account_repo() -> InMemoryRepository[LdcAccount]:
    return InMemoryRepository("ldc_account")


@pytest.fixture
def recorder() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def plugin_manager(recorder: RecordingPlugin) -> Generator[PluginManager]:
    pm = PluginManager()
    pm.register_plugin(recorder, name="recorder")
    yield pm
    pm.unregister(recorder)


@pytest.fixture
def dispatcher(plugin_manager: PluginManager) -> DomainEventDispatcher:
    return DomainEventDispatcher(plugin_manager)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class RecordingPlugin:
    """Plugin that records every hook call for verification."""

    def __init__(self) -> None:
        self.events: list[DomainEvent] = []
        self.batches: list[tuple[UUID, list[str]]] = []

    @hookimpl
    def handle_domain_event(self, event: DomainEvent) -> None:
        self.events.append(event)

    @hookimpl
    def domain_events_dispatched(self, aggregate_id: UUID, event_types: list[str]) -> None:
        self.batches.append((aggregate_id, event_types))

    @property
    def event_types(self) -> list[str]:
        return [e.event_type for e in self.events]


def unwrap(result: Result[Any]) -> Any:
    """Return the success value, failing the test with the error otherwise."""
    assert result.ok, f"expected success, got {result.error}"
    return result.value


def make_customer(
    tenant: TenantId,
    first: str = "Jane",
    last: str = "Doe",
    email: str = "jane@example.com",
) -> Customer:
    return unwrap(
        Customer.create(
            tenant,
            unwrap(CustomerName.create(first, last)),
            unwrap(EmailAddress.create(email)),
        )
    )


def make_ldc_account(
    tenant: TenantId,
    provider: LdcProvider = LdcProvider.PGE,
    name: str = "PG&E portal",
) -> LdcAccount:
    return unwrap(LdcAccount.create(tenant, provider, name, "portal-user", "ENC(abc123)"))


def account_number(raw: str) -> AccountNumber:
    return unwrap(AccountNumber.create(raw))
