"""Tests for CustomerService."""

from __future__ import annotations

from uuid import uuid4

import pytest

from ccasync.domain.customer import Customer
from ccasync.domain.lifecycle import SyncStatus
from ccasync.domain.specifications import CustomersWithSyncStatus
from ccasync.domain.value_objects import TenantId
from ccasync.infrastructure.repositories import InMemoryRepository
from ccasync.plugins import DomainEventDispatcher
from ccasync.services.customers import CustomerService, parse_address, parse_utility_provider
from tests.conftest import TENANT_UUID, RecordingPlugin, unwrap


@pytest.fixture
def service(customer_repo: InMemoryRepository[Customer], dispatcher: DomainEventDispatcher) -> CustomerService:
    return CustomerService(customer_repo, dispatcher)


@pytest.fixture
def jane(service: CustomerService, tenant: TenantId) -> Customer:
    return unwrap(service.register_customer(tenant, "Jane", "Doe", "jane@example.com"))


def _code(result: object) -> str:
    error = getattr(result, "error")
    assert error is not None
    return error.code


class TestParsing:
    def test_parse_address(self) -> None:
        assert parse_address(None).value is None
        raw = {"street": "1 Market St", "city": "San Francisco", "state": "ca", "zip_code": "94105"}
        assert parse_address(raw).value.state == "CA"
        assert _code(parse_address({"street": "1 Market St"})) == "Address.CityEmpty"

    def test_parse_utility_provider(self) -> None:
        assert parse_utility_provider("SCE").ok
        result = parse_utility_provider("PEPCO")
        assert _code(result) == "UtilityAccount.InvalidProvider"
        assert result.error is not None
        assert "PGE" in result.error.detail["allowed"]


class TestRegisterCustomer:
    def test_saved_and_published(
        self,
        service: CustomerService,
        customer_repo: InMemoryRepository[Customer],
        recorder: RecordingPlugin,
    ) -> None:
        result = service.register_customer(
            str(TENANT_UUID),
            "Jane",
            "Doe",
            "jane@example.com",
            phone="(415) 555-0134",
            service_address={"street": "1 Market St", "city": "San Francisco", "state": "CA", "zip_code": "94105"},
        )
        customer = unwrap(result)
        assert customer_repo.get(customer.id) is customer
        assert customer.phone is not None
        assert recorder.event_types == ["customer.created"]
        assert customer.domain_events == ()

    @pytest.mark.parametrize(
        ("raw_tenant", "first", "email", "code"),
        [
            ("not-a-guid", "Jane", "jane@example.com", "TenantId.InvalidFormat"),
            (str(TENANT_UUID), "", "jane@example.com", "CustomerName.FirstNameEmpty"),
            (str(TENANT_UUID), "Jane", "jane", "EmailAddress.Invalid"),
        ],
    )
    def test_invalid_input_saves_nothing(
        self,
        service: CustomerService,
        customer_repo: InMemoryRepository[Customer],
        recorder: RecordingPlugin,
        raw_tenant: str,
        first: str,
        email: str,
        code: str,
    ) -> None:
        assert _code(service.register_customer(raw_tenant, first, "Doe", email)) == code
        assert len(customer_repo) == 0
        assert recorder.events == []

    def test_without_publisher_events_stay_buffered(
        self, customer_repo: InMemoryRepository[Customer], tenant: TenantId
    ) -> None:
        service = CustomerService(customer_repo)
        customer = unwrap(service.register_customer(tenant, "Jane", "Doe", "jane@example.com"))
        assert len(customer.domain_events) == 1


class TestUtilityAccounts:
    def test_add_and_remove(
        self, service: CustomerService, jane: Customer, tenant: TenantId, recorder: RecordingPlugin
    ) -> None:
        account = unwrap(service.add_utility_account(tenant, jane.id, "ACC-100", "PGE", meter_number="MTR123456"))
        assert jane.utility_accounts == (account,)
        assert unwrap(service.remove_utility_account(tenant, jane.id, account.id)) is None
        assert recorder.event_types == [
            "customer.created",
            "customer.utility_account_added",
            "customer.utility_account_removed",
        ]

    def test_duplicate(self, service: CustomerService, jane: Customer, tenant: TenantId) -> None:
        service.add_utility_account(tenant, jane.id, "ACC-100", "PGE")
        assert _code(service.add_utility_account(tenant, jane.id, "acc-100", "SCE")) == "UtilityAccount.Duplicate"

    def test_invalid_input(self, service: CustomerService, jane: Customer, tenant: TenantId) -> None:
        assert _code(service.add_utility_account(tenant, jane.id, "AB", "PGE")) == "AccountNumber.InvalidLength"
        assert _code(service.add_utility_account(tenant, jane.id, "ACC-100", "X")) == "UtilityAccount.InvalidProvider"

    def test_remove_unknown_account(self, service: CustomerService, jane: Customer, tenant: TenantId) -> None:
        assert _code(service.remove_utility_account(tenant, jane.id, uuid4())) == "UtilityAccount.NotFound"


class TestNotFound:
    def test_unknown_customer(self, service: CustomerService, tenant: TenantId) -> None:
        missing = uuid4()
        result = service.add_utility_account(tenant, missing, "ACC-100", "PGE")
        assert _code(result) == "Customer.NotFound"
        assert result.error is not None
        assert result.error.detail["id"] == str(missing)

    def test_other_tenant_cannot_see_customer(
        self, service: CustomerService, jane: Customer, other_tenant: TenantId
    ) -> None:
        assert _code(service.update_contact_info(other_tenant, jane.id, phone="4155550134")) == "Customer.NotFound"


class TestContactAndSync:
    def test_update_contact_info(
        self, service: CustomerService, jane: Customer, tenant: TenantId, recorder: RecordingPlugin
    ) -> None:
        customer = unwrap(service.update_contact_info(tenant, jane.id, phone="415-555-0134"))
        assert customer.phone is not None
        assert recorder.event_types[-1] == "customer.contact_info_updated"

    def test_update_contact_info_invalid(self, service: CustomerService, jane: Customer, tenant: TenantId) -> None:
        assert _code(service.update_contact_info(tenant, jane.id, email="nope")) == "EmailAddress.Invalid"

    def test_record_sync_outcome(
        self, service: CustomerService, jane: Customer, tenant: TenantId, recorder: RecordingPlugin
    ) -> None:
        assert unwrap(service.record_sync_outcome(tenant, jane.id, succeeded=True)).sync_status is SyncStatus.SYNCED
        service.record_sync_outcome(tenant, jane.id, succeeded=False, reason="portal timeout")
        assert jane.sync_status is SyncStatus.FAILED
        assert recorder.event_types[-2:] == ["customer.synced", "customer.sync_failed"]

    def test_failed_outcome_needs_reason(self, service: CustomerService, jane: Customer, tenant: TenantId) -> None:
        with pytest.raises(TypeError):
            service.record_sync_outcome(tenant, jane.id, succeeded=False)


class TestListCustomers:
    def test_lists_tenant_only(
        self, service: CustomerService, jane: Customer, tenant: TenantId, other_tenant: TenantId
    ) -> None:
        unwrap(service.register_customer(other_tenant, "Ann", "Lee", "ann@example.com"))
        assert unwrap(service.list_customers(tenant)) == [jane]

    def test_narrowed_by_spec(self, service: CustomerService, jane: Customer, tenant: TenantId) -> None:
        assert unwrap(service.list_customers(tenant, CustomersWithSyncStatus(SyncStatus.SYNCED))) == []
        service.record_sync_outcome(tenant, jane.id, succeeded=True)
        assert unwrap(service.list_customers(tenant, CustomersWithSyncStatus(SyncStatus.SYNCED))) == [jane]

    def test_bad_tenant(self, service: CustomerService) -> None:
        assert _code(service.list_customers("")) == "TenantId.Empty"
