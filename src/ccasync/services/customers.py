"""CustomerService: enrolment and contact upkeep for customers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from uuid import UUID

from ccasync.domain.customer import Customer, UtilityAccount
from ccasync.domain.result import Result
from ccasync.domain.specifications import CustomersForTenant, Specification
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
from ccasync.services.base import BaseService, parse_optional, parse_tenant

logger = logging.getLogger(__name__)

AddressInput = Mapping[str, str]


def parse_address(raw: AddressInput | None) -> Result[Address | None]:
    """Build an Address from a ``street/city/state/zip_code`` mapping."""
    if raw is None:
        return Result.success(None)
    return Address.create(
        raw.get("street", ""),
        raw.get("city", ""),
        raw.get("state", ""),
        raw.get("zip_code", ""),
    )


def parse_utility_provider(raw: UtilityProvider | str) -> Result[UtilityProvider]:
    try:
        return Result.success(UtilityProvider(raw))
    except ValueError:
        return Result.fail(
            "UtilityAccount.InvalidProvider",
            f"Unknown utility provider {raw!r}.",
            allowed=[p.value for p in UtilityProvider],
        )


class CustomerService(BaseService[Customer]):
    """Customer use cases. Every method is scoped to one tenant."""

    _entity = "Customer"

    def register_customer(
        self,
        tenant_id: TenantId | UUID | str,
        first_name: str,
        last_name: str,
        email: str,
        *,
        middle_name: str | None = None,
        phone: str | None = None,
        service_address: AddressInput | None = None,
    ) -> Result[Customer]:
        """Validate raw input, create the customer, save and publish."""
        parts: list[Result] = [
            parse_tenant(tenant_id),
            CustomerName.create(first_name, last_name, middle_name),
            EmailAddress.create(email),
            parse_optional(PhoneNumber, phone),
            parse_address(service_address),
        ]
        for part in parts:
            if not part.ok:
                return part
        tenant, name, email_vo, phone_vo, address = (p.value for p in parts)

        created = Customer.create(tenant, name, email_vo, phone_vo, address)
        if not created.ok:
            return created

        customer = created.value
        self._save(customer, is_new=True)
        logger.debug("Registered customer %s for tenant %s", customer.id, tenant)
        return created

    def add_utility_account(
        self,
        tenant_id: TenantId | UUID | str,
        customer_id: UUID,
        account_number: str,
        provider: UtilityProvider | str,
        *,
        meter_number: str | None = None,
        service_address: AddressInput | None = None,
    ) -> Result[UtilityAccount]:
        parts: list[Result] = [
            AccountNumber.create(account_number),
            parse_utility_provider(provider),
            parse_optional(MeterNumber, meter_number),
            parse_address(service_address),
        ]
        for part in parts:
            if not part.ok:
                return part
        number, provider_value, meter, address = (p.value for p in parts)

        loaded = self._load_for(tenant_id, customer_id)
        if not loaded.ok:
            return loaded
        customer = loaded.value

        added = customer.add_utility_account(number, provider_value, meter, address)
        if added.ok:
            self._save(customer)
        return added

    def remove_utility_account(
        self,
        tenant_id: TenantId | UUID | str,
        customer_id: UUID,
        account_id: UUID,
    ) -> Result[None]:
        loaded = self._load_for(tenant_id, customer_id)
        if not loaded.ok:
            return loaded
        customer = loaded.value

        removed = customer.remove_utility_account(account_id)
        if removed.ok:
            self._save(customer)
        return removed

    def update_contact_info(
        self,
        tenant_id: TenantId | UUID | str,
        customer_id: UUID,
        *,
        email: str | None = None,
        phone: str | None = None,
        service_address: AddressInput | None = None,
    ) -> Result[Customer]:
        """Apply whichever of the contact fields were passed."""
        parts: list[Result] = [
            parse_optional(EmailAddress, email),
            parse_optional(PhoneNumber, phone),
            parse_address(service_address),
        ]
        for part in parts:
            if not part.ok:
                return part
        email_vo, phone_vo, address = (p.value for p in parts)

        loaded = self._load_for(tenant_id, customer_id)
        if not loaded.ok:
            return loaded
        customer = loaded.value

        updated = customer.update_contact_info(email_vo, phone_vo, address)
        if not updated.ok:
            return updated
        self._save(customer)
        return Result.success(customer)

    def record_sync_outcome(
        self,
        tenant_id: TenantId | UUID | str,
        customer_id: UUID,
        *,
        succeeded: bool,
        reason: str | None = None,
    ) -> Result[Customer]:
        """Mark the customer synced, or failed with *reason*.

        Raises:
            TypeError: If the sync failed and no *reason* was given.
        """
        loaded = self._load_for(tenant_id, customer_id)
        if not loaded.ok:
            return loaded
        customer = loaded.value

        if succeeded:
            customer.mark_as_synced()
        else:
            customer.mark_sync_as_failed(reason)  # type: ignore[arg-type]
        self._save(customer)
        return Result.success(customer)

    def list_customers(
        self,
        tenant_id: TenantId | UUID | str,
        spec: Specification[Customer] | None = None,
    ) -> Result[list[Customer]]:
        """Customers of one tenant, optionally narrowed by *spec*."""
        tenant = parse_tenant(tenant_id)
        if not tenant.ok:
            return tenant
        query = spec if spec is not None else CustomersForTenant(tenant.value)
        return Result.success(self._repository.find(query, tenant_id=tenant.value))

    def _load_for(self, tenant_id: TenantId | UUID | str, customer_id: UUID) -> Result[Customer]:
        return parse_tenant(tenant_id).bind(lambda tenant: self._load(tenant, customer_id))
