"""Tests for LdcAccountService."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

import pytest

from ccasync.config.settings import CcaSyncSettings
from ccasync.domain.ldc_account import LdcAccount, SyncConfiguration
from ccasync.domain.types import LdcProvider
from ccasync.domain.value_objects import TenantId
from ccasync.infrastructure.repositories import InMemoryRepository
from ccasync.plugins import DomainEventDispatcher
from ccasync.services.ldc_accounts import LdcAccountService, parse_ldc_provider
from tests.conftest import RecordingPlugin, unwrap


@pytest.fixture
def service(
    ldc_account_repo: InMemoryRepository[LdcAccount], dispatcher: DomainEventDispatcher
) -> LdcAccountService:
    return LdcAccountService(ldc_account_repo, dispatcher)


@pytest.fixture
def account(service: LdcAccountService, tenant: TenantId) -> LdcAccount:
    return unwrap(service.register_account(tenant, "PGE", "PG&E portal", "portal-user", "ENC(abc123)"))


def _code(result: object) -> str:
    error = getattr(result, "error")
    assert error is not None
    return error.code


class TestRegisterAccount:
    def test_defaults_without_settings(
        self, account: LdcAccount, ldc_account_repo: InMemoryRepository[LdcAccount], recorder: RecordingPlugin
    ) -> None:
        assert account.provider is LdcProvider.PGE
        assert account.sync_configuration == SyncConfiguration.create_default()
        assert ldc_account_repo.get(account.id) is account
        assert recorder.event_types == ["ldc_account.created"]

    def test_policy_from_settings(
        self, ldc_account_repo: InMemoryRepository[LdcAccount], tenant: TenantId, tmp_path: Path
    ) -> None:
        (tmp_path / "ccasync.toml").write_text("[sync]\nenabled = false\ninterval_minutes = 15\n")
        settings = CcaSyncSettings.load(start=tmp_path)
        service = LdcAccountService(ldc_account_repo, settings=settings)

        account = unwrap(service.register_account(tenant, "SCE", "SCE portal", "u", "ENC(x)"))
        config = account.sync_configuration
        assert config.is_enabled is False
        assert config.sync_interval_minutes == 15
        assert config.max_retries == 3

    def test_bad_settings_surface_at_registration(
        self, ldc_account_repo: InMemoryRepository[LdcAccount], tenant: TenantId, tmp_path: Path
    ) -> None:
        settings = CcaSyncSettings.load(start=tmp_path, sync={"interval_minutes": 1})
        service = LdcAccountService(ldc_account_repo, settings=settings)
        result = service.register_account(tenant, "PGE", "n", "u", "p")
        assert _code(result) == "SyncConfiguration.IntervalTooShort"
        assert len(ldc_account_repo) == 0

    @pytest.mark.parametrize(
        ("provider", "name", "code"),
        [
            ("PEPCO", "n", "LdcAccount.InvalidProvider"),
            ("PGE", "", "LdcAccount.InvalidAccountName"),
        ],
    )
    def test_invalid_input(
        self,
        service: LdcAccountService,
        ldc_account_repo: InMemoryRepository[LdcAccount],
        tenant: TenantId,
        provider: str,
        name: str,
        code: str,
    ) -> None:
        assert _code(service.register_account(tenant, provider, name, "u", "p")) == code
        assert len(ldc_account_repo) == 0

    def test_parse_ldc_provider(self) -> None:
        assert parse_ldc_provider(LdcProvider.SDG_E).value is LdcProvider.SDG_E
        assert _code(parse_ldc_provider("??")) == "LdcAccount.InvalidProvider"


class TestUpdates:
    def test_update_credentials(
        self, service: LdcAccountService, account: LdcAccount, tenant: TenantId, recorder: RecordingPlugin
    ) -> None:
        updated = unwrap(service.update_credentials(tenant, account.id, "new-user", "ENC(new)"))
        assert updated.username == "new-user"
        assert recorder.event_types[-1] == "ldc_account.credentials_updated"

    def test_update_credentials_invalid(self, service: LdcAccountService, account: LdcAccount, tenant: TenantId) -> None:
        assert _code(service.update_credentials(tenant, account.id, "u", "")) == "LdcAccount.InvalidPassword"

    def test_toggle_sync(
        self, service: LdcAccountService, account: LdcAccount, tenant: TenantId, recorder: RecordingPlugin
    ) -> None:
        assert _code(service.enable_sync(tenant, account.id)) == "LdcAccount.SyncAlreadyEnabled"
        assert unwrap(service.disable_sync(tenant, account.id)).sync_configuration.is_enabled is False
        assert unwrap(service.enable_sync(tenant, account.id)).sync_configuration.is_enabled is True
        assert recorder.event_types == [
            "ldc_account.created",
            "ldc_account.sync_disabled",
            "ldc_account.sync_enabled",
        ]

    def test_not_found(self, service: LdcAccountService, account: LdcAccount, other_tenant: TenantId) -> None:
        assert _code(service.disable_sync(other_tenant, account.id)) == "LdcAccount.NotFound"
        assert _code(service.update_credentials(other_tenant, uuid4(), "u", "p")) == "LdcAccount.NotFound"


class TestReadyForSync:
    def test_ready_accounts(
        self, service: LdcAccountService, account: LdcAccount, tenant: TenantId, other_tenant: TenantId
    ) -> None:
        other = unwrap(service.register_account(other_tenant, "SCE", "SCE portal", "u", "ENC(x)"))
        assert unwrap(service.accounts_ready_for_sync()) == [account, other]
        assert unwrap(service.accounts_ready_for_sync(tenant)) == [account]

        service.disable_sync(tenant, account.id)
        assert unwrap(service.accounts_ready_for_sync(tenant)) == []

    def test_bad_tenant(self, service: LdcAccountService) -> None:
        assert _code(service.accounts_ready_for_sync("nope")) == "TenantId.InvalidFormat"
