"""Tests for CcaSyncSettings: env vars and TOML in one object."""

from pathlib import Path

import pytest

from ccasync.config.settings import CcaSyncSettings, ConfigError


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = CcaSyncSettings.load(start=tmp_path)
        assert settings.config_path is None
        assert settings.verbose is False
        assert settings.log_json is False
        assert settings.sync.interval_minutes == 60
        assert settings.plugins.entry_points is True

    def test_frozen(self, tmp_path: Path) -> None:
        settings = CcaSyncSettings.load(start=tmp_path)
        with pytest.raises(Exception):
            settings.verbose = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        toml = tmp_path / "ccasync.toml"
        toml.write_text("log_json = true\n[sync]\ninterval_minutes = 15\nmax_retries = 5\n")
        settings = CcaSyncSettings.load(start=tmp_path)
        assert settings.config_path == toml
        assert settings.log_json is True
        assert settings.sync.interval_minutes == 15
        assert settings.sync.max_retries == 5
        assert settings.sync.timeout_seconds == 300  # default preserved

    def test_discovered_from_child_dir(self, tmp_path: Path) -> None:
        (tmp_path / "ccasync.toml").write_text("[sync]\nenabled = false\n")
        child = tmp_path / "sub" / "deep"
        child.mkdir(parents=True)
        assert CcaSyncSettings.load(start=child).sync.enabled is False

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "my.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[plugins]\ndisabled = ["audit"]\n')
        settings = CcaSyncSettings.load(config_path=str(custom), start=tmp_path)
        assert settings.plugins.disabled == ["audit"]
        assert settings.config_path == custom

    def test_missing_explicit_path_uses_defaults(self, tmp_path: Path) -> None:
        settings = CcaSyncSettings.load(config_path=tmp_path / "nope.toml")
        assert settings.config_path is None
        assert settings.sync.interval_minutes == 60

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "ccasync.toml").write_text("verbose = \n")
        with pytest.raises(ConfigError):
            CcaSyncSettings.load(start=tmp_path)


class TestPriority:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "ccasync.toml").write_text("[sync]\ninterval_minutes = 30\nmax_retries = 5\n")
        monkeypatch.setenv("CCASYNC_SYNC__INTERVAL_MINUTES", "15")
        settings = CcaSyncSettings.load(start=tmp_path)
        assert settings.sync.interval_minutes == 15
        assert settings.sync.max_retries == 5

    def test_env_flags(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CCASYNC_VERBOSE", "true")
        assert CcaSyncSettings.load(start=tmp_path).verbose is True

    def test_overrides_win(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "ccasync.toml").write_text("verbose = true\n")
        monkeypatch.setenv("CCASYNC_LOG_JSON", "true")
        settings = CcaSyncSettings.load(start=tmp_path, verbose=False, log_json=False)
        assert settings.verbose is False
        assert settings.log_json is False
