"""Tests for PluginManager: discovery, registration, and hook relay."""

from __future__ import annotations

import pytest

from ccasync.domain.events import DomainEvent
from ccasync.plugins import hookimpl
from ccasync.plugins.manager import PluginManager


class _DummyPlugin:
    """Minimal plugin for registration tests."""

    @hookimpl
    def handle_domain_event(self, event: DomainEvent) -> None:
        pass


class _ClassLevelPlugin:
    def __init__(self) -> None:
        self.instance_seen: list[str] = []

    @hookimpl
    def handle_domain_event(self, event: DomainEvent) -> None:
        self.instance_seen.append(event.event_type)


class _NoHooks:
    pass


class TestPluginManager:
    @pytest.mark.parametrize("hook_name", ["handle_domain_event", "domain_events_dispatched"])
    def test_hookspecs_registered(self, hook_name: str) -> None:
        assert hasattr(PluginManager().hook, hook_name)

    def test_register_plugin(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.list_plugin_names()

    def test_register_plugin_default_name(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin())
        assert "_DummyPlugin" in pm.list_plugin_names()

    def test_unregister_plugin(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="dummy")
        pm.unregister(plugin)
        assert "dummy" not in pm.list_plugin_names()

    def test_get_plugins_returns_registered(self) -> None:
        pm = PluginManager()
        plugin = _DummyPlugin()
        pm.register_plugin(plugin, name="test")
        assert plugin in pm.get_plugins()

    def test_is_loaded_false_before_discover(self) -> None:
        assert PluginManager().is_loaded is False

    def test_discover_marks_loaded(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_DummyPlugin(), name="dummy")
        names = pm.discover_and_load()
        assert pm.is_loaded is True
        assert "dummy" in names

    def test_disabled_plugins_are_blocked(self) -> None:
        pm = PluginManager()
        pm.discover_and_load(disabled=["audit"])
        pm.register_plugin(_DummyPlugin(), name="audit")
        assert "audit" not in pm.list_plugin_names()


class TestNormalizePluginInstances:
    def test_registered_class_is_instantiated(self) -> None:
        pm = PluginManager()
        pm.register_plugin(_ClassLevelPlugin, name="class-plugin")
        pm.discover_and_load()

        (plugin,) = pm.get_plugins()
        assert isinstance(plugin, _ClassLevelPlugin)
        assert pm.list_plugin_names() == ["class-plugin"]

    def test_has_hook_impls(self) -> None:
        assert PluginManager._has_hook_impls(_ClassLevelPlugin) is True
        assert PluginManager._has_hook_impls(_NoHooks) is False
