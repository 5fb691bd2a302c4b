"""Extension layer: domain event handlers as pluggy plugins.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from ccasync.plugins.dispatcher import DomainEventDispatcher
from ccasync.plugins.hookspecs import hookimpl
from ccasync.plugins.manager import PluginManager

__all__ = ["DomainEventDispatcher", "PluginManager", "hookimpl"]
