"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ccasync.toml only contains
overrides. An empty file (or no file) yields a working configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SyncDefaultsConfig(BaseModel):
    """[sync] section: policy applied to newly registered LDC accounts.

    Defaults match ``SyncConfiguration.create_default()``. Values are
    validated by the domain when an account is registered, not here.
    """

    model_config = {"frozen": True}

    enabled: bool = True
    interval_minutes: int = 60
    max_retries: int = 3
    timeout_seconds: int = 300


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    entry_points: bool = True
    disabled: list[str] = Field(default_factory=list)

