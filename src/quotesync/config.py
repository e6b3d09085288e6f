"""Client configuration for quotesync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from quotesync._constants import BASE_URL, SERVER_CATEGORY
from quotesync.exceptions import QuoteSyncConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise QuoteSyncConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class QuoteSyncConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Remote collection endpoint. ``GET`` returns the collection,
        ``POST`` accepts one new quote.
    data_dir : str
        Directory holding the durable cache files.
    sync_interval : float
        Seconds between two scheduled reconciliation cycles.
    request_timeout : float
        Upper bound in seconds for a single fetch or push request.
    server_category : str
        Category assigned to remote quotes that carry none.
    notice_ttl : float
        Seconds a sync notice stays visible before it clears itself.
    sync_enabled : bool
        Start the periodic sync when the application is opened.
    """

    base_url: str = BASE_URL
    data_dir: str = ".quotesync"
    sync_interval: float = 15.0
    request_timeout: float = 10.0
    server_category: str = SERVER_CATEGORY
    notice_ttl: float = 3.0
    sync_enabled: bool = True

    def __post_init__(self) -> None:
        if self.sync_interval <= 0:
            raise QuoteSyncConfigError(f"sync_interval must be positive, got {self.sync_interval}")
        if self.request_timeout <= 0:
            raise QuoteSyncConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if not self.server_category.strip():
            raise QuoteSyncConfigError("server_category must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> QuoteSyncConfig:
        """Create configuration from environment variables.

        Reads optional ``QUOTESYNC_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        QuoteSyncConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "QUOTESYNC_BASE_URL": "base_url",
            "QUOTESYNC_DATA_DIR": "data_dir",
            "QUOTESYNC_SERVER_CATEGORY": "server_category",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        _ENV_FLOAT_MAP = {
            "QUOTESYNC_SYNC_INTERVAL": "sync_interval",
            "QUOTESYNC_REQUEST_TIMEOUT": "request_timeout",
            "QUOTESYNC_NOTICE_TTL": "notice_ttl",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        if "sync_enabled" not in overrides:
            config_kwargs["sync_enabled"] = _env_bool(env.get("QUOTESYNC_SYNC_ENABLED"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
