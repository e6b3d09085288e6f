from __future__ import annotations

import pytest

from quotesync.config import QuoteSyncConfig
from quotesync.exceptions import QuoteSyncConfigError


def test_defaults() -> None:
    config = QuoteSyncConfig()

    assert config.sync_interval == 15.0
    assert config.server_category == "Server"
    assert config.sync_enabled


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUOTESYNC_BASE_URL", "https://example.test/quotes")
    monkeypatch.setenv("QUOTESYNC_SYNC_INTERVAL", "10")
    monkeypatch.setenv("QUOTESYNC_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("QUOTESYNC_SYNC_ENABLED", "off")
    monkeypatch.setenv("QUOTESYNC_SERVER_CATEGORY", "Remote")

    config = QuoteSyncConfig.from_env()

    assert config.base_url == "https://example.test/quotes"
    assert config.sync_interval == 10.0
    assert config.request_timeout == 2.5
    assert config.server_category == "Remote"
    assert not config.sync_enabled


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUOTESYNC_SYNC_INTERVAL", "10")
    monkeypatch.setenv("QUOTESYNC_DATA_DIR", "/env/dir")

    config = QuoteSyncConfig.from_env(sync_interval=12.0, data_dir="/explicit", sync_enabled=False)

    assert config.sync_interval == 12.0
    assert config.data_dir == "/explicit"
    assert not config.sync_enabled


def test_invalid_env_number_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUOTESYNC_SYNC_INTERVAL", "soon")

    with pytest.raises(QuoteSyncConfigError):
        QuoteSyncConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [{"sync_interval": 0}, {"request_timeout": -1}, {"server_category": " "}],
)
def test_invalid_values_rejected(kwargs: dict[str, object]) -> None:
    with pytest.raises(QuoteSyncConfigError):
        QuoteSyncConfig(**kwargs)  # type: ignore[arg-type]
