"""Tests for configuration loading."""

import pytest

from liveview_e2e import constants
from liveview_e2e.config import E2EConfig, SyncConfig


class TestSyncConfig:
    def test_defaults_match_dom_contract(self):
        config = SyncConfig()
        assert config.loading_attr == "phx-loading"
        assert config.loading_class == "phx-loading"
        assert config.event_prefix == "phx"
        assert config.socket_global == "liveSocket"
        assert config.settle_timeout == 5.0

    def test_poll_interval_is_capped(self):
        assert SyncConfig(poll_interval=1.0).poll_interval == constants.MAX_POLL_INTERVAL

    def test_rejects_unbounded_timeouts(self):
        with pytest.raises(ValueError):
            SyncConfig(settle_timeout=0.0)

    def test_fallback_must_be_shorter_than_event_timeout(self):
        with pytest.raises(ValueError):
            SyncConfig(event_timeout=0.1, event_fallback=0.2)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LIVEVIEW_SETTLE_TIMEOUT", "2.5")
        monkeypatch.setenv("LIVEVIEW_NETWORK_IDLE", "0.25")
        monkeypatch.delenv("LIVEVIEW_POLL_INTERVAL", raising=False)
        config = SyncConfig.from_env()
        assert config.settle_timeout == 2.5
        assert config.network_idle_window == 0.25
        assert config.poll_interval == constants.DEFAULT_POLL_INTERVAL


class TestE2EConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("LIVEVIEW_BASE_URL", "http://app:4000")
        monkeypatch.setenv("LIVEVIEW_HEADLESS", "false")
        config = E2EConfig.from_env()
        assert config.base_url == "http://app:4000"
        assert config.headless is False
        assert isinstance(config.sync, SyncConfig)
