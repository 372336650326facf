"""Root conftest.py - shared fixtures."""

import pytest

from fakes import FakePage
from liveview_e2e.config import E2EConfig, SyncConfig


@pytest.fixture(scope="session")
def config() -> E2EConfig:
    return E2EConfig.from_env()


@pytest.fixture
def sync_config() -> SyncConfig:
    """Short timeouts so failing waits fail fast."""
    return SyncConfig(
        settle_timeout=1.0,
        connect_timeout=0.3,
        poll_interval=0.01,
        network_idle_window=0.1,
        event_timeout=0.5,
        event_fallback=0.1,
        validation_delay=0.05,
        banner_timeout=0.3,
        banner_text_timeout=0.2,
        collection_attach_timeout=0.3,
        collection_count_timeout=0.5,
    )


@pytest.fixture
def page() -> FakePage:
    return FakePage()
