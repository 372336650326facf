"""E2E test configuration from environment variables."""

import os
from dataclasses import dataclass, field, fields

from . import constants


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class SyncConfig:
    """Timeouts and DOM conventions used by the synchronization helpers."""

    settle_timeout: float = constants.SETTLE_TIMEOUT
    connect_timeout: float = constants.CONNECT_TIMEOUT
    poll_interval: float = constants.DEFAULT_POLL_INTERVAL
    network_idle_window: float = constants.NETWORK_IDLE_WINDOW
    event_timeout: float = constants.EVENT_TIMEOUT
    event_fallback: float = constants.EVENT_FALLBACK
    validation_delay: float = constants.VALIDATION_DELAY
    banner_timeout: float = constants.BANNER_TIMEOUT
    banner_text_timeout: float = constants.BANNER_TEXT_TIMEOUT
    collection_attach_timeout: float = constants.COLLECTION_ATTACH_TIMEOUT
    collection_count_timeout: float = constants.COLLECTION_COUNT_TIMEOUT
    loading_attr: str = constants.LOADING_ATTR
    loading_class: str = constants.LOADING_CLASS
    event_prefix: str = constants.EVENT_PREFIX
    socket_global: str = constants.SOCKET_GLOBAL

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if f.type is float and value <= 0:
                raise ValueError(f"{f.name} must be positive, got {value}")
        self.poll_interval = min(self.poll_interval, constants.MAX_POLL_INTERVAL)
        if self.event_fallback >= self.event_timeout:
            raise ValueError("event_fallback must be shorter than event_timeout")

    @classmethod
    def from_env(cls) -> "SyncConfig":
        return cls(
            settle_timeout=_env_float(
                "LIVEVIEW_SETTLE_TIMEOUT", constants.SETTLE_TIMEOUT
            ),
            connect_timeout=_env_float(
                "LIVEVIEW_CONNECT_TIMEOUT", constants.CONNECT_TIMEOUT
            ),
            poll_interval=_env_float(
                "LIVEVIEW_POLL_INTERVAL", constants.DEFAULT_POLL_INTERVAL
            ),
            network_idle_window=_env_float(
                "LIVEVIEW_NETWORK_IDLE", constants.NETWORK_IDLE_WINDOW
            ),
            event_fallback=_env_float(
                "LIVEVIEW_EVENT_FALLBACK", constants.EVENT_FALLBACK
            ),
        )


@dataclass
class E2EConfig:
    base_url: str
    headless: bool = True
    slow_mo: float = 0.0
    sync: SyncConfig = field(default_factory=SyncConfig)

    @classmethod
    def from_env(cls) -> "E2EConfig":
        return cls(
            base_url=os.environ.get("LIVEVIEW_BASE_URL", "http://localhost:4000"),
            headless=_env_bool("LIVEVIEW_HEADLESS", True),
            slow_mo=_env_float("LIVEVIEW_SLOW_MO", 0.0),
            sync=SyncConfig.from_env(),
        )
