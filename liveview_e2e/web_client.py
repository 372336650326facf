"""Playwright browser wrapper for LiveView E2E tests."""

from __future__ import annotations

import logging

from playwright.async_api import Browser, BrowserContext, Page

from .actions import click_and_settle, fill_and_validate, submit_and_settle
from .config import SyncConfig
from .connection import ConnectionAccessor
from .events import EventSubscriber
from .network import NetworkActivity
from .settle import SettlementDetector

logger = logging.getLogger(__name__)


class LiveViewClient:
    """Wraps a Playwright BrowserContext as a single test's browser tab.

    Each LiveViewClient has its own isolated browser context (cookies,
    storage) and page; pages are never shared between tests. A request
    tracker is attached to the page as soon as it opens so that settlement
    sees every request the test triggers.
    """

    def __init__(
        self,
        browser: Browser,
        base_url: str,
        name: str = "default",
        config: SyncConfig | None = None,
    ):
        self._browser = browser
        self._base_url = base_url.rstrip("/")
        self.name = name
        self.config = config or SyncConfig()
        self.context: BrowserContext | None = None
        self.page: Page | None = None
        self.network: NetworkActivity | None = None
        self.detector: SettlementDetector | None = None
        self.connection: ConnectionAccessor | None = None
        self.events: EventSubscriber | None = None

    async def start(self) -> "LiveViewClient":
        self.context = await self._browser.new_context(
            base_url=self._base_url,
            ignore_https_errors=True,
        )
        self.page = await self.context.new_page()
        self.network = NetworkActivity(
            self.page,
            idle_window=self.config.network_idle_window,
            interval=self.config.poll_interval,
        ).attach()
        self.detector = SettlementDetector(self.page, self.network, self.config)
        self.connection = ConnectionAccessor(self.page, self.config.socket_global)
        self.events = EventSubscriber(
            self.page, self.config.event_prefix, self.config.event_fallback
        )
        logger.debug("Client %s started against %s", self.name, self._base_url)
        return self

    async def goto(self, path: str, connect: bool = True) -> None:
        """Navigate, wait for the socket to join, then for the first render."""
        await self.page.goto(path)
        if connect:
            await self.connection.wait_until_connected(self.config.connect_timeout)
        await self.settle()

    async def settle(self, timeout: float | None = None) -> None:
        await self.detector.wait_for_settlement(timeout)

    async def click(self, selector: str, timeout: float | None = None) -> None:
        await click_and_settle(self.page, selector, timeout, self.detector)

    async def fill(self, selector: str, value: str, delay: float | None = None) -> None:
        await fill_and_validate(self.page, selector, value, delay, self.config)

    async def submit(self, form_selector: str, timeout: float | None = None) -> None:
        await submit_and_settle(self.page, form_selector, timeout, self.detector)

    async def wait_for_event(self, name: str, timeout: float | None = None) -> bool:
        return await self.events.wait_for_event(
            name, self.config.event_timeout if timeout is None else timeout
        )

    async def is_connected(self) -> bool:
        return await self.connection.is_connected()

    async def close(self) -> None:
        if self.network:
            self.network.detach()
            self.network = None
        if self.context:
            await self.context.close()
            self.context = None
            self.page = None

    async def __aenter__(self) -> "LiveViewClient":
        return await self.start()

    async def __aexit__(self, *args) -> None:
        await self.close()
