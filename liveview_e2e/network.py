"""Network-idle conditions used as the second settlement signal."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .constants import DEFAULT_POLL_INTERVAL, NETWORK_IDLE_WINDOW
from .errors import Timeout
from .wait import Deadline

logger = logging.getLogger(__name__)


class NetworkIdle(Protocol):
    async def wait_idle(self, deadline: Deadline) -> None: ...


class DriverNetworkIdle:
    """Playwright's own ``networkidle`` load state.

    Playwright considers the page idle after 500ms without connections and
    latches that state per navigation, so this is weaker than
    NetworkActivity for updates that happen after load.
    """

    def __init__(self, page: Any):
        self._page = page

    async def wait_idle(self, deadline: Deadline) -> None:
        remaining_ms = deadline.remaining_ms()
        if remaining_ms <= 0:
            raise Timeout("network idle", deadline.timeout)
        try:
            await self._page.wait_for_load_state("networkidle", timeout=remaining_ms)
        except PlaywrightTimeoutError as e:
            raise Timeout("network idle", deadline.timeout, last_error=e) from e


class NetworkActivity:
    """Counts in-flight requests from the page's request events.

    The tracker has to be attached before the action whose traffic it
    should see; requests started earlier are invisible to it.
    """

    def __init__(
        self,
        page: Any,
        idle_window: float = NETWORK_IDLE_WINDOW,
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        if idle_window <= 0:
            raise ValueError(f"idle_window must be positive, got {idle_window}")
        self._page = page
        self.idle_window = idle_window
        self._interval = interval
        self._in_flight: set[Any] = set()
        self._last_change: float | None = None
        self._attached = False

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def _touch(self) -> None:
        self._last_change = asyncio.get_running_loop().time()

    def _on_request(self, request: Any) -> None:
        self._in_flight.add(request)
        self._touch()

    def _on_done(self, request: Any) -> None:
        self._in_flight.discard(request)
        self._touch()

    def attach(self) -> "NetworkActivity":
        if not self._attached:
            self._page.on("request", self._on_request)
            self._page.on("requestfinished", self._on_done)
            self._page.on("requestfailed", self._on_done)
            self._attached = True
        return self

    def detach(self) -> None:
        if self._attached:
            self._page.remove_listener("request", self._on_request)
            self._page.remove_listener("requestfinished", self._on_done)
            self._page.remove_listener("requestfailed", self._on_done)
            self._attached = False
        self._in_flight.clear()

    def __enter__(self) -> "NetworkActivity":
        return self.attach()

    def __exit__(self, *args) -> None:
        self.detach()

    def _quiet_for(self) -> float:
        if self._in_flight:
            return 0.0
        if self._last_change is None:
            return float("inf")
        return asyncio.get_running_loop().time() - self._last_change

    async def wait_idle(self, deadline: Deadline) -> None:
        """Resolve once no request has been in flight for ``idle_window``."""
        while True:
            quiet = self._quiet_for()
            if quiet >= self.idle_window:
                logger.debug("Network idle after %.3fs", deadline.elapsed())
                return
            remaining = deadline.remaining()
            if remaining <= 0:
                raise Timeout(
                    f"network idle for {self.idle_window:.3f}s",
                    deadline.timeout,
                    last_observed=f"{self.in_flight} request(s) in flight",
                )
            await asyncio.sleep(min(self._interval, remaining))
