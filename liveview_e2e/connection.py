"""Read-only access to the page-global LiveView socket handle."""

from __future__ import annotations

import logging

from playwright.async_api import Error as PlaywrightError

from .constants import CONNECT_TIMEOUT, DEFAULT_POLL_INTERVAL, SOCKET_GLOBAL
from .errors import MissingCapability, Timeout
from .wait import PagePredicate, PredicateProbe, wait_for_predicate

logger = logging.getLogger(__name__)

# Views are checked first: the main view, then any roots or views maps.
# A socket with no view references falls back to its own isConnected().
VIEWS_CONNECTED = PagePredicate(
    description="LiveView socket connected",
    script="""(name) => {
        try {
            const socket = window[name];
            if (!socket) return false;
            const views = [];
            if (socket.main) views.push(socket.main);
            if (socket.roots && typeof socket.roots === 'object') {
                views.push(...Object.values(socket.roots));
            }
            if (socket.views && typeof socket.views === 'object') {
                views.push(...Object.values(socket.views));
            }
            if (views.length > 0) {
                return views.some(
                    (view) => !!view && typeof view.isConnected === 'function'
                        && view.isConnected() === true
                );
            }
            return typeof socket.isConnected === 'function'
                && socket.isConnected() === true;
        } catch (e) {
            return false;
        }
    }""",
)

SOCKET_CONNECTED = PagePredicate(
    description="LiveView socket isConnected()",
    script="""(name) => {
        try {
            const socket = window[name];
            return !!socket && typeof socket.isConnected === 'function'
                && socket.isConnected() === true;
        } catch (e) {
            return false;
        }
    }""",
)

SOCKET_PRESENT = PagePredicate(
    description="LiveView socket present",
    script="(name) => { try { return !!window[name]; } catch (e) { return false; } }",
)


class ConnectionAccessor:
    """Looks the socket handle up by name; never creates or mutates it."""

    def __init__(self, page: PredicateProbe, global_name: str = SOCKET_GLOBAL):
        self._page = page
        self._global_name = global_name

    async def is_connected(self) -> bool:
        """Single-shot, best-effort check.

        An absent or malformed handle reads as not connected: during page
        load the handle legitimately does not exist yet, and a navigation can
        tear down the context the check runs in.
        """
        return await self._check(VIEWS_CONNECTED)

    async def is_present(self) -> bool:
        return await self._check(SOCKET_PRESENT)

    async def _check(self, predicate: PagePredicate) -> bool:
        try:
            return bool(await self._page.evaluate(predicate.script, self._global_name))
        except PlaywrightError as e:
            logger.debug("%s check failed: %s", predicate.description, e)
            return False

    async def wait_until_connected(
        self,
        timeout: float = CONNECT_TIMEOUT,
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        """Block until the socket reports itself connected.

        Raises MissingCapability when the handle never showed up at all,
        Timeout when it exists but stayed disconnected.
        """
        try:
            await wait_for_predicate(
                self._page,
                SOCKET_CONNECTED,
                self._global_name,
                timeout=timeout,
                interval=interval,
            )
        except Timeout as e:
            if not await self.is_present():
                raise MissingCapability(
                    f"window.{self._global_name} to be defined",
                    timeout,
                    last_error=e.last_error,
                ) from e
            raise
        logger.debug("window.%s connected", self._global_name)


async def is_connected(page: PredicateProbe, global_name: str = SOCKET_GLOBAL) -> bool:
    """Check if LiveView is connected."""
    return await ConnectionAccessor(page, global_name).is_connected()


async def wait_for_connected(
    page: PredicateProbe,
    timeout: float = CONNECT_TIMEOUT,
    global_name: str = SOCKET_GLOBAL,
) -> None:
    """Wait for LiveView to be fully connected and ready."""
    await ConnectionAccessor(page, global_name).wait_until_connected(timeout)
