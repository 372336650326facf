"""Wait for one-shot ``phx:`` events pushed to the window.

Known race: the event may already have fired before the listener is
attached, and nothing in the page records that it did. The subscriber
therefore races the listener against a short fallback timer and reports
``False`` when the timer wins. ``False`` means "not seen within the
fallback window", never "did not happen"; an event dispatched after the
window but before the outer timeout still yields ``False``. Callers that
need certainty should wait for settlement instead.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from .constants import EVENT_FALLBACK, EVENT_PREFIX, EVENT_TIMEOUT
from .errors import Timeout
from .wait import PagePredicate

logger = logging.getLogger(__name__)

# The listener is registered with once semantics and removed explicitly when
# the fallback wins, so no listener outlives the call.
ONE_SHOT_EVENT = PagePredicate(
    description="one-shot window event",
    script="""({ type, fallbackMs }) => new Promise((resolve) => {
        let timer = null;
        const onEvent = () => {
            clearTimeout(timer);
            resolve(true);
        };
        window.addEventListener(type, onEvent, { once: true });
        timer = setTimeout(() => {
            window.removeEventListener(type, onEvent);
            resolve(false);
        }, fallbackMs);
    })""",
)


class EventSubscriber:
    def __init__(
        self,
        page: Any,
        prefix: str = EVENT_PREFIX,
        fallback: float = EVENT_FALLBACK,
    ):
        self._page = page
        self._prefix = prefix
        self._fallback = fallback

    def event_type(self, name: str) -> str:
        return f"{self._prefix}:{name}"

    async def wait_for_event(
        self,
        name: str,
        timeout: float = EVENT_TIMEOUT,
        fallback: float | None = None,
    ) -> bool:
        """Return True if the event fired within the fallback window.

        See the module docstring for why False is not authoritative.
        """
        fallback = self._fallback if fallback is None else fallback
        if fallback <= 0 or fallback >= timeout:
            raise ValueError(
                f"fallback ({fallback}s) must be positive and shorter than "
                f"timeout ({timeout}s)"
            )
        event_type = self.event_type(name)
        try:
            fired = await asyncio.wait_for(
                self._page.evaluate(
                    ONE_SHOT_EVENT.script,
                    {"type": event_type, "fallbackMs": fallback * 1000},
                ),
                timeout=timeout,
            )
        except asyncio.TimeoutError as e:
            raise Timeout(f"event {event_type}", timeout) from e
        if not fired:
            logger.warning(
                "No %s within %.3fs; it may have fired before subscribing",
                event_type,
                fallback,
            )
        return bool(fired)


async def wait_for_event(
    page: Any,
    name: str,
    timeout: float = EVENT_TIMEOUT,
    prefix: str = EVENT_PREFIX,
) -> bool:
    """Wait for a specific Phoenix event to be triggered."""
    return await EventSubscriber(page, prefix).wait_for_event(name, timeout)
