"""Polling utilities for E2E tests.

Page predicates are JavaScript function sources evaluated in the page on
every poll. They must only read the DOM: a poll may evaluate them many
times, and the answer must depend on nothing but DOM state and the
serialized argument.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from playwright.async_api import Error as PlaywrightError

from .constants import DEFAULT_POLL_INTERVAL, MAX_POLL_INTERVAL
from .errors import Timeout

logger = logging.getLogger(__name__)

# Messages Playwright uses when a navigation tears down the JS context the
# expression was running in. The next evaluation runs in the new document.
NAVIGATION_ERRORS = (
    "Execution context was destroyed",
    "Cannot find context with specified id",
    "most likely because of a navigation",
)


def is_navigation_error(error: PlaywrightError) -> bool:
    message = str(error)
    return any(marker in message for marker in NAVIGATION_ERRORS)


def _now() -> float:
    return asyncio.get_running_loop().time()


class Deadline:
    """A finite time budget shared by every phase of one operation."""

    def __init__(self, timeout: float):
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.timeout = timeout
        self._started = _now()

    def elapsed(self) -> float:
        return _now() - self._started

    def remaining(self) -> float:
        return max(0.0, self.timeout - self.elapsed())

    def remaining_ms(self) -> float:
        return self.remaining() * 1000

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0


@dataclass(frozen=True)
class PagePredicate:
    """A side-effect free JS function evaluated in the page."""

    description: str
    script: str


class PredicateProbe(Protocol):
    """Evaluates one expression in the page, once.

    Playwright's ``Page`` satisfies this; so does any test double.
    """

    async def evaluate(self, expression: str, arg: Any = None) -> Any: ...


async def wait_for_predicate(
    probe: PredicateProbe,
    predicate: PagePredicate,
    arg: Any = None,
    *,
    timeout: float | None = None,
    deadline: Deadline | None = None,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> Any:
    """Poll a page predicate until it returns a truthy value.

    Either ``timeout`` or an already running ``deadline`` must be given; a
    deadline lets several phases share one budget. Returns the truthy
    value. Raises ``Timeout`` with the predicate description, the deadline
    and the last observed value once the budget runs out.

    A navigation destroying the execution context mid-poll is remembered and
    the poll continues; any other Playwright error surfaces at once.
    """
    if deadline is None:
        if timeout is None:
            raise ValueError("wait_for_predicate needs a timeout or a deadline")
        deadline = Deadline(timeout)
    interval = min(interval, MAX_POLL_INTERVAL)

    last_value = None
    last_error = None
    rounds = 0
    while True:
        rounds += 1
        remaining = deadline.remaining()
        if remaining <= 0:
            break
        try:
            last_value = await asyncio.wait_for(
                probe.evaluate(predicate.script, arg), timeout=remaining
            )
        except asyncio.TimeoutError:
            break
        except PlaywrightError as e:
            if not is_navigation_error(e):
                raise
            logger.warning("Evaluating '%s' failed: %s", predicate.description, e)
            last_error = e
        else:
            if last_value:
                logger.debug(
                    "'%s' held after %d round(s), %.3fs",
                    predicate.description,
                    rounds,
                    deadline.elapsed(),
                )
                return last_value
        remaining = deadline.remaining()
        if remaining <= 0:
            break
        await asyncio.sleep(min(interval, remaining))

    raise Timeout(
        predicate.description,
        deadline.timeout,
        last_observed=last_value,
        last_error=last_error,
    )
