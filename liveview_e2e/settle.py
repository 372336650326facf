"""Detect that a LiveView update cycle has settled.

Settled means two things at once: no node carries an active loading
marker, and the network has been quiet for the idle window. Markers can be
cleared before the last request finishes, and late requests can land after
markers are gone, so neither signal alone is enough.
"""

from __future__ import annotations

import logging
from typing import Any

from .config import SyncConfig
from .errors import Timeout
from .network import DriverNetworkIdle, NetworkIdle
from .wait import Deadline, PagePredicate, wait_for_predicate

logger = logging.getLogger(__name__)

# A node is still loading if it has the loading class, or has the loading
# attribute set to anything but "false".
LOADING_MARKERS_ABSENT = PagePredicate(
    description="no active loading markers",
    script="""({ attr, cls }) => {
        const nodes = document.querySelectorAll(`[${attr}], .${cls}`);
        return Array.from(nodes).every((el) => {
            if (el.classList.contains(cls)) return false;
            const value = el.getAttribute(attr);
            return value === null || value === 'false';
        });
    }""",
)


class SettlementDetector:
    def __init__(
        self,
        page: Any,
        network: NetworkIdle | None = None,
        config: SyncConfig | None = None,
    ):
        self._page = page
        self._config = config or SyncConfig()
        self._network = network or DriverNetworkIdle(page)

    @property
    def _marker_arg(self) -> dict:
        return {"attr": self._config.loading_attr, "cls": self._config.loading_class}

    async def markers_absent(self) -> bool:
        """Single-shot marker check."""
        return bool(
            await self._page.evaluate(LOADING_MARKERS_ABSENT.script, self._marker_arg)
        )

    async def wait_for_markers(self, deadline: Deadline) -> None:
        await wait_for_predicate(
            self._page,
            LOADING_MARKERS_ABSENT,
            self._marker_arg,
            deadline=deadline,
            interval=self._config.poll_interval,
        )

    async def wait_for_settlement(self, timeout: float | None = None) -> None:
        """Wait until markers are gone and the network is idle.

        Both phases draw on one budget. If markers come back while the
        network phase runs, the marker phase starts again with whatever
        budget is left.
        """
        deadline = Deadline(
            self._config.settle_timeout if timeout is None else timeout
        )
        rounds = 0
        while True:
            rounds += 1
            await self.wait_for_markers(deadline)
            await self._network.wait_idle(deadline)
            if await self.markers_absent():
                logger.debug(
                    "Settled after %.3fs (%d round(s))", deadline.elapsed(), rounds
                )
                return
            logger.debug("Loading markers reappeared while waiting for network idle")
            if deadline.expired:
                raise Timeout(
                    LOADING_MARKERS_ABSENT.description,
                    deadline.timeout,
                    last_observed="markers present after network idle",
                )


async def wait_for_settlement(
    page: Any,
    timeout: float | None = None,
    network: NetworkIdle | None = None,
    config: SyncConfig | None = None,
) -> None:
    """Wait for LiveView to finish updating after an action."""
    await SettlementDetector(page, network, config).wait_for_settlement(timeout)
