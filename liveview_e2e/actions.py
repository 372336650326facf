"""Act-and-wait operations that page objects are built from.

Each helper performs one primitive action through Playwright and returns
only once its effects have settled. None of them is idempotent: a second
submit is a second submit.
"""

from __future__ import annotations

import asyncio
from typing import Any

from .config import SyncConfig
from .settle import SettlementDetector


async def click_and_settle(
    page: Any,
    selector: str,
    timeout: float | None = None,
    detector: SettlementDetector | None = None,
) -> None:
    """Click an element and wait for LiveView to update."""
    detector = detector or SettlementDetector(page)
    await page.click(selector)
    await detector.wait_for_settlement(timeout)


async def fill_and_validate(
    page: Any,
    selector: str,
    value: str,
    delay: float | None = None,
    config: SyncConfig | None = None,
) -> None:
    """Fill a form field and wait for LiveView validation.

    Blurring fires phx-change/phx-blur validation. The wait afterwards is a
    fixed delay sized for a validation round-trip, not a settlement check.
    """
    config = config or SyncConfig()
    await page.fill(selector, value)
    await page.locator(selector).blur()
    await asyncio.sleep(config.validation_delay if delay is None else delay)


async def submit_and_settle(
    page: Any,
    form_selector: str,
    timeout: float | None = None,
    detector: SettlementDetector | None = None,
) -> None:
    """Submit a LiveView form and wait for response."""
    detector = detector or SettlementDetector(page)
    await page.locator(form_selector).locator('button[type="submit"]').click()
    await detector.wait_for_settlement(timeout)
