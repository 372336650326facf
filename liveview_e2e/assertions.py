"""LiveView-specific assertions for E2E tests."""

from __future__ import annotations

from typing import Any

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config import SyncConfig
from .constants import BANNER_SELECTOR, BANNER_SEVERITIES, COLLECTION_SELECTOR
from .errors import AssertionTimeout, Timeout
from .wait import PagePredicate, wait_for_predicate

BANNER_CONTAINS = PagePredicate(
    description="flash banner contains text",
    script="""({ selector, text }) => {
        const el = document.querySelector(selector);
        return !!el && (el.textContent || '').includes(text);
    }""",
)

BANNER_TEXT = "(selector) => { const el = document.querySelector(selector); return el ? (el.textContent || '').trim() : null; }"

CHILD_COUNT_EQUALS = PagePredicate(
    description="stream item count",
    script="""({ selector, count }) => {
        const container = document.querySelector(selector);
        if (!container) return false;
        return container.children.length === count;
    }""",
)

CHILD_COUNT = "(selector) => { const c = document.querySelector(selector); return c ? c.children.length : null; }"


def banner_selector(severity: str) -> str:
    if severity not in BANNER_SEVERITIES:
        raise ValueError(
            f"Unknown flash severity {severity!r}; expected one of {BANNER_SEVERITIES}"
        )
    return BANNER_SELECTOR.format(severity=severity)


def collection_selector(container_id: str) -> str:
    return COLLECTION_SELECTOR.format(container_id=container_id)


async def assert_message_banner(
    page: Any,
    severity: str,
    expected_text: str | None = None,
    config: SyncConfig | None = None,
) -> None:
    """Assert that a flash message is displayed.

    ``expected_text`` is matched as a substring of the first banner's text.
    """
    config = config or SyncConfig()
    selector = banner_selector(severity)
    try:
        await page.wait_for_selector(
            selector, state="visible", timeout=config.banner_timeout * 1000
        )
    except PlaywrightTimeoutError as e:
        raise AssertionTimeout(
            f"{severity} flash banner",
            "visible" if expected_text is None else f"visible with {expected_text!r}",
            None,
            config.banner_timeout,
        ) from e

    if expected_text is None:
        return
    try:
        await wait_for_predicate(
            page,
            BANNER_CONTAINS,
            {"selector": selector, "text": expected_text},
            timeout=config.banner_text_timeout,
            interval=config.poll_interval,
        )
    except Timeout as e:
        observed = await page.evaluate(BANNER_TEXT, selector)
        raise AssertionTimeout(
            f"{severity} flash banner text",
            expected_text,
            observed,
            config.banner_text_timeout,
        ) from e


async def assert_collection_count(
    page: Any,
    container_id: str,
    expected_count: int | None = None,
    config: SyncConfig | None = None,
) -> None:
    """Assert that a ``phx-update="stream"`` container holds the expected items.

    Only the final count matters: intermediate counts seen while the stream
    is being patched are ignored until the deadline.
    """
    config = config or SyncConfig()
    selector = collection_selector(container_id)
    try:
        await page.wait_for_selector(
            selector, state="attached", timeout=config.collection_attach_timeout * 1000
        )
    except PlaywrightTimeoutError as e:
        raise AssertionTimeout(
            f"stream #{container_id}",
            "attached",
            None,
            config.collection_attach_timeout,
        ) from e

    if expected_count is None:
        return
    try:
        await wait_for_predicate(
            page,
            CHILD_COUNT_EQUALS,
            {"selector": selector, "count": expected_count},
            timeout=config.collection_count_timeout,
            interval=config.poll_interval,
        )
    except Timeout as e:
        observed = await page.evaluate(CHILD_COUNT, selector)
        raise AssertionTimeout(
            f"stream #{container_id} item count",
            expected_count,
            observed,
            config.collection_count_timeout,
        ) from e
