"""Fixtures for tests against a real Chromium.

Pages are served from memory through request routing, so no application
server is needed. Tests are skipped when Chromium is not installed
(``playwright install chromium``).
"""

import os
from pathlib import Path

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from liveview_e2e.config import E2EConfig
from liveview_e2e.web_client import LiveViewClient
from static_site import BASE_URL, StaticSite

SCREENSHOT_DIR = Path(os.environ.get("LIVEVIEW_SCREENSHOT_DIR", "test-results/screenshots"))


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Stash test result on the item so fixtures can check for failure."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


@pytest_asyncio.fixture
async def browser(config: E2EConfig):
    async with async_playwright() as p:
        try:
            browser = await p.chromium.launch(
                headless=config.headless, slow_mo=config.slow_mo
            )
        except PlaywrightError as e:
            pytest.skip(f"Chromium is not available: {e}")
        yield browser
        await browser.close()


@pytest.fixture
def site() -> StaticSite:
    return StaticSite()


@pytest_asyncio.fixture
async def client(browser, site, sync_config, request) -> LiveViewClient:
    """Single browser context per test."""
    client = LiveViewClient(browser, BASE_URL, name="browser-1", config=sync_config)
    async with client:
        await client.context.route("**/*", site.handle)
        yield client
        # Capture screenshot on failure
        if hasattr(request.node, "rep_call") and request.node.rep_call.failed:
            try:
                SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)
                name = request.node.name.replace("/", "_")
                await client.page.screenshot(
                    path=str(SCREENSHOT_DIR / f"{name}.png"), full_page=True
                )
            except PlaywrightError:
                pass
