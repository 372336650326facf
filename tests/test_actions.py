"""Tests for the act-and-wait operations."""

import asyncio

import pytest

from fakes import later
from liveview_e2e.actions import click_and_settle, fill_and_validate, submit_and_settle
from liveview_e2e.errors import Timeout
from liveview_e2e.network import NetworkActivity
from liveview_e2e.settle import LOADING_MARKERS_ABSENT, SettlementDetector


@pytest.fixture
def detector(page, sync_config):
    state = {"loading": False}
    page.answer(LOADING_MARKERS_ABSENT.script, lambda _: not state["loading"])

    # Clicking starts a patch: markers go up and a request is sent, both
    # clear 0.1s later.
    def on_action(action):
        if action[0] != "click":
            return
        state["loading"] = True
        page.emit("request", action)
        later(0.1, lambda: state.update(loading=False))
        later(0.1, lambda: page.emit("requestfinished", action))

    page.on_action = on_action
    network = NetworkActivity(page, sync_config.network_idle_window, interval=0.01)
    with network:
        detector = SettlementDetector(page, network, sync_config)
        detector.state = state
        yield detector


class TestClickAndSettle:
    async def test_clicks_then_waits_for_settlement(self, page, detector):
        loop = asyncio.get_running_loop()
        start = loop.time()
        await click_and_settle(page, "#save", detector=detector)
        assert page.actions == [("click", "#save")]
        assert not detector.state["loading"]
        # 0.1s patch plus 0.1s idle window
        assert loop.time() - start >= 0.19

    async def test_timeout_override(self, page, detector):
        with pytest.raises(Timeout):
            await click_and_settle(page, "#save", timeout=0.05, detector=detector)

    async def test_click_errors_propagate(self, page, detector):
        def fail(action):
            raise RuntimeError("element detached")

        page.on_action = fail
        with pytest.raises(RuntimeError):
            await click_and_settle(page, "#save", detector=detector)


class TestSubmitAndSettle:
    async def test_clicks_submit_button_inside_form(self, page, detector):
        await submit_and_settle(page, "form#login", detector=detector)
        assert page.actions == [("click", 'form#login >> button[type="submit"]')]
        assert not detector.state["loading"]


class TestFillAndValidate:
    async def test_fills_blurs_and_waits_fixed_delay(self, page, sync_config):
        loop = asyncio.get_running_loop()
        start = loop.time()
        await fill_and_validate(page, "#email", "a@b.c", config=sync_config)
        assert page.actions == [("fill", "#email", "a@b.c"), ("blur", "#email")]
        assert loop.time() - start >= sync_config.validation_delay - 0.01

    async def test_delay_override(self, page, sync_config):
        loop = asyncio.get_running_loop()
        start = loop.time()
        await fill_and_validate(page, "#email", "x", delay=0.01, config=sync_config)
        assert loop.time() - start < sync_config.validation_delay
