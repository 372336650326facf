"""Page object for the local login page."""

from __future__ import annotations

import re

from playwright.async_api import expect

from ..assertions import assert_message_banner
from ..web_client import LiveViewClient

LOGIN_PATH = "/auth/local/login"
LOGIN_URL_PATTERN = re.compile(r"/auth/(local/)?login")


class LoginPage:
    username_input = 'input[name="user[username]"]'
    password_input = 'input[name="user[password]"]'
    submit_button = 'button[type="submit"]'
    oidc_button = 'a:has-text("Sign in with OIDC"), button:has-text("Sign in with OIDC")'

    def __init__(self, client: LiveViewClient):
        self.client = client

    @property
    def page(self):
        return self.client.page

    async def goto(self) -> None:
        await self.client.goto(LOGIN_PATH)

    async def fill_username(self, username: str) -> None:
        await self.client.fill(self.username_input, username)

    async def fill_password(self, password: str) -> None:
        await self.client.fill(self.password_input, password)

    async def click_submit(self) -> None:
        await self.page.locator(self.submit_button).click()

    async def login(self, username: str, password: str, timeout: float = 5.0) -> None:
        await self.fill_username(username)
        await self.fill_password(password)
        await self.click_submit()
        # Login is a full navigation, not a LiveView patch
        await self.page.wait_for_url(
            lambda url: not LOGIN_URL_PATTERN.search(url),
            timeout=timeout * 1000,
        )

    async def click_oidc_login(self) -> None:
        await self.page.locator(self.oidc_button).first.click()

    async def assert_login_form_visible(self) -> None:
        await expect(self.page.locator(self.username_input)).to_be_visible()
        await expect(self.page.locator(self.password_input)).to_be_visible()
        await expect(self.page.locator(self.submit_button)).to_be_visible()

    async def assert_error_message(self, message: str) -> None:
        await assert_message_banner(self.page, "error", message, self.client.config)

    async def assert_on_login_page(self) -> None:
        await expect(self.page).to_have_url(LOGIN_URL_PATTERN)
