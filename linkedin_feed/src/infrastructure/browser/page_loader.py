"""Headless browser session rendering the company posts page."""

from __future__ import annotations

import asyncio
import time
from contextlib import suppress
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

if TYPE_CHECKING:
    from playwright.async_api import BrowserContext, Page

    from linkedin_feed.src.infrastructure.browser.cookies import BrowserCookie
    from linkedin_feed.src.infrastructure.loggers.base import RichLogger

HOME_URL = 'https://www.linkedin.com/'
OVERLAY_CLOSE_SELECTOR = (
    'button[aria-label*="Dismiss" i], button[aria-label*="Close" i]'
)

CHROMIUM_ARGS = ['--no-sandbox', '--disable-setuid-sandbox', '--disable-dev-shm-usage']
USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36'
)
VIEWPORT = {'width': 1366, 'height': 900}

NAVIGATION_TIMEOUT_MS = 60_000
OVERLAY_TIMEOUT_MS = 5_000
SCROLL_STEP_SECONDS = 1.0
OVERLAY_SETTLE_SECONDS = 1.0


class BrowserSessionError(Exception):
    """Raised when the browser can't be started or the feed page can't be loaded."""


@dataclass(frozen=True)
class FeedPageSnapshot:
    """Rendered document of the feed page after scrolling"""

    url: str
    html: str


def build_posts_url(company_url: str) -> str:
    """Posts tab of the company page, viewed as a member"""
    base = company_url if company_url.endswith('/') else f'{company_url}/'
    return f'{base}posts/?viewAsMember=true'


class PlaywrightFeedPageLoader:
    """
    Loads the posts page in an isolated Chromium context and returns its HTML.

    Content is loaded lazily by LinkedIn, so the page is scrolled for a fixed time.
    The scroll bound is only a timeout: the snapshot may miss posts which
    weren't loaded yet, it never waits for network or DOM quiescence.
    """

    def __init__(  # noqa: PLR0913
        self,
        *,
        company_url: str,
        scroll_timeout_ms: int,
        cookies: list[BrowserCookie],
        logger: RichLogger,
        headless: bool = True,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.company_url = company_url
        self.scroll_timeout_ms = scroll_timeout_ms
        self.cookies = cookies
        self.logger = logger
        self.headless = headless
        self._sleep = sleep
        self._clock = clock

    async def load(self) -> FeedPageSnapshot:
        try:
            async with async_playwright() as playwright:
                browser = await playwright.chromium.launch(
                    headless=self.headless,
                    args=CHROMIUM_ARGS,
                )
                try:
                    context = await browser.new_context(
                        user_agent=USER_AGENT,
                        viewport=VIEWPORT,  # type: ignore[arg-type]
                    )
                    page = await context.new_page()
                    return await self.capture(context, page)
                finally:
                    await browser.close()
        except PlaywrightError as e:
            if "Executable doesn't exist" in e.message:
                self.logger.info(
                    'Chromium is not installed, run [bold]playwright install chromium[/bold]'
                )
            raise BrowserSessionError(e.message) from e

    async def capture(self, context: BrowserContext, page: Page) -> FeedPageSnapshot:
        """Run the whole page scenario on an already opened page"""
        # Cookies can only be scoped after visiting the domain
        with suppress(PlaywrightError):
            await page.goto(
                HOME_URL, wait_until='domcontentloaded', timeout=NAVIGATION_TIMEOUT_MS
            )

        if await self.inject_cookies(context):
            self.logger.info(f'Injected {len(self.cookies)} session cookies')
        else:
            self.logger.warning(
                'No session cookies, LinkedIn may return partial results or a login wall'
            )

        posts_url = build_posts_url(self.company_url)
        self.logger.info(f'Opening [bold]{posts_url}[/bold]')
        await page.goto(
            posts_url, wait_until='domcontentloaded', timeout=NAVIGATION_TIMEOUT_MS
        )

        await self.dismiss_overlay(page)
        await self.auto_scroll(page)

        return FeedPageSnapshot(url=page.url, html=await page.content())

    async def inject_cookies(self, context: BrowserContext) -> bool:
        if not self.cookies:
            return False
        try:
            await context.add_cookies(
                [cookie.to_playwright(HOME_URL) for cookie in self.cookies]  # type: ignore[misc]
            )
        except PlaywrightError as e:
            self.logger.warning(f'Browser rejected the cookies: {e.message}')
            return False
        return True

    async def dismiss_overlay(self, page: Page) -> None:
        """Close the login/consent gate if it shows up, best effort"""
        with suppress(PlaywrightError):
            await page.wait_for_selector(OVERLAY_CLOSE_SELECTOR, timeout=OVERLAY_TIMEOUT_MS)
            await page.click(OVERLAY_CLOSE_SELECTOR)
            await self._sleep(OVERLAY_SETTLE_SECONDS)
            self.logger.debug('Overlay dismissed')

    async def auto_scroll(self, page: Page) -> int:
        """Scroll one viewport per second until the time bound elapses, return the step count"""
        started = self._clock()
        bound_seconds = self.scroll_timeout_ms / 1000
        steps = 0
        while self._clock() - started < bound_seconds:
            await page.evaluate('() => window.scrollBy(0, window.innerHeight)')
            await self._sleep(SCROLL_STEP_SECONDS)
            steps += 1

        self.logger.debug(f'Scrolled {steps} times')
        return steps
