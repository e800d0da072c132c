"""Render the lunch page in a headless browser and snapshot its DOM."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from playwright.async_api import Browser, BrowserContext
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from scraper.errors import NetworkError, ParsingError, ScrapeTimeoutError, ScriptEvaluationError

logger = logging.getLogger(__name__)

_SNAPSHOT_SCRIPT = "() => document.documentElement.outerHTML"

# Always go to the network, never to the HTTP cache
_NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}


@dataclass(frozen=True)
class RenderedDocument:
    """The page's DOM as serialized markup after client-side rendering."""

    url: str
    html: str


def _short(exc: PlaywrightError) -> str:
    # Playwright appends a multi-line call log to its messages
    text = (exc.message or str(exc)).strip()
    return text.splitlines()[0] if text else type(exc).__name__


class PageRenderer:
    """Load pages in throwaway browser contexts.

    Each ``render`` call gets its own non-persistent context (separate
    cookies and storage) which is closed when the ``async with`` block
    exits, whatever the outcome.  Callers must not overlap renders.

    Args:
        browser: A launched Playwright browser.
        settle_delay: Seconds to wait after ``load`` for scripts to populate
            the page.  A fixed grace period, not idle detection.
        navigation_timeout: Seconds Playwright may spend on navigation.
        user_agent: User-Agent for the page request.
    """

    def __init__(
        self,
        browser: Browser,
        *,
        settle_delay: float = 2.0,
        navigation_timeout: float = 30.0,
        user_agent: str | None = None,
    ) -> None:
        self._browser = browser
        self.settle_delay = settle_delay
        self.navigation_timeout = navigation_timeout
        self.user_agent = user_agent

    async def _new_context(self) -> BrowserContext:
        try:
            return await self._browser.new_context(
                user_agent=self.user_agent,
                extra_http_headers=_NO_CACHE_HEADERS,
                service_workers="block",
            )
        except PlaywrightError as exc:
            raise NetworkError(_short(exc)) from exc

    @asynccontextmanager
    async def render(self, url: str) -> AsyncIterator[RenderedDocument]:
        """Render *url* and yield its DOM snapshot.

        Raises:
            ScrapeTimeoutError: Navigation did not finish in time.
            NetworkError: The page could not be loaded.
            ScriptEvaluationError: The DOM snapshot script failed.
            ParsingError: The snapshot was not markup.
        """
        context = await self._new_context()
        logger.debug("Opened browser context for %s", url)
        try:
            yield await self._load(context, url)
        finally:
            try:
                await context.close()
            except PlaywrightError as exc:
                logger.warning("Closing browser context for %s failed: %s", url, _short(exc))
            else:
                logger.debug("Closed browser context for %s", url)

    async def _load(self, context: BrowserContext, url: str) -> RenderedDocument:
        logger.info("Loading %s …", url)
        try:
            page = await context.new_page()
            response = await page.goto(
                url,
                wait_until="load",
                timeout=self.navigation_timeout * 1000,
            )
        except PlaywrightTimeoutError as exc:
            raise ScrapeTimeoutError() from exc
        except PlaywrightError as exc:
            raise NetworkError(_short(exc)) from exc

        if response is not None and not response.ok:
            logger.warning("%s answered HTTP %d", url, response.status)

        try:
            # Give client-side scripts a moment to render the menus
            await page.wait_for_timeout(self.settle_delay * 1000)
            html = await page.evaluate(_SNAPSHOT_SCRIPT)
        except PlaywrightError as exc:
            raise ScriptEvaluationError(_short(exc)) from exc

        if not isinstance(html, str):
            raise ParsingError()

        logger.debug("Rendered %s (%d characters)", page.url, len(html))
        return RenderedDocument(url=page.url, html=html)
