"""Scrape the lunch page: render → extract → decode, under one timeout."""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Coroutine
from typing import Any, TypeVar

from playwright.async_api import Browser, Playwright, async_playwright

from lunch.config import Settings, settings
from lunch.models import Restaurant
from scraper.decoder import decode_restaurants
from scraper.errors import ScrapeTimeoutError
from scraper.extractor import ExtractionStrategy, HeuristicExtractor
from scraper.renderer import PageRenderer

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def settle_first(work: Coroutine[Any, Any, T], timeout: float) -> T:
    """Await *work*, or raise ``ScrapeTimeoutError`` after *timeout* seconds.

    The work task and a timer race to settle a single result slot; whichever
    arrives second is ignored.  When the timer wins, the work task is
    cancelled and awaited so its cleanup has run before this returns.
    """
    loop = asyncio.get_running_loop()
    slot: asyncio.Future[T] = loop.create_future()
    task = asyncio.ensure_future(work)

    def settle_from_task(t: asyncio.Future[T]) -> None:
        if t.cancelled():
            if not slot.done():
                slot.cancel()
            return
        exc = t.exception()
        if slot.done():
            if exc is not None:
                logger.debug("Discarding failure after timeout: %r", exc)
            return
        if exc is not None:
            slot.set_exception(exc)
        else:
            slot.set_result(t.result())

    def settle_timeout() -> None:
        if not slot.done():
            slot.set_exception(ScrapeTimeoutError())

    task.add_done_callback(settle_from_task)
    timer = loop.call_later(timeout, settle_timeout)
    try:
        return await slot
    finally:
        timer.cancel()
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
            except Exception:
                logger.warning("Scrape task failed while being cancelled", exc_info=True)


class LunchScraper:
    """Fetch today's restaurants from the lunch page.

    Use as an async context manager; the Playwright browser lives for the
    duration of the ``async with`` block and each fetch opens its own
    browser context inside it::

        async with LunchScraper() as scraper:
            restaurants = await scraper.fetch_restaurants()

    Args:
        config: Settings to read URL, timeouts and browser options from.
        extractor: Strategy turning the rendered page into raw records.
        renderer: Pre-built renderer; when given, no browser is launched.
    """

    def __init__(
        self,
        config: Settings = settings,
        *,
        extractor: ExtractionStrategy | None = None,
        renderer: PageRenderer | None = None,
    ) -> None:
        self.config = config
        self.url = config.lunch_url
        self.timeout = config.render_timeout
        self.extractor: ExtractionStrategy = extractor or HeuristicExtractor()
        self._renderer = renderer
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> LunchScraper:
        if self._renderer is None:
            self._playwright = await async_playwright().start()
            launcher = getattr(self._playwright, self.config.browser_type)
            try:
                self._browser = await launcher.launch(headless=self.config.headless)
            except Exception:
                logger.warning(
                    "Failed to launch Playwright %s. Run 'playwright install %s' if not installed.",
                    self.config.browser_type,
                    self.config.browser_type,
                )
                await self._playwright.stop()
                self._playwright = None
                raise
            self._renderer = PageRenderer(
                self._browser,
                settle_delay=self.config.settle_delay,
                navigation_timeout=self.config.render_timeout,
                user_agent=self.config.user_agent,
            )
            logger.info("Playwright %s browser launched", self.config.browser_type)
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
            self._renderer = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    async def fetch_restaurants(self) -> list[Restaurant]:
        """Scrape the page once.

        Raises:
            ScraperError: Any stage failed or the timeout elapsed.
        """
        if self._renderer is None:
            raise RuntimeError("LunchScraper must be entered with 'async with' first")
        return await settle_first(self._scrape(self._renderer), self.timeout)

    async def _scrape(self, renderer: PageRenderer) -> list[Restaurant]:
        started = time.monotonic()
        async with renderer.render(self.url) as document:
            records = self.extractor.extract(document)
            payload = json.dumps(records, ensure_ascii=False)
            restaurants = decode_restaurants(payload)
        logger.info(
            "Scraped %d restaurants in %.1fs",
            len(restaurants),
            time.monotonic() - started,
        )
        return restaurants
