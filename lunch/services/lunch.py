"""Lunch menu service: refresh state machine and the read model around it."""

from __future__ import annotations

import asyncio
import enum
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Protocol

from lunch.models import LunchData, Restaurant
from lunch.services.cache import LunchCache
from lunch.services.reconcile import reconcile
from lunch.services.visibility import VisibilitySettings
from scraper.errors import ScraperError

logger = logging.getLogger(__name__)


class RestaurantSource(Protocol):
    async def fetch_restaurants(self) -> list[Restaurant]: ...


class ScrapeState(str, enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    FAILED = "failed"


def _local_now() -> datetime:
    return datetime.now().astimezone()


def format_relative(moment: datetime, now: datetime) -> str:
    """Short relative time: ``"just now"``, ``"5m ago"``, ``"2h ago"``, ``"3d ago"``."""
    seconds = int((now - moment).total_seconds())
    suffix = "ago"
    if seconds < 0:
        seconds = -seconds
        suffix = "from now"
    if seconds < 60:
        return "just now"
    for unit, size in (("d", 86_400), ("h", 3_600), ("m", 60)):
        if seconds >= size:
            return f"{seconds // size}{unit} {suffix}"
    return "just now"


class LunchService:
    """Coordinates fetching, caching and visibility filtering.

    ``refresh()`` moves the state ``IDLE → LOADING → SUCCESS | FAILED``.
    A refresh requested while one is running is ignored.  Scrape failures
    never escape: they become ``error`` text, and only when there is no
    earlier data to keep showing.

    Args:
        source: Where fresh restaurants come from (usually ``LunchScraper``).
        cache: Persisted snapshot of the last good fetch.
        visibility: The user's hidden-restaurant choices.
        clock: Returns the current time; must be timezone-aware.
    """

    def __init__(
        self,
        source: RestaurantSource,
        cache: LunchCache,
        visibility: VisibilitySettings,
        clock: Callable[[], datetime] = _local_now,
    ) -> None:
        self.source = source
        self.cache = cache
        self.visibility = visibility
        self.clock = clock

        self.state = ScrapeState.IDLE
        self.error: str | None = None
        self.last_updated: datetime | None = None
        self._restaurants: list[Restaurant] = []
        self._is_loading = False
        self._pending: asyncio.Task[None] | None = None

    # -- state ---------------------------------------------------------------

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def restaurants(self) -> list[Restaurant]:
        return list(self._restaurants)

    def _current(self) -> LunchData | None:
        if self.last_updated is None:
            return None
        return LunchData(restaurants=self._restaurants, fetched_at=self.last_updated)

    # -- lifecycle -----------------------------------------------------------

    def load_cached(self) -> asyncio.Task[None] | None:
        """Show the cached snapshot; schedule a refresh if it is stale.

        Must be called from a running event loop.  Returns the scheduled
        refresh task, or ``None`` when the cache is fresh or empty.
        """
        cached = self.cache.load()
        if cached is None:
            logger.info("No cached lunch data")
            return None

        self._restaurants = list(cached.restaurants)
        self.last_updated = cached.fetched_at
        logger.info(
            "Loaded %d cached restaurants from %s",
            len(cached.restaurants),
            cached.fetched_at.isoformat(),
        )
        if not cached.is_stale(self.clock()):
            return None

        logger.info("Cached lunch data is stale, refreshing in background")
        self._pending = asyncio.create_task(self.refresh())
        return self._pending

    async def refresh(self) -> None:
        """Fetch fresh menus and reconcile them with what is shown."""
        if self._is_loading:
            logger.debug("Refresh already in progress, ignoring request")
            return

        self._is_loading = True
        self.state = ScrapeState.LOADING
        self.error = None
        try:
            try:
                fetched: list[Restaurant] | ScraperError = await self.source.fetch_restaurants()
            except ScraperError as exc:
                fetched = exc
            except Exception as exc:
                logger.exception("Unexpected error while fetching restaurants")
                fetched = ScraperError(str(exc) or type(exc).__name__)

            result = reconcile(self._current(), fetched, self.clock())
            self._restaurants = result.to_display
            if result.to_persist is not None:
                self.last_updated = result.to_persist.fetched_at
                self.cache.save(result.to_persist)
                self.state = ScrapeState.SUCCESS
            else:
                self.state = ScrapeState.FAILED
            self.error = result.user_error
        finally:
            self._is_loading = False
            if self.state is ScrapeState.LOADING:
                self.state = ScrapeState.FAILED

    def clear_cache(self) -> None:
        """Forget the persisted snapshot; what is shown stays until the next fetch."""
        self.cache.clear()

    # -- read model ----------------------------------------------------------

    @property
    def visible_restaurants(self) -> list[Restaurant]:
        return [r for r in self.restaurants if self.visibility.is_visible(r.id)]

    @property
    def all_restaurant_names(self) -> list[tuple[str, str]]:
        """``(id, name)`` pairs sorted by name, for the visibility settings list."""
        return sorted(((r.id, r.name) for r in self.restaurants), key=lambda pair: pair[1])

    def formatted_last_updated(self, now: datetime | None = None) -> str | None:
        if self.last_updated is None:
            return None
        return format_relative(self.last_updated, now or self.clock())
