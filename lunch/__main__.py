"""Fetch today's lunch menus once and log what would be shown.

Usage::

    python -m lunch

Reads configuration from the environment / ``.env`` (see ``lunch.config``).
"""

import asyncio
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from lunch.config import settings
from lunch.services.cache import LunchCache
from lunch.services.lunch import LunchService
from lunch.services.visibility import VisibilitySettings
from lunch.storage import FileBlobStore
from scraper.pipeline import LunchScraper

logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def _log_summary(service: LunchService) -> None:
    """Log the visible restaurants and their menus."""
    restaurants = service.visible_restaurants
    hidden = len(service.restaurants) - len(restaurants)

    logger.info("=" * 50)
    logger.info("LUNCH (updated %s)", service.formatted_last_updated() or "never")
    if service.error:
        logger.info("Error: %s", service.error)
    logger.info("-" * 50)
    for r in restaurants:
        logger.info("%s%s", r.name, f" ({r.phone})" if r.phone else "")
        for item in r.all_menu_items:
            line = item.category
            if item.description:
                line += f": {item.description}"
            logger.info("    %-60s %s", line, item.price)
    logger.info("-" * 50)
    logger.info("%d restaurants shown, %d hidden", len(restaurants), hidden)
    logger.info("=" * 50)


async def run() -> None:
    store = FileBlobStore(Path(settings.cache_dir))
    async with LunchScraper(settings) as scraper:
        service = LunchService(scraper, LunchCache(store), VisibilitySettings(store))
        pending = service.load_cached()
        if pending is not None:
            await pending
        elif not service.restaurants:
            await service.refresh()
        _log_summary(service)


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
