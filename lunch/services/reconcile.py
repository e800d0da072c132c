"""Decide what to show and what to cache after a fetch attempt."""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from lunch.models import LunchData, Restaurant
from scraper.errors import ScraperError

logger = logging.getLogger(__name__)

EMPTY_RESULT_MESSAGE = "No restaurants found. The website structure may have changed."


@dataclass(frozen=True)
class Reconciliation:
    """Outcome of merging a fetch attempt with the previous snapshot."""

    to_display: list[Restaurant] = field(default_factory=list)
    to_persist: LunchData | None = None
    user_error: str | None = None


def reconcile(
    previous: LunchData | None,
    fetched: list[Restaurant] | ScraperError,
    now: datetime,
) -> Reconciliation:
    """Merge *fetched* into *previous* under the keep-stale-on-error policy.

    - Error: keep showing *previous*; the message is only surfaced when there
      is nothing else to show.  Nothing is persisted.
    - Empty result: treated as a soft failure, same as an error but with a
      fixed message.  An empty list never overwrites the cache.
    - Non-empty result: replaces what is shown and becomes the new snapshot.
    """
    kept = list(previous.restaurants) if previous is not None else []

    if isinstance(fetched, ScraperError):
        logger.warning("Fetch failed, keeping %d cached restaurants: %s", len(kept), fetched)
        return Reconciliation(
            to_display=kept,
            user_error=None if kept else str(fetched),
        )

    if not fetched:
        logger.warning("Fetch returned no restaurants, keeping %d cached", len(kept))
        return Reconciliation(
            to_display=kept,
            user_error=None if kept else EMPTY_RESULT_MESSAGE,
        )

    return Reconciliation(
        to_display=list(fetched),
        to_persist=LunchData(restaurants=list(fetched), fetched_at=now),
    )
