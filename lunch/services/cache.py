"""Read and write the cached ``LunchData`` snapshot."""

import logging

from pydantic import ValidationError

from lunch.models import LunchData
from lunch.storage import BlobStore

logger = logging.getLogger(__name__)

CACHE_KEY = "cachedLunchData"


class LunchCache:
    """The persisted snapshot of the last successful, non-empty fetch."""

    def __init__(self, store: BlobStore, key: str = CACHE_KEY) -> None:
        self._store = store
        self._key = key

    def load(self) -> LunchData | None:
        """Return the cached snapshot, or ``None`` if missing or unreadable."""
        raw = self._store.get(self._key)
        if raw is None:
            return None
        try:
            return LunchData.model_validate_json(raw)
        except ValidationError:
            logger.warning("Ignoring unreadable lunch cache", exc_info=True)
            return None

    def save(self, data: LunchData) -> None:
        self._store.set(self._key, data.model_dump_json(by_alias=True))
        logger.info(
            "Cached %d restaurants fetched at %s",
            len(data.restaurants),
            data.fetched_at.isoformat(),
        )

    def clear(self) -> None:
        self._store.delete(self._key)
        logger.info("Lunch cache cleared")
