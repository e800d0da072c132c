"""Which restaurants the user has chosen to hide.

Hidden ids are persisted as a JSON list under a single key.  Ids are derived
from restaurant names, so a choice survives menu refreshes.
"""

import json
import logging
from collections.abc import Iterable

from lunch.storage import BlobStore

logger = logging.getLogger(__name__)

HIDDEN_KEY = "hiddenRestaurants"


class VisibilitySettings:
    """Restaurant visibility filter backed by a blob store.

    Construct once at startup and pass it to whoever needs it.
    """

    def __init__(self, store: BlobStore, key: str = HIDDEN_KEY) -> None:
        self._store = store
        self._key = key
        self._hidden: set[str] = self._load()

    def _load(self) -> set[str]:
        raw = self._store.get(self._key)
        if raw is None:
            return set()
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Ignoring unreadable visibility settings")
            return set()
        if not isinstance(data, list):
            logger.warning("Ignoring visibility settings of type %s", type(data).__name__)
            return set()
        return {str(item) for item in data}

    def _save(self) -> None:
        self._store.set(self._key, json.dumps(sorted(self._hidden)))

    @property
    def hidden_ids(self) -> frozenset[str]:
        return frozenset(self._hidden)

    def is_visible(self, restaurant_id: str) -> bool:
        return restaurant_id not in self._hidden

    def set_hidden(self, restaurant_id: str, hidden: bool) -> None:
        if hidden:
            self._hidden.add(restaurant_id)
        else:
            self._hidden.discard(restaurant_id)
        self._save()

    def toggle(self, restaurant_id: str) -> None:
        self.set_hidden(restaurant_id, self.is_visible(restaurant_id))

    def show_all(self) -> None:
        self._hidden.clear()
        self._save()

    def hide_all(self, restaurant_ids: Iterable[str]) -> None:
        self._hidden.update(restaurant_ids)
        self._save()

    def visible_count(self, restaurant_ids: Iterable[str]) -> int:
        """How many of *restaurant_ids* are currently shown."""
        return sum(1 for rid in restaurant_ids if self.is_visible(rid))
