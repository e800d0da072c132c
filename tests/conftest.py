"""Pytest configuration and fixtures."""

from collections.abc import Callable
from datetime import datetime

import pytest

from lunch.models import MenuItem, MenuSection, Restaurant, slugify
from lunch.services.cache import LunchCache
from lunch.services.visibility import VisibilitySettings
from lunch.storage import MemoryBlobStore


@pytest.fixture
def now() -> datetime:
    """Noon today, local time."""
    return datetime.now().astimezone().replace(hour=12, minute=0, second=0, microsecond=0)


@pytest.fixture
def store() -> MemoryBlobStore:
    return MemoryBlobStore()


@pytest.fixture
def cache(store: MemoryBlobStore) -> LunchCache:
    return LunchCache(store)


@pytest.fixture
def visibility(store: MemoryBlobStore) -> VisibilitySettings:
    return VisibilitySettings(store)


@pytest.fixture
def make_restaurant() -> Callable[..., Restaurant]:
    """Build a restaurant with one ``Lunch`` section."""

    def _make(name: str, *dishes: tuple[str, str]) -> Restaurant:
        items = [
            MenuItem(category=category, name=category, price=price)
            for category, price in (dishes or (("Soup of the day", "8,50€"),))
        ]
        return Restaurant(
            id=slugify(name),
            name=name,
            sections=[MenuSection(title="Lunch", items=items)],
        )

    return _make


CAFE_TEST_HTML = """
<html>
  <body>
    <div>
      <h2>Café Test</h2>
      <p>Soup    Tomato soup 7.50€</p>
    </div>
  </body>
</html>
"""


@pytest.fixture
def cafe_test_html() -> str:
    return CAFE_TEST_HTML
