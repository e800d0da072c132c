"""Heuristic extraction of restaurant menus from the rendered lunch page.

The page has no stable markup contract, so restaurants are guessed from
generic containers:

    <div>
      <h2>Café Test</h2>
      <p>018-123 4567</p>
      <p>Soup    Tomato soup 7.50€</p>
    </div>

Every ``div``/``section``/``article`` is a candidate block.  Its first
heading-like descendant is the name, the first phone-looking number in its
markup is the phone, and every descendant line carrying a €-price is a menu
item.  Blocks without items are dropped.  Expect noise: nested wrappers and
unrelated priced text are not filtered beyond the shape checks below.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Protocol

from bs4 import BeautifulSoup, Tag

from lunch.models import slugify
from scraper.renderer import RenderedDocument

logger = logging.getLogger(__name__)

_BLOCK_TAGS = ["div", "section", "article"]
_ITEM_TAGS = ["div", "p", "li", "tr"]
_NAME_SELECTOR = 'h1, h2, h3, h4, [class*="name"], [class*="title"]'

# +358 18 123456, 018-12 3456, 0457 1234567
_PHONE_RE = re.compile(r"\+?[0-9]{1,4}[\s-]?[0-9]{2,4}[\s-]?[0-9]{4,}")

# 7€  7.50€  12,90 €
_PRICE_RE = re.compile(r"[0-9]+[.,]?[0-9]*\s*€")

# Columns on a menu line are separated by runs of whitespace or line breaks
_COLUMN_SPLIT_RE = re.compile(r"\s{2,}|\n")

_NAME_MIN_LEN = 2
_NAME_MAX_LEN = 100
_LINE_MIN_LEN = 5  # exclusive
_LINE_MAX_LEN = 500  # exclusive
_CATEGORY_MIN_LEN = 3


class ExtractionStrategy(Protocol):
    """Turns a rendered page into raw restaurant records."""

    def extract(self, document: RenderedDocument) -> list[dict[str, Any]]: ...


def parse_menu_line(text: str) -> dict[str, Any] | None:
    """Split one priced menu line into ``category``/``name``/``description``/``price``.

    Returns ``None`` when the line has no price, is too short or too long,
    or its first column is too short to be a dish.
    """
    text = text.strip()
    m = _PRICE_RE.search(text)
    if not m:
        return None
    if not _LINE_MIN_LEN < len(text) < _LINE_MAX_LEN:
        return None

    price = m.group(0)
    item_text = text.replace(price, "", 1).strip()
    parts = _COLUMN_SPLIT_RE.split(item_text)
    category = parts[0] if parts else ""
    description = " ".join(parts[1:]).strip() or None

    if len(category) < _CATEGORY_MIN_LEN:
        return None

    return {
        "category": category,
        "name": category,
        "description": description,
        "price": price,
    }


def _find_name(block: Tag) -> str | None:
    name_el = block.select_one(_NAME_SELECTOR)
    if name_el is None:
        return None
    name = name_el.get_text().strip()
    if not _NAME_MIN_LEN <= len(name) <= _NAME_MAX_LEN:
        return None
    return name


def _find_phone(block: Tag) -> str | None:
    m = _PHONE_RE.search(block.decode_contents())
    return m.group(0) if m else None


def _find_menu_items(block: Tag) -> list[dict[str, Any]]:
    items: list[dict[str, Any]] = []
    for element in block.find_all(_ITEM_TAGS):
        item = parse_menu_line(element.get_text())
        if item is not None:
            items.append(item)
    return items


class HeuristicExtractor:
    """Guess restaurants and menu lines from generic page structure.

    Args:
        section_title: Title given to the single menu section per restaurant.
        parser: BeautifulSoup tree builder.
    """

    def __init__(self, section_title: str = "Lunch", parser: str = "html.parser") -> None:
        self.section_title = section_title
        self.parser = parser

    def extract(self, document: RenderedDocument) -> list[dict[str, Any]]:
        """Return raw restaurant records; never raises."""
        try:
            soup = BeautifulSoup(document.html, self.parser)
            restaurants = self._extract_from_soup(soup)
        except Exception:
            logger.warning("Extraction failed for %s", document.url, exc_info=True)
            return []

        logger.info(
            "Extracted %d restaurants (%d menu items) from %s",
            len(restaurants),
            sum(len(r["sections"][0]["items"]) for r in restaurants),
            document.url,
        )
        return restaurants

    def _extract_from_soup(self, soup: BeautifulSoup) -> list[dict[str, Any]]:
        restaurants: list[dict[str, Any]] = []
        seen_names: set[str] = set()

        for block in soup.find_all(_BLOCK_TAGS):
            name = _find_name(block)
            if name is None:
                continue

            items = _find_menu_items(block)
            if not items:
                continue

            if name in seen_names:
                logger.debug("Skipping repeated block for %r", name)
                continue
            seen_names.add(name)

            restaurants.append(
                {
                    "id": slugify(name),
                    "name": name,
                    "phone": _find_phone(block),
                    "sections": [{"title": self.section_title, "items": items}],
                }
            )

        return restaurants
