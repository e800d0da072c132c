"""Validate extractor output and map it into ``lunch.models``."""

import json
import logging

from pydantic import TypeAdapter, ValidationError

from lunch.models import MenuItem, MenuSection, Restaurant
from lunch.schemas import ScrapedRestaurant
from scraper.errors import DecodingError, ParsingError

logger = logging.getLogger(__name__)

_SCRAPED_LIST = TypeAdapter(list[ScrapedRestaurant])


def _to_restaurant(scraped: ScrapedRestaurant) -> Restaurant:
    return Restaurant(
        id=scraped.id,
        name=scraped.name,
        phone=scraped.phone,
        sections=[
            MenuSection(
                title=section.title,
                items=[
                    MenuItem(
                        category=item.category,
                        name=item.name,
                        description=item.description,
                        price=item.price,
                    )
                    for item in section.items
                ],
            )
            for section in scraped.sections
        ],
    )


def _deduplicate(restaurants: list[Restaurant]) -> list[Restaurant]:
    """Drop restaurants whose id was already seen (keep first occurrence)."""
    seen: set[str] = set()
    unique: list[Restaurant] = []
    for r in restaurants:
        if r.id not in seen:
            seen.add(r.id)
            unique.append(r)
    dupes = len(restaurants) - len(unique)
    if dupes:
        logger.info("Removed %d restaurants with duplicate ids", dupes)
    return unique


def decode_restaurants(raw: str | bytes) -> list[Restaurant]:
    """Decode serialized extractor output into restaurants.

    Section and item ids are generated fresh on every call.

    Raises:
        ParsingError: *raw* is not valid JSON.
        DecodingError: The JSON does not have the scraped-restaurant shape.
    """
    try:
        data = json.loads(raw)
    except (ValueError, TypeError) as exc:
        logger.debug("Extractor output is not JSON: %s", exc)
        raise ParsingError() from exc

    try:
        scraped = _SCRAPED_LIST.validate_python(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "root"
        raise DecodingError(f"{location}: {first['msg']}") from exc

    return _deduplicate([_to_restaurant(s) for s in scraped])
