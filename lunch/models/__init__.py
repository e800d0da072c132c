from lunch.models.menu_item import MenuItem, MenuSection
from lunch.models.restaurant import LunchData, Restaurant, is_stale, slugify

__all__ = [
    "LunchData",
    "MenuItem",
    "MenuSection",
    "Restaurant",
    "is_stale",
    "slugify",
]
