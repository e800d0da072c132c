from lunch.schemas.scraped import ScrapedItem, ScrapedRestaurant, ScrapedSection

__all__ = ["ScrapedItem", "ScrapedRestaurant", "ScrapedSection"]
