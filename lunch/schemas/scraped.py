"""Shape of the records emitted by the page extractor.

These mirror the JSON the extractor produces and are validated before being
mapped into ``lunch.models``.  Ids for sections and items are not part of the
scraped shape; they are generated on decode.
"""


from pydantic import BaseModel, ConfigDict, Field


class ScrapedItem(BaseModel):
    """A menu line as found on the page."""

    model_config = ConfigDict(extra="ignore")

    category: str
    name: str
    description: str | None = None
    price: str


class ScrapedSection(BaseModel):
    """A titled list of scraped menu lines."""

    model_config = ConfigDict(extra="ignore")

    title: str
    items: list[ScrapedItem]


class ScrapedRestaurant(BaseModel):
    """A restaurant block as found on the page."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1)
    name: str
    phone: str | None = None
    sections: list[ScrapedSection]
