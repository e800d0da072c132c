import uuid

from pydantic import BaseModel, ConfigDict, Field


class MenuItem(BaseModel):
    """A single dish on a restaurant's lunch menu.

    ``category`` doubles as the display name when the page gives no
    separate dish name.  ``price`` is kept as the scraped text (``"7.50€"``).
    """

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    category: str
    name: str
    description: str | None = None
    price: str


class MenuSection(BaseModel):
    """An ordered group of menu items; ``title`` may be empty."""

    model_config = ConfigDict(frozen=True)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    title: str
    items: list[MenuItem] = Field(default_factory=list)
