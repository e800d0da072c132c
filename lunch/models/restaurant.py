import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from lunch.models.menu_item import MenuItem, MenuSection

_SLUG_RE = re.compile(r"[^a-z0-9]")


def slugify(name: str) -> str:
    """Derive a stable restaurant id: lowercase, non-alphanumerics → ``-``.

    ``"Café Test"`` → ``"caf--test"``.  Applying it twice gives the same result.
    """
    return _SLUG_RE.sub("-", name.lower())


def _local(moment: datetime) -> datetime:
    # Naive datetimes are taken as local time
    return moment.astimezone()


def is_stale(fetched_at: datetime, now: datetime | None = None) -> bool:
    """True unless *fetched_at* falls on the same local calendar day as *now*."""
    current = _local(now) if now is not None else datetime.now().astimezone()
    return _local(fetched_at).date() != current.date()


class Restaurant(BaseModel):
    """A restaurant and its lunch menu for one fetch."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    phone: str | None = None
    image_url: str | None = Field(default=None, alias="imageURL")
    sections: list[MenuSection] = Field(default_factory=list)

    @property
    def all_menu_items(self) -> list[MenuItem]:
        """Every item across all sections, in order."""
        return [item for section in self.sections for item in section.items]


class LunchData(BaseModel):
    """The persisted snapshot of one successful fetch."""

    model_config = ConfigDict(populate_by_name=True)

    restaurants: list[Restaurant] = Field(default_factory=list)
    fetched_at: datetime = Field(alias="fetchedAt")

    def is_stale(self, now: datetime | None = None) -> bool:
        return is_stale(self.fetched_at, now)
