"""Tests for the heuristic menu extractor."""

from scraper.extractor import HeuristicExtractor, parse_menu_line
from scraper.renderer import RenderedDocument

URL = "https://www.aland.com/lunch"


def _extract(html: str) -> list[dict]:
    return HeuristicExtractor().extract(RenderedDocument(url=URL, html=html))


def test_extract_single_restaurant(cafe_test_html: str) -> None:
    """Test the canonical one-block, one-line page."""
    restaurants = _extract(cafe_test_html)

    assert len(restaurants) == 1
    r = restaurants[0]
    assert r["id"] == "caf--test"
    assert r["name"] == "Café Test"
    assert r["phone"] is None
    assert len(r["sections"]) == 1
    assert r["sections"][0]["title"] == "Lunch"
    assert r["sections"][0]["items"] == [
        {
            "category": "Soup",
            "name": "Soup",
            "description": "Tomato soup",
            "price": "7.50€",
        }
    ]


def test_extract_empty_document() -> None:
    """Test that pages without qualifying blocks give no restaurants."""
    assert _extract("") == []
    assert _extract("<html><body><p>Closed for holidays</p></body></html>") == []


def test_extract_block_without_prices() -> None:
    """Test that a named block with no priced lines is not a restaurant."""
    html = "<div><h2>Hotel Arkipelag</h2><p>Lunch served 11-14</p></div>"
    assert _extract(html) == []


def test_extract_phone_number() -> None:
    """Test phone extraction from the block markup."""
    html = """
    <section>
      <h3>Pizzeria Mamma</h3>
      <p>Tel. +358 18 12345</p>
      <p>Pizza Margherita  Tomato, mozzarella  9,50 €</p>
    </section>
    """
    restaurants = _extract(html)

    assert len(restaurants) == 1
    assert restaurants[0]["phone"] == "+358 18 12345"
    item = restaurants[0]["sections"][0]["items"][0]
    assert item["category"] == "Pizza Margherita"
    assert item["description"] == "Tomato, mozzarella"
    assert item["price"] == "9,50 €"


def test_extract_name_from_class_hint() -> None:
    """Test that a class containing 'name' marks the restaurant name."""
    html = """
    <article>
      <span class="restaurant-name">Kvarnen</span>
      <ul><li>Fish  Fried perch with potatoes 12€</li></ul>
    </article>
    """
    restaurants = _extract(html)

    assert [r["name"] for r in restaurants] == ["Kvarnen"]
    assert restaurants[0]["sections"][0]["items"][0]["price"] == "12€"


def test_extract_table_rows() -> None:
    """Test that table rows are menu line candidates."""
    html = """
    <div>
      <h4>Bistro Bryggan</h4>
      <table>
        <tr><td>Salmon</td><td>  With dill sauce  </td><td>13.90€</td></tr>
      </table>
    </div>
    """
    restaurants = _extract(html)

    items = restaurants[0]["sections"][0]["items"]
    assert len(items) == 1
    assert items[0]["category"] == "Salmon"
    assert items[0]["description"] == "With dill sauce"


def test_extract_skips_repeated_names() -> None:
    """Test that a name already promoted in the pass is not emitted again."""
    html = """
    <section>
      <div><h2>Alfa</h2><p>Soup  Pea soup 8€</p></div>
      <div><h2>Beta</h2><p>Pasta  Carbonara 10€</p></div>
    </section>
    """
    restaurants = _extract(html)

    assert [r["name"] for r in restaurants] == ["Alfa", "Beta"]
    assert [r["id"] for r in restaurants] == ["alfa", "beta"]


def test_extract_rejects_bad_names() -> None:
    """Test the name length bounds."""
    too_short = "<div><h2>X</h2><p>Soup  Pea soup 8€</p></div>"
    too_long = f"<div><h2>{'x' * 101}</h2><p>Soup  Pea soup 8€</p></div>"

    assert _extract(too_short) == []
    assert _extract(too_long) == []


def test_extract_never_raises(monkeypatch) -> None:
    """Test that internal failures are swallowed into an empty result."""
    extractor = HeuristicExtractor()

    def boom(soup):
        raise RuntimeError("unexpected markup")

    monkeypatch.setattr(extractor, "_extract_from_soup", boom)
    assert extractor.extract(RenderedDocument(url=URL, html="<div></div>")) == []


def test_parse_menu_line_without_description() -> None:
    item = parse_menu_line("Lunch buffet 11,50€")

    assert item == {
        "category": "Lunch buffet",
        "name": "Lunch buffet",
        "description": None,
        "price": "11,50€",
    }


def test_parse_menu_line_splits_on_newlines() -> None:
    item = parse_menu_line("Vegetarian\nLentil curry 9€")

    assert item is not None
    assert item["category"] == "Vegetarian"
    assert item["description"] == "Lentil curry"


def test_parse_menu_line_rejections() -> None:
    """Test lines that must not become menu items."""
    assert parse_menu_line("Soup of the day") is None  # no price
    assert parse_menu_line("Te 2€") is None  # too short overall
    assert parse_menu_line("Ab  Pea soup 5€") is None  # category too short
    assert parse_menu_line("Buffet " + "x" * 500 + " 9€") is None  # too long
    assert parse_menu_line("Tea 2€") is not None


def test_parse_menu_line_ascii_digits_only() -> None:
    """Test that only ASCII digits form a price, while no-break spaces still count."""
    assert parse_menu_line("Curry  Chicken curry ٩€") is None

    item = parse_menu_line("Curry  Chicken curry 9,50\u00a0€")
    assert item is not None
    assert item["price"] == "9,50\u00a0€"
    assert item["description"] == "Chicken curry"


def test_extract_phone_ignores_non_ascii_digits() -> None:
    html = """
    <div>
      <h2>Bistro Bryggan</h2>
      <p>Tel. ٠١٨ ١٢ ٣٤٥٦</p>
      <p>Fish  Salmon with dill 12.90€</p>
    </div>
    """
    restaurants = _extract(html)

    assert restaurants[0]["phone"] is None
