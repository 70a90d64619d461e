"""Tests for generic listing records."""

import pytest

from trawl.data_types import Record, SelectorHints
from trawl.extraction.modes import ExtractionContext, GenericMode

PAGE_URL = "https://shop.example.com/catalog/"


@pytest.fixture
def records(parse, product_html):
    page = parse(product_html, PAGE_URL)
    context = ExtractionContext(page, SelectorHints(), PAGE_URL)
    return GenericMode().extract(context)


def test_short_titles_are_dropped_without_renumbering(records):
    assert [record.id for record in records] == ["item-1", "item-3"]


def test_first_card_fields(records):
    kettle = records[0]

    assert kettle.title == "Blue Kettle"
    assert kettle.description == "Boils water quickly."
    assert kettle.url == "https://shop.example.com/items/kettle"
    assert kettle.image == "https://shop.example.com/catalog/img/kettle.png"
    assert kettle.price == "$19.99"
    assert kettle.category == "Kitchen"
    assert kettle.date == "2024-05-01"
    assert kettle.author == ""


def test_second_card_uses_later_fallbacks(records):
    toaster = records[1]

    assert toaster.title == "Toaster Deluxe"
    assert toaster.description == ""
    assert toaster.url == "https://other.example.com/toaster"
    assert toaster.image == "https://cdn.example.com/toaster.jpg"
    assert toaster.price == "$34.00"
    assert toaster.author == "ACME"


def test_sports_fields_stay_empty(records):
    for record in records:
        assert record.home_team == record.away_team == record.score == ""


def test_inclusion_is_exactly_title_longer_than_three():
    mode = GenericMode()

    assert not mode.include(Record(title="abc"))
    assert mode.include(Record(title="abcd"))
    assert not mode.include(Record(price="$5", url="https://x.example/"))


def test_title_falls_back_to_container_text(parse):
    page = parse(
        """
        <html><body>
            <div class="entry">
                Plain text entry without headings
                second line
            </div>
        </body></html>
        """
    )
    context = ExtractionContext(page, SelectorHints(), PAGE_URL)

    (record,) = GenericMode().extract(context)

    assert record.title == "Plain text entry without headings second line"


def test_multi_line_container_is_kept(parse):
    # "Red" alone is too short to pass the title filter.
    page = parse(
        '<html><body><div class="item"><span>Red</span>\n'
        "<span>big apple crate</span></div></body></html>"
    )
    context = ExtractionContext(page, SelectorHints(), PAGE_URL)

    (record,) = GenericMode().extract(context)

    assert record.id == "item-1"
    assert record.title == "Red big apple crate"


def test_page_without_containers_yields_nothing(parse):
    page = parse("<html><body><p>Nothing to see</p></body></html>")
    context = ExtractionContext(page, SelectorHints(), PAGE_URL)

    assert GenericMode().extract(context) == []
