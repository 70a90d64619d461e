"""Tests for per-field extraction from one container."""

import pytest

from trawl.data_types import SelectorHints
from trawl.extraction.fields import (
    extract_date,
    extract_field,
    extract_image,
    extract_link,
    extract_text,
    fallback_title,
)
from trawl.extraction.selectors import DATE, DESCRIPTION, PRICE, TITLE

PAGE_URL = "https://news.example.org/section/"
NO_HINTS = SelectorHints()


@pytest.fixture
def card(parse):
    page = parse(
        """
        <html><body>
        <div class="card">
            <h3>   </h3>
            <span class="title">Headline
               here</span>
            <p>First paragraph</p>
            <p>Second paragraph</p>
            <a>no href</a>
            <a href="story.html">Story</a>
            <img src="">
            <span class="date"></span>
            <time datetime="2024-02-29T10:00">  </time>
        </div>
        </body></html>
        """,
        PAGE_URL,
    )
    (container,) = page.query_css(".card")
    return container


def test_empty_match_falls_through_to_next_selector(card):
    # h3 matches but is blank, so .title wins.
    assert extract_field(card, TITLE, NO_HINTS) == "Headline here"


def test_only_first_match_per_selector(card):
    assert extract_text(card, ("p",)) == "First paragraph"


def test_hint_replaces_chain(card):
    hints = SelectorHints({"title": "p"})
    assert extract_field(card, TITLE, hints) == "First paragraph"


def test_hint_that_misses_yields_empty(card):
    hints = SelectorHints({"title": ".missing"})
    assert extract_field(card, TITLE, hints) == ""


def test_blank_hint_is_ignored(card):
    hints = SelectorHints({"title": "   "})
    assert extract_field(card, TITLE, hints) == "Headline here"


def test_description_truncated_to_200(parse):
    page = parse(
        f'<html><body><p class="summary">{"w" * 250}</p></body></html>'
    )
    assert extract_field(page, DESCRIPTION, NO_HINTS) == "w" * 200


def test_missing_field_is_empty_string(card):
    assert extract_field(card, PRICE, NO_HINTS) == ""


def test_malformed_hint_yields_empty(card):
    hints = SelectorHints({"price": "span["})
    assert extract_field(card, PRICE, hints) == ""


def test_link_uses_first_anchor_only(card):
    # The first <a> has no href; later anchors are not consulted.
    assert extract_link(card, NO_HINTS, PAGE_URL) == ""


def test_link_hint_resolves_relative(card):
    hints = SelectorHints({"link": "a[href]"})
    assert (
        extract_link(card, hints, PAGE_URL)
        == "https://news.example.org/section/story.html"
    )


def test_url_hint_is_an_alias_for_link(card):
    hints = SelectorHints({"url": "a[href]"})
    assert extract_link(card, hints, PAGE_URL).endswith("/story.html")


def test_image_falls_back_to_data_src(parse):
    page = parse(
        '<html><body><img src="" data-src="/lazy/pic.webp"></body></html>',
        PAGE_URL,
    )
    assert (
        extract_image(page, NO_HINTS, PAGE_URL)
        == "https://news.example.org/lazy/pic.webp"
    )


def test_image_without_source_is_empty(card):
    assert extract_image(card, NO_HINTS, PAGE_URL) == ""


def test_date_prefers_text_then_datetime_attribute(card):
    # .date is blank, .time is missing, <time> has only the attribute.
    assert extract_date(card, DATE, NO_HINTS) == "2024-02-29T10:00"


def test_date_text(parse):
    page = parse('<html><body><span class="time"> 3 May </span></body></html>')
    assert extract_date(page, DATE, NO_HINTS) == "3 May"


def test_fallback_title_joins_lines(parse):
    page = parse(
        '<html><body><div class="item"><span>Red</span>\n'
        "<span>big apple crate</span></div></body></html>"
    )
    (item,) = page.query_css(".item")

    assert fallback_title(item, 100) == "Red big apple crate"


def test_fallback_title_covers_whole_card(card):
    assert fallback_title(card, 100) == (
        "Headline here First paragraph Second paragraph no href Story"
    )


def test_fallback_title_truncates(parse):
    page = parse(f"<html><body><div>{'t' * 150}</div></body></html>")
    (div,) = page.query_css("div")
    assert fallback_title(div, 100) == "t" * 100


def test_fallback_title_of_empty_container(parse):
    page = parse("<html><body><div> </div></body></html>")
    (div,) = page.query_css("div")
    assert fallback_title(div, 100) == ""
