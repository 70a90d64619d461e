"""Shared fixtures: inline HTML pages and a page parser."""

from collections.abc import Callable

import pytest

from trawl.common.lxml_page_element import LxmlPageElement

PAGE_URL = "https://shop.example.com/catalog/"


@pytest.fixture
def parse() -> Callable[..., LxmlPageElement]:
    """Parse an HTML string into a page rooted at ``<html>``."""

    def _parse(content: str, url: str = PAGE_URL) -> LxmlPageElement:
        return LxmlPageElement.from_html(content, url)

    return _parse


@pytest.fixture
def product_html() -> str:
    """Product listing of three cards; the middle one has no real title."""
    return """
    <html>
    <head><title>Catalog</title></head>
    <body>
        <div class="product-card">
            <h2>  Blue
                Kettle </h2>
            <p class="description">Boils water quickly.</p>
            <a href="/items/kettle">Details</a>
            <img src="img/kettle.png">
            <span class="price">$19.99</span>
            <span class="category">Kitchen</span>
            <time datetime="2024-05-01"></time>
        </div>
        <div class="product-card">
            <span class="price">$2</span>
        </div>
        <div class="product-card">
            <h3>Toaster Deluxe</h3>
            <a href="https://other.example.com/toaster">Buy</a>
            <img data-src="//cdn.example.com/toaster.jpg">
            <span class="cost">$34.00</span>
            <span class="author">ACME</span>
        </div>
    </body>
    </html>
    """


@pytest.fixture
def rich_match_html() -> str:
    """Match listing without league labels on a Bundesliga page."""
    return """
    <html>
    <head><title>Bundesliga - Spieltag 5</title></head>
    <body>
        <h1>Results</h1>
        <div class="match-item">
            <span class="home-team">Bayern</span>
            <span class="away-team">Dortmund</span>
            <span class="score">2 - 1</span>
            <span class="halftime">1 - 0</span>
            <span class="match-date">2024-09-21</span>
        </div>
        <div class="match-item">
            <span class="home-team">Leipzig</span>
            <span class="away-team">Bremen</span>
        </div>
    </body>
    </html>
    """


@pytest.fixture
def fixed_match_html() -> str:
    """Two match containers using the default profile's class names."""
    return """
    <html>
    <body>
        <div class="match">
            <span class="home-team">Ajax</span>
            <span class="away-team">PSV</span>
            <span class="score">3-3</span>
        </div>
        <div class="match">
            <span class="home-team">Feyenoord</span>
            <span class="score">1-0</span>
        </div>
        <div class="match">
            <span class="note">Postponed</span>
        </div>
    </body>
    </html>
    """


@pytest.fixture
def unaligned_match_html() -> str:
    """Team names with no common container: 2 home, 3 away, 0 scores."""
    return """
    <html>
    <body>
        <ul class="left">
            <li><b class="home-team">Lazio</b></li>
            <li><b class="home-team">Roma</b></li>
        </ul>
        <ul class="right">
            <li><b class="away-team">Inter</b></li>
            <li><b class="away-team">Milan</b></li>
            <li><b class="away-team">Napoli</b></li>
        </ul>
    </body>
    </html>
    """


@pytest.fixture
def statistics_html() -> str:
    """Statistics table with a header row, 3-cell and 4-cell rows."""
    return """
    <html>
    <body>
        <table class="stats-table">
            <tr><th>Home</th><th>Statistic</th><th>Away</th></tr>
            <tr><td>55%</td><td>Possession</td><td>45%</td></tr>
            <tr><td>12</td><td>Shots</td><td>7</td><td>ignored</td></tr>
            <tr><td>only one cell</td></tr>
            <tr><td></td><td>Corners</td><td></td></tr>
        </table>
    </body>
    </html>
    """
