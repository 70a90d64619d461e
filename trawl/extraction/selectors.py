"""Built-in fallback selector tables.

Every fallback chain the engine uses lives here as data. Adding support for a
new page layout means extending a tuple or adding a ``MatchSiteProfile``, not
adding a branch to the engine.
"""

from __future__ import annotations

from dataclasses import dataclass

# =============================================================================
# Container families, tried in this order (sports only in sports mode)
# =============================================================================


@dataclass(frozen=True)
class SelectorFamily:
    """An ordered list of selectors tried until one yields a match.

    Attributes:
        name: Family name, used in logs.
        selectors: Selectors in priority order.
    """

    name: str
    selectors: tuple[str, ...]


SPORTS_FAMILY = SelectorFamily(
    "sports",
    (
        ".match-item",
        ".game-item",
        ".fixture",
        ".match-card",
        ".score-box",
        '[class*="match"]',
        '[class*="game"]',
        '[class*="fixture"]',
        '[class*="score"]',
    ),
)

PRODUCT_FAMILY = SelectorFamily(
    "product",
    (".product-item", ".product-card", ".product", "[data-product]", ".item"),
)

ARTICLE_FAMILY = SelectorFamily(
    "article",
    ("article", ".post", ".article", ".blog-post", ".news-item"),
)

GENERIC_FAMILY = SelectorFamily(
    "generic",
    (".card", ".box", ".item", ".entry", ".content-item"),
)

LIST_ITEM_SELECTOR = "li"
LIST_ITEM_MIN_COUNT = 3  # strictly more than this many

DENSITY_SELECTOR = "div"
DENSITY_MIN_LENGTH = 20  # exclusive
DENSITY_MAX_LENGTH = 500  # exclusive


# =============================================================================
# Field chains
# =============================================================================


@dataclass(frozen=True)
class FieldChain:
    """Fallback selectors for one logical record field.

    Attributes:
        field: Record attribute the chain populates.
        hint_keys: Hint keys that replace the chain, in priority order.
        selectors: Built-in selectors in priority order.
        max_length: Truncate the extracted text to this many characters.
    """

    field: str
    hint_keys: tuple[str, ...]
    selectors: tuple[str, ...]
    max_length: int | None = None


TITLE = FieldChain(
    "title",
    ("title",),
    ("h1", "h2", "h3", ".title", ".name", ".product-name", ".article-title"),
)
TITLE_FALLBACK_LENGTH = 100

DESCRIPTION = FieldChain(
    "description",
    ("description",),
    (".description", ".summary", ".excerpt", "p", ".content"),
    max_length=200,
)

LINK = FieldChain("url", ("link", "url"), ("a",))
IMAGE = FieldChain("image", ("image",), ("img",))
IMAGE_ATTRIBUTES = ("src", "data-src")

PRICE = FieldChain(
    "price", ("price",), (".price", ".cost", ".amount", '[class*="price"]')
)

CATEGORY = FieldChain(
    "category", ("category",), (".category", ".tag", ".label", ".type")
)

DATE = FieldChain("date", ("date",), (".date", ".time", "time", "[datetime]"))
DATE_ATTRIBUTE = "datetime"

AUTHOR = FieldChain(
    "author", ("author",), (".author", ".by", ".writer", ".creator")
)

GENERIC_TEXT_FIELDS = (PRICE, CATEGORY, AUTHOR)

# Sports fields (rich variant). The league chain answers to the ``title``
# hint and the match date chain to the ``date`` hint.
LEAGUE = FieldChain(
    "league",
    ("league", "title"),
    (
        ".league",
        ".competition",
        ".tournament",
        '[class*="league"]',
        '[class*="competition"]',
    ),
)

HOME_TEAM = FieldChain(
    "home_team",
    ("homeTeam",),
    (".home-team", ".team-home", '[class*="home"]', ".team:first-child"),
)

AWAY_TEAM = FieldChain(
    "away_team",
    ("awayTeam",),
    (".away-team", ".team-away", '[class*="away"]', ".team:last-child"),
)

SCORE = FieldChain(
    "score",
    ("score",),
    (
        ".score",
        ".result",
        ".final-score",
        '[class*="score"]',
        '[class*="result"]',
    ),
)

HALFTIME = FieldChain(
    "halftime",
    ("halftime",),
    (
        ".halftime",
        ".ht",
        ".half-time",
        '[class*="halftime"]',
        '[class*="ht"]',
    ),
)

MATCH_DATE = FieldChain(
    "match_date",
    ("matchDate", "date"),
    (
        ".date",
        ".time",
        ".match-date",
        ".match-time",
        '[class*="date"]',
        '[class*="time"]',
    ),
)

SPORTS_FIELDS = (LEAGUE, HOME_TEAM, AWAY_TEAM, SCORE, HALFTIME, MATCH_DATE)


# =============================================================================
# Fixed-selector match profile
# =============================================================================


@dataclass(frozen=True)
class MatchSiteProfile:
    """Stable class names of a site whose match markup is known.

    Each field selector may be overridden by the hint of the same name.

    Attributes:
        name: Profile name, used in logs.
        home_team: Selector for the home team name.
        away_team: Selector for the away team name.
        score: Selector for the score.
        containers: Structural container selectors, tried in order. A
            container only counts if it holds at least one field match.
    """

    name: str = "default"
    home_team: str = ".home-team"
    away_team: str = ".away-team"
    score: str = ".score"
    containers: tuple[str, ...] = (
        "div.match",
        "article.match",
        "section.match",
        ".match-item",
        ".match-card",
        ".match-row",
        ".fixture",
        'div[class*="match"]',
        'article[class*="match"]',
        'section[class*="match"]',
    )


DEFAULT_MATCH_PROFILE = MatchSiteProfile()


# =============================================================================
# Statistics tables
# =============================================================================

STATISTICS_TABLE_SELECTORS = (
    "table",
    ".statistics-table",
    ".stats-table",
    ".match-stats",
    '[class*="stat"]',
    '[class*="table"]',
)
STATISTICS_ROW_SELECTOR = "tr"
STATISTICS_CELL_SELECTOR = "th, td"
STATISTICS_MIN_ROWS = 1  # strictly more than this many
STATISTICS_MIN_CELLS = 2

STATISTICS_FALLBACK_SELECTORS = (
    '[class*="stat"]',
    '[class*="percent"]',
    '[class*="possession"]',
)
STATISTICS_FALLBACK_CATEGORY = "general"
PERCENT_SIGN = "%"
NON_CONTENT_TAGS = frozenset(
    {"script", "style", "noscript", "head", "title", "meta", "template"}
)
