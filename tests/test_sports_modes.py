"""Tests for match records: the rich and fixed-selector variants."""

import pytest

from trawl.data_types import Record, SelectorHints
from trawl.extraction.modes import (
    ExtractionContext,
    FixedMatchMode,
    PageHeadingDetector,
    RichMatchMode,
    bundesliga_detector,
    pairing,
)
from trawl.extraction.selectors import MatchSiteProfile

PAGE_URL = "https://scores.example.com/today"


def context_for(page, hints=None):
    return ExtractionContext(page, SelectorHints(hints), PAGE_URL)


class TestRichMatchMode:
    """Tests for generic records enriched with match fields."""

    def test_match_fields(self, parse, rich_match_html):
        page = parse(rich_match_html, PAGE_URL)

        first, second = RichMatchMode().extract(context_for(page))

        assert first.id == "item-1"
        assert first.home_team == "Bayern"
        assert first.away_team == "Dortmund"
        assert first.score == "2 - 1"
        assert first.halftime == "1 - 0"
        assert first.match_date == first.date == "2024-09-21"
        assert first.description == "Bayern vs Dortmund"

        assert second.home_team == "Leipzig"
        assert second.score == ""

    def test_competition_detected_from_page_title(
        self, parse, rich_match_html
    ):
        page = parse(rich_match_html, PAGE_URL)

        records = RichMatchMode().extract(context_for(page))

        assert {record.league for record in records} == {"Bundesliga"}
        assert {record.title for record in records} == {"Bundesliga"}

    def test_detector_can_be_disabled(self, parse, rich_match_html):
        page = parse(rich_match_html, PAGE_URL)

        records = RichMatchMode(competition_detector=None).extract(
            context_for(page)
        )

        assert [record.league for record in records] == ["", ""]
        assert [record.title for record in records] == [
            "Bayern Dortmund 2 - 1 1 - 0 2024-09-21",
            "Leipzig Bremen",
        ]

    def test_league_element_wins_over_detector(self, parse):
        page = parse(
            """
            <html><head><title>Bundesliga</title></head><body>
                <div class="game-item">
                    <span class="competition">Premier League</span>
                    <span class="team-home">Arsenal</span>
                    <span class="team-away">Chelsea</span>
                </div>
            </body></html>
            """
        )

        (record,) = RichMatchMode().extract(context_for(page))

        assert record.league == record.title == "Premier League"
        assert record.description == "Arsenal vs Chelsea"

    def test_description_requires_both_teams(self, parse):
        page = parse(
            """
            <html><body>
                <div class="fixture">
                    <span class="home-team">Leeds</span>
                    <p>Kick-off moved</p>
                </div>
            </body></html>
            """
        )

        (record,) = RichMatchMode(competition_detector=None).extract(
            context_for(page)
        )

        # The generic chain fills the description left empty.
        assert record.description == "Kick-off moved"

    def test_title_hint_addresses_league(self, parse):
        page = parse(
            """
            <html><body>
                <div class="match-card">
                    <em>Serie A</em>
                    <span class="home-team">Lazio</span>
                </div>
            </body></html>
            """
        )

        (record,) = RichMatchMode(None).extract(
            context_for(page, {"title": "em"})
        )

        assert record.league == record.title == "Serie A"

    def test_inclusion(self):
        mode = RichMatchMode()

        assert mode.include(Record(title="Bundesliga"))
        assert mode.include(Record(score="1:1"))
        assert mode.include(Record(away_team="Hertha"))
        assert not mode.include(Record(title="abc", halftime="0:0"))


class TestPageHeadingDetector:
    def test_title_or_first_heading(self, parse):
        by_title = parse(
            "<html><head><title>1. Bundesliga</title></head>"
            "<body></body></html>"
        )
        by_heading = parse(
            "<html><body><h1>Bundesliga live</h1><h1>x</h1></body></html>"
        )
        second_heading = parse(
            "<html><body><h1>Scores</h1><h1>Bundesliga</h1></body></html>"
        )

        assert bundesliga_detector(by_title) == "Bundesliga"
        assert bundesliga_detector(by_heading) == "Bundesliga"
        assert bundesliga_detector(second_heading) == ""

    def test_literal_substring_only(self, parse):
        page = parse("<html><body><h1>bundesliga</h1></body></html>")
        assert bundesliga_detector(page) == ""

    def test_other_competitions(self, parse):
        page = parse("<html><body><h1>LaLiga Matchday 3</h1></body></html>")
        assert PageHeadingDetector("LaLiga")(page) == "LaLiga"


class TestFixedMatchMode:
    """Tests for the fixed-selector variant and positional zipping."""

    def test_containers_with_match_fields(self, parse, fixed_match_html):
        page = parse(fixed_match_html, PAGE_URL)

        records = FixedMatchMode().extract(context_for(page))

        assert [record.id for record in records] == ["match-1", "match-2"]
        ajax, feyenoord = records
        assert ajax.title == "Ajax - PSV"
        assert ajax.description == "Ajax vs PSV"
        assert ajax.score == "3-3"
        assert feyenoord.title == feyenoord.description == "Feyenoord"
        assert feyenoord.away_team == ""

    def test_zipping_uneven_lists(self, parse, unaligned_match_html):
        page = parse(unaligned_match_html, PAGE_URL)

        records = FixedMatchMode().extract(context_for(page))

        assert len(records) == 3
        assert [record.home_team for record in records] == [
            "Lazio",
            "Roma",
            "",
        ]
        assert [record.away_team for record in records] == [
            "Inter",
            "Milan",
            "Napoli",
        ]
        assert all(record.score == "" for record in records)
        assert records[2].id == "match-3"
        assert records[2].title == "Napoli"

    def test_zipping_with_nothing_to_zip(self, parse):
        page = parse("<html><body><p>No games today</p></body></html>")
        assert FixedMatchMode().extract(context_for(page)) == []

    def test_field_hints_override_profile(self, parse):
        page = parse(
            """
            <html><body>
                <div class="match">
                    <i class="h">Porto</i><i class="a">Braga</i>
                </div>
            </body></html>
            """
        )
        hints = {"homeTeam": ".h", "awayTeam": ".a"}

        (record,) = FixedMatchMode().extract(context_for(page, hints))

        assert record.title == "Porto - Braga"

    def test_container_hint_disables_zipping(
        self, parse, unaligned_match_html
    ):
        page = parse(unaligned_match_html, PAGE_URL)

        records = FixedMatchMode().extract(
            context_for(page, {"container": ".nothing-here"})
        )

        assert records == []

    def test_custom_profile(self, parse):
        page = parse(
            """
            <html><body>
                <section class="ev"><b class="t1">A</b><b class="t2">B</b>
                <b class="res">0:0</b></section>
                <div class="ev"><b class="t1">C</b><b class="t2">D</b>
                <b class="res">1:2</b></div>
            </body></html>
            """
        )
        profile = MatchSiteProfile(
            name="example",
            home_team=".t1",
            away_team=".t2",
            score=".res",
            containers=("div.ev",),
        )

        (record,) = FixedMatchMode(profile).extract(context_for(page))

        assert (record.home_team, record.away_team, record.score) == (
            "C",
            "D",
            "1:2",
        )

    def test_inclusion(self):
        mode = FixedMatchMode()

        assert mode.include(Record(score="0-0"))
        assert not mode.include(Record(title="Long enough title"))


@pytest.mark.parametrize(
    ("home", "away", "expected"),
    [
        ("A", "B", "A - B"),
        ("A", "", "A"),
        ("", "B", "B"),
        ("", "", ""),
    ],
)
def test_pairing(home, away, expected):
    assert pairing(home, away, " - ") == expected
