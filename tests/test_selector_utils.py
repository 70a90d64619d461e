"""Tests for selector utility functions.

Tests CSS to descendant XPath translation and the first_non_empty
combinator shared by every fallback chain.
"""

import pytest
from cssselect import SelectorError

from trawl.common.selector_utils import (
    css_to_descendant_xpath,
    first_non_empty,
)


class TestCssToDescendantXpath:
    """Tests for css_to_descendant_xpath function."""

    def test_tag_selector(self):
        assert css_to_descendant_xpath("li") == "descendant::li"

    def test_never_matches_self(self):
        assert not css_to_descendant_xpath(".card").startswith(
            "descendant-or-self"
        )

    def test_group_selector_prefixes_each_branch(self):
        xpath = css_to_descendant_xpath("th, td")
        assert xpath == "descendant::th | descendant::td"

    def test_invalid_selector_raises(self):
        with pytest.raises(SelectorError):
            css_to_descendant_xpath("div[")


class TestFirstNonEmpty:
    """Tests for first_non_empty function."""

    def test_returns_first_truthy_result(self):
        assert first_non_empty(["", "a", "b"], str.upper) == "A"

    def test_all_empty_returns_none(self):
        assert first_non_empty(["", ""], str.upper) is None

    def test_no_candidates(self):
        assert first_non_empty([], str.upper) is None

    def test_stops_at_first_match(self):
        seen = []

        def matcher(candidate):
            seen.append(candidate)
            return [candidate] if candidate > 1 else []

        assert first_non_empty([0, 1, 2, 3], matcher) == [2]
        assert seen == [0, 1, 2]
