"""Tests for location matching."""

import pytest

from app.rank.location import is_any_location, location_matches, states_match


class TestLocationMatches:
    """Tests for the fuzzy location matcher."""

    def test_abbreviation_matches_full_state(self):
        assert location_matches("Houston, TX", "Houston, Texas") is True

    def test_full_state_matches_abbreviation(self):
        assert location_matches("Houston, Texas", "Houston, TX") is True

    def test_different_city_same_state(self):
        assert location_matches("Austin, TX", "Houston, TX") is False

    def test_state_only_substring(self):
        assert location_matches("Denver, CO", "CO") is True

    def test_business_contained_in_preference(self):
        assert location_matches("Denver", "Denver, CO") is True

    def test_case_insensitive(self):
        assert location_matches("AUSTIN, tx", "austin, TX") is True

    def test_surrounding_whitespace_ignored(self):
        assert location_matches("  Houston ,  TX ", "houston, texas") is True

    def test_same_city_different_state(self):
        assert location_matches("Portland, OR", "Portland, ME") is False

    def test_same_city_abbreviation_vs_other_full_name(self):
        assert location_matches("Portland, OR", "Portland, Maine") is False

    def test_two_abbreviations(self):
        assert location_matches("Miami, FL", "Miami, FL") is True

    def test_no_comma_and_no_substring(self):
        assert location_matches("Seattle", "Boston") is False

    def test_unknown_state_names_compared_directly(self):
        assert location_matches("Toronto, Ontario", "Toronto, Quebec") is False
        assert location_matches("Toronto, Ontario", "Toronto, Ontario") is True

    def test_multi_word_state(self):
        assert location_matches("Albany, NY", "Albany, New York") is True

    def test_empty_business_location_never_matches(self):
        assert location_matches("", "Austin, TX") is False
        assert location_matches("   ", "Austin, TX") is False


class TestStatesMatch:

    @pytest.mark.parametrize(
        "a,b",
        [("tx", "texas"), ("texas", "tx"), ("tx", "tx"), ("texas", "texas")],
    )
    def test_all_directions(self, a, b):
        assert states_match(a, b)

    def test_mismatch(self):
        assert not states_match("tx", "california")


class TestAnyLocation:

    @pytest.mark.parametrize("value", [None, "", "  ", "any", "Any", "Any Location"])
    def test_sentinels(self, value):
        assert is_any_location(value)

    def test_real_location(self):
        assert not is_any_location("Austin, TX")
