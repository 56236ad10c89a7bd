"""
Tests for series-affiliation clarifications.
"""

import pytest

from gameguessr.services.clarifications import (
    SERIES_AFFILIATION_CLARIFICATION,
    get_clarification,
    is_series_question,
    needs_series_affiliation_clarification,
)


class TestSeriesQuestion:

    @pytest.mark.parametrize("text", [
        "Is it part of a series?",
        "Does it belong to a big FRANCHISE?",
    ])
    def test_detects_series_questions(self, text):
        assert is_series_question(text)

    def test_other_questions(self):
        assert not is_series_question("Is it an RPG?")


class TestTitleHeuristic:

    @pytest.mark.parametrize("title", [
        "The Elder Scrolls Online",
        "Crisis Core: Final Fantasy Chronicles",
        "Assassin's Creed Valhalla",
        "Final Fantasy Tactics",
    ])
    def test_spin_off_titles(self, title):
        assert needs_series_affiliation_clarification(title)

    @pytest.mark.parametrize("title", [
        "Final Fantasy VII",
        "Borderlands 2",
        "Resident Evil 4",
        "Street Fighter II Legends",
        "Tetris",
    ])
    def test_numbered_or_plain_titles(self, title):
        assert not needs_series_affiliation_clarification(title)


def test_get_clarification():
    assert get_clarification("The Elder Scrolls Online", "Is it in a series?") == SERIES_AFFILIATION_CLARIFICATION
    assert get_clarification("The Elder Scrolls Online", "Is it an MMO?") is None
    assert get_clarification("Halo 3", "Is it in a series?") is None
