"""
Tests for guess scoring.
"""

import pytest

from gameguessr.services.scoring import calculate_score


@pytest.mark.parametrize(
    "correct, used_hint, expected",
    [
        (True, False, 1.0),
        (True, True, 0.5),
        (False, False, 0.0),
        (False, True, 0.0),
    ],
)
def test_calculate_score(correct, used_hint, expected):
    assert calculate_score(correct, used_hint) == expected
