"""Clarifications for yes/no answers that would mislead the player.

Asking "Is it part of a series?" about a spin-off such as *Elder Scrolls
Online* has a truthful answer of "yes", yet the title has no numbered
sequel or prequel.  These heuristics detect that case and supply a note
that never mentions the title.
"""

from __future__ import annotations

import re
from typing import Optional

SERIES_AFFILIATION_CLARIFICATION = (
    "It's branded as part of a series but has no direct sequels or prequels."
)

_SERIES_RE = re.compile(r"(series|franchise)", re.IGNORECASE)
_DIGITS_RE = re.compile(r"[0-9]+")

ROMAN_NUMERALS = (
    " ii", " iii", " iv", " v", " vi", " vii", " viii", " ix",
    " x", " xi", " xii", " xiii", " xiv", " xv", " xvi",
)

SUBTITLE_KEYWORDS = (
    "online",
    "legends",
    "origins",
    "chronicles",
    "story",
    "stories",
    "tactics",
    "odyssey",
    "valhalla",
    "anniversary",
    "definitive",
)


def is_series_question(user_input: str) -> bool:
    return bool(_SERIES_RE.search(user_input))


def needs_series_affiliation_clarification(title: str) -> bool:
    lower = title.lower()
    if _DIGITS_RE.search(lower):
        return False
    words = f" {lower} "
    if any(f"{roman} " in words for roman in ROMAN_NUMERALS):
        return False
    return any(keyword in lower for keyword in SUBTITLE_KEYWORDS)


def get_clarification(secret_game: str, user_input: str) -> Optional[str]:
    """Return a clarification for *user_input*, or ``None`` if none applies."""
    if not is_series_question(user_input):
        return None
    if not needs_series_affiliation_clarification(secret_game):
        return None
    return SERIES_AFFILIATION_CLARIFICATION
