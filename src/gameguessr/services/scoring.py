from __future__ import annotations

FULL_SCORE = 1.0
HINTED_SCORE = 0.5
NO_SCORE = 0.0


def calculate_score(correct: bool, used_hint: bool) -> float:
    """Score a judged guess.

    A correct guess earns 1, halved if any hint was requested during the
    session; an incorrect guess earns 0 regardless of hints.
    """
    if not correct:
        return NO_SCORE
    return HINTED_SCORE if used_hint else FULL_SCORE
