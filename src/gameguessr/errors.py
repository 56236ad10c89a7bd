"""Exception taxonomy for the game core.

The HTTP layer maps each of these onto a status code; inside the core they
propagate unchanged.
"""

from __future__ import annotations


class GameError(Exception):
    """Base class for every error raised deliberately by the game core."""


class MissingArguments(GameError):
    """A session id or a required input string was absent or empty."""


class SessionNotFound(GameError):
    """The session id resolves to nothing in the cache or the durable store."""

    def __init__(self, session_id: str):
        super().__init__("Session not found.")
        self.session_id = session_id


class InvalidSessionType(GameError):
    """The session exists but belongs to the other game mode."""

    def __init__(self, session_id: str, expected: str, actual: str):
        super().__init__(
            f"Invalid session type: expected '{expected}' session, got '{actual}'."
        )
        self.session_id = session_id
        self.expected = expected
        self.actual = actual


class GenerationError(GameError):
    """The structured generation client failed (network, API or parse error)."""


class NoHintData(GameError):
    """No hint source has data for the requested hint type."""

    def __init__(self, hint_type: str | None = None):
        super().__init__("No hint data available")
        self.hint_type = hint_type
