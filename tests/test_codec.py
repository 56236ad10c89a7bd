"""
Tests for session compaction.
"""

from datetime import datetime, timedelta, timezone

import pytest

from gameguessr.models.chat import ChatMessage
from gameguessr.models.session import (
    AIGuessSession,
    PlayerGuessSession,
    system_context_message,
)
from gameguessr.sessions.codec import decode, encode

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _player_session():
    session = PlayerGuessSession.create("Zelda")
    session.chat_history.append(
        ChatMessage(role="model", content={"type": "answer", "content": {"answer": "Yes"}})
    )
    session.question_count = 1
    session.used_hint = True
    return session


class TestEncode:

    def test_player_document_shape(self):
        doc = encode(_player_session(), now=NOW)

        assert doc["kind"] == "player"
        assert doc["data"]["s"] == "Zelda"
        assert doc["data"]["q"] == 1
        assert doc["data"]["uh"] is True
        assert doc["updated_at"] == NOW.isoformat()
        assert doc["expiresAt"] == (NOW + timedelta(hours=24)).isoformat()

    def test_context_turn_is_omitted(self):
        doc = encode(_player_session(), now=NOW)

        assert len(doc["data"]["h"]) == 1
        assert doc["data"]["h"][0]["role"] == "model"

    def test_non_canonical_first_turn_is_kept(self):
        session = PlayerGuessSession(
            secret_game="Zelda",
            chat_history=[ChatMessage(role="user", content="hello")],
        )
        doc = encode(session, now=NOW)
        assert doc["data"]["h"] == [{"role": "user", "content": "hello"}]

    def test_ai_document_shape(self):
        session = AIGuessSession(
            chat_history=[ChatMessage(role="user", content="Start the game.")],
            question_count=4,
        )
        doc = encode(session, now=NOW, ttl=timedelta(hours=1))

        assert doc["kind"] == "ai"
        assert doc["data"] == {
            "h": [{"role": "user", "content": "Start the game."}],
            "q": 4,
            "mq": 20,
        }
        assert doc["expiresAt"] == (NOW + timedelta(hours=1)).isoformat()


class TestDecode:

    def test_round_trip_player(self):
        original = _player_session()
        restored = decode(encode(original, now=NOW))

        assert isinstance(restored, PlayerGuessSession)
        assert restored == original
        assert restored.chat_history[0] == system_context_message("Zelda")

    def test_round_trip_ai(self):
        original = AIGuessSession(question_count=7, max_questions=15)
        assert decode(encode(original, now=NOW)) == original

    def test_document_with_full_history_loads_the_same(self):
        """Documents that kept the context turn do not get a second one."""
        original = _player_session()
        doc = encode(original, now=NOW)
        doc["data"]["h"].insert(0, system_context_message("Zelda").model_dump())

        restored = decode(doc)

        assert len(restored.chat_history) == 2
        assert restored == original

    def test_untagged_documents(self):
        player = decode({"data": {"s": "Zelda", "h": [], "q": 2, "uh": False}})
        ai = decode({"data": {"h": [], "q": 3}})

        assert isinstance(player, PlayerGuessSession)
        assert player.question_count == 2
        assert isinstance(ai, AIGuessSession)
        assert ai.max_questions == 20

    def test_missing_optional_fields(self):
        session = decode({"kind": "player", "data": {"s": "Zelda"}})
        assert session.question_count == 0
        assert session.used_hint is False
        assert len(session.chat_history) == 1

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            decode({"kind": "coop", "data": {}})
