"""
Tests for the HTTP layer.

Tests:
- Request/response wire format
- Error mapping
- Session inspection and cache clearing
"""

import pytest
from fastapi.testclient import TestClient

from gameguessr.errors import GenerationError
from gameguessr.main import create_app
from gameguessr.models.metadata import GameMetadata
from gameguessr.models.responses import (
    AIGuess,
    AIQuestion,
    AnswerToGuess,
    AnswerToQuestion,
    GuessOutcome,
    YesNoClarification,
)


@pytest.fixture
def client(game_service) -> TestClient:
    return TestClient(create_app(game_service))


def _start_player(client) -> str:
    resp = client.post("/player-guesses/start")
    assert resp.status_code == 200
    return resp.json()["sessionId"]


class TestPlayerGuessesRoutes:

    def test_start_hides_secret(self, client):
        resp = client.post("/player-guesses/start")

        assert resp.status_code == 200
        assert list(resp.json()) == ["sessionId"]

    def test_question(self, client, generator):
        session_id = _start_player(client)
        generator.generate.return_value = AnswerToQuestion(
            content=YesNoClarification(answer="Yes", confidence=8)
        )

        resp = client.post("/player-guesses/question", json={"sessionId": session_id, "userInput": "Is it old?"})

        assert resp.status_code == 200
        assert resp.json() == {
            "type": "answer",
            "questionCount": 1,
            "content": {"answer": "Yes", "confidence": 8},
        }

    def test_guess_carries_score(self, client, generator):
        session_id = _start_player(client)
        generator.generate.return_value = AnswerToGuess(
            content=GuessOutcome(correct=True, response="Zelda")
        )

        resp = client.post("/player-guesses/question", json={"sessionId": session_id, "userInput": "Zelda?"})

        body = resp.json()
        assert body["type"] == "guessResult"
        assert body["content"]["score"] == 1
        assert body["content"]["usedHint"] is False

    def test_missing_arguments(self, client):
        resp = client.post("/player-guesses/question", json={"sessionId": "abc"})

        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_unknown_session(self, client):
        resp = client.post("/player-guesses/question", json={"sessionId": "nope", "userInput": "Is it old?"})

        assert resp.status_code == 404
        assert resp.json() == {"error": "Session not found."}

    def test_wrong_mode(self, client, generator):
        generator.generate.return_value = AIQuestion(content="Is it an RPG?")
        ai_id = client.post("/ai-guesses/start").json()["sessionId"]

        resp = client.post("/player-guesses/question", json={"sessionId": ai_id, "userInput": "Is it old?"})

        assert resp.status_code == 400

    def test_generation_failure(self, client, generator):
        session_id = _start_player(client)
        generator.generate.side_effect = GenerationError("provider down")

        resp = client.post("/player-guesses/question", json={"sessionId": session_id, "userInput": "Is it old?"})

        assert resp.status_code == 502

    def test_hint(self, client, metadata):
        session_id = _start_player(client)
        metadata.fetch_metadata.return_value = GameMetadata(publisher="Nintendo")

        resp = client.get(f"/player-guesses/{session_id}/hint", params={"hintType": "publisher"})

        assert resp.status_code == 200
        assert resp.json() == {"hintType": "publisher", "hintText": "The publisher is Nintendo."}

    def test_hint_without_data(self, client):
        session_id = _start_player(client)

        resp = client.get(f"/player-guesses/{session_id}/hint", params={"hintType": "developer"})

        assert resp.status_code == 404
        assert resp.json() == {"error": "No hint data available"}

    def test_invalid_hint_type(self, client):
        session_id = _start_player(client)
        resp = client.get(f"/player-guesses/{session_id}/hint", params={"hintType": "genre"})
        assert resp.status_code == 422


class TestAIGuessesRoutes:

    def test_full_round(self, client, generator):
        generator.generate.return_value = AIQuestion(content="Is it an RPG?")
        started = client.post("/ai-guesses/start").json()

        assert started["questionCount"] == 1
        assert started["aiResponse"] == {"type": "question", "content": "Is it an RPG?"}

        generator.generate.return_value = AIGuess(content=True, confidence=9)
        resp = client.post("/ai-guesses/answer", json={"sessionId": started["sessionId"], "userAnswer": "Yes"})

        assert resp.status_code == 200
        assert resp.json() == {
            "aiResponse": {"type": "guess", "content": True, "confidence": 9},
            "questionCount": 1,
        }


class TestSessionRoutes:

    def test_inspect_omits_secret(self, client):
        session_id = _start_player(client)

        resp = client.get(f"/sessions/{session_id}")

        assert resp.status_code == 200
        body = resp.json()
        assert body["kind"] == "player"
        assert body["usedHint"] is False
        assert "Zelda" not in resp.text

    def test_clear_sessions(self, client, game_service):
        session_id = _start_player(client)

        resp = client.delete("/sessions")

        assert resp.status_code == 204
        assert game_service.get_session(session_id) is None
        assert client.get(f"/sessions/{session_id}").status_code == 404

    def test_cleared_session_still_playable(self, client, generator):
        session_id = _start_player(client)
        client.delete("/sessions")
        generator.generate.return_value = AnswerToQuestion(content=YesNoClarification(answer="No"))

        resp = client.post("/player-guesses/question", json={"sessionId": session_id, "userInput": "Is it new?"})

        assert resp.json()["questionCount"] == 1


def test_info(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["name"] == "gameguessr"


class TestProviderRoutes:

    def test_list(self, client):
        body = client.get("/providers").json()
        assert set(body["providers"]) == {"openai", "anthropic", "groq"}
        assert "active" in body

    def test_unknown_provider_rejected(self, client):
        resp = client.put("/providers/active", json={"name": "llama.cpp"})
        assert resp.status_code == 400
