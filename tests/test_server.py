from __future__ import annotations

import json

from fastapi.testclient import TestClient

from corporate_combat.server import create_app
from corporate_combat.session import GameSession
from corporate_combat.state import GameConfig


def _record() -> dict[str, object]:
    record = GameSession(GameConfig(seed=9)).to_record()
    record.pop("id")
    return record


def test_create_and_fetch_game() -> None:
    client = TestClient(create_app())

    response = client.post("/games", json=_record())
    assert response.status_code == 201
    created = response.json()
    assert created["id"] == 1
    assert len(created["playerHand"]) == 7

    fetched = client.get(f"/games/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["drawPile"] == created["drawPile"]


def test_missing_game_is_404() -> None:
    client = TestClient(create_app())
    response = client.get("/games/12")
    assert response.status_code == 404
    assert response.json()["detail"] == "Game not found"


def test_invalid_record_is_rejected() -> None:
    client = TestClient(create_app())
    record = _record()
    record["currentTurn"] = "spectator"
    assert client.post("/games", json=record).status_code == 422


def test_websocket_relays_updates() -> None:
    client = TestClient(create_app())
    game_id = client.post("/games", json=_record()).json()["id"]

    with client.websocket_connect("/ws") as websocket:
        websocket.send_text("garbage")
        assert websocket.receive_json() == {"type": "ERROR", "message": "Invalid message format"}

        websocket.send_text(
            json.dumps({"type": "UPDATE_GAME_STATE", "gameId": game_id, "state": {"gameStatus": "lost"}})
        )
        reply = websocket.receive_json()

    assert reply["type"] == "GAME_STATE_UPDATED"
    assert reply["state"]["gameStatus"] == "lost"
    assert client.get(f"/games/{game_id}").json()["gameStatus"] == "lost"


def test_websocket_survives_binary_frames() -> None:
    client = TestClient(create_app())
    game_id = client.post("/games", json=_record()).json()["id"]

    with client.websocket_connect("/ws") as websocket:
        websocket.send_bytes(b'{"type": "SHUFFLE"}')
        assert websocket.receive_json() == {"type": "ERROR", "message": "Unknown message type"}

        websocket.send_bytes(b"")
        assert websocket.receive_json() == {"type": "ERROR", "message": "Invalid message format"}

        websocket.send_bytes(
            json.dumps({"type": "UPDATE_GAME_STATE", "gameId": game_id, "state": {"currentTurn": "ai"}}).encode()
        )
        assert websocket.receive_json()["state"]["currentTurn"] == "ai"

        websocket.send_text(
            json.dumps({"type": "UPDATE_GAME_STATE", "gameId": game_id, "state": {"gameStatus": "won"}})
        )
        reply = websocket.receive_json()

    assert reply["type"] == "GAME_STATE_UPDATED"
    assert reply["state"]["gameStatus"] == "won"
