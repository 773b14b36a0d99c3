"""Tests for the HTTP adapter: lobby, snapshot, board and commands."""

import pytest
from fastapi.testclient import TestClient

from engine.game import create_game


@pytest.fixture
def client():
    """Create a test client backed by a fresh, seeded game."""
    from main import app

    old_game = app.state.game
    app.state.game = create_game("test", seed=5)
    yield TestClient(app)
    app.state.game = old_game


def _start(client, count: int = 2) -> None:
    resp = client.post("/game/setup", json={"player_count": count})
    assert resp.status_code == 200
    for character_id in ("warrior", "mage", "archer")[:count]:
        resp = client.post("/game/select", json={"character_id": character_id})
        assert resp.status_code == 200


class TestServerInfo:
    """Tests for / and /health."""

    def test_root(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["status"] == "running"

    def test_health(self, client):
        assert client.get("/health").json() == {"healthy": True}


class TestLobby:
    """Tests for setup, character select and reset."""

    def test_characters_listed(self, client):
        resp = client.get("/game/characters")
        assert resp.status_code == 200
        assert [c["id"] for c in resp.json()] == ["warrior", "mage", "archer", "rogue", "paladin", "druid"]

    def test_bad_player_count(self, client):
        resp = client.post("/game/setup", json={"player_count": 9})
        assert resp.status_code == 400
        assert "between" in resp.json()["detail"]

    def test_select_and_start(self, client):
        _start(client)
        state = client.get("/game/state").json()
        assert state["phase"] == "playing"
        assert state["current_player_id"] == 0
        assert state["monsters_left"] == 5
        assert state["players_left"] == 2
        assert state["combat"] is None

    def test_taken_character_rejected(self, client):
        client.post("/game/setup", json={"player_count": 2})
        client.post("/game/select", json={"character_id": "mage"})
        resp = client.post("/game/select", json={"character_id": "mage"})
        assert resp.status_code == 400

    def test_reset(self, client):
        _start(client)
        resp = client.post("/game/reset")
        assert resp.status_code == 200
        assert client.get("/game/state").json()["phase"] == "setup"


class TestBoard:
    """Tests for /board and /tiles."""

    def test_board_shape(self, client):
        _start(client)
        board = client.get("/game/board").json()
        assert board["size"] == 15
        assert len(board["tiles"]) == 15
        assert all(len(row) == 15 for row in board["tiles"])
        assert board["tiles"][0][0]["type"] == "obstacle"

    def test_tile(self, client):
        _start(client)
        tile = client.get("/game/tiles/1/1").json()
        assert tile["type"] == "player"
        assert tile["occupant_id"] == 0
        assert tile["clickable"] is False

    def test_tile_off_board(self, client):
        resp = client.get("/game/tiles/15/3")
        assert resp.status_code == 404


class TestActions:
    """Tests for POST /action."""

    def test_roll_movement(self, client):
        _start(client)
        resp = client.post("/game/action", json={"action_type": "roll_movement", "player_id": 0})
        assert resp.status_code == 200
        data = resp.json()
        assert data["success"] is True
        assert 1 <= data["dice_value"] <= 6
        assert client.get("/game/state").json()["moves_left"] == data["dice_value"]

    def test_rejected_action(self, client):
        _start(client)
        resp = client.post("/game/action", json={"action_type": "roll_for_attack"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "There is no combat in progress"

    def test_move_rejected_before_roll(self, client):
        _start(client)
        resp = client.post("/game/action", json={"action_type": "move", "target_position": [1, 2]})
        assert resp.status_code == 400

    def test_end_turn_and_log(self, client):
        _start(client)
        resp = client.post("/game/action", json={"action_type": "end_turn"})
        assert resp.status_code == 200
        assert resp.json()["turn_ended"] is True
        assert client.get("/game/state").json()["current_player_id"] == 1

        log = client.get("/game/log").json()
        assert log[-1]["action_type"] == "end_turn"
        assert client.get("/game/history").json() == []

    def test_combat_endpoint(self, client):
        from main import app

        _start(client)
        assert client.get("/game/combat").status_code == 404

        game = app.state.game
        monster = game.monsters[0]
        game.players[0].position = (monster.position[0], monster.position[1] - 1)
        resp = client.post("/game/action", json={"action_type": "start_combat", "monster_id": monster.id})
        assert resp.status_code == 200

        combat = client.get("/game/combat").json()
        assert combat["actor_id"] == 0
        assert combat["is_pvp"] is False
        assert combat["target"]["kind"] == "monster"
        assert combat["stage"] == "awaiting_roll"

    def test_players_and_monsters(self, client):
        _start(client)
        players = client.get("/game/players").json()
        assert [p["character"] for p in players] == ["warrior", "mage"]
        monsters = client.get("/game/monsters").json()
        assert len(monsters) == 5
        assert all(not m["defeated"] for m in monsters)
