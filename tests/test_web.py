"""Tests for the Flask JSON API."""
import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import web.app as web_app


@pytest.fixture
def client():
    web_app.reset_state()
    web_app.app.config["TESTING"] = True
    with web_app.app.test_client() as c:
        yield c
    web_app.reset_state()


class TestDecisionEndpoints:
    def test_decide_move(self, client):
        resp = client.post("/api/move", json={"opponent": "opp"})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["move"] in ("Rock", "Paper", "Scissors")
        assert data["choice"] in (1, 2, 3)

    def test_decide_move_requires_opponent(self, client):
        resp = client.post("/api/move", json={})
        assert resp.status_code == 400
        assert "opponent" in resp.get_json()["error"]

    def test_record_opponent_move(self, client):
        client.post("/api/opponent/move", json={"opponent": "opp", "move": "rock"})
        resp = client.post("/api/opponent/move", json={"opponent": "opp", "move": 2})
        assert resp.status_code == 200
        assert resp.get_json()["frequencies"] == {"Rock": 1, "Paper": 1, "Scissors": 0}

    def test_record_invalid_move(self, client):
        resp = client.post("/api/opponent/move", json={"opponent": "opp", "move": "lizard"})
        assert resp.status_code == 400

    def test_wager(self, client):
        resp = client.post("/api/wager", json={"balance": 200_000_000, "win_rate": 50})
        assert resp.get_json() == {"wager": 15_000_000}

    def test_wager_below_reserve(self, client):
        resp = client.post("/api/wager", json={"balance": 10, "win_rate": 50})
        assert resp.get_json() == {"wager": 0}

    def test_ratings(self, client):
        resp = client.post("/api/ratings", json={"winner_rating": 1200, "loser_rating": 1200})
        assert resp.get_json() == {"winner_rating": 1216, "loser_rating": 1184}

    def test_ratings_draw(self, client):
        resp = client.post("/api/ratings", json={"winner_rating": 1400, "loser_rating": 1200, "is_draw": True})
        assert resp.get_json() == {"winner_rating": 1392, "loser_rating": 1208}

    def test_resolve_coin_flip(self, client):
        resp = client.post("/api/coinflip/resolve", json={"choice_a": "heads", "choice_b": "tails", "result": "heads"})
        assert resp.get_json()["winner"] == "a"

    def test_resolve_coin_flip_bad_side(self, client):
        resp = client.post("/api/coinflip/resolve", json={"choice_a": "edge", "choice_b": "tails", "result": "heads"})
        assert resp.status_code == 400

    def test_play_rps_against_fixed_moves(self, client):
        resp = client.post("/api/rps/play", json={"moves": ["rock"], "opponent": "rock-bot"})
        data = resp.get_json()
        assert data["game"] == "rps"
        assert data["winner"] in ("agent", "rock-bot")
        assert "2" in data["score"]
        assert all(r["b"] == "Rock" for r in data["rounds"])


class TestArenaEndpoints:
    def create(self, client, name, address, style="adaptive"):
        return client.post("/api/agents/create", json={"name": name, "address": address, "style": style})

    def test_empty_status(self, client):
        data = client.get("/api/status").get_json()
        assert data == {"agents": [], "total_matches": 0}

    def test_create_agent(self, client):
        resp = self.create(client, "gladiator", "0xA")
        data = resp.get_json()
        assert data["success"]
        assert data["agent"]["rating"] == 1200
        assert data["agent"]["balance"] == 1_000_000_000

    def test_create_duplicate_agent(self, client):
        self.create(client, "gladiator", "0xA")
        assert self.create(client, "again", "0xA").status_code == 400

    def test_run_match(self, client):
        self.create(client, "gladiator", "0xA")
        self.create(client, "bot", "0xB", style="random")
        resp = client.post("/api/match/run", json={"player_a": "0xA", "player_b": "0xB", "game": "rps"})
        data = resp.get_json()
        assert data["success"]
        assert data["draw"] is False
        assert data["match"]["winner"] in ("gladiator", "bot")

        history = client.get("/api/history").get_json()
        assert len(history) == 1
        board = client.get("/api/leaderboard").get_json()
        assert [r["rating"] for r in board] == [1216, 1184]

    def test_run_match_missing_field(self, client):
        resp = client.post("/api/match/run", json={"player_a": "0xA"})
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Missing field: player_b"

    def test_internal_key_error_is_not_a_bad_request(self, client, monkeypatch):
        arena = web_app.get_arena()

        def broken_leaderboard():
            raise KeyError("stale-address")

        monkeypatch.setattr(arena, "get_leaderboard", broken_leaderboard)
        # TESTING propagates unhandled errors instead of mapping them to 400
        with pytest.raises(KeyError):
            client.get("/api/leaderboard")

    def test_run_match_unknown_agent(self, client):
        self.create(client, "gladiator", "0xA")
        resp = client.post("/api/match/run", json={"player_a": "0xA", "player_b": "0xZ"})
        assert resp.status_code == 400
