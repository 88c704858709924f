"""
SolArena Web API - Flask JSON endpoints over the decision engine and arena.
Run with: python -m web.app
"""
import sys
import os
import logging
import threading

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from flask import Flask, jsonify, request
from agent.config import Config
from agent.strategy_engine import FixedStrategy, RandomStrategy
from arena.core import ArenaCore
from arena.manager import ArenaManager
from games.base import ArenaError, GameType, InvalidInputError

app = Flask(__name__)
logger = logging.getLogger("solarena.web")

# Global state
core: ArenaCore | None = None
arena: ArenaManager | None = None
arena_lock = threading.Lock()


def get_core() -> ArenaCore:
    global core
    if core is None:
        core = ArenaCore.from_config(Config())
    return core


def get_arena() -> ArenaManager:
    """Get or create the arena manager."""
    global arena
    if arena is None:
        arena = ArenaManager(Config())
    return arena


def reset_state():
    global core, arena
    with arena_lock:
        core = None
        arena = None


def _body() -> dict:
    return request.get_json(silent=True) or {}


@app.errorhandler(ArenaError)
@app.errorhandler(ValueError)
def handle_bad_input(e):
    return jsonify({"error": str(e)}), 400


def _require(data: dict, key: str):
    if key not in data:
        raise InvalidInputError(f"Missing field: {key}")
    return data[key]


# --- Decision engine ---

@app.route("/api/move", methods=["POST"])
def api_decide_move():
    data = _body()
    with arena_lock:
        move = get_core().decide_move(
            _require(data, "opponent"),
            int(data.get("agent_score", 0)),
            int(data.get("opponent_score", 0)),
        )
    return jsonify({"move": move.label, "choice": move.value})


@app.route("/api/opponent/move", methods=["POST"])
def api_record_move():
    data = _body()
    opponent = _require(data, "opponent")
    with arena_lock:
        engine = get_core()
        engine.record_opponent_move(opponent, _require(data, "move"))
        freq = engine.opponent_model.frequencies(opponent)
    return jsonify({
        "opponent": opponent,
        "frequencies": {m.label: n for m, n in freq.items()},
    })


@app.route("/api/wager", methods=["POST"])
def api_wager():
    data = _body()
    amount = get_core().compute_wager(
        int(_require(data, "balance")),
        float(_require(data, "win_rate")),
    )
    return jsonify({"wager": amount})


@app.route("/api/ratings", methods=["POST"])
def api_ratings():
    data = _body()
    update = get_core().update_ratings(
        int(_require(data, "winner_rating")),
        int(_require(data, "loser_rating")),
        bool(data.get("is_draw", False)),
    )
    return jsonify({
        "winner_rating": update.winner_rating,
        "loser_rating": update.loser_rating,
    })


@app.route("/api/coinflip/resolve", methods=["POST"])
def api_resolve_coin_flip():
    data = _body()
    result = get_core().resolve_coin_flip(
        _require(data, "choice_a"),
        _require(data, "choice_b"),
        _require(data, "result"),
    )
    return jsonify(result.to_dict())


@app.route("/api/rps/play", methods=["POST"])
def api_play_rps():
    """Play the core strategy against a fixed move cycle, or a random bot."""
    data = _body()
    opponent = data.get("opponent", "web-opponent")
    if data.get("moves"):
        bot = FixedStrategy(data["moves"])
    else:
        bot = RandomStrategy()
    with arena_lock:
        engine = get_core()
        result = engine.play_rps_match(engine.strategy, bot, player_a="agent", player_b=opponent)
    return jsonify(result.to_dict())


# --- Arena ---

@app.route("/api/status")
def api_status():
    """Arena status overview."""
    mgr = get_arena()
    return jsonify({
        "agents": mgr.get_leaderboard(),
        "total_matches": len(mgr.match_history),
    })


@app.route("/api/leaderboard")
def api_leaderboard():
    return jsonify(get_arena().get_leaderboard())


@app.route("/api/history")
def api_history():
    return jsonify(get_arena().get_match_history())


@app.route("/api/agents/create", methods=["POST"])
def api_create_agent():
    data = _body()
    address = data.get("address") or f"agent-{os.urandom(8).hex()}"
    with arena_lock:
        agent = get_arena().create_agent(
            data.get("name", "Agent"),
            address,
            style=data.get("style", "adaptive"),
            initial_balance=int(data.get("balance", 1_000_000_000)),
        )
    return jsonify({
        "success": True,
        "agent": {
            "name": agent.name,
            "address": agent.address,
            "style": agent.style,
            "balance": agent.bankroll.balance,
            "rating": agent.rating,
        },
    })


@app.route("/api/match/run", methods=["POST"])
def api_run_match():
    data = _body()
    game_type = GameType.COIN_FLIP if data.get("game") == "coinflip" else GameType.RPS
    wager = data.get("wager")
    with arena_lock:
        mgr = get_arena()
        result = mgr.run_match(
            _require(data, "player_a"),
            _require(data, "player_b"),
            game_type,
            int(wager) if wager is not None else None,
        )
        entry = mgr.get_match_history()[-1]
    logger.info(f"Web match {entry['match']}: {entry['winner']}")
    return jsonify({"success": True, "match": entry, "draw": result.is_draw})


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    port = int(os.getenv("PORT", "5000"))
    app.run(host="0.0.0.0", port=port, debug=False)
