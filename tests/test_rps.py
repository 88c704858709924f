"""Tests for the best-of-three RPS engine."""
import sys
import os
import random
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from agent.opponent_model import OpponentModel
from agent.strategy_engine import FixedStrategy, MoveStrategy, RandomStrategy
from games.base import GameResult, GameType, InvalidInputError, MatchStateError, Move
from games.rps import (
    MatchState, RPSGame, RPSMatch, RoundWinner, play_rps_match, resolve_round,
)

R, P, S = Move.ROCK, Move.PAPER, Move.SCISSORS


class TestMove:
    def test_parse_variants(self):
        assert Move.parse(R) is R
        assert Move.parse(2) is P
        assert Move.parse("scissors") is S
        assert Move.parse(" Rock ") is R

    @pytest.mark.parametrize("value", [0, 4, "lizard", "", None, True, 2.5])
    def test_parse_rejects_out_of_range(self, value):
        with pytest.raises(InvalidInputError):
            Move.parse(value)

    def test_invalid_input_is_a_value_error(self):
        with pytest.raises(ValueError):
            Move.parse("spock")


class TestResolveRound:
    def test_beats_relation(self):
        assert resolve_round(R, S) is RoundWinner.A
        assert resolve_round(P, R) is RoundWinner.A
        assert resolve_round(S, P) is RoundWinner.A
        assert resolve_round(S, R) is RoundWinner.B
        assert resolve_round(R, P) is RoundWinner.B
        assert resolve_round(P, S) is RoundWinner.B

    def test_equal_moves_draw(self):
        for move in (R, P, S):
            assert resolve_round(move, move) is RoundWinner.DRAW

    def test_accepts_raw_values(self):
        assert resolve_round(1, "scissors") is RoundWinner.A

    def test_rejects_invalid(self):
        with pytest.raises(InvalidInputError):
            resolve_round(R, 7)


class TestRPSMatch:
    def test_sweep_ends_after_two_rounds(self):
        match = RPSMatch()
        match.play_round(P, R)
        assert match.state is MatchState.IN_PROGRESS
        match.play_round(S, P)
        assert match.state is MatchState.DECIDED_A
        assert match.finished
        assert len(match.rounds) == 2

    def test_draw_changes_nothing(self):
        match = RPSMatch()
        outcome = match.play_round(R, R)
        assert outcome.winner is RoundWinner.DRAW
        assert (match.score_a, match.score_b) == (0, 0)
        assert match.state is MatchState.IN_PROGRESS

    def test_three_decided_rounds(self):
        match = RPSMatch(player_a="x", player_b="y")
        match.play_round(R, P)
        match.play_round(R, S)
        match.play_round(S, S)
        match.play_round(S, R)
        assert match.state is MatchState.DECIDED_B
        assert match.decided_rounds == 3

        result = match.result()
        assert result.winner == "y"
        assert result.loser == "x"
        assert result.final_score == (1, 2)
        assert result.score == "1-2"
        assert len(result.rounds) == 4

    def test_no_play_after_decision(self):
        match = RPSMatch()
        match.play_round(R, S)
        match.play_round(R, S)
        with pytest.raises(MatchStateError):
            match.play_round(R, S)

    def test_no_result_while_in_progress(self):
        match = RPSMatch()
        match.play_round(R, S)
        with pytest.raises(MatchStateError):
            match.result()


class TestPlayRPSMatch:
    def test_fixed_sweep(self):
        result = play_rps_match(FixedStrategy([R]), FixedStrategy([S]))
        assert result.winner == "a"
        assert result.final_score == (2, 0)
        assert len(result.rounds) == 2

    def test_draws_are_replayed(self):
        result = play_rps_match(FixedStrategy([R]), FixedStrategy([R, S]))
        winners = [r.winner for r in result.rounds]
        assert winners == [RoundWinner.DRAW, RoundWinner.A, RoundWinner.DRAW, RoundWinner.A]
        assert result.final_score == (2, 0)

    def test_round_cap(self):
        with pytest.raises(MatchStateError):
            play_rps_match(FixedStrategy([P]), FixedStrategy([P]), max_rounds=10)

    @pytest.mark.parametrize("seed", range(25))
    def test_always_terminates_with_one_winner(self, seed):
        model = OpponentModel()
        adaptive = MoveStrategy(model, rng=random.Random(seed))
        bot = RandomStrategy(rng=random.Random(seed + 1000))

        result = play_rps_match(adaptive, bot, player_a="agent", player_b="bot")

        assert sorted(result.final_score)[1] == 2
        assert sorted(result.final_score)[0] <= 1
        assert sum(result.final_score) <= 3
        assert len(result.rounds) <= 1000
        assert result.winner == ("agent" if result.final_score[0] == 2 else "bot")

    def test_history_grows_one_move_per_round(self):
        model_a, model_b = OpponentModel(), OpponentModel()
        a = MoveStrategy(model_a, rng=random.Random(1))
        b = MoveStrategy(model_b, rng=random.Random(2))

        first = play_rps_match(a, b, player_a="alice", player_b="bob")
        assert model_a.history("bob") == tuple(r.move_b for r in first.rounds)
        assert model_b.history("alice") == tuple(r.move_a for r in first.rounds)

        second = play_rps_match(a, b, player_a="alice", player_b="bob")
        assert len(model_a.history("bob")) == len(first.rounds) + len(second.rounds)

    def test_adaptive_beats_a_rock_bot(self):
        model = OpponentModel()
        model.record("bot", R)
        adaptive = MoveStrategy(model, rng=random.Random(0))
        result = play_rps_match(adaptive, FixedStrategy([R]), player_a="agent", player_b="bot")
        assert result.winner == "agent"
        assert result.final_score == (2, 0)

    def test_to_dict(self):
        result = play_rps_match(FixedStrategy([P]), FixedStrategy([R]), "x", "y")
        record = result.to_dict()
        assert record["game"] == "rps"
        assert record["winner"] == "x"
        assert record["score"] == "2-0"
        assert record["rounds"][0] == {"a": "Paper", "b": "Rock", "result": "a"}


class TestRPSGame:
    def test_play_returns_game_result(self):
        game = RPSGame(strategies={
            "0xA": FixedStrategy([S]),
            "0xB": FixedStrategy([P]),
        })
        assert game.get_state_summary() == "RPS: not started"

        result = game.play("0xA", "0xB", wager=1_000_000)
        assert isinstance(result, GameResult)
        assert result.game_type == GameType.RPS
        assert result.winner == "0xA"
        assert result.loser == "0xB"
        assert not result.is_draw
        assert result.rounds_played == 2
        assert result.details["score"] == "2-0"
        assert result.details["rounds"] == ["ScissorsvPaper", "ScissorsvPaper"]
        assert "won 2-0" in game.get_state_summary()
