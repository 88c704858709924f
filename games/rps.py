"""
Rock-Paper-Scissors best-of-three engine for SolArena.

Draws are replayed and never score; the match ends the moment either side
reaches two round wins.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum

from .base import DRAW, GameBase, GameResult, GameType, MatchStateError, Move

logger = logging.getLogger("solarena.rps")

WINS_NEEDED = 2
MAX_ROUNDS = 1000


class RoundWinner(Enum):
    A = "a"
    B = "b"
    DRAW = DRAW


class MatchState(Enum):
    IN_PROGRESS = "in_progress"
    DECIDED_A = "decided_a"
    DECIDED_B = "decided_b"


def resolve_round(move_a, move_b) -> RoundWinner:
    """Pure beats-relation lookup."""
    move_a, move_b = Move.parse(move_a), Move.parse(move_b)
    if move_a is move_b:
        return RoundWinner.DRAW
    return RoundWinner.A if move_a.beats(move_b) else RoundWinner.B


@dataclass(frozen=True)
class RoundOutcome:
    move_a: Move
    move_b: Move
    winner: RoundWinner


@dataclass
class MatchResult:
    """Outcome of one best-of-three match."""
    player_a: str
    player_b: str
    rounds: list[RoundOutcome]
    final_score: tuple[int, int]
    winner: str

    @property
    def loser(self) -> str:
        return self.player_b if self.winner == self.player_a else self.player_a

    @property
    def score(self) -> str:
        return f"{self.final_score[0]}-{self.final_score[1]}"

    def to_dict(self) -> dict:
        return {
            "game": "rps",
            "player_a": self.player_a,
            "player_b": self.player_b,
            "winner": self.winner,
            "score": self.score,
            "rounds": [
                {"a": r.move_a.label, "b": r.move_b.label, "result": r.winner.value}
                for r in self.rounds
            ],
        }


@dataclass
class RPSMatch:
    """Best-of-three state machine driven by resolved rounds."""
    player_a: str = "a"
    player_b: str = "b"
    score_a: int = 0
    score_b: int = 0
    rounds: list[RoundOutcome] = field(default_factory=list)

    @property
    def state(self) -> MatchState:
        if self.score_a >= WINS_NEEDED:
            return MatchState.DECIDED_A
        if self.score_b >= WINS_NEEDED:
            return MatchState.DECIDED_B
        return MatchState.IN_PROGRESS

    @property
    def finished(self) -> bool:
        return self.state is not MatchState.IN_PROGRESS

    @property
    def decided_rounds(self) -> int:
        return self.score_a + self.score_b

    def play_round(self, move_a, move_b) -> RoundOutcome:
        if self.finished:
            raise MatchStateError(f"Match already decided ({self.score_a}-{self.score_b})")

        move_a, move_b = Move.parse(move_a), Move.parse(move_b)
        outcome = RoundOutcome(move_a, move_b, resolve_round(move_a, move_b))
        if outcome.winner is RoundWinner.A:
            self.score_a += 1
        elif outcome.winner is RoundWinner.B:
            self.score_b += 1
        self.rounds.append(outcome)
        return outcome

    def result(self) -> MatchResult:
        if not self.finished:
            raise MatchStateError("Match still in progress")
        winner = self.player_a if self.state is MatchState.DECIDED_A else self.player_b
        return MatchResult(
            player_a=self.player_a,
            player_b=self.player_b,
            rounds=list(self.rounds),
            final_score=(self.score_a, self.score_b),
            winner=winner,
        )


def play_rps_match(
    strategy_a,
    strategy_b,
    player_a: str = "a",
    player_b: str = "b",
    max_rounds: int = MAX_ROUNDS,
) -> MatchResult:
    """
    Play one best-of-three match between two strategies.

    Strategies expose ``choose(opponent, my_score, their_score)`` and
    ``observe(opponent, move)``; each observes the other side's move after
    every round, draws included.

    Raises:
        MatchStateError: if `max_rounds` rounds pass without a decision
    """
    match = RPSMatch(player_a=player_a, player_b=player_b)

    while not match.finished:
        if len(match.rounds) >= max_rounds:
            raise MatchStateError(f"No decision after {max_rounds} rounds")

        move_a = strategy_a.choose(player_b, match.score_a, match.score_b)
        move_b = strategy_b.choose(player_a, match.score_b, match.score_a)
        outcome = match.play_round(move_a, move_b)

        strategy_a.observe(player_b, outcome.move_b)
        strategy_b.observe(player_a, outcome.move_a)

        logger.debug(
            f"  Round {len(match.rounds)}: {outcome.move_a.label} vs {outcome.move_b.label} "
            f"-> {outcome.winner.value}"
        )

    return match.result()


class RPSGame(GameBase):
    """Best-of-three RPS between two registered strategies."""

    def __init__(self, strategies: dict = None, max_rounds: int = MAX_ROUNDS):
        """
        Args:
            strategies: Dict mapping player identity -> strategy
            max_rounds: Safety cap on rounds including draws
        """
        self.strategies = strategies or {}
        self.max_rounds = max_rounds
        self.match_result: MatchResult | None = None

    def get_game_type(self) -> GameType:
        return GameType.RPS

    def get_state_summary(self) -> str:
        if self.match_result is None:
            return "RPS: not started"
        return f"RPS: {self.match_result.winner[:10]} won {self.match_result.score}"

    def play(self, player_a: str, player_b: str, wager: int) -> GameResult:
        result = play_rps_match(
            self.strategies[player_a],
            self.strategies[player_b],
            player_a=player_a,
            player_b=player_b,
            max_rounds=self.max_rounds,
        )
        self.match_result = result

        return GameResult(
            game_type=GameType.RPS,
            player_a=player_a,
            player_b=player_b,
            winner=result.winner,
            wager=wager,
            rounds_played=len(result.rounds),
            details={
                "score": result.score,
                "rounds": [f"{r.move_a.label}v{r.move_b.label}" for r in result.rounds],
            },
            match=result,
        )
