"""
Adaptive move selection for SolArena.

RPS moves come from a small decision table keyed by score state and how much
history we have on the opponent:

    behind | history | tier          | exploration
    -------+---------+---------------+------------
    any    | none    | cold start    | no
    no     | 1+      | counter       | no
    yes    | 1       | counter       | yes
    yes    | 2+      | deep counter  | yes

Cold start leans Paper because first-time opponents tend to open Rock. The
deep counter assumes the opponent has adapted to our first-order counter.
Exploration is desperation randomness: when behind, a share of decisions is
replaced by a uniform pick.
"""
import logging
import random
from enum import Enum

from games.base import COUNTER, MOVES, CoinSide, Move
from .opponent_model import OpponentModel

logger = logging.getLogger("solarena.strategy")

# Rock 30%, Paper 40%, Scissors 30%
COLD_START_WEIGHTS = {Move.ROCK: 0.30, Move.PAPER: 0.40, Move.SCISSORS: 0.30}
EXPLORE_PROBABILITY = 0.3
STREAK_BREAK_AFTER = 2


class Tier(Enum):
    COLD_START = "cold_start"
    COUNTER = "counter"
    DEEP_COUNTER = "deep_counter"


class HistoryDepth(Enum):
    NONE = 0
    SHORT = 1
    DEEP = 2

    @classmethod
    def of(cls, length: int) -> "HistoryDepth":
        if length == 0:
            return cls.NONE
        return cls.SHORT if length == 1 else cls.DEEP


# (behind, depth) -> (tier, may explore)
DECISION_TABLE = {
    (False, HistoryDepth.NONE): (Tier.COLD_START, False),
    (True, HistoryDepth.NONE): (Tier.COLD_START, False),
    (False, HistoryDepth.SHORT): (Tier.COUNTER, False),
    (False, HistoryDepth.DEEP): (Tier.COUNTER, False),
    (True, HistoryDepth.SHORT): (Tier.COUNTER, True),
    (True, HistoryDepth.DEEP): (Tier.DEEP_COUNTER, True),
}


def select_tier(behind: bool, history_length: int) -> tuple[Tier, bool]:
    return DECISION_TABLE[behind, HistoryDepth.of(history_length)]


def counter(move: Move) -> Move:
    """Return the move that beats `move`."""
    return COUNTER[move]


class MoveStrategy:
    """Opponent-modeling RPS strategy."""

    def __init__(
        self,
        opponent_model: OpponentModel | None = None,
        rng: random.Random | None = None,
        explore_probability: float = EXPLORE_PROBABILITY,
        history_window: int | None = None,
        cold_start_weights: dict | None = None,
    ):
        self.opponent_model = opponent_model if opponent_model is not None else OpponentModel()
        self.rng = rng or random.Random()
        self.explore_probability = explore_probability
        self.history_window = history_window
        self.cold_start_weights = cold_start_weights or COLD_START_WEIGHTS
        self.decision_log: list[dict] = []

    def _cold_start(self) -> Move:
        r = self.rng.random()
        cumulative = 0.0
        for move in MOVES:
            cumulative += self.cold_start_weights[move]
            if r < cumulative:
                return move
        return MOVES[-1]

    def decide(self, opponent: str, my_score: int = 0, their_score: int = 0) -> Move:
        """Pick the next move against `opponent` given the current round score."""
        history_length = len(self.opponent_model.history(opponent))
        behind = their_score > my_score
        tier, may_explore = select_tier(behind, history_length)

        freq = None
        if tier is Tier.COLD_START:
            choice = self._cold_start()
        else:
            freq = self.opponent_model.frequencies(opponent, self.history_window)
            most_common = self.opponent_model.most_common(opponent, self.history_window)
            if most_common is None:
                # Window excluded every observed move
                choice = self._cold_start()
            elif tier is Tier.DEEP_COUNTER:
                choice = counter(counter(most_common))
                logger.debug(f"[L2] Going deeper: {choice.label}")
            else:
                choice = counter(most_common)

        explored = False
        if may_explore and self.rng.random() < self.explore_probability:
            choice = self.rng.choice(MOVES)
            explored = True
            logger.debug(f"[Wildcard] Random switch: {choice.label}")

        self.decision_log.append({
            "opponent": opponent,
            "score": (my_score, their_score),
            "tier": tier.value,
            "explored": explored,
            "move": choice.label,
        })
        if freq is not None:
            logger.debug(
                f"[Strategy] freq=[R:{freq[Move.ROCK]},P:{freq[Move.PAPER]},"
                f"S:{freq[Move.SCISSORS]}] -> {choice.label}"
            )
        return choice

    # Match-engine interface
    def choose(self, opponent: str, my_score: int = 0, their_score: int = 0) -> Move:
        return self.decide(opponent, my_score, their_score)

    def observe(self, opponent: str, move) -> None:
        """Record the opponent's move from a resolved round."""
        self.opponent_model.record(opponent, move)

    def get_decision_log(self) -> list[dict]:
        return self.decision_log.copy()


class RandomStrategy:
    """Uniform RPS baseline; remembers nothing."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def choose(self, opponent: str, my_score: int = 0, their_score: int = 0) -> Move:
        return self.rng.choice(MOVES)

    def observe(self, opponent: str, move) -> None:
        pass


class FixedStrategy:
    """Plays a fixed cycle of moves. Useful as a predictable opponent."""

    def __init__(self, moves):
        self.moves = [Move.parse(m) for m in moves]
        self._index = 0

    def choose(self, opponent: str, my_score: int = 0, their_score: int = 0) -> Move:
        move = self.moves[self._index % len(self.moves)]
        self._index += 1
        return move

    def observe(self, opponent: str, move) -> None:
        pass


class CoinFlipStrategy:
    """Coin flip picks that bet against perceived streaks."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self.streaks = {CoinSide.HEADS: 0, CoinSide.TAILS: 0}

    def choose(self) -> CoinSide:
        for side in CoinSide:
            if self.streaks[side] > STREAK_BREAK_AFTER:
                return side.opposite
        return self.rng.choice((CoinSide.HEADS, CoinSide.TAILS))

    def record_result(self, side) -> None:
        side = CoinSide.parse(side)
        self.streaks[side] += 1
        self.streaks[side.opposite] = 0
