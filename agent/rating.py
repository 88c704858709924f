"""
Elo-style skill ratings.

Two variants are supported:

* ``logistic`` (default): the standard logistic expectation, K=32. Draws are
  scored symmetrically, each side's expectation computed from its own
  perspective.
* ``linear``: the integer approximation used by the on-chain settlement
  program (expectation on a 0-1000 scale, rating gap capped at 400). Draws
  use the same scale: the higher-rated side gives up K * (expected - 500) / 1000
  and the lower-rated side gains it.

Decisive results always move ratings by at least one point, and no rating is
ever pushed below the floor.
"""
import logging
import math
from dataclasses import dataclass

logger = logging.getLogger("solarena.rating")

INITIAL_RATING = 1200
RATING_FLOOR = 100
K_FACTOR = 32


@dataclass(frozen=True)
class RatingUpdate:
    """New ratings after a match; on a draw, 'winner' is simply side A."""
    winner_rating: int
    loser_rating: int
    winner_delta: int
    loser_delta: int


def expected_score(rating: int, opponent_rating: int) -> float:
    """Logistic expectation for `rating` against `opponent_rating`."""
    return 1 / (1 + 10 ** ((opponent_rating - rating) / 400))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class RatingSystem:
    """Pure rating update rules."""

    def __init__(
        self,
        k_factor: int = K_FACTOR,
        floor: int = RATING_FLOOR,
        mode: str = "logistic",
    ):
        if mode not in ("logistic", "linear"):
            raise ValueError(f"Unknown rating mode: {mode}")
        self.k_factor = k_factor
        self.floor = floor
        self.mode = mode

    def update(self, winner_rating: int, loser_rating: int, is_draw: bool = False) -> RatingUpdate:
        if is_draw:
            return self._draw(winner_rating, loser_rating)
        if self.mode == "linear":
            delta = self._linear_delta(winner_rating, loser_rating)
        else:
            expected = expected_score(winner_rating, loser_rating)
            delta = max(1, _round_half_up(self.k_factor * (1.0 - expected)))

        new_loser = max(self.floor, loser_rating - delta)
        return RatingUpdate(
            winner_rating=winner_rating + delta,
            loser_rating=new_loser,
            winner_delta=delta,
            loser_delta=new_loser - loser_rating,
        )

    def _draw(self, rating_a: int, rating_b: int) -> RatingUpdate:
        if self.mode == "linear":
            high, low = max(rating_a, rating_b), min(rating_a, rating_b)
            shift = self.k_factor * (self._linear_expected(high, low) - 500) // 1000
            delta_a, delta_b = (-shift, shift) if rating_a >= rating_b else (shift, -shift)
        else:
            # Each side scores 0.5 against its own expectation; the lower-rated
            # side gains, the higher-rated side gives up points.
            delta_a = _round_half_up(self.k_factor * (0.5 - expected_score(rating_a, rating_b)))
            delta_b = _round_half_up(self.k_factor * (0.5 - expected_score(rating_b, rating_a)))
        new_a = max(self.floor, rating_a + delta_a)
        new_b = max(self.floor, rating_b + delta_b)
        return RatingUpdate(
            winner_rating=new_a,
            loser_rating=new_b,
            winner_delta=new_a - rating_a,
            loser_delta=new_b - rating_b,
        )

    @staticmethod
    def _linear_expected(rating: int, opponent_rating: int) -> int:
        """Expected score of `rating` on a 0-1000 scale."""
        diff = min(abs(rating - opponent_rating), 400)
        if rating >= opponent_rating:
            return 500 + diff * 500 // 400
        return 500 - diff * 500 // 400

    def _linear_delta(self, winner_rating: int, loser_rating: int) -> int:
        expected = self._linear_expected(winner_rating, loser_rating)
        return max(1, self.k_factor * (1000 - expected) // 1000)
