"""
Coin Flip engine for SolArena: one simultaneous call per side against a single resolved side.
"""
import logging
import random
from dataclasses import dataclass

from agent.commitment import flip_from_secrets

from .base import DRAW, CoinSide, GameBase, GameResult, GameType

logger = logging.getLogger("solarena.coinflip")


@dataclass(frozen=True)
class CoinFlipResult:
    choice_a: CoinSide
    choice_b: CoinSide
    resolved: CoinSide
    winner: str  # player identity or DRAW

    @property
    def is_draw(self) -> bool:
        return self.winner == DRAW

    def to_dict(self) -> dict:
        return {
            "game": "coinflip",
            "choice_a": self.choice_a.value,
            "choice_b": self.choice_b.value,
            "result": self.resolved.value,
            "winner": self.winner,
        }


def resolve_coin_flip(
    choice_a,
    choice_b,
    resolved_side,
    player_a: str = "a",
    player_b: str = "b",
) -> CoinFlipResult:
    """Exactly one correct call wins; both or neither correct is a draw."""
    choice_a = CoinSide.parse(choice_a)
    choice_b = CoinSide.parse(choice_b)
    resolved_side = CoinSide.parse(resolved_side)

    a_correct = choice_a is resolved_side
    b_correct = choice_b is resolved_side
    if a_correct and not b_correct:
        winner = player_a
    elif b_correct and not a_correct:
        winner = player_b
    else:
        winner = DRAW

    return CoinFlipResult(choice_a, choice_b, resolved_side, winner)


class CoinFlipGame(GameBase):
    """
    Single-shot coin flip.

    The side is drawn from `rng`, unless both players' revealed secrets are
    supplied, in which case it is derived the way the on-chain program does.
    """

    def __init__(
        self,
        strategies: dict = None,
        rng: random.Random | None = None,
        revealed_secrets: tuple[bytes, bytes] | None = None,
    ):
        self.strategies = strategies or {}
        self.rng = rng or random.Random()
        self.revealed_secrets = revealed_secrets
        self.flip_result: CoinFlipResult | None = None

    def get_game_type(self) -> GameType:
        return GameType.COIN_FLIP

    def get_state_summary(self) -> str:
        if self.flip_result is None:
            return "Coin Flip: not started"
        return f"Coin Flip: landed {self.flip_result.resolved.value}, winner {self.flip_result.winner}"

    def _resolve_side(self) -> CoinSide:
        if self.revealed_secrets is not None:
            return flip_from_secrets(*self.revealed_secrets)
        return self.rng.choice((CoinSide.HEADS, CoinSide.TAILS))

    def play(self, player_a: str, player_b: str, wager: int) -> GameResult:
        strategy_a = self.strategies[player_a]
        strategy_b = self.strategies[player_b]
        choice_a = strategy_a.choose()
        choice_b = strategy_b.choose()
        side = self._resolve_side()

        strategy_a.record_result(side)
        strategy_b.record_result(side)

        result = resolve_coin_flip(choice_a, choice_b, side, player_a, player_b)
        self.flip_result = result
        logger.debug(f"  {choice_a.value} vs {choice_b.value} -> {side.value} ({result.winner})")

        return GameResult(
            game_type=GameType.COIN_FLIP,
            player_a=player_a,
            player_b=player_b,
            winner=None if result.is_draw else result.winner,
            wager=wager,
            rounds_played=1,
            details=result.to_dict(),
            match=result,
        )
