"""
ArenaCore: the decision engine surface handed to the orchestration layer.

It owns one OpponentModel, the MoveStrategy reading it, a BankrollPolicy and a
RatingSystem. Nothing here touches the network, signs, or persists.
"""
import random

from agent.bankroll import BankrollPolicy
from agent.config import Config
from agent.opponent_model import OpponentModel
from agent.rating import RatingSystem, RatingUpdate
from agent.strategy_engine import MoveStrategy
from games.base import Move
from games.coin_flip import CoinFlipResult, resolve_coin_flip
from games.rps import MatchResult, play_rps_match


class ArenaCore:

    def __init__(
        self,
        policy: BankrollPolicy | None = None,
        rating_system: RatingSystem | None = None,
        rng: random.Random | None = None,
        explore_probability: float = 0.3,
        history_window: int | None = None,
    ):
        self.opponent_model = OpponentModel()
        self.strategy = MoveStrategy(
            self.opponent_model,
            rng=rng,
            explore_probability=explore_probability,
            history_window=history_window,
        )
        self.policy = policy or BankrollPolicy()
        self.rating_system = rating_system or RatingSystem()

    @classmethod
    def from_config(cls, config: Config, session_start_balance: int = 0) -> "ArenaCore":
        policy = BankrollPolicy(
            min_reserve=config.min_reserve,
            min_wager=config.min_wager,
            max_wager=config.max_wager,
            session_start_balance=session_start_balance,
        )
        rating_system = RatingSystem(
            k_factor=config.k_factor,
            floor=config.rating_floor,
            mode=config.rating_mode,
        )
        rng = random.Random(config.rng_seed) if config.rng_seed is not None else None
        return cls(
            policy=policy,
            rating_system=rating_system,
            rng=rng,
            explore_probability=config.explore_probability,
            history_window=config.history_window,
        )

    def decide_move(self, opponent_id: str, agent_score: int = 0, opponent_score: int = 0) -> Move:
        return self.strategy.decide(opponent_id, agent_score, opponent_score)

    def record_opponent_move(self, opponent_id: str, move) -> None:
        self.opponent_model.record(opponent_id, move)

    def compute_wager(self, balance: int, win_rate_percent: float) -> int:
        return self.policy.wager(balance, win_rate_percent)

    def update_ratings(self, winner_rating: int, loser_rating: int, is_draw: bool = False) -> RatingUpdate:
        return self.rating_system.update(winner_rating, loser_rating, is_draw)

    def play_rps_match(self, strategy_a, strategy_b, player_a: str = "a", player_b: str = "b") -> MatchResult:
        return play_rps_match(strategy_a, strategy_b, player_a, player_b)

    def resolve_coin_flip(self, choice_a, choice_b, resolved_side) -> CoinFlipResult:
        return resolve_coin_flip(choice_a, choice_b, resolved_side)
