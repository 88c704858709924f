"""
Arena Manager: orchestrates matches between agents, then settles ratings and bankrolls.
"""
import logging
import random
from dataclasses import dataclass, field

from agent.bankroll import BankrollManager, BankrollPolicy
from agent.config import Config, LAMPORTS_PER_SOL
from agent.opponent_model import OpponentModel
from agent.rating import RatingSystem
from agent.strategy_engine import CoinFlipStrategy, MoveStrategy, RandomStrategy
from games.base import GameResult, GameType
from games.coin_flip import CoinFlipGame
from games.rps import RPSGame

logger = logging.getLogger("solarena.arena")

STYLES = ("adaptive", "random")


@dataclass
class AgentProfile:
    """A competitor with its own strategy, opponent model, bankroll and rating."""
    name: str
    address: str
    style: str  # adaptive, random
    strategy: object = None
    flip_strategy: CoinFlipStrategy = None
    bankroll: BankrollManager = None
    opponent_model: OpponentModel = field(default_factory=OpponentModel)
    rating: int = 1200
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def games(self) -> int:
        return self.wins + self.losses + self.draws


class ArenaManager:
    """
    Manages the arena: creates agents, runs matches, settles ratings and bankrolls.
    """

    def __init__(self, config: Config, rng: random.Random | None = None):
        self.config = config
        if rng is None:
            rng = random.Random(config.rng_seed) if config.rng_seed is not None else random.Random()
        self.rng = rng
        self.rating_system = RatingSystem(
            k_factor=config.k_factor,
            floor=config.rating_floor,
            mode=config.rating_mode,
        )
        self.agents: dict[str, AgentProfile] = {}
        self.match_history: list[GameResult] = []

    def _child_rng(self) -> random.Random:
        return random.Random(self.rng.getrandbits(64))

    def create_agent(
        self,
        name: str,
        address: str,
        style: str = "adaptive",
        initial_balance: int = LAMPORTS_PER_SOL,
    ) -> AgentProfile:
        """Create a new agent with its own bankroll session."""
        if style not in STYLES:
            raise ValueError(f"Unknown agent style: {style}")
        if address in self.agents:
            raise ValueError(f"Agent already registered: {address}")

        opponent_model = OpponentModel()
        if style == "adaptive":
            strategy = MoveStrategy(
                opponent_model,
                rng=self._child_rng(),
                explore_probability=self.config.explore_probability,
                history_window=self.config.history_window,
            )
        else:
            strategy = RandomStrategy(rng=self._child_rng())

        bankroll = BankrollManager(
            initial_balance=initial_balance,
            policy=BankrollPolicy(
                min_reserve=self.config.min_reserve,
                min_wager=self.config.min_wager,
                max_wager=self.config.max_wager,
            ),
            fee_rate_bps=self.config.fee_rate_bps,
        )

        agent = AgentProfile(
            name=name,
            address=address,
            style=style,
            strategy=strategy,
            flip_strategy=CoinFlipStrategy(rng=self._child_rng()),
            bankroll=bankroll,
            opponent_model=opponent_model,
            rating=self.config.initial_rating,
        )
        self.agents[address] = agent
        logger.info(f"Agent created: {name} ({style}) @ {address[:10]}...")
        return agent

    def negotiate_wager(self, agent_a: AgentProfile, agent_b: AgentProfile) -> int:
        """Both sides stake the smaller of their policy wagers."""
        return min(agent_a.bankroll.next_wager(), agent_b.bankroll.next_wager())

    def run_match(
        self,
        player_a_addr: str,
        player_b_addr: str,
        game_type: GameType,
        wager: int | None = None,
        revealed_secrets: tuple[bytes, bytes] | None = None,
    ) -> GameResult:
        """Run a match between two agents with full settlement."""
        agent_a = self.agents.get(player_a_addr)
        agent_b = self.agents.get(player_b_addr)

        if not agent_a or not agent_b:
            raise ValueError("Both players must be registered agents")
        if agent_a is agent_b:
            raise ValueError("Cannot play against yourself")

        if wager is None:
            wager = self.negotiate_wager(agent_a, agent_b)
        if wager <= 0:
            raise ValueError("Wager must be greater than zero (bankroll below reserve)")
        for agent in (agent_a, agent_b):
            if not agent.bankroll.can_stake(wager):
                raise ValueError(
                    f"{agent.name} cannot cover wager {wager} "
                    f"(available above reserve: {agent.bankroll.available})"
                )

        if game_type == GameType.RPS:
            game = RPSGame(strategies={
                player_a_addr: agent_a.strategy,
                player_b_addr: agent_b.strategy,
            })
        elif game_type == GameType.COIN_FLIP:
            game = CoinFlipGame(
                strategies={
                    player_a_addr: agent_a.flip_strategy,
                    player_b_addr: agent_b.flip_strategy,
                },
                rng=self._child_rng(),
                revealed_secrets=revealed_secrets,
            )
        else:
            raise ValueError(f"Unknown game type: {game_type}")

        logger.info(f"MATCH: {agent_a.name} vs {agent_b.name} | {game_type.name} | "
                    f"Wager: {wager / LAMPORTS_PER_SOL:.4f} SOL")

        result = game.play(player_a_addr, player_b_addr, wager)

        self._update_ratings(agent_a, agent_b, result)
        self._update_agent_stats(agent_a, agent_b, result)
        self.match_history.append(result)

        if result.is_draw:
            logger.info(f"RESULT: draw | {game.get_state_summary()}")
        else:
            logger.info(f"RESULT: {self.agents[result.winner].name} WINS | {game.get_state_summary()}")
        return result

    def _update_ratings(self, agent_a: AgentProfile, agent_b: AgentProfile, result: GameResult):
        if result.is_draw:
            update = self.rating_system.update(agent_a.rating, agent_b.rating, is_draw=True)
            agent_a.rating, agent_b.rating = update.winner_rating, update.loser_rating
        else:
            winner = self.agents[result.winner]
            loser = self.agents[result.loser]
            update = self.rating_system.update(winner.rating, loser.rating)
            winner.rating, loser.rating = update.winner_rating, update.loser_rating

        result.details["ratings"] = {
            agent_a.address: agent_a.rating,
            agent_b.address: agent_b.rating,
        }
        logger.info(f"  ELO: {agent_a.name} {agent_a.rating} | {agent_b.name} {agent_b.rating}")

    def _update_agent_stats(self, agent_a: AgentProfile, agent_b: AgentProfile, result: GameResult):
        """Settle bankrolls and per-opponent records."""
        for me, other in ((agent_a, agent_b), (agent_b, agent_a)):
            if result.is_draw:
                won = None
                me.draws += 1
            else:
                won = result.winner == me.address
                if won:
                    me.wins += 1
                else:
                    me.losses += 1
            me.bankroll.record_result(result.wager, won)
            me.opponent_model.record_game_result(other.address, None if won is None else not won)

    def get_leaderboard(self) -> list[dict]:
        """Get agent rankings, highest rating first."""
        rankings = []
        for addr, agent in self.agents.items():
            rankings.append({
                "name": agent.name,
                "address": addr[:10] + "...",
                "full_address": addr,
                "style": agent.style,
                "rating": agent.rating,
                "balance": agent.bankroll.balance,
                "games": agent.games,
                "wins": agent.wins,
                "losses": agent.losses,
                "draws": agent.draws,
                "win_rate": agent.bankroll.win_rate_percent,
                "pnl": agent.bankroll.session_pnl,
            })

        rankings.sort(key=lambda x: (x["rating"], x["pnl"]), reverse=True)
        return rankings

    def get_match_history(self) -> list[dict]:
        """Get JSON-ready match records."""
        history = []
        for i, result in enumerate(self.match_history):
            entry = {
                "match": i + 1,
                "game_type": result.game_type.name,
                "player_a": self.agents[result.player_a].name,
                "player_b": self.agents[result.player_b].name,
                "winner": self.agents[result.winner].name if result.winner else "draw",
                "wager": result.wager,
                "rounds": result.rounds_played,
                "ratings": {
                    self.agents[addr].name: rating
                    for addr, rating in result.details.get("ratings", {}).items()
                },
            }
            if result.match is not None:
                entry["record"] = result.match.to_dict()
            history.append(entry)
        return history
