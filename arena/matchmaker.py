"""
Matchmaker: pairs solvent agents by rating and runs their matches.
"""
import logging
from itertools import combinations

from games.base import ArenaError, GameType
from .manager import ArenaManager

logger = logging.getLogger("solarena.matchmaker")


class Matchmaker:
    """Finds and orchestrates matches between agents."""

    def __init__(self, arena: ArenaManager):
        self.arena = arena

    def can_play(self, addr: str) -> bool:
        bankroll = self.arena.agents[addr].bankroll
        return bankroll.can_stake(bankroll.next_wager())

    def find_opponent(self, player_addr: str) -> str | None:
        """Find the solvent opponent closest in rating."""
        player = self.arena.agents.get(player_addr)
        if not player:
            return None

        candidates = [
            addr for addr in self.arena.agents
            if addr != player_addr and self.can_play(addr)
        ]
        if not candidates:
            return None

        def rating_distance(addr):
            return abs(player.rating - self.arena.agents[addr].rating)

        return min(candidates, key=rating_distance)

    def auto_match(
        self,
        game_type: GameType,
        num_matches: int = 5,
        wager: int | None = None,
    ) -> list:
        """
        Each agent in turn seeks its closest-rated solvent opponent.

        Agents below reserve sit out. Returns list of GameResults.
        """
        agents = list(self.arena.agents.keys())
        if len(agents) < 2:
            raise ValueError("Need at least 2 agents for auto-matching")

        results = []
        for i in range(num_matches):
            seeker = agents[i % len(agents)]
            if not self.can_play(seeker):
                logger.info(f"Match {i+1}: {seeker[:10]} sits out (below reserve)")
                continue
            opponent = self.find_opponent(seeker)
            if opponent is None:
                logger.info(f"Match {i+1}: no solvent opponent for {seeker[:10]}")
                continue

            try:
                results.append(self.arena.run_match(seeker, opponent, game_type, wager))
            except (ArenaError, ValueError) as e:
                logger.error(f"Match {i+1} failed: {e}")

        return results

    def round_robin(
        self,
        game_type: GameType,
        wager: int | None = None,
    ) -> list:
        """Every agent plays every other agent once. Returns list of GameResults."""
        results = []
        for addr_a, addr_b in combinations(self.arena.agents, 2):
            try:
                results.append(self.arena.run_match(addr_a, addr_b, game_type, wager))
            except (ArenaError, ValueError) as e:
                logger.error(f"Match failed ({addr_a[:8]} vs {addr_b[:8]}): {e}")
        return results
