"""
Opponent modeling: per-opponent move history and frequency queries for adaptive strategy.
"""
from collections import Counter
from dataclasses import dataclass, field

from games.base import MOVES, InvalidInputError, Move


@dataclass
class OpponentProfile:
    """Observed behavior of a single opponent."""

    address: str
    moves_history: list = field(default_factory=list)
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    @property
    def win_rate(self) -> float:
        """Opponent's share of decided games (0.5 when unknown)."""
        decided = self.wins + self.losses
        if decided == 0:
            return 0.5
        return self.wins / decided

    def summary(self) -> str:
        recent = [m.label for m in self.moves_history[-5:]]
        return (
            f"Opponent {self.address[:10]}...: "
            f"{self.games_played} games ({self.wins}W/{self.losses}L/{self.draws}D), "
            f"{len(self.moves_history)} moves seen, recent {recent}"
        )


class OpponentModel:
    """
    Keyed store of opponent histories.

    Histories are append-only; callers own retention. Opponent identities are
    opaque and case-sensitive (base58 addresses differ by case).
    """

    def __init__(self):
        self.opponents: dict[str, OpponentProfile] = {}

    def get_or_create(self, opponent: str) -> OpponentProfile:
        if opponent not in self.opponents:
            self.opponents[opponent] = OpponentProfile(address=opponent)
        return self.opponents[opponent]

    def record(self, opponent: str, move) -> None:
        """Append one observed move to an opponent's history."""
        self.get_or_create(opponent).moves_history.append(Move.parse(move))

    def history(self, opponent: str) -> tuple:
        profile = self.opponents.get(opponent)
        return tuple(profile.moves_history) if profile else ()

    def frequencies(self, opponent: str, window: int | None = None) -> dict:
        """
        Count each move over the full history, or the last `window` moves.

        Unknown opponents give all-zero counts.
        """
        moves = self.history(opponent)
        if window is not None:
            if window < 0:
                raise InvalidInputError(f"window must not be negative: {window}")
            moves = moves[max(0, len(moves) - window):] if window else ()

        counts = Counter(moves)
        return {move: counts.get(move, 0) for move in MOVES}

    def most_common(self, opponent: str, window: int | None = None) -> Move | None:
        """Most frequent move; ties go to the lower-valued move (Rock > Paper > Scissors)."""
        freq = self.frequencies(opponent, window)
        if not any(freq.values()):
            return None

        best = MOVES[0]
        for move in MOVES[1:]:
            if freq[move] > freq[best]:
                best = move
        return best

    def record_game_result(self, opponent: str, opponent_won: bool | None):
        """Record a finished match; `opponent_won` is None for a draw."""
        profile = self.get_or_create(opponent)
        profile.games_played += 1
        if opponent_won is None:
            profile.draws += 1
        elif opponent_won:
            profile.wins += 1
        else:
            profile.losses += 1

    def __len__(self) -> int:
        return len(self.opponents)

    def __contains__(self, opponent: str) -> bool:
        return opponent in self.opponents

    def get_all_summaries(self) -> str:
        if not self.opponents:
            return "No opponent data available yet."
        return "\n".join(p.summary() for p in self.opponents.values())
