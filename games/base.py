"""
Base game interface and shared data model for SolArena games.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

DRAW = "draw"


class ArenaError(Exception):
    """Base error for the arena core."""


class InvalidInputError(ArenaError, ValueError):
    """A value outside an enumerated set (Move, CoinSide) or a malformed input."""


class MatchStateError(ArenaError):
    """A match was driven past its terminal state."""


class SessionError(ArenaError):
    """Bankroll session lifecycle misuse."""


class GameType(Enum):
    RPS = 0
    COIN_FLIP = 1


class Move(Enum):
    # Values match the on-chain choice encoding (1-3)
    ROCK = 1
    PAPER = 2
    SCISSORS = 3

    @classmethod
    def parse(cls, value) -> "Move":
        """Coerce a Move, its integer value or its name into a Move."""
        return _parse_enum(cls, value)

    @property
    def label(self) -> str:
        return self.name.capitalize()

    def beats(self, other: "Move") -> bool:
        return BEATS[self] is other


class CoinSide(Enum):
    HEADS = "heads"
    TAILS = "tails"

    @classmethod
    def parse(cls, value) -> "CoinSide":
        return _parse_enum(cls, value)

    @property
    def opposite(self) -> "CoinSide":
        return CoinSide.TAILS if self is CoinSide.HEADS else CoinSide.HEADS


def _parse_enum(enum_cls, value):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        key = value.strip().upper()
        if key in enum_cls.__members__:
            return enum_cls[key]
    if not isinstance(value, bool):
        try:
            return enum_cls(value)
        except ValueError:
            pass
    raise InvalidInputError(f"Invalid {enum_cls.__name__}: {value!r}")


MOVES = (Move.ROCK, Move.PAPER, Move.SCISSORS)

# What each move beats
BEATS = {
    Move.ROCK: Move.SCISSORS,
    Move.PAPER: Move.ROCK,
    Move.SCISSORS: Move.PAPER,
}

# The move that beats each move
COUNTER = {loser: winner for winner, loser in BEATS.items()}


@dataclass
class GameResult:
    """Result of a completed game."""
    game_type: GameType
    player_a: str
    player_b: str
    winner: str | None   # None on a draw
    wager: int           # Wager in lamports
    rounds_played: int
    details: dict = field(default_factory=dict)
    match: object = None  # MatchResult or CoinFlipResult

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    @property
    def loser(self) -> str | None:
        if self.winner is None:
            return None
        return self.player_b if self.winner == self.player_a else self.player_a


class GameBase(ABC):
    """Abstract base class for all games."""

    @abstractmethod
    def get_game_type(self) -> GameType:
        """Return the game type enum."""
        ...

    @abstractmethod
    def play(self, player_a: str, player_b: str, wager: int) -> GameResult:
        """
        Play a complete game between two players.

        Args:
            player_a: Identity of player A
            player_b: Identity of player B
            wager: Wager amount in lamports

        Returns:
            GameResult with winner (None on a draw) and game details
        """
        ...

    @abstractmethod
    def get_state_summary(self) -> str:
        """Return a human-readable summary of the current game state."""
        ...
