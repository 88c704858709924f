import os
import sys
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Fix encoding on Windows
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

load_dotenv()

LAMPORTS_PER_SOL = 1_000_000_000


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name, "")
    return int(raw) if raw.strip() else None


@dataclass
class Config:
    # Solana (reported only; the core never talks to the network)
    rpc_url: str = field(default_factory=lambda: os.getenv("SOLANA_RPC", "https://api.devnet.solana.com"))
    program_id: str = field(default_factory=lambda: os.getenv("PROGRAM_ID", "So1Arena111111111111111111111111111111111111"))

    # Bankroll (lamports)
    min_reserve: int = field(default_factory=lambda: int(os.getenv("MIN_RESERVE_LAMPORTS", "50000000")))
    min_wager: int = field(default_factory=lambda: int(os.getenv("MIN_WAGER_LAMPORTS", "1000000")))
    max_wager: int = field(default_factory=lambda: int(os.getenv("MAX_WAGER_LAMPORTS", "50000000")))
    fee_rate_bps: int = field(default_factory=lambda: int(os.getenv("FEE_RATE_BPS", "250")))

    # Rating
    k_factor: int = field(default_factory=lambda: int(os.getenv("ELO_K_FACTOR", "32")))
    initial_rating: int = 1200
    rating_floor: int = 100
    rating_mode: str = field(default_factory=lambda: os.getenv("RATING_MODE", "logistic"))

    # Strategy
    explore_probability: float = field(default_factory=lambda: float(os.getenv("EXPLORE_PROBABILITY", "0.3")))
    history_window: int | None = field(default_factory=lambda: _optional_int("HISTORY_WINDOW"))
    rng_seed: int | None = field(default_factory=lambda: _optional_int("ARENA_SEED"))

    @property
    def is_devnet(self) -> bool:
        return "devnet" in self.rpc_url

    def validate(self) -> list[str]:
        errors = []
        if self.min_wager <= 0:
            errors.append("MIN_WAGER_LAMPORTS must be positive")
        if self.min_wager > self.max_wager:
            errors.append("MIN_WAGER_LAMPORTS exceeds MAX_WAGER_LAMPORTS")
        if self.min_reserve < 0:
            errors.append("MIN_RESERVE_LAMPORTS must not be negative")
        if not 0 <= self.fee_rate_bps < 10000:
            errors.append("FEE_RATE_BPS must be in [0, 10000)")
        if self.rating_mode not in ("logistic", "linear"):
            errors.append(f"Unknown RATING_MODE: {self.rating_mode}")
        if not 0.0 <= self.explore_probability <= 1.0:
            errors.append("EXPLORE_PROBABILITY must be in [0, 1]")
        if self.history_window is not None and self.history_window <= 0:
            errors.append("HISTORY_WINDOW must be positive")
        return errors
