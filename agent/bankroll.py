"""
Bankroll management: win-rate banded wager sizing with reserve and stop-loss control.

All amounts are integers in lamports.
"""
import logging
from collections import deque
from dataclasses import dataclass, field

from games.base import SessionError

logger = logging.getLogger("solarena.bankroll")

# Win-rate bands (percent) -> share of available balance to stake
HOT_WIN_RATE = 60
COLD_WIN_RATE = 40
HOT_PCT = 15
NEUTRAL_PCT = 10
COLD_PCT = 5
STOP_LOSS_PCT = 2


@dataclass
class BankrollPolicy:
    """Sizes wagers; pure apart from the fixed session-start balance."""

    min_reserve: int = 50_000_000
    min_wager: int = 1_000_000
    max_wager: int = 50_000_000
    session_start_balance: int = 0

    def start_session(self, balance: int):
        """Record the session-start balance. Only allowed once per session."""
        if self.session_start_balance > 0:
            raise SessionError("Session already started; use reset_session() for a new one")
        self.session_start_balance = balance

    def reset_session(self, balance: int):
        """Begin a new session from `balance`."""
        logger.info(f"New bankroll session from {balance} lamports")
        self.session_start_balance = balance

    def stop_loss_triggered(self, balance: int) -> bool:
        """True once the balance falls below 70% of the session start."""
        # balance < start * 0.7, kept in integer arithmetic
        return self.session_start_balance > 0 and balance * 10 < self.session_start_balance * 7

    def wager_pct(self, balance: int, win_rate_percent: float) -> int:
        if win_rate_percent > HOT_WIN_RATE:
            pct = HOT_PCT
        elif win_rate_percent < COLD_WIN_RATE:
            pct = COLD_PCT
        else:
            pct = NEUTRAL_PCT

        if self.stop_loss_triggered(balance):
            logger.debug("Stop-loss triggered (down 30%)")
            pct = STOP_LOSS_PCT
        return pct

    def wager(self, balance: int, win_rate_percent: float) -> int:
        """
        Wager for the next match.

        Returns 0 when the balance does not exceed the reserve, otherwise a
        value in [min_wager, max_wager]. A max_wager above the available
        balance is a configuration error the caller must catch.
        """
        available = balance - self.min_reserve
        if available <= 0:
            logger.debug("Below minimum reserve")
            return 0

        pct = self.wager_pct(balance, win_rate_percent)
        raw = available * pct // 100
        return max(self.min_wager, min(self.max_wager, raw))


@dataclass
class BankrollManager:
    """Tracks a live balance and settled results around a BankrollPolicy."""

    initial_balance: int
    policy: BankrollPolicy = field(default_factory=BankrollPolicy)
    fee_rate_bps: int = 250  # 2.5% of the pot on a win
    rolling_window: int | None = None
    balance: int = 0
    session_pnl: int = 0
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    history: list = field(default_factory=list)

    def __post_init__(self):
        if self.balance == 0:
            self.balance = self.initial_balance
        self._recent = deque(maxlen=self.rolling_window)
        self.policy.reset_session(self.balance)

    @property
    def win_rate_percent(self) -> float:
        """Win rate over decided games (rolling if configured); 50 when unknown."""
        decided = [won for won in self._recent if won is not None]
        if not decided:
            return 50.0
        return 100.0 * sum(decided) / len(decided)

    @property
    def available(self) -> int:
        """Balance above the minimum reserve."""
        return self.balance - self.policy.min_reserve

    def next_wager(self) -> int:
        return self.policy.wager(self.balance, self.win_rate_percent)

    def can_stake(self, wager: int) -> bool:
        """A stake is allowed only if losing it keeps the reserve intact."""
        return 0 < wager <= self.available

    def payout(self, wager: int) -> int:
        """Amount returned to the winner of a two-sided pot."""
        pot = wager * 2
        fee = pot * self.fee_rate_bps // 10000
        return pot - fee

    def record_result(self, wager: int, won: bool | None):
        """Settle a match; `won` is None for a draw (stakes refunded)."""
        self.games_played += 1
        if won is None:
            self.draws += 1
            profit = 0
        elif won:
            self.wins += 1
            profit = self.payout(wager) - wager
        else:
            self.losses += 1
            profit = -wager

        self.balance += profit
        self.session_pnl += profit
        self._recent.append(won)

        self.history.append({
            "wager": wager,
            "won": won,
            "profit": profit,
            "balance_after": self.balance,
            "session_pnl": self.session_pnl,
        })

    def get_summary(self) -> str:
        """Get a summary of bankroll status."""
        return (
            f"Bankroll: {self.balance / 1e9:.4f} SOL\n"
            f"Initial: {self.initial_balance / 1e9:.4f} SOL\n"
            f"Session P&L: {self.session_pnl / 1e9:+.4f} SOL\n"
            f"Games: {self.games_played} (W: {self.wins}, L: {self.losses}, D: {self.draws})\n"
            f"Win rate: {self.win_rate_percent:.1f}%\n"
            f"Stop-loss: {'TRIGGERED' if self.policy.stop_loss_triggered(self.balance) else 'ok'}\n"
            f"Next wager: {self.next_wager() / 1e9:.4f} SOL\n"
        )
