"""
SolArena Demo - simulated session of an adaptive agent against baseline bots.
Shows opponent modeling, bankroll sizing with stop-loss, and Elo updates.
"""
import sys
import os
import logging

# Windows encoding fix
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from agent.config import Config, LAMPORTS_PER_SOL
from arena.manager import ArenaManager
from arena.matchmaker import Matchmaker
from games.base import GameType

logger = logging.getLogger("solarena.demo")

AGENT_ADDRESS = "So1G1adiator1111111111111111111111111111111"
BOT_ADDRESSES = [
    "Cha11engerBot111111111111111111111111111111",
    "Cha11engerBot222222222222222222222222222222",
]


def print_banner():
    banner = """
    ============================================
        SOL ARENA - Strategy Engine Demo
    ============================================
        Adaptive RPS and Coin Flip agent with
        risk-managed wagering and Elo ratings.
    ============================================
    """
    print(banner)


def print_section(title: str):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}\n")


def sol(lamports: int) -> str:
    return f"{lamports / LAMPORTS_PER_SOL:.4f} SOL"


def demo_setup(config: Config, seed: int | None = None) -> ArenaManager:
    print_section("1. SETUP")
    if seed is not None:
        config.rng_seed = seed
    arena = ArenaManager(config)
    arena.create_agent("sol-gladiator", AGENT_ADDRESS, style="adaptive")
    for i, addr in enumerate(BOT_ADDRESSES):
        arena.create_agent(f"challenger-{i + 1}", addr, style="random")

    for agent in arena.agents.values():
        print(f"  {agent.name:<16} {agent.style:<10} {sol(agent.bankroll.balance)}  ELO {agent.rating}")
    return arena


def run_session(arena: ArenaManager, num_matches: int = 10, coin_flip_every: int = 4) -> list:
    """Play the adaptive agent against the bots until matches run out or the bankroll stops."""
    print_section("2. SESSION")
    gladiator = arena.agents[AGENT_ADDRESS]
    matchmaker = Matchmaker(arena)
    results = []

    for n in range(1, num_matches + 1):
        if not matchmaker.can_play(AGENT_ADDRESS):
            print("  Bankroll below reserve. Stopping.")
            break
        opponent = matchmaker.find_opponent(AGENT_ADDRESS)
        if opponent is None:
            print("  No solvent opponents left.")
            break

        game_type = GameType.COIN_FLIP if coin_flip_every and n % coin_flip_every == 0 else GameType.RPS
        result = arena.run_match(AGENT_ADDRESS, opponent, game_type)
        results.append(result)

        if result.is_draw:
            outcome = "Draw"
        elif result.winner == AGENT_ADDRESS:
            outcome = "WIN"
        else:
            outcome = "LOSS"
        score = result.details.get("score", result.details.get("result", ""))
        print(
            f"  Match {n:>2} {game_type.name:<9} vs {arena.agents[opponent].name:<13} "
            f"{outcome:<4} {score:<6} wager {sol(result.wager)}  "
            f"balance {sol(gladiator.bankroll.balance)}  ELO {gladiator.rating}"
        )

    logger.info(f"Session finished after {len(results)} matches")
    return results


def demo_opponent_modeling(arena: ArenaManager):
    print_section("3. OPPONENT MODELING")
    gladiator = arena.agents[AGENT_ADDRESS]
    print("  " + gladiator.opponent_model.get_all_summaries().replace("\n", "\n  "))

    tiers: dict[str, int] = {}
    for entry in gladiator.strategy.get_decision_log():
        tiers[entry["tier"]] = tiers.get(entry["tier"], 0) + 1
    print(f"\n  Decision tiers used: {tiers}")


def demo_leaderboard(arena: ArenaManager):
    print_section("4. LEADERBOARD")
    print(f"  {'Rank':<6}{'Name':<16}{'ELO':<7}{'W/L/D':<10}{'Win%':<8}{'P&L':>14}")
    print(f"  {'-'*61}")
    for i, r in enumerate(arena.get_leaderboard()):
        wld = f"{r['wins']}/{r['losses']}/{r['draws']}"
        print(
            f"  {i+1:<6}{r['name']:<16}{r['rating']:<7}{wld:<10}"
            f"{r['win_rate']:<8.1f}{r['pnl'] / LAMPORTS_PER_SOL:>+10.4f} SOL"
        )


def main(num_matches: int = 10, seed: int | None = None) -> int:
    print_banner()

    config = Config()
    errors = config.validate()
    if errors:
        for error in errors:
            print(f"Config error: {error}")
        return 1

    arena = demo_setup(config, seed)
    run_session(arena, num_matches=num_matches)
    demo_opponent_modeling(arena)
    demo_leaderboard(arena)

    print_section("DEMO COMPLETE")
    return 0


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    sys.exit(main())
