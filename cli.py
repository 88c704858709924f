"""
SolArena CLI - Command-line interface for the strategy engine.
"""
import sys
import os
import logging
import json
import click

if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from agent.config import Config, LAMPORTS_PER_SOL
from arena.core import ArenaCore
from arena.manager import ArenaManager
from arena.matchmaker import Matchmaker
from games.base import GameType


@click.group()
@click.option("--seed", type=int, default=None, help="Seed for reproducible runs")
@click.option("--verbose", "-v", is_flag=True, help="Log strategy decisions")
@click.pass_context
def cli(ctx, seed, verbose):
    """SolArena - adaptive RPS / Coin Flip agent with risk-managed wagering"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    ctx.ensure_object(dict)
    config = Config()
    if seed is not None:
        config.rng_seed = seed
    ctx.obj["config"] = config


@cli.command()
@click.pass_context
def status(ctx):
    """Show configuration."""
    config = ctx.obj["config"]
    print("SolArena Status")
    print("=" * 40)
    print(f"RPC: {config.rpc_url}")
    print(f"Network: {'devnet' if config.is_devnet else 'mainnet/custom'}")
    print(f"Program: {config.program_id}")
    print(f"Reserve: {config.min_reserve / LAMPORTS_PER_SOL:.4f} SOL")
    print(f"Wager bounds: {config.min_wager / LAMPORTS_PER_SOL:.4f} - "
          f"{config.max_wager / LAMPORTS_PER_SOL:.4f} SOL")
    print(f"Fee: {config.fee_rate_bps / 100:.2f}%")
    print(f"Rating: {config.rating_mode} (K={config.k_factor})")

    errors = config.validate()
    if errors:
        print(f"\nWarnings: {', '.join(errors)}")


@cli.command()
@click.option("--matches", default=10, help="Number of matches")
@click.option("--game", type=click.Choice(["rps", "coinflip"]), default="rps")
@click.option("--balance", default=1.0, help="Starting balance per agent in SOL")
@click.option("--opponent", type=click.Choice(["random", "adaptive"]), default="random",
              help="Opponent style")
@click.option("--json", "as_json", is_flag=True, help="Print match history as JSON")
@click.pass_context
def play(ctx, matches, game, balance, opponent, as_json):
    """Run the adaptive agent against a bot."""
    config = ctx.obj["config"]
    arena = ArenaManager(config)
    lamports = int(balance * LAMPORTS_PER_SOL)
    arena.create_agent("sol-gladiator", "gladiator", style="adaptive", initial_balance=lamports)
    arena.create_agent("challenger-bot", "challenger", style=opponent, initial_balance=lamports)

    game_type = GameType.RPS if game == "rps" else GameType.COIN_FLIP
    matchmaker = Matchmaker(arena)
    results = []
    for _ in range(matches):
        if not (matchmaker.can_play("gladiator") and matchmaker.can_play("challenger")):
            print("Bankroll below reserve. Stopping.")
            break
        results.append(arena.run_match("gladiator", "challenger", game_type))

    if as_json:
        print(json.dumps(arena.get_match_history(), indent=2, default=str))
        return

    print(f"\nCompleted {len(results)} matches")
    print("\nLeaderboard:")
    for i, r in enumerate(arena.get_leaderboard()):
        print(f"  {i+1}. {r['name']}: ELO {r['rating']}, {r['wins']}W/{r['losses']}L/{r['draws']}D, "
              f"P&L: {r['pnl'] / LAMPORTS_PER_SOL:+.4f} SOL")


@cli.command()
@click.argument("balance", type=int)
@click.argument("win_rate", type=float)
@click.option("--session-start", type=int, default=0, help="Session start balance in lamports")
@click.pass_context
def wager(ctx, balance, win_rate, session_start):
    """Compute the wager for BALANCE lamports at WIN_RATE percent."""
    core = ArenaCore.from_config(ctx.obj["config"], session_start_balance=session_start)
    amount = core.compute_wager(balance, win_rate)
    print(f"Wager: {amount} lamports ({amount / LAMPORTS_PER_SOL:.4f} SOL)")


@cli.command()
@click.argument("winner_rating", type=int)
@click.argument("loser_rating", type=int)
@click.option("--draw", is_flag=True, help="Score the match as a draw")
@click.pass_context
def rating(ctx, winner_rating, loser_rating, draw):
    """Update ratings after a match."""
    core = ArenaCore.from_config(ctx.obj["config"])
    update = core.update_ratings(winner_rating, loser_rating, is_draw=draw)
    print(f"Winner: {winner_rating} -> {update.winner_rating} ({update.winner_delta:+d})")
    print(f"Loser:  {loser_rating} -> {update.loser_rating} ({update.loser_delta:+d})")


@cli.command()
@click.option("--matches", default=10, help="Number of matches")
@click.pass_context
def demo(ctx, matches):
    """Run the full demo session."""
    from demo import main
    ctx.exit(main(num_matches=matches, seed=ctx.obj["config"].rng_seed))


if __name__ == "__main__":
    cli()
