import argparse
import sys
import time
from typing import Optional

from loguru import logger

from ludo_engine import GameMode, RandomStrategy, SessionStore, config


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Play random Ludo games through the board engine"
    )
    parser.add_argument(
        "--games", type=int, default=1, help="Number of games to simulate"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for dice and move choice"
    )
    parser.add_argument(
        "--mode",
        choices=[m.value for m in GameMode],
        default=GameMode.STANDARD.value,
        help="Game mode; death mode stops at --max-moves",
    )
    parser.add_argument(
        "--max-moves",
        type=int,
        default=config.DEATH_MODE_MAX_MOVES,
        help="Move ceiling for death mode",
    )
    parser.add_argument(
        "--max-turns",
        type=int,
        default=config.MAX_TURNS,
        help="Safety cap on turns per game (moves plus passes)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every move")
    return parser.parse_args(argv)


def play_game(
    store: SessionStore, game_id: str, args: argparse.Namespace, index: int = 0
) -> dict:
    seed = None if args.seed is None else args.seed + index
    session = store.create(
        game_id, mode=GameMode(args.mode), max_moves=args.max_moves, seed=seed
    )
    strategy = RandomStrategy(rng_seed=seed)
    turns = 0
    captures = 0

    while session.is_active and turns < args.max_turns:
        dice = session.roll_dice()
        move = strategy.select_move(session.engine.legal_moves(dice))
        if move is None:
            session.pass_turn(dice)
        else:
            outcome = session.submit_move(move)
            captures += len(outcome.captured)
        turns += 1

    winner = session.engine.winner
    summary = {
        "game_id": game_id,
        "status": session.status.value,
        "winner": winner.value if winner else None,
        "moves": session.move_count,
        "turns": turns,
        "captures": captures,
        "standing": {
            team.value: round(p, 1)
            for team, p in session.engine.win_probabilities().items()
        },
    }
    store.discard(game_id)
    return summary


def main(argv: Optional[list[str]] = None) -> None:
    args = parse_args(argv)
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    store = SessionStore()
    start_time = time.time()
    print("--- Starting Simulation ---")
    for i in range(args.games):
        summary = play_game(store, f"sim-{i}", args, index=i)
        print(
            f"Game {summary['game_id']}: {summary['status']}, "
            f"winner={summary['winner']}, moves={summary['moves']}, "
            f"turns={summary['turns']}, captures={summary['captures']}, "
            f"standing={summary['standing']}"
        )
    print("\n--- SIMULATION COMPLETE ---")
    print(f"Simulation Time: {time.time() - start_time:.2f} seconds")


if __name__ == "__main__":
    main()
