"""
Star Match CLI - Command-line interface for the engine.

Usage:
    starmatch play [--seconds N] [--seed S]   Play in the terminal
    starmatch demo [--seed S]                 Watch the solver play a game

While playing, type a number to select or deselect it,
"r" to start over, and "q" to quit.
"""

import argparse
import asyncio
import logging
import sys

from .config import GameSettings
from .engine_core import (
    Action, GameEngine, GameSnapshot, GameStatus, NumberStatus, PuzzleGenerator,
)
from .session import GameLoop, SessionManager
from .solver import find_subset

logger = logging.getLogger(__name__)

STATUS_MARKS = {
    NumberStatus.AVAILABLE: " {} ",
    NumberStatus.VALID_CANDIDATE: "({})",
    NumberStatus.WRONG_CANDIDATE: "!{}!",
    NumberStatus.USED: " . ",
}


def render(view: GameSnapshot) -> str:
    """One-line text rendering of a snapshot."""
    if view.status == GameStatus.ACTIVE:
        left = f"Stars: {'*' * view.target_sum:<9} ({view.target_sum})"
    else:
        left = f"Game over: {view.status.value.upper():<8}"
    numbers = "".join(
        STATUS_MARKS[status].format(n) for n, status in sorted(view.number_statuses.items())
    )
    return f"{left} | {numbers} | Time: {view.seconds_remaining}s"


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Star Match - pick numbers that add up to the stars",
        prog="starmatch",
    )
    parser.add_argument("--log-level", help="Logging level (default from STARMATCH_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play in the terminal")
    play_parser.add_argument("--seconds", type=int, help="Seconds on the clock")
    play_parser.add_argument("--seed", type=int, help="Seed for reproducible games")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Watch the solver play a game")
    demo_parser.add_argument("--seed", type=int, help="Seed for reproducible games")

    args = parser.parse_args(argv)

    settings = GameSettings.from_env(
        duration_seconds=getattr(args, "seconds", None),
        seed=getattr(args, "seed", None),
        log_level=args.log_level,
    )
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(settings)
    elif args.command == "demo":
        cmd_demo(settings)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_play(settings: GameSettings):
    """Play a game in the terminal."""
    print("Pick 1 or more numbers that sum to the number of stars")
    print('Type a number to toggle it, "r" to restart, "q" to quit.')
    final = asyncio.run(_play(settings))
    print(render(final))


async def _play(settings: GameSettings) -> GameSnapshot:
    loop = asyncio.get_running_loop()
    manager = SessionManager(settings)
    session = manager.create_session(scheduler=loop, start=False)
    session.listeners.append(lambda view: print(render(view)))

    def report(result):
        for change in result.state_changes:
            print(f"  {change}")

    game_loop = GameLoop(session, on_result=report)
    runner = asyncio.create_task(game_loop.run())

    try:
        while True:
            try:
                line = await loop.run_in_executor(None, input, "> ")
            except EOFError:
                break
            command = line.strip().lower()
            if command == "q":
                break
            if command == "r":
                game_loop.post_reset()
                continue
            if not (command.isdigit() and 1 <= int(command) <= 9):
                print("Enter a number from 1 to 9, r or q")
                continue

            number = int(command)
            shown = session.snapshot().status_of(number)
            if shown == NumberStatus.USED:
                print(f"  {number} is already used")
                continue
            game_loop.post_click(
                number,
                NumberStatus.CANDIDATE if shown.is_candidate else NumberStatus.AVAILABLE,
            )
    finally:
        game_loop.post_quit()
        final = await runner
        manager.close_all()
    return final


def cmd_demo(settings: GameSettings):
    """Let the solver play one game, without a clock."""
    generator = PuzzleGenerator.seeded(settings.seed, max_target=settings.max_target)
    engine = GameEngine(generator, duration_seconds=settings.duration_seconds)

    while engine.status == GameStatus.ACTIVE:
        view = engine.snapshot()
        print(render(view))
        subset = find_subset(engine.state.available_pool, engine.state.target_sum)
        if subset is None:
            logger.error("No subset of %s matches %d", sorted(engine.state.available_pool), view.target_sum)
            sys.exit(1)
        for number in subset:
            result = engine.apply(Action.select(number, NumberStatus.AVAILABLE))
            for change in result.state_changes:
                print(f"  {change}")

    print(render(engine.snapshot()))
    print(f"Won in {engine.state.rounds_won} round(s)")


if __name__ == "__main__":
    main()
