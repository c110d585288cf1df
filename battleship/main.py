"""Hot-seat console entry point."""

from __future__ import annotations

import argparse
import random
from collections.abc import Callable

from battleship.game.app.session_setup import initialize_debug_game, initialize_random_game
from battleship.game.core.match import Match
from battleship.game.core.models import AttackOutcome, Coord
from battleship.game.infra.config import load_default_env_files, load_game_config
from battleship.game.infra.logging import get_logger, setup_logging

logger = get_logger(__name__)

_MESSAGES: dict[AttackOutcome, str] = {
    AttackOutcome.MISS: "Splash, a miss.",
    AttackOutcome.HIT: "Hit!",
    AttackOutcome.ALREADY_ATTACKED: "You already fired there. Pick another cell.",
    AttackOutcome.OUT_OF_BOUNDS: "That shot is off the board. Try again.",
}


def parse_coord(text: str) -> Coord | None:
    """Parse ``row,col``; return None for malformed input."""
    parts = text.split(",")
    if len(parts) != 2:
        return None
    try:
        return Coord(int(parts[0].strip()), int(parts[1].strip()))
    except ValueError:
        return None


def play(match: Match, read: Callable[[str], str] = input, write: Callable[[str], None] = print) -> None:
    """Alternate prompts between players until one fleet is sunk."""
    while not match.is_over:
        player = match.current_player
        write(f"\n{player.name}, your targeting board:")
        write(player.targeting_board.render())
        coord = parse_coord(read(f"{player.name}, enter your move (row,col): "))
        if coord is None:
            write("Enter your move in 'row,col' format.")
            continue
        result = match.fire(coord)
        attack = result.attack
        if attack.outcome is AttackOutcome.HIT_AND_SUNK:
            sunk = attack.sunk_class.display_name if attack.sunk_class else "ship"
            write(f"Hit! You sank a {sunk}.")
        else:
            write(_MESSAGES[attack.outcome])
    if match.winner is not None:
        write(f"\n{match.winner.name} wins after {match.turn_count} shots.")


def main(argv: list[str] | None = None) -> None:
    """Run a local two-player match in the terminal."""
    parser = argparse.ArgumentParser(description="Two-player Battleship in the terminal.")
    parser.add_argument("--debug", action="store_true", help="Use the fixed debug fleet.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for random fleets.")
    args = parser.parse_args(argv)

    load_default_env_files()
    setup_logging()
    config = load_game_config()
    if args.debug:
        match = initialize_debug_game(config)
    else:
        match = initialize_random_game(config, random.Random(args.seed))
    logger.info("driver_start debug=%s seed=%s", args.debug, args.seed)
    try:
        play(match)
    except (KeyboardInterrupt, EOFError):
        logger.info("driver_aborted turns=%d", match.turn_count)


if __name__ == "__main__":
    main()
