"""Local co-op match wiring for drivers."""

from __future__ import annotations

import random
from collections import Counter

from battleship.game.core.board import create_board, create_targeting_board
from battleship.game.core.fleet import debug_fleet, random_fleet
from battleship.game.core.match import Match
from battleship.game.core.player import Player
from battleship.game.infra.config import GameConfig
from battleship.game.infra.logging import get_logger

logger = get_logger(__name__)


def initialize_local_coop_game(config: GameConfig | None = None) -> Match:
    """Create two players with fresh boards; the match starts in setup."""
    config = config or GameConfig()
    players = tuple(
        Player(
            name,
            game_board=create_board(config.board_size),
            targeting_board=create_targeting_board(config.board_size),
        )
        for name in config.player_names
    )
    logger.info(
        "local_coop_created size=%d players=%s",
        config.board_size,
        ",".join(player.name for player in players),
    )
    return Match(players=(players[0], players[1]), composition=dict(config.composition))


def initialize_random_game(config: GameConfig | None = None, rng: random.Random | None = None) -> Match:
    """Local co-op match with random fleets on both boards, ready for combat."""
    config = config or GameConfig()
    rng = rng or random.Random()
    match = initialize_local_coop_game(config)
    for player in match.players:
        fleet = random_fleet(rng, config.composition, size=config.board_size)
        error = player.place_ships(fleet)
        if error is not None:
            raise RuntimeError(f"Generated fleet rejected for {player.name}: {error.value}.")
    match.start()
    return match


def initialize_debug_game(config: GameConfig | None = None) -> Match:
    """Local co-op match with the fixed debug fleet on both boards, ready for combat."""
    config = config or GameConfig()
    fleet = debug_fleet()
    debug_counts = Counter(placement.ship_class for placement in fleet.ships)
    if debug_counts != Counter({ship_class: n for ship_class, n in config.composition.items() if n}):
        raise ValueError("The debug fleet only matches the standard fleet composition.")
    match = initialize_local_coop_game(config)
    for player in match.players:
        error = player.place_ships(fleet)
        if error is not None:
            raise ValueError(
                f"Debug fleet does not fit a {config.board_size}x{config.board_size} board: {error.value}."
            )
    match.start()
    logger.info("debug_game_ready ships_per_player=%d", len(fleet.ships))
    return match
