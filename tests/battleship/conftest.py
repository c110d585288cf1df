from __future__ import annotations

import random

import pytest

from battleship.game.core.board import GameBoard
from battleship.game.core.fleet import debug_fleet
from battleship.game.core.match import Match
from battleship.game.core.models import Coord, FleetPlacement, Orientation, ShipClass, ShipPlacement
from battleship.game.core.player import Player


def make_small_fleet() -> FleetPlacement:
    return FleetPlacement(
        ships=[
            ShipPlacement(ShipClass.CRUISER, Coord(0, 0), Orientation.HORIZONTAL),
            ShipPlacement(ShipClass.SUBMARINE, Coord(2, 0), Orientation.VERTICAL),
        ]
    )


SMALL_COMPOSITION = {ShipClass.CRUISER: 1, ShipClass.SUBMARINE: 1}


@pytest.fixture
def standard_fleet() -> FleetPlacement:
    return debug_fleet()


@pytest.fixture
def small_fleet() -> FleetPlacement:
    return make_small_fleet()


@pytest.fixture
def small_composition() -> dict[ShipClass, int]:
    return dict(SMALL_COMPOSITION)


@pytest.fixture
def board() -> GameBoard:
    return GameBoard()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(1337)


@pytest.fixture
def small_match() -> Match:
    alice = Player("Alice")
    bob = Player("Bob")
    assert alice.place_ships(make_small_fleet()) is None
    assert bob.place_ships(make_small_fleet()) is None
    match = Match(players=(alice, bob), composition=dict(SMALL_COMPOSITION))
    match.start()
    return match
