"""Fleet composition rules, validation and construction."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Mapping

from battleship.game.core.board import GameBoard
from battleship.game.core.models import (
    BOARD_SIZE,
    DEFAULT_FLEET,
    Coord,
    FleetPlacement,
    Orientation,
    ShipClass,
    ShipPlacement,
)
from battleship.game.core.ship import create_ship

FleetComposition = Mapping[ShipClass, int]


def parse_composition(raw: str) -> dict[ShipClass, int]:
    """Parse ``"BATTLESHIP:1,CRUISER:3"`` into a composition mapping."""
    composition: dict[ShipClass, int] = {}
    for chunk in raw.split(","):
        entry = chunk.strip()
        if not entry:
            continue
        name, sep, count_text = entry.partition(":")
        if not sep:
            raise ValueError(f"Fleet entry '{entry}' must look like CLASS:COUNT.")
        try:
            ship_class = ShipClass(name.strip().upper())
        except ValueError as exc:
            raise ValueError(f"Unknown ship class '{name.strip()}'.") from exc
        try:
            count = int(count_text.strip())
        except ValueError as exc:
            raise ValueError(f"Ship count for {ship_class.value} must be an integer.") from exc
        if count < 0:
            raise ValueError(f"Ship count for {ship_class.value} must not be negative.")
        if ship_class in composition:
            raise ValueError(f"Duplicate fleet entry: {ship_class.value}.")
        composition[ship_class] = count
    if not any(composition.values()):
        raise ValueError("Fleet composition must contain at least one ship.")
    return composition


def fleet_size(composition: FleetComposition) -> int:
    return sum(composition.values())


def expand_composition(composition: FleetComposition) -> list[ShipClass]:
    """List ship classes largest first, one entry per ship."""
    ordered = sorted(composition, key=lambda ship_class: ship_class.size, reverse=True)
    return [ship_class for ship_class in ordered for _ in range(composition[ship_class])]


def fleet_counts(board: GameBoard) -> Counter[ShipClass]:
    return Counter(ship.ship_class for ship in board.ships.values())


def missing_ships(board: GameBoard, composition: FleetComposition = DEFAULT_FLEET) -> dict[ShipClass, int]:
    """Return how many ships of each class still have to be placed."""
    counts = fleet_counts(board)
    return {
        ship_class: required - counts[ship_class]
        for ship_class, required in composition.items()
        if counts[ship_class] < required
    }


def is_fleet_complete(board: GameBoard, composition: FleetComposition = DEFAULT_FLEET) -> bool:
    """Return whether the board holds exactly the configured fleet."""
    counts = fleet_counts(board)
    expected = Counter({ship_class: n for ship_class, n in composition.items() if n})
    return counts == expected


def validate_fleet(
    fleet: FleetPlacement,
    composition: FleetComposition = DEFAULT_FLEET,
    size: int = BOARD_SIZE,
) -> tuple[bool, str]:
    """Validate whether a fleet exactly matches the configured composition."""
    counts = Counter(placement.ship_class for placement in fleet.ships)
    for ship_class, count in counts.items():
        if count > composition.get(ship_class, 0):
            return False, f"Too many ships of type {ship_class.value}."

    board = GameBoard(size=size)
    for placement in fleet.ships:
        error = board.place_ship(placement.origin, create_ship(placement.ship_class), placement.horizontal)
        if error is not None:
            return False, f"Invalid placement for {placement.ship_class.value}: {error.value}."

    missing = missing_ships(board, composition)
    if missing:
        return False, "Missing ships: " + ", ".join(
            f"{count}x {ship_class.value}" for ship_class, count in missing.items()
        ) + "."
    return True, ""


def populate_board(board: GameBoard, fleet: FleetPlacement) -> None:
    """Place every ship of ``fleet`` on ``board``; raise on the first rejection."""
    for placement in fleet.ships:
        error = board.place_ship(placement.origin, create_ship(placement.ship_class), placement.horizontal)
        if error is not None:
            raise ValueError(f"Invalid placement for {placement.ship_class.value}: {error.value}.")


def build_board_from_fleet(
    fleet: FleetPlacement,
    composition: FleetComposition = DEFAULT_FLEET,
    size: int = BOARD_SIZE,
) -> GameBoard:
    """Create a board from a validated fleet placement."""
    valid, reason = validate_fleet(fleet, composition, size=size)
    if not valid:
        raise ValueError(reason)
    board = GameBoard(size=size)
    populate_board(board, fleet)
    return board


def random_fleet(
    rng: random.Random,
    composition: FleetComposition = DEFAULT_FLEET,
    size: int = BOARD_SIZE,
) -> FleetPlacement:
    """Generate a random valid fleet placement."""
    for _ in range(100):
        generated = _try_random_fleet(rng, composition, size)
        if generated is not None:
            return generated
    raise ValueError(f"Fleet does not fit on a {size}x{size} board.")


def _try_random_fleet(
    rng: random.Random, composition: FleetComposition, size: int
) -> FleetPlacement | None:
    board = GameBoard(size=size)
    placements: list[ShipPlacement] = []
    for ship_class in expand_composition(composition):
        candidates = [
            ShipPlacement(ship_class, Coord(row, col), orientation)
            for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL)
            for row in range(size)
            for col in range(size)
            if board.check_placement(
                Coord(row, col), ship_class.size, orientation is Orientation.HORIZONTAL
            )
            is None
        ]
        if not candidates:
            return None
        placement = rng.choice(candidates)
        board.place_ship(placement.origin, create_ship(ship_class), placement.horizontal)
        placements.append(placement)
    return FleetPlacement(ships=placements)


def debug_fleet() -> FleetPlacement:
    """Fixed standard fleet in vertical columns, used for quick test matches."""
    vertical = Orientation.VERTICAL
    return FleetPlacement(
        ships=[
            ShipPlacement(ShipClass.BATTLESHIP, Coord(0, 0), vertical),
            ShipPlacement(ShipClass.DESTROYER, Coord(0, 2), vertical),
            ShipPlacement(ShipClass.DESTROYER, Coord(0, 4), vertical),
            ShipPlacement(ShipClass.CRUISER, Coord(0, 6), vertical),
            ShipPlacement(ShipClass.CRUISER, Coord(0, 8), vertical),
            ShipPlacement(ShipClass.CRUISER, Coord(6, 0), vertical),
            ShipPlacement(ShipClass.SUBMARINE, Coord(6, 2), vertical),
            ShipPlacement(ShipClass.SUBMARINE, Coord(6, 4), vertical),
            ShipPlacement(ShipClass.SUBMARINE, Coord(6, 6), vertical),
            ShipPlacement(ShipClass.SUBMARINE, Coord(6, 8), vertical),
        ]
    )
