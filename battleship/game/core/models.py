"""Core domain models used by game logic."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum

BOARD_SIZE = 10


class Orientation(StrEnum):
    """Ship orientation."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"

    @classmethod
    def from_flag(cls, horizontal: bool) -> Orientation:
        return cls.HORIZONTAL if horizontal else cls.VERTICAL


class ShipClass(StrEnum):
    """Ship classes of the standard fleet."""

    BATTLESHIP = "BATTLESHIP"
    DESTROYER = "DESTROYER"
    CRUISER = "CRUISER"
    SUBMARINE = "SUBMARINE"

    @property
    def size(self) -> int:
        return SHIP_LENGTHS[self]

    @property
    def display_name(self) -> str:
        return SHIP_NAMES[self]


SHIP_LENGTHS: dict[ShipClass, int] = {
    ShipClass.BATTLESHIP: 5,
    ShipClass.DESTROYER: 4,
    ShipClass.CRUISER: 3,
    ShipClass.SUBMARINE: 2,
}

SHIP_NAMES: dict[ShipClass, str] = {
    ShipClass.BATTLESHIP: "Battleship",
    ShipClass.DESTROYER: "Destroyer",
    ShipClass.CRUISER: "Cruiser",
    ShipClass.SUBMARINE: "Submarine",
}

DEFAULT_FLEET: dict[ShipClass, int] = {
    ShipClass.BATTLESHIP: 1,
    ShipClass.DESTROYER: 2,
    ShipClass.CRUISER: 3,
    ShipClass.SUBMARINE: 4,
}


class CellState(IntEnum):
    """State of a single grid cell, stored as int8 in board arrays."""

    EMPTY = 0
    OCCUPIED = 1
    HIT = 2
    MISS = 3
    SUNK = 4

    @property
    def attacked(self) -> bool:
        return self in (CellState.HIT, CellState.MISS, CellState.SUNK)


class PlacementError(StrEnum):
    """Reason a ship placement was rejected."""

    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    OVERLAP = "OVERLAP"


class AttackOutcome(StrEnum):
    """Result of a single attack."""

    MISS = "MISS"
    HIT = "HIT"
    HIT_AND_SUNK = "HIT_AND_SUNK"
    ALREADY_ATTACKED = "ALREADY_ATTACKED"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"

    @property
    def resolved(self) -> bool:
        """Whether the attack changed board state."""
        return self in (AttackOutcome.MISS, AttackOutcome.HIT, AttackOutcome.HIT_AND_SUNK)

    @property
    def is_hit(self) -> bool:
        return self in (AttackOutcome.HIT, AttackOutcome.HIT_AND_SUNK)


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate."""

    row: int
    col: int

    def __str__(self) -> str:
        return f"({self.row}, {self.col})"


@dataclass(frozen=True, slots=True)
class AttackResult:
    """Outcome of an attack plus the ship it touched, if any.

    ``sunk_cells`` and ``sunk_class`` are only set for ``HIT_AND_SUNK``.
    """

    outcome: AttackOutcome
    target: Coord
    ship_id: int | None = None
    sunk_class: ShipClass | None = None
    sunk_cells: tuple[Coord, ...] = field(default=())


@dataclass(frozen=True, slots=True)
class ShipPlacement:
    """Placement of a single ship."""

    ship_class: ShipClass
    origin: Coord
    orientation: Orientation

    @property
    def horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL


@dataclass(slots=True)
class FleetPlacement:
    """Collection of ship placements."""

    ships: list[ShipPlacement]

    def by_class(self, ship_class: ShipClass) -> list[ShipPlacement]:
        """Return placements of the given class in fleet order."""
        return [ship for ship in self.ships if ship.ship_class == ship_class]


def cells_for_run(origin: Coord, length: int, horizontal: bool) -> list[Coord]:
    """Compute the straight run of cells starting at ``origin``."""
    if horizontal:
        return [Coord(origin.row, origin.col + i) for i in range(length)]
    return [Coord(origin.row + i, origin.col) for i in range(length)]


def cells_for_placement(placement: ShipPlacement) -> list[Coord]:
    """Compute occupied cells for a ship placement."""
    return cells_for_run(placement.origin, placement.ship_class.size, placement.horizontal)
