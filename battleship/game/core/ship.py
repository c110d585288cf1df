"""Ship entity and class factory."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field

from battleship.game.core.errors import ShipAlreadyPlaced
from battleship.game.core.models import Coord, Orientation, ShipClass

_ship_ids = itertools.count(1)


@dataclass(slots=True, eq=False)
class Ship:
    """A vessel of a fixed class, bound to its cells at placement time."""

    ship_id: int
    ship_class: ShipClass
    coords: list[Coord] = field(default_factory=list)
    orientation: Orientation | None = None
    damage: set[Coord] = field(default_factory=set)

    @property
    def name(self) -> str:
        return self.ship_class.display_name

    @property
    def length(self) -> int:
        return self.ship_class.size

    @property
    def is_placed(self) -> bool:
        return bool(self.coords)

    @property
    def is_sunk(self) -> bool:
        return self.is_placed and len(self.damage) == len(self.coords)

    def bind(self, coords: list[Coord], orientation: Orientation) -> None:
        """Attach board cells to the ship. Ships never move once bound."""
        if self.is_placed:
            raise ShipAlreadyPlaced(f"{self.name} #{self.ship_id} is already placed.")
        if len(coords) != self.length:
            raise ValueError(
                f"{self.name} needs {self.length} cells, got {len(coords)}."
            )
        self.coords = list(coords)
        self.orientation = orientation

    def register_hit(self, coord: Coord) -> bool:
        """Record damage at ``coord``; return whether it belongs to this ship."""
        if coord not in self.coords:
            return False
        self.damage.add(coord)
        return True


def create_ship(ship_class: ShipClass) -> Ship:
    """Create an unplaced ship of the given class with a fresh id."""
    return Ship(ship_id=next(_ship_ids), ship_class=ship_class)
