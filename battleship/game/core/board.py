"""Board state representation and attack resolution."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from battleship.game.core.errors import CoordinateOutOfBounds
from battleship.game.core.models import (
    BOARD_SIZE,
    AttackOutcome,
    AttackResult,
    CellState,
    Coord,
    Orientation,
    PlacementError,
    cells_for_run,
)
from battleship.game.core.ship import Ship

_SYMBOLS: dict[CellState, str] = {
    CellState.EMPTY: ".",
    CellState.OCCUPIED: ".",
    CellState.HIT: "X",
    CellState.MISS: "O",
    CellState.SUNK: "#",
}


def _empty_grid(size: int, dtype: type) -> np.ndarray:
    return np.zeros((size, size), dtype=dtype)


def _render_grid(cells: np.ndarray, reveal: bool) -> str:
    size = cells.shape[0]
    width = len(str(size - 1))
    lines = [" " * (width + 1) + " ".join(str(col % 10) for col in range(size))]
    for row in range(size):
        symbols = []
        for col in range(size):
            state = CellState(int(cells[row, col]))
            if reveal and state is CellState.OCCUPIED:
                symbols.append("S")
            else:
                symbols.append(_SYMBOLS[state])
        lines.append(f"{row:>{width}} " + " ".join(symbols))
    return "\n".join(lines)


@dataclass(slots=True, eq=False)
class GameBoard:
    """Numpy-backed fleet board owning its placed ships."""

    size: int = BOARD_SIZE
    cells: np.ndarray = field(default_factory=lambda: _empty_grid(BOARD_SIZE, np.int8))
    ship_ids: np.ndarray = field(default_factory=lambda: _empty_grid(BOARD_SIZE, np.int64))
    ships: dict[int, Ship] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError("Board size must be at least 1.")
        if self.cells.shape != (self.size, self.size):
            self.cells = _empty_grid(self.size, np.int8)
        if self.ship_ids.shape != (self.size, self.size):
            self.ship_ids = _empty_grid(self.size, np.int64)

    def in_bounds(self, coord: Coord) -> bool:
        """Return whether the coordinate is in board bounds."""
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def cell_state(self, coord: Coord) -> CellState:
        if not self.in_bounds(coord):
            raise CoordinateOutOfBounds(f"{coord} is outside a {self.size}x{self.size} board.")
        return CellState(int(self.cells[coord.row, coord.col]))

    def ship_at(self, coord: Coord) -> Ship | None:
        """Return the ship covering ``coord``, sunk or not."""
        if not self.in_bounds(coord):
            return None
        ship_id = int(self.ship_ids[coord.row, coord.col])
        return self.ships.get(ship_id)

    def was_attacked(self, coord: Coord) -> bool:
        return self.in_bounds(coord) and self.cell_state(coord).attacked

    def check_placement(
        self, origin: Coord, length: int, horizontal: bool
    ) -> PlacementError | None:
        """Validate a run without touching the board."""
        run = cells_for_run(origin, length, horizontal)
        if not all(self.in_bounds(cell) for cell in run):
            return PlacementError.OUT_OF_BOUNDS
        if any(self.cells[cell.row, cell.col] != CellState.EMPTY for cell in run):
            return PlacementError.OVERLAP
        return None

    def can_place(self, origin: Coord, ship: Ship, horizontal: bool) -> bool:
        return self.check_placement(origin, ship.length, horizontal) is None

    def place_ship(self, origin: Coord, ship: Ship, horizontal: bool) -> PlacementError | None:
        """Place ``ship`` with its bow at ``origin``.

        Horizontal runs extend along increasing column, vertical runs along
        increasing row. Returns ``None`` on success or the first rejection
        reason; a rejected placement leaves the board untouched.
        """
        error = self.check_placement(origin, ship.length, horizontal)
        if error is not None:
            return error
        run = cells_for_run(origin, ship.length, horizontal)
        ship.bind(run, Orientation.from_flag(horizontal))
        for cell in run:
            self.cells[cell.row, cell.col] = CellState.OCCUPIED
            self.ship_ids[cell.row, cell.col] = ship.ship_id
        self.ships[ship.ship_id] = ship
        return None

    def receive_attack(self, target: Coord) -> AttackResult:
        """Resolve a shot against this board."""
        if not self.in_bounds(target):
            return AttackResult(AttackOutcome.OUT_OF_BOUNDS, target)
        state = self.cell_state(target)
        if state.attacked:
            return AttackResult(AttackOutcome.ALREADY_ATTACKED, target)
        if state is CellState.EMPTY:
            self.cells[target.row, target.col] = CellState.MISS
            return AttackResult(AttackOutcome.MISS, target)

        ship_id = int(self.ship_ids[target.row, target.col])
        ship = self.ships[ship_id]
        self.cells[target.row, target.col] = CellState.HIT
        ship.register_hit(target)
        if not ship.is_sunk:
            return AttackResult(AttackOutcome.HIT, target, ship_id=ship_id)

        for cell in ship.coords:
            self.cells[cell.row, cell.col] = CellState.SUNK
        return AttackResult(
            AttackOutcome.HIT_AND_SUNK,
            target,
            ship_id=ship_id,
            sunk_class=ship.ship_class,
            sunk_cells=tuple(ship.coords),
        )

    def is_defeated(self) -> bool:
        """Return whether every owned ship is sunk. Empty boards never lose."""
        return bool(self.ships) and all(ship.is_sunk for ship in self.ships.values())

    def ship_count(self) -> int:
        return len(self.ships)

    def remaining_ships(self) -> list[Ship]:
        return [ship for ship in self.ships.values() if not ship.is_sunk]

    def render(self, reveal: bool = False) -> str:
        """Text grid; occupied cells are shown as ``S`` only when revealed."""
        return _render_grid(self.cells, reveal)


@dataclass(slots=True, eq=False)
class TargetingBoard:
    """Shadow grid of the shots a player has fired. Holds no ship identity."""

    size: int = BOARD_SIZE
    cells: np.ndarray = field(default_factory=lambda: _empty_grid(BOARD_SIZE, np.int8))

    def __post_init__(self) -> None:
        if self.size < 1:
            raise ValueError("Board size must be at least 1.")
        if self.cells.shape != (self.size, self.size):
            self.cells = _empty_grid(self.size, np.int8)

    def in_bounds(self, coord: Coord) -> bool:
        return 0 <= coord.row < self.size and 0 <= coord.col < self.size

    def cell_state(self, coord: Coord) -> CellState:
        if not self.in_bounds(coord):
            raise CoordinateOutOfBounds(f"{coord} is outside a {self.size}x{self.size} board.")
        return CellState(int(self.cells[coord.row, coord.col]))

    def was_targeted(self, coord: Coord) -> bool:
        return self.in_bounds(coord) and self.cell_state(coord).attacked

    def record(self, result: AttackResult) -> None:
        """Copy a resolved attack outcome onto the shadow grid."""
        outcome = result.outcome
        if not outcome.resolved:
            return
        target = result.target
        if outcome is AttackOutcome.MISS:
            self.cells[target.row, target.col] = CellState.MISS
        elif outcome is AttackOutcome.HIT:
            self.cells[target.row, target.col] = CellState.HIT
        else:
            for cell in result.sunk_cells or (target,):
                if self.in_bounds(cell):
                    self.cells[cell.row, cell.col] = CellState.SUNK

    def shots_fired(self) -> int:
        return int(np.count_nonzero(self.cells))

    def render(self) -> str:
        return _render_grid(self.cells, reveal=False)


def create_board(size: int = BOARD_SIZE) -> GameBoard:
    """Create an empty fleet board."""
    return GameBoard(size=size)


def create_targeting_board(size: int = BOARD_SIZE) -> TargetingBoard:
    """Create an empty targeting board."""
    return TargetingBoard(size=size)
