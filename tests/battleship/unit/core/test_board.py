import numpy as np
import pytest

from battleship.game.core.board import GameBoard, create_board, create_targeting_board
from battleship.game.core.errors import CoordinateOutOfBounds, ShipAlreadyPlaced
from battleship.game.core.models import AttackOutcome, CellState, Coord, Orientation, PlacementError, ShipClass
from battleship.game.core.ship import create_ship


def _occupied(board: GameBoard) -> set[Coord]:
    rows, cols = np.nonzero(board.cells == CellState.OCCUPIED)
    return {Coord(int(r), int(c)) for r, c in zip(rows, cols)}


def test_create_board_is_empty_and_sized() -> None:
    board = create_board(7)
    assert board.size == 7
    assert board.cells.shape == (7, 7)
    assert not board.cells.any()
    assert board.ship_count() == 0
    with pytest.raises(ValueError):
        create_board(0)


def test_place_ship_occupies_exact_run(board: GameBoard) -> None:
    ship = create_ship(ShipClass.DESTROYER)
    assert board.place_ship(Coord(3, 1), ship, horizontal=False) is None
    run = [Coord(3, 1), Coord(4, 1), Coord(5, 1), Coord(6, 1)]
    assert _occupied(board) == set(run)
    assert ship.coords == run
    assert ship.orientation is Orientation.VERTICAL
    assert len(ship.coords) == ShipClass.DESTROYER.size
    assert board.ships[ship.ship_id] is ship
    assert all(board.ship_at(cell) is ship for cell in run)
    assert board.ship_at(Coord(0, 0)) is None


def test_place_ship_rejects_out_of_bounds_without_mutation(board: GameBoard) -> None:
    before = board.cells.copy()
    ship = create_ship(ShipClass.BATTLESHIP)
    assert board.place_ship(Coord(0, 6), ship, horizontal=True) is PlacementError.OUT_OF_BOUNDS
    assert board.place_ship(Coord(-1, 0), ship, horizontal=False) is PlacementError.OUT_OF_BOUNDS
    assert np.array_equal(board.cells, before)
    assert not ship.is_placed
    assert board.ship_count() == 0


def test_place_ship_rejects_overlap_without_mutation(board: GameBoard) -> None:
    assert board.place_ship(Coord(2, 2), create_ship(ShipClass.CRUISER), horizontal=True) is None
    before_cells = board.cells.copy()
    before_ids = board.ship_ids.copy()
    crossing = create_ship(ShipClass.DESTROYER)
    assert board.place_ship(Coord(0, 3), crossing, horizontal=False) is PlacementError.OVERLAP
    assert np.array_equal(board.cells, before_cells)
    assert np.array_equal(board.ship_ids, before_ids)
    assert not crossing.is_placed
    assert board.ship_count() == 1


def test_bounds_checked_before_overlap(board: GameBoard) -> None:
    board.place_ship(Coord(0, 8), create_ship(ShipClass.SUBMARINE), horizontal=True)
    assert board.check_placement(Coord(0, 7), 4, horizontal=True) is PlacementError.OUT_OF_BOUNDS


def test_adjacent_ships_are_allowed(board: GameBoard) -> None:
    assert board.place_ship(Coord(0, 0), create_ship(ShipClass.CRUISER), horizontal=True) is None
    assert board.place_ship(Coord(1, 0), create_ship(ShipClass.CRUISER), horizontal=True) is None


def test_placing_same_ship_twice_raises(board: GameBoard) -> None:
    ship = create_ship(ShipClass.SUBMARINE)
    board.place_ship(Coord(0, 0), ship, horizontal=True)
    with pytest.raises(ShipAlreadyPlaced):
        board.place_ship(Coord(5, 5), ship, horizontal=True)


def test_receive_attack_miss_hit_and_repeat(board: GameBoard) -> None:
    ship = create_ship(ShipClass.CRUISER)
    board.place_ship(Coord(1, 1), ship, horizontal=True)

    miss = board.receive_attack(Coord(0, 0))
    assert miss.outcome is AttackOutcome.MISS
    assert board.cell_state(Coord(0, 0)) is CellState.MISS
    assert board.receive_attack(Coord(0, 0)).outcome is AttackOutcome.ALREADY_ATTACKED

    hit = board.receive_attack(Coord(1, 2))
    assert hit.outcome is AttackOutcome.HIT
    assert hit.ship_id == ship.ship_id
    assert board.cell_state(Coord(1, 2)) is CellState.HIT
    assert ship.damage == {Coord(1, 2)}

    before = board.cells.copy()
    assert board.receive_attack(Coord(1, 2)).outcome is AttackOutcome.ALREADY_ATTACKED
    assert np.array_equal(board.cells, before)
    assert ship.damage == {Coord(1, 2)}


def test_hit_and_sunk_returned_once_and_marks_cells(board: GameBoard) -> None:
    ship = create_ship(ShipClass.CRUISER)
    board.place_ship(Coord(4, 4), ship, horizontal=False)
    outcomes = [board.receive_attack(cell).outcome for cell in ship.coords]
    assert outcomes == [AttackOutcome.HIT, AttackOutcome.HIT, AttackOutcome.HIT_AND_SUNK]
    assert all(board.cell_state(cell) is CellState.SUNK for cell in ship.coords)
    repeats = [board.receive_attack(cell).outcome for cell in ship.coords]
    assert repeats == [AttackOutcome.ALREADY_ATTACKED] * 3


def test_sunk_result_carries_ship_details(board: GameBoard) -> None:
    ship = create_ship(ShipClass.SUBMARINE)
    board.place_ship(Coord(9, 8), ship, horizontal=True)
    board.receive_attack(Coord(9, 9))
    sunk = board.receive_attack(Coord(9, 8))
    assert sunk.outcome is AttackOutcome.HIT_AND_SUNK
    assert sunk.ship_id == ship.ship_id
    assert sunk.sunk_class is ShipClass.SUBMARINE
    assert sunk.sunk_cells == (Coord(9, 8), Coord(9, 9))


@pytest.mark.parametrize("target", [Coord(-1, 0), Coord(10, 0), Coord(0, 10), Coord(3, -2)])
def test_out_of_bounds_attack_changes_nothing(board: GameBoard, target: Coord) -> None:
    board.place_ship(Coord(0, 0), create_ship(ShipClass.SUBMARINE), horizontal=True)
    before = board.cells.copy()
    assert board.receive_attack(target).outcome is AttackOutcome.OUT_OF_BOUNDS
    assert np.array_equal(board.cells, before)
    assert not board.was_attacked(target)


def test_cell_state_out_of_bounds_raises(board: GameBoard) -> None:
    with pytest.raises(CoordinateOutOfBounds):
        board.cell_state(Coord(10, 10))


def test_is_defeated_only_after_last_ship_sinks(board: GameBoard) -> None:
    assert not board.is_defeated()
    first = create_ship(ShipClass.SUBMARINE)
    second = create_ship(ShipClass.SUBMARINE)
    board.place_ship(Coord(0, 0), first, horizontal=True)
    board.place_ship(Coord(5, 5), second, horizontal=False)

    for cell in first.coords:
        board.receive_attack(cell)
    assert not board.is_defeated()
    assert board.remaining_ships() == [second]

    board.receive_attack(second.coords[0])
    assert not board.is_defeated()
    board.receive_attack(second.coords[1])
    assert board.is_defeated()
    assert board.remaining_ships() == []


def test_render_hides_ships_unless_revealed() -> None:
    board = create_board(3)
    board.place_ship(Coord(0, 0), create_ship(ShipClass.SUBMARINE), horizontal=True)
    board.receive_attack(Coord(0, 0))
    board.receive_attack(Coord(2, 2))
    assert board.render().splitlines() == ["  0 1 2", "0 X . .", "1 . . .", "2 . . O"]
    assert board.render(reveal=True).splitlines()[1] == "0 X S ."


def test_boards_compare_by_identity() -> None:
    first = create_board()
    second = create_board()
    assert first == first
    assert first != second
    assert create_targeting_board() != create_targeting_board()
