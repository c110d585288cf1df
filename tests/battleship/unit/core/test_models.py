from battleship.game.core.models import (
    AttackOutcome,
    CellState,
    Coord,
    Orientation,
    ShipClass,
    ShipPlacement,
    cells_for_placement,
    cells_for_run,
)


def test_ship_class_size_and_name_mapping() -> None:
    assert ShipClass.BATTLESHIP.size == 5
    assert ShipClass.DESTROYER.size == 4
    assert ShipClass.CRUISER.size == 3
    assert ShipClass.SUBMARINE.size == 2
    assert ShipClass.SUBMARINE.display_name == "Submarine"


def test_cells_for_placement_horizontal_and_vertical() -> None:
    horizontal = ShipPlacement(ShipClass.CRUISER, Coord(1, 2), Orientation.HORIZONTAL)
    vertical = ShipPlacement(ShipClass.CRUISER, Coord(1, 2), Orientation.VERTICAL)
    assert cells_for_placement(horizontal) == [Coord(1, 2), Coord(1, 3), Coord(1, 4)]
    assert cells_for_placement(vertical) == [Coord(1, 2), Coord(2, 2), Coord(3, 2)]


def test_cells_for_run_does_not_clip_at_edges() -> None:
    assert cells_for_run(Coord(9, 9), 2, horizontal=True) == [Coord(9, 9), Coord(9, 10)]


def test_outcome_and_cell_state_flags() -> None:
    assert AttackOutcome.MISS.resolved
    assert AttackOutcome.HIT_AND_SUNK.is_hit
    assert not AttackOutcome.ALREADY_ATTACKED.resolved
    assert not AttackOutcome.OUT_OF_BOUNDS.is_hit
    assert CellState.SUNK.attacked
    assert not CellState.OCCUPIED.attacked
    assert Orientation.from_flag(True) is Orientation.HORIZONTAL
