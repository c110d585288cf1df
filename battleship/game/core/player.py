"""Player: a named owner of one fleet board and one targeting board."""

from __future__ import annotations

from dataclasses import dataclass

from battleship.game.core.board import GameBoard, TargetingBoard, create_board, create_targeting_board
from battleship.game.core.models import (
    BOARD_SIZE,
    AttackOutcome,
    AttackResult,
    Coord,
    FleetPlacement,
    PlacementError,
    ShipClass,
)
from battleship.game.core.ship import Ship, create_ship


@dataclass(frozen=True, slots=True)
class TurnResult:
    """Outcome of one ``take_turn`` call."""

    attack: AttackResult
    opponent_defeated: bool = False

    @property
    def outcome(self) -> AttackOutcome:
        return self.attack.outcome

    @property
    def consumes_turn(self) -> bool:
        """Rejected shots leave the turn with the shooter."""
        return self.attack.outcome.resolved


class Player:
    """Owns a fleet board and the shadow board of shots fired at the opponent."""

    def __init__(
        self,
        name: str,
        game_board: GameBoard | None = None,
        targeting_board: TargetingBoard | None = None,
        *,
        board_size: int = BOARD_SIZE,
    ) -> None:
        if not name or not name.strip():
            raise ValueError("Player name must not be empty.")
        self._name = name.strip()
        self._game_board = game_board if game_board is not None else create_board(board_size)
        self._targeting_board = (
            targeting_board if targeting_board is not None else create_targeting_board(board_size)
        )

    def __repr__(self) -> str:
        return f"Player(name={self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def game_board(self) -> GameBoard:
        return self._game_board

    @game_board.setter
    def game_board(self, board: GameBoard) -> None:
        self._game_board = board

    @property
    def targeting_board(self) -> TargetingBoard:
        return self._targeting_board

    @targeting_board.setter
    def targeting_board(self, board: TargetingBoard) -> None:
        self._targeting_board = board

    def place_ship(
        self, ship_class: ShipClass, origin: Coord, horizontal: bool
    ) -> tuple[Ship | None, PlacementError | None]:
        """Create a ship of ``ship_class`` and place it on the own board."""
        ship = create_ship(ship_class)
        error = self._game_board.place_ship(origin, ship, horizontal)
        if error is not None:
            return None, error
        return ship, None

    def place_ships(self, fleet: FleetPlacement) -> PlacementError | None:
        """Place a whole fleet, or nothing if any ship is rejected."""
        trial = GameBoard(
            size=self._game_board.size,
            cells=self._game_board.cells.copy(),
            ship_ids=self._game_board.ship_ids.copy(),
        )
        for placement in fleet.ships:
            error = trial.check_placement(
                placement.origin, placement.ship_class.size, placement.horizontal
            )
            if error is not None:
                return error
            trial.place_ship(placement.origin, create_ship(placement.ship_class), placement.horizontal)

        for placement in fleet.ships:
            self._game_board.place_ship(
                placement.origin, create_ship(placement.ship_class), placement.horizontal
            )
        return None

    def take_turn(self, opponent_board: GameBoard, target: Coord) -> TurnResult:
        """Fire at ``target`` on the opponent's board and record the outcome.

        Shots outside the targeting board or at cells already fired at are
        answered locally and never reach the opponent.
        """
        if not self._targeting_board.in_bounds(target):
            return TurnResult(AttackResult(AttackOutcome.OUT_OF_BOUNDS, target))
        if self._targeting_board.was_targeted(target):
            return TurnResult(AttackResult(AttackOutcome.ALREADY_ATTACKED, target))

        result = opponent_board.receive_attack(target)
        self._targeting_board.record(result)
        defeated = result.outcome.is_hit and opponent_board.is_defeated()
        return TurnResult(result, opponent_defeated=defeated)
