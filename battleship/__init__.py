"""Two-player Battleship game engine."""

from battleship.game.core.board import GameBoard, TargetingBoard, create_board, create_targeting_board
from battleship.game.core.match import Match, MatchPhase
from battleship.game.core.models import (
    AttackOutcome,
    AttackResult,
    CellState,
    Coord,
    PlacementError,
    ShipClass,
)
from battleship.game.core.player import Player, TurnResult
from battleship.game.core.ship import Ship, create_ship

__all__ = [
    "AttackOutcome",
    "AttackResult",
    "CellState",
    "Coord",
    "GameBoard",
    "Match",
    "MatchPhase",
    "PlacementError",
    "Player",
    "Ship",
    "ShipClass",
    "TargetingBoard",
    "TurnResult",
    "create_board",
    "create_ship",
    "create_targeting_board",
]
