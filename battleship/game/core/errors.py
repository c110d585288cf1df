"""Exceptions raised when the engine is driven incorrectly.

Rejected placements and attacks are not errors; they come back as
``PlacementError`` / ``AttackOutcome`` values.
"""


class BattleshipError(Exception):
    """Base class for engine misuse."""


class ShipAlreadyPlaced(BattleshipError):
    """A ship instance was handed to ``place_ship`` a second time."""


class CoordinateOutOfBounds(BattleshipError):
    """A query addressed a cell outside the board."""


class FleetIncomplete(BattleshipError):
    """Combat was requested before a board held the configured fleet."""


class MatchStateError(BattleshipError):
    """An operation was called in the wrong match phase."""
