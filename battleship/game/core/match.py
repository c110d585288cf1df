"""Match state machine: setup, alternating combat turns, result."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from battleship.game.core.errors import FleetIncomplete, MatchStateError
from battleship.game.core.fleet import FleetComposition, is_fleet_complete, missing_ships
from battleship.game.core.models import DEFAULT_FLEET, AttackOutcome, Coord
from battleship.game.core.player import Player, TurnResult
from battleship.game.infra.logging import get_logger

logger = get_logger(__name__)


class MatchPhase(StrEnum):
    """Match lifecycle phase."""

    SETUP = "SETUP"
    COMBAT = "COMBAT"
    FINISHED = "FINISHED"


@dataclass(slots=True)
class Match:
    """Two players, one of whom is on turn.

    Shots are fired through ``fire``; rejected shots keep the turn with the
    shooter, resolved shots hand it over unless they end the match.
    """

    players: tuple[Player, Player]
    composition: FleetComposition = field(default_factory=lambda: dict(DEFAULT_FLEET))
    phase: MatchPhase = MatchPhase.SETUP
    current_index: int = 0
    winner: Player | None = None
    turn_count: int = 0
    history: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if len(self.players) != 2:
            raise ValueError("A match needs exactly two players.")
        self._check_board_sizes()

    def _check_board_sizes(self) -> None:
        if self.players[0].game_board.size != self.players[1].game_board.size:
            raise ValueError("Both players must use boards of the same size.")
        for index, player in enumerate(self.players):
            opponent_size = self.players[1 - index].game_board.size
            if player.targeting_board.size != opponent_size:
                raise ValueError(
                    f"{player.name} targeting board is {player.targeting_board.size}x"
                    f"{player.targeting_board.size}, opponent board is {opponent_size}x{opponent_size}."
                )

    @property
    def current_player(self) -> Player:
        return self.players[self.current_index]

    @property
    def opponent(self) -> Player:
        return self.players[1 - self.current_index]

    @property
    def is_over(self) -> bool:
        return self.phase is MatchPhase.FINISHED

    def ready_for_combat(self) -> bool:
        return all(is_fleet_complete(player.game_board, self.composition) for player in self.players)

    def start(self) -> None:
        """Leave setup once both boards hold exactly the configured fleet."""
        if self.phase is not MatchPhase.SETUP:
            raise MatchStateError(f"Cannot start a match in phase {self.phase.value}.")
        self._check_board_sizes()
        for player in self.players:
            if not is_fleet_complete(player.game_board, self.composition):
                missing = missing_ships(player.game_board, self.composition)
                detail = ", ".join(f"{n}x {ship_class.value}" for ship_class, n in missing.items())
                raise FleetIncomplete(
                    f"{player.name} fleet does not match the configured composition"
                    + (f" (missing {detail})." if detail else ".")
                )
        self.phase = MatchPhase.COMBAT
        self.current_index = 0
        logger.info(
            "match_started players=%s,%s first=%s",
            self.players[0].name,
            self.players[1].name,
            self.current_player.name,
        )

    def fire(self, target: Coord) -> TurnResult:
        """Let the current player shoot at the opponent's board."""
        if self.phase is not MatchPhase.COMBAT:
            raise MatchStateError(f"Cannot fire in phase {self.phase.value}.")

        shooter = self.current_player
        defender = self.opponent
        result = shooter.take_turn(defender.game_board, target)
        logger.debug(
            "shot shooter=%s target=%s outcome=%s",
            shooter.name,
            target,
            result.outcome.value,
        )
        if not result.consumes_turn:
            return result

        self.turn_count += 1
        self.history.append(_describe_shot(shooter, result))
        if result.opponent_defeated:
            self.phase = MatchPhase.FINISHED
            self.winner = shooter
            self.history.append(f"{shooter.name} wins.")
            logger.info("match_finished winner=%s turns=%d", shooter.name, self.turn_count)
            return result

        self.current_index = 1 - self.current_index
        return result


def _describe_shot(shooter: Player, result: TurnResult) -> str:
    attack = result.attack
    if attack.outcome is AttackOutcome.HIT_AND_SUNK:
        sunk = attack.sunk_class.display_name if attack.sunk_class else "ship"
        return f"{shooter.name} fired at {attack.target}: sunk {sunk}."
    return f"{shooter.name} fired at {attack.target}: {attack.outcome.value.lower()}."
