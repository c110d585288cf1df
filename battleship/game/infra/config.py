"""Application configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from battleship.game.core.fleet import parse_composition
from battleship.game.core.models import BOARD_SIZE, DEFAULT_FLEET, ShipClass


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Match setup parameters resolved from the environment."""

    board_size: int = BOARD_SIZE
    composition: dict[ShipClass, int] = field(default_factory=lambda: dict(DEFAULT_FLEET))
    player_names: tuple[str, str] = ("Player 1", "Player 2")


def parse_env_line(line: str) -> tuple[str, str] | None:
    """Split one ``KEY=VALUE`` line; blanks, comments and malformed lines give None."""
    stripped = line.strip()
    if stripped.startswith("#"):
        return None
    key, sep, value = (part.strip() for part in stripped.partition("="))
    if not sep or not key:
        return None
    if value[:1] in ("'", '"') and len(value) >= 2 and value[-1] == value[0]:
        value = value[1:-1]
    return key, value


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Copy the pairs of an env file into ``os.environ``; a missing file is ignored."""
    env_path = Path(path)
    if not env_path.is_file():
        return
    pairs = filter(None, map(parse_env_line, env_path.read_text(encoding="utf-8").splitlines()))
    for key, value in pairs:
        if override_existing:
            os.environ[key] = value
        else:
            os.environ.setdefault(key, value)


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files left to right; later files win (``.env`` then ``.env.local``)."""
    to_load = tuple(paths) if paths is not None else (".env", ".env.local")
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def load_game_config() -> GameConfig:
    """Resolve board size, fleet composition and player names from env."""
    raw_size = os.getenv("BATTLESHIP_BOARD_SIZE", "").strip()
    if raw_size:
        try:
            board_size = int(raw_size)
        except ValueError as exc:
            raise ValueError("BATTLESHIP_BOARD_SIZE must be an integer.") from exc
    else:
        board_size = BOARD_SIZE
    if board_size < 1:
        raise ValueError("BATTLESHIP_BOARD_SIZE must be at least 1.")

    raw_fleet = os.getenv("BATTLESHIP_FLEET", "").strip()
    composition = parse_composition(raw_fleet) if raw_fleet else dict(DEFAULT_FLEET)
    too_long = [ship_class.value for ship_class, n in composition.items() if n and ship_class.size > board_size]
    if too_long:
        raise ValueError(f"Ships do not fit on a {board_size}x{board_size} board: {', '.join(too_long)}.")
    fleet_cells = sum(ship_class.size * n for ship_class, n in composition.items())
    if fleet_cells > board_size * board_size:
        raise ValueError(
            f"Fleet needs {fleet_cells} cells but a {board_size}x{board_size} board has {board_size * board_size}."
        )

    names = (
        os.getenv("BATTLESHIP_PLAYER1_NAME", "").strip() or "Player 1",
        os.getenv("BATTLESHIP_PLAYER2_NAME", "").strip() or "Player 2",
    )
    if names[0] == names[1]:
        raise ValueError("Player names must differ.")
    return GameConfig(board_size=board_size, composition=composition, player_names=names)
