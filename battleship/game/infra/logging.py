"""Logging configuration for the application."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

__all__ = ["JsonFormatter", "LoggingConfig", "build_logging_config", "configure_logging", "get_logger", "setup_logging"]

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else came in through ``extra=``.
_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Where log records go and how they are rendered."""

    level_name: str = "INFO"
    console_format: str = "json"  # text|json
    file_path: str | None = None
    file_format: str = "json"  # text|json


class JsonFormatter(logging.Formatter):
    """One JSON object per record; ``extra`` values land under ``fields``."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        fields = {key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS}
        if fields:
            payload["fields"] = fields
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _make_formatter(kind: str) -> logging.Formatter:
    return JsonFormatter() if kind.strip().lower() == "json" else logging.Formatter(TEXT_FORMAT)


def _make_handlers(config: LoggingConfig) -> list[logging.Handler]:
    console = logging.StreamHandler()
    console.setFormatter(_make_formatter(config.console_format))
    if not config.file_path:
        return [console]
    path = Path(config.file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    run_file = logging.FileHandler(path, encoding="utf-8", delay=True)
    run_file.setFormatter(_make_formatter(config.file_format))
    return [console, run_file]


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root handlers according to ``config``."""
    root = logging.getLogger()
    root.handlers[:] = _make_handlers(config)
    root.setLevel(getattr(logging, config.level_name.upper(), logging.INFO))


def build_logging_config() -> LoggingConfig:
    """Read level, console format and run-log directory from the environment."""
    level_name = os.getenv("BATTLESHIP_LOG_LEVEL") or os.getenv("LOG_LEVEL") or "INFO"
    log_dir = os.getenv("BATTLESHIP_LOG_DIR", "").strip()
    file_path = None
    if log_dir:
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S")
        file_path = str(Path(log_dir) / f"battleship_run_{stamp}.jsonl")
    return LoggingConfig(
        level_name=level_name.upper(),
        console_format=os.getenv("LOG_FORMAT", "json").lower(),
        file_path=file_path,
    )


def setup_logging() -> None:
    """Configure root logging from environment."""
    config = build_logging_config()
    configure_logging(config)
    if config.file_path:
        get_logger(__name__).info("logging_file=%s", config.file_path)
