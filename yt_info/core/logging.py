# Copyright (c) 2026 Pointmatic
#
# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at https://mozilla.org/MPL/2.0/.

"""Logging for yt-info: rich console output plus optional JSONL stage events."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "yt_info"

# Extra attributes carried by stage events; every JSONL line has all of them.
EVENT_FIELDS = ("video_id", "event", "details", "error")

# stdout carries the JSON payload, so console logs go to stderr.
_console = Console(stderr=True)


class JsonlFormatter(logging.Formatter):
    """One JSON object per record, keyed by the stage event fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
        }
        for name in EVENT_FIELDS:
            entry[name] = getattr(record, name, None)

        message = record.getMessage()
        if message:
            entry["message"] = message
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _console_handler(verbose: bool) -> RichHandler:
    handler = RichHandler(
        console=_console,
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return handler


def _jsonl_handler(path: Path) -> logging.FileHandler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(JsonlFormatter())
    handler.setLevel(logging.DEBUG)
    return handler


def setup_logging(*, verbose: bool = False, jsonl_path: Path | None = None) -> logging.Logger:
    """Configure and return the yt_info logger.

    The console shows warnings and up (degraded stages) unless ``verbose``.
    With ``jsonl_path``, every record down to DEBUG is also appended to that
    file, one JSON object per line.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    console = _console_handler(verbose)
    logger.addHandler(console)

    if jsonl_path is None:
        logger.setLevel(console.level)
    else:
        logger.addHandler(_jsonl_handler(Path(jsonl_path)))
        logger.setLevel(logging.DEBUG)

    return logger


def log_event(
    level: int,
    message: str,
    *,
    video_id: str | None = None,
    event: str | None = None,
    details: str | None = None,
    error: str | None = None,
) -> None:
    """Log a stage event; the keyword fields land in the JSONL output."""
    fields = {"video_id": video_id, "event": event, "details": details, "error": error}
    logging.getLogger(LOGGER_NAME).log(level, message, extra=fields)
