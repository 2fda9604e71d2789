"""Logging utilities for episodeflow."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(
    name: str = "episodeflow",
    level: int = logging.INFO,
    stream: TextIO = sys.stderr,
) -> logging.Logger:
    """Get a configured logger for episodeflow.

    Args:
        name: Logger name.
        level: Logging level.
        stream: Output stream.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(stream)
        handler.setLevel(level)

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger


def log_skipped(logger: logging.Logger, kind: str, item_id: str | None, reason: str) -> None:
    """Log an input item that contributes nothing to the manifest.

    Args:
        logger: Logger instance.
        kind: Item kind ("track", "caption", "attachment").
        item_id: Source identifier of the item, if it has one.
        reason: Short explanation of why it was skipped.
    """
    logger.debug(f"Skipping {kind} {item_id or '<no id>'}: {reason}")
