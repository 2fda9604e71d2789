"""Segment stage: transcription entries."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from episodeflow.config import ConversionConfig
from episodeflow.models.schema import Transcription
from episodeflow.utils.logging import log_skipped
from episodeflow.utils.normalize import as_list, get_path

logger = logging.getLogger(__name__)


def unwrap_preview(previews: Any) -> str | None:
    """Text payload of the first preview reference of a segment.

    A preview element with attributes arrives as ``{"$": text, ...}``;
    one without arrives as the bare text.
    """
    preview_list = as_list(get_path(previews, "preview"))
    if not preview_list:
        return None
    first = preview_list[0]
    return first.get("$") if isinstance(first, dict) else first


def process_segments(
    episode: dict[str, Any], config: ConversionConfig | None = None
) -> list[Transcription] | None:
    """Convert the episode's segments into transcription entries.

    Args:
        episode: The episode document.
        config: Conversion config (uses ``distinguish_empty_segments``).

    Returns:
        Transcriptions in segment order, or None when the episode has no
        segments block. An empty block also yields None unless
        ``distinguish_empty_segments`` is set.
    """
    if config is None:
        config = ConversionConfig()

    segments = episode.get("segments")
    if segments is None:
        return None

    transcriptions: list[Transcription] = []
    for segment in as_list(get_path(segments, "segment")):
        if not isinstance(segment, dict):
            continue
        try:
            transcriptions.append(
                Transcription(
                    index=segment.get("index"),
                    preview=unwrap_preview(segment.get("previews")),
                    text=segment.get("text"),
                    time=segment.get("time"),
                    duration=segment.get("duration"),
                )
            )
        except ValidationError as e:
            log_skipped(logger, "segment", segment.get("index"), f"invalid segment: {e.error_count()} field error(s)")

    if not transcriptions and not config.distinguish_empty_segments:
        logger.debug("Segments block without segments, omitting transcriptions")
        return None
    return transcriptions
