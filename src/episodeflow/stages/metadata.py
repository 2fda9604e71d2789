"""Metadata stage: descriptive fields of the episode."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from episodeflow.models.schema import Metadata
from episodeflow.utils.normalize import get_path, list_at

logger = logging.getLogger(__name__)


def parse_date(value: Any) -> datetime | None:
    """Parse an ISO 8601 timestamp such as '2023-05-04T10:00:00Z'."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug(f"Unparsable date: {value!r}")
        return None


def ms_to_seconds(value: Any) -> float | None:
    """Convert a millisecond duration to seconds."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value) / 1000
    except (TypeError, ValueError):
        logger.debug(f"Unparsable duration: {value!r}")
        return None


def extract_metadata(episode: dict[str, Any], preview: str | None = None) -> Metadata:
    """Lift the descriptive fields of an episode into manifest metadata.

    Args:
        episode: The episode document.
        preview: Video preview URL resolved from the attachments.

    Returns:
        Metadata with a back-reference to the source episode.
    """
    mediapackage = get_path(episode, "mediapackage")
    if not isinstance(mediapackage, dict):
        mediapackage = {}

    return Metadata(
        title=mediapackage.get("title"),
        subject=get_path(mediapackage, "subjects", "subject"),
        description=episode.get("dcDescription"),
        language=mediapackage.get("language"),
        rights=episode.get("dcRightsHolder"),
        license=mediapackage.get("license"),
        series=mediapackage.get("series"),
        seriestitle=mediapackage.get("seriestitle"),
        presenters=list_at(mediapackage, "creators", "creator"),
        contributors=list_at(mediapackage, "contributors", "contributor"),
        start_date=parse_date(episode.get("dcCreated")),
        duration=ms_to_seconds(mediapackage.get("duration")),
        location=episode.get("dcSpatial"),
        uid=episode.get("id"),
        type=mediapackage.get("type"),
        preview=preview,
        opencast={"episode": episode},
    )
