"""Attachment stage: filmstrip frames and video preview.

This stage handles:
- Timestamped segment previews, turned into the manifest frame list
- The single representative preview image of the video
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from episodeflow.config import ConversionConfig
from episodeflow.models.schema import Frame
from episodeflow.utils.logging import log_skipped
from episodeflow.utils.normalize import get_path, list_at

logger = logging.getLogger(__name__)

FRAME_TIME_RE = re.compile(r"time=T(\d+):(\d+):(\d+)")
PLAYER_PREVIEW_SUBTYPE = "player+preview"


@dataclass
class AttachmentResult:
    """Frames and video preview found among the attachments."""

    frame_list: list[Frame] = field(default_factory=list)
    preview: str | None = None


def parse_frame_time(ref: Any) -> int | None:
    """Seconds from start encoded as 'time=THH:MM:SS' in a ref, or None."""
    match = FRAME_TIME_RE.search(ref) if isinstance(ref, str) else None
    if match is None:
        return None
    hours, minutes, seconds = (int(g) for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def frame_from_attachment(attachment: Any, preview_attachment: str) -> Frame | None:
    """Build a frame from a segment preview attachment.

    Returns:
        The frame, or None unless the attachment has the segment preview
        type, a parsable timestamp and text-valued url and mimetype.
    """
    if not isinstance(attachment, dict) or attachment.get("type") != preview_attachment:
        return None

    time = parse_frame_time(attachment.get("ref"))
    if time is None:
        log_skipped(logger, "attachment", attachment.get("id"), "segment preview without timestamp")
        return None

    try:
        return Frame(
            id=f"frame_{time}",
            time=time,
            url=attachment.get("url"),
            thumb=attachment.get("url"),
            mimetype=attachment.get("mimetype"),
        )
    except ValidationError as e:
        log_skipped(logger, "attachment", attachment.get("id"), f"invalid frame: {e.error_count()} field error(s)")
        return None


def _subtype(flavor: Any) -> str | None:
    if not isinstance(flavor, str):
        return None
    return flavor.rsplit("/", 1)[-1]


def get_video_preview(
    mediapackage: dict[str, Any], config: ConversionConfig | None = None
) -> str | None:
    """Resolve the preview image of the whole video.

    The configured attachment types are tried in priority order. If none is
    present, the first attachment with a ``player+preview`` subtype is used.
    When several attachments share the winning type, the first one in
    document order is returned.

    Args:
        mediapackage: The ``mediapackage`` block of an episode.
        config: Conversion config (uses ``video_preview_attachments``).

    Returns:
        URL of the preview image, or None.
    """
    if config is None:
        config = ConversionConfig()
    attachments = [a for a in list_at(mediapackage, "attachments", "attachment") if isinstance(a, dict)]

    for preview_type in config.video_preview_attachments:
        for attachment in attachments:
            if attachment.get("type") == preview_type:
                return attachment.get("url")

    for attachment in attachments:
        if _subtype(attachment.get("type")) == PLAYER_PREVIEW_SUBTYPE:
            return attachment.get("url")

    return None


def process_attachments(
    episode: dict[str, Any], config: ConversionConfig | None = None
) -> AttachmentResult:
    """Collect the frame list and video preview of an episode.

    The video preview is only resolved when at least one attachment is not
    a timestamped segment preview.

    Args:
        episode: The episode document.
        config: Conversion config.

    Returns:
        AttachmentResult with frames in attachment order.
    """
    if config is None:
        config = ConversionConfig()
    mediapackage = get_path(episode, "mediapackage")
    result = AttachmentResult()
    needs_preview = False

    for attachment in list_at(mediapackage, "attachments", "attachment"):
        frame = frame_from_attachment(attachment, config.preview_attachment)
        if frame is not None:
            result.frame_list.append(frame)
        else:
            needs_preview = True

    if needs_preview:
        result.preview = get_video_preview(mediapackage, config)

    logger.debug(f"Found {len(result.frame_list)} frames, preview={result.preview!r}")
    return result
