"""Caption stage: caption tracks from flavor-encoded descriptors.

Captions may be delivered as attachments or as media tracks, flavored
``captions/<subtype>[+<lang>]``. Tags refine the flavor:

- ``lang:<code>`` overrides the language
- ``generator-type:auto`` marks automatically generated captions
- ``type:closed-caption`` marks closed captions
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from episodeflow.i18n import (
    AUTOMATICALLY_GENERATED,
    UNDEFINED_CAPTION,
    UNKNOWN_LANGUAGE,
    DefaultLocalizer,
    Localizer,
)
from episodeflow.models.schema import Caption
from episodeflow.utils.logging import log_skipped
from episodeflow.utils.normalize import get_path, list_at

logger = logging.getLogger(__name__)

CAPTIONS_FLAVOR_RE = re.compile(r"^captions/([^+]+)(\+(.+))?")

LANG_TAG = "lang:"
GENERATOR_TYPE_TAG = "generator-type:"
TYPE_TAG = "type:"

CLOSED_CAPTION_MARKER = "[CC] "


@dataclass
class CaptionResult:
    """Outcome of reading one caption candidate."""

    caption: Caption | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.caption is not None


@dataclass
class CaptionTags:
    """Caption hints carried in element tags."""

    lang: str | None = None
    auto_generated: bool = False
    closed_caption: bool = False


def parse_caption_tags(tags: list[Any]) -> CaptionTags:
    """Read language, generator and closed-caption hints from tags."""
    result = CaptionTags()
    for tag in tags:
        if not isinstance(tag, str):
            continue
        if tag.startswith(LANG_TAG):
            result.lang = tag[len(LANG_TAG):]
        elif tag.startswith(GENERATOR_TYPE_TAG):
            if tag[len(GENERATOR_TYPE_TAG):] == "auto":
                result.auto_generated = True
        elif tag.startswith(TYPE_TAG):
            if tag[len(TYPE_TAG):] == "closed-caption":
                result.closed_caption = True
    return result


def caption_format(url: str, subtype: str) -> str:
    """Format of a caption file: its extension, with 'dfxp' for legacy XML."""
    extension = url.rsplit(".", 1)[-1]
    if subtype == "dfxp" and extension == "xml":
        return subtype
    return extension


def caption_label(
    lang: str | None,
    localizer: Localizer,
    closed_caption: bool = False,
    auto_generated: bool = False,
) -> str:
    """Human-readable label for a caption track."""
    if not lang:
        return localizer.translate(UNDEFINED_CAPTION)

    name = localizer.language_name(lang) or localizer.translate(UNKNOWN_LANGUAGE)
    prefix = CLOSED_CAPTION_MARKER if closed_caption else ""
    suffix = f" ({localizer.translate(AUTOMATICALLY_GENERATED)})" if auto_generated else ""
    return f"{prefix}{name}{suffix}"


def read_caption(candidate: Any, localizer: Localizer) -> CaptionResult | None:
    """Read a caption from an attachment or track.

    Returns:
        None if the candidate is not flavored as a caption, otherwise a
        CaptionResult holding either the caption or the reason it failed.
    """
    if not isinstance(candidate, dict):
        return None

    flavor = candidate.get("type")
    match = CAPTIONS_FLAVOR_RE.match(flavor) if isinstance(flavor, str) else None
    if match is None:
        return None

    subtype = match.group(1)
    url = candidate.get("url")
    if not isinstance(url, str) or not url:
        return CaptionResult(error="missing url")

    tags = parse_caption_tags(list_at(candidate, "tags", "tag"))
    lang = tags.lang if tags.lang is not None else match.group(3)

    try:
        caption = Caption(
            id=candidate.get("id"),
            lang=lang,
            text=caption_label(lang, localizer, tags.closed_caption, tags.auto_generated),
            url=url,
            format=caption_format(url, subtype),
        )
    except ValidationError as e:
        return CaptionResult(error=f"invalid caption: {e.error_count()} field error(s)")

    return CaptionResult(caption=caption)


def read_captions(candidates: list[Any], localizer: Localizer) -> list[Caption]:
    """Read captions from candidates, skipping those that fail."""
    captions: list[Caption] = []
    for candidate in candidates:
        result = read_caption(candidate, localizer)
        if result is None:
            continue
        if not result.ok:
            item_id = candidate.get("id") if isinstance(candidate, dict) else None
            log_skipped(logger, "caption", item_id, result.error or "unknown error")
            continue
        captions.append(result.caption)
    return captions


def extract_captions(episode: dict[str, Any], localizer: Localizer | None = None) -> list[Caption]:
    """Extract captions from an episode's attachments, then its tracks.

    Args:
        episode: The episode document.
        localizer: Label lookup; DefaultLocalizer if None.

    Returns:
        Caption entries in attachment order followed by track order.
    """
    localizer = localizer or DefaultLocalizer()
    mediapackage = get_path(episode, "mediapackage")

    captions = read_captions(list_at(mediapackage, "attachments", "attachment"), localizer)
    captions += read_captions(list_at(mediapackage, "media", "track"), localizer)
    return captions
