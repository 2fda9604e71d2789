"""Stream stage: track classification and stream merging.

This stage handles:
- Matching each media track against an ordered table of stream-type rules
- Extracting a type-specific source descriptor for each matched track
- Grouping sources by content category and assigning the main audio role
- Dropping per-rendition HLS playlists when a master playlist is available

The rule table is data: new stream types are added by passing extra
``StreamTypeRule`` objects in the conversion config.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable

from pydantic import ValidationError

from episodeflow.models.schema import (
    MAIN_AUDIO_ROLE,
    HlsLiveSource,
    HlsSource,
    Mp4Source,
    Resolution,
    SourceData,
    Stream,
)
from episodeflow.utils.logging import log_skipped
from episodeflow.utils.normalize import get_path, list_at

if TYPE_CHECKING:
    from episodeflow.config import ConversionConfig

logger = logging.getLogger(__name__)

HLS_MIMETYPE = "application/x-mpegURL"
MP4_MIMETYPE = "video/mp4"

RESOLUTION_RE = re.compile(r"(\d+)x(\d+)")

# Sentinel so a missing track field never equals a condition value
_MISSING = object()


@dataclass
class StreamTypeRule:
    """A stream type and the track fields that identify it."""

    stream_type: str
    conditions: dict[str, Any]
    get_source_data: Callable[[dict[str, Any]], SourceData]
    enabled: bool = True

    def matches(self, track: dict[str, Any]) -> bool:
        """True if the rule is enabled and every condition holds for the track."""
        if not self.enabled:
            return False
        return all(
            _field_equals(track.get(name, _MISSING), expected)
            for name, expected in self.conditions.items()
        )


@dataclass
class ClassifiedSource:
    """A track that matched a stream-type rule."""

    stream_type: str
    content: str
    source: SourceData
    track_id: str | None = field(default=None, compare=False)

    @property
    def is_master(self) -> bool:
        """True for HLS sources flagged as master playlist."""
        return bool(getattr(self.source, "master", False))


def _field_equals(value: Any, expected: Any) -> bool:
    if value is _MISSING:
        return False
    # Booleans only match booleans
    if isinstance(expected, bool) or isinstance(value, bool):
        return isinstance(value, bool) and isinstance(expected, bool) and value is expected
    return value == expected


def parse_resolution(resolution: Any) -> Resolution:
    """Parse a 'WIDTHxHEIGHT' string, defaulting to 1x1."""
    match = RESOLUTION_RE.search(resolution) if isinstance(resolution, str) else None
    if match is None:
        return Resolution(w=1, h=1)
    return Resolution(w=int(match.group(1)), h=int(match.group(2)))


def mp4_source_data(track: dict[str, Any]) -> Mp4Source:
    """Progressive source: URL, mimetype and resolution."""
    return Mp4Source(
        src=track.get("url"),
        mimetype=track.get("mimetype"),
        res=parse_resolution(get_path(track, "video", "resolution")),
    )


def hls_source_data(track: dict[str, Any]) -> HlsSource:
    """On-demand HLS source: URL, mimetype and master flag."""
    return HlsSource(
        src=track.get("url"),
        mimetype=track.get("mimetype"),
        master=track.get("master") is True,
    )


def hls_live_source_data(track: dict[str, Any]) -> HlsLiveSource:
    """Live HLS source: URL and mimetype."""
    return HlsLiveSource(src=track.get("url"), mimetype=track.get("mimetype"))


def default_stream_types() -> list[StreamTypeRule]:
    """The built-in rule table, in priority order."""
    return [
        StreamTypeRule(
            stream_type="mp4",
            conditions={"mimetype": MP4_MIMETYPE},
            get_source_data=mp4_source_data,
        ),
        StreamTypeRule(
            stream_type="hls",
            conditions={"mimetype": HLS_MIMETYPE, "live": False},
            get_source_data=hls_source_data,
        ),
        StreamTypeRule(
            stream_type="hlsLive",
            conditions={"mimetype": HLS_MIMETYPE, "live": True},
            get_source_data=hls_live_source_data,
        ),
    ]


def content_of(flavor: Any) -> str | None:
    """Content category of a flavor: the text before the first '/'."""
    if not isinstance(flavor, str):
        return None
    content = flavor.split("/", 1)[0]
    return content or None


def find_stream_type(
    track: dict[str, Any], stream_types: list[StreamTypeRule]
) -> StreamTypeRule | None:
    """Return the first enabled rule matching the track."""
    for rule in stream_types:
        if rule.matches(track):
            return rule
    return None


def classify_track(
    track: Any, stream_types: list[StreamTypeRule] | None = None
) -> ClassifiedSource | None:
    """Classify a media track into a stream type.

    Args:
        track: One entry of ``media.track``.
        stream_types: Rule table; the built-in table if None.

    Returns:
        ClassifiedSource, or None if the track has no content prefix or no
        rule matches it.
    """
    if not isinstance(track, dict):
        log_skipped(logger, "track", None, "not an object")
        return None

    track_id = track.get("id")
    content = content_of(track.get("type"))
    if content is None:
        log_skipped(logger, "track", track_id, f"no content in type {track.get('type')!r}")
        return None

    rule = find_stream_type(track, stream_types if stream_types is not None else default_stream_types())
    if rule is None:
        log_skipped(logger, "track", track_id, f"unsupported mimetype {track.get('mimetype')!r}")
        return None

    try:
        source = rule.get_source_data(track)
    except ValidationError as e:
        log_skipped(logger, "track", track_id, f"invalid {rule.stream_type} source: {e.error_count()} field error(s)")
        return None

    return ClassifiedSource(
        stream_type=rule.stream_type,
        content=content,
        source=source,
        track_id=track_id,
    )


def drop_rendition_playlists(sources: list[ClassifiedSource]) -> list[ClassifiedSource]:
    """Keep only master HLS playlists when at least one is present."""
    if not any(s.stream_type == "hls" and s.is_master for s in sources):
        return sources
    return [s for s in sources if s.stream_type != "hls" or s.is_master]


def resolve_main_audio_content(
    sources: list[ClassifiedSource], preferred: str | None
) -> str | None:
    """Pick the content category carrying the main audio.

    The preferred content wins if any source has it. Otherwise the content
    of the last scanned source is used.
    """
    # Falls back to the last content, not the first or the most common one
    audio_content = None
    for source in sources:
        if preferred is not None and source.content == preferred:
            return preferred
        audio_content = source.content
    return audio_content


def merge_sources(
    sources: list[ClassifiedSource], config: ConversionConfig | None = None
) -> list[Stream]:
    """Group classified sources into one stream per content category.

    Args:
        sources: Classified sources in track order.
        config: Conversion config (uses ``main_audio_content``).

    Returns:
        Streams in first-occurrence order of their content.
    """
    preferred = config.main_audio_content if config is not None else None

    sources = drop_rendition_playlists(sources)
    audio_content = resolve_main_audio_content(sources, preferred)

    grouped: dict[str, dict[str, list[SourceData]]] = {}
    for source in sources:
        buckets = grouped.setdefault(source.content, {})
        buckets.setdefault(source.stream_type, []).append(source.source)

    return [
        Stream(
            content=content,
            role=MAIN_AUDIO_ROLE if content == audio_content else None,
            sources=buckets,
        )
        for content, buckets in grouped.items()
    ]


def get_streams(episode: dict[str, Any], config: ConversionConfig | None = None) -> list[Stream]:
    """Classify every media track of an episode and merge the results."""
    stream_types = config.stream_types if config is not None else default_stream_types()
    tracks = list_at(episode, "mediapackage", "media", "track")

    sources: list[ClassifiedSource] = []
    for track in tracks:
        classified = classify_track(track, stream_types)
        if classified is not None:
            sources.append(classified)

    streams = merge_sources(sources, config)
    logger.debug(f"Classified {len(sources)}/{len(tracks)} tracks into {len(streams)} streams")
    return streams
