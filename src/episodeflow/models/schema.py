"""Pydantic models defining the player manifest.

A ``Manifest`` is built fresh for every conversion and is frozen once
returned. Field names follow Python conventions; ``to_dict`` and ``to_json``
emit the camelCase names the player expects.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny

MAIN_AUDIO_ROLE = "mainAudio"


class ManifestModel(BaseModel):
    """Base for all manifest models."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, coerce_numbers_to_str=True)


class Resolution(ManifestModel):
    """Video resolution of a progressive source."""

    w: int = Field(default=1, ge=0, description="Width in pixels")
    h: int = Field(default=1, ge=0, description="Height in pixels")


class SourceData(ManifestModel):
    """A playable source inside a stream.

    Stream types defined by callers may subclass this to add fields.
    """

    src: str | None = Field(default=None, description="Source URL")
    mimetype: str | None = Field(default=None, description="Source mimetype")


class Mp4Source(SourceData):
    """Progressive download source."""

    res: Resolution = Field(default_factory=Resolution, description="Video resolution")


class HlsSource(SourceData):
    """On-demand adaptive streaming source."""

    master: bool = Field(default=False, description="True if this is a master playlist")


class HlsLiveSource(SourceData):
    """Live adaptive streaming source."""


class Stream(ManifestModel):
    """All sources of one content category (e.g. 'presenter')."""

    content: str = Field(..., description="Content category taken from the track flavor")
    role: Literal["mainAudio"] | None = Field(
        default=None, description="'mainAudio' for the stream carrying the primary audio"
    )
    sources: dict[str, list[SerializeAsAny[SourceData]]] = Field(
        default_factory=dict, description="Sources keyed by stream type"
    )


class Caption(ManifestModel):
    """A caption track."""

    id: str | None = Field(default=None, description="Source element identifier")
    lang: str | None = Field(default=None, description="Language code")
    text: str = Field(..., description="Human-readable label")
    url: str = Field(..., description="Caption file URL")
    format: str = Field(..., description="Caption format (vtt, dfxp, ...)")


class Frame(ManifestModel):
    """A timestamped preview image of the filmstrip."""

    id: str = Field(..., description="'frame_<seconds>'")
    time: int = Field(..., ge=0, description="Offset from start in seconds")
    url: str | None = Field(default=None, description="Image URL")
    thumb: str | None = Field(default=None, description="Thumbnail URL")
    mimetype: str | None = Field(default=None, description="Image mimetype")


class Transcription(ManifestModel):
    """A transcription segment."""

    index: Any = Field(default=None, description="Segment index")
    preview: str | None = Field(default=None, description="Preview image reference")
    text: str | None = Field(default=None, description="Transcribed text")
    time: Any = Field(default=None, description="Segment start")
    duration: Any = Field(default=None, description="Segment duration")


class Metadata(ManifestModel):
    """Descriptive metadata of the episode."""

    title: Any = None
    subject: Any = None
    description: Any = None
    language: Any = None
    rights: Any = None
    license: Any = None
    series: Any = None
    seriestitle: Any = None
    presenters: list[Any] = Field(default_factory=list)
    contributors: list[Any] = Field(default_factory=list)
    start_date: datetime | None = Field(default=None, alias="startDate")
    duration: float | None = Field(default=None, description="Duration in seconds")
    location: Any = None
    uid: Any = Field(default=None, alias="UID")
    type: Any = None
    preview: Any = Field(default=None, description="Video preview image URL")
    opencast: dict[str, Any] = Field(
        default_factory=dict, description="Back-reference to the source episode"
    )


class Manifest(ManifestModel):
    """The complete output of a conversion.

    This is the primary output of ``episode_to_manifest`` and is consumed
    by the video player.
    """

    metadata: Metadata
    streams: list[Stream] = Field(default_factory=list)
    captions: list[Caption] = Field(default_factory=list)
    frame_list: list[Frame] | None = Field(default=None, alias="frameList")
    transcriptions: list[Transcription] | None = None

    @property
    def main_audio_stream(self) -> Stream | None:
        """The stream tagged as main audio, if any."""
        for stream in self.streams:
            if stream.role == MAIN_AUDIO_ROLE:
                return stream
        return None

    def to_dict(self) -> dict[str, Any]:
        """Export to the player's dictionary format."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self, path: str | Path | None = None, indent: int = 2) -> str:
        """Export to JSON string, optionally writing to a file.

        Args:
            path: Optional file path to write JSON to.
            indent: JSON indentation level.

        Returns:
            JSON string representation.
        """
        json_str = self.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
        if path is not None:
            Path(path).write_text(json_str)
        return json_str
