"""Data models for episodeflow."""

from episodeflow.models.schema import (
    Caption,
    Frame,
    HlsLiveSource,
    HlsSource,
    Manifest,
    Metadata,
    Mp4Source,
    Resolution,
    SourceData,
    Stream,
    Transcription,
)

__all__ = [
    "Manifest",
    "Metadata",
    "Stream",
    "SourceData",
    "Mp4Source",
    "HlsSource",
    "HlsLiveSource",
    "Resolution",
    "Caption",
    "Frame",
    "Transcription",
]
