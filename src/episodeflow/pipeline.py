"""Main conversion pipeline for episodeflow."""

from __future__ import annotations

import time
from typing import Any

from episodeflow.config import ConversionConfig
from episodeflow.i18n import DefaultLocalizer, Localizer
from episodeflow.models.schema import Manifest
from episodeflow.stages.attachments import process_attachments
from episodeflow.stages.captions import extract_captions
from episodeflow.stages.ingest import extract_episode
from episodeflow.stages.metadata import extract_metadata
from episodeflow.stages.segments import process_segments
from episodeflow.stages.streams import get_streams
from episodeflow.utils.logging import get_logger

logger = get_logger(__name__)


class Converter:
    """Episode to manifest converter.

    Example:
        >>> import episodeflow
        >>> converter = episodeflow.Converter(options={"main_audio_content": "presenter"})
        >>> manifest = converter.convert(document)
        >>> manifest.to_json()
    """

    def __init__(
        self,
        options: dict[str, Any] | ConversionConfig | None = None,
        localizer: Localizer | None = None,
    ) -> None:
        """Initialize a converter.

        Args:
            options: Conversion options dict or ConversionConfig instance.
            localizer: Label lookup for captions. DefaultLocalizer if None.
        """
        self.config = ConversionConfig.from_options(options)
        self.localizer = localizer or DefaultLocalizer()

    def convert(self, document: Any) -> Manifest | None:
        """Convert a search-results document into a player manifest.

        Args:
            document: Parsed ``{"search-results": {...}}`` document.

        Returns:
            The manifest, or None unless the document holds exactly one episode.
        """
        episode = extract_episode(document)
        if episode is None:
            return None

        start_time = time.perf_counter()

        streams = get_streams(episode, self.config)
        captions = extract_captions(episode, self.localizer)
        attachments = process_attachments(episode, self.config)
        metadata = extract_metadata(episode, preview=attachments.preview)
        transcriptions = process_segments(episode, self.config)

        manifest = Manifest(
            metadata=metadata,
            streams=streams,
            captions=captions,
            frame_list=attachments.frame_list or None,
            transcriptions=transcriptions,
        )

        elapsed = time.perf_counter() - start_time
        logger.debug(
            f"Converted episode {metadata.uid}: {len(streams)} streams, "
            f"{len(captions)} captions, {len(attachments.frame_list)} frames "
            f"in {elapsed * 1000:.1f}ms"
        )
        return manifest


def episode_to_manifest(
    document: Any,
    config: dict[str, Any] | ConversionConfig | None = None,
    localizer: Localizer | None = None,
) -> Manifest | None:
    """Convert a search-results document into a player manifest.

    Args:
        document: Parsed ``{"search-results": {...}}`` document.
        config: Conversion options dict or ConversionConfig instance.
        localizer: Label lookup for captions.

    Returns:
        The manifest, or None unless the document holds exactly one episode.
    """
    return Converter(config, localizer).convert(document)


class EpisodeConverter:
    """Converts a document once at construction and keeps the result."""

    def __init__(
        self,
        document: Any,
        config: dict[str, Any] | ConversionConfig | None = None,
        localizer: Localizer | None = None,
    ) -> None:
        self._data = episode_to_manifest(document, config, localizer)

    @property
    def data(self) -> Manifest | None:
        return self._data
