"""episodeflow: Turn a recorded episode document into a video player manifest."""

from episodeflow.config import ConversionConfig
from episodeflow.i18n import DefaultLocalizer, Localizer
from episodeflow.models.schema import Caption, Frame, Manifest, Metadata, Stream
from episodeflow.pipeline import Converter, EpisodeConverter, episode_to_manifest
from episodeflow.stages.attachments import get_video_preview
from episodeflow.stages.ingest import IngestError
from episodeflow.stages.streams import StreamTypeRule, default_stream_types

__version__ = "0.1.0"

__all__ = [
    "Converter",
    "ConversionConfig",
    "EpisodeConverter",
    "episode_to_manifest",
    "get_video_preview",
    "Manifest",
    "Metadata",
    "Stream",
    "Caption",
    "Frame",
    "StreamTypeRule",
    "default_stream_types",
    "Localizer",
    "DefaultLocalizer",
    "IngestError",
    "__version__",
]
