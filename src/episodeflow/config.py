"""Configuration for episode conversion."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from episodeflow.stages.streams import StreamTypeRule, default_stream_types

DEFAULT_VIDEO_PREVIEW_ATTACHMENTS = [
    "presenter/player+preview",
    "presentation/player+preview",
]
DEFAULT_PREVIEW_ATTACHMENT = "presentation/segment+preview"


class ConversionConfig(BaseModel):
    """Configuration for an episode to manifest conversion.

    Options may be given by field name or by the camelCase names used in
    player configuration files (``mainAudioContent``, ``previewAttachment``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    main_audio_content: str | None = Field(
        default=None,
        description="Content category preferred as main audio (e.g. 'presenter')",
    )
    video_preview_attachments: list[str] = Field(
        default_factory=lambda: list(DEFAULT_VIDEO_PREVIEW_ATTACHMENTS),
        description="Attachment types used as video preview, in priority order",
    )
    preview_attachment: str = Field(
        default=DEFAULT_PREVIEW_ATTACHMENT,
        description="Attachment type of timestamped segment previews",
    )
    stream_types: list[StreamTypeRule] = Field(
        default_factory=default_stream_types,
        description="Stream-type rules, first match wins",
    )
    distinguish_empty_segments: bool = Field(
        default=False,
        description="Emit an empty transcription list for a segments block without segments",
    )

    @classmethod
    def from_options(cls, options: dict | ConversionConfig | None) -> ConversionConfig:
        """Build a config from a dict of options, an instance, or None."""
        if options is None:
            return cls()
        if isinstance(options, ConversionConfig):
            return options
        return cls(**options)
