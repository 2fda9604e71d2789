"""Processing stages for the episodeflow pipeline.

Each stage reads the episode document and builds one part of the manifest:
- ingest: Document loading and single-episode extraction
- metadata: Descriptive fields
- streams: Track classification and stream merging
- captions: Caption tracks
- attachments: Filmstrip frames and video preview
- segments: Transcription entries
"""

__all__ = [
    "ingest",
    "metadata",
    "streams",
    "captions",
    "attachments",
    "segments",
]
