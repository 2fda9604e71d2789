#!/usr/bin/env python3
"""episodeflow Quickstart Example.

This script converts a search-results episode document into a player
manifest and prints a short summary.

Usage:
    python examples/quickstart.py path/to/episode.json [main-audio-content]
"""

from __future__ import annotations

import sys
from pathlib import Path


def main() -> None:
    """Run the quickstart example."""
    import episodeflow
    from episodeflow.stages.ingest import load_document

    if len(sys.argv) < 2:
        print("Usage: python quickstart.py <episode.json> [main-audio-content]")
        print("\nExample:")
        print("  python quickstart.py episode.json presenter")
        sys.exit(1)

    source = Path(sys.argv[1])
    main_audio = sys.argv[2] if len(sys.argv) > 2 else None

    if not source.exists():
        print(f"Error: File not found: {source}")
        sys.exit(1)

    print(f"episodeflow v{episodeflow.__version__}")
    print(f"Converting: {source}")

    manifest = episodeflow.episode_to_manifest(
        load_document(source),
        {"main_audio_content": main_audio},
    )
    if manifest is None:
        print("Error: document does not describe exactly one episode")
        sys.exit(1)

    print(f"\nTitle: {manifest.metadata.title}")
    print(f"Duration: {manifest.metadata.duration}s")

    print(f"\nStreams ({len(manifest.streams)}):")
    for stream in manifest.streams:
        role = " [main audio]" if stream.role else ""
        types = ", ".join(f"{t} x{len(s)}" for t, s in stream.sources.items())
        print(f"  {stream.content}{role}: {types}")

    print(f"\nCaptions ({len(manifest.captions)}):")
    for caption in manifest.captions:
        print(f"  {caption.text} ({caption.format}): {caption.url}")

    print(f"\nFrames: {len(manifest.frame_list or [])}")
    print(f"Preview: {manifest.metadata.preview}")


if __name__ == "__main__":
    main()
