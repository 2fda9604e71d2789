"""Command-line interface for episodeflow."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer

from episodeflow import Converter, __version__, get_video_preview
from episodeflow.config import DEFAULT_PREVIEW_ATTACHMENT, ConversionConfig
from episodeflow.stages.ingest import IngestError, extract_episode, load_document
from episodeflow.utils.logging import get_logger
from episodeflow.utils.normalize import get_path

app = typer.Typer(
    name="episodeflow",
    help="Turn a recorded episode document into a video player manifest.",
    add_completion=False,
    no_args_is_help=True,
)

SourceArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to a search-results JSON document",
        exists=True,
        readable=True,
        dir_okay=False,
    ),
]

VideoPreviewOption = Annotated[
    Optional[list[str]],
    typer.Option(
        "--video-preview",
        help="Attachment type used as video preview (repeat for priority order)",
    ),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"episodeflow {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """episodeflow: Turn episode documents into player manifests."""
    pass


def _load(source: Path) -> Any:
    try:
        return load_document(source)
    except (FileNotFoundError, IngestError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


@app.command()
def convert(
    source: SourceArgument,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="Output JSON file path (default: stdout)",
        ),
    ] = None,
    main_audio: Annotated[
        Optional[str],
        typer.Option(
            "--main-audio",
            help="Content category preferred as main audio (e.g. presenter)",
        ),
    ] = None,
    preview_attachment: Annotated[
        str,
        typer.Option(
            "--preview-attachment",
            help="Attachment type of timestamped segment previews",
        ),
    ] = DEFAULT_PREVIEW_ATTACHMENT,
    video_preview: VideoPreviewOption = None,
    distinguish_empty_segments: Annotated[
        bool,
        typer.Option(
            "--distinguish-empty-segments",
            help="Emit an empty transcription list for an empty segments block",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log warnings and errors",
        ),
    ] = False,
) -> None:
    """Convert a search-results document into manifest JSON.

    Example:
        episodeflow convert episode.json --main-audio presenter -o manifest.json
    """
    get_logger(level=logging.WARNING if quiet else logging.INFO)

    options: dict[str, Any] = {
        "main_audio_content": main_audio,
        "preview_attachment": preview_attachment,
        "distinguish_empty_segments": distinguish_empty_segments,
    }
    if video_preview:
        options["video_preview_attachments"] = video_preview

    document = _load(source)
    manifest = Converter(options).convert(document)
    if manifest is None:
        typer.secho(
            "Error: document does not describe exactly one episode",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(1)

    json_output = manifest.to_json(indent=2)
    if output:
        output.write_text(json_output)
        if not quiet:
            typer.echo(f"Manifest written to: {output}")
    else:
        typer.echo(json_output)


@app.command()
def preview(
    source: SourceArgument,
    video_preview: VideoPreviewOption = None,
) -> None:
    """Print the video preview URL of an episode."""
    document = _load(source)
    episode = extract_episode(document)
    if episode is None:
        typer.secho(
            "Error: document does not describe exactly one episode",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(1)

    options = {"video_preview_attachments": video_preview} if video_preview else None
    url = get_video_preview(get_path(episode, "mediapackage"), ConversionConfig.from_options(options))
    if url is None:
        typer.secho("No video preview found", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(1)
    typer.echo(url)


if __name__ == "__main__":
    app()
