"""Ingestion stage: document loading and episode extraction.

This stage handles:
- Reading a search-results JSON document from disk
- Unwrapping the single episode from the search-results envelope
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SEARCH_RESULTS_KEY = "search-results"


class IngestError(Exception):
    """Error reading a source document."""

    pass


def load_document(source: Path) -> Any:
    """Read and parse a JSON document.

    Args:
        source: Path to the JSON file.

    Returns:
        Parsed JSON.

    Raises:
        FileNotFoundError: If the file does not exist.
        IngestError: If the file cannot be read or is not valid JSON.
    """
    if not source.exists():
        raise FileNotFoundError(f"Source file not found: {source}")

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestError(f"Failed to read {source}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise IngestError(f"Failed to parse {source.name} as JSON: {e}") from e


def _is_one(total: Any) -> bool:
    return isinstance(total, (int, float)) and not isinstance(total, bool) and total == 1


def extract_episode(document: Any) -> dict[str, Any] | None:
    """Return the episode of a search-results document.

    Args:
        document: Parsed ``{"search-results": {"total": n, "result": ...}}``.

    Returns:
        The episode, or None unless the document describes exactly one.
    """
    search_results = document.get(SEARCH_RESULTS_KEY) if isinstance(document, dict) else None
    if not isinstance(search_results, dict):
        logger.warning("Document has no search-results block")
        return None

    total = search_results.get("total")
    if not _is_one(total):
        logger.warning(f"Expected exactly one episode, document reports total={total!r}")
        return None

    episode = search_results.get("result")
    if isinstance(episode, list) and len(episode) == 1:
        episode = episode[0]
    if not isinstance(episode, dict):
        logger.warning("Search result is not a single episode")
        return None

    return episode
