"""Pytest configuration and fixtures for episodeflow tests."""

from __future__ import annotations

import copy
import json
import tempfile
from pathlib import Path
from typing import Any

import pytest

SAMPLE_EPISODE: dict[str, Any] = {
    "id": "ep-0001",
    "dcCreated": "2023-05-04T10:00:00Z",
    "dcDescription": "An introduction to signal processing.",
    "dcRightsHolder": "University of Example",
    "dcSpatial": "Room 101",
    "mediapackage": {
        "title": "Signals 101",
        "language": "en",
        "series": "series-42",
        "seriestitle": "Signals",
        "subjects": {"subject": "Engineering"},
        "license": "CC-BY",
        "type": "lecture",
        "duration": 120000,
        "creators": {"creator": "Ada Lovelace"},
        "contributors": {"contributor": ["Grace Hopper", "Alan Turing"]},
        "media": {
            "track": [
                {
                    "id": "t1",
                    "type": "presenter/delivery",
                    "mimetype": "video/mp4",
                    "url": "https://example.org/presenter-720.mp4",
                    "video": {"resolution": "1280x720"},
                },
                {
                    "id": "t2",
                    "type": "presentation/delivery",
                    "mimetype": "application/x-mpegURL",
                    "url": "https://example.org/presentation/master.m3u8",
                    "live": False,
                    "master": True,
                },
            ]
        },
        "attachments": {
            "attachment": [
                {
                    "id": "a1",
                    "type": "presenter/player+preview",
                    "mimetype": "image/png",
                    "url": "https://example.org/presenter-preview.png",
                },
                {
                    "id": "a2",
                    "type": "presentation/segment+preview",
                    "mimetype": "image/jpeg",
                    "url": "https://example.org/frame-0.jpg",
                    "ref": "track:t2;time=T00:00:00:0F1000",
                },
                {
                    "id": "a3",
                    "type": "presentation/segment+preview",
                    "mimetype": "image/jpeg",
                    "url": "https://example.org/frame-1.jpg",
                    "ref": "track:t2;time=T00:01:05:0F1000",
                },
                {
                    "id": "a4",
                    "type": "captions/vtt+en",
                    "mimetype": "text/vtt",
                    "url": "https://example.org/captions-en.vtt",
                },
            ]
        },
    },
    "segments": {
        "segment": [
            {
                "index": 0,
                "time": 0,
                "duration": 65000,
                "text": "Welcome",
                "previews": {"preview": {"$": "https://example.org/frame-0.jpg", "type": "presentation"}},
            },
            {
                "index": 1,
                "time": 65000,
                "duration": 55000,
                "text": "Fourier",
                "previews": {"preview": {"$": "https://example.org/frame-1.jpg", "type": "presentation"}},
            },
        ]
    },
}


def wrap(episode: Any, total: Any = 1) -> dict[str, Any]:
    """Wrap an episode in a search-results document."""
    return {"search-results": {"total": total, "result": episode}}


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def episode() -> dict[str, Any]:
    """A fresh copy of a complete episode."""
    return copy.deepcopy(SAMPLE_EPISODE)


@pytest.fixture
def make_document():
    """Factory wrapping an episode in a search-results document."""
    return wrap


@pytest.fixture
def document(episode: dict[str, Any]) -> dict[str, Any]:
    """A search-results document holding one episode."""
    return wrap(episode)


@pytest.fixture
def document_path(temp_dir: Path, document: dict[str, Any]) -> Path:
    """The sample document written to disk."""
    path = temp_dir / "episode.json"
    path.write_text(json.dumps(document))
    return path
