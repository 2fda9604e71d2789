"""Utility functions for episodeflow."""

from episodeflow.utils.logging import get_logger
from episodeflow.utils.normalize import as_list, get_path, list_at

__all__ = ["as_list", "get_logger", "get_path", "list_at"]
