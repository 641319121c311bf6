"""Segment-based helpers over relative, slash-separated paths."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Union

EMPTY = PurePosixPath(".")


def as_fragment(value: Union[str, PurePosixPath]) -> PurePosixPath:
    """Return ``value`` as a relative ``PurePosixPath``; ``""`` maps to the empty path."""
    fragment = PurePosixPath(value)
    if fragment.is_absolute():
        raise ValueError(f"Expected a relative path, got '{value}'")
    if ".." in fragment.parts:
        raise ValueError(f"Path '{value}' must not contain '..' segments")
    return fragment


def segment_count(path: PurePosixPath) -> int:
    return len(path.parts)


def is_beneath(path: PurePosixPath, directory: PurePosixPath) -> bool:
    """Whole-segment prefix test; a path is beneath itself."""
    return path.is_relative_to(directory)


def truncate(path: PurePosixPath, count: int) -> PurePosixPath:
    """Drop the last ``count`` segments of ``path``."""
    if count < 0 or count > segment_count(path):
        raise ValueError(f"Cannot drop {count} segments from '{path}'")
    kept = path.parts[: segment_count(path) - count]
    return PurePosixPath(*kept) if kept else EMPTY


def render(path: PurePosixPath) -> str:
    """Render a fragment for messages and JSON, using ``""`` for the empty path."""
    return "" if path == EMPTY else path.as_posix()


__all__ = ["EMPTY", "as_fragment", "is_beneath", "render", "segment_count", "truncate"]
