# snapcat/errors.py

"""
Error types raised by snapcat.

Two families exist. ``InvalidPathError`` and ``InvalidPatternError`` are
raised before any traversal starts, so catching one means nothing happened.
``WalkError`` and ``FileIOError`` describe a single failing entry once work
is under way; the streaming API hands them back in-band instead of raising.
"""

from __future__ import annotations

from pathlib import Path


class SnapcatError(Exception):
    """Base class for every error raised by snapcat."""


class InvalidPathError(SnapcatError, ValueError):
    """The root path does not exist or is not a directory."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Invalid path: {path}: {reason}")
        self.path = path
        self.reason = reason


class InvalidPatternError(SnapcatError, ValueError):
    """A glob exclusion pattern could not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid glob pattern '{pattern}': {reason}")
        self.pattern = pattern
        self.reason = reason


class WalkError(SnapcatError):
    """A directory entry could not be enumerated during the walk."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"Walk error: {path}: {message}")
        self.path = path


class FileIOError(SnapcatError, OSError):
    """
    Opening, reading or stat-ing a single file failed.

    Also an :class:`OSError`, so callers catching read failures the usual way
    see it. Only the message is passed to :class:`OSError`; the failing path
    and the original error are kept on ``.path`` and ``.source``.
    """

    def __init__(self, path: Path, source: OSError) -> None:
        super().__init__(f"I/O error on {path}: {source}")
        self.path = path
        self.source = source
