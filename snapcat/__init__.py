"""
snapcat — structured snapshots of a directory subtree.

This package walks a directory once and produces:
- a deterministic text tree of the visited paths,
- one record per regular file holding its content (or a placeholder when
  the file is too large or binary) plus binary/size metadata.

Contents can be captured sequentially, on a thread pool, or streamed one
record at a time.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .content import BINARY_PLACEHOLDER, TOO_LARGE_PLACEHOLDER, capture_file, read_file_content
from .engine import SnapcatStream, snapcat
from .errors import FileIOError, InvalidPathError, InvalidPatternError, SnapcatError, WalkError
from .matcher import IgnoreMatcher
from .models import FileEntry, SnapcatResult
from .options import BinaryDetection, ExecutionMode, SnapcatBuilder, SnapcatOptions
from .output import OutputFormat, format_result, write_result_to_file
from .tree import build_tree, draw_tree, render_tree
from .walker import Walker

__all__ = [
    "BINARY_PLACEHOLDER",
    "TOO_LARGE_PLACEHOLDER",
    "BinaryDetection",
    "ExecutionMode",
    "FileEntry",
    "FileIOError",
    "IgnoreMatcher",
    "InvalidPathError",
    "InvalidPatternError",
    "OutputFormat",
    "SnapcatBuilder",
    "SnapcatError",
    "SnapcatOptions",
    "SnapcatResult",
    "SnapcatStream",
    "WalkError",
    "Walker",
    "build_tree",
    "capture_file",
    "draw_tree",
    "format_result",
    "read_file_content",
    "render_tree",
    "snapcat",
    "write_result_to_file",
]
