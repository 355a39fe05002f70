# snapcat/options.py

"""
Configuration options for directory walking and file capture.

:class:`SnapcatOptions` is a flat, immutable set of named options. It can be
built directly or through the fluent :class:`SnapcatBuilder`. Beyond
defaulting and validation no logic lives here.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Iterable


class BinaryDetection(str, Enum):
    """Method used to decide whether a file is binary."""

    #: No detection, every file is treated as text.
    NONE = "none"
    #: A NUL byte in the first 4 KiB marks the file as binary.
    SIMPLE = "simple"
    #: Content sniffing over the first 4 KiB (BOMs, UTF-8 validity, byte mix).
    ACCURATE = "accurate"


class ExecutionMode(str, Enum):
    """How file contents are captured once the walk has run."""

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"
    STREAMING = "streaming"


@dataclass(frozen=True)
class SnapcatOptions:
    """
    Options for a snapcat run.

    Parameters
    ----------
    root : pathlib.Path, default=Path(".")
        Directory the walk starts from.
    respect_gitignore : bool, default=True
        Honor ``.gitignore`` files and ``.git/info/exclude``.
    max_depth : int | None, default=None
        Maximum depth to walk, the root being depth 0. ``None`` is unbounded.
    include_hidden : bool, default=False
        Include entries whose name starts with a dot.
    follow_links : bool, default=False
        Descend into symbolically linked directories.
    ignore_patterns : tuple[str, ...], default=()
        Glob patterns; matching entries (and whole subtrees for directories)
        are excluded.
    file_size_limit : int | None, default=None
        Files larger than this many bytes get a placeholder instead of content.
    binary_detection : BinaryDetection, default=BinaryDetection.SIMPLE
        Binary classification method.
    include_file_size : bool, default=False
        Attach each file's size in bytes to its record.
    execution : ExecutionMode, default=ExecutionMode.SEQUENTIAL
        Strategy used to capture file contents.
    max_workers : int | None, default=None
        Worker pool size for :attr:`ExecutionMode.PARALLEL`. ``None`` lets
        :class:`concurrent.futures.ThreadPoolExecutor` pick its default.

    Raises
    ------
    ValueError
        If a numeric option is out of range or an enum value is unknown.
    """

    root: Path = Path(".")
    respect_gitignore: bool = True
    max_depth: int | None = None
    include_hidden: bool = False
    follow_links: bool = False
    ignore_patterns: tuple[str, ...] = field(default_factory=tuple)
    file_size_limit: int | None = None
    binary_detection: BinaryDetection = BinaryDetection.SIMPLE
    include_file_size: bool = False
    execution: ExecutionMode = ExecutionMode.SEQUENTIAL
    max_workers: int | None = None

    def __post_init__(self) -> None:
        # frozen: coerce through object.__setattr__
        object.__setattr__(self, "root", Path(self.root))
        object.__setattr__(self, "ignore_patterns", tuple(self.ignore_patterns))
        object.__setattr__(self, "binary_detection", BinaryDetection(self.binary_detection))
        object.__setattr__(self, "execution", ExecutionMode(self.execution))

        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.file_size_limit is not None and self.file_size_limit < 0:
            raise ValueError(f"file_size_limit must be >= 0, got {self.file_size_limit}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")


class SnapcatBuilder:
    """
    Fluent builder for :class:`SnapcatOptions`.

    Every setter returns the builder, so calls can be chained::

        options = (
            SnapcatBuilder("src")
            .include_hidden(True)
            .file_size_limit(1_000_000)
            .build()
        )
    """

    def __init__(self, root: str | Path = ".") -> None:
        self._options = SnapcatOptions(root=Path(root))

    def _set(self, **changes) -> SnapcatBuilder:
        self._options = replace(self._options, **changes)
        return self

    def respect_gitignore(self, yes: bool) -> SnapcatBuilder:
        return self._set(respect_gitignore=yes)

    def max_depth(self, depth: int) -> SnapcatBuilder:
        return self._set(max_depth=depth)

    def no_limit_depth(self) -> SnapcatBuilder:
        return self._set(max_depth=None)

    def include_hidden(self, yes: bool) -> SnapcatBuilder:
        return self._set(include_hidden=yes)

    def follow_links(self, yes: bool) -> SnapcatBuilder:
        return self._set(follow_links=yes)

    def ignore_patterns(self, patterns: Iterable[str]) -> SnapcatBuilder:
        """Patterns are matched against root-relative paths, e.g. ``"*.tmp"``, ``"build/*"``."""
        return self._set(ignore_patterns=tuple(patterns))

    def file_size_limit(self, limit: int | None) -> SnapcatBuilder:
        return self._set(file_size_limit=limit)

    def binary_detection(self, method: BinaryDetection | str) -> SnapcatBuilder:
        return self._set(binary_detection=BinaryDetection(method))

    def include_file_size(self, yes: bool) -> SnapcatBuilder:
        return self._set(include_file_size=yes)

    def execution(self, mode: ExecutionMode | str) -> SnapcatBuilder:
        return self._set(execution=ExecutionMode(mode))

    def max_workers(self, workers: int | None) -> SnapcatBuilder:
        return self._set(max_workers=workers)

    def build(self) -> SnapcatOptions:
        return self._options
