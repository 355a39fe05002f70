# snapcat/engine.py

"""
Entry points tying the walk, the tree renderer and the capture strategies
together.

:func:`snapcat` walks once, renders the tree from that walk and captures
every regular file with the sequential or parallel strategy.
:class:`SnapcatStream` keeps the walk and the capture lazily composed and
hands records to the caller one at a time.
"""

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Iterable

from snapcat.content import capture_file
from snapcat.errors import WalkError
from snapcat.models import SnapcatResult
from snapcat.options import ExecutionMode, SnapcatOptions
from snapcat.strategies import CaptureStream, StreamItem, strategy_for
from snapcat.tree import render_tree
from snapcat.walker import Walker

logger = logging.getLogger(__name__)


def snapcat(options: SnapcatOptions) -> SnapcatResult:
    """
    Walk ``options.root`` and return its tree and file records.

    The directory is walked exactly once. The tree and the file records are
    both derived from that single walk.

    Parameters
    ----------
    options : SnapcatOptions
        Run options. ``options.execution`` selects sequential or parallel
        capture.

    Returns
    -------
    SnapcatResult
        Rendered tree and one :class:`~snapcat.models.FileEntry` per regular
        file.

    Raises
    ------
    InvalidPathError, InvalidPatternError
        Before any traversal, for a bad root or glob pattern.
    WalkError
        If any directory entry could not be enumerated.
    FileIOError
        If any file could not be read.
    ValueError
        If ``options.execution`` is :attr:`ExecutionMode.STREAMING`; use
        :class:`SnapcatStream` instead.
    """

    if options.execution is ExecutionMode.STREAMING:
        raise ValueError("streaming mode does not build a snapshot; use SnapcatStream")

    logger.debug("Starting snapcat with root: %s", options.root)

    walker = Walker(options)
    entries = walker.collect_entries()
    tree = render_tree(walker.root, entries)

    strategy = strategy_for(options)
    files = strategy.run(entries, partial(capture_file, options=options))
    return SnapcatResult(tree=tree, files=files)


class SnapcatStream:
    """
    Lazily yield file records for ``options.root``.

    Iterating pulls one walk item at a time and captures it if it is a
    regular file. Each item is either a :class:`~snapcat.models.FileEntry` or
    the :class:`~snapcat.errors.SnapcatError` describing why that entry
    failed; the stream continues after an error. Stop iterating to cancel.

    ``options.execution`` is ignored here.

    Raises
    ------
    InvalidPathError, InvalidPatternError
        From the constructor, before any traversal.
    """

    def __init__(
        self,
        options: SnapcatOptions,
        entries: Iterable[Path | WalkError] | None = None,
    ) -> None:
        self.options = options
        if entries is None:
            entries = Walker(options)
        self._stream = CaptureStream(entries, partial(capture_file, options=options))

    @classmethod
    def with_tree(cls, options: SnapcatOptions) -> tuple[str, SnapcatStream]:
        """
        Walk once for the tree, then stream captures over the same paths.

        The path list is materialized (the tree needs all of it), but file
        contents are still read one at a time as the stream is consumed.

        Walk errors are kept: the tree is drawn from the paths that were
        visited, and each error is handed back in-band by the stream at the
        point where the walk produced it.
        """

        walker = Walker(options)
        entries = list(walker)
        paths = [e for e in entries if not isinstance(e, WalkError)]
        return render_tree(walker.root, paths), cls(options, entries)

    def __iter__(self) -> SnapcatStream:
        return self

    def __next__(self) -> StreamItem:
        return next(self._stream)
