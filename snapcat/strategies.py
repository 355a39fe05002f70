# snapcat/strategies.py

"""
Execution strategies.

A strategy turns a walk (a sequence of paths and in-band walk errors) into
file records, calling a capture function once per regular file. Three
implementations trade memory against failure isolation:

- :class:`SequentialStrategy`: one file at a time, all-or-nothing.
- :class:`ParallelStrategy`: enumerate everything, then fan out over a
  fixed thread pool, all-or-nothing.
- :class:`StreamingStrategy`: lazily pull one walk item per record; a
  failing file is handed back as an error item and the stream goes on.
"""

from __future__ import annotations

import concurrent.futures
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterable, Iterator, Union

from snapcat.errors import SnapcatError, WalkError
from snapcat.models import FileEntry
from snapcat.options import ExecutionMode, SnapcatOptions

logger = logging.getLogger(__name__)

CaptureFn = Callable[[Path], FileEntry]
StreamItem = Union[FileEntry, SnapcatError]


def _is_file(p: Path) -> bool:
    try:
        return p.is_file()
    except OSError:
        return False


def _file_paths(entries: Iterable[Path | WalkError]) -> Iterator[Path]:
    """Yield the regular files of a walk, raising the first walk error."""
    for item in entries:
        if isinstance(item, WalkError):
            raise item
        if _is_file(item):
            yield item


class ExecutionStrategy(ABC):
    """Turns walk results into file records using a capture function."""

    @abstractmethod
    def run(
        self,
        entries: Iterable[Path | WalkError],
        capture: CaptureFn,
    ) -> list[FileEntry] | Iterator[StreamItem]:
        """Capture every regular file in ``entries``."""


class SequentialStrategy(ExecutionStrategy):
    """
    Capture files one after another, in walk order.

    The first walk error or capture error propagates and no partial result
    is returned.
    """

    def run(self, entries: Iterable[Path | WalkError], capture: CaptureFn) -> list[FileEntry]:
        files = [capture(path) for path in _file_paths(entries)]
        logger.debug("Captured %d file(s) sequentially", len(files))
        return files


class ParallelStrategy(ExecutionStrategy):
    """
    Capture files on a fixed-size thread pool.

    The path list is fully enumerated before the first task is submitted.
    Records come back in enumeration order. If any capture fails, tasks that
    have not started are cancelled and the error propagates.

    Parameters
    ----------
    max_workers : int | None, default=None
        Pool size; ``None`` uses the :class:`~concurrent.futures.ThreadPoolExecutor`
        default.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        self.max_workers = max_workers

    def run(self, entries: Iterable[Path | WalkError], capture: CaptureFn) -> list[FileEntry]:
        paths = list(_file_paths(entries))
        if not paths:
            return []

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [pool.submit(capture, path) for path in paths]
            try:
                files = [future.result() for future in futures]
            except Exception:
                for future in futures:
                    future.cancel()
                raise

        logger.debug("Captured %d file(s) on %s worker(s)", len(files), self.max_workers or "default")
        return files


class CaptureStream:
    """
    Pull-based stream of file records.

    Each ``next()`` pulls walk items until it reaches a regular file or an
    error, then returns exactly one item: a :class:`~snapcat.models.FileEntry`,
    or the :class:`~snapcat.errors.SnapcatError` raised while walking or
    capturing. Errors do not end the stream. Nothing is buffered beyond the
    item being produced.
    """

    def __init__(self, entries: Iterable[Path | WalkError], capture: CaptureFn) -> None:
        self._entries = iter(entries)
        self._capture = capture

    def __iter__(self) -> CaptureStream:
        return self

    def __next__(self) -> StreamItem:
        while True:
            item = next(self._entries)
            if isinstance(item, WalkError):
                return item
            if not _is_file(item):
                continue
            try:
                return self._capture(item)
            except SnapcatError as err:
                logger.debug("Capture failed, continuing: %s", err)
                return err


class StreamingStrategy(ExecutionStrategy):
    """Compose the walk and the capture lazily into a :class:`CaptureStream`."""

    def run(self, entries: Iterable[Path | WalkError], capture: CaptureFn) -> CaptureStream:
        return CaptureStream(entries, capture)


def strategy_for(options: SnapcatOptions) -> ExecutionStrategy:
    """Return the strategy selected by ``options.execution``."""
    if options.execution is ExecutionMode.PARALLEL:
        return ParallelStrategy(options.max_workers)
    if options.execution is ExecutionMode.STREAMING:
        return StreamingStrategy()
    return SequentialStrategy()
