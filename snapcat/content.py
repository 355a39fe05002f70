# snapcat/content.py

"""
File content capture.

This module decides, for one file at a time, whether to return its text, a
"too large" placeholder, or a "binary" placeholder, and performs the bounded
read that decision requires.

The decision is made in this order:

1. size limit, checked with a ``stat`` call only (no bytes are read),
2. binary classification of a fixed-size sniff window,
3. full read of the remaining bytes, decoded as UTF-8 with replacement.
"""

from __future__ import annotations

import codecs
import logging
import os
from pathlib import Path

from snapcat.errors import FileIOError
from snapcat.models import FileEntry
from snapcat.options import BinaryDetection, SnapcatOptions

logger = logging.getLogger(__name__)

SNIFF_SIZE = 4096
TOO_LARGE_PLACEHOLDER = "[File too large, content omitted]"
BINARY_PLACEHOLDER = "[Binary file, content omitted]"

_TEXT_BOMS = (
    codecs.BOM_UTF8,
    codecs.BOM_UTF32_LE,
    codecs.BOM_UTF32_BE,
    codecs.BOM_UTF16_LE,
    codecs.BOM_UTF16_BE,
)
_BINARY_MAGIC = (b"%PDF-",)
_TEXT_BYTES = bytes({7, 8, 9, 10, 12, 13, 27} | set(range(32, 127)))


def inspect_chunk(chunk: bytes) -> bool:
    """
    Sniff a byte chunk and report whether it looks binary.

    The decision is a deterministic function of ``chunk``:

    - a UTF-8/16/32 byte order mark means text (UTF-16 text is full of NULs),
    - known binary magic numbers (PDF) mean binary,
    - a NUL byte means binary,
    - valid UTF-8 means text; a multi-byte character cut at the end of the
      chunk is tolerated,
    - otherwise, more than 30% of bytes outside printable ASCII and common
      control characters means binary.

    The last rule is stricter than a pure NUL check: legacy single-byte text
    whose bytes are mostly above 0x7F (CP1251 Cyrillic, for example) is
    reported as binary. Use :attr:`BinaryDetection.SIMPLE` for such trees.

    Parameters
    ----------
    chunk : bytes
        Leading bytes of a file, typically :data:`SNIFF_SIZE` long.

    Returns
    -------
    bool
        ``True`` if the chunk looks binary.
    """

    if not chunk:
        return False
    if chunk.startswith(_TEXT_BOMS):
        return False
    if chunk.startswith(_BINARY_MAGIC):
        return True
    if b"\x00" in chunk:
        return True

    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(chunk, final=False)
        return False
    except UnicodeDecodeError:
        pass

    non_text = len(chunk.translate(None, _TEXT_BYTES))
    return non_text / len(chunk) > 0.30


def is_binary_chunk(chunk: bytes, mode: BinaryDetection) -> bool:
    """Classify a sniff window according to ``mode``."""
    if mode is BinaryDetection.NONE:
        return False
    if mode is BinaryDetection.SIMPLE:
        return b"\x00" in chunk
    return inspect_chunk(chunk)


def read_file_content(
    path: Path,
    binary_detection: BinaryDetection = BinaryDetection.SIMPLE,
    size_limit: int | None = None,
) -> tuple[str, bool]:
    """
    Read a file's content, applying the size limit and binary detection.

    Parameters
    ----------
    path : pathlib.Path
        File to read.
    binary_detection : BinaryDetection, default=BinaryDetection.SIMPLE
        How to classify the sniff window.
    size_limit : int | None, default=None
        Files strictly larger than this many bytes are not read at all.

    Returns
    -------
    tuple[str, bool]
        ``(content, is_binary)``. ``content`` is the file text or one of
        :data:`TOO_LARGE_PLACEHOLDER` / :data:`BINARY_PLACEHOLDER`.

    Raises
    ------
    FileIOError
        If the file cannot be stat-ed, opened or read.
    """

    try:
        if size_limit is not None:
            size = os.stat(path).st_size
            if size > size_limit:
                logger.debug("File too large (%d > %d), skipping content: %s", size, size_limit, path)
                return TOO_LARGE_PLACEHOLDER, False

        with path.open("rb") as f:
            head = f.read(SNIFF_SIZE)
            if is_binary_chunk(head, binary_detection):
                logger.debug("Binary file detected: %s", path)
                return BINARY_PLACEHOLDER, True
            rest = f.read()
    except OSError as err:
        raise FileIOError(path, err) from err

    # decode as a whole so characters straddling the sniff boundary survive
    return (head + rest).decode("utf-8", errors="replace"), False


def capture_file(path: Path, options: SnapcatOptions) -> FileEntry:
    """
    Build the :class:`~snapcat.models.FileEntry` for one file.

    The size, when requested, is read with a second ``stat`` and attached
    whether or not the content was withheld.

    Raises
    ------
    FileIOError
        If reading the content or the size fails.
    """

    content, is_binary = read_file_content(path, options.binary_detection, options.file_size_limit)

    size = None
    if options.include_file_size:
        try:
            size = os.stat(path).st_size
        except OSError as err:
            raise FileIOError(path, err) from err

    return FileEntry(path=path, content=content, is_binary=is_binary, size=size)
