# snapcat/output.py

"""
Formatting of snapcat results as Markdown, plain text or JSON.

Formatting is pure: nothing here walks or reads the filesystem, except
:func:`write_result_to_file` which writes the formatted string.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path

from snapcat.errors import FileIOError
from snapcat.models import FileEntry, SnapcatResult


class OutputFormat(str, Enum):
    MARKDOWN = "markdown"
    TEXT = "text"
    JSON = "json"

    @property
    def extension(self) -> str:
        return {"markdown": "md", "text": "txt", "json": "json"}[self.value]


_LANGUAGES = {
    "rs": "rust",
    "toml": "toml",
    "json": "json",
    "md": "markdown",
    "markdown": "markdown",
    "txt": "text",
    "html": "html",
    "htm": "html",
    "css": "css",
    "js": "javascript",
    "py": "python",
    "sh": "bash",
    "bash": "bash",
    "yml": "yaml",
    "yaml": "yaml",
    "xml": "xml",
    "c": "c",
    "h": "c",
    "cpp": "cpp",
    "cc": "cpp",
    "cxx": "cpp",
    "hpp": "cpp",
    "go": "go",
    "rb": "ruby",
    "php": "php",
    "swift": "swift",
    "kt": "kotlin",
    "kts": "kotlin",
    "scala": "scala",
    "dart": "dart",
}


def language_from_extension(ext: str) -> str:
    """Map a file extension (without the dot) to a Markdown code fence language."""
    return _LANGUAGES.get(ext, "")


def _code_block(content: str, lang: str = "") -> str:
    if not content.endswith("\n"):
        content += "\n"
    return f"```{lang}\n{content}```\n"


def _with_newline(s: str) -> str:
    return s if s.endswith("\n") else s + "\n"


def format_markdown(result: SnapcatResult) -> str:
    parts = [_code_block(result.tree)]
    for file in result.files:
        ext = file.path.suffix[1:]
        parts.append(f"## {file.path}\n\n")
        parts.append(_code_block(file.content, language_from_extension(ext)))
    return "".join(parts)


def format_text(result: SnapcatResult) -> str:
    parts = ["Directory Tree:\n", _with_newline(result.tree), "\n\nFiles:\n"]
    for file in result.files:
        parts.append(f"\n--- {file.path} ---\n")
        parts.append(_with_newline(file.content))
    return "".join(parts)


def format_json(result: SnapcatResult, pretty: bool = False) -> str:
    return json.dumps(result.to_dict(), indent=2 if pretty else None, ensure_ascii=False)


def format_entry_json(entry: FileEntry, pretty: bool = False) -> str:
    """Serialize a single streamed record."""
    return json.dumps(entry.to_dict(), indent=2 if pretty else None, ensure_ascii=False)


def format_result(result: SnapcatResult, fmt: OutputFormat | str, pretty: bool = False) -> str:
    """
    Format a snapcat result.

    Parameters
    ----------
    result : SnapcatResult
        Result to format.
    fmt : OutputFormat | str
        Target format.
    pretty : bool, default=False
        Indent JSON output. Markdown and text are unaffected.

    Returns
    -------
    str
        The formatted document.
    """

    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.MARKDOWN:
        return format_markdown(result)
    if fmt is OutputFormat.TEXT:
        return format_text(result)
    return format_json(result, pretty)


def write_result_to_file(
    result: SnapcatResult,
    fmt: OutputFormat | str,
    path: str | Path,
    pretty: bool = False,
) -> None:
    """
    Format ``result`` and write it to ``path`` as UTF-8.

    Raises
    ------
    FileIOError
        If the file cannot be written.
    """

    path = Path(path)
    try:
        path.write_text(format_result(result, fmt, pretty), encoding="utf-8")
    except OSError as err:
        raise FileIOError(path, err) from err
