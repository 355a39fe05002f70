# snapcat/models.py

"""Plain data produced by a snapcat run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class FileEntry:
    """
    One captured file.

    ``content`` is either the file's text or one of the two placeholders from
    :mod:`snapcat.content`. ``is_binary`` is true only for the binary
    placeholder. ``size`` is set only when size reporting was requested.
    """

    path: Path
    content: str
    is_binary: bool
    size: int | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "path": str(self.path),
            "content": self.content,
            "is_binary": self.is_binary,
        }
        if self.size is not None:
            data["size"] = self.size
        return data


@dataclass
class SnapcatResult:
    """Rendered tree plus the file records of the same walk."""

    tree: str
    files: list[FileEntry] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"tree": self.tree, "files": [f.to_dict() for f in self.files]}
