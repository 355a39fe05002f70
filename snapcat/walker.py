# snapcat/walker.py

"""
Filtered directory traversal.

:class:`Walker` performs a single depth-first walk below a root directory and
yields every visited path lazily. It combines several filters:

- hidden entries (names starting with ``.``) unless ``include_hidden``,
- ``.gitignore`` files of every visited directory, plus the root's
  ``.git/info/exclude``, when ``respect_gitignore``,
- the glob :class:`~snapcat.matcher.IgnoreMatcher`,
- an optional maximum depth (the root is depth 0).

All filters prune: an excluded directory is neither yielded nor descended
into. Failures on individual entries are yielded in-band as
:class:`~snapcat.errors.WalkError` objects so the walk can carry on.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Union

import pathspec

from snapcat.errors import InvalidPathError, WalkError
from snapcat.matcher import IgnoreMatcher
from snapcat.options import SnapcatOptions

logger = logging.getLogger(__name__)

WalkItem = Union[Path, WalkError]

# (directory the rules are relative to, compiled rules)
_Rules = tuple[tuple[Path, pathspec.GitIgnoreSpec], ...]


def is_dir(p: Path) -> bool:
    """
    Safely determine whether a path refers to a directory.

    ``Path.is_dir()`` follows symlinks; filesystem errors are reported as
    ``False``.
    """

    try:
        return p.is_dir()
    except OSError:
        return False


def _walk_error(path: Path, err: OSError | str) -> WalkError:
    error = WalkError(path, str(err))
    if isinstance(err, OSError):
        error.__cause__ = err
    return error


class Walker:
    """
    Single-use lazy walk over a directory tree.

    The root is validated and the glob matcher compiled in the constructor,
    so configuration errors surface before the first item is produced.

    Parameters
    ----------
    options : SnapcatOptions
        Traversal options. Only the walk-related fields are read.

    Raises
    ------
    InvalidPathError
        If ``options.root`` does not exist or is not a directory.
    InvalidPatternError
        If one of ``options.ignore_patterns`` is not a valid glob.
    """

    def __init__(self, options: SnapcatOptions) -> None:
        root = options.root
        if not root.exists():
            raise InvalidPathError(root, "does not exist")
        if not root.is_dir():
            raise InvalidPathError(root, "not a directory")

        self.options = options
        self.root = root
        self.matcher = IgnoreMatcher(options.ignore_patterns)

    def __iter__(self) -> Iterator[WalkItem]:
        return self._walk()

    def collect_entries(self) -> list[Path]:
        """
        Run the walk to completion and return every visited path.

        Raises
        ------
        WalkError
            The first in-band walk error, if any.
        """

        entries: list[Path] = []
        for item in self:
            if isinstance(item, WalkError):
                raise item
            entries.append(item)
        return entries

    # ------------------------------------------------------------------ walk

    def _walk(self) -> Iterator[WalkItem]:
        logger.debug("Starting walk at %s", self.root)
        yield self.root

        if self.options.max_depth == 0:
            return

        rules: _Rules = ()
        ancestors: frozenset[tuple[int, int]] = frozenset()

        if self.options.respect_gitignore:
            exclude = self.root / ".git" / "info" / "exclude"
            if exclude.is_file():
                spec, error = self._load_rules(exclude)
                if error is not None:
                    yield error
                elif spec is not None:
                    rules = ((self.root, spec),)
        if self.options.follow_links:
            key = self._dir_key(self.root)
            if key is not None:
                ancestors = frozenset({key})

        yield from self._walk_dir(self.root, 0, rules, ancestors)

    def _walk_dir(
        self,
        directory: Path,
        depth: int,
        rules: _Rules,
        ancestors: frozenset[tuple[int, int]],
    ) -> Iterator[WalkItem]:
        try:
            children = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as err:
            yield _walk_error(directory, err)
            return

        if self.options.respect_gitignore:
            gitignore = directory / ".gitignore"
            if gitignore.is_file():
                spec, error = self._load_rules(gitignore)
                if error is not None:
                    yield error
                elif spec is not None:
                    rules = rules + ((directory, spec),)

        child_depth = depth + 1
        max_depth = self.options.max_depth

        for child in children:
            linked = child.is_symlink()
            # an unfollowed symlink is a leaf, whatever it points to
            child_is_dir = is_dir(child) and (self.options.follow_links or not linked)

            if not self._accept(child, child_is_dir, rules):
                continue

            yield child

            if not child_is_dir:
                continue
            if max_depth is not None and child_depth >= max_depth:
                continue

            child_ancestors = ancestors
            if self.options.follow_links:
                key = self._dir_key(child)
                if key is None:
                    yield WalkError(child, "cannot stat directory")
                    continue
                if key in ancestors:
                    yield WalkError(child, "filesystem loop found: link points to an ancestor")
                    continue
                child_ancestors = ancestors | {key}

            yield from self._walk_dir(child, child_depth, rules, child_ancestors)

    # --------------------------------------------------------------- filters

    def _accept(self, path: Path, path_is_dir: bool, rules: _Rules) -> bool:
        if not self.options.include_hidden and path.name.startswith("."):
            return False

        if rules and self._gitignored(path, path_is_dir, rules):
            logger.debug("Ignored by gitignore: %s", path)
            return False

        if self.matcher and self.matcher.matches(path.relative_to(self.root)):
            logger.debug("Ignored by pattern: %s", path)
            return False

        return True

    @staticmethod
    def _gitignored(path: Path, path_is_dir: bool, rules: _Rules) -> bool:
        # deepest .gitignore wins, like git itself
        for base, spec in reversed(rules):
            rel = path.relative_to(base).as_posix()
            if path_is_dir:
                rel += "/"
            result = spec.check_file(rel)
            if result.include is not None:
                return result.include
        return False

    @staticmethod
    def _load_rules(path: Path) -> tuple[pathspec.GitIgnoreSpec | None, WalkError | None]:
        try:
            lines = path.read_text(encoding="utf-8", errors="replace").splitlines()
        except OSError as err:
            return None, _walk_error(path, err)

        try:
            spec = pathspec.GitIgnoreSpec.from_lines(lines)
        except ValueError as err:
            return None, _walk_error(path, f"invalid ignore file: {err}")

        logger.debug("Loaded %d ignore rule(s) from %s", len(spec.patterns), path)
        return spec, None

    @staticmethod
    def _dir_key(path: Path) -> tuple[int, int] | None:
        try:
            st = os.stat(path)
        except OSError:
            return None
        return st.st_dev, st.st_ino
