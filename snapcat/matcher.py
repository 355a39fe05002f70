# snapcat/matcher.py

"""
Glob exclusion matching.

An :class:`IgnoreMatcher` compiles an ordered list of glob patterns once and
answers a single question per candidate path: does any pattern match?

Patterns use :mod:`fnmatch` syntax (``*``, ``?``, ``[seq]``, ``[!seq]``) plus
``{a,b}`` alternation, and are matched against the whole root-relative POSIX
path. ``*`` is not anchored at path segment boundaries, so ``"*.log"``
matches ``"a/b/debug.log"``. A leading ``**/`` additionally matches zero
directories, so ``"**/build"`` matches a top-level ``build`` too.
"""

from __future__ import annotations

import fnmatch
import re
from pathlib import PurePath
from typing import Iterable

from snapcat.errors import InvalidPatternError


def _class_end(pattern: str, i: int) -> int:
    """Return the index of the ``]`` closing the class opened at ``i``, or -1."""
    n = len(pattern)
    j = i + 1
    if j < n and pattern[j] == "!":
        j += 1
    # a ']' right after '[' or '[!' is part of the set
    if j < n and pattern[j] == "]":
        j += 1
    while j < n and pattern[j] != "]":
        j += 1
    return j if j < n else -1


def _check_brackets(pattern: str) -> None:
    """
    Reject character classes that are opened but never closed.

    :func:`fnmatch.translate` silently treats an unclosed ``[`` as a literal,
    which would hide typos such as ``"*.[ch"``.
    """

    i, n = 0, len(pattern)
    while i < n:
        if pattern[i] == "[":
            end = _class_end(pattern, i)
            if end < 0:
                raise InvalidPatternError(pattern, f"unclosed character class at position {i}")
            i = end
        i += 1


def _brace_groups(pattern: str) -> list[tuple[int, int, list[int]]]:
    """
    Locate the top-level ``{...}`` groups of a pattern.

    Returns ``(open, close, commas)`` index triples, where ``commas`` are the
    top-level separators inside the group. Braces inside character classes
    are literal.

    Raises
    ------
    InvalidPatternError
        On an unclosed ``{`` or an unopened ``}``.
    """

    groups: list[tuple[int, int, list[int]]] = []
    depth, start = 0, -1
    commas: list[int] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "[":
            end = _class_end(pattern, i)
            i = end if end >= 0 else i
        elif c == "{":
            if depth == 0:
                start, commas = i, []
            depth += 1
        elif c == "}":
            if depth == 0:
                raise InvalidPatternError(pattern, f"unopened alternate group at position {i}")
            depth -= 1
            if depth == 0:
                groups.append((start, i, commas))
        elif c == "," and depth == 1:
            commas.append(i)
        i += 1
    if depth:
        raise InvalidPatternError(pattern, f"unclosed alternate group at position {start}")
    return groups


def expand_braces(pattern: str) -> list[str]:
    """
    Expand ``{a,b}`` alternation into plain glob patterns.

    Groups may nest: ``"*.{c,h{,pp}}"`` expands to ``*.c``, ``*.h`` and
    ``*.hpp``.
    """

    groups = _brace_groups(pattern)
    if not groups:
        return [pattern]

    start, end, commas = groups[0]
    bounds = [start] + commas + [end]
    head, tail = pattern[:start], pattern[end + 1 :]
    expanded: list[str] = []
    for lo, hi in zip(bounds, bounds[1:]):
        expanded.extend(expand_braces(head + pattern[lo + 1 : hi] + tail))
    return expanded


def compile_pattern(pattern: str) -> list[re.Pattern[str]]:
    """
    Compile one glob pattern into the regular expressions that implement it.

    Raises
    ------
    InvalidPatternError
        If the pattern is empty or not a valid glob.
    """

    if not pattern:
        raise InvalidPatternError(pattern, "empty pattern")
    _check_brackets(pattern)

    variants: list[str] = []
    for alternative in expand_braces(pattern):
        variants.append(alternative)
        if alternative.startswith("**/") and len(alternative) > 3:
            variants.append(alternative[3:])

    try:
        return [re.compile(fnmatch.translate(v)) for v in variants]
    except re.error as err:
        raise InvalidPatternError(pattern, str(err)) from err


class IgnoreMatcher:
    """
    Compiled predicate over a list of glob exclusion patterns.

    The matcher is built once, before traversal starts, and holds no mutable
    state afterwards, so a single instance can be shared freely.

    Parameters
    ----------
    patterns : Iterable[str]
        Glob patterns. An empty list yields a matcher that never matches.

    Raises
    ------
    InvalidPatternError
        If any pattern fails to compile. The first offending pattern is
        reported.
    """

    def __init__(self, patterns: Iterable[str] = ()) -> None:
        self.patterns: tuple[str, ...] = tuple(patterns)
        self._regexes: list[re.Pattern[str]] = []
        for pattern in self.patterns:
            self._regexes.extend(compile_pattern(pattern))

    def __bool__(self) -> bool:
        return bool(self._regexes)

    def __repr__(self) -> str:
        return f"IgnoreMatcher({list(self.patterns)!r})"

    def matches(self, path: str | PurePath) -> bool:
        """Return ``True`` if any pattern matches ``path``."""
        if not self._regexes:
            return False
        candidate = path.as_posix() if isinstance(path, PurePath) else path
        return any(rx.match(candidate) for rx in self._regexes)
