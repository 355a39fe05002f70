# snapcat/tree.py

"""
Tree rendering.

This module turns the flat list of paths produced by a walk into a
deterministic text tree, similar to the Unix ``tree`` command.

Rendering is a pure function of the root and the *set* of paths: paths are
sorted by their component sequence before anything is drawn, so the output
does not depend on walk order, execution mode or the operating system's
directory iteration order.

The tree is built as an :mod:`anytree` hierarchy first (:func:`build_tree`)
and then drawn (:func:`draw_tree`). :func:`render_tree` does both.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from anytree import Node, PreOrderIter

BRANCH = "├── "
VERTICAL = "│   "


def _relative(root: Path, path: Path) -> Path:
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def build_tree(root: Path, paths: Iterable[Path]) -> Node:
    """
    Build an anytree hierarchy from a root and a set of paths below it.

    The root itself is dropped from ``paths``. Remaining paths are sorted by
    their root-relative component tuples, which places every directory
    directly before its contents.

    Each node is attached under its nearest ancestor present in ``paths``
    (or the root node) and carries:

    - ``fs_path``: the path as given,
    - ``rel_depth``: number of components relative to the root.

    No filesystem access is performed.

    Parameters
    ----------
    root : pathlib.Path
        Root directory of the walk.
    paths : Iterable[pathlib.Path]
        Visited paths, in any order. Duplicates are collapsed.

    Returns
    -------
    anytree.Node
        Root node, named after ``str(root)``.
    """

    rel_paths = {_relative(root, p): p for p in paths}
    rel_paths.pop(Path("."), None)

    root_node = Node(str(root), fs_path=root, rel_depth=0)
    nodes: dict[tuple[str, ...], Node] = {(): root_node}

    for rel in sorted(rel_paths, key=lambda r: r.parts):
        parts = rel.parts
        parent = root_node
        for i in range(len(parts) - 1, 0, -1):
            if parts[:i] in nodes:
                parent = nodes[parts[:i]]
                break
        nodes[parts] = Node(
            rel.name or str(rel),
            parent=parent,
            fs_path=rel_paths[rel],
            rel_depth=len(parts),
        )

    return root_node


def draw_tree(node: Node) -> str:
    """
    Draw a tree built by :func:`build_tree`.

    The first line is ``".  # <root>"``. Every other entry is drawn as the
    vertical bar repeated ``depth - 1`` times followed by a branch connector
    and the entry name. The same connector is used for every sibling,
    including the last one.

    Returns
    -------
    str
        Newline-separated tree, without a trailing newline.
    """

    lines: list[str] = [f".  # {node.fs_path}"]
    for child in PreOrderIter(node):
        if child is node:
            continue
        lines.append(VERTICAL * (child.rel_depth - 1) + BRANCH + child.name)
    return "\n".join(lines)


def render_tree(root: Path, paths: Iterable[Path]) -> str:
    """Render ``paths`` below ``root`` as a tree string."""
    return draw_tree(build_tree(root, paths))
