# treecontext/tree.py

"""
Filesystem traversal and tree rendering.

:func:`build_tree` walks a directory depth-first and returns an
``anytree.Node`` hierarchy, applying the directory exclusion rules once.
:func:`draw_tree` renders such a hierarchy in the style of the Unix ``tree``
command, and :func:`build_and_draw_tree` chains the two.

Each node carries three extra attributes: ``fs_path`` (the filesystem
path), ``is_dir`` and ``is_symlink``.
"""


from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from anytree import ContStyle, Node, RenderTree

from treecontext.options import ScanOptions, file_extension, is_excluded_dir

logger = logging.getLogger(__name__)

ROOT_MARKER = "."
LAST_BRANCH = "└── "


def is_dir(p: Path) -> bool:
    """
    Safely determine whether a path refers to a directory.

    Symbolic links to directories count as directories. Filesystem errors
    (e.g. permission issues) yield ``False``.
    """

    try:
        return p.is_dir()
    except OSError:
        return False


def is_symlink(p: Path) -> bool:
    try:
        return p.is_symlink()
    except OSError:
        return False


def build_tree(options: ScanOptions) -> Node:
    """
    Walk the scan root and build a node hierarchy.

    Directories rejected by :func:`~treecontext.options.is_excluded_dir` get no
    node and are not descended into. Files always get a node: filtering by
    extension is left to the consumers. The root itself is never excluded.

    Children keep the order returned by the directory listing unless
    ``options.sort_entries`` is set, in which case directories come first and
    names are compared case-insensitively.

    A directory that cannot be listed is logged and kept as a childless node.

    Parameters
    ----------
    options : ScanOptions
        Active scan options.

    Returns
    -------
    anytree.Node
        The root node of the scanned hierarchy.
    """

    root = options.root_path.resolve()
    root_node = Node(
        root.name or str(root),
        fs_path=root,
        is_dir=is_dir(root),
        is_symlink=is_symlink(options.root_path),
    )

    def iter_children(d: Path) -> list[Path]:
        try:
            children = list(d.iterdir())
        except OSError as exc:
            logger.error("Error reading directory %s: %s", d, exc)
            return []
        if options.sort_entries:
            children.sort(key=lambda p: (not is_dir(p), p.name.casefold()))
        return children

    def rec(parent: Node) -> None:
        for child in iter_children(parent.fs_path):
            child_is_dir = is_dir(child)
            if child_is_dir and is_excluded_dir(child.name, options):
                continue
            link = is_symlink(child)
            node = Node(child.name, parent=parent, fs_path=child, is_dir=child_is_dir, is_symlink=link)
            if child_is_dir and (options.follow_symlinks or not link):
                rec(node)

    if root_node.is_dir:
        rec(root_node)
    else:
        # Listing a non-directory root is reported the same way as any other unreadable directory.
        iter_children(root)
    return root_node


def draw_tree(node: Node, exclude_extensions: Iterable[str] = ()) -> str:
    """
    Render a node hierarchy as a tree-style string.

    The first line is the ``.`` marker, followed by the root drawn as the
    last (and only) entry of that marker. Files whose extension appears in
    ``exclude_extensions`` are hidden; directories are always shown. Every
    line, including the last, ends with ``\\n``.

    Parameters
    ----------
    node : anytree.Node
        Root node, as returned by :func:`build_tree`.
    exclude_extensions : Iterable[str], optional
        Extensions (without leading dot) of files to leave out.

    Returns
    -------
    str
        The rendered tree.
    """

    excluded = frozenset(exclude_extensions)

    def visible(children):
        return [c for c in children if c.is_dir or file_extension(c.name) not in excluded]

    lines = [ROOT_MARKER, LAST_BRANCH + node.name]
    rows = iter(RenderTree(node, style=ContStyle(), childiter=visible))
    next(rows)  # the root row, already drawn above
    # The root is the last entry under the marker, so its children are indented by blanks.
    indent = " " * len(LAST_BRANCH)
    lines.extend(indent + row.pre + row.node.name for row in rows)
    return "\n".join(lines) + "\n"


def build_and_draw_tree(options: ScanOptions) -> str:
    """Scan ``options.root_path`` and render it, hiding ``options.exclude_extensions``."""
    return draw_tree(build_tree(options), options.exclude_extensions)
