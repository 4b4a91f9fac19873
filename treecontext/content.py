# treecontext/content.py

"""
Context document generation.

This module concatenates the textual contents of selected files into a single
"context document", each file preceded by a ``// <relative path>`` header
line. It walks the same node hierarchy as the tree renderer, so directory
exclusions always agree between the two outputs.

Selection is by extension only: a file is included when its extension is a
member of ``ScanOptions.include_extensions``. Files that cannot be read or
decoded are logged and left out; the rest of the document is still produced.
"""


from __future__ import annotations

import logging
from pathlib import Path

from anytree import Node, PreOrderIter

from treecontext.options import ScanOptions, file_extension
from treecontext.tree import build_tree

logger = logging.getLogger(__name__)

HEADER_PREFIX = "// "


def read_text(path: Path, *, encoding: str = "utf-8") -> str:
    """Read a whole file as text, keeping its line endings untouched."""
    with path.open(encoding=encoding, newline="") as f:
        return f.read()


def file_to_text(
    path: Path,
    *,
    root: Path | None = None,
    encoding: str = "utf-8",
) -> str:
    """
    Return the context document block for one file.

    The block is ``// <header path>``, the raw contents and a blank line. The
    header is relative to ``root`` when given, else the resolved absolute path.
    Read and decode errors propagate, and a non-file raises ``ValueError``.
    """

    if not path.is_file():
        raise ValueError(f"Not a file: {path}")

    data = read_text(path, encoding=encoding)

    if root is not None:
        header_path = path.relative_to(root).as_posix()
    else:
        header_path = path.resolve().as_posix()

    return f"{HEADER_PREFIX}{header_path}\n{data}\n\n"


def files_content(node: Node, options: ScanOptions, *, encoding: str = "utf-8") -> str:
    """
    Concatenate the blocks of every included file under ``node``.

    Files are visited in pre-order, i.e. in the same order the tree renderer
    lists them.

    Parameters
    ----------
    node : anytree.Node
        Root node, as returned by :func:`~treecontext.tree.build_tree`.
    options : ScanOptions
        Active scan options; only ``include_extensions`` is consulted.
    encoding : str, default="utf-8"
        Text encoding used when reading files.

    Returns
    -------
    str
        The context document, possibly empty.
    """

    root = node.fs_path
    blocks: list[str] = []

    for n in PreOrderIter(node, filter_=lambda n: n is not node and not n.is_dir):
        if file_extension(n.name) not in options.include_extensions:
            continue
        try:
            blocks.append(file_to_text(n.fs_path, root=root, encoding=encoding))
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.error("Error reading file %s: %s", n.fs_path, exc)

    return "".join(blocks)


def get_files_content(options: ScanOptions, *, encoding: str = "utf-8") -> str:
    """Scan ``options.root_path`` and return its context document."""
    return files_content(build_tree(options), options, encoding=encoding)
