"""
treecontext — directory tree snapshots and context documents.

This package provides simple, composable tools to:
- render directory structures as ``tree``-style diagrams,
- concatenate the contents of selected source files into one document.

Both share a single traversal (:func:`build_tree`), so directory exclusion
rules always agree between the two outputs. The interactive command is
available as ``treecontext`` or ``python -m treecontext``.
"""

from __future__ import annotations

from .options import DEFAULT_INCLUDE_EXTENSIONS, ScanOptions, is_excluded_dir
from .tree import build_tree, draw_tree, build_and_draw_tree
from .content import files_content, get_files_content

__all__ = [
    "DEFAULT_INCLUDE_EXTENSIONS",
    "ScanOptions",
    "is_excluded_dir",
    "build_tree",
    "draw_tree",
    "build_and_draw_tree",
    "files_content",
    "get_files_content",
]
