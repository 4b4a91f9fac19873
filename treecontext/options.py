# treecontext/options.py

"""
Scan configuration and exclusion rules.

:class:`ScanOptions` is the single immutable record shared by the tree
renderer and the context collector. The directory exclusion predicate lives
here so both consumers apply exactly the same rules.
"""


from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

DEFAULT_INCLUDE_EXTENSIONS: frozenset[str] = frozenset({"js", "jsx", "ts", "tsx", "vue"})
NODE_MODULES = "node_modules"


def normalize_extensions(extensions: Iterable[str]) -> frozenset[str]:
    """Strip whitespace and one leading dot from each extension, dropping empties."""
    normalized = set()
    for ext in extensions:
        ext = ext.strip()
        if ext.startswith("."):
            ext = ext[1:]
        if ext:
            normalized.add(ext)
    return frozenset(normalized)


def file_extension(name: str) -> str:
    """
    Return the extension of a file name, without the leading dot.

    The extension is the text after the last ``.``. Names without one, dotfiles
    such as ``.gitignore`` and names ending with a dot all yield ``""``.

    Parameters
    ----------
    name : str
        Base name of the file.

    Returns
    -------
    str
        The extension, or an empty string.
    """

    return os.path.splitext(name)[1][1:]


@dataclass(frozen=True)
class ScanOptions:
    """
    Immutable options for one scan.

    Use :meth:`create` to build an instance from loose user input; it seeds
    ``include_extensions`` with :data:`DEFAULT_INCLUDE_EXTENSIONS`.
    """

    root_path: Path
    exclude_node_modules: bool = True
    exclude_dot_folders: bool = True
    additional_exclude_folders: frozenset[str] = field(default_factory=frozenset)
    exclude_extensions: frozenset[str] = field(default_factory=frozenset)
    include_extensions: frozenset[str] = DEFAULT_INCLUDE_EXTENSIONS
    create_context_doc: bool = True
    file_prefix: str = ""
    follow_symlinks: bool = False
    sort_entries: bool = False

    @classmethod
    def create(
        cls,
        root_path: Path | str,
        *,
        exclude_node_modules: bool = True,
        exclude_dot_folders: bool = True,
        additional_exclude_folders: Iterable[str] = (),
        exclude_extensions: Iterable[str] = (),
        include_extensions: Iterable[str] = (),
        create_context_doc: bool = True,
        file_prefix: str = "",
        follow_symlinks: bool = False,
        sort_entries: bool = False,
    ) -> ScanOptions:
        """
        Build options from user-supplied values.

        ``include_extensions`` lists the *additional* extensions; the defaults
        are always part of the resulting include set.
        """

        return cls(
            root_path=Path(root_path),
            exclude_node_modules=exclude_node_modules,
            exclude_dot_folders=exclude_dot_folders,
            additional_exclude_folders=frozenset(
                name.strip() for name in additional_exclude_folders if name.strip()
            ),
            exclude_extensions=normalize_extensions(exclude_extensions),
            include_extensions=DEFAULT_INCLUDE_EXTENSIONS | normalize_extensions(include_extensions),
            create_context_doc=create_context_doc,
            file_prefix=file_prefix,
            follow_symlinks=follow_symlinks,
            sort_entries=sort_entries,
        )


def is_excluded_dir(name: str, options: ScanOptions) -> bool:
    """
    Decide whether a directory should be skipped together with its subtree.

    Parameters
    ----------
    name : str
        Base name of the directory.
    options : ScanOptions
        Active scan options.

    Returns
    -------
    bool
        ``True`` if the directory must be neither listed nor descended into.
    """

    if options.exclude_node_modules and name == NODE_MODULES:
        return True
    if options.exclude_dot_folders and name.startswith("."):
        return True
    return name in options.additional_exclude_folders
