# treecontext/output.py

"""
Persistence of the generated artifacts under ``./output``.

Write failures are logged rather than raised, so one failed artifact never
prevents the other from being written.
"""


from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

OUTPUT_DIR_NAME = "output"
TREE_FILENAME = "directory_tree.txt"
CONTEXT_FILENAME = "context_document.txt"


def ensure_output_dir(base: Path | None = None) -> Path:
    """
    Return ``<base>/output``, creating it if needed.

    ``base`` defaults to the current working directory. A creation failure is
    logged; the path is returned anyway so later writes report their own error.
    """

    directory = (base if base is not None else Path.cwd()) / OUTPUT_DIR_NAME
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.error("Error creating output directory %s: %s", directory, exc)
    return directory


def output_filename(prefix: str, name: str) -> str:
    """
    Join a user prefix and an artifact name.

    A single leading underscore is dropped, so an empty prefix never yields
    ``_directory_tree.txt``.
    """

    filename = f"{prefix}{name}"
    if filename.startswith("_"):
        filename = filename[1:]
    return filename


def write_output(text: str, directory: Path, filename: str) -> Path | None:
    """
    Write ``text`` to ``directory / filename`` as UTF-8, replacing any existing file.

    Characters UTF-8 cannot encode, such as the surrogates standing in for
    undecodable file names, are written as ``?``.

    Returns
    -------
    pathlib.Path | None
        The written path, or ``None`` if writing failed (the error is logged).
    """

    path = directory / filename
    try:
        with path.open("w", encoding="utf-8", errors="replace", newline="") as f:
            f.write(text)
    except (OSError, UnicodeError) as exc:
        logger.error("Error writing %s: %s", path, exc)
        return None
    return path
