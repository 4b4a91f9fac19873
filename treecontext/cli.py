# treecontext/cli.py

"""
Interactive command-line entry point.

The tool takes no flags: :func:`prompt_options` asks a fixed sequence of
questions and returns a :class:`~treecontext.options.ScanOptions`, then
:func:`run` writes ``output/<prefix>directory_tree.txt`` and, if requested,
``output/<prefix>context_document.txt`` under the current directory.

I/O errors met while scanning or writing are logged to stderr and do not
change the exit status.
"""


from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

from treecontext.content import files_content
from treecontext.options import DEFAULT_INCLUDE_EXTENSIONS, ScanOptions
from treecontext.output import (
    CONTEXT_FILENAME,
    TREE_FILENAME,
    ensure_output_dir,
    output_filename,
    write_output,
)
from treecontext.tree import build_tree, draw_tree

logger = logging.getLogger(__name__)

Ask = Callable[[str], str]

_DEFAULT_EXTENSIONS_HINT = ",".join(sorted(DEFAULT_INCLUDE_EXTENSIONS))


def parse_list(answer: str) -> list[str]:
    """Split a comma-separated answer, dropping blank items."""
    return [item.strip() for item in answer.split(",") if item.strip()]


def ask_yes_no(ask: Ask, question: str) -> bool:
    """Ask a ``(Y/n)`` question; anything but ``n`` means yes."""
    return ask(question).strip().lower() != "n"


def ask_root_path(ask: Ask) -> Path:
    while True:
        answer = ask("Enter the folder to scan: ").strip()
        if answer and Path(answer).exists():
            return Path(answer)
        print(
            f'The directory "{answer}" does not exist. Please enter a valid path.',
            file=sys.stderr,
        )


def prompt_options(ask: Ask | None = None) -> ScanOptions:
    """
    Gather scan options interactively.

    Parameters
    ----------
    ask : Callable[[str], str], optional
        Function displaying a question and returning the user's answer.
        Defaults to :func:`input`.

    Returns
    -------
    ScanOptions
        The options, with the default include extensions merged in.
    """

    if ask is None:
        ask = input

    root_path = ask_root_path(ask)
    exclude_node_modules = ask_yes_no(ask, "Exclude node_modules folder? (Y/n): ")
    exclude_dot_folders = ask_yes_no(ask, "Exclude folders starting with a dot (.)? (Y/n): ")
    additional_exclude_folders = parse_list(
        ask("Enter additional folders to exclude (comma-separated, press enter for none): ")
    )
    exclude_extensions = parse_list(
        ask("Enter file extensions to exclude (comma-separated, press enter for none): ")
    )
    create_context_doc = ask_yes_no(ask, "Create a context document? (Y/n): ")
    include_extensions = parse_list(
        ask(
            "Enter additional file extensions to include in the context document "
            f"(comma-separated, default: {_DEFAULT_EXTENSIONS_HINT}): "
        )
    )
    file_prefix = ask("Enter a prefix for output files (press enter for none): ").strip()

    return ScanOptions.create(
        root_path,
        exclude_node_modules=exclude_node_modules,
        exclude_dot_folders=exclude_dot_folders,
        additional_exclude_folders=additional_exclude_folders,
        exclude_extensions=exclude_extensions,
        include_extensions=include_extensions,
        create_context_doc=create_context_doc,
        file_prefix=file_prefix,
    )


def run(options: ScanOptions, base: Path | None = None) -> int:
    """
    Scan once and write the requested artifacts under ``<base>/output``.

    Returns
    -------
    int
        Always ``0``; failures are logged.
    """

    output_dir = ensure_output_dir(base)
    node = build_tree(options)

    tree = draw_tree(node, options.exclude_extensions)
    path = write_output(tree, output_dir, output_filename(options.file_prefix, TREE_FILENAME))
    if path is not None:
        print(f"Tree structure has been written to {path}")

    if options.create_context_doc:
        context = files_content(node, options)
        path = write_output(context, output_dir, output_filename(options.file_prefix, CONTEXT_FILENAME))
        if path is not None:
            print(f"Context document has been written to {path}")

    return 0


def main() -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        options = prompt_options()
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except EOFError:
        logger.error("Input closed before all questions were answered")
        return 1

    try:
        return run(options)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
