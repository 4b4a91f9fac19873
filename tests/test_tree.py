import logging
import os
import stat
import sys
from pathlib import Path

import pytest
from anytree import PreOrderIter

from treecontext import ScanOptions, build_tree


def _collect_paths(node, root: Path):
    """
    Collect relative POSIX paths from the built tree (including directories).
    Returns a set of strings.
    """
    rels = set()
    for n in PreOrderIter(node):
        p = getattr(n, "fs_path", None)
        assert p is not None, "each node must carry a `fs_path` attribute"
        rels.add("" if p == root else p.relative_to(root).as_posix())
    return rels


def _make_file(p: Path, content: str = "x"):
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(content, encoding="utf-8")


def _cannot_drop_permissions() -> bool:
    return os.name != "posix" or os.geteuid() == 0


def test_basic_directory_tree(tmp_path: Path):
    (tmp_path / "src").mkdir()
    (tmp_path / "docs").mkdir()
    _make_file(tmp_path / "src/a.ts")
    _make_file(tmp_path / "src/b.txt")
    _make_file(tmp_path / "docs/readme.md")
    _make_file(tmp_path / "top.txt")

    node = build_tree(ScanOptions.create(tmp_path))
    rels = _collect_paths(node, tmp_path.resolve())

    assert rels == {"", "src", "src/a.ts", "src/b.txt", "docs", "docs/readme.md", "top.txt"}

    assert node.name == tmp_path.resolve().name
    assert node.is_dir is True
    src = next(n for n in PreOrderIter(node) if n.name == "src")
    assert src.is_dir is True
    ats = next(n for n in PreOrderIter(node) if n.name == "a.ts")
    assert ats.is_dir is False


def test_default_exclusions(tmp_path: Path):
    for d in ["node_modules/pkg", ".git", ".venv", "lib"]:
        (tmp_path / d).mkdir(parents=True, exist_ok=True)
    _make_file(tmp_path / "node_modules/pkg/index.js")
    _make_file(tmp_path / ".git/config")
    _make_file(tmp_path / "lib/keep.js")
    _make_file(tmp_path / ".env")

    rels = _collect_paths(build_tree(ScanOptions.create(tmp_path)), tmp_path.resolve())

    assert "node_modules" not in rels
    assert "node_modules/pkg/index.js" not in rels
    assert ".git" not in rels
    assert ".venv" not in rels
    assert "lib/keep.js" in rels
    # Dot-prefixed *files* are not subject to the folder rule.
    assert ".env" in rels


def test_exclusions_can_be_disabled(tmp_path: Path):
    (tmp_path / "node_modules").mkdir()
    (tmp_path / ".github").mkdir()
    _make_file(tmp_path / "node_modules/a.js")
    _make_file(tmp_path / ".github/ci.yml")

    options = ScanOptions.create(tmp_path, exclude_node_modules=False, exclude_dot_folders=False)
    rels = _collect_paths(build_tree(options), tmp_path.resolve())

    assert "node_modules/a.js" in rels
    assert ".github/ci.yml" in rels


def test_additional_folders_are_exact_names(tmp_path: Path):
    for d in ["dist", "dist2", "src/dist"]:
        (tmp_path / d).mkdir(parents=True)
    _make_file(tmp_path / "dist/bundle.js")
    _make_file(tmp_path / "dist2/bundle.js")
    _make_file(tmp_path / "src/dist/inner.js")

    options = ScanOptions.create(tmp_path, additional_exclude_folders=["dist"])
    rels = _collect_paths(build_tree(options), tmp_path.resolve())

    assert "dist" not in rels
    assert "src/dist" not in rels
    assert "src/dist/inner.js" not in rels
    assert "dist2/bundle.js" in rels


def test_files_are_never_excluded_by_folder_rules(tmp_path: Path):
    # A *file* named like an excluded folder stays in the hierarchy.
    _make_file(tmp_path / "node_modules")
    _make_file(tmp_path / "build")

    options = ScanOptions.create(tmp_path, additional_exclude_folders=["build"])
    rels = _collect_paths(build_tree(options), tmp_path.resolve())

    assert "node_modules" in rels
    assert "build" in rels


def test_root_is_not_subject_to_exclusion(tmp_path: Path):
    root = tmp_path / ".hidden_project"
    _make_file(root / "a.ts")

    rels = _collect_paths(build_tree(ScanOptions.create(root)), root.resolve())

    assert rels == {"", "a.ts"}


def test_sorting_is_dirs_first_then_files_case_insensitive(tmp_path: Path):
    (tmp_path / "bDir").mkdir()
    (tmp_path / "ADir").mkdir()
    _make_file(tmp_path / "z.txt")
    _make_file(tmp_path / "A.txt")

    node = build_tree(ScanOptions.create(tmp_path, sort_entries=True))

    assert [c.name for c in node.children] == ["ADir", "bDir", "A.txt", "z.txt"]


def test_unsorted_listing_keeps_every_entry(tmp_path: Path):
    for name in ["c.txt", "a.txt", "b.txt"]:
        _make_file(tmp_path / name)

    node = build_tree(ScanOptions.create(tmp_path))

    assert sorted(c.name for c in node.children) == ["a.txt", "b.txt", "c.txt"]


@pytest.mark.skipif(sys.platform.startswith("win"), reason="Symlink creation needs privileges on Windows")
def test_symlink_directory_traversal_flag(tmp_path: Path):
    real = tmp_path / "real"
    real.mkdir()
    _make_file(real / "inside.txt")

    link = tmp_path / "linkdir"
    link.symlink_to(real, target_is_directory=True)
    root = tmp_path.resolve()

    rels = _collect_paths(build_tree(ScanOptions.create(tmp_path)), root)
    assert "linkdir" in rels
    assert "linkdir/inside.txt" not in rels

    node = build_tree(ScanOptions.create(tmp_path, follow_symlinks=True))
    rels = _collect_paths(node, root)
    assert "linkdir/inside.txt" in rels

    link_node = next(n for n in PreOrderIter(node) if n.name == "linkdir")
    assert link_node.is_symlink is True
    assert link_node.is_dir is True


@pytest.mark.skipif(_cannot_drop_permissions(), reason="Needs POSIX permission bits and a non-root user")
def test_unreadable_directory_is_logged_and_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    secret = tmp_path / "secret"
    secret.mkdir()
    _make_file(secret / "hidden.txt")
    _make_file(tmp_path / "sibling.txt")

    secret.chmod(0)
    try:
        with caplog.at_level(logging.ERROR, logger="treecontext.tree"):
            node = build_tree(ScanOptions.create(tmp_path))
        rels = _collect_paths(node, tmp_path.resolve())
        # The directory is still a node, but its children couldn't be listed.
        assert "secret" in rels
        assert "secret/hidden.txt" not in rels
        assert "sibling.txt" in rels
        assert any("Error reading directory" in r.getMessage() for r in caplog.records)
    finally:
        secret.chmod(stat.S_IRWXU)


def test_root_is_a_file(tmp_path: Path, caplog: pytest.LogCaptureFixture):
    f = tmp_path / "single.txt"
    _make_file(f, "hello")

    with caplog.at_level(logging.ERROR, logger="treecontext.tree"):
        root = build_tree(ScanOptions.create(f))

    assert root.name == "single.txt"
    assert root.is_dir is False
    assert root.children == ()
    assert any("Error reading directory" in r.getMessage() for r in caplog.records)
