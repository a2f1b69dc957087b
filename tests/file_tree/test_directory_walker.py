"""Unit tests for the DirectoryWalker class."""

import os
from unittest.mock import patch

import pytest

from treedump.exceptions import WalkError
from treedump.exclusion_rules.git_rules import GitIgnoreExclusionRules
from treedump.exclusion_rules.size_rules import SizeExclusionRules
from treedump.file_tree.directory_walker import DirectoryWalker
from treedump.types import WalkEntry


def walked_paths(walker):
    return [entry.relative_path for entry in walker.walk()]


def test_walk_order_and_classification(sample_project):
    entries = list(DirectoryWalker(sample_project).walk())
    assert entries == [
        WalkEntry("README.md", False),
        WalkEntry("docs", True),
        WalkEntry("docs/guide", True),
        WalkEntry("docs/guide/intro", True),
        WalkEntry("docs/guide/intro/index.md", False),
        WalkEntry("empty", True),
        WalkEntry("src", True),
        WalkEntry("src/pkg", True),
        WalkEntry("src/pkg/__init__.py", False),
        WalkEntry("src/pkg/core.py", False),
    ]


def test_hidden_entries_skipped_by_default(tmp_path):
    (tmp_path / ".hidden").write_text("secret")
    (tmp_path / ".cache").mkdir()
    (tmp_path / ".cache" / "data").write_text("x")
    (tmp_path / "visible.txt").write_text("hi")

    assert walked_paths(DirectoryWalker(tmp_path)) == ["visible.txt"]
    assert walked_paths(DirectoryWalker(tmp_path, include_hidden=True)) == [
        ".cache",
        ".cache/data",
        ".hidden",
        "visible.txt",
    ]


def test_gitignore_respected(tmp_path):
    (tmp_path / ".gitignore").write_text("*.pyc\nbuild/\n")
    (tmp_path / "main.py").write_text("")
    (tmp_path / "main.pyc").write_text("")
    (tmp_path / "build").mkdir()
    (tmp_path / "build" / "out.js").write_text("")

    assert walked_paths(DirectoryWalker(tmp_path)) == ["main.py"]


def test_nested_gitignore_is_relative_to_its_directory(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / ".gitignore").write_text("/local.txt\n")
    (tmp_path / "sub" / "local.txt").write_text("")
    (tmp_path / "sub" / "kept.txt").write_text("")
    (tmp_path / "local.txt").write_text("")

    assert walked_paths(DirectoryWalker(tmp_path)) == ["local.txt", "sub", "sub/kept.txt"]


def test_gitignore_disabled(tmp_path):
    (tmp_path / ".gitignore").write_text("*.log\n")
    (tmp_path / "app.log").write_text("")

    assert walked_paths(DirectoryWalker(tmp_path, respect_gitignore=False)) == ["app.log"]


def test_exclusion_rules_see_directories_with_trailing_slash(tmp_path):
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "pkg.js").write_text("")
    (tmp_path / "index.js").write_text("")

    rules = GitIgnoreExclusionRules()
    rules.add_rule("node_modules/")

    assert walked_paths(DirectoryWalker(tmp_path, exclusion_rules=rules)) == ["index.js"]


def test_size_rules(tmp_path):
    (tmp_path / "small.txt").write_text("x")
    (tmp_path / "big.txt").write_text("x" * 100)

    rules = SizeExclusionRules(10, root_path=tmp_path)

    assert walked_paths(DirectoryWalker(tmp_path, exclusion_rules=rules)) == ["small.txt"]


def test_exclude_paths(tmp_path):
    (tmp_path / "dump.txt").write_text("")
    (tmp_path / "keep.txt").write_text("")

    walker = DirectoryWalker(tmp_path, exclude_paths=[str(tmp_path / "dump.txt")])
    assert walked_paths(walker) == ["keep.txt"]


def test_symlinks_are_not_followed(tmp_path):
    (tmp_path / "real").mkdir()
    (tmp_path / "real" / "file.txt").write_text("")
    try:
        os.symlink(tmp_path / "real", tmp_path / "link")
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")

    entries = list(DirectoryWalker(tmp_path).walk())
    assert WalkEntry("link", False) in entries
    assert not any(entry.relative_path.startswith("link/") for entry in entries)


def test_single_file_root(tmp_path):
    target = tmp_path / "only.txt"
    target.write_text("content")

    walker = DirectoryWalker(target)
    assert walker.is_single_file
    assert list(walker.walk()) == []


def test_missing_root(tmp_path):
    walker = DirectoryWalker(tmp_path / "missing")
    assert not walker.is_single_file
    with pytest.raises(FileNotFoundError):
        list(walker.walk())


def test_listing_failure_raises_walk_error(tmp_path):
    (tmp_path / "sub").mkdir()

    with patch("treedump.file_tree.directory_walker.os.scandir", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(WalkError) as exc_info:
            list(DirectoryWalker(tmp_path).walk())

    assert exc_info.value.path == str(tmp_path)
    assert isinstance(exc_info.value.cause, PermissionError)


def test_unreadable_subdirectory_raises_walk_error(tmp_path):
    if hasattr(os, "geteuid") and os.geteuid() == 0:
        pytest.skip("Permission checks do not apply to root")

    locked = tmp_path / "locked"
    locked.mkdir()
    (locked / "file.txt").write_text("")
    locked.chmod(0o000)
    try:
        with pytest.raises(WalkError, match="locked"):
            list(DirectoryWalker(tmp_path).walk())
    finally:
        locked.chmod(0o755)
