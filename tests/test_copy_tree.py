#!/usr/bin/env python3
"""Tests for copy_file and copy_dir_recursive."""
import os
from pathlib import Path

import pytest

from pexplorer.copy_tree import copy_dir_recursive, copy_file, is_inside
from pexplorer.errors import ValidationError


def test_copy_file_returns_size(tmp_path: Path) -> None:
    """Test copy_file copies bytes and returns their count."""
    src = tmp_path / "in.bin"
    src.write_bytes(b"x" * 1000)
    size = copy_file(src, tmp_path / "out.bin")
    assert size == 1000
    assert (tmp_path / "out.bin").read_bytes() == b"x" * 1000


def test_copy_file_refuses_existing_target(tmp_path: Path) -> None:
    """Test copy_file raises FileExistsError instead of overwriting."""
    src = tmp_path / "in.txt"
    src.write_text("new")
    dst = tmp_path / "out.txt"
    dst.write_text("old")
    with pytest.raises(FileExistsError):
        copy_file(src, dst)
    assert dst.read_text() == "old"


def test_copy_dir_recursive_preserves_tree(source_tree: Path, tmp_path: Path) -> None:
    """Test src/{a.txt, sub/b.txt} is reproduced under dst."""
    dst = tmp_path / "dst"
    copy_dir_recursive(source_tree, dst)
    assert (dst / "a.txt").read_bytes() == b"alpha\n"
    assert (dst / "sub" / "b.txt").read_bytes() == b"bravo\n"
    assert (source_tree / "a.txt").exists()


def test_copy_dir_recursive_copies_empty_subdirectories(tmp_path: Path) -> None:
    """Test empty directories are recreated."""
    src = tmp_path / "src"
    (src / "empty").mkdir(parents=True)
    copy_dir_recursive(src, tmp_path / "dst")
    assert (tmp_path / "dst" / "empty").is_dir()


def test_copy_dir_recursive_merges_into_existing_directory(
    source_tree: Path, tmp_path: Path
) -> None:
    """Test an existing destination directory is reused."""
    dst = tmp_path / "dst"
    dst.mkdir()
    (dst / "keep.txt").write_text("keep")
    copy_dir_recursive(source_tree, dst)
    assert (dst / "keep.txt").read_text() == "keep"
    assert (dst / "a.txt").exists()


def test_copy_dir_recursive_fails_on_existing_file(source_tree: Path, tmp_path: Path) -> None:
    """Test a same-named destination file fails the copy."""
    dst = tmp_path / "dst"
    (dst / "sub").mkdir(parents=True)
    (dst / "sub" / "b.txt").write_text("there first")
    with pytest.raises(FileExistsError):
        copy_dir_recursive(source_tree, dst)
    assert (dst / "sub" / "b.txt").read_text() == "there first"


def test_copy_dir_recursive_requires_parent(source_tree: Path, tmp_path: Path) -> None:
    """Test missing parents of the destination are not created."""
    with pytest.raises(FileNotFoundError):
        copy_dir_recursive(source_tree, tmp_path / "missing" / "dst")


def test_copy_dir_recursive_skips_special_files(tmp_path: Path) -> None:
    """Test fifos inside the tree are left out instead of read."""
    src = tmp_path / "src"
    src.mkdir()
    os.mkfifo(src / "pipe")
    (src / "file.txt").write_text("kept")
    copy_dir_recursive(src, tmp_path / "dst")
    assert (tmp_path / "dst" / "file.txt").read_text() == "kept"
    assert not (tmp_path / "dst" / "pipe").exists()


@pytest.mark.parametrize("inside", [".", "inner", "sub/inner"])
def test_copy_dir_recursive_refuses_own_tree(inside: str, source_tree: Path) -> None:
    """Test copying a directory into itself fails before creating anything."""
    with pytest.raises(ValidationError, match="into itself"):
        copy_dir_recursive(source_tree, source_tree / inside)
    assert sorted(p.name for p in source_tree.rglob("*")) == ["a.txt", "b.txt", "sub"]


def test_copy_dir_recursive_allows_sibling_with_shared_prefix(
    source_tree: Path, tmp_path: Path
) -> None:
    """Test a sibling whose name starts with the source name is not inside it."""
    copy_dir_recursive(source_tree, tmp_path / "src-copy")
    assert (tmp_path / "src-copy" / "sub" / "b.txt").read_bytes() == b"bravo\n"


def test_is_inside(tmp_path: Path) -> None:
    """Test is_inside matches the path itself and descendants only."""
    base = tmp_path / "base"
    assert is_inside(base, base)
    assert is_inside(base / "x" / "y", base)
    assert is_inside(base / "x" / "..", base)
    assert not is_inside(tmp_path / "base2", base)
    assert not is_inside(tmp_path, base)
