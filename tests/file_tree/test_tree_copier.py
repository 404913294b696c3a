"""Unit tests for TreeCopier, copy_dir and copy_file."""

import os
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from buildfs.exclusion_rules.regex_rules import RegexExclusionRules
from buildfs.file_tree.file_lister import FileLister
from buildfs.file_tree.tree_copier import TreeCopier, copy_dir, copy_file


@pytest.fixture
def source_tree(tmp_path):
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.txt").write_text("hi")
    (src / ".hidden").mkdir()
    (src / ".hidden" / "x.txt").write_text("x")
    (src / "sub").mkdir()
    (src / "sub" / "b.txt").write_text("yo")
    (src / "sub" / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    return src


def set_mtime(path, timestamp):
    os.utime(path, (timestamp, timestamp))


def test_copy_dir_example(source_tree, tmp_path):
    dest = tmp_path / "dest"

    copied = copy_dir(str(source_tree), str(dest), r"\.txt$")

    assert sorted(copied) == sorted([f"{dest.as_posix()}/a.txt", f"{dest.as_posix()}/sub/b.txt"])
    assert (dest / "a.txt").read_text() == "hi"
    assert (dest / "sub" / "b.txt").read_text() == "yo"
    assert not (dest / ".hidden").exists()
    assert not (dest / "sub" / "image.png").exists()


def test_copy_dir_default_filter_copies_everything_visible(source_tree, tmp_path):
    dest = tmp_path / "dest"

    copied = copy_dir(source_tree, dest)

    assert len(copied) == 3
    assert (dest / "sub" / "image.png").read_bytes() == b"\x89PNG\r\n\x1a\n"


def test_copy_dir_destination_mirrors_listing(source_tree, tmp_path):
    dest = tmp_path / "dest"
    lister = FileLister()

    copy_dir(source_tree, dest)

    for src_file in lister.list_files(source_tree):
        relative_path = os.path.relpath(src_file, source_tree)
        assert (dest / relative_path).read_bytes() == Path(src_file).read_bytes()


def test_copy_dir_is_idempotent(source_tree, tmp_path):
    dest = tmp_path / "dest"

    first = copy_dir(source_tree, dest, r"\.txt$")
    second = copy_dir(source_tree, dest, r"\.txt$")

    assert sorted(first) == sorted(second)
    assert (dest / "a.txt").read_text() == "hi"
    assert (dest / "sub" / "b.txt").read_text() == "yo"


def test_copy_dir_overwrites_existing_destination(source_tree, tmp_path):
    dest = tmp_path / "dest"
    dest.mkdir()
    (dest / "a.txt").write_text("stale content")

    copy_dir(source_tree, dest, r"a\.txt$")

    assert (dest / "a.txt").read_text() == "hi"


def test_copy_dir_no_matches_returns_empty_list(source_tree, tmp_path):
    dest = tmp_path / "dest"

    assert copy_dir(source_tree, dest, r"\.nothing$") == []
    assert not dest.exists()


def test_copy_dir_missing_source_returns_empty_list(tmp_path):
    assert copy_dir(tmp_path / "missing", tmp_path / "dest") == []


def test_copy_dir_source_name_repeated_in_path(tmp_path):
    # The source directory name also appears deeper in the tree
    src = tmp_path / "lib"
    (src / "vendor" / "lib").mkdir(parents=True)
    (src / "vendor" / "lib" / "x.js").write_text("x")
    dest = tmp_path / "out"

    copied = copy_dir(str(src), str(dest))

    assert copied == [f"{dest.as_posix()}/vendor/lib/x.js"]
    assert (dest / "vendor" / "lib" / "x.js").read_text() == "x"


@pytest.mark.skipif(os.sep == "\\", reason="Backslashes are separators on Windows")
def test_copy_dir_name_with_backslash(tmp_path):
    src = tmp_path / "src"
    (src / "sub").mkdir(parents=True)
    (src / "sub" / "back\\slash.txt").write_text("content")
    dest = tmp_path / "dest"

    copied = copy_dir(str(src), str(dest))

    assert copied == [f"{dest.as_posix()}/sub/back\\slash.txt"]
    assert (dest / "sub" / "back\\slash.txt").read_text() == "content"
    assert not (dest / "sub" / "back").exists()


def test_copy_dir_skips_looping_symlink(source_tree, tmp_path):
    try:
        os.symlink("loop", source_tree / "loop")
    except (OSError, NotImplementedError):
        pytest.skip("Symlink creation not supported on this platform/environment")
    dest = tmp_path / "dest"

    copied = copy_dir(source_tree, dest, r"\.txt$")

    assert len(copied) == 2
    assert not os.path.lexists(dest / "loop")


def test_copy_dir_with_relative_paths(source_tree, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    copied = copy_dir("src", "dest", r"\.txt$")

    assert sorted(copied) == ["dest/a.txt", "dest/sub/b.txt"]


def test_copy_dir_into_own_subdirectory(source_tree):
    dest = source_tree / "sub" / "copy"

    copied = copy_dir(source_tree, dest, r"\.txt$")

    # The listing is taken before copying, so copies are not copied again
    assert len(copied) == 2
    assert (dest / "sub" / "b.txt").read_text() == "yo"
    assert not (dest / "sub" / "copy").exists()


def test_copy_dir_with_custom_lister(source_tree, tmp_path):
    dest = tmp_path / "dest"
    lister = FileLister(exclusion_rules=RegexExclusionRules([]))

    copy_dir(source_tree, dest, r"\.txt$", lister=lister)

    assert (dest / ".hidden" / "x.txt").read_text() == "x"


def test_copy_dir_error_aborts(source_tree, tmp_path):
    dest = tmp_path / "dest"

    with patch("buildfs.file_tree.tree_copier.shutil.copyfile", side_effect=PermissionError(13, "Permission denied")):
        with pytest.raises(PermissionError):
            copy_dir(source_tree, dest)


def test_iter_copy_reports_outcomes(source_tree, tmp_path):
    dest = tmp_path / "dest"

    results = list(TreeCopier().iter_copy(source_tree, dest, r"\.txt$"))

    assert sorted((Path(s).name, Path(d).name, c) for s, d, c in results) == [
        ("a.txt", "a.txt", True),
        ("b.txt", "b.txt", True),
    ]
    assert all("\\" not in s and "\\" not in d for s, d, _ in results)


class TestOnlyCopyNew:
    def test_skips_when_destination_is_newer(self, source_tree, tmp_path):
        dest = tmp_path / "dest"
        copy_dir(source_tree, dest, r"a\.txt$")
        (dest / "a.txt").write_text("edited")
        set_mtime(source_tree / "a.txt", time.time() - 100)

        copied = copy_dir(source_tree, dest, r"a\.txt$", only_copy_new=True)

        assert copied == []
        assert (dest / "a.txt").read_text() == "edited"

    def test_copies_when_source_is_newer(self, source_tree, tmp_path):
        dest = tmp_path / "dest"
        copy_dir(source_tree, dest, r"a\.txt$")
        set_mtime(dest / "a.txt", time.time() - 100)

        copied = copy_dir(source_tree, dest, r"a\.txt$", only_copy_new=True)

        assert copied == [f"{dest.as_posix()}/a.txt"]

    def test_copies_when_destination_missing(self, source_tree, tmp_path):
        dest = tmp_path / "dest"

        copier = TreeCopier(only_copy_new=True)

        assert len(copier.copy_dir(source_tree, dest, r"\.txt$")) == 2

    def test_copy_file_returns_false_when_skipped(self, tmp_path):
        src = tmp_path / "src.txt"
        dest = tmp_path / "dest.txt"
        src.write_text("new")
        dest.write_text("old")
        now = time.time()
        set_mtime(src, now - 50)
        set_mtime(dest, now)

        assert copy_file(src, dest, only_copy_new=True) is False
        assert dest.read_text() == "old"

    def test_copy_file_equal_mtime_is_skipped(self, tmp_path):
        src = tmp_path / "src.txt"
        dest = tmp_path / "dest.txt"
        src.write_text("new")
        dest.write_text("old")
        now = time.time()
        set_mtime(src, now)
        set_mtime(dest, now)

        assert copy_file(src, dest, only_copy_new=True) is False


def test_copy_file_creates_parent_directories(tmp_path):
    src = tmp_path / "src.txt"
    src.write_text("content")
    dest = tmp_path / "a" / "b" / "c" / "dest.txt"

    assert copy_file(src, dest) is True
    assert dest.read_text() == "content"


def test_copy_file_overwrites(tmp_path):
    src = tmp_path / "src.txt"
    dest = tmp_path / "dest.txt"
    src.write_text("new")
    dest.write_text("old")

    assert copy_file(src, dest) is True
    assert dest.read_text() == "new"


def test_copy_file_missing_source(tmp_path):
    with pytest.raises(FileNotFoundError):
        copy_file(tmp_path / "missing.txt", tmp_path / "dest.txt")
