"""Filtered copying of a directory tree."""

import os
import shutil
from typing import Iterator, List, Optional, Tuple

from buildfs.file_ops import to_forward_slashes
from buildfs.file_tree.file_lister import FileLister
from buildfs.filters import ANY_WORD_PATTERN, FilterLike
from buildfs.types import PathType


def copy_file(src_file: PathType, dest_file: PathType, only_copy_new: bool = False) -> bool:
    """Copy src_file to dest_file, creating the destination directory if needed.

    An existing destination is overwritten. When only_copy_new is set, the copy is
    skipped if the destination exists and was modified no earlier than the source.

    Args:
        src_file: File to copy. Symlinks are followed.
        dest_file: Destination file path.
        only_copy_new: Skip the copy unless the source is newer than the destination.

    Returns:
        True if the file was copied, False if it was skipped.

    Raises:
        OSError: If the destination directory cannot be created or the copy fails.
    """
    if only_copy_new and os.path.exists(dest_file):
        if os.stat(dest_file).st_mtime >= os.stat(src_file).st_mtime:
            return False

    parent_dir = os.path.dirname(os.fspath(dest_file))
    if parent_dir and not os.path.isdir(parent_dir):
        os.makedirs(parent_dir, exist_ok=True)

    shutil.copyfile(src_file, dest_file)
    return True


class TreeCopier:
    """Copies the files of a directory tree that pass a filter into another directory.

    Source files are enumerated with a FileLister, so the lister's exclusion rules,
    symlink and permission settings apply to the copy. Each destination path is the
    source path relative to the source directory, re-joined under the destination
    directory. Any I/O error aborts the whole copy; files copied before the error
    stay in place.

    Attributes:
        lister (FileLister): Lister used to enumerate the source files.
        only_copy_new (bool): Skip files whose destination is at least as new as
            the source.

    Example:
        >>> copier = TreeCopier()  # doctest: +SKIP
        >>> copier.copy_dir("src", "dist", r"\\.txt$")  # doctest: +SKIP
        ['dist/a.txt', 'dist/sub/b.txt']
    """

    def __init__(self, lister: Optional[FileLister] = None, only_copy_new: bool = False) -> None:
        """Initialize a TreeCopier.

        Args:
            lister: Lister used to enumerate source files. Defaults to a FileLister
                with the default exclusion rules.
            only_copy_new: Skip files whose destination is at least as new as the
                source. Defaults to False.
        """
        self.lister = lister if lister is not None else FileLister()
        self.only_copy_new = only_copy_new

    def iter_copy(
        self,
        src_dir: PathType,
        dest_dir: PathType,
        path_filter: FilterLike = None,
    ) -> Iterator[Tuple[str, str, bool]]:
        """Copy matching files one at a time, reporting each outcome.

        The source listing is taken in full before the first copy, so copying into
        a directory inside src_dir never picks up files written by this call.

        Args:
            src_dir: Directory to copy from.
            dest_dir: Directory to copy into.
            path_filter: Filter applied to source paths. Defaults to any path
                containing a word character.

        Yields:
            Tuples of (source_path, destination_path, copied). Backslash separators
            are converted to forward slashes where the platform uses them.

        Raises:
            OSError: On the first file that cannot be copied.
        """
        if path_filter is None:
            path_filter = ANY_WORD_PATTERN

        src_root = os.fspath(src_dir)
        dest_root = os.fspath(dest_dir)

        # The filter sees forward-slash paths on every platform
        for src_file in self.lister.list_files(src_root, path_filter, normalize_separators=True):
            dest_file = to_forward_slashes(os.path.join(dest_root, os.path.relpath(src_file, src_root)))
            yield src_file, dest_file, copy_file(src_file, dest_file, self.only_copy_new)

    def copy_dir(self, src_dir: PathType, dest_dir: PathType, path_filter: FilterLike = None) -> List[str]:
        """Copy matching files and return the destination paths that were written.

        Returns:
            Destination paths of the copied files, or an empty list when nothing
            matched or every file was skipped.
        """
        return [dest_file for _, dest_file, copied in self.iter_copy(src_dir, dest_dir, path_filter) if copied]


def copy_dir(
    src_dir: PathType,
    dest_dir: PathType,
    path_filter: FilterLike = None,
    only_copy_new: bool = False,
    lister: Optional[FileLister] = None,
) -> List[str]:
    """Copy the files under src_dir that pass path_filter into dest_dir.

    Convenience wrapper around ``TreeCopier(...).copy_dir(...)``.

    Example:
        >>> copy_dir("src", "dest", r"\\.txt$")  # doctest: +SKIP
        ['dest/a.txt', 'dest/sub/b.txt']
    """
    return TreeCopier(lister=lister, only_copy_new=only_copy_new).copy_dir(src_dir, dest_dir, path_filter)
