"""Filtered recursive listing of the regular files under a directory.

This module provides the FileLister class, which walks a directory tree and yields
the paths of regular files that pass an include/exclude PathFilter, hiding every
entry whose base name is matched by the configured exclusion rules.
"""

import os
from typing import FrozenSet, Iterator, List, Optional, Tuple

from buildfs.exclusion_rules.base_rules import BaseExclusionRules
from buildfs.exclusion_rules.regex_rules import default_exclusion_rules
from buildfs.file_ops import to_forward_slashes
from buildfs.file_tree.file_identifier import FileIdentifier
from buildfs.file_tree.permission_action import PermissionAction
from buildfs.filters import FilterLike, PathFilter
from buildfs.types import FileType, PathType


class FileLister:
    """Lists regular files under a directory, honouring filters and exclusion rules.

    Directory entries are visited in the order the file system enumerates them;
    the order is not sorted and callers must not depend on it. Within each
    directory, matching files are produced before the results of its
    subdirectories, and subdirectories are walked depth-first.

    Exclusion rules are applied to base names. An excluded file is dropped and an
    excluded directory is pruned without ever being opened.

    Symbolic Link Behavior:
        A symlink that resolves to a regular file is listed like a regular file.
        A symlink to a directory is skipped unless follow_symlinks is True. When
        following, a directory already present on the current branch (same device
        and inode) is not entered again, which stops symlink loops.
        Broken and looping symlinks, FIFOs, sockets and device files are always
        skipped.

    Permission Handling:
        - RAISE (default): a directory that cannot be opened raises PermissionError
        - IGNORE: the unreadable directory is skipped silently

    Attributes:
        exclusion_rules (BaseExclusionRules): Rules applied to entry base names.
        follow_symlinks (bool): Whether symlinked directories are descended into.
        permission_action (PermissionAction): How to handle unreadable directories.

    Example:
        >>> lister = FileLister()  # doctest: +SKIP
        >>> lister.list_files("src", r"\\.js$", normalize_separators=True)  # doctest: +SKIP
        ['src/main.js', 'src/lib/util.js']
    """

    def __init__(
        self,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        follow_symlinks: bool = False,
        permission_action: PermissionAction = PermissionAction.RAISE,
    ) -> None:
        """Initialize a FileLister.

        Args:
            exclusion_rules: Rules for hiding entries by base name. Defaults to a
                fresh rule set hiding names that start with a period. Pass
                ``RegexExclusionRules([])`` to disable name-based exclusion.
            follow_symlinks: Whether to descend into symlinked directories.
                Defaults to False.
            permission_action: How to handle directories that cannot be opened.
                Defaults to RAISE.
        """
        self.exclusion_rules = exclusion_rules if exclusion_rules is not None else default_exclusion_rules()
        self.follow_symlinks = follow_symlinks
        self.permission_action = permission_action

    def iter_files(
        self,
        start_dir: PathType,
        path_filter: FilterLike = None,
        normalize_separators: bool = False,
    ) -> Iterator[str]:
        """Iterate over the paths of matching regular files under start_dir.

        Args:
            start_dir: Directory to walk. A path that does not exist, or is not a
                directory, produces no results.
            path_filter: Anything accepted by ``PathFilter.coerce``: None, a
                PathFilter, a single include pattern, or an include/exclude mapping.
            normalize_separators: Convert backslash separators in yielded paths to
                forward slashes. Only affects platforms where the backslash is a
                separator; on POSIX it is a legal filename character.

        Yields:
            Paths of matching files, each formed by joining start_dir with the
            entry names leading to the file.

        Raises:
            PermissionError: If a directory cannot be opened and permission_action
                is RAISE.
        """
        root = os.fspath(start_dir)
        if not os.path.isdir(root):
            return

        path_filter = PathFilter.coerce(path_filter)
        ancestors: FrozenSet[FileIdentifier] = frozenset()
        if self.follow_symlinks:
            ancestors = frozenset([FileIdentifier.for_path(root)])

        # Explicit stack of (directory, identifiers of the directories above it)
        stack: List[Tuple[str, FrozenSet[FileIdentifier]]] = [(root, ancestors)]

        while stack:
            directory, ancestors = stack.pop()

            try:
                entries = os.scandir(directory)
            except PermissionError:
                if self.permission_action == PermissionAction.RAISE:
                    raise
                continue

            subdirectories: List[Tuple[str, FrozenSet[FileIdentifier]]] = []
            with entries:
                for entry in entries:
                    entry_type = self._classify(entry)

                    if entry_type is FileType.FILE:
                        file_path = os.path.join(directory, entry.name)
                        if normalize_separators:
                            file_path = to_forward_slashes(file_path)
                        if path_filter.matches(file_path) and not self.exclusion_rules.exclude(entry.name):
                            yield file_path

                    elif entry_type is FileType.DIRECTORY and not self.exclusion_rules.exclude(entry.name, True):
                        child = os.path.join(directory, entry.name)
                        if self.follow_symlinks:
                            file_id = FileIdentifier.for_path(child)
                            if file_id in ancestors:
                                continue
                            subdirectories.append((child, ancestors | {file_id}))
                        else:
                            subdirectories.append((child, ancestors))

            # Reversed so the first enumerated subdirectory is walked first
            stack.extend(reversed(subdirectories))

    def list_files(
        self,
        start_dir: PathType,
        path_filter: FilterLike = None,
        normalize_separators: bool = False,
    ) -> List[str]:
        """Return the list of matching file paths under start_dir.

        See ``iter_files`` for the meaning of the arguments. An empty list is
        returned when start_dir does not exist.
        """
        return list(self.iter_files(start_dir, path_filter, normalize_separators))

    def _classify(self, entry: os.DirEntry) -> FileType:
        """Determine how the traversal treats a directory entry."""
        try:
            if entry.is_symlink():
                return self._classify_symlink(entry)
            if entry.is_dir(follow_symlinks=False):
                return FileType.DIRECTORY
            if entry.is_file(follow_symlinks=False):
                return FileType.FILE
        except PermissionError:
            if self.permission_action == PermissionAction.RAISE:
                raise
        return FileType.OTHER

    def _classify_symlink(self, entry: os.DirEntry) -> FileType:
        # Resolving the target raises ELOOP for looping links; those are broken too
        try:
            if entry.is_dir():
                return FileType.DIRECTORY if self.follow_symlinks else FileType.SYMLINK
            if entry.is_file():
                return FileType.FILE
        except PermissionError:
            if self.permission_action == PermissionAction.RAISE:
                raise
        except OSError:
            return FileType.OTHER
        return FileType.OTHER


def get_filtered_file_list(
    start_dir: PathType,
    path_filter: FilterLike = None,
    normalize_separators: bool = False,
    exclusion_rules: Optional[BaseExclusionRules] = None,
    follow_symlinks: bool = False,
    permission_action: PermissionAction = PermissionAction.RAISE,
) -> List[str]:
    """Recurse start_dir and return the files that pass path_filter.

    Convenience wrapper around ``FileLister(...).list_files(...)``. With the
    default exclusion rules, files and directories whose names start with a
    period are skipped.

    Example:
        >>> get_filtered_file_list("src", {"include": r"\\.js$", "exclude": r"\\.min\\.js$"})  # doctest: +SKIP
        ['src/app.js']
    """
    lister = FileLister(
        exclusion_rules=exclusion_rules,
        follow_symlinks=follow_symlinks,
        permission_action=permission_action,
    )
    return lister.list_files(start_dir, path_filter, normalize_separators)
