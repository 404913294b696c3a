from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class FileType(Enum):
    """Enumeration of entry types encountered during traversal.

    This enum is used to decide what the lister does with a directory entry:
    regular files are candidates for the result, directories are descended into,
    and everything else is skipped.

    Attributes:
        FILE: Regular file (or a symlink resolving to one)
        DIRECTORY: Directory
        SYMLINK: Symbolic link to a directory that is not being followed
        OTHER: Broken symlink, FIFO, socket, or device file
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"
    OTHER = "other"
