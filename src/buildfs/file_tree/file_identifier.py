"""File identifier for uniquely identifying directories by device and inode."""

import os
from typing import Any

from buildfs.types import PathType


class FileIdentifier:
    """Class for uniquely identifying files and directories by their device and inode.

    The lister uses it to detect symlink loops when following symbolic links: a
    directory whose identifier already appears on the current branch is not
    entered again.

    Attributes:
        device_id (int): The device ID from stat information.
        inode_number (int): The inode number from stat information.
    """

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def for_path(cls, path: PathType) -> "FileIdentifier":
        """Create an identifier from ``os.stat`` of a path, following symlinks.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        stat_info = os.stat(path)
        return cls(stat_info.st_dev, stat_info.st_ino)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return self.device_id == other.device_id and self.inode_number == other.inode_number

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
