"""Permission action enum for handling permission errors during directory traversal."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory cannot be read during traversal.

    Values:
        IGNORE: Skip the unreadable directory silently and keep traversing
        RAISE: Propagate the PermissionError immediately (default behavior)
    """

    IGNORE = "ignore"
    RAISE = "raise"
