"""File-system primitives for module loaders and build tools.

This package provides filtered recursive directory listing, filtered tree
copying, and the single-file helpers (read, save, rename, delete, prune) that a
build pipeline needs on top of the host file system.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("buildfs")
except PackageNotFoundError:
    __version__ = "unknown"
