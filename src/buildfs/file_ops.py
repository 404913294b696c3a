"""Single-file and single-directory operations on the host file system.

These helpers are thin wrappers over ``os``, ``shutil`` and ``pathlib``. Errors
from the platform are not translated: a missing file raises FileNotFoundError, a
permission problem raises PermissionError, and so on. The only library-specific
error is DirectoryCreationError from ``save_file``.
"""

import codecs
import errno
import os
import shutil
from pathlib import Path
from typing import NoReturn, Optional

from buildfs.exceptions import DirectoryCreationError
from buildfs.types import PathType

DEFAULT_ENCODING = "utf-8"


def get_line_separator() -> str:
    """Return the path separator used in normalized paths."""
    return "/"


def exists(path: PathType) -> bool:
    """Check whether path exists. Broken symlinks count as missing."""
    return os.path.exists(path)


def is_file(path: PathType) -> bool:
    """Check whether path is a regular file, following symlinks."""
    return os.path.isfile(path)


def is_directory(path: PathType) -> bool:
    """Check whether path is a directory, following symlinks."""
    return os.path.isdir(path)


def parent(path: PathType) -> str:
    """Return the path of the directory containing path."""
    return os.path.dirname(os.path.abspath(path))


def to_forward_slashes(path: str) -> str:
    """Replace backslash separators with forward slashes.

    Only applies where the backslash is a path separator. On POSIX it is an
    ordinary filename character, so the path is returned unchanged.
    """
    if os.sep == "\\" or os.altsep == "\\":
        return path.replace("\\", "/")
    return path


def abs_path(path: PathType) -> str:
    """Return the absolute path, normalized to forward-slash separators."""
    return to_forward_slashes(os.path.abspath(path))


normalize = abs_path


def _decoding_codec(encoding: Optional[str]) -> str:
    codec = codecs.lookup(encoding or DEFAULT_ENCODING).name
    # utf-8-sig decodes plain UTF-8 too, and drops a leading byte-order mark
    return "utf-8-sig" if codec == "utf-8" else codec


def read_file(path: PathType, encoding: Optional[str] = DEFAULT_ENCODING) -> str:
    """Read the full content of a file as text.

    Args:
        path: File to read.
        encoding: Text encoding name, case-insensitive. Defaults to UTF-8. When
            reading UTF-8, a leading byte-order mark is removed.

    Returns:
        The decoded file content.

    Raises:
        OSError: If the file cannot be read.
        LookupError: If the encoding is unknown.
        UnicodeDecodeError: If the content is not valid in the encoding.
    """
    return Path(path).read_bytes().decode(_decoding_codec(encoding))


async def read_file_async(path: PathType, encoding: Optional[str] = DEFAULT_ENCODING) -> str:
    """Coroutine form of ``read_file``.

    The read itself is synchronous; awaiting the coroutine returns the content or
    raises the same error ``read_file`` would.

    Example:
        >>> import asyncio
        >>> content = asyncio.run(read_file_async("README.md"))  # doctest: +SKIP
    """
    return read_file(path, encoding)


def save_file(path: PathType, content: str, encoding: Optional[str] = DEFAULT_ENCODING) -> None:
    """Write text to a file, creating missing parent directories.

    An existing file is replaced; otherwise the file is created.

    Args:
        path: File to write.
        content: Text to write.
        encoding: Text encoding name. Defaults to UTF-8.

    Raises:
        DirectoryCreationError: If the parent directory cannot be created.
        OSError: If the file cannot be written.
    """
    parent_dir = parent(path)
    if not os.path.isdir(parent_dir):
        try:
            os.makedirs(parent_dir, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationError(parent_dir) from e

    with open(path, "wb") as f:
        f.write(content.encode(encoding or DEFAULT_ENCODING))


def save_utf8_file(path: PathType, content: str) -> None:
    """Write text to a file using UTF-8."""
    save_file(path, content, "utf-8")


def delete_file(path: PathType) -> None:
    """Delete a file or a directory tree if it exists.

    Directories are removed recursively. Symbolic links are removed themselves,
    never followed. A path that does not exist is left alone, so calling this
    twice is harmless.

    Raises:
        OSError: If an existing entry cannot be removed.
    """
    if not os.path.lexists(path):
        return
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


def _raise_walk_error(error: OSError) -> NoReturn:
    raise error


def delete_empty_dirs(path: PathType) -> None:
    """Remove empty directories under path, bottom-up, including path itself.

    Each directory is removed only if it is empty by the time its subdirectories
    have been processed, so directories holding files (directly or further down)
    survive. Symlinked directories are not followed. A path that does not exist
    is left alone.

    Raises:
        OSError: For failures other than a directory not being empty.
    """
    if not os.path.isdir(path) or os.path.islink(path):
        return

    for dir_path, _, _ in os.walk(path, topdown=False, onerror=_raise_walk_error):
        try:
            os.rmdir(dir_path)
        except OSError as e:
            if e.errno not in (errno.ENOTEMPTY, errno.EEXIST):
                raise


def rename_file(src: PathType, new_name: str) -> str:
    """Rename a file or directory within its own directory.

    If new_name contains a path separator, only its last segment is used: this is
    a same-directory rename, not a move.

    Args:
        src: Path of the entry to rename.
        new_name: New base name, or a path whose last segment is the new name.

    Returns:
        The path of the renamed entry.

    Raises:
        ValueError: If new_name has no final segment (e.g. ends with a separator).
        FileExistsError: If an entry with the new name already exists.
        OSError: If the rename fails.

    Example:
        >>> rename_file("/a/b/old.txt", "nested/new.txt")  # doctest: +SKIP
        '/a/b/new.txt'
    """
    name = os.path.basename(new_name)
    if not name:
        raise ValueError(f"Invalid new name: {new_name!r}")

    # A trailing separator would make dirname() return the entry itself
    src_path = os.fspath(src).rstrip(os.sep + (os.altsep or "")) or os.fspath(src)
    target = os.path.join(os.path.dirname(src_path), name)
    if target == src_path:
        return target
    if os.path.lexists(target):
        raise FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), target)

    os.rename(src_path, target)
    return target
