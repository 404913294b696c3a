"""Tree rendering of a file listing.

The lister produces flat paths; this module rebuilds the directory hierarchy they
imply and renders it line by line in the style of the Unix ``tree`` command.
"""

import os
from typing import Dict, Iterable, Iterator, Tuple

from buildfs.file_ops import to_forward_slashes
from buildfs.file_tree.file_system_node import FileSystemNode
from buildfs.types import PathType


def build_tree(root_dir: PathType, file_paths: Iterable[str]) -> FileSystemNode:
    """Build a node tree from file paths located under root_dir.

    Args:
        root_dir: Directory the paths were listed from. It becomes the root node.
        file_paths: Paths of files under root_dir, in any order.

    Returns:
        The root node. Intermediate directories are created on demand, so only
        directories that lead to a listed file appear.

    Raises:
        ValueError: If a path is not located under root_dir.
    """
    root_path = os.fspath(root_dir)
    root_name = os.path.basename(os.path.normpath(os.path.abspath(root_path))) or root_path
    root = FileSystemNode(root_name, is_dir=True)
    directories: Dict[Tuple[str, ...], FileSystemNode] = {(): root}

    for file_path in file_paths:
        relative_path = to_forward_slashes(os.path.relpath(file_path, root_path))
        parts = tuple(relative_path.split("/"))
        if parts[0] == "..":
            raise ValueError(f"Path is not under {root_path}: {file_path}")

        parent = root
        for depth in range(1, len(parts)):
            key = parts[:depth]
            if key not in directories:
                directories[key] = FileSystemNode(parts[depth - 1], parent=parent, is_dir=True)
            parent = directories[key]
        FileSystemNode(parts[-1], parent=parent, file_path=file_path)

    return root


def stream_tree_representation(root: FileSystemNode) -> Iterator[str]:
    """Generate a tree representation one line at a time.

    Children are shown directories first, then files, both alphabetically.

    Example:
        >>> root = build_tree("src", ["src/main.js", "src/lib/util.js"])
        >>> print("\\n".join(stream_tree_representation(root)))
        src/
        ├── lib/
        │   └── util.js
        └── main.js
    """

    def write_node(node: FileSystemNode, prefix: str, is_last: bool, is_root: bool) -> Iterator[str]:
        if is_root:
            yield f"{node.name}/"
        else:
            connector = "└── " if is_last else "├── "
            suffix = "/" if node.is_dir else ""
            yield f"{prefix}{connector}{node.name}{suffix}"

        if node.is_dir:
            sorted_children = sorted(node.children, key=lambda n: (not n.is_dir, n.name.lower()))
            for i, child in enumerate(sorted_children):
                is_last_child = i == len(sorted_children) - 1
                if is_root:
                    new_prefix = ""
                else:
                    new_prefix = prefix + ("    " if is_last else "│   ")
                yield from write_node(child, new_prefix, is_last_child, is_root=False)

    yield from write_node(root, "", True, is_root=True)
