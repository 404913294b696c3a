"""Node representation for listed files and their directories."""

from typing import Any, Optional

from anytree import Node


class FileSystemNode(Node):  # type: ignore
    """Node class representing a listed file or one of its parent directories.

    Extends anytree.Node with a flag telling directories from files, and the path
    of the listed file for leaf nodes. Tree traversal and parent/child bookkeeping
    come from anytree.Node.

    Attributes:
        name (str): The base name of the file or directory.
        parent (Optional[FileSystemNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory.
        file_path (Optional[str]): Path of the listed file, as produced by the lister.

    Example:
        >>> root = FileSystemNode("src", is_dir=True)
        >>> child = FileSystemNode("main.js", parent=root, file_path="src/main.js")
        >>> child.is_dir
        False
        >>> [node.name for node in root.children]
        ['main.js']
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        is_dir: bool = False,
        file_path: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.file_path = file_path
