"""Filtered listing and copying of directory trees.

This package provides the FileLister and TreeCopier classes that walk a directory
structure, keep the regular files passing an include/exclude filter, and skip
entries hidden by name-based exclusion rules.
"""

from .file_lister import FileLister, get_filtered_file_list
from .permission_action import PermissionAction
from .tree_copier import TreeCopier, copy_dir, copy_file

__all__ = [
    "FileLister",
    "PermissionAction",
    "TreeCopier",
    "copy_dir",
    "copy_file",
    "get_filtered_file_list",
]
