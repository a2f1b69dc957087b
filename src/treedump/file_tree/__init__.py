"""File tree model built from a filtered directory walk.

This package provides the tree node type, the walker producing filtered entries, the
tree itself with its chain-compressed renderer and file traversal, and the content
mode enum used when dumping files.
"""

from .content_mode import ContentMode
from .directory_walker import DirectoryWalker
from .file_tree import FileTree
from .file_tree_node import FileTreeNode

__all__ = ["ContentMode", "DirectoryWalker", "FileTree", "FileTreeNode"]
