"""Node representation for directories and files in the tree."""

from typing import Any, Dict, Iterable, Optional, Tuple

from anytree import Node, NodeMixin


class FileTreeNode(Node):  # type: ignore
    """Node class representing a file or directory in the file tree.

    Extends anytree.Node with a directory flag and keyed, ordered children. A directory
    node behaves like an ordered mapping from path segment to child node: each name
    appears at most once among its children, and ``children`` is always in ascending
    lexicographic order, whatever order the children were inserted in.

    Children are attached once, in insertion order. The sorted view is computed on the
    first read after a change and cached until the next attach or detach, so building
    a directory from unordered input stays linear in the number of insertions.

    Attributes:
        name (str): A single path segment (just the basename).
        parent (Optional[FileTreeNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory, False for files.
        children (tuple[FileTreeNode]): The child nodes in ascending name order.

    Example:
        >>> root = FileTreeNode("root", is_dir=True)
        >>> _ = root.add_child("b.txt", is_dir=False)
        >>> _ = root.add_child("a.txt", is_dir=False)
        >>> [child.name for child in root.children]
        ['a.txt', 'b.txt']
        >>> root.get_child("a.txt").is_dir
        False
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileTreeNode"] = None,
        is_dir: bool = False,
        **kwargs: Any,
    ) -> None:
        """Initialize a FileTreeNode.

        Args:
            name: The path segment naming this file or directory.
            parent: The parent node. Defaults to None. Use add_child() on the parent
                instead to keep the parent's children unique by name.
            is_dir: Whether this node represents a directory. Defaults to False.
            **kwargs: Additional arguments passed to anytree.Node.
        """
        # Must exist before anytree attaches anything
        self._sorted_children: Optional[Tuple["FileTreeNode", ...]] = None
        self._child_index: Dict[str, "FileTreeNode"] = {}
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir

    @property
    def children(self) -> Tuple["FileTreeNode", ...]:
        if self._sorted_children is None:
            self._sorted_children = tuple(sorted(NodeMixin.children.fget(self), key=lambda node: node.name))
        return self._sorted_children

    @children.setter
    def children(self, children: Iterable["FileTreeNode"]) -> None:
        NodeMixin.children.fset(self, children)
        self._sorted_children = None

    @children.deleter
    def children(self) -> None:
        NodeMixin.children.fdel(self)
        self._sorted_children = None

    def _post_attach(self, parent: "FileTreeNode") -> None:
        parent._sorted_children = None
        parent._child_index[self.name] = self

    def _post_detach(self, parent: "FileTreeNode") -> None:
        parent._sorted_children = None
        if parent._child_index.get(self.name) is self:
            del parent._child_index[self.name]

    def get_child(self, name: str) -> Optional["FileTreeNode"]:
        """Look up a direct child by name.

        Args:
            name: The path segment to look up.

        Returns:
            The child node, or None if no child has that name.
        """
        return self._child_index.get(name)

    def add_child(self, name: str, is_dir: bool) -> "FileTreeNode":
        """Insert a child, or return the existing child with the same name.

        Insertion is idempotent: if a child named ``name`` already exists it is returned
        unchanged, whatever its kind.

        Args:
            name: The path segment of the child.
            is_dir: Whether a newly created child is a directory.

        Returns:
            The existing or newly created child node.

        Raises:
            ValueError: If this node is not a directory.
        """
        if not self.is_dir:
            raise ValueError(f"Cannot add '{name}' under file node '{self.name}'")

        existing = self._child_index.get(name)
        if existing is not None:
            return existing

        return FileTreeNode(name, parent=self, is_dir=is_dir)
