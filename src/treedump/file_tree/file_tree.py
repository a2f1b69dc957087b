"""In-memory file tree built from a filtered directory walk.

This module provides the FileTree class, which materializes a walk sequence into a
tree of FileTreeNode objects, renders it as a chain-compressed diagram, and traverses
its files in lexicographic path order.
"""

import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, TypeVar

from anytree import PreOrderIter

from treedump.file_tree.directory_walker import DirectoryWalker
from treedump.file_tree.file_tree_node import FileTreeNode
from treedump.types import PathType, WalkEntry

T = TypeVar("T")


def root_display_name(root_path: PathType) -> str:
    """Get the name printed on the first line of the diagram.

    Args:
        root_path: The walked target as given by the user.

    Returns:
        The final path component. Relative references such as ``.`` and ``..`` are
        resolved to the real directory name; a filesystem root keeps its full path.

    Example:
        >>> root_display_name("projects/app")
        'app'
        >>> root_display_name("/")
        '/'
    """
    path = Path(root_path)
    name = path.name
    if name in ("", ".", ".."):
        name = path.resolve().name
    return name or str(path)


def split_segments(relative_path: str) -> List[str]:
    """Split a relative path into its non-empty segments.

    Both ``/`` and the platform separators are accepted. Empty and ``.`` segments are
    dropped.

    Example:
        >>> split_segments("src/./pkg//mod.py")
        ['src', 'pkg', 'mod.py']
    """
    normalized = relative_path.replace(os.sep, "/")
    if os.altsep:
        normalized = normalized.replace(os.altsep, "/")
    return [segment for segment in normalized.split("/") if segment not in ("", ".")]


class FileTree:
    """A tree of directories and files keyed by path segment.

    The tree is built eagerly and completely from a sequence of ``(relative_path,
    is_directory)`` entries, and is read-only afterwards. It holds no file content;
    the root path is kept so that consumers can read files on demand.

    The root node is always a directory. When the walked target is a single file, the
    root directory holds that file as its only leaf and the tree is flagged as
    ``single_file``; the root path is then the file's parent directory.

    Attributes:
        root_path (Path): Base directory that relative file paths are joined to.
        root (FileTreeNode): The root directory node, named with the display name.
        single_file (bool): Whether the tree was built from a single file target.

    Example:
        >>> tree = FileTree.from_entries("proj", [("src/main.py", False), ("README", False)])
        >>> print(tree.get_tree_representation())
        proj
        ├── README
        └── src/main.py
        >>> tree.file_count()
        2
    """

    def __init__(self, root_path: PathType, root_name: Optional[str] = None, single_file: bool = False) -> None:
        """Initialize an empty FileTree.

        Args:
            root_path: Base directory for the relative paths stored in the tree.
            root_name: Name printed for the root. Defaults to the display name of
                root_path.
            single_file: Whether the tree represents a single file target.
        """
        self.root_path = Path(root_path)
        self.root = FileTreeNode(root_name if root_name is not None else root_display_name(root_path), is_dir=True)
        self.single_file = single_file

    @classmethod
    def from_entries(
        cls,
        root_path: PathType,
        entries: Iterable[Tuple[str, bool]],
        root_name: Optional[str] = None,
        single_file: bool = False,
    ) -> "FileTree":
        """Build a tree from a filtered walk sequence.

        The sequence is consumed completely before returning. Any exception raised
        while iterating it (for example a WalkError) aborts construction and
        propagates to the caller.

        Args:
            root_path: Base directory the entries are relative to.
            entries: Pairs of (relative_path, is_directory).
            root_name: Name printed for the root. Defaults to the display name of
                root_path.
            single_file: Whether the tree represents a single file target.

        Returns:
            The fully built tree.
        """
        tree = cls(root_path, root_name=root_name, single_file=single_file)
        for relative_path, is_dir in entries:
            tree.insert(relative_path, is_dir)
        return tree

    @classmethod
    def from_walker(cls, walker: DirectoryWalker) -> "FileTree":
        """Build a tree from a DirectoryWalker, handling single file targets.

        Args:
            walker: The walker producing the filtered entries.

        Returns:
            The fully built tree.

        Raises:
            FileNotFoundError: If the walker's root does not exist.
            WalkError: If a directory cannot be listed or an entry classified.
        """
        root = walker.root_path
        if walker.is_single_file:
            return cls.from_entries(
                root.parent, [WalkEntry(root.name, False)], root_name=root_display_name(root), single_file=True
            )
        return cls.from_entries(root, walker.walk(), root_name=root_display_name(root))

    def insert(self, relative_path: str, is_dir: bool) -> None:
        """Insert one entry into the tree.

        Intermediate directories are created as needed. If an intermediate segment
        already exists as a file, the rest of the entry is dropped silently. Inserting
        an existing path leaves the tree unchanged.

        Args:
            relative_path: Path of the entry relative to the root.
            is_dir: Whether the last segment is a directory.
        """
        segments = split_segments(relative_path)
        if not segments:
            # The root itself
            return

        current = self.root
        for segment in segments[:-1]:
            current = current.add_child(segment, is_dir=True)
            if not current.is_dir:
                return
        current.add_child(segments[-1], is_dir=is_dir)

    def file_count(self) -> int:
        """Get the number of files in the tree."""
        return sum(1 for _ in PreOrderIter(self.root, filter_=lambda node: not node.is_dir))

    def directory_count(self) -> int:
        """Get the number of directories in the tree, excluding the root."""
        return sum(1 for _ in PreOrderIter(self.root, filter_=lambda node: node.is_dir)) - 1

    @staticmethod
    def _relative_path(node: FileTreeNode) -> str:
        return "/".join(ancestor.name for ancestor in node.path[1:])

    def visit_files(self, callback: Callable[[T, str], None], context: T) -> None:
        """Call a function for every file, in ascending lexicographic path order.

        Args:
            callback: Called as ``callback(context, relative_path)`` for each file,
                with the path segments joined by ``/``.
            context: Arbitrary state handed to every callback invocation.

        Example:
            >>> tree = FileTree.from_entries("p", [("b.txt", False), ("a/z.txt", False)])
            >>> seen = []
            >>> tree.visit_files(lambda ctx, path: ctx.append(path), seen)
            >>> seen
            ['a/z.txt', 'b.txt']
        """
        for node in PreOrderIter(self.root, filter_=lambda node: not node.is_dir):
            callback(context, self._relative_path(node))

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all files in the tree.

        Yields:
            Pairs of (absolute_path, relative_path) for each file, in ascending
            lexicographic path order. The relative path always uses ``/``.
        """
        for node in PreOrderIter(self.root, filter_=lambda node: not node.is_dir):
            relative_path = self._relative_path(node)
            yield str(self.root_path / relative_path), relative_path

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate the tree diagram one line at a time.

        The first line is the root name. Below it, every directory's children are
        listed in ascending order with box-drawing connectors. Chains of directories
        that each hold a single subdirectory are collapsed into one ``a/b/c`` line:

        - a chain ending in an empty directory is printed as ``a/b/c/``;
        - a chain ending in a directory holding exactly one file is printed as the
          single leaf line ``a/b/c/file``;
        - a chain ending in a directory with several children is printed as
          ``a/b/c/`` followed by its children one level deeper.

        Yields:
            Lines of the diagram, without trailing newlines.

        Example:
            >>> entries = [("a/b/c/d.txt", False), ("docs/x.txt", False), ("docs/y.txt", False)]
            >>> for line in FileTree.from_entries("proj", entries).stream_tree_representation():
            ...     print(line)
            proj
            ├── a/b/c/d.txt
            └── docs/
                ├── x.txt
                └── y.txt
        """
        yield self.root.name
        if self.single_file:
            return
        yield from self._stream_children(self.root, "")

    def _stream_children(self, node: FileTreeNode, prefix: str) -> Iterator[str]:
        children = node.children
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            connector = "└── " if is_last else "├── "

            if not child.is_dir:
                yield f"{prefix}{connector}{child.name}"
                continue

            # Follow the chain of lone subdirectories iteratively
            segments = [child.name]
            current = child
            while len(current.children) == 1 and current.children[0].is_dir:
                current = current.children[0]
                segments.append(current.name)
            label = "/".join(segments)

            if not current.children:
                yield f"{prefix}{connector}{label}/"
            elif len(current.children) == 1:
                yield f"{prefix}{connector}{label}/{current.children[0].name}"
            else:
                yield f"{prefix}{connector}{label}/"
                yield from self._stream_children(current, prefix + ("    " if is_last else "│   "))

    def get_tree_representation(self) -> str:
        """Get the complete tree diagram as a string.

        Returns:
            The diagram lines joined by newlines, without a trailing newline.
        """
        return "\n".join(self.stream_tree_representation())
