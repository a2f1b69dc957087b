"""Directory flattening with streaming output.

This module provides the TreeDump class, which walks a directory, builds its FileTree
eagerly, and then streams the tree diagram followed by every file's content.
"""

from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from treedump.exclusion_rules.base_rules import BaseExclusionRules
from treedump.file_content_printer import DELIMITER, FileContentPrinter
from treedump.file_tree.content_mode import ContentMode
from treedump.file_tree.directory_walker import DirectoryWalker
from treedump.file_tree.file_tree import FileTree
from treedump.types import PathType


class TreeDump:
    """Flattens a directory into a tree diagram followed by per-file content blocks.

    The filtered walk is consumed and the tree built completely during construction,
    so walk failures surface immediately and before any output is produced. The tree is
    then read-only and consumed twice: once by stream_tree() and once by
    stream_contents(). Each of these can only be performed once.

    The complete output produced by stream() has this shape::

        <root name>
        <diagram lines>

        ---

        /<first/file>:
        <content>
        ---
        ...

    Attributes:
        target (Path): The directory or single file being flattened.
        streaming_complete (bool): Whether both streaming operations have finished.

    Example:
        >>> dump = TreeDump("src")  # doctest: +SKIP
        >>> for chunk in dump.stream():  # doctest: +SKIP
        ...     print(chunk, end="")
        src
        └── main.py
        <BLANKLINE>
        ---
        <BLANKLINE>
        /main.py:
        1 print("hello")
        ---

    Raises:
        FileNotFoundError: If the target does not exist.
        WalkError: If a directory cannot be listed or an entry classified.
        ValueError: If content_mode is invalid.
        LookupError: If the encoding is not available.
    """

    def __init__(
        self,
        target: PathType,
        *,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        exclude_paths: Iterable[PathType] = (),
        include_hidden: bool = False,
        respect_gitignore: bool = True,
        content_mode: Union[str, ContentMode] = ContentMode.NUMBERED,
        encoding: str = "utf-8",
    ):
        """Walk the target and build its tree.

        Args:
            target: Directory (or single file) to flatten. Can be any path-like object.
            exclusion_rules: Optional rules for excluding files and directories.
            exclude_paths: Paths that must not appear in the output, such as the output
                file itself.
            include_hidden: Whether to include entries whose name starts with ``.``.
            respect_gitignore: Whether ``.gitignore`` files found in the tree are honored.
            content_mode: How file content is printed, "numbered" (default) or "raw".
            encoding: Encoding used to decode files. Defaults to "utf-8".
        """
        self.target = Path(target)

        self._walker = DirectoryWalker(
            self.target,
            exclusion_rules=exclusion_rules,
            exclude_paths=exclude_paths,
            include_hidden=include_hidden,
            respect_gitignore=respect_gitignore,
        )
        self._fs_tree = FileTree.from_walker(self._walker)
        self._content_printer = FileContentPrinter(self._fs_tree, content_mode=content_mode, encoding=encoding)

        self._file_count = self._fs_tree.file_count()
        self._directory_count = self._fs_tree.directory_count()

        self._tree_complete = False
        self._contents_complete = False

    @property
    def tree(self) -> FileTree:
        """The built tree."""
        return self._fs_tree

    @property
    def file_count(self) -> int:
        """Number of files in the tree."""
        return self._file_count

    @property
    def directory_count(self) -> int:
        """Number of directories in the tree, excluding the root."""
        return self._directory_count

    @property
    def streaming_complete(self) -> bool:
        """Whether both the tree and the contents have been streamed."""
        return self._tree_complete and self._contents_complete

    def stream_tree(self) -> Iterator[str]:
        """Stream the tree diagram line by line.

        Returns:
            Iterator yielding the diagram lines, each with a trailing newline. The first
            line is the root name.

        Raises:
            RuntimeError: If the tree has already been streamed.
        """
        if self._tree_complete:
            raise RuntimeError("Tree has already been streamed")

        for line in self._fs_tree.stream_tree_representation():
            yield line + "\n"

        self._tree_complete = True

    def stream_contents(self) -> Iterator[str]:
        """Stream the separator line and then every file's block.

        Returns:
            Iterator yielding chunks of the formatted contents.

        Raises:
            RuntimeError: If contents have already been streamed.
        """
        if self._contents_complete:
            raise RuntimeError("Contents have already been streamed")

        yield f"\n{DELIMITER}\n"

        for _, _, content_iter in self._content_printer.yield_file_contents():
            yield from content_iter

        self._contents_complete = True

    def stream(self) -> Iterator[str]:
        """Stream the complete output: diagram, separator, then file blocks."""
        yield from self.stream_tree()
        yield from self.stream_contents()
