"""File content printer with binary-safe, line-numbered output.

This module formats the content of every file in a FileTree as a delimited block: a
header naming the file, its content, and a closing delimiter. Files that cannot be
opened or decoded as text are replaced by a fixed placeholder, never by a partial dump.
"""

import logging
from pathlib import Path
from typing import Iterator, Tuple, Union

from .file_tree.content_mode import ContentMode
from .file_tree.file_tree import FileTree

logger = logging.getLogger(__name__)

PLACEHOLDER = "   * [Could not read file content (likely binary or permission error)]"
DELIMITER = "---"


class FileContentPrinter:
    """Streams the content of every file in a tree as delimited text blocks.

    Files are visited in ascending lexicographic path order. Each block consists of an
    empty line, a ``/relative/path:`` header, the content, and a ``---`` delimiter line.
    Content is read from the live filesystem at the tree's root path joined with the
    file's relative path; the tree never caches bytes.

    Two content modes exist and one is applied to every file:

    - ``ContentMode.NUMBERED`` opens the file once and reads it twice. The first pass
      decodes every line and counts them; if any line fails to decode the whole file is
      replaced by the placeholder. The second pass rewinds the handle and prints each
      line prefixed by its 1-based number, right-aligned to the width of the largest
      number.
    - ``ContentMode.RAW`` reads the whole file as text and prints it verbatim.

    Failing to open a file and failing to decode it are treated the same way. At most
    one file handle is open at any time.

    Attributes:
        fs_tree (FileTree): The tree whose files are dumped.
        content_mode (ContentMode): How file content is printed.
        encoding (str): The encoding used to decode files.

    Example:
        >>> from treedump.file_tree.file_tree import FileTree
        >>> tree = FileTree.from_entries("src", [("main.py", False)])  # doctest: +SKIP
        >>> printer = FileContentPrinter(tree)  # doctest: +SKIP
        >>> for path, rel_path, content in printer.yield_file_contents():  # doctest: +SKIP
        ...     print("".join(content), end="")
        <BLANKLINE>
        /main.py:
        1 print("hello")
        ---
    """

    def __init__(
        self,
        fs_tree: FileTree,
        content_mode: Union[str, ContentMode] = ContentMode.NUMBERED,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the FileContentPrinter.

        Args:
            fs_tree: The tree whose files are dumped.
            content_mode: Either a ContentMode or its string value ("numbered" or
                "raw"). Defaults to NUMBERED.
            encoding: The encoding used to decode files. Defaults to "utf-8".

        Raises:
            ValueError: If content_mode is not a valid mode.
            LookupError: If the specified encoding is not available.
        """
        if isinstance(content_mode, str) and not isinstance(content_mode, ContentMode):
            try:
                content_mode = ContentMode(content_mode.lower())
            except ValueError:
                raise ValueError(f"Invalid content mode: {content_mode}. Must be one of: numbered, raw")

        # Validate encoding early to fail fast
        try:
            "test".encode(encoding).decode(encoding)
        except LookupError as e:
            raise LookupError(f"Encoding '{encoding}' is not available") from e

        self.fs_tree = fs_tree
        self.content_mode = content_mode
        self.encoding = encoding

    @staticmethod
    def format_header(relative_path: str) -> str:
        """Format the header line naming a file.

        Separators are normalized to forward slashes.

        Example:
            >>> FileContentPrinter.format_header("src/main.py")
            '/src/main.py:'
        """
        normalized = relative_path.replace("\\", "/")
        return f"/{normalized}:"

    def _yield_numbered_lines(self, path: Path, relative_path: str) -> Iterator[str]:
        try:
            # Lines end at "\n" only; a lone "\r" stays part of the line
            file = open(path, "r", encoding=self.encoding, newline="\n")
        except OSError as e:
            logger.debug("Substituting placeholder for %s: %s", relative_path, e)
            yield PLACEHOLDER + "\n"
            return

        with file:
            # Pass 1: validate the whole file as text and count lines
            try:
                line_count = sum(1 for _ in file)
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("Substituting placeholder for %s: %s", relative_path, e)
                yield PLACEHOLDER + "\n"
                return

            width = len(str(line_count)) if line_count else 1

            # Pass 2: rewind and print with the final padding
            file.seek(0)
            for number, line in enumerate(file, start=1):
                if line.endswith("\n"):
                    line = line[:-1]
                    if line.endswith("\r"):
                        line = line[:-1]
                yield f"{number:>{width}} {line}\n"

    def _yield_raw_content(self, path: Path, relative_path: str) -> Iterator[str]:
        try:
            with open(path, "r", encoding=self.encoding, newline="") as file:
                content = file.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Substituting placeholder for %s: %s", relative_path, e)
            yield PLACEHOLDER + "\n"
            return

        if content and not content.endswith("\n"):
            content += "\n"
        if content:
            yield content

    def _yield_wrapped_content(self, file_path: str, relative_path: str) -> Iterator[str]:
        """Stream one file's block: blank line, header, content, delimiter.

        Args:
            file_path: Absolute path to the file.
            relative_path: Path relative to the tree root, used in the header.

        Yields:
            str: Pieces of the block, each ending with a newline.
        """
        yield "\n"
        yield self.format_header(relative_path) + "\n"

        if self.content_mode == ContentMode.RAW:
            yield from self._yield_raw_content(Path(file_path), relative_path)
        else:
            yield from self._yield_numbered_lines(Path(file_path), relative_path)

        yield DELIMITER + "\n"

    def yield_file_contents(self) -> Iterator[Tuple[str, str, Iterator[str]]]:
        """Stream every file's formatted block.

        Yields:
            Tuples of (absolute_path, relative_path, content_iterator), where the
            content iterator yields the pieces of that file's block. Consume each
            content iterator before advancing to the next file.
        """
        for file_path, relative_path in self.fs_tree.iterate_files():
            yield file_path, relative_path, self._yield_wrapped_content(file_path, relative_path)
