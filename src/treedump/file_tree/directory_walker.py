"""Filtered directory walk producing the entries a FileTree is built from."""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Tuple

from treedump.exceptions import WalkError
from treedump.exclusion_rules.base_rules import BaseExclusionRules
from treedump.exclusion_rules.git_rules import GitIgnoreExclusionRules
from treedump.types import PathType, WalkEntry

logger = logging.getLogger(__name__)

GITIGNORE_FILENAME = ".gitignore"


class DirectoryWalker:
    """Depth-first walk of a directory yielding only the entries that should be shown.

    Entries are yielded as WalkEntry values with paths relative to the root, siblings in
    ascending name order and every directory before its contents. The root itself is
    never yielded.

    Filtering happens before an entry is yielded, and an excluded directory is not
    descended into:

    - hidden entries (names starting with ``.``) are skipped unless include_hidden;
    - ``.gitignore`` files found during the walk apply to their directory's subtree
      when respect_gitignore is set;
    - exclusion_rules are checked against the ``/``-separated relative path, with a
      trailing ``/`` for directories;
    - exclude_paths (typically the output file) are never yielded.

    Symbolic links are not followed: a link is classified by the link itself, so a
    link to a directory is yielded as a non-directory entry.

    Attributes:
        root_path (Path): The directory (or single file) being walked.
        exclusion_rules (Optional[BaseExclusionRules]): Extra rules for excluding entries.
        include_hidden (bool): Whether entries starting with ``.`` are included.
        respect_gitignore (bool): Whether ``.gitignore`` files are honored.

    Example:
        >>> walker = DirectoryWalker("src")  # doctest: +SKIP
        >>> for entry in walker.walk():  # doctest: +SKIP
        ...     print(entry.relative_path, entry.is_dir)
        pkg True
        pkg/__init__.py False
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        exclude_paths: Iterable[PathType] = (),
        include_hidden: bool = False,
        respect_gitignore: bool = True,
    ) -> None:
        """Initialize a DirectoryWalker.

        Args:
            root_path: The directory to walk. A file is accepted and treated as a single
                file target.
            exclusion_rules: Rules for excluding entries. Defaults to None.
            exclude_paths: Paths that must never be yielded, compared after resolving.
            include_hidden: Whether to include entries whose name starts with ``.``.
            respect_gitignore: Whether to honor ``.gitignore`` files met during the walk.
        """
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self.include_hidden = include_hidden
        self.respect_gitignore = respect_gitignore
        self._excluded_paths = {Path(path).resolve() for path in exclude_paths}

    @property
    def is_single_file(self) -> bool:
        """Whether the root exists and is not a directory."""
        return self.root_path.exists() and not self.root_path.is_dir()

    def walk(self) -> Iterator[WalkEntry]:
        """Walk the root directory.

        Yields:
            WalkEntry values for every included entry. Nothing is yielded for a single
            file target.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            WalkError: If a directory cannot be listed or an entry cannot be classified.
        """
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            return

        yield from self._walk_directory(self.root_path, "", [])

    def _walk_directory(
        self,
        directory: Path,
        relative_dir: str,
        gitignores: List[Tuple[str, GitIgnoreExclusionRules]],
    ) -> Iterator[WalkEntry]:
        if self.respect_gitignore:
            gitignore_path = directory / GITIGNORE_FILENAME
            try:
                rules = GitIgnoreExclusionRules(gitignore_path) if gitignore_path.is_file() else None
            except OSError as e:
                raise WalkError(str(gitignore_path), e) from e
            if rules is not None:
                logger.debug("Loaded %s", gitignore_path)
                gitignores = gitignores + [(relative_dir, rules)]

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise WalkError(str(directory), e) from e

        for entry in entries:
            relative_path = f"{relative_dir}/{entry.name}" if relative_dir else entry.name
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError as e:
                raise WalkError(entry.path, e) from e

            if self._is_excluded(entry.name, entry.path, relative_path, is_dir, gitignores):
                continue

            yield WalkEntry(relative_path, is_dir)
            if is_dir:
                yield from self._walk_directory(Path(entry.path), relative_path, gitignores)

    def _is_excluded(
        self,
        name: str,
        path: str,
        relative_path: str,
        is_dir: bool,
        gitignores: List[Tuple[str, GitIgnoreExclusionRules]],
    ) -> bool:
        if not self.include_hidden and name.startswith("."):
            return True

        match_path = relative_path + "/" if is_dir else relative_path

        for base, rules in gitignores:
            # Patterns are relative to the directory holding the .gitignore file
            local_path = match_path[len(base) + 1 :] if base else match_path
            if rules.exclude(local_path):
                return True

        if self.exclusion_rules is not None and self.exclusion_rules.exclude(match_path):
            return True

        if self._excluded_paths and Path(path).resolve() in self._excluded_paths:
            logger.debug("Skipping excluded path %s", path)
            return True

        return False
