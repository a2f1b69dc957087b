"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec

from treedump.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax.

    Uses the pathspec library to match paths against patterns the same way Git does:
    globs, directory-only patterns ending in ``/``, negations starting with ``!``,
    ``**`` and comment lines. Rules from several files and individual patterns can be
    combined; they are applied in the order they were added, so later negations can
    re-include earlier matches.

    Attributes:
        spec (PathSpec): Compiled pattern matcher for all rules added so far.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("node_modules/")
        >>> rules.exclude("node_modules/")
        True
        >>> rules.exclude("node_modules/left-pad/index.js")
        True
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("app.log"), rules.exclude("keep.log")
        (True, False)

    Note:
        Paths given to exclude() should use forward slashes, even on Windows.
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to the file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        """Check if a path matches the loaded patterns.

        Args:
            path: The relative path to check, with a trailing ``/`` for directories.

        Returns:
            bool: True if the last matching pattern excludes the path.
        """
        return bool(self.spec.match_file(path))

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and append .gitignore patterns from one or more files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8", errors="replace") as f:
                self._lines.extend(f.read().splitlines())

        self._compile()

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern.

        Args:
            rule: A single .gitignore pattern (e.g., "*.pyc", "build/", "!keep.txt").
        """
        self._lines.append(rule)
        self._compile()

    def has_rules(self) -> bool:
        """Check if any effective patterns have been added.

        Blank lines and comments do not count.
        """
        return any(pattern.include is not None for pattern in self.spec.patterns)

    def _compile(self) -> None:
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)
