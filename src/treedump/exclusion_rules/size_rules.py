"""Size-based exclusion rules for filtering files by size."""

from pathlib import Path
from typing import Optional, Union

from humanfriendly import InvalidSize, parse_size

from treedump.types import PathType

from .base_rules import BaseExclusionRules


def parse_file_size(size_str: str) -> int:
    """Parse human-readable file size to bytes.

    Args:
        size_str: Size string like '1GB', '500MB', '2.5K', '64KiB' or just '1024'.

    Returns:
        Size in bytes.

    Raises:
        ValueError: If size_str is not a valid size format.

    Example:
        >>> parse_file_size("1KB")
        1000
        >>> parse_file_size("1KiB")
        1024
    """
    try:
        return int(parse_size(size_str))
    except (InvalidSize, ValueError) as e:
        raise ValueError(f"Invalid size format '{size_str}': {e}") from e


class SizeExclusionRules(BaseExclusionRules):
    """Exclusion rules based on file size limits.

    Files strictly larger than the limit are excluded. Directories are never excluded.
    Relative paths are resolved against root_path when one is given, which is how a
    DirectoryWalker hands paths to its rules.

    Attributes:
        max_size_bytes (int): Maximum allowed file size in bytes.
        root_path (Optional[Path]): Directory relative paths are joined to.

    Example:
        >>> rules = SizeExclusionRules("1MB")
        >>> rules.max_size_bytes
        1000000
        >>> rules.has_rules()
        True
    """

    def __init__(self, max_size: Union[str, int], root_path: Optional[PathType] = None):
        """Initialize size exclusion rules.

        Args:
            max_size: Maximum file size, either a human-readable string ('1GB',
                '500MB', '2.5K') or a number of bytes.
            root_path: Directory that relative paths are resolved against. Defaults to
                None (the current working directory).

        Raises:
            ValueError: If max_size format is invalid or negative.
        """
        if isinstance(max_size, bool):
            raise ValueError(f"max_size must be string or int, got {type(max_size)}")
        if isinstance(max_size, str):
            self.max_size_bytes = parse_file_size(max_size)
        elif isinstance(max_size, int):
            if max_size < 0:
                raise ValueError("Size cannot be negative")
            self.max_size_bytes = max_size
        else:
            raise ValueError(f"max_size must be string or int, got {type(max_size)}")

        self.root_path = Path(root_path) if root_path is not None else None

    def exclude(self, path: str) -> bool:
        """Check if a file should be excluded based on size.

        Args:
            path: File path to check (relative or absolute).

        Returns:
            True if the file exceeds the size limit, False otherwise. Directories and
            files whose size cannot be determined are never excluded.
        """
        path_obj = Path(path)
        if self.root_path is not None and not path_obj.is_absolute():
            path_obj = self.root_path / path_obj

        try:
            if not path_obj.is_file():
                return False
            return path_obj.stat().st_size > self.max_size_bytes
        except OSError:
            return False

    def has_rules(self) -> bool:
        """Check if a positive size limit is configured."""
        return self.max_size_bytes > 0
