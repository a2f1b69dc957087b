from os import PathLike
from typing import NamedTuple, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class WalkEntry(NamedTuple):
    """A single filtered entry produced by a directory walk.

    Attributes:
        relative_path: Path of the entry relative to the walk root, using either
            ``/`` or the platform separator.
        is_dir: True if the entry is a directory, False for anything else
            (regular files and symlinks that are not followed).

    Example:
        >>> entry = WalkEntry("src/main.py", False)
        >>> entry.relative_path
        'src/main.py'
        >>> entry.is_dir
        False
    """

    relative_path: str
    is_dir: bool
