"""Directory tree flattening utilities.

This package renders a directory subtree as a single text artifact: a compact
tree diagram followed by a line-numbered dump of every file's content.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("treedump")
except PackageNotFoundError:
    __version__ = "unknown"
