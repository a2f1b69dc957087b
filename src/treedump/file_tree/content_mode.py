"""Content mode enum selecting how file contents are dumped."""

from enum import Enum


class ContentMode(str, Enum):
    """How file content is written below each file header.

    The mode is chosen once per run and applied to every file.

    Values:
        NUMBERED: Two-pass read; validate the whole file as text, then print every line
            prefixed by its right-aligned 1-based line number (default behavior)
        RAW: Read the whole file as text and print it verbatim
    """

    NUMBERED = "numbered"
    RAW = "raw"
