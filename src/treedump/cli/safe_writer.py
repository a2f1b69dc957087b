"""Output sink for the treedump CLI.

Everything the CLI prints goes through SafeWriter, which reports a vanished consumer
as BrokenPipeError so that main() can end the run quietly.
"""

import errno
import os
import types
from pathlib import Path
from typing import Optional, Type, Union

from treedump.cli.signal_handler import signal_handler


class SafeWriter:
    """Writes UTF-8 text to a file descriptor or to a file it opens itself.

    A recorded SIGPIPE or SIGINT, or an EPIPE from the operating system, becomes a
    BrokenPipeError. Any other OSError propagates unchanged.

    Attributes:
        file: The path or descriptor the writer was created with.
        fd: The descriptor bytes are written to.

    Example:
        >>> import sys
        >>> with SafeWriter(sys.stdout.fileno()) as writer:  # doctest: +SKIP
        ...     writer.write("project\\n")
        project
    """

    def __init__(self, file: Union[int, str, Path]):
        """Create a writer.

        Args:
            file: An open descriptor, which is left open on close(), or a path that is
                created or truncated and closed on close().

        Raises:
            TypeError: If file is neither an int nor a path-like object.
            OSError: If the output file cannot be opened.
        """
        self.file = file
        self._closed = False

        # bool is an int subclass but never a descriptor here
        if isinstance(file, bool):
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")
        if isinstance(file, int):
            self.fd = file
            self._file_obj = None
        elif isinstance(file, (str, os.PathLike)):
            self._file_obj = Path(file).open("w", encoding="utf-8")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(file).__name__}")

    def write(self, data: str) -> None:
        """Encode and write all of data.

        Raises:
            BrokenPipeError: If the consumer is gone or the run was interrupted.
            OSError: For any other write failure.
            ValueError: If the writer has been closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.sigpipe_received.is_set() or signal_handler.sigint_received.is_set():
            raise BrokenPipeError()

        remaining = data.encode("utf-8")
        try:
            while remaining:
                remaining = remaining[os.write(self.fd, remaining) :]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise

    def close(self) -> None:
        """Close the file opened by this writer, if any. Idempotent.

        EPIPE while closing is ignored; other errors propagate.
        """
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An error from the block wins over one from closing
            if exc_type is None:
                raise
