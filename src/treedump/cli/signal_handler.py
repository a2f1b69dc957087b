"""SIGPIPE and SIGINT bookkeeping for the treedump CLI.

The handlers installed here never raise. They record that the signal arrived, put
the previous handler back, and leave it to SafeWriter to stop the output at its
next write.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

# Not defined on Windows
SIGPIPE: Optional[int] = getattr(signal, "SIGPIPE", None)


class SignalHandler:
    """Flags for the two signals that end a dump early.

    Attributes:
        sigpipe_received: Set once the output consumer has gone away.
        sigint_received: Set once the user pressed Ctrl+C.
        original_sigpipe_handler: Handler to reinstate after SIGPIPE, or None where
            the platform has no SIGPIPE.
        original_sigint_handler: Handler to reinstate after SIGINT.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler: Any = signal.getsignal(SIGPIPE) if SIGPIPE is not None else None
        self.original_sigint_handler: Any = signal.getsignal(signal.SIGINT)

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        if SIGPIPE is not None:
            signal.signal(SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        # A second Ctrl+C goes to the original handler
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    def interrupted(self) -> bool:
        """Whether output should stop because of either signal."""
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Route SIGINT, and SIGPIPE where it exists, to the shared SignalHandler."""
    if SIGPIPE is not None:
        signal.signal(SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Point stdout at the null device after an interrupted run.

    The interpreter flushes stdout at exit; with the consumer gone that flush would
    print a broken pipe traceback.
    """
    if signal_handler.interrupted():
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
