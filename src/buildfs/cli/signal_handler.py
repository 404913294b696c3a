"""Signal handling for the buildfs command line.

SIGPIPE and SIGINT are recorded instead of acted on immediately. The list and
copy loops check the record between files, so an interrupted copy stops at a
file boundary and can still report what it did, and the process exits with
the conventional status code for the signal.
"""

import atexit
import os
import signal
import sys
from types import FrameType
from typing import Any, Dict, Optional


class SignalHandler:
    """Records the first SIGPIPE or SIGINT received by the process.

    Once a signal has been recorded, the original handler for it is restored, so
    pressing Ctrl+C a second time interrupts the process the usual way.

    Attributes:
        received: Number of the first signal received, or None.
    """

    EXIT_CODES = {signal.SIGPIPE: 141, signal.SIGINT: 130}

    def __init__(self) -> None:
        self.received: Optional[int] = None
        self._original_handlers: Dict[int, Any] = {}

    def install(self) -> None:
        """Start recording SIGPIPE and SIGINT."""
        for signum in self.EXIT_CODES:
            self._original_handlers[signum] = signal.signal(signum, self.record)

    def record(self, signum: int, frame: Optional[FrameType]) -> None:
        if self.received is None:
            self.received = signum
        signal.signal(signum, self._original_handlers.get(signum, signal.SIG_DFL))

    def interrupted(self) -> bool:
        return self.received is not None

    def pipe_closed(self) -> bool:
        return self.received == signal.SIGPIPE

    def exit_code(self) -> Optional[int]:
        """Return the exit status for the recorded signal, or None if there is none."""
        if self.received is None:
            return None
        return self.EXIT_CODES[self.received]


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    signal_handler.install()


def cleanup() -> None:
    """Point stdout at the null device once a signal has been recorded.

    Runs at exit, so that flushing stdout into a closed pipe during interpreter
    shutdown does not print a second error.
    """
    if signal_handler.interrupted():
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
