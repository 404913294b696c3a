"""Line output for the buildfs command line."""

import errno
import os

from buildfs.cli.signal_handler import signal_handler


class SafeWriter:
    """Writes result lines straight to a file descriptor.

    Writing goes through ``os.write`` rather than ``sys.stdout`` so that a reader
    closing the pipe (``buildfs list src | head``) surfaces as BrokenPipeError at
    the write that hit it, never later while the interpreter flushes buffers.

    Attributes:
        fd: File descriptor being written to.
        lines_written: Number of lines written so far.
    """

    def __init__(self, fd: int):
        self.fd = fd
        self.lines_written = 0

    def write_line(self, line: str) -> None:
        """Write one line followed by a newline, encoded as UTF-8.

        Raises:
            BrokenPipeError: If SIGPIPE was recorded or the reader has gone away.
            OSError: If another I/O error occurs.
        """
        if signal_handler.pipe_closed():
            raise BrokenPipeError()

        try:
            os.write(self.fd, f"{line}\n".encode("utf-8"))
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError() from e
            raise
        self.lines_written += 1
