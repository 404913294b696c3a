"""Unit tests for the SafeWriter class in the buildfs CLI."""

import errno
import os
import signal
from unittest.mock import patch

import pytest

from buildfs.cli.safe_writer import SafeWriter
from buildfs.cli.signal_handler import SignalHandler


@pytest.fixture
def handler():
    """Give SafeWriter a fresh signal record for each test."""
    fresh = SignalHandler()
    with patch("buildfs.cli.safe_writer.signal_handler", fresh):
        yield fresh


@pytest.fixture
def pipe():
    read_fd, write_fd = os.pipe()
    yield read_fd, write_fd
    for fd in (read_fd, write_fd):
        try:
            os.close(fd)
        except OSError:
            pass


def test_write_line(handler, pipe):
    read_fd, write_fd = pipe
    writer = SafeWriter(write_fd)

    writer.write_line("dist/a.txt")
    writer.write_line("dist/café.txt")

    assert os.read(read_fd, 1024) == "dist/a.txt\ndist/café.txt\n".encode("utf-8")
    assert writer.lines_written == 2


def test_write_line_after_sigpipe(handler):
    handler.received = signal.SIGPIPE
    writer = SafeWriter(3)

    with patch("os.write") as mock_write:
        with pytest.raises(BrokenPipeError):
            writer.write_line("dist/a.txt")
        mock_write.assert_not_called()

    assert writer.lines_written == 0


def test_write_line_continues_after_sigint(handler):
    # SIGINT stops the loops between files; lines already produced still go out
    handler.received = signal.SIGINT

    with patch("os.write") as mock_write:
        SafeWriter(3).write_line("dist/a.txt")

    mock_write.assert_called_once_with(3, b"dist/a.txt\n")


def test_write_line_to_closed_pipe(handler, pipe):
    read_fd, write_fd = pipe
    os.close(read_fd)
    writer = SafeWriter(write_fd)

    with pytest.raises(BrokenPipeError):
        writer.write_line("dist/a.txt")


def test_write_line_with_epipe(handler):
    with patch("os.write", side_effect=OSError(errno.EPIPE, "Broken pipe")):
        with pytest.raises(BrokenPipeError) as excinfo:
            SafeWriter(3).write_line("dist/a.txt")

    assert excinfo.value.__cause__.errno == errno.EPIPE


def test_write_line_with_other_os_error(handler):
    with patch("os.write", side_effect=OSError(errno.EIO, "Input/output error")):
        with pytest.raises(OSError) as excinfo:
            SafeWriter(3).write_line("dist/a.txt")

    assert excinfo.value.errno == errno.EIO
    assert not isinstance(excinfo.value, BrokenPipeError)
