"""Process-level helpers."""

import sys
from typing import NoReturn


def quit_process(code: int = 0) -> NoReturn:
    """Terminate the process with the given exit code.

    Raises SystemExit, so ``finally`` blocks and ``atexit`` handlers still run.
    """
    sys.exit(code)
