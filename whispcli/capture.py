"""Process-wide stdout/stderr capture for native code.

whisper.cpp prints straight to file descriptors 1 and 2, so redirecting
``sys.stdout`` is not enough: the descriptors themselves are swapped for a
temporary file while the capture is active.

Only one capture may be active at a time, and nothing else in the process
should be writing to stdout/stderr from another thread while it is.
"""

import os
import sys
import tempfile
from typing import Optional

STDOUT_FD = 1
STDERR_FD = 2


class OutputCapture:
    _active = False

    def __init__(self) -> None:
        self.output = ""
        self._sink = None
        self._saved = []

    def __enter__(self) -> "OutputCapture":
        if OutputCapture._active:
            raise RuntimeError("OutputCapture is not reentrant")
        _flush_python_streams()
        self._sink = tempfile.TemporaryFile()
        self._saved = [os.dup(STDOUT_FD), os.dup(STDERR_FD)]
        OutputCapture._active = True
        try:
            os.dup2(self._sink.fileno(), STDOUT_FD)
            os.dup2(self._sink.fileno(), STDERR_FD)
        except OSError:
            self._restore()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self._restore()
        return None

    def _restore(self) -> None:
        _flush_python_streams()
        for fd, saved in zip((STDOUT_FD, STDERR_FD), self._saved):
            os.dup2(saved, fd)
            os.close(saved)
        self._saved = []
        OutputCapture._active = False
        if self._sink is not None:
            self._sink.seek(0)
            self.output = self._sink.read().decode("utf-8", errors="replace")
            self._sink.close()
            self._sink = None


def _flush_python_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (AttributeError, ValueError):
            # closed or replaced stream
            pass
