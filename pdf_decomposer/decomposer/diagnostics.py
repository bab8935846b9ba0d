"""Capture of the native engine's low-level diagnostic output."""

import os
import tempfile
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import IO, TypeVar

from pdf_decomposer.logging.logger import Log

T = TypeVar("T")

STDERR_FD = 2


class DiagnosticCapture:
    """Redirects a file descriptor into a private sink while an action runs.

    Native libraries write warnings straight to fd 2, bypassing Python's
    sys.stderr. Whatever lands in the sink is reported as one warning.
    The descriptor is process-global, so redirections are serialized.
    """

    _lock = threading.Lock()

    def __init__(self, component: str = "pdf", fd: int = STDERR_FD) -> None:
        self._component = component
        self._fd = fd

    def run(self, action: Callable[[], T]) -> T:
        with self._lock, tempfile.TemporaryFile() as sink:
            try:
                with self._redirected(sink):
                    return action()
            finally:
                self._report(sink)

    @contextmanager
    def _redirected(self, sink: IO[bytes]) -> Iterator[None]:
        saved = os.dup(self._fd)
        try:
            os.dup2(sink.fileno(), self._fd)
            try:
                yield
            finally:
                os.dup2(saved, self._fd)
        finally:
            os.close(saved)

    def _report(self, sink: IO[bytes]) -> None:
        sink.seek(0)
        captured = sink.read()
        if captured:
            message = captured.decode("utf-8", errors="replace").strip()
            Log.warning(f"[{self._component}] {message}", component=self._component)
