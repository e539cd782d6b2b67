"""Progress indicator for slow remote calls."""

from __future__ import annotations

import itertools
import sys
import threading
import time

_BRAILLE = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
_INTERVAL = 0.1


class Spinner:
    """Indeterminate spinner shown while waiting on a summarizer or transcriber."""

    def __init__(self, label: str, enabled: bool | None = None) -> None:
        self._label = label
        self._enabled = enabled
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._stderr = sys.stderr

    def __enter__(self) -> Spinner:
        self._stderr = sys.stderr
        if self._enabled is None:
            self._enabled = self._stderr.isatty()
        if not self._enabled:
            return self
        self._stop.clear()
        self._thread = threading.Thread(target=self._spin, daemon=True)
        self._thread.start()
        return self

    def __exit__(self, exc_type, *_exc) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join()
        if not self._enabled:
            return
        mark = "✖" if exc_type else "✔"
        outcome = "failed" if exc_type else "done"
        self._stderr.write(f"\r  {mark} {self._label} {outcome}.\033[K\n")
        self._stderr.flush()

    def _spin(self) -> None:
        for frame in itertools.cycle(_BRAILLE):
            if self._stop.is_set():
                break
            self._stderr.write(f"\r  {frame} {self._label}\033[K")
            self._stderr.flush()
            time.sleep(_INTERVAL)
