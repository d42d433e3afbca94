"""Background task that pulls lines from a blocking line source.

The read call cannot be interrupted: after a shutdown the reader thread
stays parked, either in ``readline()`` or in ``before_read`` waiting for
the loop to take the previous line, until the source closes or the
process exits. It is a daemon thread so it never keeps the interpreter
alive. Closing or replacing the underlying stream is the only way to
stop it earlier.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import TextIO

from .constants import LINE_ENCODING, READER_THREAD_NAME
from .dispatcher import report_diagnostic
from .logging import log_event
from .models import LineSource


class LineReader:
    """Forward each line from ``source`` to ``on_line``, then call ``on_end`` once.

    ``before_read`` is called ahead of every read and may block to hold the
    reader back until the consumer is ready for another line.
    """

    def __init__(
        self,
        source: LineSource,
        on_line: Callable[[str], None],
        on_end: Callable[[], None],
        diagnostics: TextIO | None = None,
        before_read: Callable[[], object] | None = None,
    ) -> None:
        self._source = source
        self._on_line = on_line
        self._on_end = on_end
        self._diagnostics = diagnostics
        self._before_read = before_read
        self._thread = threading.Thread(target=self.run, name=READER_THREAD_NAME, daemon=True)

    @property
    def thread(self) -> threading.Thread:
        return self._thread

    def start(self) -> None:
        self._thread.start()

    def _read(self) -> str:
        if self._before_read is not None:
            self._before_read()
        line = self._source.readline()
        if isinstance(line, bytes):
            return line.decode(LINE_ENCODING, errors="replace")
        return line

    def run(self) -> None:
        lines = 0
        try:
            while True:
                line = self._read()
                if not line:
                    log_event("line_source_closed", lines=lines)
                    break
                lines += 1
                self._on_line(line)
        except Exception as e:
            report_diagnostic(f"Abort: unexpected {e}", self._diagnostics)
            log_event(
                "line_source_error",
                level=logging.ERROR,
                lines=lines,
                error_type=type(e).__name__,
                error=str(e),
            )
        finally:
            self._on_end()
