"""Dispatch loop and the public start functions.

A running processor owns two daemon threads: the line reader and the
dispatch loop. They share one inbox queue that also receives shutdown
requests, so the loop waits on a single ``get()`` for whichever event
comes first. At most one line is ever pending: the reader waits for the
loop to take it before reading the next. A shutdown request wins over a
pending line. Commands run synchronously on the dispatch thread, one
line at a time in arrival order.
"""

from __future__ import annotations

import enum
import logging
import queue
import sys
import threading
import time
from collections.abc import Sequence
from typing import Any, TextIO

from .constants import DISPATCH_THREAD_NAME
from .dispatcher import dispatch_line
from .logging import log_event
from .models import CommandDefinition, CommandTable, LineSource
from .reader import LineReader
from .shutdown import ShutdownSignal
from .validation import validate


class _Kind(enum.Enum):
    LINE = "line"
    END = "end"
    SHUTDOWN = "shutdown"


class CommandProcessor:
    """Runs the dispatch loop for one validated table and one line source.

    Use ``start``/``start_with_source`` rather than constructing this
    directly; a processor can be started only once.
    """

    def __init__(
        self,
        table: CommandTable,
        line_source: LineSource,
        diagnostics: TextIO | None = None,
    ) -> None:
        self.table = table
        self._diagnostics = diagnostics
        self._inbox: queue.Queue[tuple[_Kind, Any]] = queue.Queue()
        # Taken by the reader before each read, given back when the loop
        # takes the line, so the source is never read ahead.
        self._line_slot = threading.Semaphore(1)
        self._stop_requested = threading.Event()
        self.signal = ShutdownSignal(self._post_shutdown)
        self._reader = LineReader(
            line_source,
            on_line=self._post_line,
            on_end=self._post_end,
            before_read=self._line_slot.acquire,
            diagnostics=diagnostics,
        )
        self._thread = threading.Thread(
            target=self.run, name=DISPATCH_THREAD_NAME, daemon=True
        )
        self._source_name = type(line_source).__name__
        self.lines_processed = 0

    def _post_line(self, line: str) -> None:
        self._inbox.put((_Kind.LINE, line))

    def _post_end(self) -> None:
        self._inbox.put((_Kind.END, None))

    def _post_shutdown(self, value: bool) -> None:
        if value:
            self._stop_requested.set()
        self._inbox.put((_Kind.SHUTDOWN, value))

    def start(self) -> ShutdownSignal:
        self._thread.start()
        self._reader.start()
        return self.signal

    def _next_reason(self) -> str | None:
        """Handle one inbox event; return a stop reason to leave the loop."""
        if self._stop_requested.is_set():
            return "shutdown_requested"
        kind, payload = self._inbox.get()
        if self._stop_requested.is_set():
            return "shutdown_requested"
        if kind is _Kind.LINE:
            self._line_slot.release()
            self.lines_processed += 1
            dispatch_line(self.table, payload, self._diagnostics)
            return None
        if kind is _Kind.END:
            return "source_closed"
        return None

    def run(self) -> None:
        started = time.perf_counter()
        reason = "error"
        log_event(
            "processor_start",
            commands=len(self.table),
            source=self._source_name,
        )
        try:
            while True:
                stop_reason = self._next_reason()
                if stop_reason is not None:
                    reason = stop_reason
                    break
        finally:
            self.signal.close()
            log_event(
                "processor_stop",
                level=logging.INFO if reason != "error" else logging.ERROR,
                reason=reason,
                lines=self.lines_processed,
                uptime_ms=round((time.perf_counter() - started) * 1000, 1),
            )


def start_with_source(
    definitions: Sequence[CommandDefinition],
    line_source: LineSource,
    *,
    diagnostics: TextIO | None = None,
) -> ShutdownSignal:
    """Validate ``definitions`` and start processing lines from ``line_source``.

    Returns immediately. Send ``True`` on the returned handle to request
    shutdown, then ``wait()`` for it to close.

    Raises:
        ConfigurationError: If the table is empty or any definition is malformed
    """
    table = validate(definitions)
    return CommandProcessor(table, line_source, diagnostics).start()


def start(
    definitions: Sequence[CommandDefinition],
    *,
    diagnostics: TextIO | None = None,
) -> ShutdownSignal:
    """Start a command processor reading from standard input."""
    return start_with_source(definitions, sys.stdin, diagnostics=diagnostics)
