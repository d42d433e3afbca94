"""Command-line normalization, lookup and the per-line pipeline."""

from __future__ import annotations

import logging
import os
import sys
import traceback
from typing import TextIO

from .constants import DEBUG_ENV_VAR, DIAGNOSTIC_PREFIX
from .errors import UnknownCommandError
from .logging import log_event, summarize_text
from .models import CommandTable, ValidatedCommand


def normalize_line(raw_line: str) -> tuple[str, str]:
    """Split a raw line into (lower-cased command name, argument text).

    Examples:
        "  Run   Away  \\n" → ("run", "Away")
        "help" → ("help", "")
        "" → ("", "")
    """
    parts = raw_line.strip().split(None, 1)
    if not parts:
        return "", ""
    command_name = parts[0].lower()
    remainder = parts[1].strip() if len(parts) > 1 else ""
    return command_name, remainder


def select_command(table: CommandTable, command_name: str) -> ValidatedCommand:
    """Resolve a normalized command name to its table entry.

    Raises:
        UnknownCommandError: If neither a short nor a long name matches
    """
    command = table.lookup(command_name)
    if command is None:
        raise UnknownCommandError(command_name, table.help_name())
    return command


def report_diagnostic(message: str, diagnostics: TextIO | None = None) -> None:
    """Write one diagnostic line to the error sink (stderr by default)."""
    stream = diagnostics if diagnostics is not None else sys.stderr
    print(message, file=stream, flush=True)


def _report_failure(
    stage: str,
    command_name: str,
    error: Exception,
    diagnostics: TextIO | None,
) -> None:
    report_diagnostic(f"{DIAGNOSTIC_PREFIX}{error}", diagnostics)
    if stage != "select" and os.getenv(DEBUG_ENV_VAR):
        report_diagnostic("Debug traceback:", diagnostics)
        report_diagnostic(
            "".join(traceback.format_exception(type(error), error, error.__traceback__)).rstrip(),
            diagnostics,
        )
    log_event(
        "command_error",
        level=logging.WARNING,
        stage=stage,
        command=command_name,
        error_type=type(error).__name__,
        error=str(error),
    )


def dispatch_line(
    table: CommandTable,
    raw_line: str,
    diagnostics: TextIO | None = None,
) -> bool:
    """Normalize, select, parse and run one input line.

    Each stage can fail independently; a failure is reported and the line
    is abandoned. Blank lines are ignored.

    Returns:
        True if the command's runner completed without raising
    """
    command_name, remainder = normalize_line(raw_line)
    if not command_name:
        return False

    try:
        command = select_command(table, command_name)
    except UnknownCommandError as e:
        _report_failure("select", command_name, e, diagnostics)
        return False

    try:
        args = command.parse(f"{command_name} {remainder}")
    except Exception as e:
        _report_failure("parse", command_name, e, diagnostics)
        return False

    log_event(
        "command_dispatch",
        level=logging.DEBUG,
        command=command.long_name,
        args=summarize_text(remainder),
    )

    try:
        command.run(args)
    except Exception as e:
        _report_failure("run", command_name, e, diagnostics)
        return False
    return True
