"""Demo console: a small command table served from standard input."""

from __future__ import annotations

import argparse
import logging
import threading
import time
from collections.abc import Sequence

from . import __version__
from .builtins import help_runner, parse_none
from .errors import CmdpError, UsageError
from .logging import build_run_log_path, log_event, setup_logging
from .models import CommandDefinition
from .processor import start

_POLL_INTERVAL_SEC = 0.1
_BANNER_LINES = (
    f"cmdp {__version__} - console command processor",
    "Type 'help' for commands. Type 'quit' or end input (Ctrl-D) to leave.",
)


def _parse_echo(line: str) -> list[str]:
    _, _, text = line.partition(" ")
    if not text.strip():
        raise UsageError("Usage: echo <text>")
    return [text]


def _run_echo(args: Sequence[str]) -> None:
    print(" ".join(args))


def build_commands(quit_requested: threading.Event) -> list[CommandDefinition]:
    """Return the demo command table; ``quit`` sets ``quit_requested``."""
    return [
        CommandDefinition(
            short_name="h",
            long_name="help",
            help="Show available commands",
            parser=parse_none(),
            runner=help_runner(),
        ),
        CommandDefinition(
            short_name="e",
            long_name="echo",
            arg_description="<text>",
            help="Print <text> back",
            parser=_parse_echo,
            runner=_run_echo,
        ),
        CommandDefinition(
            short_name="q",
            long_name="quit",
            help="Stop the console",
            parser=parse_none(),
            runner=lambda args: quit_requested.set(),
        ),
    ]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cmdp",
        description="Run a demo console on standard input.",
    )
    log_group = parser.add_mutually_exclusive_group()
    log_group.add_argument("-l", "--log", help="Path to log file (optional)")
    log_group.add_argument(
        "--logs-dir",
        help="Directory for a timestamped run log (optional)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the cmdp demo console."""
    args = _build_parser().parse_args(argv)
    app_started = time.perf_counter()

    log_path = args.log
    if log_path is None and args.logs_dir:
        log_path = build_run_log_path(args.logs_dir)
    setup_logging(log_path)

    quit_requested = threading.Event()
    try:
        signal = start(build_commands(quit_requested))
    except CmdpError as e:
        print(f"Error: {e}")
        return 1

    log_event("app_start", log_file=log_path)
    for line in _BANNER_LINES:
        print(line)

    try:
        while not signal.wait(_POLL_INTERVAL_SEC):
            if quit_requested.is_set():
                signal.request_shutdown()
    except KeyboardInterrupt:
        signal.request_shutdown()
        log_event("app_stop", level=logging.INFO, reason="interrupted")
        return 130

    log_event(
        "app_stop",
        level=logging.INFO,
        reason="quit" if quit_requested.is_set() else "end_of_input",
        uptime_ms=round((time.perf_counter() - app_started) * 1000, 1),
    )
    return 0
