"""Concurrent console command processor."""

from .builtins import help_runner, parse_none, render_help
from .dispatcher import dispatch_line, normalize_line, select_command
from .errors import (
    CmdpError,
    ConfigurationError,
    DispatchError,
    UnknownCommandError,
    UsageError,
)
from .models import (
    CommandDefinition,
    CommandTable,
    LineSource,
    Parser,
    Runner,
    ValidatedCommand,
)
from .processor import CommandProcessor, start, start_with_source
from .shutdown import ShutdownSignal
from .validation import validate

__version__ = "0.1.0"

__all__ = [
    "CmdpError",
    "CommandDefinition",
    "CommandProcessor",
    "CommandTable",
    "ConfigurationError",
    "DispatchError",
    "LineSource",
    "Parser",
    "Runner",
    "ShutdownSignal",
    "UnknownCommandError",
    "UsageError",
    "ValidatedCommand",
    "dispatch_line",
    "help_runner",
    "normalize_line",
    "parse_none",
    "render_help",
    "select_command",
    "start",
    "start_with_source",
    "validate",
]
