"""Custom exception hierarchy for cmdp."""

from __future__ import annotations

from collections.abc import Iterable


class CmdpError(Exception):
    """Base exception for command processor failures."""


class ConfigurationError(ValueError, CmdpError):
    """Command table problems detected before the processor starts.

    Every problem found across the whole table is kept in ``problems`` so
    a caller can fix them in one pass.
    """

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems = list(problems)
        super().__init__("\n".join(self.problems))


class UsageError(ValueError, CmdpError):
    """Command usage or user-input errors raised by parsers."""


class DispatchError(CmdpError):
    """A single input line could not be dispatched."""


class UnknownCommandError(LookupError, DispatchError):
    def __init__(self, command_name: str, help_name: str | None = None) -> None:
        self.command_name = command_name
        message = f"unknown command: '{command_name}'"
        if help_name:
            message += f" - try '{help_name}' for help"
        super().__init__(message)
