"""Typed command model shared across cmdp layers."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

ParseFn = Callable[[str], Sequence[str]]
RunFn = Callable[[Sequence[str]], Any]


class Parser(Protocol):
    """Splits a normalized command line into runner arguments.

    Raise any exception to reject the line; the message is shown to the user.
    """

    def parse(self, line: str) -> Sequence[str]: ...


class Runner(Protocol):
    """Executes a command with the arguments produced by its parser."""

    def run(self, args: Sequence[str]) -> Any: ...


class LineSource(Protocol):
    """Blocking, newline-delimited input such as ``sys.stdin``.

    ``readline()`` returns ``""`` (or ``b""``) once the source is exhausted.
    """

    def readline(self) -> str | bytes: ...


@dataclass(frozen=True)
class CommandDefinition:
    """One recognized command, as supplied by the caller.

    ``parser`` and ``runner`` may be plain callables or objects exposing
    ``parse``/``run``. Missing values are reported by validation, not here.
    """

    short_name: str = ""
    long_name: str = ""
    arg_description: str = ""
    help: str = ""
    parser: Parser | ParseFn | None = None
    runner: Runner | RunFn | None = None


@dataclass(frozen=True)
class ValidatedCommand:
    definition: CommandDefinition
    short_folded: str
    long_folded: str
    parse: ParseFn = field(repr=False)
    run: RunFn = field(repr=False)
    is_help: bool = False

    @property
    def short_name(self) -> str:
        return self.definition.short_name

    @property
    def long_name(self) -> str:
        return self.definition.long_name

    @property
    def arg_description(self) -> str:
        return self.definition.arg_description

    @property
    def help(self) -> str:
        return self.definition.help

    @property
    def folded_names(self) -> tuple[str, ...]:
        if self.short_folded:
            return (self.short_folded, self.long_folded)
        return (self.long_folded,)

    def matches(self, command_name: str) -> bool:
        return command_name in self.folded_names


class CommandTable:
    """Read-only, ordered command table with a folded-name index.

    Iteration follows registration order. When two entries share a folded
    name, the first one registered wins lookups.
    """

    def __init__(self, commands: Sequence[ValidatedCommand]) -> None:
        self._commands = tuple(commands)
        index: dict[str, ValidatedCommand] = {}
        for command in self._commands:
            for name in command.folded_names:
                index.setdefault(name, command)
        self._index = index

    @property
    def commands(self) -> tuple[ValidatedCommand, ...]:
        return self._commands

    def lookup(self, command_name: str) -> ValidatedCommand | None:
        return self._index.get(command_name)

    def help_name(self) -> str | None:
        """Return the shortest name of the built-in help command, if registered."""
        for command in self._commands:
            if command.is_help:
                return command.short_name or command.long_name
        return None

    def __iter__(self) -> Iterator[ValidatedCommand]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        names = ", ".join(command.long_name for command in self._commands)
        return f"CommandTable([{names}])"
