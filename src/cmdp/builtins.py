"""Ready-made parser and runner hooks for common commands."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from typing import TextIO

from .models import ValidatedCommand


class _ParseNone:
    def parse(self, line: str) -> list[str]:
        return []

    def __repr__(self) -> str:
        return "parse_none()"


def parse_none() -> _ParseNone:
    """Parser for commands that take no arguments."""
    return _ParseNone()


class HelpRunner:
    """Placeholder runner for a help command.

    Validation replaces it with a ``TableHelp`` that is given the finished
    command table, so help can list every command including itself.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self.output = output

    def bind(self) -> "TableHelp":
        return TableHelp(self.output)

    def run(self, args: Sequence[str]) -> None:
        raise RuntimeError("help runner is only usable inside a validated command table")


def help_runner(output: TextIO | None = None) -> HelpRunner:
    """Runner that prints help for every command in the table it belongs to."""
    return HelpRunner(output)


class TableHelp:
    """Help runner attached to the final, validated command tuple."""

    def __init__(self, output: TextIO | None = None) -> None:
        self.output = output
        self.commands: tuple[ValidatedCommand, ...] = ()

    def attach(self, commands: Sequence[ValidatedCommand]) -> None:
        self.commands = tuple(commands)

    def __call__(self, args: Sequence[str]) -> None:
        stream = self.output if self.output is not None else sys.stdout
        print(render_help(self.commands), file=stream)


def _display_names(command: ValidatedCommand) -> str:
    if command.short_name:
        return f"{command.short_name}, {command.long_name}"
    return command.long_name


def render_help(commands: Iterable[ValidatedCommand]) -> str:
    """Render help text for commands in registration order."""
    lines = ["Help:"]
    for command in commands:
        usage = _display_names(command)
        if command.arg_description:
            usage = f"{usage} {command.arg_description}"
        lines.append(f"  {usage}")
        lines.append(f"      {command.help}")
    return "\n".join(lines)
