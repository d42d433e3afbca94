"""Command table validation.

Validation runs once, before any thread is started. Every problem across
the whole table is collected so the caller sees a complete report rather
than fixing entries one at a time.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Sequence
from typing import Any

from .builtins import HelpRunner, TableHelp
from .errors import ConfigurationError
from .logging import log_event
from .models import CommandDefinition, CommandTable, ValidatedCommand

EMPTY_TABLE_MESSAGE = "commands not defined"


def _resolve_hook(hook: Any, method_name: str) -> Callable[..., Any] | None:
    """Return the callable behind a parser/runner, or None when there is none."""
    if hook is None:
        return None
    method = getattr(hook, method_name, None)
    if callable(method):
        return method
    if callable(hook):
        return hook
    return None


def _has_whitespace(name: str) -> bool:
    return any(ch.isspace() for ch in name)


def check_definition(definition: CommandDefinition, fallback_ref: str) -> list[str]:
    """Return problems found in a single definition.

    ``fallback_ref`` identifies the definition when it has no long name.
    """
    problems: list[str] = []
    ref = definition.long_name

    if not definition.long_name:
        ref = fallback_ref
        problems.append(f"Please specify a long command name for: {ref}")
    elif len(definition.short_name) > len(definition.long_name):
        problems.append(
            "Please specify a short name whose length doesn't exceed "
            f"its corresponding long one for: {ref}"
        )
    if _has_whitespace(definition.short_name) or _has_whitespace(definition.long_name):
        problems.append(f"Please specify command names without whitespace for: {ref}")
    if _resolve_hook(definition.parser, "parse") is None:
        problems.append(f"Please specify a Parse function for command: {ref}")
    if _resolve_hook(definition.runner, "run") is None:
        problems.append(f"Please specify a Run function for command: {ref}")
    if not definition.help or not definition.help.strip():
        problems.append(f"Please specify a Help text for command: {ref}")
    return problems


def _check_duplicates(commands: Sequence[ValidatedCommand]) -> list[str]:
    problems: list[str] = []
    owners: dict[str, str] = {}
    for command in commands:
        for name in dict.fromkeys(command.folded_names):
            owner = owners.get(name)
            if owner is not None:
                problems.append(
                    f"Command name '{name}' of: {command.long_name} "
                    f"is already used by: {owner}"
                )
                continue
            owners[name] = command.long_name
    return problems


def _fold(definition: CommandDefinition) -> ValidatedCommand:
    return ValidatedCommand(
        definition=definition,
        short_folded=definition.short_name.lower(),
        long_folded=definition.long_name.lower(),
        parse=_resolve_hook(definition.parser, "parse"),
        run=_resolve_hook(definition.runner, "run"),
        is_help=isinstance(definition.runner, HelpRunner),
    )


def _bind_help(commands: Sequence[ValidatedCommand]) -> tuple[ValidatedCommand, ...]:
    """Give each help command a runner that lists the finished table."""
    helpers: list[TableHelp] = []
    bound: list[ValidatedCommand] = []
    for command in commands:
        if command.is_help:
            helper = command.definition.runner.bind()
            helpers.append(helper)
            command = dataclasses.replace(command, run=helper)
        bound.append(command)
    final = tuple(bound)
    for helper in helpers:
        helper.attach(final)
    return final


def validate(definitions: Sequence[CommandDefinition] | None) -> CommandTable:
    """Validate command definitions and build the lookup-ready table.

    Raises:
        ConfigurationError: With every problem found across all definitions
    """
    if not definitions:
        log_event("command_table_invalid", level=logging.WARNING, problems=1)
        raise ConfigurationError([EMPTY_TABLE_MESSAGE])

    problems: list[str] = []
    validated: list[ValidatedCommand] = []
    for index, definition in enumerate(definitions):
        definition_problems = check_definition(definition, str(index))
        if definition_problems:
            problems.extend(definition_problems)
            continue
        validated.append(_fold(definition))

    problems.extend(_check_duplicates(validated))
    if problems:
        log_event("command_table_invalid", level=logging.WARNING, problems=len(problems))
        raise ConfigurationError(problems)

    table = CommandTable(_bind_help(validated))
    log_event(
        "command_table_validated",
        commands=len(table),
        names=[command.long_name for command in table],
    )
    return table
