# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `CommandParser`, the entry point of argresolve: a command
registry and dispatcher that resolves raw tokens against declarative command
signatures and returns a structured `ParseOutcome`.

With a single registered command every token belongs to that command. With
several, the first token selects the command by exact, case-sensitive name and
the rest are resolved against it.

Key Features:
- Long (`--name`, `--name=value`) and short (`-n`) references
- Presence-only boolean flags
- Optional, repeatable and positional parameters
- Shared parameter groups embedded by reference
- Pluggable value readers keyed by type tag
- Aggregated diagnostics instead of first-error exceptions
- Help, usage and diagnostic rendering with Rich-based word wrapping

Public Interface:
- `parse(...)`: Resolve tokens into a `Success` or `Failure`.
- `parse_or_exit(...)`: Values, or print the failure and exit.
- `parse_or_raise(...)`: Values, or raise `ParseError`.
- `parse_result(...)`: `(values, None)` or `(None, message)`.
- `render_help()` / `print_help()`: Signature help text.

Example Usage:
    run = CommandSpec(
        "run",
        parameters=[
            ParameterSpec("foo", short="f"),
            ParameterSpec("my-num", type_tag="int", default=2),
            ParameterSpec("bool", is_flag=True),
        ],
    )
    parser = CommandParser(run, allow_positional=True)
    outcome = parser.parse(["hello", "3", "--bool"])
    # outcome.values == {'foo': 'hello', 'my_num': 3, 'bool': True}
"""
from __future__ import annotations

from typing import Any, Sequence

from argresolve.console import console
from argresolve.exceptions import SpecError
from argresolve.logger import logger
from argresolve.parser.adapters import exit_on_failure, raise_on_failure, to_result
from argresolve.parser.assembler import assemble
from argresolve.parser.command import CommandSpec
from argresolve.parser.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    Failure,
    ParseOutcome,
)
from argresolve.parser.formatter import HelpFormatter
from argresolve.parser.options import ParserConfig
from argresolve.parser.readers import ReaderRegistry
from argresolve.parser.resolver import Resolver
from argresolve.parser.tokens import tokenize


class CommandParser:
    """
    Resolves raw tokens against one or more command signatures.

    Args:
        commands (CommandSpec | Sequence[CommandSpec]): Registered commands, in the
            order they are listed in help and diagnostics.
        config (ParserConfig | None): Parser options. Keyword `options` override it.
        registry (ReaderRegistry | None): Value readers. Defaults to the built-ins.
        **options: Any `ParserConfig` field, e.g. `allow_positional=True`.

    Raises:
        SpecError: If no command is given, two commands share a name, or a
            parameter uses an unregistered type tag.
    """

    def __init__(
        self,
        commands: CommandSpec | Sequence[CommandSpec],
        config: ParserConfig | None = None,
        registry: ReaderRegistry | None = None,
        **options: Any,
    ) -> None:
        if isinstance(commands, CommandSpec):
            commands = [commands]
        self._commands: tuple[CommandSpec, ...] = tuple(commands)
        if not self._commands:
            raise SpecError("At least one command is required")
        self.config: ParserConfig = self._build_config(config, options)
        self.registry: ReaderRegistry = registry or ReaderRegistry()
        self.formatter = HelpFormatter(
            self.registry,
            total_width=self.config.total_width,
            docs_on_new_line=self.config.docs_on_new_line,
            print_help_on_exit=self.config.print_help_on_exit,
        )
        self._resolvers: dict[str, Resolver] = {}
        for command in self._commands:
            if not isinstance(command, CommandSpec):
                raise SpecError(f"Expected a CommandSpec, got {type(command).__name__}")
            if command.name in self._resolvers:
                raise SpecError(f"Command '{command.name}' is already registered")
            self._resolvers[command.name] = Resolver(
                command,
                self.registry,
                allow_positional=self.config.allow_positional,
                allow_repeats=self.config.allow_repeats,
            )

    @staticmethod
    def _build_config(
        config: ParserConfig | None, options: dict[str, Any]
    ) -> ParserConfig:
        if config is None:
            return ParserConfig(**options)
        if options:
            return ParserConfig(**{**config.model_dump(), **options})
        return config

    @property
    def commands(self) -> tuple[CommandSpec, ...]:
        return self._commands

    @property
    def command_names(self) -> list[str]:
        return [command.name for command in self._commands]

    def get_command(self, name: str) -> CommandSpec | None:
        """Return the registered command called `name`, if any."""
        resolver = self._resolvers.get(name)
        return resolver.command if resolver else None

    def _dispatch(self, args: list[str]) -> tuple[Resolver, list[str]] | Failure:
        if len(self._commands) == 1:
            return self._resolvers[self._commands[0].name], args
        names = tuple(self.command_names)
        if not args:
            return Failure(
                diagnostics=(Diagnostic(DiagnosticKind.MISSING_COMMAND, commands=names),)
            )
        selector, *rest = args
        resolver = self._resolvers.get(selector)
        if resolver is None:
            return Failure(
                diagnostics=(
                    Diagnostic(
                        DiagnosticKind.UNKNOWN_COMMAND, token=selector, commands=names
                    ),
                )
            )
        logger.debug("Dispatching to command '%s'", selector)
        return resolver, rest

    def parse(self, args: Sequence[str] | None = None) -> ParseOutcome:
        """
        Resolve `args` into a `ParseOutcome`.

        Args:
            args (Sequence[str] | None): Raw tokens, without the program name.

        Returns:
            ParseOutcome: `Success` with typed values, or `Failure` with every
                diagnostic found.
        """
        dispatched = self._dispatch(list(args or []))
        if isinstance(dispatched, Failure):
            return dispatched
        resolver, rest = dispatched
        binding = resolver.resolve(tokenize(rest))
        return assemble(binding)

    def parse_or_exit(self, args: Sequence[str] | None = None) -> dict[str, Any]:
        return exit_on_failure(self.parse(args), self.formatter, self._commands)

    def parse_or_raise(self, args: Sequence[str] | None = None) -> dict[str, Any]:
        return raise_on_failure(self.parse(args), self.formatter, self._commands)

    def parse_result(
        self, args: Sequence[str] | None = None
    ) -> tuple[dict[str, Any] | None, str | None]:
        return to_result(self.parse(args), self.formatter, self._commands)

    def render_help(self, command_name: str | None = None) -> str:
        """
        Return help text for one command, or for every registered command.

        Raises:
            SpecError: If `command_name` is not registered.
        """
        if command_name is None:
            return self.formatter.render_help(self._commands)
        command = self.get_command(command_name)
        if command is None:
            raise SpecError(f"Unknown command '{command_name}'")
        return self.formatter.render_signature(command)

    def print_help(self, command_name: str | None = None) -> None:
        console.print(
            self.render_help(command_name), markup=False, highlight=False, soft_wrap=True
        )

    def __str__(self) -> str:
        parameters = sum(len(command.flatten()) for command in self._commands)
        return (
            f"CommandParser(commands={len(self._commands)}, parameters={parameters}, "
            f"allow_positional={self.config.allow_positional}, "
            f"allow_repeats={self.config.allow_repeats})"
        )

    def __repr__(self) -> str:
        return str(self)
