# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Matches classified tokens to the parameters of one command.

The `Resolver` makes a single left-to-right pass over the tokens and fills a
`RawBinding`: the raw string tokens collected for every parameter, plus the
structural diagnostics found on the way (unknown references, duplicates,
references without a value, missing required parameters). It never converts
values and never stops at the first problem; conversion is the job of
`argresolve.parser.assembler`.

Matching rules:
- A reference (`--name`, `-x`) selects a parameter by exact spelling. Flags take
  the value "true" (or their inline `=value`); other parameters take their
  inline value or the next bare token.
- A bare token not consumed by a reference binds to the first parameter, in
  declaration order, that may take positional values and is not yet bound.
- A second value for a non-repeatable parameter is a duplicate, unless repeats
  are allowed, in which case the last value wins.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from argresolve.logger import logger
from argresolve.parser.arity import Arity
from argresolve.parser.command import CommandSpec
from argresolve.parser.diagnostics import Diagnostic, DiagnosticKind
from argresolve.parser.parameter import ParameterSpec
from argresolve.parser.readers import ReaderRegistry, TypeReader
from argresolve.parser.tokens import Token, TokenKind

FLAG_PRESENT = "true"


@dataclass
class ParameterState:
    """Raw tokens collected for one parameter during a single parse."""

    spec: ParameterSpec
    reader: TypeReader
    tokens: list[str] = field(default_factory=list)
    occurrences: int = 0
    duplicate: bool = False
    missing_value: bool = False
    missing: bool = False

    @property
    def repeatable(self) -> bool:
        return self.spec.arity == Arity.REPEATABLE or self.reader.always_repeatable

    @property
    def fully_bound(self) -> bool:
        return self.occurrences > 0 and not self.repeatable

    @property
    def bindable(self) -> bool:
        """False when a structural problem already rules out conversion."""
        return not (self.duplicate or self.missing_value or self.missing)


@dataclass
class RawBinding:
    """Per-parse binding of raw tokens to parameters, in declaration order."""

    command: CommandSpec
    states: dict[str, ParameterState]
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def tokens_for(self, dest: str) -> list[str]:
        return self.states[dest].tokens


class Resolver:
    """
    Binds classified tokens to the flattened parameters of `command`.

    Args:
        command (CommandSpec): The command whose parameters are matched.
        registry (ReaderRegistry): Source of each parameter's reader.
        allow_positional (bool): Let bare tokens bind to any non-flag parameter.
        allow_repeats (bool): Last value wins instead of reporting duplicates.
    """

    def __init__(
        self,
        command: CommandSpec,
        registry: ReaderRegistry,
        allow_positional: bool = False,
        allow_repeats: bool = False,
    ) -> None:
        self.command = command
        self.allow_positional = allow_positional
        self.allow_repeats = allow_repeats
        self.parameters: tuple[ParameterSpec, ...] = command.flatten()
        self.readers: dict[str, TypeReader] = {
            parameter.dest: registry.get(parameter.type_tag)
            for parameter in self.parameters
        }
        self._flag_map: dict[str, ParameterSpec] = {
            flag: parameter
            for parameter in self.parameters
            for flag in parameter.flags
        }

    def resolve(self, tokens: list[Token]) -> RawBinding:
        """
        Bind `tokens` to parameters.

        Returns:
            RawBinding: Collected raw tokens and structural diagnostics, in token
                order, followed by missing-argument diagnostics in declaration order.
        """
        binding = RawBinding(
            command=self.command,
            states={
                parameter.dest: ParameterState(parameter, self.readers[parameter.dest])
                for parameter in self.parameters
            },
        )
        i = 0
        while i < len(tokens):
            i = self._handle_token(tokens, i, binding)
        self._check_missing(binding)
        logger.debug(
            "[%s] Resolved %d token(s) with %d structural issue(s)",
            self.command.name,
            len(tokens),
            len(binding.diagnostics),
        )
        return binding

    def _handle_token(self, tokens: list[Token], i: int, binding: RawBinding) -> int:
        token = tokens[i]
        if token.kind is TokenKind.VALUE:
            state = self._next_positional(binding)
            if state is None:
                binding.diagnostics.append(
                    Diagnostic(DiagnosticKind.UNKNOWN_ARGUMENT, token=token.text)
                )
            else:
                self._bind(state, token.text, binding)
            return i + 1

        spec = self._flag_map.get(token.flag)
        if spec is None:
            binding.diagnostics.append(
                Diagnostic(DiagnosticKind.UNKNOWN_ARGUMENT, token=token.text)
            )
            return i + 1

        state = binding.states[spec.dest]
        if spec.is_flag:
            value = FLAG_PRESENT if token.inline_value is None else token.inline_value
            self._bind(state, value, binding, source=token.text)
            return i + 1
        if token.inline_value is not None:
            self._bind(state, token.inline_value, binding)
            return i + 1
        if i + 1 < len(tokens) and tokens[i + 1].kind is TokenKind.VALUE:
            self._bind(state, tokens[i + 1].text, binding)
            return i + 2

        state.missing_value = True
        binding.diagnostics.append(
            Diagnostic(DiagnosticKind.MISSING_VALUE, parameter=spec, token=token.text)
        )
        return i + 1

    def _next_positional(self, binding: RawBinding) -> ParameterState | None:
        for state in binding.states.values():
            spec = state.spec
            if spec.is_flag or state.fully_bound:
                continue
            if self.allow_positional or spec.positional:
                return state
        return None

    def _bind(
        self,
        state: ParameterState,
        value: str,
        binding: RawBinding,
        source: str | None = None,
    ) -> None:
        """Bind `value`; `source` is the token named if the binding is a duplicate."""
        if state.fully_bound:
            if self.allow_repeats:
                logger.debug(
                    "[%s] '%s' supplied again, keeping last value %r",
                    self.command.name,
                    state.spec.name,
                    value,
                )
                state.tokens = [value]
            else:
                state.duplicate = True
                binding.diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.DUPLICATE_ARGUMENT,
                        parameter=state.spec,
                        token=source or value,
                    )
                )
        else:
            state.tokens.append(value)
        state.occurrences += 1

    def _check_missing(self, binding: RawBinding) -> None:
        for state in binding.states.values():
            spec = state.spec
            if state.occurrences or state.missing_value:
                continue
            if spec.has_default or spec.arity != Arity.SINGLE:
                continue
            if state.reader.allow_empty:
                continue
            state.missing = True
            binding.diagnostics.append(
                Diagnostic(DiagnosticKind.MISSING_ARGUMENT, parameter=spec)
            )
