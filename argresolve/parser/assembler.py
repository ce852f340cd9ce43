# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Turns a `RawBinding` into a `ParseOutcome`.

Each structurally sound parameter's raw tokens go through its reader. Every
conversion failure is collected, never short-circuited, and appended after the
resolver's structural diagnostics. Only a pass with no diagnostics at all
produces a `Success`.
"""
from __future__ import annotations

import copy
from typing import Any

from argresolve.logger import logger
from argresolve.parser.arity import Arity
from argresolve.parser.diagnostics import (
    Diagnostic,
    DiagnosticKind,
    Failure,
    ParseOutcome,
    Success,
)
from argresolve.parser.parameter import ParameterSpec
from argresolve.parser.resolver import ParameterState, RawBinding


def default_value(spec: ParameterSpec) -> Any:
    """
    Return a fresh copy of the declared default.

    Defaults that cannot be deep-copied, such as open streams, are returned as is.
    """
    try:
        return copy.deepcopy(spec.default)
    except (copy.Error, TypeError):
        return spec.default


def convert_state(state: ParameterState) -> Any:
    """
    Convert the raw tokens of one parameter.

    Raises:
        ValueError | TypeError: If the reader rejects the tokens.
    """
    spec = state.spec
    reader = state.reader
    if not state.tokens:
        if spec.has_default:
            return copy.deepcopy(spec.default)
        if reader.allow_empty:
            return reader.read([])
        if spec.arity == Arity.REPEATABLE:
            return []
        return None
    if reader.always_repeatable:
        return reader.read(state.tokens)
    if spec.arity == Arity.REPEATABLE:
        return [reader.read([token]) for token in state.tokens]
    return reader.read(state.tokens[-1:])


def assemble(binding: RawBinding) -> ParseOutcome:
    """
    Convert every bound parameter and aggregate all diagnostics.

    Returns:
        ParseOutcome: `Success` mapping each result key to its value, or `Failure`
            with structural diagnostics followed by conversion errors in
            declaration order.
    """
    diagnostics: list[Diagnostic] = list(binding.diagnostics)
    values: dict[str, Any] = {}
    for dest, state in binding.states.items():
        if not state.bindable:
            continue
        if not state.tokens and state.spec.has_default:
            values[dest] = default_value(state.spec)
            continue
        try:
            values[dest] = convert_state(state)
        except (ValueError, TypeError) as error:
            logger.debug(
                "[%s] Reader rejected %r for '%s': %s",
                binding.command.name,
                state.tokens,
                state.spec.name,
                error,
            )
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.CONVERSION_ERROR,
                    parameter=state.spec,
                    tokens=tuple(state.tokens),
                    message=str(error),
                )
            )

    if diagnostics:
        return Failure(diagnostics=tuple(diagnostics), command=binding.command)
    return Success(command=binding.command, values=values)
