# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Structured parse results.

Every parse returns a `ParseOutcome`: either `Success`, mapping each parameter's
result key to its typed value, or `Failure`, holding every `Diagnostic` found
in the attempt. Diagnostics are plain data; the engine never raises them, which
lets one pass report several problems at once and lets callers choose how to
surface them (see `argresolve.parser.adapters`).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from argresolve.parser.command import CommandSpec
from argresolve.parser.parameter import ParameterSpec


class DiagnosticKind(Enum):
    """The closed set of resolution failures."""

    MISSING_ARGUMENT = "missing_argument"
    MISSING_VALUE = "missing_value"
    UNKNOWN_ARGUMENT = "unknown_argument"
    DUPLICATE_ARGUMENT = "duplicate_argument"
    CONVERSION_ERROR = "conversion_error"
    MISSING_COMMAND = "missing_command"
    UNKNOWN_COMMAND = "unknown_command"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """
    One resolution failure.

    Attributes:
        kind (DiagnosticKind): What went wrong.
        parameter (ParameterSpec | None): The parameter concerned, if any.
        token (str | None): The raw token concerned, if any.
        tokens (tuple[str, ...]): Raw tokens rejected by a reader.
        message (str): The reader's own message for conversion errors.
        commands (tuple[str, ...]): Available command names for dispatch failures.
    """

    kind: DiagnosticKind
    parameter: ParameterSpec | None = None
    token: str | None = None
    tokens: tuple[str, ...] = ()
    message: str = ""
    commands: tuple[str, ...] = ()


@dataclass(frozen=True)
class Success:
    """Successful resolution of `command` into `values`, keyed by result key."""

    command: CommandSpec
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return True

    def __getitem__(self, dest: str) -> Any:
        return self.values[dest]


@dataclass(frozen=True)
class Failure:
    """
    Failed resolution.

    `command` is the command whose tokens failed to resolve, or None when the
    command itself could not be selected.
    """

    diagnostics: tuple[Diagnostic, ...]
    command: CommandSpec | None = None

    @property
    def ok(self) -> bool:
        return False

    def kinds(self) -> list[DiagnosticKind]:
        return [diagnostic.kind for diagnostic in self.diagnostics]


ParseOutcome = Union[Success, Failure]
