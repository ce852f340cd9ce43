# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by argresolve.

Resolution problems caused by the user's tokens (missing or unknown arguments,
bad values) are never raised by the engine; they are returned as `Diagnostic`
data inside a `Failure`. The exceptions below cover the remaining cases:
invalid definitions supplied by the developer, invalid configuration files,
and the opt-in raising adapter.

Exception Hierarchy:
- ArgResolveError
    ├── SpecError
    ├── ConfigError
    └── ParseError
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from argresolve.parser.diagnostics import Diagnostic, Failure


class ArgResolveError(Exception):
    """Base exception for argresolve."""


class SpecError(ArgResolveError):
    """Exception raised when a parameter, command or reader definition is invalid."""


class ConfigError(ArgResolveError):
    """Exception raised when a configuration file cannot be loaded or validated."""


class ParseError(ArgResolveError):
    """
    Raised by the raising adapter when token resolution fails.

    Carries the `Failure` outcome so callers can inspect the individual
    diagnostics instead of parsing the message.
    """

    def __init__(self, failure: Failure, message: str) -> None:
        super().__init__(message)
        self.failure = failure

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return self.failure.diagnostics
