# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Surfacing strategies for a `ParseOutcome`.

All three adapters are projections of an outcome that was already computed;
none of them resolves tokens again:

- exit_on_failure: return the values, or print the failure and exit.
- raise_on_failure: return the values, or raise `ParseError`.
- to_result: return `(values, None)` or `(None, message)`.
"""
from __future__ import annotations

import sys
from typing import Any, Sequence

from rich.console import Console

from argresolve.console import error_console
from argresolve.exceptions import ParseError
from argresolve.logger import logger
from argresolve.parser.command import CommandSpec
from argresolve.parser.diagnostics import Failure, ParseOutcome, Success
from argresolve.parser.formatter import HelpFormatter

EXIT_CODE_USAGE = 2


def exit_on_failure(
    outcome: ParseOutcome,
    formatter: HelpFormatter,
    commands: Sequence[CommandSpec] = (),
    exit_code: int = EXIT_CODE_USAGE,
    output: Console | None = None,
) -> dict[str, Any]:
    """
    Return the parsed values, or print the rendered failure and exit.

    Raises:
        SystemExit: With `exit_code` when the outcome is a `Failure`.
    """
    if isinstance(outcome, Success):
        return outcome.values
    message = formatter.render_failure(outcome, commands)
    (output or error_console).print(
        message, markup=False, highlight=False, soft_wrap=True
    )
    logger.debug(
        "Exiting with status %d after %d diagnostic(s)",
        exit_code,
        len(outcome.diagnostics),
    )
    sys.exit(exit_code)


def raise_on_failure(
    outcome: ParseOutcome,
    formatter: HelpFormatter,
    commands: Sequence[CommandSpec] = (),
) -> dict[str, Any]:
    """
    Return the parsed values, or raise `ParseError` carrying the failure.

    Raises:
        ParseError: When the outcome is a `Failure`.
    """
    if isinstance(outcome, Success):
        return outcome.values
    raise ParseError(outcome, formatter.render_failure(outcome, commands))


def to_result(
    outcome: ParseOutcome,
    formatter: HelpFormatter,
    commands: Sequence[CommandSpec] = (),
) -> tuple[dict[str, Any] | None, str | None]:
    """Return `(values, None)` on success or `(None, message)` on failure."""
    if isinstance(outcome, Failure):
        return None, formatter.render_failure(outcome, commands)
    return outcome.values, None
