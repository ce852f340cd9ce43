"""
argresolve

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .arity import Arity
from .command import CommandSpec
from .command_parser import CommandParser
from .diagnostics import Diagnostic, DiagnosticKind, Failure, ParseOutcome, Success
from .formatter import HelpFormatter
from .options import ParserConfig
from .parameter import NO_DEFAULT, ParameterSpec
from .readers import (
    ReaderRegistry,
    TypeReader,
    choice_reader,
    enum_reader,
    scalar_reader,
    sequence_reader,
)

__all__ = [
    "Arity",
    "CommandParser",
    "CommandSpec",
    "Diagnostic",
    "DiagnosticKind",
    "Failure",
    "HelpFormatter",
    "NO_DEFAULT",
    "ParameterSpec",
    "ParseOutcome",
    "ParserConfig",
    "ReaderRegistry",
    "Success",
    "TypeReader",
    "choice_reader",
    "enum_reader",
    "scalar_reader",
    "sequence_reader",
]
