"""
argresolve

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .config import load_config
from .exceptions import ArgResolveError, ConfigError, ParseError, SpecError
from .logger import logger, setup_logging
from .parser import (
    Arity,
    CommandParser,
    CommandSpec,
    Failure,
    ParameterSpec,
    ParserConfig,
    ReaderRegistry,
    Success,
    TypeReader,
)

__all__ = [
    "ArgResolveError",
    "Arity",
    "CommandParser",
    "CommandSpec",
    "ConfigError",
    "Failure",
    "ParameterSpec",
    "ParseError",
    "ParserConfig",
    "ReaderRegistry",
    "SpecError",
    "Success",
    "TypeReader",
    "load_config",
    "logger",
    "setup_logging",
]
