# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `ParameterSpec` dataclass, the immutable description of a single
command-line parameter.

A `ParameterSpec` is built once, usually by whatever layer extracts metadata
from a function signature or a configuration file, and is then shared
read-only by every parse.

Key Attributes:
- `name`: Long name, referenced as `--name` (one-letter names as `-n`)
- `short`: Optional single-character alias, referenced as `-s`
- `type_tag`: Key of the `TypeReader` that converts the raw tokens
- `arity`: `Arity.SINGLE`, `Arity.OPTIONAL` or `Arity.REPEATABLE`
- `is_flag`: Presence-only boolean; never reads a following value
- `default`: Value used when the parameter is not supplied
- `dest`: Key of the parameter in the parsed result mapping
- `positional`: Accept bare values even when positional fallback is off
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from argresolve.exceptions import SpecError
from argresolve.parser.arity import Arity

FLAG_TYPE_TAG = "flag"
DEFAULT_TYPE_TAG = "str"

_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class _NoDefault:
    """Sentinel type marking a parameter without a default value."""

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class ParameterSpec:
    """
    Represents one parameter of a command.

    Attributes:
        name (str): Long name without leading dashes (e.g. "my-num").
        type_tag (str | None): Registered reader key. Defaults to "str", or "flag"
            for flags.
        short (str | None): Single-character alias without the leading dash.
        doc (str): Documentation shown in help output.
        arity (Arity | str): How many values the parameter accepts.
        is_flag (bool): True for a presence-only boolean parameter.
        default (Any): Default value. Leave unset for a required parameter.
        dest (str | None): Result key. Derived from `name` when omitted.
        positional (bool): True if bare values may bind to this parameter even
            when the parser does not allow positional arguments.
    """

    name: str
    type_tag: str | None = None
    short: str | None = None
    doc: str = ""
    arity: Arity = Arity.SINGLE
    is_flag: bool = False
    default: Any = NO_DEFAULT
    dest: str | None = None
    positional: bool = False

    def __post_init__(self) -> None:
        self._validate_name()
        self._validate_short()
        object.__setattr__(self, "arity", self._validate_arity(self.arity))
        if self.is_flag:
            self._validate_flag()
            object.__setattr__(self, "type_tag", FLAG_TYPE_TAG)
            object.__setattr__(self, "default", False)
        elif self.type_tag is None:
            object.__setattr__(self, "type_tag", DEFAULT_TYPE_TAG)
        elif not isinstance(self.type_tag, str) or not self.type_tag:
            raise SpecError(f"type_tag for '{self.name}' must be a non-empty string")
        object.__setattr__(self, "dest", self._get_dest())

    def _validate_name(self) -> None:
        if not isinstance(self.name, str) or not _NAME_PATTERN.match(self.name):
            raise SpecError(
                f"Invalid parameter name {self.name!r}: use letters, digits, '-' and '_' "
                "without leading dashes"
            )

    def _validate_short(self) -> None:
        if self.short is None:
            return
        if not isinstance(self.short, str) or len(self.short) != 1:
            raise SpecError(
                f"Short name for '{self.name}' must be a single character, got {self.short!r}"
            )
        if self.short.isdigit() or self.short == "-":
            raise SpecError(
                f"Short name for '{self.name}' cannot be a digit or '-', got {self.short!r}"
            )

    def _validate_arity(self, arity: Arity | str) -> Arity:
        if isinstance(arity, Arity):
            return arity
        try:
            return Arity(arity)
        except ValueError as error:
            raise SpecError(f"Invalid arity for '{self.name}': {error}") from error

    def _validate_flag(self) -> None:
        if self.arity != Arity.SINGLE:
            raise SpecError(f"Flag '{self.name}' must have arity {Arity.SINGLE}")
        if self.type_tag not in (None, FLAG_TYPE_TAG):
            raise SpecError(
                f"Flag '{self.name}' cannot use type_tag {self.type_tag!r}"
            )
        if self.default is not NO_DEFAULT and self.default is not False:
            raise SpecError(
                f"Default value cannot be set for flag '{self.name}'. It is always False."
            )
        if self.positional:
            raise SpecError(f"Flag '{self.name}' cannot be positional")

    def _get_dest(self) -> str:
        dest = self.dest or self.name.replace("-", "_")
        if not dest.isidentifier():
            raise SpecError(
                f"dest {dest!r} for '{self.name}' must be a valid identifier "
                "(letters, digits, and underscores only)"
            )
        return dest

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT

    @property
    def short_name(self) -> str | None:
        """The single-character alias, including one-letter long names."""
        if self.short:
            return self.short
        if len(self.name) == 1 and not self.name.isdigit():
            return self.name
        return None

    @property
    def flags(self) -> tuple[str, ...]:
        """Every reference spelling that selects this parameter."""
        flags = [f"--{self.name}"]
        if self.short_name:
            flags.insert(0, f"-{self.short_name}")
        return tuple(flags)

    @property
    def display_flags(self) -> tuple[str, ...]:
        """Reference spellings shown in help, one-letter names only as `-n`."""
        if len(self.name) == 1 and self.short_name == self.name:
            return (f"-{self.name}",)
        return self.flags
