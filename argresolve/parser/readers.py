# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value readers: the conversion contract between raw string tokens and typed values.

A `TypeReader` converts the ordered list of raw tokens collected for one
parameter into a Python value. Readers signal rejection by raising `ValueError`
(or `TypeError`) with a human-readable message; the result assembler turns that
into a `CONVERSION_ERROR` diagnostic instead of letting it escape.

The `ReaderRegistry` maps a type tag (the `type_tag` of a `ParameterSpec`) to a
reader. It ships with readers for the common scalar types and accepts custom
ones through `register()`:

    registry = ReaderRegistry()
    registry.register("port", scalar_reader("port", int))

Functions:
- coerce_bool: Strict string-to-boolean conversion.
- coerce_enum: Convert a string to an Enum member by name or value.
- coerce_datetime: Parse a datetime with `dateutil`.
- scalar_reader: Build a reader from a one-argument conversion callable.
- sequence_reader: Build an always-repeatable list reader from a scalar reader.
- choice_reader: Build a reader restricted to a fixed set of strings.
- enum_reader: Build a reader for an Enum type.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, EnumMeta
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping, Sequence

from dateutil import parser as date_parser

from argresolve.exceptions import SpecError
from argresolve.logger import logger
from argresolve.parser.parameter import FLAG_TYPE_TAG


@dataclass(frozen=True)
class TypeReader:
    """
    Conversion contract for one semantic type.

    Attributes:
        short_label (str): Placeholder shown in help, rendered as `<short_label>`.
        convert (Callable[[Sequence[str]], Any]): Converts the raw tokens of a
            parameter into a value. Raises `ValueError` on invalid input.
        always_repeatable (bool): The parameter accepts any number of occurrences
            and `convert` receives all of them at once.
        allow_empty (bool): `convert` may be called with no tokens when the
            parameter is not supplied, instead of reporting it missing.
    """

    short_label: str
    convert: Callable[[Sequence[str]], Any]
    always_repeatable: bool = False
    allow_empty: bool = False

    def read(self, tokens: Sequence[str]) -> Any:
        """Call `convert`, refusing empty input the reader did not opt into."""
        if not tokens and not self.allow_empty:
            raise ValueError(f"expected a <{self.short_label}> value")
        return self.convert(list(tokens))


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts the usual truthy and falsy spellings such as 'true', 'yes', '0', 'off'.

    Raises:
        ValueError: If the string is not a recognised boolean spelling.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"'{value}' is not a valid boolean")


def coerce_enum(value: str, enum_type: EnumMeta) -> Any:
    """
    Convert a string to an Enum member.

    Tries to resolve by member name, then by value coerced to the type of the
    first member's value.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    try:
        return enum_type[value]
    except KeyError:
        pass

    base_type = type(next(iter(enum_type)).value)
    try:
        return enum_type(base_type(value))
    except (ValueError, TypeError):
        values = [str(member.value) for member in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(values)}}}") from None


def coerce_datetime(value: str) -> datetime:
    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as error:
        raise ValueError(f"'{value}' could not be parsed as a datetime") from error


def scalar_reader(short_label: str, function: Callable[[str], Any]) -> TypeReader:
    """Build a reader that converts exactly one token with `function`."""

    def convert(tokens: Sequence[str]) -> Any:
        if len(tokens) != 1:
            raise ValueError(f"expected a single value, got {len(tokens)}")
        return function(tokens[0])

    return TypeReader(short_label=short_label, convert=convert)


def sequence_reader(item: TypeReader) -> TypeReader:
    """
    Build a reader that collects every occurrence into a list.

    The resulting reader is always repeatable and accepts no tokens at all,
    resolving to an empty list.
    """

    def convert(tokens: Sequence[str]) -> list[Any]:
        return [item.convert([token]) for token in tokens]

    return TypeReader(
        short_label=item.short_label,
        convert=convert,
        always_repeatable=True,
        allow_empty=True,
    )


def choice_reader(choices: Iterable[str], short_label: str | None = None) -> TypeReader:
    """Build a reader that only accepts one of `choices`, unchanged."""
    allowed = [str(choice) for choice in choices]
    if not allowed:
        raise SpecError("choice_reader requires at least one choice")

    def check(value: str) -> str:
        if value not in allowed:
            raise ValueError(f"'{value}' should be one of {{{', '.join(allowed)}}}")
        return value

    return scalar_reader(short_label or "|".join(allowed), check)


def enum_reader(enum_type: type[Enum], short_label: str | None = None) -> TypeReader:
    """Build a reader converting a member name or value into `enum_type`."""
    if not isinstance(enum_type, EnumMeta):
        raise SpecError(f"enum_reader requires an Enum type, got {enum_type!r}")
    label = short_label or enum_type.__name__.lower()
    return scalar_reader(label, lambda value: coerce_enum(value, enum_type))


def _builtin_readers() -> dict[str, TypeReader]:
    readers = {
        "str": scalar_reader("str", str),
        "int": scalar_reader("int", int),
        "float": scalar_reader("float", float),
        "bool": scalar_reader("bool", coerce_bool),
        "path": scalar_reader("path", Path),
        "datetime": scalar_reader("datetime", coerce_datetime),
        FLAG_TYPE_TAG: scalar_reader("bool", coerce_bool),
    }
    for tag in ("str", "int", "float", "path"):
        readers[f"list[{tag}]"] = sequence_reader(readers[tag])
    return readers


class ReaderRegistry:
    """
    Maps type tags to `TypeReader` instances.

    Registries are populated before parsing starts and only read afterwards, so
    a single registry can be shared by any number of parsers.
    """

    def __init__(
        self,
        readers: Mapping[str, TypeReader] | None = None,
        include_builtins: bool = True,
    ) -> None:
        self._readers: dict[str, TypeReader] = (
            _builtin_readers() if include_builtins else {}
        )
        for tag, reader in (readers or {}).items():
            self.register(tag, reader, replace=True)

    def register(self, tag: str, reader: TypeReader, replace: bool = False) -> None:
        """
        Register a reader under `tag`.

        Raises:
            SpecError: If the tag is already registered and `replace` is False, or
                `reader` is not a `TypeReader`.
        """
        if not isinstance(tag, str) or not tag:
            raise SpecError("Reader tag must be a non-empty string")
        if not isinstance(reader, TypeReader):
            raise SpecError(f"Reader for '{tag}' must be a TypeReader, got {reader!r}")
        if tag in self._readers and not replace:
            raise SpecError(f"A reader is already registered for type tag '{tag}'")
        if tag in self._readers:
            logger.debug("Replacing reader for type tag '%s'", tag)
        self._readers[tag] = reader

    def get(self, tag: str) -> TypeReader:
        """
        Return the reader registered for `tag`.

        Raises:
            SpecError: If no reader is registered for the tag.
        """
        try:
            return self._readers[tag]
        except KeyError:
            raise SpecError(
                f"No reader registered for type tag '{tag}'. "
                f"Known tags: {', '.join(sorted(self._readers))}"
            ) from None

    def tags(self) -> list[str]:
        return list(self._readers)

    def __contains__(self, tag: object) -> bool:
        return tag in self._readers

    def __len__(self) -> int:
        return len(self._readers)
