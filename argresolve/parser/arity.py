# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Arity`, the enum describing how many values a parameter accepts.

Supports alias coercion for shorthand or config-friendly values, so parameter
definitions loaded from YAML or TOML can use the spelling they find natural.

Example:
    Arity("single")     → Arity.SINGLE
    Arity("?")          → Arity.OPTIONAL (via alias)
    Arity("*")          → Arity.REPEATABLE (via alias)
"""
from __future__ import annotations

from enum import Enum


class Arity(Enum):
    """
    The semantic arity of a parameter.

    Members:
        SINGLE: Exactly one value. Required unless a default is declared.
        OPTIONAL: Zero or one value. Resolves to the default, or `None`.
        REPEATABLE: Any number of occurrences, accumulated in order into a list.

    Aliases:
        - "one" → "single"
        - "?" → "optional"
        - "*", "many", "append" → "repeatable"
    """

    SINGLE = "single"
    OPTIONAL = "optional"
    REPEATABLE = "repeatable"

    @classmethod
    def choices(cls) -> list[Arity]:
        """Return a list of all arities."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "one": "single",
            "?": "optional",
            "*": "repeatable",
            "many": "repeatable",
            "append": "repeatable",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> Arity:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower()
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value
