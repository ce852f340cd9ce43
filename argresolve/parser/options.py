# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""Options recognised by `CommandParser`, validated with pydantic."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator

MIN_TOTAL_WIDTH = 20


class ParserConfig(BaseModel):
    """
    Options recognised by `CommandParser`.

    Attributes:
        allow_positional (bool): Bind bare tokens to parameters in declaration order.
        allow_repeats (bool): Keep the last value of a repeated parameter instead
            of reporting a duplicate.
        total_width (int): Width used to wrap help text.
        print_help_on_exit (bool): Append the expected signature to failures.
        docs_on_new_line (bool): Put parameter documentation on its own line.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    allow_positional: bool = False
    allow_repeats: bool = False
    total_width: int = 95
    print_help_on_exit: bool = True
    docs_on_new_line: bool = False

    @field_validator("total_width")
    @classmethod
    def validate_total_width(cls, value: int) -> int:
        if value < MIN_TOTAL_WIDTH:
            raise ValueError(f"total_width must be at least {MIN_TOTAL_WIDTH}")
        return value
