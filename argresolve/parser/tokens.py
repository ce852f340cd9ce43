# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Classifies raw command-line tokens before they are matched to parameters.

Classification never looks at a command's parameters, so the same token list
can be classified once and offered to any command:

- `--name` is a long reference; `--name=value` carries an inline value.
- `-x` is a short reference. Bundles such as `-ab` are not expanded; they stay
  a single short reference that matches no parameter.
- Numbers, including negative ones (`-5`, `-3.14`, `-1e3`), and a lone `-` are
  bare values.
- A lone `--` ends option processing; every later token is a bare value.
- Anything else is a bare value.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

_NUMBER_PATTERN = re.compile(r"^-?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?$")

END_OF_OPTIONS = "--"


class TokenKind(Enum):
    LONG = "long"
    SHORT = "short"
    VALUE = "value"


@dataclass(frozen=True)
class Token:
    """
    One classified token.

    Attributes:
        kind (TokenKind): Classification of the token.
        text (str): The original raw token, used in diagnostics.
        name (str | None): Referenced name without dashes, for references.
        inline_value (str | None): Text after the first `=` of a long reference.
        index (int): Position of the token in the raw input.
    """

    kind: TokenKind
    text: str
    name: str | None = None
    inline_value: str | None = None
    index: int = 0

    @property
    def is_reference(self) -> bool:
        return self.kind is not TokenKind.VALUE

    @property
    def flag(self) -> str:
        """The reference spelling used to look up a parameter (`--name` or `-x`)."""
        if self.kind is TokenKind.LONG:
            return f"--{self.name}"
        if self.kind is TokenKind.SHORT:
            return f"-{self.name}"
        return self.text


def is_number(token: str) -> bool:
    return bool(_NUMBER_PATTERN.match(token))


def classify(token: str, index: int = 0) -> Token:
    """Classify a single raw token."""
    if token.startswith("--") and len(token) > 2:
        name, separator, value = token[2:].partition("=")
        return Token(
            TokenKind.LONG,
            token,
            name=name,
            inline_value=value if separator else None,
            index=index,
        )
    if token.startswith("-") and len(token) > 1 and not is_number(token):
        return Token(TokenKind.SHORT, token, name=token[1:], index=index)
    return Token(TokenKind.VALUE, token, index=index)


def tokenize(args: Iterable[str]) -> list[Token]:
    """
    Classify every raw token, preserving order.

    Args:
        args (Iterable[str]): Raw tokens, e.g. `sys.argv[1:]`.

    Returns:
        list[Token]: Classified tokens. The `--` end-of-options marker is dropped.
    """
    tokens: list[Token] = []
    options_ended = False
    for index, raw in enumerate(args):
        if not isinstance(raw, str):
            raise TypeError(f"Tokens must be strings, got {type(raw).__name__}: {raw!r}")
        if options_ended:
            tokens.append(Token(TokenKind.VALUE, raw, index=index))
        elif raw == END_OF_OPTIONS:
            options_ended = True
        else:
            tokens.append(classify(raw, index))
    return tokens
