# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `CommandSpec`, the immutable signature of one command.

A command's `parameters` is an ordered sequence whose items are either
`ParameterSpec` instances or other `CommandSpec` instances embedded as shared
parameter groups. Groups are composed by explicit reference and expanded by
`flatten()`, depth-first, preserving declaration order:

    common = CommandSpec("common", parameters=[ParameterSpec("verbose", is_flag=True)])
    build = CommandSpec("build", parameters=[ParameterSpec("target"), common])
    [p.name for p in build.flatten()]  # ['target', 'verbose']

Names, short aliases and result keys must be unique across the flattened list;
violations raise `SpecError` when the command is constructed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence, Union

from argresolve.exceptions import SpecError
from argresolve.parser.parameter import ParameterSpec

ParameterItem = Union[ParameterSpec, "CommandSpec"]


@dataclass(frozen=True)
class CommandSpec:
    """
    Represents a command signature.

    Attributes:
        name (str): Command name, used as the selector when several commands exist.
        doc (str): Documentation shown in help output.
        parameters (Sequence[ParameterSpec | CommandSpec]): Parameters and embedded
            shared groups, in declaration order.
    """

    name: str
    doc: str = ""
    parameters: Sequence[ParameterItem] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise SpecError("Command name must be a non-empty string")
        object.__setattr__(self, "parameters", tuple(self.parameters))
        for item in self.parameters:
            if not isinstance(item, (ParameterSpec, CommandSpec)):
                raise SpecError(
                    f"Command '{self.name}' parameters must be ParameterSpec or "
                    f"CommandSpec instances, got {type(item).__name__}"
                )
        self._validate_unique(self.flatten())

    def flatten(self) -> tuple[ParameterSpec, ...]:
        """Expand embedded groups depth-first into a flat parameter tuple."""
        return tuple(self._iter_flat([]))

    def _iter_flat(self, stack: list[CommandSpec]) -> Iterator[ParameterSpec]:
        if any(group is self for group in stack):
            path = " -> ".join(group.name for group in [*stack, self])
            raise SpecError(f"Cyclic parameter group reference: {path}")
        stack.append(self)
        for item in self.parameters:
            if isinstance(item, CommandSpec):
                yield from item._iter_flat(stack)
            else:
                yield item
        stack.pop()

    def _validate_unique(self, parameters: tuple[ParameterSpec, ...]) -> None:
        seen_flags: dict[str, ParameterSpec] = {}
        seen_dests: dict[str, ParameterSpec] = {}
        for parameter in parameters:
            for flag in parameter.flags:
                if flag in seen_flags:
                    raise SpecError(
                        f"Flag '{flag}' in command '{self.name}' is already used by "
                        f"parameter '{seen_flags[flag].name}'"
                    )
                seen_flags[flag] = parameter
            if parameter.dest in seen_dests:
                raise SpecError(
                    f"Destination '{parameter.dest}' in command '{self.name}' is already "
                    f"used by parameter '{seen_dests[parameter.dest].name}'"
                )
            seen_dests[parameter.dest] = parameter

    def get_parameter(self, dest: str) -> ParameterSpec | None:
        """Return the flattened parameter with the given result key, if defined."""
        return next((p for p in self.flatten() if p.dest == dest), None)

    def __str__(self) -> str:
        parameters = self.flatten()
        flags = sum(parameter.is_flag for parameter in parameters)
        return f"CommandSpec(name={self.name!r}, parameters={len(parameters)}, flags={flags})"
