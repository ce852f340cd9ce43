# argresolve — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Parser options and declarative command definitions loaded from YAML or TOML.

Example YAML file:

    options:
      allow_positional: true
      total_width: 80
    groups:
      - name: common
        parameters:
          - name: verbose
            short: v
            flag: true
    commands:
      - name: build
        doc: Build the project.
        parameters:
          - name: target
            short: t
          - name: jobs
            type: int
            default: 4
          - group: common

Group references (`- group: name`) are expanded in place, so a command keeps
the declaration order of its file. Groups may reference other groups; cycles
are rejected.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from argresolve.exceptions import ConfigError, SpecError
from argresolve.logger import logger
from argresolve.parser.command import CommandSpec
from argresolve.parser.options import ParserConfig
from argresolve.parser.parameter import ParameterSpec

__all__ = ["ParserConfig", "RawCommand", "RawParameter", "load_config"]


class RawParameter(BaseModel):
    """Raw parameter entry of a configuration file."""

    model_config = ConfigDict(extra="forbid")

    name: str
    type: str | None = None
    short: str | None = None
    doc: str = ""
    arity: str = "single"
    flag: bool = False
    default: Any = None
    dest: str | None = None
    positional: bool = False

    def to_spec(self) -> ParameterSpec:
        kwargs: dict[str, Any] = {}
        if "default" in self.model_fields_set:
            kwargs["default"] = self.default
        return ParameterSpec(
            name=self.name,
            type_tag=self.type,
            short=self.short,
            doc=self.doc,
            arity=self.arity,
            is_flag=self.flag,
            dest=self.dest,
            positional=self.positional,
            **kwargs,
        )


class RawGroupRef(BaseModel):
    """Reference to a named shared parameter group."""

    model_config = ConfigDict(extra="forbid")

    group: str


class RawCommand(BaseModel):
    """Raw command or shared group entry of a configuration file."""

    model_config = ConfigDict(extra="forbid")

    name: str
    doc: str = ""
    parameters: list[RawGroupRef | RawParameter] = Field(default_factory=list)


class RawConfig(BaseModel):
    """Top-level layout of a configuration file."""

    model_config = ConfigDict(extra="forbid")

    options: ParserConfig = Field(default_factory=ParserConfig)
    groups: list[RawCommand] = Field(default_factory=list)
    commands: list[RawCommand] = Field(min_length=1)


class _GroupResolver:
    """Builds `CommandSpec` objects, expanding group references by name."""

    def __init__(self, groups: list[RawCommand]) -> None:
        self.raw_groups: dict[str, RawCommand] = {}
        for group in groups:
            if group.name in self.raw_groups:
                raise ConfigError(f"Group '{group.name}' is defined more than once")
            self.raw_groups[group.name] = group
        self.built: dict[str, CommandSpec] = {}

    def group(self, name: str, stack: list[str]) -> CommandSpec:
        if name in stack:
            raise ConfigError(
                f"Cyclic parameter group reference: {' -> '.join([*stack, name])}"
            )
        if name in self.built:
            return self.built[name]
        raw = self.raw_groups.get(name)
        if raw is None:
            raise ConfigError(f"Unknown parameter group '{name}'")
        self.built[name] = self.build(raw, [*stack, name])
        return self.built[name]

    def build(self, raw: RawCommand, stack: list[str]) -> CommandSpec:
        parameters: list[ParameterSpec | CommandSpec] = []
        for entry in raw.parameters:
            if isinstance(entry, RawGroupRef):
                parameters.append(self.group(entry.group, stack))
            else:
                parameters.append(entry.to_spec())
        return CommandSpec(name=raw.name, doc=raw.doc, parameters=parameters)


def _read_file(path: Path) -> Any:
    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                return yaml.safe_load(config_file)
            elif suffix == ".toml":
                return toml.load(config_file)
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(f"Could not parse {path}: {error}") from error
    raise ConfigError(f"Unsupported config format: {suffix}")


def build_commands(raw_config: RawConfig) -> list[CommandSpec]:
    """
    Turn validated raw definitions into `CommandSpec` objects.

    Raises:
        ConfigError: On unknown or cyclic group references, duplicate group names,
            or definitions rejected by `ParameterSpec`/`CommandSpec`.
    """
    resolver = _GroupResolver(raw_config.groups)
    try:
        return [resolver.build(raw, []) for raw in raw_config.commands]
    except SpecError as error:
        raise ConfigError(str(error)) from error


def load_config(file_path: Path | str) -> tuple[ParserConfig, list[CommandSpec]]:
    """
    Load parser options and command definitions from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to a `.yaml`, `.yml` or `.toml` file.

    Returns:
        tuple[ParserConfig, list[CommandSpec]]: The options and the commands, in
            file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be parsed or its content is invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    data = _read_file(path)
    if not isinstance(data, dict):
        raise ConfigError(
            "Configuration file must contain a mapping with a list of commands.\n"
            "Example:\n"
            "commands:\n"
            "  - name: build\n"
            "    parameters:\n"
            "      - name: target"
        )

    try:
        raw_config = RawConfig.model_validate(data)
    except ValidationError as error:
        raise ConfigError(f"Invalid configuration in {path}:\n{error}") from error

    commands = build_commands(raw_config)
    logger.debug("Loaded %d command(s) from %s", len(commands), path)
    return raw_config.options, commands
