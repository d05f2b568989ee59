# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Loads option and group declarations for a `CmdLineParser` from YAML or TOML.

Example (YAML):

    allow_abbreviations: true
    options:
      - flags: ["-v", "--verbose"]
      - flags: ["--tags"]
        nargs: "+"
        separator: ","
      - flags: ["-o", "--output"]
        nargs: 1
        required: true
    groups:
      - name: format
        required: true
        options:
          - flags: ["--json"]
          - flags: ["--xml"]

Options are registered first, then groups, each in file order.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cmdline.exceptions import ConfigurationError
from cmdline.logger import logger
from cmdline.parser.cmd_line_parser import CmdLineParser
from cmdline.parser.option import Option
from cmdline.parser.option_group import OptionGroup


class RawOption(BaseModel):
    """Raw option model for declaration files."""

    model_config = ConfigDict(extra="forbid")

    flags: list[str]
    nargs: int | str | None = None
    min_values: int | None = None
    max_values: int | None = None
    required: bool = False
    separator: str | None = None
    description: str = ""

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("flags must contain at least one flag")
        return value

    def to_option(self) -> Option:
        return Option.from_flags(
            *self.flags,
            nargs=self.nargs,
            min_values=self.min_values,
            max_values=self.max_values,
            required=self.required,
            separator=self.separator,
            description=self.description,
        )


class RawOptionGroup(BaseModel):
    """Raw option group model for declaration files."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    required: bool = False
    options: list[RawOption]

    def to_group(self) -> OptionGroup:
        return OptionGroup(
            members=tuple(raw.to_option() for raw in self.options),
            required=self.required,
            name=self.name,
        )


class ParserConfig(BaseModel):
    """Top-level declaration file model."""

    model_config = ConfigDict(extra="forbid")

    allow_abbreviations: bool = False
    options: list[RawOption] = Field(default_factory=list)
    groups: list[RawOptionGroup] = Field(default_factory=list)

    def to_parser(self) -> CmdLineParser:
        parser = CmdLineParser(allow_abbreviations=self.allow_abbreviations)
        for raw_option in self.options:
            parser.register(raw_option.to_option())
        for raw_group in self.groups:
            parser.register(raw_group.to_group())
        return parser


def parser_from_dict(raw_config: dict[str, Any]) -> CmdLineParser:
    """
    Build a `CmdLineParser` from an already loaded declaration mapping.

    Raises:
        ConfigurationError: If the mapping does not describe valid declarations.
    """
    try:
        config = ParserConfig.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigurationError(f"Invalid option declarations: {error}") from error
    return config.to_parser()


def loader(file_path: Path | str) -> CmdLineParser:
    """
    Load option declarations from a YAML or TOML file into a `CmdLineParser`.

    Args:
        file_path (Path | str): Path to a `.yaml`, `.yml` or `.toml` file.

    Returns:
        CmdLineParser: A parser with every declared option and group registered.

    Raises:
        TypeError: If `file_path` is not a string or Path.
        FileNotFoundError: If the file does not exist.
        ValueError: If the format is unsupported or the root is not a mapping.
        ConfigurationError: If the declarations themselves are invalid.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        if suffix in (".yaml", ".yml"):
            raw_config = yaml.safe_load(config_file)
        elif suffix == ".toml":
            raw_config = toml.load(config_file)
        else:
            raise ValueError(f"Unsupported config format: {suffix}")

    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError(
            "Configuration file must contain a mapping with 'options' and/or 'groups'.\n"
            "Example:\n"
            "options:\n"
            "  - flags: ['-v', '--verbose']"
        )

    parser = parser_from_dict(raw_config)
    logger.debug("Loaded %s from '%s'", parser, path)
    return parser
