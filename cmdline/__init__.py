"""
Cmdline Option Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .exceptions import (
    CmdLineError,
    ConfigurationError,
    ConflictingGroupSelection,
    InsufficientValues,
    MissingRequiredGroupSelection,
    MissingRequiredOption,
    ParseError,
    TooManyValues,
    UnrecognizedOption,
)
from .parser import (
    FLAG_PRESENT,
    UNBOUNDED,
    CmdLineParser,
    Option,
    OptionGroup,
    ParsedCmdLine,
)
from .protocols import OptionIdentity

__all__ = [
    "CmdLineError",
    "CmdLineParser",
    "ConfigurationError",
    "ConflictingGroupSelection",
    "FLAG_PRESENT",
    "InsufficientValues",
    "MissingRequiredGroupSelection",
    "MissingRequiredOption",
    "Option",
    "OptionGroup",
    "OptionIdentity",
    "ParseError",
    "ParsedCmdLine",
    "TooManyValues",
    "UNBOUNDED",
    "UnrecognizedOption",
]
