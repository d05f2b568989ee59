"""
Cmdline Option Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .cmd_line_parser import CmdLineParser
from .option import UNBOUNDED, Option, resolve_nargs
from .option_group import OptionGroup
from .parsed_cmd_line import FLAG_PRESENT, ParsedCmdLine

__all__ = [
    "CmdLineParser",
    "FLAG_PRESENT",
    "Option",
    "OptionGroup",
    "ParsedCmdLine",
    "UNBOUNDED",
    "resolve_nargs",
]
