# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by the cmdline option parser.

Two families exist. `ConfigurationError` signals a programming mistake in the
declared options (empty names, impossible arity, duplicate flags) and is raised
while options, groups and parsers are being built. `ParseError` signals bad user
input and is raised by `CmdLineParser.parse()`; a failed parse never returns a
partial result.

Exception Hierarchy:
- CmdLineError
    ├── ConfigurationError
    └── ParseError
        ├── MissingRequiredOption
        ├── MissingRequiredGroupSelection
        ├── ConflictingGroupSelection
        ├── InsufficientValues
        ├── TooManyValues
        └── UnrecognizedOption

Unknown tokens are not an error during parsing. `UnrecognizedOption` is only
raised when a caller opts in via `CmdLineParser.raise_for_unknown()`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from cmdline.parser.option import Option
    from cmdline.parser.option_group import OptionGroup


class CmdLineError(Exception):
    """Base exception for the cmdline option parser."""


class ConfigurationError(CmdLineError):
    """Exception raised when options, groups or a parser are declared incorrectly."""


class ParseError(CmdLineError):
    """Exception raised when a token stream cannot be parsed against the declared options."""


class MissingRequiredOption(ParseError):
    """Exception raised when a required option never appeared in the token stream."""

    def __init__(self, option: Option):
        self.option = option
        super().__init__(f"Missing required option '{option.display_name}'")


class MissingRequiredGroupSelection(ParseError):
    """Exception raised when no member of a required option group was selected."""

    def __init__(self, group: OptionGroup):
        self.group = group
        choices = ", ".join(member.display_name for member in group)
        super().__init__(
            f"Missing required selection for group '{group.display_name}': "
            f"expected one of {choices}"
        )


class ConflictingGroupSelection(ParseError):
    """Exception raised when two different members of one option group are selected."""

    def __init__(self, group: OptionGroup, first: Option, second: Option):
        self.group = group
        self.first = first
        self.second = second
        super().__init__(
            f"Option '{second.display_name}' cannot be used together with "
            f"'{first.display_name}' (group '{group.display_name}')"
        )


class InsufficientValues(ParseError):
    """Exception raised when an option received fewer values than its minimum."""

    def __init__(self, option: Option, needed: int, got: int):
        self.option = option
        self.needed = needed
        self.got = got
        plural = "s" if needed != 1 else ""
        super().__init__(
            f"Option '{option.display_name}' requires at least {needed} value{plural}, "
            f"got {got}"
        )


class TooManyValues(ParseError):
    """Exception raised when an option received more values than its maximum."""

    def __init__(self, option: Option, max_values: int, got: int):
        self.option = option
        self.max_values = max_values
        self.got = got
        plural = "s" if max_values != 1 else ""
        super().__init__(
            f"Option '{option.display_name}' accepts at most {max_values} value{plural}, "
            f"got {got}"
        )


class UnrecognizedOption(ParseError):
    """Exception raised on request for a token that matched no declared option."""

    def __init__(self, token: str, suggestions: Sequence[str] = ()):
        self.token = token
        self.suggestions = list(suggestions)
        if self.suggestions:
            message = (
                f"Unrecognized option '{token}'. "
                f"Did you mean one of: {', '.join(self.suggestions)}?"
            )
        else:
            message = f"Unrecognized option '{token}'."
        super().__init__(message)
