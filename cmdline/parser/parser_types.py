# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
State models used by `CmdLineParser` while it walks a token stream.

Contents:
- `ParseState`: The two states of the token state machine.
- `PendingValues`: Tracks the option currently collecting values and what it
  has collected so far.

Both are scratch state for a single `parse()` call and are never shared between
calls.
"""
from dataclasses import dataclass, field
from enum import Enum

from cmdline.parser.option import Option


class ParseState(Enum):
    """States of the parser's token state machine."""

    EXPECT_OPTION_OR_POSITIONAL = "expect_option_or_positional"
    COLLECTING_VALUES = "collecting_values"

    def __str__(self) -> str:
        return self.value


@dataclass
class PendingValues:
    """Tracks an option that is consuming values from the following tokens."""

    option: Option
    values: list[str] = field(default_factory=list)

    @property
    def collected(self) -> int:
        return len(self.values)

    @property
    def remaining(self) -> int | None:
        """Values still accepted, or None when the option is unbounded."""
        if self.option.max_values is None:
            return None
        return self.option.max_values - self.collected

    @property
    def minimum_met(self) -> bool:
        return self.collected >= self.option.min_values

    @property
    def is_full(self) -> bool:
        return self.remaining == 0

    def add(self, token: str) -> None:
        self.values.append(token)
