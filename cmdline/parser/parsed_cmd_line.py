# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParsedCmdLine`, the result of one `CmdLineParser.parse()` call.

A `ParsedCmdLine` maps every matched `Option` to the ordered list of string
values captured for it, in first-encountered order, and keeps the ordered list
of tokens that matched nothing. It is filled in by the parser and is read-only
for callers afterwards: every list handed out is a copy.

Lookups accept either an `Option` instance or a name. Names follow the same
exact-match rule as `Option.matches()` (`"verbose"`, `"--verbose"` and `"-v"` all
work) and are checked against matched options in insertion order. An
`OptionGroup` is never a lookup key; values of a group are stored under the
member that was selected.

Three outcomes are distinguishable for every option:

    absent          values() -> None      get_value() -> None
    flag present    values() -> []        get_value() -> ()
    with values     values() -> [...]     get_value() -> first value

Example:
    parsed = parser.parse(["--tags=a,b", "extra"])
    parsed.values("tags")     # ['a', 'b']
    parsed.unknown_tokens()   # ['extra']
    parsed.get_as("port", int, default=8080)
"""
from __future__ import annotations

from typing import Any, Iterator

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cmdline.console import console as default_console
from cmdline.parser.option import Option
from cmdline.parser.utils import coerce_value

FLAG_PRESENT: tuple[()] = ()

OptionKey = Option | str | None


class ParsedCmdLine:
    """
    Immutable-after-parse record of matched options and unknown tokens.

    Instances are created and populated by `CmdLineParser`; the `_add_*` methods
    are internal to that process.
    """

    def __init__(self) -> None:
        self._params: dict[Option, list[str]] = {}
        self._unknown_tokens: list[str] = []

    def _add_values(self, option: Option, values: list[str]) -> None:
        """Record values for an option, creating its entry on first sight."""
        self._params.setdefault(option, []).extend(values)

    def _add_unknown_token(self, token: str) -> None:
        self._unknown_tokens.append(token)

    def _find(self, key: OptionKey) -> list[str] | None:
        if key is None:
            return None
        if isinstance(key, Option):
            return self._params.get(key)
        if not isinstance(key, str) or not key:
            return None
        for option, values in self._params.items():
            if option.matches(key):
                return values
        return None

    def has_option(self, key: OptionKey) -> bool:
        """Return True if the option was matched during the parse."""
        return self._find(key) is not None

    def get_value(self, key: OptionKey) -> str | tuple[()] | None:
        """
        Return the first value recorded for an option.

        Returns:
            str | tuple[()] | None: The first value, `FLAG_PRESENT` (an empty tuple)
            for an option present without values, or None if never matched.
        """
        values = self._find(key)
        if values is None:
            return None
        if not values:
            return FLAG_PRESENT
        return values[0]

    def values(self, key: OptionKey) -> list[str] | None:
        """
        Return a copy of every value recorded for an option.

        Returns:
            list[str] | None: The values in encounter order, an empty list for a
            present flag, or None if the option was never matched.
        """
        values = self._find(key)
        if values is None:
            return None
        return list(values)

    def get_as(self, key: OptionKey, target_type: Any, default: Any = None) -> Any:
        """
        Return the first value coerced to `target_type`, or `default` if there is none.

        Raises:
            ValueError: If the recorded value cannot be coerced.
        """
        values = self._find(key)
        if not values:
            return default
        return coerce_value(values[0], target_type)

    def values_as(self, key: OptionKey, target_type: Any) -> list[Any] | None:
        """Return every value coerced to `target_type`, or None if the option is absent."""
        values = self._find(key)
        if values is None:
            return None
        return [coerce_value(value, target_type) for value in values]

    def unknown_tokens(self) -> list[str]:
        """Return a copy of the tokens that matched no declared option, in input order."""
        return list(self._unknown_tokens)

    def options(self) -> list[Option]:
        """Return the matched options in first-encountered order."""
        return list(self._params)

    def as_dict(self) -> dict[str, list[str]]:
        """Return a plain mapping of primary option name to a copy of its values."""
        return {option.name: list(values) for option, values in self._params.items()}

    def summary(self, console: Console | None = None) -> None:
        """Print a Rich table of matched options and unknown tokens."""
        console = console or default_console
        table = Table(title="Parsed Command Line", expand=False)
        table.add_column("Option", style="bold")
        table.add_column("Values")
        for option, values in self._params.items():
            shown = escape(", ".join(values)) if values else "[dim](flag)[/dim]"
            table.add_row(", ".join(option.flags), shown)
        console.print(table)
        if self._unknown_tokens:
            console.print(
                f"[yellow]Unknown tokens:[/yellow] {escape(' '.join(self._unknown_tokens))}"
            )

    def __contains__(self, key: object) -> bool:
        return isinstance(key, (Option, str)) and self.has_option(key)

    def __getitem__(self, key: OptionKey) -> list[str]:
        values = self.values(key)
        if values is None:
            raise KeyError(key)
        return values

    def __iter__(self) -> Iterator[Option]:
        return iter(list(self._params))

    def __len__(self) -> int:
        return len(self._params)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParsedCmdLine):
            return False
        return (
            list(self._params.items()) == list(other._params.items())
            and self._unknown_tokens == other._unknown_tokens
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        params = ", ".join(
            f"{option.display_name}={values!r}" for option, values in self._params.items()
        )
        return f"ParsedCmdLine(params=[{params}], unknown_tokens={self._unknown_tokens!r})"

    def __repr__(self) -> str:
        return str(self)
