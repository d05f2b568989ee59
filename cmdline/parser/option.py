# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the `Option` dataclass used by `CmdLineParser` to describe one declared
command-line switch, together with the token-shape helpers shared by the parser
and the parse result.

Each `Option` has a primary name (usually the long form), an optional alias
(usually the short form), a required flag, an arity (`min_values` to
`max_values`, where `max_values=None` means unbounded) and an optional value
separator used to split inline values such as `--tags=a,b,c`.

Key Attributes:
- `name`: Primary name without prefix (e.g. `verbose`)
- `alias`: Optional secondary name without prefix (e.g. `v`)
- `required`: Whether the parse fails when the option is missing
- `min_values` / `max_values`: Arity; `0..0` is a pure flag
- `value_separator`: Single character splitting an inline value

Arity can also be declared with the argparse-style `nargs` shorthand through
`Option.from_flags()` or `resolve_nargs()`:

    None -> 0..0    N -> N..N    "?" -> 0..1    "*" -> 0..∞    "+" -> 1..∞

Matching is exact and case-sensitive. A token matches when, after stripping a
leading `--` or `-`, it equals the name or the alias. Abbreviations are a parser
policy and never handled here.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from cmdline.exceptions import ConfigurationError

PREFIX_LONG = "--"
PREFIX_SHORT = "-"
INLINE_ASSIGN = "="
UNBOUNDED = None

ALLOWED_NARGS = ("?", "*", "+")


def strip_prefix(token: str) -> str:
    """Remove a leading `--` or `-` from a token, if present."""
    if token.startswith(PREFIX_LONG):
        return token[len(PREFIX_LONG) :]
    if token.startswith(PREFIX_SHORT):
        return token[len(PREFIX_SHORT) :]
    return token


def is_option_shaped(token: str) -> bool:
    """Return True if the token looks like an option (`-x`, `--name`, `--name=value`)."""
    return len(token) > 1 and token.startswith(PREFIX_SHORT)


def resolve_nargs(nargs: int | str | None) -> tuple[int, int | None]:
    """
    Convert an argparse-style `nargs` value into a `(min_values, max_values)` pair.

    Args:
        nargs (int | str | None): `None`, a non-negative int, or one of '?', '*', '+'.

    Returns:
        tuple[int, int | None]: The arity, with `None` meaning unbounded.

    Raises:
        ConfigurationError: If `nargs` is not a supported value.
    """
    if nargs is None:
        return 0, 0
    if isinstance(nargs, bool):
        raise ConfigurationError(f"nargs must be an int or one of {ALLOWED_NARGS}")
    if isinstance(nargs, int):
        if nargs < 0:
            raise ConfigurationError("nargs must be a non-negative integer")
        return nargs, nargs
    if nargs == "?":
        return 0, 1
    if nargs == "*":
        return 0, UNBOUNDED
    if nargs == "+":
        return 1, UNBOUNDED
    raise ConfigurationError(f"Invalid nargs value: {nargs!r}")


def _validate_name(name: object, kind: str) -> str:
    if not isinstance(name, str):
        raise ConfigurationError(f"Option {kind} must be a string, got {type(name).__name__}")
    if not name:
        raise ConfigurationError(f"Option {kind} must not be empty")
    if name.startswith(PREFIX_SHORT):
        raise ConfigurationError(
            f"Option {kind} '{name}' must be given without a leading '-'"
        )
    if INLINE_ASSIGN in name or any(char.isspace() for char in name):
        raise ConfigurationError(
            f"Option {kind} '{name}' must not contain whitespace or '{INLINE_ASSIGN}'"
        )
    return name


@dataclass(frozen=True)
class Option:
    """
    Represents one declared command-line option.

    Attributes:
        name (str): Primary name, without prefix.
        alias (str | None): Optional alternative name, without prefix.
        required (bool): True if the option must appear in every parse.
        min_values (int): Minimum number of values per occurrence.
        max_values (int | None): Maximum number of values per occurrence, None for unbounded.
        value_separator (str | None): Character splitting an inline `--name=a,b` value.
        description (str): Free-form description, not used for matching.
    """

    name: str
    alias: str | None = None
    required: bool = False
    min_values: int = 0
    max_values: int | None = 0
    value_separator: str | None = None
    description: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        _validate_name(self.name, "name")
        if self.alias is not None:
            _validate_name(self.alias, "alias")
            if self.alias == self.name:
                raise ConfigurationError(
                    f"Option alias '{self.alias}' must differ from its name"
                )
        if isinstance(self.min_values, bool) or not isinstance(self.min_values, int):
            raise ConfigurationError("min_values must be an integer")
        if self.min_values < 0:
            raise ConfigurationError(
                f"min_values for '{self.name}' must not be negative, got {self.min_values}"
            )
        if self.max_values is not None:
            if isinstance(self.max_values, bool) or not isinstance(self.max_values, int):
                raise ConfigurationError("max_values must be an integer or None")
            if self.max_values < 0:
                raise ConfigurationError(
                    f"max_values for '{self.name}' must not be negative, got {self.max_values}"
                )
            if self.min_values > self.max_values:
                raise ConfigurationError(
                    f"min_values ({self.min_values}) exceeds max_values "
                    f"({self.max_values}) for '{self.name}'"
                )
        if self.value_separator is not None:
            if len(self.value_separator) != 1:
                raise ConfigurationError(
                    f"value_separator for '{self.name}' must be a single character"
                )
            if self.value_separator == INLINE_ASSIGN or self.value_separator.isspace():
                raise ConfigurationError(
                    f"value_separator for '{self.name}' cannot be "
                    f"'{self.value_separator}'"
                )

    @classmethod
    def from_flags(
        cls,
        *flags: str,
        nargs: int | str | None = None,
        min_values: int | None = None,
        max_values: int | None = None,
        required: bool = False,
        separator: str | None = None,
        description: str = "",
    ) -> Option:
        """
        Build an Option from prefixed flags such as `"-v", "--verbose"`.

        The first long flag becomes the name and the remaining flag the alias.
        Arity comes from `nargs`; explicit `min_values` / `max_values` override it.

        Raises:
            ConfigurationError: If the flags or the arity are invalid.
        """
        if not flags:
            raise ConfigurationError("No flags provided")
        if len(flags) > 2:
            raise ConfigurationError(
                f"An option takes at most two flags (name and alias), got {len(flags)}"
            )
        for flag in flags:
            if not isinstance(flag, str):
                raise ConfigurationError(f"Flag '{flag}' must be a string")
            if not is_option_shaped(flag):
                raise ConfigurationError(
                    f"Flag '{flag}' must start with '{PREFIX_SHORT}' or '{PREFIX_LONG}'"
                )
            if flag.startswith(PREFIX_LONG) and len(flag) < 3:
                raise ConfigurationError(f"Flag '{flag}' must be at least 3 characters long")
            if not flag.startswith(PREFIX_LONG) and len(flag) > 2:
                raise ConfigurationError(
                    f"Flag '{flag}' must be a single character or start with '{PREFIX_LONG}'"
                )
        ordered = sorted(flags, key=lambda flag: not flag.startswith(PREFIX_LONG))
        name = strip_prefix(ordered[0])
        alias = strip_prefix(ordered[1]) if len(ordered) > 1 else None

        resolved_min, resolved_max = resolve_nargs(nargs)
        if min_values is not None:
            resolved_min = min_values
            if max_values is None and nargs is None:
                resolved_max = max(resolved_min, resolved_max or 0)
        if max_values is not None:
            resolved_max = max_values

        return cls(
            name=name,
            alias=alias,
            required=required,
            min_values=resolved_min,
            max_values=resolved_max,
            value_separator=separator,
            description=description,
        )

    @property
    def names(self) -> tuple[str, ...]:
        """Name and alias, without prefixes."""
        if self.alias is None:
            return (self.name,)
        return (self.name, self.alias)

    @property
    def flags(self) -> tuple[str, ...]:
        """Name and alias rendered with their conventional prefixes."""
        return tuple(
            f"{PREFIX_LONG if len(name) > 1 else PREFIX_SHORT}{name}" for name in self.names
        )

    @property
    def display_name(self) -> str:
        return self.flags[0]

    @property
    def is_flag(self) -> bool:
        """True for a pure presence flag that takes no values."""
        return self.max_values == 0

    @property
    def is_unbounded(self) -> bool:
        return self.max_values is None

    def matches(self, token: str) -> bool:
        """
        Check whether a token refers to this option.

        Args:
            token (str): A raw token (`--verbose`, `-v`) or a bare name (`verbose`).

        Returns:
            bool: True if the token, stripped of its prefix, equals the name or alias.
        """
        if not token:
            return False
        return strip_prefix(token) in self.names

    def resolve(self, token: str) -> Option | None:
        """Return this option if the token matches it, else None."""
        return self if self.matches(token) else None

    def split_values(self, text: str) -> list[str]:
        """Split an inline value on the value separator, if one is configured."""
        if self.value_separator is None:
            return [text]
        return text.split(self.value_separator)

    def __str__(self) -> str:
        return self.display_name
