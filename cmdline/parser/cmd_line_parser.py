# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `CmdLineParser`, the driver that matches a raw token
stream against declared `Option` and `OptionGroup` instances and produces a
`ParsedCmdLine`.

The parser is a two-state machine walked once over the tokens:

- `EXPECT_OPTION_OR_POSITIONAL`: an option-shaped token (`-x`, `--name`,
  `--name=value`) is matched against every declaration in declaration order and
  the first match wins. Pure flags are recorded immediately, inline values are
  split and recorded immediately, and options that take values switch the parser
  to collecting. Anything that matches nothing is kept as an unknown token.
- `COLLECTING_VALUES`: following tokens are consumed as values until the
  option's maximum is reached. A token naming a declared option ends collection
  once the minimum is met (and fails the parse before that). For unbounded
  options any option-shaped token ends collection once the minimum is met.

After the last token the parser checks required options and required groups.
Any `ParseError` aborts the whole parse; no partial result is returned.

Key Features:
- Declarative registration via `register()`, `add_option()` and `add_group()`
- Short/long names, per-option arity, inline `--name=a,b` values
- Mutually-exclusive option groups, recorded under the selected member
- Optional long-name abbreviations (`allow_abbreviations=True`)
- Unknown tokens collected, never fatal; `raise_for_unknown()` on request
- Completion support via `suggest_next()`

Example Usage:
    parser = CmdLineParser()
    parser.add_option("-v", "--verbose")
    parser.add_option("--tags", nargs="+", separator=",")
    parser.add_group(Option("json"), Option("xml"), required=True, name="format")

    parsed = parser.parse(["--json", "--tags=a,b", "-v", "notes.txt"])
    parsed.values("tags")     # ['a', 'b']
    parsed.has_option("xml")  # False
    parsed.unknown_tokens()   # ['notes.txt']

The parser holds no per-parse state, so one instance can be reused for any
number of sequential `parse()` calls.
"""
from __future__ import annotations

from typing import Iterable, Sequence

from cmdline.exceptions import (
    ConfigurationError,
    ConflictingGroupSelection,
    InsufficientValues,
    MissingRequiredGroupSelection,
    MissingRequiredOption,
    TooManyValues,
    UnrecognizedOption,
)
from cmdline.logger import logger
from cmdline.parser.option import (
    INLINE_ASSIGN,
    PREFIX_LONG,
    Option,
    is_option_shaped,
    strip_prefix,
)
from cmdline.parser.option_group import OptionGroup
from cmdline.parser.parsed_cmd_line import ParsedCmdLine
from cmdline.parser.parser_types import ParseState, PendingValues

Declaration = Option | OptionGroup


class CmdLineParser:
    """
    Matches raw command-line tokens against declared options and groups.

    Declarations are fixed once registered and are never mutated by parsing.
    Each `parse()` call builds a fresh `ParsedCmdLine`.

    Args:
        declarations (Iterable[Option | OptionGroup] | None): Options and groups
            to register, in declaration order.
        allow_abbreviations (bool): If True, a `--prefix` token that matches no
            option exactly resolves to the first option whose long name starts
            with the prefix.
    """

    def __init__(
        self,
        declarations: Iterable[Declaration] | None = None,
        *,
        allow_abbreviations: bool = False,
    ) -> None:
        self.allow_abbreviations: bool = allow_abbreviations
        self._declarations: list[Declaration] = []
        self._options: list[Option] = []
        self._name_map: dict[str, Option] = {}
        self._group_of: dict[Option, OptionGroup] = {}
        for declaration in declarations or ():
            self.register(declaration)

    def register(self, declaration: Declaration) -> Declaration:
        """
        Register an Option or OptionGroup with the parser.

        Args:
            declaration (Option | OptionGroup): The declaration to add.

        Returns:
            Option | OptionGroup: The registered declaration.

        Raises:
            ConfigurationError: If the declaration has the wrong type, was already
                registered, or shares a name or alias with a registered option.
        """
        if isinstance(declaration, OptionGroup):
            members = list(declaration.members)
        elif isinstance(declaration, Option):
            members = [declaration]
        else:
            raise ConfigurationError(
                f"Expected an Option or OptionGroup, got {type(declaration).__name__}"
            )

        for member in members:
            if member in self._group_of:
                raise ConfigurationError(
                    f"Option '{member.display_name}' already belongs to group "
                    f"'{self._group_of[member].display_name}'"
                )
            if member in self._options:
                raise ConfigurationError(
                    f"Option '{member.display_name}' is already registered"
                )
            for name in member.names:
                existing = self._name_map.get(name)
                if existing is not None:
                    raise ConfigurationError(
                        f"Name '{name}' of option '{member.display_name}' is already "
                        f"used by option '{existing.display_name}'"
                    )

        self._declarations.append(declaration)
        for member in members:
            self._options.append(member)
            for name in member.names:
                self._name_map[name] = member
            if isinstance(declaration, OptionGroup):
                self._group_of[member] = declaration
        logger.debug("Registered %s '%s'", type(declaration).__name__, declaration)
        return declaration

    def add_option(
        self,
        *flags: str,
        nargs: int | str | None = None,
        min_values: int | None = None,
        max_values: int | None = None,
        required: bool = False,
        separator: str | None = None,
        description: str = "",
    ) -> Option:
        """
        Declare and register a new option from prefixed flags.

        Args:
            *flags (str): One or two flags, e.g. `"-v", "--verbose"`.
            nargs (int | str | None): Arity shorthand: None (flag), N, '?', '*' or '+'.
            min_values (int | None): Explicit minimum, overriding `nargs`.
            max_values (int | None): Explicit maximum, overriding `nargs`.
            required (bool): Whether the option must be present.
            separator (str | None): Character splitting inline values.
            description (str): Free-form description.

        Returns:
            Option: The registered option.
        """
        option = Option.from_flags(
            *flags,
            nargs=nargs,
            min_values=min_values,
            max_values=max_values,
            required=required,
            separator=separator,
            description=description,
        )
        self.register(option)
        return option

    def add_group(
        self, *members: Option, required: bool = False, name: str | None = None
    ) -> OptionGroup:
        """Declare and register a mutually-exclusive group of options."""
        group = OptionGroup(members=tuple(members), required=required, name=name)
        self.register(group)
        return group

    @property
    def declarations(self) -> list[Declaration]:
        return list(self._declarations)

    @property
    def options(self) -> list[Option]:
        """Every declared option, group members included, in declaration order."""
        return list(self._options)

    @property
    def groups(self) -> list[OptionGroup]:
        return [d for d in self._declarations if isinstance(d, OptionGroup)]

    def get_option(self, name: str) -> Option | None:
        """Return the declared option whose name or alias matches exactly, if any."""
        return next((option for option in self._options if option.matches(name)), None)

    def group_of(self, option: Option) -> OptionGroup | None:
        return self._group_of.get(option)

    def _split_inline(self, token: str) -> tuple[str, str | None]:
        """Split `--name=value` into `('--name', 'value')`."""
        if is_option_shaped(token) and INLINE_ASSIGN in token:
            head, _, inline = token.partition(INLINE_ASSIGN)
            return head, inline
        return token, None

    def _match(self, head: str) -> tuple[Declaration, Option] | None:
        """Resolve an option-shaped token head against declarations, first match wins."""
        for declaration in self._declarations:
            option = declaration.resolve(head)
            if option is not None:
                return declaration, option

        if self.allow_abbreviations and head.startswith(PREFIX_LONG):
            prefix = strip_prefix(head)
            if not prefix:
                return None
            for option in self._options:
                if option.name.startswith(prefix):
                    logger.debug("Abbreviation '%s' resolved to '%s'", head, option)
                    return self._group_of.get(option, option), option
        return None

    def _select(
        self, group: OptionGroup, option: Option, selected: dict[OptionGroup, Option]
    ) -> None:
        previous = selected.get(group)
        if previous is not None and previous != option:
            raise ConflictingGroupSelection(group, previous, option)
        selected[group] = option
        logger.debug("Group '%s' resolved to '%s'", group, option)

    def _check_arity(self, option: Option, got: int) -> None:
        if option.max_values is not None and got > option.max_values:
            raise TooManyValues(option, option.max_values, got)
        if got < option.min_values:
            raise InsufficientValues(option, option.min_values, got)

    def _dispatch(
        self,
        token: str,
        result: ParsedCmdLine,
        selected: dict[OptionGroup, Option],
    ) -> PendingValues | None:
        """Handle one token in EXPECT_OPTION_OR_POSITIONAL state."""
        if not is_option_shaped(token):
            result._add_unknown_token(token)
            return None

        head, inline = self._split_inline(token)
        match = self._match(head)
        if match is None:
            logger.debug("Unrecognized option token '%s'", token)
            result._add_unknown_token(token)
            return None

        declaration, option = match
        if isinstance(declaration, OptionGroup):
            self._select(declaration, option, selected)

        if inline is not None:
            values = option.split_values(inline)
            self._check_arity(option, len(values))
            result._add_values(option, values)
            return None

        if option.is_flag:
            result._add_values(option, [])
            return None

        return PendingValues(option)

    def _ends_collection(self, pending: PendingValues, token: str) -> bool:
        """Decide whether a token ends value collection for the pending option."""
        if not is_option_shaped(token):
            return False
        head, _ = self._split_inline(token)
        if self._match(head) is not None:
            if pending.minimum_met:
                return True
            raise InsufficientValues(
                pending.option, pending.option.min_values, pending.collected
            )
        return pending.option.is_unbounded and pending.minimum_met

    def _finish(self, pending: PendingValues, result: ParsedCmdLine) -> None:
        if not pending.minimum_met:
            raise InsufficientValues(
                pending.option, pending.option.min_values, pending.collected
            )
        result._add_values(pending.option, pending.values)

    def _validate_required(
        self, result: ParsedCmdLine, selected: dict[OptionGroup, Option]
    ) -> None:
        for declaration in self._declarations:
            if isinstance(declaration, OptionGroup):
                if declaration.required and declaration not in selected:
                    raise MissingRequiredGroupSelection(declaration)
            elif declaration.required and not result.has_option(declaration):
                raise MissingRequiredOption(declaration)

    def parse(self, tokens: Sequence[str] | None = None) -> ParsedCmdLine:
        """
        Parse a token stream into a `ParsedCmdLine`.

        Args:
            tokens (Sequence[str] | None): Raw tokens, without the program name.

        Returns:
            ParsedCmdLine: The matched options and unknown tokens.

        Raises:
            ConflictingGroupSelection: If two members of one group are used.
            InsufficientValues: If an option received fewer values than its minimum.
            TooManyValues: If an inline value carries more values than allowed.
            MissingRequiredOption: If a required option never appeared.
            MissingRequiredGroupSelection: If no member of a required group appeared.
        """
        args = list(tokens) if tokens is not None else []
        result = ParsedCmdLine()
        selected: dict[OptionGroup, Option] = {}
        state = ParseState.EXPECT_OPTION_OR_POSITIONAL
        pending: PendingValues | None = None

        for token in args:
            if not isinstance(token, str):
                raise TypeError(f"Tokens must be strings, got {type(token).__name__}")

            if state == ParseState.COLLECTING_VALUES:
                assert pending is not None, "pending should not be None while collecting"
                if not self._ends_collection(pending, token):
                    pending.add(token)
                    if pending.is_full:
                        self._finish(pending, result)
                        pending = None
                        state = ParseState.EXPECT_OPTION_OR_POSITIONAL
                    continue
                self._finish(pending, result)
                pending = None
                state = ParseState.EXPECT_OPTION_OR_POSITIONAL

            pending = self._dispatch(token, result, selected)
            if pending is not None:
                state = ParseState.COLLECTING_VALUES
                logger.debug("Collecting values for '%s'", pending.option)

        if pending is not None:
            self._finish(pending, result)

        self._validate_required(result, selected)
        logger.debug(
            "Parsed %d token(s): %d option(s), %d unknown",
            len(args),
            len(result),
            len(result.unknown_tokens()),
        )
        return result

    def raise_for_unknown(
        self, parsed: ParsedCmdLine, allow_positional: bool = False
    ) -> None:
        """
        Raise `UnrecognizedOption` for the first unknown token of a parse result.

        Args:
            parsed (ParsedCmdLine): A result produced by this parser.
            allow_positional (bool): If True, only option-shaped unknown tokens fail.

        Raises:
            UnrecognizedOption: With declared flags sharing the token's prefix as
                suggestions.
        """
        for token in parsed.unknown_tokens():
            if allow_positional and not is_option_shaped(token):
                continue
            head, _ = self._split_inline(token)
            suggestions = [
                flag
                for option in self._options
                for flag in option.flags
                if is_option_shaped(head) and flag.startswith(head)
            ]
            raise UnrecognizedOption(token, suggestions)

    def suggest_next(
        self, tokens: Sequence[str], cursor_at_end_of_token: bool = False
    ) -> list[str]:
        """
        Suggest flags that can still be used after the given tokens.

        Flags of options already used, and of the other members of a group that
        already has a selection, are left out. Unless the cursor sits after a
        space, the last token is treated as a partial flag and used as a filter.

        Args:
            tokens (Sequence[str]): Tokens typed so far.
            cursor_at_end_of_token (bool): True if the input ends with whitespace.

        Returns:
            list[str]: Suggested flags, in declaration order.
        """
        tokens = list(tokens)
        stub = ""
        if tokens and not cursor_at_end_of_token:
            stub = tokens.pop()

        used: set[Option] = set()
        blocked: set[OptionGroup] = set()
        for token in tokens:
            if not is_option_shaped(token):
                continue
            head, _ = self._split_inline(token)
            match = self._match(head)
            if match is None:
                continue
            declaration, option = match
            used.add(option)
            if isinstance(declaration, OptionGroup):
                blocked.add(declaration)

        suggestions: list[str] = []
        for option in self._options:
            if option in used or self._group_of.get(option) in blocked:
                continue
            suggestions.extend(flag for flag in option.flags if flag.startswith(stub))
        return suggestions

    def __str__(self) -> str:
        required = sum(option.required for option in self._options)
        return (
            f"CmdLineParser(options={len(self._options)}, groups={len(self.groups)}, "
            f"required={required}, abbreviations={self.allow_abbreviations})"
        )

    def __repr__(self) -> str:
        return str(self)
