# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionGroup`, a mutually-exclusive bundle of `Option` instances.

At most one member of a group may be selected in a single parse. When a token
matches a group, the group reports *which* member matched so the parser can
record values under that member. The group itself never appears as a key in a
`ParsedCmdLine`.

Example:
    output = OptionGroup(
        (Option("json"), Option("xml")),
        required=True,
        name="format",
    )
    output.resolve("--xml")  # -> Option(name="xml", ...)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from cmdline.exceptions import ConfigurationError
from cmdline.parser.option import Option


@dataclass(frozen=True)
class OptionGroup:
    """
    Represents a set of mutually-exclusive options.

    Attributes:
        members (tuple[Option, ...]): Member options, in declaration order.
        required (bool): True if exactly one member must be selected.
        name (str | None): Optional label used in error messages.
    """

    members: tuple[Option, ...]
    required: bool = False
    name: str | None = None

    def __post_init__(self) -> None:
        members = tuple(self.members)
        object.__setattr__(self, "members", members)
        if not members:
            raise ConfigurationError("An option group needs at least one member")
        seen: set[str] = set()
        for member in members:
            if not isinstance(member, Option):
                raise ConfigurationError(
                    f"Option group members must be Option instances, got {type(member).__name__}"
                )
            if member.required:
                raise ConfigurationError(
                    f"Group member '{member.display_name}' cannot be required; "
                    "mark the group as required instead"
                )
            for name in member.names:
                if name in seen:
                    raise ConfigurationError(
                        f"Duplicate name '{name}' in option group '{self.display_name}'"
                    )
                seen.add(name)
        if self.name is not None and not self.name:
            raise ConfigurationError("Option group name must not be empty")

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return "|".join(member.name for member in self.members)

    def matches(self, token: str) -> bool:
        """Check whether the token refers to any member of this group."""
        return self.resolve(token) is not None

    def resolve(self, token: str) -> Option | None:
        """
        Return the first member, in declaration order, that matches the token.

        Args:
            token (str): The raw token or bare name to match.

        Returns:
            Option | None: The matched member, or None.
        """
        for member in self.members:
            if member.matches(token):
                return member
        return None

    def __contains__(self, option: object) -> bool:
        return option in self.members

    def __iter__(self) -> Iterator[Option]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __str__(self) -> str:
        return self.display_name
