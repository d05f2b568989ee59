# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines structural protocols shared by the option model.

`OptionIdentity` is the contract both a single `Option` and an `OptionGroup`
fulfil: each can answer whether a token refers to it, and can report which
concrete `Option` the token resolves to. A group resolves to one of its members,
never to itself, so parse results are always keyed by a member.

Protocols:
- OptionIdentity: `matches(token)` plus `resolve(token)`.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from cmdline.parser.option import Option


@runtime_checkable
class OptionIdentity(Protocol):
    def matches(self, token: str) -> bool: ...

    def resolve(self, token: str) -> Option | None: ...
