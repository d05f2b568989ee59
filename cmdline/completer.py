# Cmdline Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provides `OptionCompleter`, a Prompt Toolkit completer that suggests the flags
declared on a `CmdLineParser`.

Suggestions come from `CmdLineParser.suggest_next()`, so options that were
already used, and siblings of an already selected group member, are not offered
again. Suggestions containing whitespace are quoted so they survive shell-style
tokenization.

Example:
    session = PromptSession(completer=OptionCompleter(parser))
"""
from __future__ import annotations

import os
import shlex
from typing import TYPE_CHECKING, Iterable

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

if TYPE_CHECKING:
    from cmdline.parser.cmd_line_parser import CmdLineParser


class OptionCompleter(Completer):
    """
    Prompt Toolkit completer for the options of one `CmdLineParser`.

    Args:
        parser (CmdLineParser): The parser whose declared options are completed.
    """

    def __init__(self, parser: "CmdLineParser"):
        self.parser = parser

    def get_completions(
        self, document: Document, complete_event: CompleteEvent | None
    ) -> Iterable[Completion]:
        """
        Compute completions for the text before the cursor.

        Args:
            document (Document): The current Prompt Toolkit document.
            complete_event: The triggering event, not used here.

        Yields:
            Completion: Flags matching the partial token under the cursor.
        """
        text = document.text_before_cursor
        try:
            tokens = shlex.split(text)
        except ValueError:
            return
        cursor_at_end_of_token = not tokens or text.endswith((" ", "\t"))
        stub = "" if cursor_at_end_of_token else tokens[-1]

        suggestions = self.parser.suggest_next(tokens, cursor_at_end_of_token)
        yield from self._yield_lcp_completions(suggestions, stub)

    def _ensure_quote(self, text: str) -> str:
        if " " in text or "\t" in text:
            return f'"{text}"'
        return text

    def _yield_lcp_completions(
        self, suggestions: list[str], stub: str
    ) -> Iterable[Completion]:
        """
        Yield completions for the stub using longest-common-prefix logic.

        A single match is yielded fully. Several matches sharing a prefix longer
        than the stub first yield that prefix, then every match.
        """
        matches = [s for s in suggestions if s.startswith(stub)]
        if not matches:
            return

        lcp = os.path.commonprefix(matches)

        if len(matches) == 1:
            yield Completion(
                self._ensure_quote(matches[0]),
                start_position=-len(stub),
                display=matches[0],
            )
            return
        if len(lcp) > len(stub) and lcp not in ("-", "--"):
            yield Completion(lcp, start_position=-len(stub), display=lcp)
        for match in matches:
            yield Completion(
                self._ensure_quote(match), start_position=-len(stub), display=match
            )
