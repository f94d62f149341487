"""Parser engine driving the grammar rule table over message text."""

from __future__ import annotations

import re
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from discord_markdown.core.nodes import Node, ParseContext
from discord_markdown.core.rules import RULES, GrammarRule

# Past this many nested parses, rules that recurse stop matching and their
# delimiters are left to the text rule.
MAX_NESTING_DEPTH = 64


class MarkdownParser:
    """Applies an ordered rule table until the input is consumed.

    The rule table is never mutated, so one parser instance can serve many
    concurrent calls. All per-call state lives in the :class:`ParseContext`
    values and the previous-capture text threaded through :meth:`_parse`.
    Nesting is capped at ``max_depth`` so deeply stacked delimiters cannot
    exhaust the interpreter stack.
    """

    def __init__(
        self, rules: Sequence[GrammarRule] = RULES, *, max_depth: int = MAX_NESTING_DEPTH
    ) -> None:
        if not rules:
            raise ValueError("A parser needs at least one grammar rule")
        if max_depth < 0:
            raise ValueError("max_depth must not be negative")
        self._rules: Tuple[GrammarRule, ...] = tuple(rules)
        self._max_depth = max_depth

    @property
    def rules(self) -> Tuple[GrammarRule, ...]:
        return self._rules

    def parse(self, text: str) -> List[Node]:
        """Parse a chat message. Messages are always inline content."""

        return self._parse(text or "", ParseContext(inline=True), "")

    def _select(
        self, source: str, context: ParseContext, prev_capture: str
    ) -> Tuple[GrammarRule, "re.Match[str]"]:
        saturated = context.depth >= self._max_depth
        for rule in self._rules:
            if saturated and rule.nests:
                continue
            capture = rule.match(source, context, prev_capture)
            if capture and capture.group(0):
                return rule, capture
        # Only reachable with a custom table that lacks a catch-all text rule.
        raise RuntimeError(f"No grammar rule matched input starting with {source[:20]!r}")

    def _parse(self, source: str, context: ParseContext, prev_capture: str) -> List[Node]:
        nodes: List[Node] = []
        while source:
            rule, capture = self._select(source, context, prev_capture)

            def nested(content: str, nested_context: ParseContext, _prev: str = prev_capture) -> List[Node]:
                deeper = replace(nested_context, depth=nested_context.depth + 1)
                return self._parse(content, deeper, _prev)

            node, context = rule.parse(capture, nested, context)
            raw = capture.group(0)
            nodes.append(replace(node, raw=raw))
            prev_capture = raw
            source = source[len(raw):]
        return nodes


_default_parser: Optional[MarkdownParser] = None


def get_parser() -> MarkdownParser:
    global _default_parser
    if _default_parser is None:
        _default_parser = MarkdownParser()
    return _default_parser


def parse(text: str) -> List[Node]:
    """Parse ``text`` with the default chat grammar."""

    return get_parser().parse(text)


__all__ = ["MAX_NESTING_DEPTH", "MarkdownParser", "get_parser", "parse"]
