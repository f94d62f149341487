"""Grammar rule table for the chat markdown dialect.

The table is assembled once at import time: a base grammar covering the
generic markdown subset is combined with chat-specific overrides and the
platform reference rules, then sorted by ``(order, declaration index)``.

Each rule has a ``match`` callable ``(source, context, prev_capture)`` that
returns an ``re.Match`` anchored at the start of ``source`` (or ``None``),
and a ``parse`` callable ``(capture, nested_parse, context)`` returning the
produced :class:`Node` together with the context the caller continues with.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import Enum, IntEnum
from typing import Callable, Dict, List, Mapping, Optional, Pattern, Sequence, Tuple

from discord_markdown.core.nodes import Node, NodeKind, ParseContext, text_node

NestedParser = Callable[[str, ParseContext], List[Node]]
MatchFn = Callable[[str, ParseContext, str], Optional[re.Match]]
ParseFn = Callable[[re.Match, NestedParser, ParseContext], Tuple[Node, ParseContext]]


class Order(IntEnum):
    """Precedence tiers, lowest is tried first."""

    SPOILER = 0
    CODE_BLOCK = 1
    BLOCK_QUOTE = 2
    ESCAPE = 3
    AUTOLINK = 4
    URL = 5
    EMPHASIS = 6
    STRIKE = 7
    INLINE_CODE = 8
    LINE_BREAK = 9
    TEXT = 10


class Scope(Enum):
    INLINE = "inline"
    BLOCK = "block"
    ANY = "any"


@dataclass(frozen=True)
class GrammarRule:
    """A named (match, parse) pair with a fixed precedence.

    ``nests`` marks rules whose parse recurses into the captured content.
    """

    name: str
    order: int
    match: MatchFn
    parse: ParseFn
    nests: bool = False


def regex_match(pattern: Pattern[str], scope: Scope = Scope.INLINE) -> MatchFn:
    """Build a match capability from a compiled pattern and a scope."""

    def match(source: str, context: ParseContext, prev_capture: str) -> Optional[re.Match]:
        if scope is Scope.INLINE and not context.inline:
            return None
        if scope is Scope.BLOCK and context.inline:
            return None
        return pattern.match(source)

    return match


# --- base grammar -----------------------------------------------------------

_TEXT_R = re.compile(r"[\s\S]+?(?=[^0-9A-Za-z\s\u00c0-\U0010ffff]|\n\n| {2,}\n|[0-9A-Za-z_]+:\S|\Z)")
_ESCAPE_R = re.compile(r"\\([^0-9A-Za-z\s])")
_AUTOLINK_R = re.compile(r"<([^: >]+:/[^ >]+)>")
_URL_R = re.compile(r"(https?://[^\s<]+[^<.,:;\"')\]\s])")
_EM_R = re.compile(
    # _underscores_ only around words
    r"(?<![0-9A-Za-z_])_((?:__|\\[\s\S]|[^\\_])+?)_(?![0-9A-Za-z_])"
    # or *stars* followed by a non-space; ** inside does not close
    r"|\*(?=\S)((?:\*\*|\\[\s\S]|\s+(?:\\[\s\S]|[^\s*\\]|\*\*)|[^\s*\\])+?)\*(?!\*)"
)
_STRONG_R = re.compile(r"\*\*((?:\\[\s\S]|[^\\])+?)\*\*(?!\*)")
_UNDERLINE_R = re.compile(r"__((?:\\[\s\S]|[^\\])+?)__(?!_)")
_DEL_R = re.compile(r"~~(?=\S)((?:\\[\s\S]|~(?!~)|[^\s~\\]|\s(?!~~))+?)~~")
_INLINE_CODE_R = re.compile(r"(`+)([\s\S]*?[^`])\1(?!`)")
_INLINE_CODE_PADDING_R = re.compile(r"^ (?= *`)|(` *) $")
_BR_R = re.compile(r" {2,}\n")


def _parse_text(capture, parse, context):
    return text_node(capture.group(0)), context


def _parse_escape(capture, parse, context):
    return text_node(capture.group(1)), context


def _parse_link_target(kind: NodeKind) -> ParseFn:
    # Bare and angle-bracketed URLs keep the literal text as both label and target.
    def parse_fn(capture, parse, context):
        url = capture.group(1)
        return Node(kind=kind, children=(text_node(url),), target=url), context

    return parse_fn


def _parse_wrapped(kind: NodeKind, *groups: int) -> ParseFn:
    def parse_fn(capture, parse, context):
        content = next((capture.group(g) for g in groups if capture.group(g)), "")
        return Node(kind=kind, children=tuple(parse(content, context))), context

    return parse_fn


def _parse_inline_code(capture, parse, context):
    content = _INLINE_CODE_PADDING_R.sub(r"\1", capture.group(2))
    return Node(kind=NodeKind.INLINE_CODE, text=content), context


def _parse_br(capture, parse, context):
    return Node(kind=NodeKind.BR), context


# The chat dialect replaces the text, strike and br matchers; see CHAT_OVERRIDES.
BASE_RULES: Mapping[str, GrammarRule] = {
    "escape": GrammarRule("escape", Order.ESCAPE, regex_match(_ESCAPE_R), _parse_escape),
    "autolink": GrammarRule(
        "autolink", Order.AUTOLINK, regex_match(_AUTOLINK_R), _parse_link_target(NodeKind.AUTOLINK)
    ),
    "url": GrammarRule("url", Order.URL, regex_match(_URL_R), _parse_link_target(NodeKind.URL)),
    "em": GrammarRule(
        "em", Order.EMPHASIS, regex_match(_EM_R), _parse_wrapped(NodeKind.EM, 2, 1), nests=True
    ),
    "strong": GrammarRule(
        "strong", Order.EMPHASIS, regex_match(_STRONG_R), _parse_wrapped(NodeKind.STRONG, 1), nests=True
    ),
    "u": GrammarRule(
        "u", Order.EMPHASIS, regex_match(_UNDERLINE_R), _parse_wrapped(NodeKind.UNDERLINE, 1), nests=True
    ),
    "strike": GrammarRule(
        "strike", Order.STRIKE, regex_match(_DEL_R), _parse_wrapped(NodeKind.STRIKE, 1), nests=True
    ),
    "inline_code": GrammarRule(
        "inline_code", Order.INLINE_CODE, regex_match(_INLINE_CODE_R), _parse_inline_code
    ),
    "br": GrammarRule("br", Order.LINE_BREAK, regex_match(_BR_R), _parse_br),
    "text": GrammarRule("text", Order.TEXT, regex_match(_TEXT_R, Scope.ANY), _parse_text),
}


# --- chat dialect overrides ---------------------------------------------------

_BLOCK_QUOTE_R = re.compile(r"( *>>> ([\s\S]*))|( *> [^\n]*(\n *> [^\n]*)*\n?)")
_BLOCK_QUOTE_BLOCK_MARKER_R = re.compile(r"^ *>>> ?")
_BLOCK_QUOTE_LINE_MARKER_R = re.compile(r"^ *> ?", re.MULTILINE)
_LINE_START_R = re.compile(r"(?:^|\n *)\Z")
_CHAT_TEXT_R = re.compile(r"[\s\S]+?(?=[^0-9A-Za-z\s\u00c0-\U0010ffff-]|\n\n|\n|[0-9A-Za-z_]+:\S|\Z)")
_CODE_BLOCK_R = re.compile(r"```(([a-z0-9-]+?)\n+)?\n*([\s\S]+?)\n*```", re.IGNORECASE)
_STRIKE_R = re.compile(r"~~([\s\S]+?)~~(?!_)")
_SHRUG_R = re.compile(r"(¯\\_\(ツ\)_/¯)")
_NEWLINE_R = re.compile(r"\n")
_SPOILER_R = re.compile(r"\|\|([\s\S]+?)\|\|")


def _match_block_quote(source: str, context: ParseContext, prev_capture: str):
    if context.in_quote or not _LINE_START_R.search(prev_capture):
        return None
    return _BLOCK_QUOTE_R.match(source)


def _parse_block_quote(capture, parse, context):
    whole = capture.group(0)
    if _BLOCK_QUOTE_BLOCK_MARKER_R.match(whole):
        content = _BLOCK_QUOTE_BLOCK_MARKER_R.sub("", whole, count=1)
        nested = replace(context, in_quote=True)
    else:
        # Single-line quotes cannot hold block-level constructs.
        content = _BLOCK_QUOTE_LINE_MARKER_R.sub("", whole)
        nested = replace(context, in_quote=True, inline=True)
    return Node(kind=NodeKind.BLOCK_QUOTE, children=tuple(parse(content, nested))), context


def _parse_code_block(capture, parse, context):
    node = Node(
        kind=NodeKind.CODE_BLOCK,
        lang=(capture.group(2) or "").strip(),
        text=capture.group(3),
        in_quote=context.in_quote,
    )
    return node, context


def _parse_emoticon(capture, parse, context):
    return text_node(capture.group(1)), context


CHAT_OVERRIDES: Mapping[str, Mapping[str, object]] = {
    # Stop before any special character or newline, and before word:nonspace
    # so bare URLs are left for the url rule.
    "text": {"match": regex_match(_CHAT_TEXT_R, Scope.ANY)},
    "strike": {"match": regex_match(_STRIKE_R)},
    "br": {"match": regex_match(_NEWLINE_R, Scope.ANY)},
}

CHAT_RULES: Sequence[GrammarRule] = (
    GrammarRule(
        "spoiler",
        Order.SPOILER,
        regex_match(_SPOILER_R, Scope.ANY),
        _parse_wrapped(NodeKind.SPOILER, 1),
        nests=True,
    ),
    GrammarRule("code_block", Order.CODE_BLOCK, regex_match(_CODE_BLOCK_R), _parse_code_block),
    GrammarRule(
        "block_quote", Order.BLOCK_QUOTE, _match_block_quote, _parse_block_quote, nests=True
    ),
    # Consumed whole so its backslash and underscores never reach escape or em.
    GrammarRule("emoticon", Order.TEXT, regex_match(_SHRUG_R, Scope.ANY), _parse_emoticon),
)


# --- platform references ------------------------------------------------------

_USER_R = re.compile(r"<@!?([0-9]*)>")
_CHANNEL_R = re.compile(r"<#?([0-9]*)>")
_ROLE_R = re.compile(r"<@&([0-9]*)>")
_EMOJI_R = re.compile(r"<(a?):([0-9A-Za-z_]+):([0-9]+)>")
_EVERYONE_R = re.compile(r"@everyone")
_HERE_R = re.compile(r"@here")


def _parse_reference(kind: NodeKind) -> ParseFn:
    def parse_fn(capture, parse, context):
        node_id = capture.group(1) if capture.re.groups else None
        return Node(kind=kind, id=node_id), context

    return parse_fn


def _parse_custom_emoji(capture, parse, context):
    node = Node(
        kind=NodeKind.CUSTOM_EMOJI,
        animated=capture.group(1) == "a",
        name=capture.group(2),
        id=capture.group(3),
    )
    return node, context


def _reference_rule(name: str, pattern: Pattern[str], parse: ParseFn) -> GrammarRule:
    return GrammarRule(name, Order.EMPHASIS, regex_match(pattern, Scope.ANY), parse)


PLATFORM_RULES: Sequence[GrammarRule] = (
    _reference_rule("user_mention", _USER_R, _parse_reference(NodeKind.USER_MENTION)),
    _reference_rule("channel_mention", _CHANNEL_R, _parse_reference(NodeKind.CHANNEL_MENTION)),
    _reference_rule("role_mention", _ROLE_R, _parse_reference(NodeKind.ROLE_MENTION)),
    _reference_rule("custom_emoji", _EMOJI_R, _parse_custom_emoji),
    _reference_rule("everyone", _EVERYONE_R, _parse_reference(NodeKind.EVERYONE)),
    _reference_rule("here", _HERE_R, _parse_reference(NodeKind.HERE)),
)


# Declaration order breaks ties inside a precedence tier.
DECLARATION_ORDER: Tuple[str, ...] = (
    "spoiler",
    "code_block",
    "block_quote",
    "escape",
    "autolink",
    "url",
    "em",
    "strong",
    "u",
    "user_mention",
    "channel_mention",
    "role_mention",
    "custom_emoji",
    "everyone",
    "here",
    "strike",
    "inline_code",
    "br",
    "emoticon",
    "text",
)


def build_rule_set(
    base: Mapping[str, GrammarRule],
    overrides: Mapping[str, Mapping[str, object]],
    extra: Sequence[GrammarRule],
    declaration: Sequence[str],
) -> Tuple[GrammarRule, ...]:
    """Compose base rules, field overrides and extra rules into an ordered table.

    Rules are picked by name in ``declaration`` order and then sorted on
    ``(order, declaration index)``. Unknown names and duplicates raise
    immediately so a broken grammar fails at import time.
    """

    unknown = set(overrides) - set(base)
    if unknown:
        raise KeyError(f"Overrides for unknown base rules: {sorted(unknown)}")

    available: Dict[str, GrammarRule] = {
        name: replace(rule, **overrides.get(name, {})) for name, rule in base.items()
    }
    for rule in extra:
        if rule.name in available:
            raise ValueError(f"Duplicate rule name: {rule.name}")
        available[rule.name] = rule

    missing = [name for name in declaration if name not in available]
    if missing:
        raise KeyError(f"Undefined rules in declaration: {missing}")

    indexed = sorted(
        ((available[name].order, index, available[name]) for index, name in enumerate(declaration)),
        key=lambda item: (item[0], item[1]),
    )
    return tuple(rule for _, _, rule in indexed)


RULES: Tuple[GrammarRule, ...] = build_rule_set(
    BASE_RULES,
    CHAT_OVERRIDES,
    (*CHAT_RULES, *PLATFORM_RULES),
    DECLARATION_ORDER,
)


__all__ = [
    "BASE_RULES",
    "CHAT_OVERRIDES",
    "CHAT_RULES",
    "DECLARATION_ORDER",
    "GrammarRule",
    "MatchFn",
    "NestedParser",
    "Order",
    "PLATFORM_RULES",
    "ParseFn",
    "RULES",
    "Scope",
    "build_rule_set",
    "regex_match",
]
