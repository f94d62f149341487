"""Parsed message structure.

A parse produces a flat sequence of :class:`Node` values. Containers hold a
tuple of child nodes, literal kinds hold ``text`` and platform references
hold identifiers. Nodes are immutable and created per call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


class NodeKind(str, Enum):
    """Known node kinds produced by the message grammar."""

    TEXT = "text"
    BLOCK_QUOTE = "block_quote"
    CODE_BLOCK = "code_block"
    INLINE_CODE = "inline_code"
    EM = "em"
    STRONG = "strong"
    UNDERLINE = "u"
    STRIKE = "strike"
    LINK = "link"
    URL = "url"
    AUTOLINK = "autolink"
    SPOILER = "spoiler"
    BR = "br"
    USER_MENTION = "user_mention"
    CHANNEL_MENTION = "channel_mention"
    ROLE_MENTION = "role_mention"
    CUSTOM_EMOJI = "custom_emoji"
    EMOJI = "emoji"
    EVERYONE = "everyone"
    HERE = "here"


CONTAINER_KINDS = frozenset(
    {
        NodeKind.STRONG,
        NodeKind.EM,
        NodeKind.UNDERLINE,
        NodeKind.STRIKE,
        NodeKind.LINK,
        NodeKind.URL,
        NodeKind.AUTOLINK,
        NodeKind.SPOILER,
        NodeKind.BLOCK_QUOTE,
    }
)

REFERENCE_KINDS = frozenset(
    {
        NodeKind.USER_MENTION,
        NodeKind.CHANNEL_MENTION,
        NodeKind.ROLE_MENTION,
        NodeKind.EVERYONE,
        NodeKind.HERE,
        NodeKind.CUSTOM_EMOJI,
        NodeKind.EMOJI,
    }
)

LITERAL_KINDS = frozenset({NodeKind.INLINE_CODE, NodeKind.CODE_BLOCK, NodeKind.TEXT})


@dataclass(frozen=True)
class ParseContext:
    """Per-call parser state. Rules derive new contexts instead of mutating.

    ``depth`` counts nested parses and is raised by the engine, not by rules.
    """

    in_quote: bool = False
    inline: bool = False
    depth: int = 0


@dataclass(frozen=True)
class Node:
    """One unit of parsed message structure."""

    kind: Union[NodeKind, str]
    children: Tuple["Node", ...] = ()
    text: Optional[str] = None
    target: Optional[str] = None
    lang: Optional[str] = None
    in_quote: bool = False
    id: Optional[str] = None
    name: Optional[str] = None
    animated: Optional[bool] = None
    # Source text consumed by the rule that produced this node.
    raw: str = field(default="", compare=False, repr=False)

    def to_dict(self) -> dict:
        """Return a JSON-friendly view, omitting unset fields."""

        kind = self.kind.value if isinstance(self.kind, NodeKind) else str(self.kind)
        data: dict = {"type": kind}
        if self.children:
            data["content"] = [child.to_dict() for child in self.children]
        elif self.text is not None:
            data["content"] = self.text
        for key in ("target", "lang", "id", "name", "animated"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        if self.kind == NodeKind.CODE_BLOCK:
            data["in_quote"] = self.in_quote
        return data


def text_node(text: str, raw: str = "") -> Node:
    return Node(kind=NodeKind.TEXT, text=text, raw=raw)


__all__ = [
    "CONTAINER_KINDS",
    "LITERAL_KINDS",
    "REFERENCE_KINDS",
    "Node",
    "NodeKind",
    "ParseContext",
    "text_node",
]
