"""Chat markdown grammar, sanitizer, escaper and message link resolver.

Parsing, sanitizing and escaping are pure functions over text. Only the
resolver talks to Discord, through the ``discord.Client`` it is given.
"""

from .errors import (
    MalformedLinkError,
    MessageResolveError,
    PermissionDeniedError,
    UnsupportedChannelError,
)
from .escaper import escape
from .links import LinkMatch, match_message_link
from .nodes import Node, NodeKind, ParseContext
from .parser import MarkdownParser, parse
from .resolver import resolve_message_link
from .sanitizer import sanitize

__all__ = [
    "LinkMatch",
    "MalformedLinkError",
    "MarkdownParser",
    "MessageResolveError",
    "Node",
    "NodeKind",
    "ParseContext",
    "PermissionDeniedError",
    "UnsupportedChannelError",
    "escape",
    "match_message_link",
    "parse",
    "resolve_message_link",
    "sanitize",
]
