"""Message markdown utilities for a Discord archive bot."""

from discord_markdown.core import (
    LinkMatch,
    MalformedLinkError,
    MarkdownParser,
    MessageResolveError,
    Node,
    NodeKind,
    ParseContext,
    PermissionDeniedError,
    UnsupportedChannelError,
    escape,
    match_message_link,
    parse,
    resolve_message_link,
    sanitize,
)

__version__ = "0.1.0"

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
