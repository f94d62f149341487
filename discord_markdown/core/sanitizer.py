"""Reduce parsed messages to plain text for archival and search."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from discord_markdown.core.nodes import (
    CONTAINER_KINDS,
    LITERAL_KINDS,
    REFERENCE_KINDS,
    Node,
    NodeKind,
)
from discord_markdown.core.parser import MarkdownParser, get_parser

logger = logging.getLogger(__name__)

# Platform references collapse to a single space so words stay separated.
REDACTED_REFERENCE = " "


def sanitize_node(node: Node) -> str:
    """Return the plain-text rendering of one node.

    Formatting containers are unwrapped, platform references are redacted,
    literal content passes through untouched and line breaks become ``\\n``.
    Unknown kinds contribute nothing and are logged.
    """

    kind = node.kind
    if kind in CONTAINER_KINDS:
        return sanitize_nodes(node.children)
    if kind in REFERENCE_KINDS:
        return REDACTED_REFERENCE
    if kind in LITERAL_KINDS:
        return node.text or ""
    if kind == NodeKind.BR:
        return "\n"

    logger.warning("Could not map message node of kind %r: %r", kind, node)
    return ""


def sanitize_nodes(nodes: Iterable[Node]) -> str:
    return "".join(sanitize_node(node) for node in nodes)


def sanitize(text: str, *, parser: Optional[MarkdownParser] = None) -> str:
    """Parse ``text`` and strip all formatting and platform references."""

    return sanitize_nodes((parser or get_parser()).parse(text))


__all__ = ["REDACTED_REFERENCE", "sanitize", "sanitize_node", "sanitize_nodes"]
