"""Exceptions raised while matching and resolving message links."""

from __future__ import annotations

from typing import Optional


class MalformedLinkError(ValueError):
    """Raised when a string is not a message link."""

    def __init__(self, message: str, link: Optional[str] = None) -> None:
        self.link = link
        super().__init__(message)


class MessageResolveError(RuntimeError):
    """Base class for failures after a link was recognised."""

    def __init__(
        self,
        message: str,
        *,
        channel_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> None:
        self.channel_id = channel_id
        self.user_id = user_id
        super().__init__(message)


class UnsupportedChannelError(MessageResolveError):
    """Raised when the linked channel cannot hold messages."""


class PermissionDeniedError(MessageResolveError):
    """Raised when the requesting user may not read the linked channel."""


__all__ = [
    "MalformedLinkError",
    "MessageResolveError",
    "PermissionDeniedError",
    "UnsupportedChannelError",
]
