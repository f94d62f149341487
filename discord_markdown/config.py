"""Environment-backed configuration for the discord_markdown tools."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ERROR_LOG = "logs/discord_markdown_errors.log"
# Client-side cap on message length; enforcing it is up to the caller.
DEFAULT_MAX_LENGTH = 2000


def _int_or_default(value: str, default: int) -> int:
    try:
        parsed = int((value or "").strip())
    except ValueError:
        return default
    return parsed if parsed > 0 else default


@dataclass(slots=True)
class MarkdownConfig:
    log_level: str = "INFO"
    error_log_file: str = DEFAULT_ERROR_LOG
    max_message_length: int = DEFAULT_MAX_LENGTH

    @classmethod
    def from_env(cls) -> "MarkdownConfig":
        return cls(
            log_level=os.getenv("DISCORD_MARKDOWN_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            error_log_file=os.getenv("DISCORD_MARKDOWN_ERROR_LOG", "").strip() or DEFAULT_ERROR_LOG,
            max_message_length=_int_or_default(
                os.getenv("DISCORD_MARKDOWN_MAX_LENGTH", ""), DEFAULT_MAX_LENGTH
            ),
        )


__all__ = ["DEFAULT_ERROR_LOG", "DEFAULT_MAX_LENGTH", "MarkdownConfig"]
