"""Patterns for platform URLs and mentions.

Fragments are composed into larger patterns and compiled once at import, so
a broken composition fails immediately. Every pattern captures its pieces
through named groups:

* ``scheme`` / ``version`` - ``http``/``https`` and ``canary``/``ptb`` on web links
* ``guild_id`` - guild snowflake, or ``@me`` for direct messages
* ``channel_id`` / ``message_id`` - channel and message snowflakes
* ``webhook_id`` / ``webhook_token`` - webhook snowflake and optional token
* ``mention_id`` - user or role snowflake in a mention
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Pattern

# https://discord.com/developers/docs/reference#snowflakes
SNOWFLAKE = r"[0-9]{18}(?![0-9])"

WEB_BASE = r"(?:(?P<scheme>https?)://)?(?:(?P<version>canary|ptb)\.)?discord\.com"
PROTOCOL_BASE = r"(?P<protocol>discord)://-"
BASE = f"(?:{WEB_BASE}|{PROTOCOL_BASE})"

GUILD = rf"{BASE}/channels/(?P<guild_id>{SNOWFLAKE}|@me)"
CHANNEL = rf"{GUILD}/(?P<channel_id>{SNOWFLAKE})"
MESSAGE = rf"{CHANNEL}/(?P<message_id>{SNOWFLAKE})"
WEBHOOK = rf"{BASE}/api/webhooks/(?P<webhook_id>{SNOWFLAKE})(?:/(?P<webhook_token>[A-Za-z0-9_-]+)/?)?"
MENTION = rf"<@[!&]?(?P<mention_id>{SNOWFLAKE})>"


def _compile(name: str, pattern: str) -> Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise RuntimeError(f"Invalid {name} link pattern: {exc}") from exc


GUILD_LINK_R = _compile("guild", GUILD)
CHANNEL_LINK_R = _compile("channel", CHANNEL)
MESSAGE_LINK_R = _compile("message", MESSAGE)
WEBHOOK_LINK_R = _compile("webhook", WEBHOOK)
MENTION_R = _compile("mention", MENTION)


@dataclass(frozen=True)
class LinkMatch:
    """Structured view of a matched link or mention."""

    scheme: Optional[str] = None
    version: Optional[str] = None
    guild_id: Optional[str] = None
    channel_id: Optional[str] = None
    message_id: Optional[str] = None
    webhook_id: Optional[str] = None
    webhook_token: Optional[str] = None
    mention_id: Optional[str] = None

    @property
    def is_direct_message(self) -> bool:
        return self.guild_id == "@me"

    @classmethod
    def from_match(cls, match: "re.Match[str]") -> "LinkMatch":
        groups = match.groupdict()
        protocol = groups.pop("protocol", None)
        scheme = groups.pop("scheme", None)
        fields = {key: value for key, value in groups.items() if key in cls.__dataclass_fields__}
        return cls(scheme=protocol or scheme, **fields)


def _search(pattern: Pattern[str], text: Optional[str]) -> Optional[LinkMatch]:
    if not text:
        return None
    match = pattern.search(text)
    return LinkMatch.from_match(match) if match else None


def match_guild_link(text: Optional[str]) -> Optional[LinkMatch]:
    return _search(GUILD_LINK_R, text)


def match_channel_link(text: Optional[str]) -> Optional[LinkMatch]:
    return _search(CHANNEL_LINK_R, text)


def match_message_link(text: Optional[str]) -> Optional[LinkMatch]:
    """Return the guild, channel and message ids of the first message link in ``text``."""

    return _search(MESSAGE_LINK_R, text)


def match_webhook_link(text: Optional[str]) -> Optional[LinkMatch]:
    return _search(WEBHOOK_LINK_R, text)


def match_mention(text: Optional[str]) -> Optional[LinkMatch]:
    return _search(MENTION_R, text)


__all__ = [
    "BASE",
    "CHANNEL",
    "CHANNEL_LINK_R",
    "GUILD",
    "GUILD_LINK_R",
    "LinkMatch",
    "MENTION",
    "MENTION_R",
    "MESSAGE",
    "MESSAGE_LINK_R",
    "PROTOCOL_BASE",
    "SNOWFLAKE",
    "WEBHOOK",
    "WEBHOOK_LINK_R",
    "WEB_BASE",
    "match_channel_link",
    "match_guild_link",
    "match_mention",
    "match_message_link",
    "match_webhook_link",
]
