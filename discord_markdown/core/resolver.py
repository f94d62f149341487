"""Resolve message links to messages, enforcing the caller's read access."""

from __future__ import annotations

import logging
from typing import Optional, Union

import discord

from discord_markdown.core.errors import (
    MalformedLinkError,
    PermissionDeniedError,
    UnsupportedChannelError,
)
from discord_markdown.core.links import match_message_link

logger = logging.getLogger(__name__)

UserLike = Union[discord.abc.Snowflake, int]


def _principal_id(as_user: UserLike) -> int:
    if isinstance(as_user, int):
        return as_user
    user_id = getattr(as_user, "id", None)
    if user_id is None:
        raise TypeError(f"Cannot resolve a user id from {as_user!r}")
    return int(user_id)


async def _resolve_member(guild: discord.Guild, as_user: UserLike) -> Optional[discord.Member]:
    if isinstance(as_user, discord.Member) and as_user.guild.id == guild.id:
        return as_user
    user_id = _principal_id(as_user)
    member = guild.get_member(user_id)
    if member is not None:
        return member
    try:
        return await guild.fetch_member(user_id)
    except discord.NotFound:
        return None


async def _resolve_username(client: discord.Client, as_user: UserLike) -> Optional[str]:
    if isinstance(as_user, (discord.User, discord.Member, discord.ClientUser)):
        return as_user.name
    user_id = _principal_id(as_user)
    user = client.get_user(user_id)
    if user is None:
        try:
            user = await client.fetch_user(user_id)
        except discord.NotFound:
            return None
    return user.name


async def _can_view(client: discord.Client, channel: discord.abc.Messageable, as_user: UserLike) -> bool:
    if isinstance(channel, (discord.abc.GuildChannel, discord.Thread)):
        member = await _resolve_member(channel.guild, as_user)
        return member is not None and channel.permissions_for(member).view_channel

    if isinstance(channel, discord.DMChannel):
        recipient = channel.recipient
        return recipient is not None and recipient.id == _principal_id(as_user)

    if isinstance(channel, discord.GroupChannel):
        username = await _resolve_username(client, as_user)
        return username is not None and any(r.name == username for r in channel.recipients)

    logger.debug("No access policy for channel type %s", type(channel).__name__)
    return False


async def resolve_message_link(
    client: discord.Client,
    link: str,
    *,
    as_user: UserLike,
) -> discord.Message:
    """Fetch the message ``link`` points to on behalf of ``as_user``.

    Raises :class:`MalformedLinkError` before any lookup when ``link`` is not a
    message link, :class:`UnsupportedChannelError` when the channel cannot
    hold messages and :class:`PermissionDeniedError` when ``as_user`` may not
    read it. ``discord.NotFound`` from either lookup propagates unchanged.
    """

    match = match_message_link(link)
    if match is None:
        logger.debug("Rejected non-message link %r", link)
        raise MalformedLinkError("The provided link is not a message link!", link=link)

    channel_id = int(match.channel_id)
    message_id = int(match.message_id)
    user_id = _principal_id(as_user)

    channel = await client.fetch_channel(channel_id)
    if not isinstance(channel, discord.abc.Messageable):
        logger.debug("Channel %s is a %s, not a text channel", channel_id, type(channel).__name__)
        raise UnsupportedChannelError(
            "Channel is not a text channel!", channel_id=channel_id, user_id=user_id
        )

    if not await _can_view(client, channel, as_user):
        logger.info("User %s denied access to message %s in channel %s", user_id, message_id, channel_id)
        raise PermissionDeniedError(
            "User does not have permission!", channel_id=channel_id, user_id=user_id
        )

    return await channel.fetch_message(message_id)


__all__ = ["UserLike", "resolve_message_link"]
