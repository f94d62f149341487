from dataclasses import dataclass
from pathlib import Path
import sys
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from discord_markdown.config import MarkdownConfig  # noqa: E402

GUILD_ID = 111111111111111111
CHANNEL_ID = 222222222222222222
MESSAGE_ID = 333333333333333333
USER_ID = 444444444444444444
MESSAGE_LINK = f"https://discord.com/channels/{GUILD_ID}/{CHANNEL_ID}/{MESSAGE_ID}"


@dataclass(eq=False)
class DummyUser:
    id: int
    name: str = "tester"

    def __str__(self) -> str:
        return self.name


@pytest.fixture()
def sample_config(tmp_path) -> MarkdownConfig:
    return MarkdownConfig(
        log_level="DEBUG",
        error_log_file=str(tmp_path / "errors.log"),
        max_message_length=2000,
    )


@pytest.fixture()
def message() -> MagicMock:
    msg = MagicMock(spec=discord.Message)
    msg.id = MESSAGE_ID
    return msg


def _attach_message(channel: MagicMock, message: Optional[MagicMock]) -> MagicMock:
    channel.id = CHANNEL_ID
    channel.fetch_message = AsyncMock(return_value=message)
    return channel


@pytest.fixture()
def make_client():
    def factory(channel) -> MagicMock:
        client = MagicMock(spec=discord.Client)
        client.fetch_channel = AsyncMock(return_value=channel)
        client.get_user = MagicMock(return_value=None)
        client.fetch_user = AsyncMock()
        return client

    return factory


@pytest.fixture()
def guild_channel(message):
    def factory(*, view_channel: bool = True, member: Optional[object] = None) -> MagicMock:
        channel = _attach_message(MagicMock(spec=discord.TextChannel), message)
        channel.guild = MagicMock()
        channel.guild.id = GUILD_ID
        channel.guild.get_member = MagicMock(return_value=member or DummyUser(USER_ID))
        channel.guild.fetch_member = AsyncMock()
        channel.permissions_for = MagicMock(return_value=discord.Permissions(view_channel=view_channel))
        return channel

    return factory


@pytest.fixture()
def dm_channel(message):
    def factory(recipient_id: int = USER_ID) -> MagicMock:
        channel = _attach_message(MagicMock(spec=discord.DMChannel), message)
        channel.recipient = DummyUser(recipient_id)
        return channel

    return factory


@pytest.fixture()
def group_channel(message):
    def factory(*names: str) -> MagicMock:
        channel = _attach_message(MagicMock(spec=discord.GroupChannel), message)
        channel.recipients = [DummyUser(index, name) for index, name in enumerate(names, start=1)]
        return channel

    return factory


__all__ = [
    "CHANNEL_ID",
    "DummyUser",
    "GUILD_ID",
    "MESSAGE_ID",
    "MESSAGE_LINK",
    "USER_ID",
]
