import pytest

from discord_markdown.core import links
from discord_markdown.core.links import (
    LinkMatch,
    match_channel_link,
    match_guild_link,
    match_mention,
    match_message_link,
    match_webhook_link,
)

from conftest import CHANNEL_ID, GUILD_ID, MESSAGE_ID, MESSAGE_LINK


def test_message_link_happy_path():
    match = match_message_link(MESSAGE_LINK)
    assert match == LinkMatch(
        scheme="https",
        guild_id=str(GUILD_ID),
        channel_id=str(CHANNEL_ID),
        message_id=str(MESSAGE_ID),
    )
    assert match.is_direct_message is False


def test_direct_message_link_on_canary():
    match = match_message_link(f"https://canary.discord.com/channels/@me/{CHANNEL_ID}/{MESSAGE_ID}")
    assert match.guild_id == "@me"
    assert match.version == "canary"
    assert match.is_direct_message is True


def test_protocol_link_reports_discord_scheme():
    match = match_message_link(f"discord://-/channels/{GUILD_ID}/{CHANNEL_ID}/{MESSAGE_ID}")
    assert match.scheme == "discord"
    assert match.message_id == str(MESSAGE_ID)


def test_scheme_is_optional():
    match = match_message_link(f"ptb.discord.com/channels/{GUILD_ID}/{CHANNEL_ID}/{MESSAGE_ID}")
    assert match.scheme is None
    assert match.version == "ptb"


def test_link_embedded_in_text():
    match = match_message_link(f"look at {MESSAGE_LINK} please")
    assert match.channel_id == str(CHANNEL_ID)


@pytest.mark.parametrize(
    "text",
    [
        None,
        "",
        "not a link",
        f"https://discord.com/channels/{GUILD_ID}/{CHANNEL_ID}",
        "https://discord.com/channels/11111111111111111/22222222222222222/33333333333333333",
        f"https://discord.com/channels/{GUILD_ID}1/{CHANNEL_ID}/{MESSAGE_ID}",
        f"https://example.com/channels/{GUILD_ID}/{CHANNEL_ID}/{MESSAGE_ID}",
    ],
)
def test_non_message_links_do_not_match(text):
    assert match_message_link(text) is None


def test_channel_and_guild_patterns_share_prefix():
    channel = match_channel_link(f"https://discord.com/channels/{GUILD_ID}/{CHANNEL_ID}")
    assert (channel.guild_id, channel.channel_id, channel.message_id) == (str(GUILD_ID), str(CHANNEL_ID), None)

    guild = match_guild_link(f"https://discord.com/channels/{GUILD_ID}")
    assert guild.guild_id == str(GUILD_ID)
    assert guild.channel_id is None


def test_webhook_with_token():
    token = "AbC-dEf_123" * 6
    match = match_webhook_link(f"https://discord.com/api/webhooks/{CHANNEL_ID}/{token}/")
    assert match.webhook_id == str(CHANNEL_ID)
    assert match.webhook_token == token


def test_webhook_without_token():
    match = match_webhook_link(f"https://discord.com/api/webhooks/{CHANNEL_ID}")
    assert match.webhook_id == str(CHANNEL_ID)
    assert match.webhook_token is None


def test_webhook_requires_api_path():
    assert match_webhook_link(f"https://discord.com/{CHANNEL_ID}") is None


@pytest.mark.parametrize("mention", ["<@{id}>", "<@!{id}>", "<@&{id}>"])
def test_mention_pattern(mention):
    match = match_mention(mention.format(id=GUILD_ID))
    assert match.mention_id == str(GUILD_ID)


def test_broken_fragment_fails_on_compile():
    with pytest.raises(RuntimeError):
        links._compile("broken", f"{links.BASE}/(?P<open>")


def test_non_ascii_digits_are_not_snowflakes():
    eastern = "١" * 18
    assert match_message_link(f"https://discord.com/channels/{eastern}/{eastern}/{eastern}") is None
    assert match_channel_link(f"https://discord.com/channels/@me/{eastern}") is None
    assert match_mention(f"<@{eastern}>") is None
