"""Command line access to the parser, sanitizer, escaper and link matcher.

Usage:
    python -m discord_markdown parse "**hello** <@123456789012345678>"
    echo "> quoted" | python -m discord_markdown sanitize
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from discord_markdown.config import MarkdownConfig
from discord_markdown.core.error_engine import ErrorEngine
from discord_markdown.core.escaper import escape
from discord_markdown.core.links import (
    match_channel_link,
    match_guild_link,
    match_message_link,
    match_webhook_link,
)
from discord_markdown.core.logging_utils import configure_cli_logging
from discord_markdown.core.parser import parse
from discord_markdown.core.sanitizer import sanitize

logger = logging.getLogger(__name__)

EXIT_NO_MATCH = 1
EXIT_TOO_LONG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="discord_markdown",
        description="Parse, sanitize and escape chat markdown, or decode message links.",
    )
    parser.add_argument(
        "command",
        choices=["parse", "sanitize", "escape", "link"],
        help="Operation to run on the input text.",
    )
    parser.add_argument(
        "text",
        nargs="?",
        help="Input text. Read from stdin when omitted.",
    )
    return parser


def _match_link(text: str) -> Optional[dict]:
    for kind, matcher in (
        ("message", match_message_link),
        ("channel", match_channel_link),
        ("guild", match_guild_link),
        ("webhook", match_webhook_link),
    ):
        match = matcher(text)
        if match is not None:
            data = {key: value for key, value in asdict(match).items() if value is not None}
            return {"kind": kind, **data}
    return None


def run(argv: Optional[Sequence[str]] = None, config: Optional[MarkdownConfig] = None) -> int:
    args = build_parser().parse_args(argv)
    config = config or MarkdownConfig.from_env()
    text = args.text if args.text is not None else sys.stdin.read()

    if len(text) > config.max_message_length:
        logger.error(
            "Input is %d characters, above the %d character limit",
            len(text),
            config.max_message_length,
        )
        return EXIT_TOO_LONG

    if args.command == "parse":
        output = json.dumps([node.to_dict() for node in parse(text)], ensure_ascii=False, indent=2)
    elif args.command == "sanitize":
        output = sanitize(text)
    elif args.command == "escape":
        output = escape(text)
    else:
        found = _match_link(text.strip())
        if found is None:
            logger.warning("No platform link found in input")
            return EXIT_NO_MATCH
        output = json.dumps(found, indent=2)

    print(output)
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    load_dotenv()
    config = MarkdownConfig.from_env()
    configure_cli_logging(config)
    ErrorEngine(log_file=config.error_log_file).catch_uncaught()
    sys.exit(run(argv, config))


__all__ = ["build_parser", "main", "run"]
