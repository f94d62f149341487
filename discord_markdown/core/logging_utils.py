"""Console logging for the command line entry point.

Library modules only call ``logging.getLogger(__name__)``; handlers are
attached here, once, by :func:`discord_markdown.cli.main`. Output goes to
stderr because stdout carries the command's result.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO, Union

from discord_markdown.config import MarkdownConfig

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER = "discord_markdown"


def resolve_level(level: Union[int, str]) -> Optional[int]:
    """Map a level number or name such as ``"debug"`` to a logging level."""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else None


def configure_cli_logging(
    config: MarkdownConfig, *, stream: Optional[TextIO] = None
) -> logging.Logger:
    """Send the package's log records to one stderr handler at the configured level."""

    logger = logging.getLogger(ROOT_LOGGER)
    level = resolve_level(config.log_level)
    logger.setLevel(logging.INFO if level is None else level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    if level is None:
        logger.warning("Unknown log level %r, using INFO", config.log_level)
    return logger


__all__ = ["DEFAULT_FORMAT", "ROOT_LOGGER", "configure_cli_logging", "resolve_level"]
