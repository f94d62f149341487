import io
import logging

from discord_markdown.config import MarkdownConfig
from discord_markdown.core.logging_utils import ROOT_LOGGER, configure_cli_logging, resolve_level


def _reset(logger: logging.Logger):
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def test_configure_installs_single_stream_handler():
    logger = configure_cli_logging(MarkdownConfig(log_level="DEBUG"))
    try:
        configure_cli_logging(MarkdownConfig(log_level="DEBUG"))
        assert logger.name == ROOT_LOGGER
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False
    finally:
        _reset(logger)


def test_package_records_reach_the_stream():
    stream = io.StringIO()
    logger = configure_cli_logging(MarkdownConfig(log_level="info"), stream=stream)
    try:
        logging.getLogger("discord_markdown.cli").info("hello from the cli")
        logging.getLogger("discord_markdown.cli").debug("hidden")
    finally:
        _reset(logger)

    output = stream.getvalue()
    assert "discord_markdown.cli - INFO - hello from the cli" in output
    assert "hidden" not in output


def test_unknown_level_falls_back_to_info_with_warning():
    stream = io.StringIO()
    logger = configure_cli_logging(MarkdownConfig(log_level="chatty"), stream=stream)
    try:
        assert logger.level == logging.INFO
    finally:
        _reset(logger)

    assert "Unknown log level 'chatty'" in stream.getvalue()


def test_resolve_level():
    assert resolve_level(logging.ERROR) == logging.ERROR
    assert resolve_level(" warning ") == logging.WARNING
    assert resolve_level("nope") is None
