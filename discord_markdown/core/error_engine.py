"""Error log for the discord_markdown command line tool.

Exceptions are appended to a rotating log file and summarised on stderr. The
file logger does not propagate, so the console logging set up by the CLI
never repeats a traceback.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import os
import sys
import traceback

from discord_markdown.config import DEFAULT_ERROR_LOG

ERROR_LOGGER = "discord_markdown.errors"


class ErrorEngine:
    def __init__(self, log_file: str = DEFAULT_ERROR_LOG) -> None:
        self.logger = logging.getLogger(ERROR_LOGGER)
        self.logger.propagate = False
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        # Avoid attaching duplicate file handlers if constructed multiple times
        abs_path = os.path.abspath(log_file)
        has_handler = any(
            isinstance(h, RotatingFileHandler)
            and getattr(h, "baseFilename", None) == abs_path
            for h in self.logger.handlers
        )
        if not has_handler:
            handler = RotatingFileHandler(abs_path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
            handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
            self.logger.addHandler(handler)
        self.logger.setLevel(logging.ERROR)

    def log_exception(self, exc: BaseException, context: str = "") -> None:
        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        self.logger.error("Exception in %s: %s\n%s", context, exc, trace)
        print(f"[discord-markdown] {exc} in {context}", file=sys.stderr)

    def catch_uncaught(self) -> None:
        def handle_exception(exc_type, exc_value, exc_traceback):
            if issubclass(exc_type, KeyboardInterrupt):
                sys.__excepthook__(exc_type, exc_value, exc_traceback)
                return
            self.log_exception(exc_value, context="Uncaught Exception")

        sys.excepthook = handle_exception


__all__ = ["ERROR_LOGGER", "ErrorEngine"]
