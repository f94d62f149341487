"""Escape message text so the chat grammar reads it back as literal text.

Code fences are not an option for literal output: the client does not allow
escaping a backtick inside a fence, so every special character is
backslash-escaped instead.
"""

from __future__ import annotations

from typing import Tuple

# Backslash must stay first so later substitutions are not escaped twice.
ESCAPED_CHARACTERS: Tuple[str, ...] = ("\\", "*", "_", "`", "|", "~", ">", "<")


def escape(content: str) -> str:
    """Backslash-escape every markdown-significant character in ``content``."""

    for char in ESCAPED_CHARACTERS:
        content = content.replace(char, f"\\{char}")
    return content


__all__ = ["ESCAPED_CHARACTERS", "escape"]
