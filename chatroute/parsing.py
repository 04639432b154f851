"""Prefix detection and tokenization of incoming messages."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["parse_components", "split_path", "strip_consumed"]


def parse_components(text: str, prefix: str) -> list[str]:
    """Tokenize a message addressed to the router.

    The prefix must lead the raw text (no whitespace before it) and be glued
    to the first token. Whitespace runs are collapsed, so ";;test   my" gives
    ["test", "my"]. Exactly one prefix length is stripped: with prefix ";;",
    ";;;;test" gives [";;test"].

    Args:
        text: The raw message text
        prefix: The configured prefix

    Returns:
        The tokens, or an empty list when the message is not a command
    """
    if not text.startswith(prefix):
        return []
    components = text.split()
    if not components or components[0] == prefix:
        return []
    components[0] = components[0][len(prefix) :]
    return components


def split_path(path: str) -> list[str]:
    """Split a space separated command path into segments."""
    return path.split()


def strip_consumed(text: str, prefix: str, through: Sequence[str]) -> str:
    """Remove the prefix and the consumed command path from `text`.

    Args:
        text: The raw message text
        prefix: The configured prefix
        through: The path segments consumed while resolving the command

    Returns:
        The remaining text, trimmed
    """
    pattern = "^" + re.escape(prefix) + r"\s+".join(re.escape(segment) for segment in through) + r"\s*"
    return re.sub(pattern, "", text, count=1).strip()
