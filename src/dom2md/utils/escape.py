#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dom2md/utils/escape.py
"""Markdown text escaping and code fence utilities."""

from __future__ import annotations

import re

from dom2md.constants import (
    MARKDOWN_SPECIAL_CHARS,
    MIN_CODE_FENCE_LENGTH,
    SAFE_LANGUAGE_IDENTIFIER_PATTERN,
    TABLE_CELL_SPECIAL_CHARS,
)

_WHITESPACE_RUN = re.compile(r"\s+")
_BACKTICK_RUN = re.compile(r"`+")
_SAFE_LANGUAGE = re.compile(SAFE_LANGUAGE_IDENTIFIER_PATTERN)


def escape_markdown(text: str) -> str:
    r"""Backslash-escape Markdown metacharacters in literal text.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Text safe to embed in Markdown without triggering formatting

    Examples
    --------
        >>> escape_markdown("2 * (3 + 4) = [fourteen]")
        '2 \\* \\(3 + 4\\) = \\[fourteen\\]'

    """
    if not text:
        return text

    result = text
    for char in MARKDOWN_SPECIAL_CHARS:
        result = result.replace(char, f"\\{char}")
    return result


def escape_table_cell(text: str) -> str:
    """Escape characters that would break a pipe table cell."""
    for char in TABLE_CELL_SPECIAL_CHARS:
        text = text.replace(char, f"\\{char}")
    return text


def escape_link_text(text: str) -> str:
    """Escape square brackets so text can sit inside ``[...]``."""
    return text.replace("[", r"\[").replace("]", r"\]")


def escape_link_destination(url: str) -> str:
    """Make a URL safe for use inside ``(...)``.

    Spaces and parentheses would end the destination early, so they are
    percent-encoded.
    """
    return url.strip().replace(" ", "%20").replace("(", "%28").replace(")", "%29")


def escape_link_title(title: str) -> str:
    """Escape double quotes in a link or image title."""
    return title.replace('"', '\\"')


def collapse_whitespace(text: str) -> str:
    """Replace every run of whitespace with a single space.

    Leading and trailing whitespace is collapsed, not removed, so inline
    runs keep their separating spaces.
    """
    return _WHITESPACE_RUN.sub(" ", text)


def longest_backtick_run(text: str) -> int:
    """Length of the longest run of consecutive backticks in ``text``."""
    return max((len(run) for run in _BACKTICK_RUN.findall(text)), default=0)


def get_code_fence(code_content: str) -> str:
    """Determine a fence that cannot be closed by the code it wraps.

    The fence is one backtick longer than the longest backtick run in the
    content, with no upper limit.

    Parameters
    ----------
    code_content : str
        Code content to analyze.

    Returns
    -------
    str
        Fence string of at least three backticks (e.g. '```' or '````').

    """
    fence_length = max(MIN_CODE_FENCE_LENGTH, longest_backtick_run(code_content) + 1)
    return "`" * fence_length


def inline_code_span(content: str) -> str:
    """Wrap ``content`` in a code span whose delimiter outnumbers inner backticks."""
    delimiter = "`" * (longest_backtick_run(content) + 1)
    if content.startswith("`") or content.endswith("`"):
        content = f" {content} "
    return f"{delimiter}{content}{delimiter}"


def is_safe_language(language: str) -> bool:
    """Check that a code fence info string cannot inject Markdown."""
    return bool(language) and _SAFE_LANGUAGE.match(language) is not None


__all__ = [
    "escape_markdown",
    "escape_table_cell",
    "escape_link_text",
    "escape_link_destination",
    "escape_link_title",
    "collapse_whitespace",
    "longest_backtick_run",
    "get_code_fence",
    "inline_code_span",
    "is_safe_language",
]
