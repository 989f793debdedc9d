"""Test utilities for the dom2md test suite.

Helpers for building BeautifulSoup trees by hand (mirroring how a parser
would link nodes), rendering them, and checking Markdown output.
"""

import io
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import Comment, NavigableString, Tag

from dom2md import ConvertOptions, walk
from dom2md.api import parse_html

_FACTORY = BeautifulSoup("", "html.parser")


def element(name: str, *children: Any, **attrs: str) -> Tag:
    """Create a detached element, appending ``children`` in order.

    Plain strings become text nodes. Attribute names may use a trailing
    underscore (``class_``) or underscores for dashes (``data_src``).
    """
    attributes = {key.rstrip("_").replace("_", "-"): value for key, value in attrs.items()}
    tag = _FACTORY.new_tag(name, attrs=attributes)
    for child in children:
        tag.append(NavigableString(child) if isinstance(child, str) else child)
    return tag


def comment(text: str) -> Comment:
    """Create a detached comment node."""
    return Comment(text)


def render(node: Any, options: ConvertOptions | None = None, nesting_depth: int = 0) -> str:
    """Walk ``node`` into a string buffer and return the raw output."""
    buffer = io.StringIO()
    walk(node, buffer, nesting_depth, options)
    return buffer.getvalue()


def soup(html: str) -> BeautifulSoup:
    """Parse an HTML fragment with the default parser."""
    return parse_html(html)


def assert_markdown_valid(markdown: str) -> None:
    """Assert basic structural sanity of generated Markdown."""
    lines = markdown.split("\n")

    fence_open = False
    for line in lines:
        if line.lstrip().startswith("```"):
            fence_open = not fence_open
    assert not fence_open, "Unbalanced code fence"

    table_lines = [line for line in lines if line.startswith("| ")]
    if table_lines:
        widths = {line.count(" | ") for line in table_lines}
        assert len(widths) == 1, f"Table rows have differing cell counts: {table_lines}"
