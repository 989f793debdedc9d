#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dom2md/api.py
"""Public conversion entry points.

Three levels are offered:

- :func:`convert_node` streams the Markdown for an already parsed tree
  into any text or binary sink.
- :func:`node_to_markdown` does the same but returns a string.
- :func:`html_to_markdown` parses raw HTML first (string, bytes, path or
  file-like object).

Examples
--------
    >>> html_to_markdown("<h1>Title</h1><p>Some <b>bold</b> text.</p>")
    '# Title\\n\\nSome **bold** text.'

"""

from __future__ import annotations

import io
import logging
import os
import re
from pathlib import Path
from typing import IO, Any, Union

from bs4 import BeautifulSoup, FeatureNotFound

from dom2md.constants import DEFAULT_HTML_PARSER, HTML_FILE_EXTENSIONS, HTML_PARSER_PACKAGES
from dom2md.exceptions import DependencyError, InputError, ParsingError
from dom2md.options import ConvertOptions
from dom2md.state import MarkdownSink, RenderState, RenderStats
from dom2md.utils.html_utils import tag_name
from dom2md.walker import walk

logger = logging.getLogger(__name__)

HtmlInput = Union[str, bytes, bytearray, Path, IO[str], IO[bytes]]

_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")


def parse_html(markup: str | bytes, parser: str = DEFAULT_HTML_PARSER) -> BeautifulSoup:
    """Parse ``markup`` into a BeautifulSoup document.

    Parameters
    ----------
    markup : str or bytes
        Raw HTML. For bytes, BeautifulSoup detects the encoding.
    parser : str, default "html.parser"
        Tree builder name understood by BeautifulSoup.

    Returns
    -------
    BeautifulSoup
        The parsed document.

    Raises
    ------
    DependencyError
        If the requested parser backend is not installed
    ParsingError
        If the parser fails on the input

    """
    try:
        return BeautifulSoup(markup, parser)
    except FeatureNotFound as e:
        raise DependencyError(
            f"HTML parser '{parser}'",
            [HTML_PARSER_PACKAGES.get(parser, parser)],
            original_error=e,
        ) from e
    except Exception as e:
        raise ParsingError(f"Failed to parse HTML: {e}", parser_name=parser, original_error=e) from e


def convert_node(node: Any, sink: Any, options: ConvertOptions | None = None) -> RenderStats:
    """Write the Markdown for ``node`` to ``sink``.

    Output is written incrementally in document order; the sink is not
    flushed or closed.

    Parameters
    ----------
    node : Any
        BeautifulSoup document, element or string. ``None`` produces no output.
    sink : Any
        Object with a ``write`` method taking ``str``, or a binary stream
        (receives UTF-8).
    options : ConvertOptions, optional
        Conversion options.

    Returns
    -------
    RenderStats
        Element and truncation counters of this run.

    Raises
    ------
    OutputWriteError
        If writing to the sink fails. The conversion is aborted. Errors
        raised by custom rules propagate unchanged.

    """
    options = options if options is not None else ConvertOptions()
    writer = sink if isinstance(sink, MarkdownSink) else MarkdownSink(sink, block_start=True)
    state = RenderState()

    logger.debug(
        "Converting %s (trim_space=%s, custom rules: %s)",
        f"<{tag_name(node)}>" if tag_name(node) else type(node).__name__,
        options.trim_space,
        ", ".join(sorted(options.custom_rules)) or "none",
    )
    with writer.scoped(state):
        walk(node, writer, 0, options)

    if state.stats.truncated_subtrees:
        logger.warning(
            "Skipped %d subtree(s) nested deeper than max_depth=%d",
            state.stats.truncated_subtrees,
            options.max_depth,
        )
    logger.debug("Rendered %d elements", state.stats.elements)
    return state.stats


def node_to_markdown(node: Any, options: ConvertOptions | None = None) -> str:
    """Convert a parsed node to a Markdown string.

    With ``trim_space`` enabled, runs of blank lines are collapsed and the
    result loses its leading blank lines and trailing whitespace; leading
    spaces are kept so an indented code block at the start survives.
    """
    options = options if options is not None else ConvertOptions()
    buffer = io.StringIO()
    convert_node(node, buffer, options)
    markdown = buffer.getvalue()
    if options.trim_space:
        markdown = _EXCESS_BLANK_LINES.sub("\n\n", markdown).lstrip("\n").rstrip()
    return markdown


def html_to_markdown(input_data: HtmlInput, options: ConvertOptions | None = None) -> str:
    """Convert HTML to Markdown.

    Parameters
    ----------
    input_data : str, bytes, pathlib.Path, or file-like object
        HTML content to convert. Can be:
        - String containing HTML content directly
        - String path to an existing ``.html``/``.htm`` file
        - pathlib.Path object pointing to an HTML file
        - Raw bytes (encoding detected by BeautifulSoup)
        - Text or binary file-like object
    options : ConvertOptions or None, default None
        Configuration options. If None, uses default settings.

    Returns
    -------
    str
        Markdown representation of the document.

    Raises
    ------
    InputError
        If the input type is not supported or the file cannot be read
    DependencyError
        If the configured parser backend is not installed
    ParsingError
        If HTML parsing fails

    Examples
    --------
        >>> html_to_markdown('<ul><li>One</li><li>Two</li></ul>')
        '- One\\n- Two'

    """
    options = options if options is not None else ConvertOptions()
    markup = read_html_input(input_data)
    soup = parse_html(markup, options.parser)
    return node_to_markdown(soup, options)


def read_html_input(input_data: HtmlInput) -> str | bytes:
    """Load raw HTML from any supported input type."""
    if isinstance(input_data, Path):
        return _read_file(input_data)
    if isinstance(input_data, str):
        if _looks_like_html_path(input_data):
            return _read_file(Path(input_data))
        return input_data
    if isinstance(input_data, (bytes, bytearray)):
        return bytes(input_data)
    if hasattr(input_data, "read"):
        try:
            content = input_data.read()
        except (OSError, ValueError) as e:
            raise InputError(
                f"Failed to read HTML from {type(input_data).__name__}: {e}",
                input_type=type(input_data).__name__,
                original_error=e,
            ) from e
        if not isinstance(content, (str, bytes)):
            raise InputError(
                f"File-like object returned {type(content).__name__}, expected str or bytes",
                input_type=type(input_data).__name__,
            )
        return content

    raise InputError(
        f"Unsupported input type for HTML conversion: {type(input_data).__name__}",
        input_type=type(input_data).__name__,
    )


def _looks_like_html_path(value: str) -> bool:
    if "<" in value or "\n" in value or len(value) > 4096:
        return False
    return value.lower().endswith(HTML_FILE_EXTENSIONS) and os.path.isfile(value)


def _read_file(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise InputError(f"Failed to read HTML file {path}: {e}", input_type="path", original_error=e) from e


__all__ = ["HtmlInput", "parse_html", "convert_node", "node_to_markdown", "html_to_markdown", "read_html_input"]
