#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dom2md/rules.py
"""Built-in render rules, keyed by tag name.

Every rule has the :data:`dom2md.state.RenderRule` signature
``(node, sink, nesting_depth, options)`` and writes the Markdown for
one element, recursing through :mod:`dom2md.walker` for its content. The
same signature is used for rules supplied in ``ConvertOptions.custom_rules``,
which take precedence over the entries of :data:`BUILTIN_RULES`.

Supported Elements
------------------
- Headings: h1-h6 as ATX (``#``) headings
- Blocks: p, blockquote, hr, and layout containers such as div/section
- Inline: strong/b, em/i, code, a, img, br
- Lists: ul, ol (with ``start``), li, nested to any depth
- Code blocks: pre, fenced when a ``language-X`` class is present,
  indented otherwise
- Tables: pipe tables with a separator after the first row
"""

from __future__ import annotations

import io
import logging
from types import MappingProxyType
from typing import Any

from dom2md.constants import (
    BLOCKQUOTE_PREFIX,
    HEADING_TAGS,
    HORIZONTAL_RULE,
    INDENTED_CODE_PREFIX,
    LIST_INDENT,
    LIST_TAGS,
    TABLE_SEPARATOR_CELL,
    UNORDERED_LIST_MARKER,
)
from dom2md.options import ConvertOptions
from dom2md.state import ListFrame, MarkdownSink, RenderRule, RenderState
from dom2md.utils.escape import (
    collapse_whitespace,
    escape_link_destination,
    escape_link_text,
    escape_link_title,
    escape_table_cell,
    get_code_fence,
    inline_code_span,
    is_safe_language,
)
from dom2md.utils.html_utils import (
    NodeKind,
    attr,
    closest_ancestor,
    first_child_element,
    lang_from_class,
    node_kind,
    tag_name,
)
from dom2md.walker import capture, capture_children, walk, walk_children

logger = logging.getLogger(__name__)


# =============================================================================
# Helpers
# =============================================================================


def _write_inline(sink: MarkdownSink, text: str, options: ConvertOptions) -> None:
    """Write inline markup, avoiding a doubled space after whitespace."""
    if options.trim_space and sink.ends_with_whitespace:
        text = text.lstrip()
    sink.write(text)


def _wrap_inline(prefix: str, content: str, suffix: str) -> str:
    """Wrap ``content`` in delimiters, keeping its outer whitespace outside them.

    ``** bold **`` is not emphasis in Markdown, so surrounding whitespace is
    moved past the delimiters.
    """
    stripped = content.strip()
    leading = content[: len(content) - len(content.lstrip())]
    trailing = content[len(content.rstrip()) :]
    return f"{leading}{prefix}{stripped}{suffix}{trailing}"


def _trim_block(content: str) -> str:
    """Drop trailing whitespace on every line and blank lines at both ends."""
    lines = [line.rstrip() for line in content.split("\n")]
    return "\n".join(lines).strip("\n")


def _indent_lines(text: str, prefix: str) -> str:
    """Prefix every non-blank line of ``text``; blank lines stay empty."""
    return "\n".join(f"{prefix}{line}" if line.strip() else "" for line in text.split("\n"))


def _list_start(node: Any) -> int:
    value = attr(node, "start").strip()
    if not value:
        return 1
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring non-numeric list start %r", value)
        return 1


def _format_row(cells: list[str], width: int) -> str:
    padded = cells + [""] * (width - len(cells))
    return "| " + " | ".join(padded) + " |"


def _table_rows(table: Any) -> list[Any]:
    """Rows of ``table`` itself, skipping rows of tables nested in its cells."""
    return [row for row in table.find_all("tr") if closest_ancestor(row, "table") is table]


def _cell_text(cell: Any, nesting_depth: int, options: ConvertOptions, state: RenderState) -> str:
    content = capture(cell, nesting_depth, options, state, block=True)
    return escape_table_cell(collapse_whitespace(content).strip())


# =============================================================================
# Rules
# =============================================================================


def skip_element(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Drop the element together with its subtree."""


def render_heading(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``h1``-``h6`` as an ATX heading followed by a blank line."""
    state = sink.state
    if state.in_preformatted:
        walk_children(node, sink, nesting_depth, options)
        return

    level = int(tag_name(node)[1])
    # Heading text must stay on a single line
    content = collapse_whitespace(capture_children(node, nesting_depth, options, state, block=True)).strip()
    if not content:
        return

    sink.ensure_newlines(2)
    sink.write(f"{'#' * level} {content}\n\n")


def render_paragraph(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render a paragraph followed by a blank line."""
    state = sink.state
    if state.in_preformatted:
        walk_children(node, sink, nesting_depth, options)
        return

    content = capture_children(node, nesting_depth, options, state, block=True)
    if options.trim_space:
        content = _trim_block(content)
    if not content.strip():
        return

    sink.ensure_newlines(2)
    sink.write(content)
    sink.write("\n\n")


def render_block_container(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render layout containers (div, section, ...) as separate blocks without markup."""
    state = sink.state
    if state.in_preformatted:
        walk_children(node, sink, nesting_depth, options)
        return

    sink.ensure_newlines(2)
    walk_children(node, sink, nesting_depth, options)
    sink.ensure_newlines(2)


def _render_delimited(
    delimiter: str,
    node: Any,
    sink: MarkdownSink,
    nesting_depth: int,
    options: ConvertOptions,
) -> None:
    state = sink.state
    if state.in_preformatted:
        walk_children(node, sink, nesting_depth, options)
        return

    content = capture_children(node, nesting_depth, options, state)
    if not content.strip():
        _write_inline(sink, content, options)
        return
    _write_inline(sink, _wrap_inline(delimiter, content, delimiter), options)


def render_strong(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``strong``/``b`` as ``**text**``."""
    _render_delimited("**", node, sink, nesting_depth, options)


def render_emphasis(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``em``/``i`` as ``*text*``."""
    _render_delimited("*", node, sink, nesting_depth, options)


def render_inline_code(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``code`` outside ``pre`` as a code span with unescaped content."""
    state = sink.state
    if state.in_preformatted:
        walk_children(node, sink, nesting_depth, options)
        return

    content = capture_children(node, nesting_depth, options, state.preformatted())
    content = content.replace("\r\n", " ").replace("\n", " ")
    if not content.strip():
        return
    _write_inline(sink, inline_code_span(content), options)


def render_link(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``a`` as ``[text](href "title")``; without href only the text remains."""
    state = sink.state
    if state.in_preformatted:
        walk_children(node, sink, nesting_depth, options)
        return

    content = collapse_whitespace(capture_children(node, nesting_depth, options, state))
    href = attr(node, "href").strip()
    if not href:
        _write_inline(sink, content, options)
        return

    target = escape_link_destination(href)
    title = attr(node, "title").strip()
    if title:
        target += f' "{escape_link_title(title)}"'
    _write_inline(sink, _wrap_inline("[", content, f"]({target})"), options)


def render_image(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``img`` as ``![alt](src)``.

    Lazy-loaded images keep their URL in ``data-src``; it is used when
    ``src`` is absent. Without either, the image is still emitted with an
    empty target so the alt text stays visible.
    """
    if sink.state.in_preformatted:
        return

    src = attr(node, "src").strip() or attr(node, "data-src").strip()
    alt = escape_link_text(collapse_whitespace(attr(node, "alt")).strip())
    target = escape_link_destination(src)
    title = attr(node, "title").strip()
    if title:
        target += f' "{escape_link_title(title)}"'
    _write_inline(sink, f"![{alt}]({target})", options)


def render_line_break(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``br`` as a newline."""
    sink.write("\n")


def render_horizontal_rule(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``hr`` as a thematic break."""
    if sink.state.in_preformatted:
        return
    sink.ensure_newlines(2)
    sink.write(f"{HORIZONTAL_RULE}\n\n")


def _write_items(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    for child in tuple(node.contents):
        if node_kind(child) is NodeKind.TEXT and not str(child).strip():
            continue
        walk(child, sink, nesting_depth, options)


def render_list(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``ul``/``ol``, placing its items one nesting level deeper.

    A fresh :class:`ListFrame` is pushed for the items; it disappears with
    the derived state when the list ends. Items are written flush left and
    the enclosing ``li`` indents them under its own marker, so a nested list
    sits two spaces in below a ``-`` item. A list placed directly inside
    another list, with no ``li`` in between, is indented by two spaces itself.
    """
    state = sink.state
    ordered = tag_name(node) == "ol"
    frame = ListFrame(ordered=ordered, start=_list_start(node) if ordered else 1)
    nested = bool(state.list_context)
    item_state = state.push_list(frame)

    sink.ensure_newlines(1 if nested else 2)
    if tag_name(node.parent) in LIST_TAGS:
        buffer = io.StringIO()
        _write_items(node, MarkdownSink(buffer, block_start=True, state=item_state), nesting_depth + 1, options)
        items = _trim_block(buffer.getvalue()) if options.trim_space else buffer.getvalue().strip("\n")
        sink.write(_indent_lines(items, LIST_INDENT))
    else:
        with sink.scoped(item_state):
            _write_items(node, sink, nesting_depth + 1, options)

    if nested:
        sink.ensure_newlines(1)
    else:
        sink.ensure_newlines(2)


def _opens_with_list(node: Any) -> bool:
    """Check whether the first non-blank child of ``node`` is a list."""
    for child in node.contents:
        if node_kind(child) is NodeKind.TEXT and not str(child).strip():
            continue
        return tag_name(child) in LIST_TAGS
    return False


def render_list_item(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``li`` as a marker followed by its content.

    The marker is ``-`` or the next number of the enclosing ordered list.
    Every content line after the first is indented to the width of the
    marker plus one space, which keeps follow-on paragraphs and nested
    lists inside the item. Content that opens with a list or an indented
    code block starts on the line below the marker.
    """
    state = sink.state
    frame = state.current_list
    marker = frame.next_marker() if frame is not None else UNORDERED_LIST_MARKER
    padding = " " * (len(marker) + 1)

    content = capture_children(node, nesting_depth, options, state, block=True)
    content = _trim_block(content) if options.trim_space else content.strip("\n")

    if content.startswith(INDENTED_CODE_PREFIX) or (content and _opens_with_list(node)):
        item = marker + "\n" + _indent_lines(content, padding)
    elif content:
        first, _, rest = content.partition("\n")
        item = f"{marker} {first}"
        if rest:
            item += "\n" + _indent_lines(rest, padding)
    else:
        item = marker

    sink.ensure_newlines(1)
    sink.write(item)
    sink.ensure_newlines(1)


def render_blockquote(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``blockquote`` by prefixing every line of its content with ``> ``."""
    state = sink.state
    content = capture_children(node, nesting_depth + 1, options, state, block=True)
    content = _trim_block(content) if options.trim_space else content.strip("\n")
    if not content.strip():
        return

    quoted = "\n".join(
        f"{BLOCKQUOTE_PREFIX}{line}" if line.strip() else BLOCKQUOTE_PREFIX.rstrip() for line in content.split("\n")
    )
    sink.ensure_newlines(2)
    sink.write(quoted)
    sink.write("\n\n")


def render_preformatted(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``pre`` as a code block.

    With a ``language-X`` class on the ``pre`` or its ``code`` child the block
    is fenced and tagged with ``X``; otherwise every line is indented by four
    spaces. Content is emitted without escaping either way.
    """
    state = sink.state
    if state.in_preformatted:
        walk_children(node, sink, nesting_depth, options)
        return

    code = capture_children(node, nesting_depth, options, state.preformatted())
    # A newline directly after <pre> is not part of the content
    if code.startswith("\r\n"):
        code = code[2:]
    elif code.startswith("\n"):
        code = code[1:]
    code = "\n".join(line.rstrip() for line in code.splitlines()).rstrip("\n")

    language = lang_from_class(node)
    if language:
        info = language if is_safe_language(language) else ""
        if not info:
            logger.debug("Dropping unsafe code block language %r", language)
        fence = get_code_fence(code)
        sink.ensure_newlines(2)
        sink.write(f"{fence}{info}\n{code}\n{fence}\n\n")
        return

    if not code.strip():
        return
    indented = "\n".join(f"{INDENTED_CODE_PREFIX}{line}" if line else "" for line in code.split("\n"))
    sink.ensure_newlines(2)
    sink.write(indented)
    sink.write("\n\n")


def render_table(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    """Render ``table`` as a pipe table.

    The first row becomes the header and is followed by exactly one
    separator row. Rows are padded to the widest row; a ``caption`` is
    emitted as an emphasized line above the table.
    """
    state = sink.state
    rows: list[list[str]] = []
    for row in _table_rows(node):
        cells = [
            _cell_text(cell, nesting_depth, options, state) for cell in row.children if tag_name(cell) in ("th", "td")
        ]
        if cells:
            rows.append(cells)

    caption_node = first_child_element(node, "caption")
    caption = ""
    if caption_node is not None:
        caption = collapse_whitespace(capture_children(caption_node, nesting_depth, options, state, block=True)).strip()

    if not rows:
        if caption:
            sink.ensure_newlines(2)
            sink.write(f"{caption}\n\n")
        return

    width = max(len(cells) for cells in rows)
    lines = [_format_row(rows[0], width), _format_row([TABLE_SEPARATOR_CELL] * width, width)]
    lines.extend(_format_row(cells, width) for cells in rows[1:])

    sink.ensure_newlines(2)
    if caption:
        sink.write(f"*{caption}*\n\n")
    sink.write("\n".join(lines))
    sink.write("\n\n")


# =============================================================================
# Registry
# =============================================================================

_BLOCK_CONTAINER_TAGS = (
    "address",
    "article",
    "aside",
    "dd",
    "details",
    "div",
    "dl",
    "dt",
    "figcaption",
    "figure",
    "footer",
    "header",
    "main",
    "nav",
    "section",
    "summary",
)

_rules: dict[str, RenderRule] = {tag: render_heading for tag in HEADING_TAGS}
_rules.update({tag: render_block_container for tag in _BLOCK_CONTAINER_TAGS})
_rules.update(
    {
        "p": render_paragraph,
        "strong": render_strong,
        "b": render_strong,
        "em": render_emphasis,
        "i": render_emphasis,
        "code": render_inline_code,
        "a": render_link,
        "img": render_image,
        "br": render_line_break,
        "hr": render_horizontal_rule,
        "ul": render_list,
        "ol": render_list,
        "li": render_list_item,
        "blockquote": render_blockquote,
        "pre": render_preformatted,
        "table": render_table,
    }
)

BUILTIN_RULES: MappingProxyType[str, RenderRule] = MappingProxyType(_rules)
"""Read-only mapping of tag name to built-in render rule."""


__all__ = [
    "BUILTIN_RULES",
    "skip_element",
    "render_heading",
    "render_paragraph",
    "render_block_container",
    "render_strong",
    "render_emphasis",
    "render_inline_code",
    "render_link",
    "render_image",
    "render_line_break",
    "render_horizontal_rule",
    "render_list",
    "render_list_item",
    "render_blockquote",
    "render_preformatted",
    "render_table",
]
