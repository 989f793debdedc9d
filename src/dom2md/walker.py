#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dom2md/walker.py
"""Recursive traversal driver turning a BeautifulSoup tree into Markdown.

The walker visits one node at a time. Text is escaped (outside ``pre``/
``code``) and written to the sink, comments are dropped, documents are
transparent, and every element is handed to the render rule resolved for
its tag:

1. a rule from ``ConvertOptions.custom_rules``,
2. otherwise nothing at all for tags in ``ConvertOptions.skip_tags``,
3. otherwise the built-in rule from :data:`dom2md.rules.BUILTIN_RULES`,
4. otherwise the element is transparent and only its children render.

Every rule is called as ``rule(node, sink, nesting_depth, options)``; the
walker state of the node (list numbering, the ``pre`` flag, tree depth)
rides on ``sink.state``. Custom rules own their subtree. To get default
behavior back they call :func:`walk_children` (render the children) or
:func:`render_default` (render the element itself with its built-in rule),
passing the same sink so the state carries over.

Examples
--------
    >>> import io
    >>> from bs4 import BeautifulSoup
    >>> soup = BeautifulSoup("<b>test</b>", "html.parser")
    >>> out = io.StringIO()
    >>> walk(soup, out)
    >>> out.getvalue()
    '**test**'

"""

from __future__ import annotations

import io
import logging
from typing import Any

from dom2md.options import ConvertOptions
from dom2md.state import MarkdownSink, RenderRule, RenderState
from dom2md.utils.escape import collapse_whitespace, escape_markdown
from dom2md.utils.html_utils import NodeKind, is_block_element, node_kind, tag_name

logger = logging.getLogger(__name__)


def walk(node: Any, sink: Any, nesting_depth: int = 0, options: ConvertOptions | None = None) -> None:
    """Render ``node`` and its subtree into ``sink``.

    Parameters
    ----------
    node : Any
        BeautifulSoup document, element, or string. ``None`` renders nothing.
    sink : Any
        Text stream, binary stream, or :class:`MarkdownSink`. A plain stream
        is wrapped in a new sink with a fresh walker state.
    nesting_depth : int, default 0
        Number of enclosing lists and blockquotes.
    options : ConvertOptions, optional
        Conversion options; defaults are used when omitted.

    """
    options = options if options is not None else ConvertOptions()
    sink = MarkdownSink.wrap(sink)

    kind = node_kind(node)
    if kind is NodeKind.TEXT:
        _render_text(node, sink, options)
    elif kind is NodeKind.ELEMENT:
        _render_element(node, sink, nesting_depth, options)
    elif kind is NodeKind.DOCUMENT:
        walk_children(node, sink, nesting_depth, options)


def walk_children(node: Any, sink: Any, nesting_depth: int = 0, options: ConvertOptions | None = None) -> None:
    """Render every child of ``node`` in document order."""
    options = options if options is not None else ConvertOptions()
    sink = MarkdownSink.wrap(sink)

    # Snapshot so a rule that edits the tree cannot derail the iteration
    for child in tuple(getattr(node, "contents", None) or ()):
        walk(child, sink, nesting_depth, options)


def render_default(node: Any, sink: Any, nesting_depth: int = 0, options: ConvertOptions | None = None) -> None:
    """Render ``node`` as if no custom rule were registered for its tag.

    Custom rules for descendants still apply.
    """
    options = options if options is not None else ConvertOptions()
    sink = MarkdownSink.wrap(sink)

    if node_kind(node) is not NodeKind.ELEMENT:
        walk(node, sink, nesting_depth, options)
        return

    rule = resolve_rule(tag_name(node), options, include_custom=False)
    if rule is None:
        walk_children(node, sink, nesting_depth, options)
    else:
        rule(node, sink, nesting_depth, options)


def resolve_rule(tag: str, options: ConvertOptions, include_custom: bool = True) -> RenderRule | None:
    """Return the render rule for ``tag``, or None for a transparent tag."""
    # Imported here: the built-in rules call back into this module
    from dom2md.rules import BUILTIN_RULES, skip_element

    if include_custom:
        custom = options.custom_rules.get(tag)
        if custom is not None:
            return custom
    if tag in options.skip_tags:
        return skip_element
    return BUILTIN_RULES.get(tag)


def capture(
    node: Any,
    nesting_depth: int,
    options: ConvertOptions,
    state: RenderState,
    block: bool = False,
) -> str:
    """Render ``node`` with walker state ``state`` into a string.

    With ``block=True`` the captured text starts a new block, so leading
    whitespace of its first text run is trimmed.
    """
    buffer = io.StringIO()
    walk(node, MarkdownSink(buffer, block_start=block, state=state), nesting_depth, options)
    return buffer.getvalue()


def capture_children(
    node: Any,
    nesting_depth: int,
    options: ConvertOptions,
    state: RenderState,
    block: bool = False,
) -> str:
    """Render the children of ``node`` into a string."""
    buffer = io.StringIO()
    walk_children(node, MarkdownSink(buffer, block_start=block, state=state), nesting_depth, options)
    return buffer.getvalue()


def _render_element(node: Any, sink: MarkdownSink, nesting_depth: int, options: ConvertOptions) -> None:
    tag = tag_name(node)
    state = sink.state
    if state.tree_depth >= options.max_depth:
        state.stats.truncated_subtrees += 1
        logger.debug("Depth limit %d reached at <%s>, subtree not rendered", options.max_depth, tag)
        return

    state.stats.elements += 1
    rule = resolve_rule(tag, options)
    with sink.scoped(state.descend()):
        if rule is None:
            walk_children(node, sink, nesting_depth, options)
        else:
            rule(node, sink, nesting_depth, options)


def _render_text(node: Any, sink: MarkdownSink, options: ConvertOptions) -> None:
    text = str(node)
    if not text:
        return

    if sink.state.in_preformatted:
        sink.write(text)
        return

    if options.trim_space:
        if not text.strip():
            if sink.ends_with_whitespace or _at_block_boundary(node):
                return
            sink.write(" ")
            return
        text = collapse_whitespace(text)
        if sink.ends_with_whitespace:
            text = text.lstrip()

    if options.escape_special:
        text = escape_markdown(text)
    sink.write(text)


def _at_block_boundary(node: Any) -> bool:
    """Check whether a text node sits next to the edge of a block."""
    parent = node.parent
    parent_is_block = parent is None or is_block_element(parent) or node_kind(parent) is NodeKind.DOCUMENT
    previous, following = node.previous_sibling, node.next_sibling
    if parent_is_block and (previous is None or following is None):
        return True
    return is_block_element(previous) or is_block_element(following)


__all__ = ["walk", "walk_children", "render_default", "resolve_rule", "capture", "capture_children"]
