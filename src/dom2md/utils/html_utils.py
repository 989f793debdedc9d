#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dom2md/utils/html_utils.py
"""Read-only accessors over BeautifulSoup nodes.

Every helper here tolerates ``None``, text nodes, and elements without
attributes, answering with an empty string or ``False`` instead of raising.
None of them mutate the tree.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PreformattedString, Tag

from dom2md.constants import BLOCK_TAGS, LANGUAGE_CLASS_PREFIX


class NodeKind(Enum):
    """Coarse classification of a parsed HTML node."""

    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"


def node_kind(node: Any) -> NodeKind | None:
    """Classify ``node``; returns None for ``None`` or foreign objects.

    Comments, CDATA sections, doctypes, declarations and processing
    instructions all count as :attr:`NodeKind.COMMENT` since none of them
    produce Markdown.
    """
    if isinstance(node, BeautifulSoup):
        return NodeKind.DOCUMENT
    if isinstance(node, Tag):
        return NodeKind.ELEMENT
    if isinstance(node, PreformattedString):
        return NodeKind.COMMENT
    if isinstance(node, NavigableString):
        return NodeKind.TEXT
    return None


def tag_name(node: Any) -> str:
    """Return the lower-cased tag name of an element, or an empty string."""
    if node_kind(node) is not NodeKind.ELEMENT:
        return ""
    return (node.name or "").lower()


def attr(node: Any, name: str) -> str:
    """Return attribute ``name`` of ``node`` or an empty string when absent.

    Multi-valued attributes, which BeautifulSoup stores as lists (``class``,
    ``rel``), are joined with single spaces.

    Parameters
    ----------
    node : Any
        Element to read from. Text nodes and ``None`` have no attributes.
    name : str
        Attribute name.

    Returns
    -------
    str
        The attribute value, or ``""``.

    """
    attrs = getattr(node, "attrs", None)
    if not attrs:
        return ""
    value = attrs.get(name)
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


def class_tokens(node: Any) -> list[str]:
    """Split the ``class`` attribute on any run of whitespace."""
    return attr(node, "class").split()


def has_class(node: Any, name: str) -> bool:
    """Check whether ``name`` is one of the node's class tokens."""
    return name in class_tokens(node)


def is_child_of(node: Any, ancestor_tag: str) -> bool:
    """Check whether any ancestor of ``node`` has tag ``ancestor_tag``.

    Only ancestors are considered: an element never counts as a child of
    itself, and the walk stops at the document root.

    Examples
    --------
        >>> soup = BeautifulSoup("<div><span><p>x</p></span></div>", "html.parser")
        >>> is_child_of(soup.p, "div"), is_child_of(soup.span, "p")
        (True, False)

    """
    if node is None:
        return False
    wanted = ancestor_tag.lower()
    parent = getattr(node, "parent", None)
    while parent is not None:
        if tag_name(parent) == wanted:
            return True
        parent = parent.parent
    return False


def closest_ancestor(node: Any, ancestor_tag: str) -> Any:
    """Return the nearest ancestor with tag ``ancestor_tag`` or None."""
    wanted = ancestor_tag.lower()
    parent = getattr(node, "parent", None)
    while parent is not None:
        if tag_name(parent) == wanted:
            return parent
        parent = parent.parent
    return None


def first_child_element(node: Any, wanted_tag: str) -> Any:
    """Return the first direct child element with tag ``wanted_tag`` or None."""
    if node_kind(node) not in (NodeKind.ELEMENT, NodeKind.DOCUMENT):
        return None
    for child in node.children:
        if tag_name(child) == wanted_tag:
            return child
    return None


def _language_from_tokens(tokens: list[str]) -> str:
    for token in tokens:
        if token.startswith(LANGUAGE_CLASS_PREFIX) and len(token) > len(LANGUAGE_CLASS_PREFIX):
            return token[len(LANGUAGE_CLASS_PREFIX) :]
    return ""


def lang_from_class(pre_node: Any) -> str:
    """Extract the code language from a ``language-<X>`` class token.

    The ``pre`` element's own classes are checked first, then those of its
    first ``code`` child element. The first matching token wins; other
    class tokens are ignored.

    Parameters
    ----------
    pre_node : Any
        A ``pre`` element (any element is accepted).

    Returns
    -------
    str
        The language identifier, or ``""`` when no token matches.

    Examples
    --------
        >>> soup = BeautifulSoup('<pre class="other-class language-python"><code></code></pre>', "html.parser")
        >>> lang_from_class(soup.pre)
        'python'

    """
    language = _language_from_tokens(class_tokens(pre_node))
    if language:
        return language
    return _language_from_tokens(class_tokens(first_child_element(pre_node, "code")))


def is_block_element(node: Any) -> bool:
    """Check whether ``node`` is an element that forms its own block."""
    return tag_name(node) in BLOCK_TAGS


__all__ = [
    "NodeKind",
    "node_kind",
    "tag_name",
    "attr",
    "class_tokens",
    "has_class",
    "is_child_of",
    "closest_ancestor",
    "first_child_element",
    "lang_from_class",
    "is_block_element",
]
