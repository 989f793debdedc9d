#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dom2md/utils/__init__.py
"""Tree accessor and Markdown escaping helpers."""

from dom2md.utils.escape import collapse_whitespace, escape_markdown
from dom2md.utils.html_utils import NodeKind, attr, has_class, is_child_of, lang_from_class, node_kind, tag_name

__all__ = [
    "NodeKind",
    "attr",
    "collapse_whitespace",
    "escape_markdown",
    "has_class",
    "is_child_of",
    "lang_from_class",
    "node_kind",
    "tag_name",
]
