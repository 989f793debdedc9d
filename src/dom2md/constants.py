#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the dom2md library.

This module centralizes the hardcoded values used by the walker and its
built-in rules so they can be discovered and tuned in one place.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Markdown Formatting - escaping, fences, list indentation
3. Element Classification - block tags, skipped tags
4. Conversion Behavior - default option values
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

HtmlParser = Literal["html.parser", "html5lib", "lxml"]

SUPPORTED_HTML_PARSERS: tuple[str, ...] = ("html.parser", "html5lib", "lxml")

# Distribution name for each optional parser backend
HTML_PARSER_PACKAGES: dict[str, str] = {
    "html5lib": "html5lib",
    "lxml": "lxml",
}

# =============================================================================
# Markdown Formatting
# =============================================================================

# Backslash comes first so escapes added for the other characters are not re-escaped
MARKDOWN_SPECIAL_CHARS = "\\*_#[]()"

# Table cells additionally need pipes escaped
TABLE_CELL_SPECIAL_CHARS = "|"

MIN_CODE_FENCE_LENGTH = 3

# Code fence language identifier (markdown injection prevention)
SAFE_LANGUAGE_IDENTIFIER_PATTERN = r"^[a-zA-Z0-9_+\-#.]+$"

# Class token prefix carrying a code block's language, e.g. "language-python"
LANGUAGE_CLASS_PREFIX = "language-"

LIST_INDENT = "  "
INDENTED_CODE_PREFIX = "    "
UNORDERED_LIST_MARKER = "-"
BLOCKQUOTE_PREFIX = "> "
TABLE_SEPARATOR_CELL = "---"
HORIZONTAL_RULE = "---"

# =============================================================================
# Element Classification
# =============================================================================

HEADING_TAGS: frozenset[str] = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

LIST_TAGS: frozenset[str] = frozenset({"ul", "ol"})

BLOCK_TAGS: frozenset[str] = frozenset(
    {
        "address",
        "article",
        "aside",
        "blockquote",
        "body",
        "dd",
        "details",
        "div",
        "dl",
        "dt",
        "figcaption",
        "figure",
        "footer",
        "form",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "head",
        "header",
        "hr",
        "html",
        "li",
        "main",
        "nav",
        "ol",
        "p",
        "pre",
        "section",
        "summary",
        "table",
        "tbody",
        "td",
        "tfoot",
        "th",
        "thead",
        "tr",
        "ul",
    }
)

# Elements whose whole subtree never contributes readable text
DEFAULT_SKIP_TAGS: frozenset[str] = frozenset({"script", "style", "head", "noscript", "template"})

# Page chrome that content extractors usually drop
NOISE_TAGS: frozenset[str] = frozenset({"header", "footer", "nav", "aside"})

# =============================================================================
# Conversion Behavior
# =============================================================================

DEFAULT_TRIM_SPACE = True
DEFAULT_ESCAPE_SPECIAL = True
DEFAULT_HTML_PARSER: HtmlParser = "html.parser"

# Python's default recursion limit is 1000 and every tree level costs a few frames
DEFAULT_MAX_DEPTH = 128

# Extensions treated as HTML files when a string input names an existing path
HTML_FILE_EXTENSIONS: tuple[str, ...] = (".html", ".htm", ".xhtml")

# Environment variable prefix for CLI defaults
ENV_VAR_PREFIX = "DOM2MD_"
