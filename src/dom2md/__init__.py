"""dom2md - HTML to Markdown conversion by walking a parsed document tree.

dom2md renders a BeautifulSoup tree as Markdown: headings, emphasis, lists,
links, images, tables and fenced code blocks, with whitespace normalized and
Markdown metacharacters in literal text escaped.

Rendering is driven by per-tag rules. Callers can override any tag with a
custom rule and still fall back to the built-in rendering from inside it.

Examples
--------
Convert an HTML string:

    >>> from dom2md import html_to_markdown
    >>> html_to_markdown("<p>Hello <em>world</em></p>")
    'Hello *world*'

Override a tag while delegating its children to the default walker:

    >>> from dom2md import ConvertOptions, walk_children
    >>> def single_star(node, sink, nesting_depth, options):
    ...     sink.write("*")
    ...     walk_children(node, sink, nesting_depth, options)
    ...     sink.write("*")
    >>> html_to_markdown("<b>test</b>", ConvertOptions(custom_rules={"b": single_star}))
    '*test*'

"""

from dom2md.api import convert_node, html_to_markdown, node_to_markdown, parse_html
from dom2md.exceptions import (
    DependencyError,
    Dom2MdError,
    InputError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    ValidationError,
)
from dom2md.options import ConvertOptions
from dom2md.rules import BUILTIN_RULES
from dom2md.state import ListFrame, MarkdownSink, RenderRule, RenderState, RenderStats
from dom2md.utils.html_utils import attr, has_class, is_child_of, lang_from_class
from dom2md.walker import render_default, walk, walk_children

__version__ = "0.1.0"

__all__ = [
    "BUILTIN_RULES",
    "ConvertOptions",
    "DependencyError",
    "Dom2MdError",
    "InputError",
    "ListFrame",
    "MarkdownSink",
    "OutputWriteError",
    "ParsingError",
    "RenderRule",
    "RenderState",
    "RenderStats",
    "RenderingError",
    "ValidationError",
    "attr",
    "convert_node",
    "has_class",
    "html_to_markdown",
    "is_child_of",
    "lang_from_class",
    "node_to_markdown",
    "parse_html",
    "render_default",
    "walk",
    "walk_children",
]
