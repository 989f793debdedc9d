#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for HTML to Markdown conversion.

A single frozen dataclass, :class:`ConvertOptions`, configures one conversion
run. It is never mutated while a conversion is in progress; use
:meth:`CloneFrozenMixin.create_updated` to derive a modified copy.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from dom2md.constants import (
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_HTML_PARSER,
    DEFAULT_MAX_DEPTH,
    DEFAULT_SKIP_TAGS,
    DEFAULT_TRIM_SPACE,
    SUPPORTED_HTML_PARSERS,
    HtmlParser,
)
from dom2md.exceptions import ValidationError

if TYPE_CHECKING:
    from dom2md.state import RenderRule


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConvertOptions(CloneFrozenMixin):
    """Configuration for one HTML to Markdown conversion.

    Parameters
    ----------
    trim_space : bool, default True
        Collapse runs of whitespace in text to a single space and trim
        whitespace at block boundaries.
    custom_rules : Mapping[str, RenderRule], default empty
        Render functions keyed by tag name. A custom rule takes precedence
        over the built-in rule for its tag and owns the element's subtree.
    escape_special : bool, default True
        Backslash-escape Markdown metacharacters in literal text.
    skip_tags : Iterable[str]
        Elements dropped together with their subtree, unless a custom rule
        names them.
    max_depth : int, default 128
        Maximum element nesting rendered; deeper subtrees are truncated.
    parser : {"html.parser", "html5lib", "lxml"}, default "html.parser"
        BeautifulSoup tree builder used when converting raw HTML.

    Examples
    --------
        >>> def emphasize(node, sink, nesting_depth, options):
        ...     sink.write("*")
        ...     walk_children(node, sink, nesting_depth, options)
        ...     sink.write("*")
        >>> options = ConvertOptions(custom_rules={"b": emphasize})

    """

    trim_space: bool = field(
        default=DEFAULT_TRIM_SPACE,
        metadata={"help": "Collapse whitespace runs and trim whitespace around blocks"},
    )
    custom_rules: Mapping[str, RenderRule] = field(
        default_factory=dict,
        metadata={"help": "Render functions keyed by tag name, overriding built-in rules"},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Escape Markdown special characters in text"},
    )
    skip_tags: frozenset[str] = field(
        default=DEFAULT_SKIP_TAGS,
        metadata={"help": "Tags dropped together with their content"},
    )
    max_depth: int = field(
        default=DEFAULT_MAX_DEPTH,
        metadata={"help": "Maximum element nesting depth rendered before truncating"},
    )
    parser: HtmlParser = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup parser backend", "choices": list(SUPPORTED_HTML_PARSERS)},
    )

    def __post_init__(self) -> None:
        """Normalize tag names and validate option values.

        Raises
        ------
        ValidationError
            If any field value is invalid.

        """
        if not isinstance(self.max_depth, int) or self.max_depth <= 0:
            raise ValidationError(
                f"max_depth must be a positive integer, got {self.max_depth!r}",
                parameter_name="max_depth",
                parameter_value=self.max_depth,
            )

        if self.parser not in SUPPORTED_HTML_PARSERS:
            raise ValidationError(
                f"Unsupported parser {self.parser!r}; choose one of {', '.join(SUPPORTED_HTML_PARSERS)}",
                parameter_name="parser",
                parameter_value=self.parser,
            )

        rules: dict[str, RenderRule] = {}
        for tag, rule in (self.custom_rules or {}).items():
            if not callable(rule):
                raise ValidationError(
                    f"Custom rule for <{tag}> is not callable",
                    parameter_name="custom_rules",
                    parameter_value=rule,
                )
            rules[str(tag).lower()] = rule
        # Frozen dataclass: normalized values are installed via object.__setattr__
        object.__setattr__(self, "custom_rules", MappingProxyType(rules))
        object.__setattr__(self, "skip_tags", _normalize_tags(self.skip_tags))


def _normalize_tags(tags: Iterable[str] | str | None) -> frozenset[str]:
    if not tags:
        return frozenset()
    if isinstance(tags, str):
        tags = [tags]
    return frozenset(tag.strip().lower() for tag in tags if tag and tag.strip())


__all__ = ["CloneFrozenMixin", "ConvertOptions"]
