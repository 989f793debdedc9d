#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/dom2md/state.py
"""Per-conversion render state and the output sink wrapper.

:class:`RenderState` is immutable and handed down by value: a rule that
needs different state for its children derives a copy with
:meth:`RenderState.push_list`, :meth:`RenderState.preformatted` or
:meth:`RenderState.descend` and installs it on the sink with
:meth:`MarkdownSink.scoped` while the children render, so sibling subtrees
never observe each other's changes. The only deliberate exception is the
item counter of a :class:`ListFrame`, which every ``li`` of one list
advances in turn.
"""

from __future__ import annotations

import io
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Protocol

from dom2md.constants import UNORDERED_LIST_MARKER
from dom2md.exceptions import OutputWriteError

if TYPE_CHECKING:
    from dom2md.options import ConvertOptions


class TextSink(Protocol):
    """Anything with a ``write`` method accepting ``str``."""

    def write(self, text: str, /) -> Any: ...


@dataclass
class ListFrame:
    """Numbering state of one enclosing ``ul``/``ol``.

    Parameters
    ----------
    ordered : bool
        True for ``ol``.
    start : int, default 1
        Number of the first item of an ordered list.
    index : int, default 0
        Items emitted so far.

    """

    ordered: bool
    start: int = 1
    index: int = 0

    def next_marker(self) -> str:
        """Return the marker for the next item and advance the counter."""
        if self.ordered:
            marker = f"{self.start + self.index}."
        else:
            marker = UNORDERED_LIST_MARKER
        self.index += 1
        return marker


@dataclass
class RenderStats:
    """Counters shared by every node of one conversion run."""

    elements: int = 0
    truncated_subtrees: int = 0


@dataclass(frozen=True)
class RenderState:
    """Transient walker state threaded through the recursion.

    Parameters
    ----------
    list_context : tuple[ListFrame, ...]
        Enclosing lists, innermost last.
    in_preformatted : bool
        Inside ``pre``/``code``: text is emitted raw and inline markup
        rules render only their children.
    tree_depth : int
        Number of element levels above the current node, checked against
        ``ConvertOptions.max_depth``.
    stats : RenderStats
        Counters shared across the whole run.

    """

    list_context: tuple[ListFrame, ...] = ()
    in_preformatted: bool = False
    tree_depth: int = 0
    stats: RenderStats = field(default_factory=RenderStats)

    @property
    def current_list(self) -> ListFrame | None:
        """Innermost enclosing list frame, if any."""
        return self.list_context[-1] if self.list_context else None

    def push_list(self, frame: ListFrame) -> RenderState:
        """Return a copy with ``frame`` as the innermost list."""
        return replace(self, list_context=(*self.list_context, frame))

    def preformatted(self) -> RenderState:
        """Return a copy with escaping and whitespace trimming suppressed."""
        if self.in_preformatted:
            return self
        return replace(self, in_preformatted=True)

    def descend(self) -> RenderState:
        """Return a copy one element level deeper."""
        return replace(self, tree_depth=self.tree_depth + 1)


class MarkdownSink:
    """Write-through wrapper around a text or binary output stream.

    It remembers how many newlines the output currently ends with, which
    lets block rules separate themselves from preceding content while the
    Markdown is streamed, without buffering or post-processing.

    The sink also carries the current :class:`RenderState`. Rules read it
    from :attr:`state` and install a derived state for their children with
    :meth:`scoped`, so a rule only needs ``(node, sink, nesting_depth,
    options)`` to delegate back to the walker.

    Parameters
    ----------
    target : TextSink or binary stream
        Destination. Binary streams receive UTF-8 encoded bytes.
    block_start : bool, default False
        The output begins a new block, so leading whitespace is dropped as if
        it followed a line break.
    state : RenderState, optional
        Initial walker state; a fresh state is created when omitted.

    """

    def __init__(self, target: Any, block_start: bool = False, state: RenderState | None = None):
        self._target = target
        self._binary = isinstance(target, (io.RawIOBase, io.BufferedIOBase))
        self._trailing_newlines = 0
        self._last_char = "\n" if block_start else ""
        self._empty = True
        self.state = state if state is not None else RenderState()

    @classmethod
    def wrap(cls, target: Any) -> MarkdownSink:
        """Return ``target`` itself if it is already a MarkdownSink."""
        if isinstance(target, MarkdownSink):
            return target
        return cls(target)

    @contextmanager
    def scoped(self, state: RenderState) -> Iterator[MarkdownSink]:
        """Make ``state`` current until the ``with`` block exits."""
        previous = self.state
        self.state = state
        try:
            yield self
        finally:
            self.state = previous

    @property
    def is_empty(self) -> bool:
        """True until the first non-empty write."""
        return self._empty

    @property
    def ends_with_whitespace(self) -> bool:
        """True when the last character written was whitespace."""
        return self._last_char.isspace()

    @property
    def at_line_start(self) -> bool:
        """True when nothing has been written yet or the last write ended a line."""
        return self._empty or self._trailing_newlines > 0

    def write(self, text: str) -> int:
        """Write ``text`` and update the trailing-newline bookkeeping.

        Raises
        ------
        OutputWriteError
            If the wrapped stream fails to accept the text.

        """
        if not text:
            return 0
        try:
            self._target.write(text.encode("utf-8") if self._binary else text)
        except OutputWriteError:
            raise
        except OSError as e:
            raise OutputWriteError(sink_name=self.name, original_error=e) from e

        self._empty = False
        self._last_char = text[-1]
        body = text.rstrip("\n")
        if body:
            self._trailing_newlines = len(text) - len(body)
        else:
            self._trailing_newlines += len(text)
        return len(text)

    def ensure_newlines(self, count: int) -> None:
        """Terminate the current output with at least ``count`` newlines.

        Nothing is written at the very start of the output.
        """
        if self._empty:
            return
        missing = count - self._trailing_newlines
        if missing > 0:
            self.write("\n" * missing)

    def flush(self) -> None:
        """Flush the wrapped stream when it supports flushing."""
        flush = getattr(self._target, "flush", None)
        if flush is not None:
            flush()

    @property
    def name(self) -> str:
        """File name of the wrapped stream, or its type name."""
        name = getattr(self._target, "name", None)
        return str(name) if isinstance(name, (str, os.PathLike)) else type(self._target).__name__


RenderRule = Callable[[Any, MarkdownSink, int, "ConvertOptions"], None]
"""Signature of a render rule: ``(node, sink, nesting_depth, options)``.

The walker state of the node being rendered is ``sink.state``.
"""


__all__ = ["TextSink", "ListFrame", "RenderStats", "RenderState", "MarkdownSink", "RenderRule"]
