"""Tests for the public conversion entry points."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import io
import logging

import pytest
from bs4 import FeatureNotFound
from utils import soup

import dom2md.api
from dom2md import (
    ConvertOptions,
    DependencyError,
    InputError,
    OutputWriteError,
    ParsingError,
    RenderingError,
    convert_node,
    html_to_markdown,
    node_to_markdown,
)
from dom2md.api import read_html_input


class FailingSink:
    """Sink whose writes always fail."""

    name = "broken.md"

    def write(self, text):
        raise OSError("disk full")


@pytest.mark.unit
class TestHtmlToMarkdownInputs:
    """Every supported input type yields the same Markdown."""

    HTML = "<h1>Title</h1><p>Body</p>"
    EXPECTED = "# Title\n\nBody"

    def test_string(self):
        assert html_to_markdown(self.HTML) == self.EXPECTED

    def test_bytes(self):
        assert html_to_markdown(self.HTML.encode("utf-8")) == self.EXPECTED

    def test_path_object(self, tmp_path):
        path = tmp_path / "page.html"
        path.write_text(self.HTML, encoding="utf-8")
        assert html_to_markdown(path) == self.EXPECTED

    def test_path_string(self, tmp_path):
        path = tmp_path / "page.htm"
        path.write_text(self.HTML, encoding="utf-8")
        assert html_to_markdown(str(path)) == self.EXPECTED

    def test_missing_html_path_is_treated_as_text(self):
        assert html_to_markdown("no-such-file.html") == "no-such-file.html"

    def test_text_file_object(self):
        assert html_to_markdown(io.StringIO(self.HTML)) == self.EXPECTED

    def test_binary_file_object(self):
        assert html_to_markdown(io.BytesIO(self.HTML.encode("utf-8"))) == self.EXPECTED

    def test_declared_encoding_is_honored(self):
        html = '<meta charset="latin-1"><p>caf\xe9</p>'.encode("latin-1")
        assert html_to_markdown(html) == "café"

    def test_unsupported_type(self):
        with pytest.raises(InputError) as exc_info:
            html_to_markdown(12345)  # type: ignore[arg-type]
        assert exc_info.value.input_type == "int"

    def test_unreadable_path(self, tmp_path):
        with pytest.raises(InputError):
            html_to_markdown(tmp_path / "missing.html")

    def test_file_object_returning_junk(self):
        class Junk:
            def read(self):
                return 42

        with pytest.raises(InputError):
            read_html_input(Junk())

    def test_empty_input(self):
        assert html_to_markdown("") == ""


@pytest.mark.unit
class TestParserErrors:
    def test_missing_parser_backend(self, monkeypatch):
        def no_builder(markup, parser):
            raise FeatureNotFound(f"Couldn't find a tree builder with the features you requested: {parser}")

        monkeypatch.setattr(dom2md.api, "BeautifulSoup", no_builder)
        with pytest.raises(DependencyError) as exc_info:
            html_to_markdown("<p>x</p>", ConvertOptions(parser="lxml"))

        assert exc_info.value.missing_packages == ["lxml"]
        assert "pip install lxml" in str(exc_info.value)

    def test_parser_failure(self, monkeypatch):
        def broken(markup, parser):
            raise ValueError("bad markup")

        monkeypatch.setattr(dom2md.api, "BeautifulSoup", broken)
        with pytest.raises(ParsingError) as exc_info:
            html_to_markdown("<p>x</p>")

        assert exc_info.value.parser_name == "html.parser"
        assert isinstance(exc_info.value.original_error, ValueError)


@pytest.mark.unit
class TestConvertNode:
    def test_streams_to_text_sink(self, buffer):
        stats = convert_node(soup("<p>a</p><p>b</p>"), buffer)
        assert buffer.getvalue() == "a\n\nb\n\n"
        assert stats.elements == 2
        assert stats.truncated_subtrees == 0

    def test_streams_to_binary_sink(self):
        out = io.BytesIO()
        convert_node(soup("<p>naïve</p>"), out)
        assert out.getvalue() == "naïve\n\n".encode("utf-8")

    def test_subtree_conversion(self):
        doc = soup("<div><p>skip</p><ul><li>x</li></ul></div>")
        assert node_to_markdown(doc.ul) == "- x"

    def test_none_node(self, buffer):
        convert_node(None, buffer)
        assert buffer.getvalue() == ""

    def test_sink_failure_aborts(self):
        with pytest.raises(OutputWriteError) as exc_info:
            convert_node(soup("<p>x</p>"), FailingSink())

        error = exc_info.value
        assert isinstance(error, RenderingError)
        assert isinstance(error, OSError)
        assert error.sink_name == "broken.md"
        assert "disk full" in str(error)

    def test_rule_os_error_is_not_reported_as_sink_failure(self, buffer):
        """Only failures of the sink itself become OutputWriteError."""

        def read_missing(node, sink, nesting_depth, options):
            raise FileNotFoundError("missing.css")

        options = ConvertOptions(custom_rules={"b": read_missing})
        with pytest.raises(FileNotFoundError) as exc_info:
            convert_node(soup("<p>x<b>y</b></p>"), buffer, options)

        assert not isinstance(exc_info.value, OutputWriteError)

    def test_debug_logging(self, buffer, caplog):
        with caplog.at_level(logging.DEBUG, logger="dom2md"):
            convert_node(soup("<p>x</p>"), buffer)
        assert "Rendered 1 elements" in caplog.text


@pytest.mark.unit
class TestNodeToMarkdown:
    def test_blank_lines_collapsed(self):
        assert node_to_markdown(soup("<p>a</p><br><br><br><p>b</p>")) == "a\n\nb"

    def test_leading_indented_code_kept(self):
        assert node_to_markdown(soup("<pre>code</pre>")) == "    code"

    def test_raw_output_without_trim(self, raw_options):
        assert node_to_markdown(soup("<p>a*b</p>"), raw_options) == "a*b\n\n"
