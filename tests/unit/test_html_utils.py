"""Tests for the read-only tree accessors."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import pytest
from bs4.element import Doctype, NavigableString
from utils import comment, element, soup

from dom2md.utils.html_utils import (
    NodeKind,
    attr,
    class_tokens,
    closest_ancestor,
    first_child_element,
    has_class,
    is_block_element,
    is_child_of,
    lang_from_class,
    node_kind,
    tag_name,
)


@pytest.mark.unit
class TestNodeKind:
    """Classification of BeautifulSoup objects."""

    def test_document(self):
        assert node_kind(soup("<p>x</p>")) is NodeKind.DOCUMENT

    def test_element_and_text(self):
        p = element("p", "hello")
        assert node_kind(p) is NodeKind.ELEMENT
        assert node_kind(p.contents[0]) is NodeKind.TEXT

    def test_comment_like_strings(self):
        assert node_kind(comment("note")) is NodeKind.COMMENT
        assert node_kind(Doctype("html")) is NodeKind.COMMENT

    def test_foreign_objects(self):
        assert node_kind(None) is None
        assert node_kind("plain str") is None
        assert node_kind(42) is None

    def test_tag_name_is_lower_case(self):
        doc = soup("<DIV>x</DIV>")
        assert tag_name(doc.div) == "div"
        assert tag_name(NavigableString("x")) == ""
        assert tag_name(None) == ""


@pytest.mark.unit
class TestAttr:
    """Attribute lookup never fails."""

    def test_present_attributes(self):
        node = element("div", class_="myclass", id="myid")
        assert attr(node, "class") == "myclass"
        assert attr(node, "id") == "myid"

    def test_missing_attribute(self):
        node = element("div", class_="myclass", id="myid")
        assert attr(node, "style") == ""

    def test_node_without_attributes(self):
        assert attr(element("div"), "href") == ""
        assert attr(NavigableString("text"), "href") == ""
        assert attr(None, "href") == ""

    def test_multi_valued_attribute_is_joined(self):
        doc = soup('<p class="a  b\tc">x</p>')
        assert attr(doc.p, "class") == "a b c"


@pytest.mark.unit
class TestHasClass:
    """Class-list membership."""

    def test_tokens_from_class_attribute(self):
        node = element("div", class_="class1 class2")
        assert has_class(node, "class1")
        assert has_class(node, "class2")
        assert not has_class(node, "class3")

    def test_arbitrary_whitespace_runs(self):
        node = element("div")
        node.attrs["class"] = "  alpha \t\n beta   "
        assert class_tokens(node) == ["alpha", "beta"]
        assert has_class(node, "beta")

    def test_no_partial_token_match(self):
        node = element("div", class_="class10")
        assert not has_class(node, "class1")

    def test_absent_class(self):
        assert not has_class(element("div"), "x")
        assert not has_class(None, "x")


@pytest.mark.unit
class TestIsChildOf:
    """Ancestor-chain membership."""

    def test_direct_parent(self):
        span = element("span")
        p = element("p")
        span.append(p)
        assert is_child_of(p, "span")

    def test_transitive_ancestor(self):
        doc = soup("<div><span><p>x</p></span></div>")
        assert is_child_of(doc.p, "span")
        assert is_child_of(doc.p, "div")
        assert is_child_of(doc.span, "div")

    def test_descendants_do_not_count(self):
        doc = soup("<div><span><p>x</p></span></div>")
        assert not is_child_of(doc.span, "p")

    def test_self_does_not_count(self):
        assert not is_child_of(element("div"), "div")

    def test_missing_node_and_detached_node(self):
        assert not is_child_of(None, "div")
        assert not is_child_of(element("p"), "div")

    def test_text_node_ancestors(self):
        doc = soup("<pre><code>x = 1</code></pre>")
        text = doc.code.contents[0]
        assert is_child_of(text, "pre")
        assert is_child_of(text, "code")

    def test_closest_ancestor(self):
        doc = soup("<table id='outer'><tr><td><table id='inner'><tr><td>x</td></tr></table></td></tr></table>")
        inner_row = doc.find(id="inner").tr
        assert closest_ancestor(inner_row, "table")["id"] == "inner"
        assert closest_ancestor(doc.find(id="outer"), "table") is None


@pytest.mark.unit
class TestLangFromClass:
    """Code language detection from ``language-*`` class tokens."""

    def test_language_on_pre(self):
        pre = element("pre", element("code"), class_="language-golang")
        assert lang_from_class(pre) == "golang"

    def test_language_after_other_classes(self):
        pre = element("pre", element("code"), class_="other-class language-python")
        assert lang_from_class(pre) == "python"

    def test_no_language_class(self):
        pre = element("pre", element("code"), class_="other-class")
        assert lang_from_class(pre) == ""

    def test_language_on_first_code_child(self):
        doc = soup('<pre>\n<code class="hljs language-rust">fn main() {}</code></pre>')
        assert lang_from_class(doc.pre) == "rust"

    def test_first_matching_token_wins(self):
        pre = element("pre", class_="language-js language-ts")
        assert lang_from_class(pre) == "js"

    def test_bare_prefix_is_ignored(self):
        assert lang_from_class(element("pre", class_="language-")) == ""

    def test_only_first_code_child_is_consulted(self):
        doc = soup('<pre><code>a</code><code class="language-c">b</code></pre>')
        assert lang_from_class(doc.pre) == ""

    def test_missing_node(self):
        assert lang_from_class(None) == ""


@pytest.mark.unit
def test_first_child_element_and_block_classification():
    doc = soup("<div>text<span>a</span><span>b</span></div>")
    assert first_child_element(doc.div, "span").get_text() == "a"
    assert first_child_element(doc.div, "p") is None
    assert first_child_element(NavigableString("x"), "span") is None
    assert is_block_element(doc.div)
    assert not is_block_element(doc.span)
