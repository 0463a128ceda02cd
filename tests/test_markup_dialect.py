"""Tests for the lxml-backed HTML dialect."""

import pytest

from source_translator.core.classifier import classify
from source_translator.core.source import NodeKind
from source_translator.core.source.markup import HTML

PAGE = (
    "<!DOCTYPE html>\n"
    "<html>\n"
    "<head><title>テスト</title></head>\n"
    "<body>\n"
    "<!-- コメント -->\n"
    "<p>こんにちは <b>画像</b> 説明</p>\n"
    '<script>var a = "エラー";</script>\n'
    "<pre>コード</pre>\n"
    "</body>\n"
    "</html>\n"
)


@pytest.fixture
def page_tree():
    return HTML.parse(PAGE)


class TestClassification:

    def test_candidates_in_document_order(self, page_tree):
        nodes = list(classify(page_tree))
        assert [(n.kind, n.text) for n in nodes] == [
            (NodeKind.TEXT_RUN, "テスト"),
            (NodeKind.COMMENT, "コメント"),
            (NodeKind.TEXT_RUN, "こんにちは"),
            (NodeKind.TEXT_RUN, "画像"),
            (NodeKind.TEXT_RUN, "説明"),
        ]

    def test_lines_are_reported(self, page_tree):
        nodes = list(classify(page_tree))
        assert nodes[0].line == 3
        assert nodes[2].line == 6

    def test_empty_fragment_has_no_candidates(self):
        tree = HTML.parse("")
        assert list(classify(tree)) == []
        assert tree.to_source() == ""

    def test_fragment_lines_are_reported(self):
        tree = HTML.parse("<ul>\n  <li>one</li>\n  <li>説明</li>\n</ul>\n")
        (node,) = classify(tree)
        assert node.line == 3


class TestFragments:

    def test_untouched_fragment_prints_identically(self):
        source = "<p>hello</p>\n<!-- note -->\n<br>\n"
        tree = HTML.parse(source)
        assert list(classify(tree)) == []
        assert tree.to_source() == source

    def test_untouched_document_prints_identically(self):
        tree = HTML.parse(PAGE)
        assert tree.to_source() == PAGE

    def test_fragment_is_not_wrapped(self):
        tree = HTML.parse("<p>テスト</p>\n<p>plain</p>\n")
        (node,) = classify(tree)
        node.write(" Test ")
        assert tree.to_source() == "<p> Test </p>\n<p>plain</p>\n"

    def test_fragment_leading_text(self):
        tree = HTML.parse("説明 <b>bold</b>")
        (node,) = classify(tree)
        node.write(" Note ")
        assert tree.to_source() == " Note <b>bold</b>"


class TestWriteBack:

    def test_text_runs_and_comments_are_replaced(self, page_tree):
        title, comment, para, bold, tail = classify(page_tree)
        title.write(" Test ")
        comment.write(" Comment ")
        para.write(" Hello ")
        bold.write(" Image ")
        tail.write(" Explanation ")

        output = page_tree.to_source()
        assert "<title> Test </title>" in output
        assert "<!-- Comment -->" in output
        assert "<p> Hello <b> Image </b> Explanation </p>" in output

    def test_raw_text_elements_are_untouched(self, page_tree):
        for node in classify(page_tree):
            node.write(" x ")
        output = page_tree.to_source()
        assert 'var a = "エラー";' in output
        assert "<pre>コード</pre>" in output

    def test_text_is_serialized_escaped(self):
        tree = HTML.parse("<p>テスト</p>")
        (node,) = classify(tree)
        node.write(" a < b & c ")
        assert "<p> a &lt; b &amp; c </p>" in tree.to_source()

    def test_comment_double_hyphen_is_split(self):
        tree = HTML.parse("<div><!-- 説明 --></div>")
        (node,) = classify(tree)
        node.write(" a--b ")
        assert "<!-- a- -b -->" in tree.to_source()
