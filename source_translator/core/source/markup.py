"""HTML dialect backed by lxml.

Text runs are an element's ``text`` and each child's ``tail``; comments are
``<!-- -->`` nodes. The lxml tree is mutated in place and re-serialized, so a
file with replacements is normalized the way lxml's HTML serializer prints
documents. A file without replacements prints back as its original text.

Sources without ``<!DOCTYPE>`` or ``<html>`` are fragments (partials,
templates): they are parsed inside a ``<div>`` wrapper and printed without it,
so no ``<html><body>`` scaffolding is added.
"""

import re
from typing import Iterator

from lxml import etree

from .base import Dialect, NodeKind, ParseError, SourceTree, TranslatableNode

# Elements whose text is code or data, not human-readable prose
RAW_TEXT_ELEMENTS = {"script", "style", "template", "pre", "code", "textarea"}

_DOCUMENT_RE = re.compile(r"<(?:!doctype|html)\b", re.IGNORECASE)

_FRAGMENT_OPEN = "<div>"
_FRAGMENT_CLOSE = "</div>"


def _line_of(element: etree._Element):
    return element.sourceline


class _HtmlNode(TranslatableNode):
    def __init__(self, tree: "HtmlSourceTree", element: etree._Element):
        super().__init__(line=_line_of(element))
        self._tree = tree
        self._element = element


class TextRunNode(_HtmlNode):
    """The ``text`` or ``tail`` run of one element."""

    kind = NodeKind.TEXT_RUN

    def __init__(self, tree: "HtmlSourceTree", element: etree._Element, attribute: str):
        super().__init__(tree, element)
        self._attribute = attribute

    def _read(self) -> str:
        return (getattr(self._element, self._attribute) or "").strip()

    def _apply(self, payload: str) -> None:
        setattr(self._element, self._attribute, payload)
        self._tree.mark_edited()


class CommentNode(_HtmlNode):
    kind = NodeKind.COMMENT

    def _read(self) -> str:
        return (self._element.text or "").strip()

    def _apply(self, payload: str) -> None:
        # lxml rejects comments containing "--" or ending with "-"
        body = payload.replace("--", "- -")
        if body.endswith("-"):
            body += " "
        self._element.text = body
        self._tree.mark_edited()


def _is_element(node) -> bool:
    return isinstance(node.tag, str)


class HtmlSourceTree(SourceTree):
    def __init__(self, source: str, dialect: "HtmlDialect", root: etree._Element, fragment: bool = False):
        super().__init__(source, dialect)
        self._root = root
        self.fragment = fragment
        self._edited = False

    def mark_edited(self) -> None:
        self._edited = True

    def _top_level(self) -> list:
        if self.fragment:
            return [self._root]
        preceding = list(self._root.itersiblings(preceding=True))
        following = list(self._root.itersiblings())
        return list(reversed(preceding)) + [self._root] + following

    def _walk(self, node, raw_text: bool) -> Iterator[TranslatableNode]:
        if node.tag is etree.Comment:
            yield CommentNode(self, node)
            return
        if not _is_element(node):
            return

        raw_text = raw_text or node.tag.lower() in RAW_TEXT_ELEMENTS
        if node.text and not raw_text:
            yield TextRunNode(self, node, "text")
        for child in node:
            yield from self._walk(child, raw_text)
            if child.tail and not raw_text:
                yield TextRunNode(self, child, "tail")

    def iter_text_nodes(self) -> Iterator[TranslatableNode]:
        for node in self._top_level():
            yield from self._walk(node, raw_text=False)

    def _render(self) -> str:
        if not self._edited:
            return self.source
        if self.fragment:
            output = etree.tostring(self._root, method="html", encoding="unicode", with_tail=False)
            return output[len(_FRAGMENT_OPEN):len(output) - len(_FRAGMENT_CLOSE)]
        return etree.tostring(
            self._root.getroottree(),
            method="html",
            encoding="unicode",
        )


class HtmlDialect(Dialect):
    name = "html"
    extensions = (".html", ".htm")

    def parse(self, source: str) -> HtmlSourceTree:
        parser = etree.HTMLParser(remove_blank_text=False, remove_comments=False)
        fragment = _DOCUMENT_RE.search(source) is None
        text = f"{_FRAGMENT_OPEN}{source}{_FRAGMENT_CLOSE}" if fragment else source
        try:
            root = etree.fromstring(text, parser)
        except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
            raise ParseError(f"unparseable HTML: {e}") from e
        if root is None:
            raise ParseError("document is empty")

        if fragment:
            root = root.find("body/div")
            if root is None:
                raise ParseError("fragment could not be wrapped")
        return HtmlSourceTree(source, self, root, fragment=fragment)


HTML = HtmlDialect()
