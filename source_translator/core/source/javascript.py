"""JavaScript / TypeScript / JSX dialects backed by tree-sitter.

Tree-sitter trees are immutable, so ``EcmaSourceTree`` keeps the parsed tree
read-only and records replacements as edits keyed by the original byte span.
Printing splices the edits into the original bytes; untouched regions are
reproduced byte for byte.
"""

import html
import re
from typing import Iterator, Optional

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .base import Dialect, NodeKind, ParseError, SourceTree, TranslatableNode

JAVASCRIPT_LANGUAGE = Language(tree_sitter_javascript.language())
TYPESCRIPT_LANGUAGE = Language(tree_sitter_typescript.language_typescript())
TSX_LANGUAGE = Language(tree_sitter_typescript.language_tsx())

_JS_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_LINE_CONTINUATIONS = {"\n", "\r", "\r\n", "\u2028", "\u2029"}

# Characters that cannot appear raw inside a quoted JS string
_JS_UNSAFE_RE = re.compile(r"[\x00-\x1f\u2028\u2029\ud800-\udfff]")
_JS_UNSAFE_NAMES = {"\n": "\\n", "\r": "\\r", "\t": "\\t", "\b": "\\b", "\f": "\\f", "\v": "\\v"}

# JSX text cannot contain these raw; braces would open an expression container
_JSX_TEXT_ENTITIES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    "{": "&#123;",
    "}": "&#125;",
}

_JSX_TEXT_PIECES = {"jsx_text", "html_character_reference"}


def _unescape_js(match: "re.Match[str]") -> str:
    seq = match.group(1)
    if seq.startswith("u{"):
        return chr(int(seq[2:-1], 16))
    if seq[0] == "u" and len(seq) == 5:
        return chr(int(seq[1:], 16))
    if seq[0] == "x" and len(seq) == 3:
        return chr(int(seq[1:], 16))
    if seq in _LINE_CONTINUATIONS:
        return ""
    return _SIMPLE_ESCAPES.get(seq, seq)


def decode_js_string(body: str) -> str:
    """Decode the escape sequences of a JS string literal body."""
    return _JS_ESCAPE_RE.sub(_unescape_js, body)


def encode_js_string(value: str, quote: str) -> str:
    """Encode ``value`` as a JS string literal body for the given quote."""
    body = value.replace("\\", "\\\\").replace(quote, "\\" + quote)
    return _JS_UNSAFE_RE.sub(
        lambda m: _JS_UNSAFE_NAMES.get(m.group(0), "\\u%04x" % ord(m.group(0))),
        body,
    )


def encode_jsx_attribute(value: str, quote: str) -> str:
    """Encode ``value`` for a quoted JSX attribute (HTML entities, no backslashes)."""
    body = value.replace("&", "&amp;")
    return body.replace(quote, "&quot;" if quote == '"' else "&#39;")


def encode_jsx_text(value: str) -> str:
    return "".join(_JSX_TEXT_ENTITIES.get(ch, ch) for ch in value)


class _EcmaNode(TranslatableNode):
    def __init__(self, tree: "EcmaSourceTree", node: Node, last: Optional[Node] = None):
        super().__init__(line=node.start_point[0] + 1)
        self._tree = tree
        self._start = node.start_byte
        self._end = (last if last is not None else node).end_byte
        self._raw = tree.slice(self._start, self._end)

    def _replace(self, raw: str) -> None:
        self._tree.record_edit(self._start, self._end, raw)


class StringLiteralNode(_EcmaNode):
    """A quoted string literal, either in code or as a JSX attribute value."""

    kind = NodeKind.LITERAL

    def __init__(self, tree: "EcmaSourceTree", node: Node):
        super().__init__(tree, node)
        parent = node.parent
        self.in_jsx_attribute = parent is not None and parent.type == "jsx_attribute"
        self.quote = self._raw[0]
        self._body = self._raw[1:-1]

    def _read(self) -> str:
        if self.in_jsx_attribute:
            return html.unescape(self._body)
        return decode_js_string(self._body)

    def _apply(self, payload: str) -> None:
        if self.in_jsx_attribute:
            body = encode_jsx_attribute(payload, self.quote)
        else:
            body = encode_js_string(payload, self.quote)
        self._replace(f"{self.quote}{body}{self.quote}")


class JsxTextNode(_EcmaNode):
    """A run of text between JSX tags.

    Tree-sitter splits the run at character references (``&amp;``); the node
    spans every adjacent piece so the run is read and replaced as one text.
    """

    kind = NodeKind.TEXT_RUN

    def __init__(self, tree: "EcmaSourceTree", pieces: list[Node]):
        super().__init__(tree, pieces[0], pieces[-1])

    def _read(self) -> str:
        return html.unescape(self._raw).strip()

    def _apply(self, payload: str) -> None:
        self._replace(encode_jsx_text(payload))


class CommentNode(_EcmaNode):
    """A ``//`` line comment or a ``/* */`` block comment."""

    kind = NodeKind.COMMENT

    def __init__(self, tree: "EcmaSourceTree", node: Node):
        super().__init__(tree, node)
        raw = self._raw
        if raw.startswith("//"):
            self.opener, self.closer = "//", ""
        elif raw.startswith("/**") and len(raw) >= 5:
            self.opener, self.closer = "/**", "*/"
        elif raw.startswith("/*"):
            self.opener, self.closer = "/*", "*/"
        else:
            # e.g. HTML-style comments tolerated by the grammar
            self.opener, self.closer = "", ""
        self._body = raw[len(self.opener):len(raw) - len(self.closer)]

    @property
    def is_line_comment(self) -> bool:
        return self.opener == "//"

    def _read(self) -> str:
        return self._body.strip()

    def _apply(self, payload: str) -> None:
        if self.is_line_comment:
            body = " ".join(payload.splitlines())
        else:
            body = payload.replace("*/", "* /")
        self._replace(f"{self.opener}{body}{self.closer}")


def _group_jsx_text(children: list[Node]) -> list:
    """Collect each run of adjacent JSX text pieces into a list."""
    grouped: list = []
    for child in children:
        if child.type in _JSX_TEXT_PIECES:
            if grouped and isinstance(grouped[-1], list):
                grouped[-1].append(child)
            else:
                grouped.append([child])
        else:
            grouped.append(child)
    return grouped


class EcmaSourceTree(SourceTree):
    """A tree-sitter parse of a JS/TS file plus the edits recorded on it."""

    def __init__(self, source: str, dialect: "EcmaDialect", tree):
        super().__init__(source, dialect)
        self._bytes = source.encode("utf-8")
        self._tree = tree
        self._edits: dict[tuple[int, int], str] = {}

    def slice(self, start: int, end: int) -> str:
        return self._bytes[start:end].decode("utf-8")

    def record_edit(self, start: int, end: int, replacement: str) -> None:
        self._edits[(start, end)] = replacement

    def iter_text_nodes(self) -> Iterator[TranslatableNode]:
        stack: list = [self._tree.root_node]
        while stack:
            node = stack.pop()
            if isinstance(node, list):
                yield JsxTextNode(self, node)
                continue
            if node.type == "string":
                yield StringLiteralNode(self, node)
            elif node.type == "comment":
                yield CommentNode(self, node)
            else:
                stack.extend(reversed(_group_jsx_text(node.children)))

    def _render(self) -> str:
        if not self._edits:
            return self.source
        parts = []
        cursor = 0
        for (start, end), replacement in sorted(self._edits.items()):
            parts.append(self._bytes[cursor:start])
            parts.append(replacement.encode("utf-8"))
            cursor = end
        parts.append(self._bytes[cursor:])
        return b"".join(parts).decode("utf-8")


def _first_error(node: Node) -> Optional[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        if current.has_error:
            stack.extend(reversed(current.children))
    return None


class EcmaDialect(Dialect):
    """Parses one member of the JavaScript family with tree-sitter."""

    def __init__(self, name: str, language: Language, extensions: tuple[str, ...]):
        self.name = name
        self.language = language
        self.extensions = extensions

    def parse(self, source: str) -> EcmaSourceTree:
        parser = Parser(self.language)
        tree = parser.parse(source.encode("utf-8"))
        if tree.root_node.has_error:
            error = _first_error(tree.root_node)
            if error is not None:
                row, column = error.start_point
                raise ParseError(f"syntax error at line {row + 1}, column {column + 1}")
            raise ParseError("syntax error")
        return EcmaSourceTree(source, self, tree)


JAVASCRIPT = EcmaDialect("javascript", JAVASCRIPT_LANGUAGE, (".js", ".jsx", ".mjs", ".cjs"))
TYPESCRIPT = EcmaDialect("typescript", TYPESCRIPT_LANGUAGE, (".ts", ".mts", ".cts"))
TSX = EcmaDialect("tsx", TSX_LANGUAGE, (".tsx",))
