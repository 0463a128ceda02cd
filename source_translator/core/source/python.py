"""Python dialect backed by libcst.

libcst trees are immutable too: nodes are collected with a visitor, writes
are stored against the identity of the original node, and printing runs a
transformer that swaps in the replacements before emitting ``module.code``.
"""

from typing import Iterator, Optional

import libcst as cst
from libcst.metadata import MetadataWrapper, PositionProvider

from .base import Dialect, NodeKind, ParseError, PrintError, SourceTree, TranslatableNode


def encode_python_string(value: str, quote: str) -> str:
    """Encode ``value`` as the body of a non-raw Python string literal."""
    body = value.replace("\\", "\\\\").replace(quote[0], "\\" + quote[0])
    triple = len(quote) == 3
    out = []
    for ch in body:
        if ch == "\n" and triple:
            out.append(ch)
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            out.append("\\r")
        elif ch == "\t":
            out.append("\\t")
        elif ord(ch) < 0x20 or 0xD800 <= ord(ch) <= 0xDFFF:
            out.append("\\u%04x" % ord(ch))
        else:
            out.append(ch)
    return "".join(out)


class StringNode(TranslatableNode):
    """A ``str`` literal (``SimpleString``); docstrings included."""

    kind = NodeKind.LITERAL

    def __init__(self, tree: "PythonSourceTree", node: cst.SimpleString, line: Optional[int]):
        super().__init__(line=line)
        self._tree = tree
        self._node = node

    def _read(self) -> str:
        return self._node.evaluated_value

    def _apply(self, payload: str) -> None:
        # Raw strings cannot hold every payload, so the prefix loses its "r"
        prefix = "".join(ch for ch in self._node.prefix if ch not in "rR")
        quote = self._node.quote
        value = f"{prefix}{quote}{encode_python_string(payload, quote)}{quote}"
        self._tree.record_edit(self._node, value)


class CommentNode(TranslatableNode):
    """A ``#`` comment."""

    kind = NodeKind.COMMENT

    def __init__(self, tree: "PythonSourceTree", node: cst.Comment, line: Optional[int]):
        super().__init__(line=line)
        self._tree = tree
        self._node = node

    def _read(self) -> str:
        return self._node.value[1:].strip()

    def _apply(self, payload: str) -> None:
        body = " ".join(payload.splitlines())
        self._tree.record_edit(self._node, f"#{body}")


class _TextNodeCollector(cst.CSTVisitor):
    def __init__(self) -> None:
        self.found: list[cst.CSTNode] = []

    def visit_SimpleString(self, node: cst.SimpleString) -> None:
        if "b" not in node.prefix.lower():
            self.found.append(node)

    def visit_Comment(self, node: cst.Comment) -> None:
        self.found.append(node)

    def visit_FormattedString(self, node: cst.FormattedString) -> bool:
        return False


class _ReplacementTransformer(cst.CSTTransformer):
    def __init__(self, edits: dict[int, str]):
        self._edits = edits

    def leave_SimpleString(
        self, original_node: cst.SimpleString, updated_node: cst.SimpleString
    ) -> cst.SimpleString:
        value = self._edits.get(id(original_node))
        if value is None:
            return updated_node
        return updated_node.with_changes(value=value)

    def leave_Comment(self, original_node: cst.Comment, updated_node: cst.Comment) -> cst.Comment:
        value = self._edits.get(id(original_node))
        if value is None:
            return updated_node
        return updated_node.with_changes(value=value)


class PythonSourceTree(SourceTree):
    def __init__(self, source: str, dialect: "PythonDialect", module: cst.Module):
        super().__init__(source, dialect)
        self._module = module
        wrapper = MetadataWrapper(module, unsafe_skip_copy=True)
        self._positions = wrapper.resolve(PositionProvider)
        # Keyed by id() of the original node; the module keeps those nodes alive
        self._edits: dict[int, str] = {}

    def record_edit(self, node: cst.CSTNode, value: str) -> None:
        self._edits[id(node)] = value

    def iter_text_nodes(self) -> Iterator[TranslatableNode]:
        collector = _TextNodeCollector()
        self._module.visit(collector)
        for node in collector.found:
            position = self._positions.get(node)
            line = position.start.line if position is not None else None
            if isinstance(node, cst.SimpleString):
                yield StringNode(self, node, line)
            else:
                yield CommentNode(self, node, line)

    def _render(self) -> str:
        if not self._edits:
            return self._module.code
        try:
            return self._module.visit(_ReplacementTransformer(self._edits)).code
        except cst.CSTValidationError as e:
            raise PrintError(f"invalid replacement: {e}") from e


class PythonDialect(Dialect):
    name = "python"
    extensions = (".py", ".pyi")

    def parse(self, source: str) -> PythonSourceTree:
        try:
            module = cst.parse_module(source)
        except cst.ParserSyntaxError as e:
            raise ParseError(f"syntax error at line {e.raw_line}, column {e.raw_column}: {e.message}") from e
        return PythonSourceTree(source, self, module)


PYTHON = PythonDialect()
