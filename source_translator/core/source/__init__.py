"""Source dialects: parse text into mutable trees and print them back.

- javascript: .js/.jsx/.mjs/.cjs, .ts, .tsx via tree-sitter
- python: .py via libcst
- markup: .html via lxml
"""

from .base import (
    Dialect,
    NodeAlreadyWrittenError,
    NodeKind,
    ParseError,
    PrintError,
    SourceTranslatorError,
    SourceTree,
    TranslatableNode,
    UnsupportedDialectError,
)
from .registry import DialectRegistry, get_dialect_for_path

__all__ = [
    "Dialect",
    "DialectRegistry",
    "NodeAlreadyWrittenError",
    "NodeKind",
    "ParseError",
    "PrintError",
    "SourceTranslatorError",
    "SourceTree",
    "TranslatableNode",
    "UnsupportedDialectError",
    "get_dialect_for_path",
]
