"""Abstract source-tree interface shared by all dialects.

A dialect parses source text into a ``SourceTree``. The tree exposes its
text-bearing leaves as ``TranslatableNode`` objects; writing a node records
the replacement on the tree and ``SourceTree.to_source`` prints the result.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import PurePath
from typing import Iterator, Optional


class SourceTranslatorError(Exception):
    """Base class for errors raised while transforming a source file."""


class ParseError(SourceTranslatorError):
    """Source text could not be parsed by its dialect."""


class PrintError(SourceTranslatorError):
    """A mutated tree could not be printed back to valid source."""


class UnsupportedDialectError(SourceTranslatorError):
    """No dialect is registered for a file extension."""


class NodeAlreadyWrittenError(SourceTranslatorError):
    """A node received a second replacement."""


class NodeKind(str, Enum):
    """Categories of translation-target nodes."""

    LITERAL = "literal"  # String literal value
    TEXT_RUN = "text-run"  # Markup text between tags
    COMMENT = "comment"


class TranslatableNode(ABC):
    """A text-bearing leaf of a source tree with a read/write accessor pair.

    ``text`` is the literal's value, or the trimmed content of a text run or
    comment. ``write`` takes the full replacement payload (the value of a
    literal, the raw run text, the comment body between its delimiters) and
    may be called at most once.
    """

    kind: NodeKind

    def __init__(self, line: Optional[int] = None):
        self.line = line
        self._written: Optional[str] = None

    @property
    def text(self) -> str:
        if self._written is None:
            return self._read()
        if self.kind is NodeKind.LITERAL:
            return self._written
        return self._written.strip()

    @property
    def is_written(self) -> bool:
        return self._written is not None

    def write(self, payload: str) -> None:
        if self._written is not None:
            raise NodeAlreadyWrittenError(
                f"{self.kind.value} node at line {self.line} was already replaced"
            )
        self._apply(payload)
        self._written = payload

    @abstractmethod
    def _read(self) -> str:
        """Return the node's original text payload."""

    @abstractmethod
    def _apply(self, payload: str) -> None:
        """Record ``payload`` as the node's replacement on its tree."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.kind.value} line={self.line} text={self.text!r}>"


class SourceTree(ABC):
    """Parsed, mutable representation of one source file."""

    def __init__(self, source: str, dialect: "Dialect"):
        self.source = source
        self.dialect = dialect

    @abstractmethod
    def iter_text_nodes(self) -> Iterator[TranslatableNode]:
        """Yield every literal, text-run and comment node in document order."""

    @abstractmethod
    def _render(self) -> str:
        """Serialize the tree with all recorded replacements applied."""

    def to_source(self) -> str:
        """Print the tree back to source text.

        Raises:
            PrintError: If rendering fails or the output no longer parses
        """
        try:
            output = self._render()
        except SourceTranslatorError:
            raise
        except Exception as e:
            raise PrintError(f"failed to render {self.dialect.name} source: {e}") from e

        try:
            self.dialect.parse(output)
        except ParseError as e:
            raise PrintError(f"rendered {self.dialect.name} source is invalid: {e}") from e

        return output


class Dialect(ABC):
    """A source language the translator can parse and print."""

    name: str = ""
    extensions: tuple[str, ...] = ()

    @abstractmethod
    def parse(self, source: str) -> SourceTree:
        """Parse ``source``.

        Raises:
            ParseError: If the text is not syntactically recognizable
        """

    def handles(self, path: "str | PurePath") -> bool:
        return PurePath(path).suffix.lower() in self.extensions
