"""Translation run models."""

from dataclasses import dataclass
from typing import Optional

from source_translator.core.source import NodeKind, TranslatableNode


@dataclass(frozen=True)
class RunOptions:
    """Options for one translation run."""

    dry_run: bool = False  # Produce a report instead of calling the backend


@dataclass(frozen=True)
class TranslationContext:
    """Where a text comes from, for markers and diagnostics."""

    file_path: str
    kind: NodeKind

    @property
    def label(self) -> str:
        return self.kind.value


@dataclass
class TranslationTask:
    """One pending translation, bound to the node it was created from."""

    node: TranslatableNode
    original_text: str
    kind: NodeKind


@dataclass(frozen=True)
class TranslationRecord:
    """The settled outcome of one TranslationTask."""

    kind: NodeKind
    line: Optional[int]
    original: str
    translated: str

    @property
    def changed(self) -> bool:
        return self.translated != self.original
