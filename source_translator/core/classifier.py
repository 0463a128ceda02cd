"""Node classifier.

Selects the translation targets of a parsed source tree: string literals
whose value contains Japanese, and markup text runs and comments whose
trimmed text does. Everything else is left untouched.
"""

from typing import Callable, Iterator

from source_translator.core.source import SourceTree, TranslatableNode
from source_translator.utils.text import contains_target_script


class NodeClassifier:
    """Classify tree nodes as translation candidates."""

    def __init__(self, detector: Callable[[str], bool] = contains_target_script):
        self.detector = detector

    def classify(self, tree: SourceTree) -> Iterator[TranslatableNode]:
        """Yield candidate nodes lazily, in document order.

        Classifying the same unmutated tree again yields the same sequence.
        """
        for node in tree.iter_text_nodes():
            if self.detector(node.text):
                yield node


def classify(tree: SourceTree) -> Iterator[TranslatableNode]:
    return NodeClassifier().classify(tree)
