"""Translation coordinator.

Fans one translation request out per candidate node of a tree, waits for all
of them to settle, then writes every result back to the node it came from.
"""

import asyncio
import logging
from typing import Optional, Protocol

from source_translator.core.classifier import NodeClassifier
from source_translator.core.source import NodeKind, SourceTree
from source_translator.utils.text import normalize_for_display

from .models import RunOptions, TranslationContext, TranslationRecord, TranslationTask

logger = logging.getLogger(__name__)


class Translator(Protocol):
    async def translate(
        self, text: str, options: RunOptions, context: TranslationContext
    ) -> str: ...


def render_replacement(kind: NodeKind, translated: str) -> str:
    """Payload written to a node of ``kind``.

    Text runs and comments are padded with one space on each side so adjacent
    markup and comment delimiters stay separated.
    """
    if kind is NodeKind.LITERAL:
        return translated
    return f" {translated} "


async def apply_translations(
    tree: SourceTree,
    options: RunOptions,
    file_path: str,
    client: Translator,
    classifier: Optional[NodeClassifier] = None,
) -> list[TranslationRecord]:
    """Translate every candidate node of ``tree`` in place.

    The candidate list is frozen before any request is issued. A task whose
    result equals its original text (the client's failure fallback) leaves
    its node untouched; so does a translator that raises, after its error is
    logged. Every request settles before any node is written.

    Returns:
        One record per candidate, in document order
    """
    classifier = classifier or NodeClassifier()
    tasks = [
        TranslationTask(node=node, original_text=node.text, kind=node.kind)
        for node in classifier.classify(tree)
    ]
    if not tasks:
        return []

    logger.debug("Translating %d node(s) in %s", len(tasks), file_path)

    results = await asyncio.gather(
        *(
            client.translate(
                task.original_text,
                options,
                TranslationContext(file_path=file_path, kind=task.kind),
            )
            for task in tasks
        ),
        return_exceptions=True,
    )

    records = []
    for task, translated in zip(tasks, results):
        if isinstance(translated, Exception):
            logger.error(
                'Translation failed for text: "%s" in file: "%s": %s',
                normalize_for_display(task.original_text, max_length=80),
                file_path,
                translated,
            )
            translated = task.original_text
        elif isinstance(translated, BaseException):
            raise translated
        if translated != task.original_text:
            task.node.write(render_replacement(task.kind, translated))
        records.append(
            TranslationRecord(
                kind=task.kind,
                line=task.node.line,
                original=task.original_text,
                translated=translated,
            )
        )
    return records
