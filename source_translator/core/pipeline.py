"""File pipeline: parse -> classify -> translate -> print, one file at a time.

Any failure inside the pipeline is contained to its file: the outcome falls
back to the original, unmodified text.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from source_translator.core.source import get_dialect_for_path
from source_translator.core.translation import (
    RunOptions,
    TranslationClient,
    TranslationRecord,
    Translator,
    apply_translations,
)
from source_translator.utils.text import normalize_for_display

logger = logging.getLogger(__name__)


class FileState(str, Enum):
    """Pipeline states of one file."""

    PENDING = "pending"
    PARSED = "parsed"
    TRANSLATED = "translated"
    PRINTED = "printed"
    FAILED = "failed"


@dataclass
class FileOutcome:
    """Result of running the pipeline over one file."""

    path: str
    original_text: str
    output_text: Optional[str] = None
    state: FileState = FileState.PENDING
    dialect: Optional[str] = None
    error: Optional[str] = None
    records: list[TranslationRecord] = field(default_factory=list)
    written: bool = False

    @property
    def succeeded(self) -> bool:
        return self.state is FileState.PRINTED

    @property
    def changed(self) -> bool:
        return self.output_text is not None and self.output_text != self.original_text

    @property
    def translated_count(self) -> int:
        return sum(1 for record in self.records if record.changed)


async def transform_source(
    source: str,
    path: Union[str, Path],
    options: RunOptions,
    client: Translator,
) -> FileOutcome:
    """Run the pipeline over in-memory ``source`` that belongs to ``path``."""
    outcome = FileOutcome(path=str(path), original_text=source)

    try:
        dialect = get_dialect_for_path(path)
        outcome.dialect = dialect.name

        tree = dialect.parse(source)
        outcome.state = FileState.PARSED

        outcome.records = await apply_translations(tree, options, str(path), client)
        outcome.state = FileState.TRANSLATED

        outcome.output_text = tree.to_source()
        outcome.state = FileState.PRINTED

    except asyncio.CancelledError:
        raise
    except Exception as e:
        logger.error("Failed to process %s: %s", path, e)
        outcome.state = FileState.FAILED
        outcome.error = str(e)
        outcome.output_text = source

    return outcome


def read_source(path: Path) -> str:
    # newline="" keeps CRLF line endings intact on write-back
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_source(path: Path, text: str) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def report_dry_run(outcome: FileOutcome) -> None:
    """Emit one report line per candidate node of a dry run."""
    for record in outcome.records:
        logger.info(
            'File: %s:%s, Would translate %s: "%s"',
            outcome.path,
            record.line if record.line is not None else "?",
            record.kind.value,
            normalize_for_display(record.original),
        )


async def process_file(
    path: Union[str, Path],
    options: RunOptions,
    client: Optional[Translator] = None,
) -> FileOutcome:
    """Translate one file on disk.

    In dry-run mode nothing is written; a report line is logged per
    candidate instead. Otherwise the file is rewritten when its text changed.

    Raises:
        OSError: If the file cannot be read or written
    """
    path = Path(path)
    client = client or TranslationClient()

    source = read_source(path)
    outcome = await transform_source(source, path, options, client)

    if options.dry_run:
        report_dry_run(outcome)
        return outcome

    if outcome.succeeded and outcome.changed:
        write_source(path, outcome.output_text)
        outcome.written = True
        logger.info("Processed %s (%d node(s) translated)", path, outcome.translated_count)
    elif outcome.succeeded:
        logger.debug("No changes for %s", path)

    return outcome
