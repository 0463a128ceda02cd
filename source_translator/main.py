"""Command-line entry point."""

import argparse
import asyncio
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from source_translator.config import settings
from source_translator.core.discovery import discover_files
from source_translator.core.llm import LLMRuntimeConfig
from source_translator.core.pipeline import FileState, process_file
from source_translator.core.translation import RunOptions, TranslationClient, Translator

logger = logging.getLogger(__name__)


@dataclass
class RunSummary:
    """Counts for one CLI run."""

    files: int = 0
    written: int = 0
    failed: int = 0
    skipped: int = 0
    nodes: int = 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="source-translator",
        description="Translate Japanese string literals, JSX text and comments in source files to English.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Files or directories to process (default: current directory).",
    )
    parser.add_argument(
        "-d",
        "--dry-run",
        action="store_true",
        help="Report what would be translated without calling the API or writing files.",
    )
    parser.add_argument(
        "--ext",
        dest="extensions",
        action="append",
        metavar="EXT",
        help=f"File extension to include; repeatable (default: {' '.join(settings.file_extensions)}).",
    )
    parser.add_argument(
        "--model",
        help=f"LLM model to translate with (default: {settings.llm_model}).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def run(
    paths: Sequence[str],
    options: RunOptions,
    client: Translator,
    extensions: Optional[Sequence[str]] = None,
) -> RunSummary:
    """Process every discovered file sequentially.

    A failure in one file is logged and the run continues with the next.
    """
    summary = RunSummary()
    roots = list(paths) or [str(Path.cwd())]

    for file_path in discover_files(roots, extensions=extensions):
        summary.files += 1
        try:
            outcome = await process_file(file_path, options, client)
        except Exception as e:
            logger.error("Error processing %s: %s", file_path, e)
            logger.warning("Skipped %s due to error", file_path)
            summary.skipped += 1
            continue

        if outcome.state is FileState.FAILED:
            summary.failed += 1
        summary.written += int(outcome.written)
        summary.nodes += len(outcome.records)

    logger.info(
        "Done. %d file(s) scanned, %d written, %d failed, %d skipped, %d node(s) %s.",
        summary.files,
        summary.written,
        summary.failed,
        summary.skipped,
        summary.nodes,
        "reported" if options.dry_run else "processed",
    )
    return summary


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    options = RunOptions(dry_run=args.dry_run)
    config = LLMRuntimeConfig.from_settings(settings)
    if args.model:
        config = config.with_overrides(model=args.model)
    client = TranslationClient(config)

    asyncio.run(run(args.paths, options, client, extensions=args.extensions))
    return 0


if __name__ == "__main__":
    sys.exit(main())
