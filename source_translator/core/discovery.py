"""Recursive discovery of translatable source files."""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from source_translator.config import settings

logger = logging.getLogger(__name__)


def _normalize_extensions(extensions: Iterable[str]) -> set[str]:
    return {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions}


def discover_files(
    paths: Iterable[Union[str, os.PathLike]],
    extensions: Optional[Iterable[str]] = None,
    exclude_dirs: Optional[Iterable[str]] = None,
) -> Iterator[Path]:
    """Yield source files under ``paths``.

    Directories are walked recursively in sorted order, skipping excluded
    directory names; only files with a matching extension are yielded. A
    path naming a file is yielded as-is.
    """
    wanted = _normalize_extensions(extensions if extensions is not None else settings.file_extensions)
    excluded = set(exclude_dirs if exclude_dirs is not None else settings.exclude_dirs)
    seen: set[Path] = set()

    for raw in paths:
        root_path = Path(raw)
        if root_path.is_file():
            if root_path not in seen:
                seen.add(root_path)
                yield root_path
            continue
        if not root_path.is_dir():
            logger.warning("Path not found: %s", root_path)
            continue

        for root, dirs, files in os.walk(root_path):
            dirs[:] = sorted(d for d in dirs if d not in excluded)
            for filename in sorted(files):
                file_path = Path(root) / filename
                if file_path.suffix.lower() in wanted and file_path not in seen:
                    seen.add(file_path)
                    yield file_path
