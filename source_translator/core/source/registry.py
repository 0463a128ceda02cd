"""Dialect lookup by file extension."""

from pathlib import PurePath
from typing import Union

from .base import Dialect, UnsupportedDialectError
from .javascript import JAVASCRIPT, TSX, TYPESCRIPT
from .markup import HTML
from .python import PYTHON


class DialectRegistry:
    """Maps file extensions to the dialect that parses them."""

    DIALECTS: tuple[Dialect, ...] = (JAVASCRIPT, TYPESCRIPT, TSX, PYTHON, HTML)

    @classmethod
    def for_path(cls, path: Union[str, PurePath]) -> Dialect:
        """Return the dialect for ``path``.

        Raises:
            UnsupportedDialectError: If no dialect handles the extension
        """
        for dialect in cls.DIALECTS:
            if dialect.handles(path):
                return dialect
        raise UnsupportedDialectError(
            f"no dialect for '{PurePath(path).suffix or path}'"
        )

    @classmethod
    def supported_extensions(cls) -> list[str]:
        return [ext for dialect in cls.DIALECTS for ext in dialect.extensions]


def get_dialect_for_path(path: Union[str, PurePath]) -> Dialect:
    return DialectRegistry.for_path(path)
