"""Text utilities for script detection and safe log output."""

import re
from typing import Optional

# CJK punctuation, hiragana, katakana, full-width forms, common + extension A ideographs
TARGET_SCRIPT_RANGES = (
    ("\u3000", "\u303f"),
    ("\u3040", "\u309f"),
    ("\u30a0", "\u30ff"),
    ("\uff00", "\uff9f"),
    ("\u4e00", "\u9faf"),
    ("\u3400", "\u4dbf"),
)

_TARGET_SCRIPT_RE = re.compile(
    "[" + "".join(f"{start}-{end}" for start, end in TARGET_SCRIPT_RANGES) + "]"
)


def contains_target_script(text: str) -> bool:
    """Return True if any code point of ``text`` is Japanese script."""
    if not text:
        return False
    return _TARGET_SCRIPT_RE.search(text) is not None


def safe_truncate(text: str, max_chars: int, suffix: str = "...") -> str:
    """Truncate text for log lines, preferring a word boundary.

    Args:
        text: Text to truncate
        max_chars: Maximum characters (excluding suffix)
        suffix: Suffix to append if truncated (default "...")

    Returns:
        Truncated text with suffix if needed
    """
    if not text or len(text) <= max_chars:
        return text

    truncated = text[:max_chars]

    # Look back up to 20 characters for a good break point
    break_chars = {' ', '\n', '\t', ',', '.', '!', '?', ';', ':', '-', '\u3002', '\uff0c', '\u3001'}
    for i in range(min(20, max_chars - 1), 0, -1):
        if truncated[-i] in break_chars:
            truncated = truncated[:-i].rstrip()
            break

    return truncated + suffix


def normalize_for_display(text: str, max_length: Optional[int] = None) -> str:
    """Normalize text for safe display in logs.

    Removes control characters, collapses whitespace runs and optionally
    truncates to ``max_length``.
    """
    if not text:
        return ""

    text = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', text)
    text = re.sub(r'\s+', ' ', text)

    if max_length:
        text = safe_truncate(text, max_length)

    return text.strip()
