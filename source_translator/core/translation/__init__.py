"""Translation of classified nodes.

- TranslationClient: one text in, English (or the original text) out
- apply_translations: concurrent fan-out/fan-in over a tree's candidates
"""

from .client import DRY_RUN_MARKER, SYSTEM_PROMPT, TranslationClient, extract_translation
from .coordinator import Translator, apply_translations, render_replacement
from .models import RunOptions, TranslationContext, TranslationRecord, TranslationTask

__all__ = [
    "DRY_RUN_MARKER",
    "SYSTEM_PROMPT",
    "RunOptions",
    "TranslationClient",
    "TranslationContext",
    "TranslationRecord",
    "TranslationTask",
    "Translator",
    "apply_translations",
    "extract_translation",
    "render_replacement",
]
