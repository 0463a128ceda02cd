"""Translation client.

Wraps the LLM gateway with the translator's failure discipline: a failed
request never raises to the caller, it degrades to the original text.
"""

import asyncio
import contextlib
import logging
import re
from typing import Optional

from tenacity import AsyncRetrying, stop_after_attempt, wait_exponential

from source_translator.config import Settings, settings as default_settings
from source_translator.core.llm import LLMRuntimeConfig, MalformedResponseError, UnifiedLLMGateway
from source_translator.utils.text import normalize_for_display

from .models import RunOptions, TranslationContext

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a translator. Translate the given Japanese text to English."

DRY_RUN_MARKER = '[DRYRUN] Would translate {label}: "{text}"'

_FENCE_RE = re.compile(r"^```[\w-]*\n(.*)\n```$", re.DOTALL)


def extract_translation(content: str) -> str:
    """Extract the translated text from a raw completion.

    Strips surrounding whitespace and a wrapping markdown code fence.

    Raises:
        MalformedResponseError: If nothing is left
    """
    content = content.strip()
    match = _FENCE_RE.match(content)
    if match:
        content = match.group(1).strip()
    if not content:
        raise MalformedResponseError("empty translation")
    return content


class TranslationClient:
    """Translates one text at a time to English.

    Usage:
        client = TranslationClient()
        english = await client.translate(
            "こんにちは", RunOptions(), TranslationContext("app.js", NodeKind.LITERAL)
        )
    """

    def __init__(
        self,
        config: Optional[LLMRuntimeConfig] = None,
        *,
        settings: Optional[Settings] = None,
        gateway=UnifiedLLMGateway,
    ):
        settings = settings or default_settings
        self.config = config or LLMRuntimeConfig.from_settings(settings)
        self.gateway = gateway
        self.max_attempts = max(1, settings.max_attempts)
        self.retry_wait_min = settings.retry_wait_min
        self.retry_wait_max = settings.retry_wait_max
        self._semaphore = (
            asyncio.Semaphore(settings.max_concurrent_requests)
            if settings.max_concurrent_requests > 0
            else None
        )

    async def translate(
        self,
        text: str,
        options: RunOptions,
        context: TranslationContext,
    ) -> str:
        """Return ``text`` translated to English.

        In dry-run mode returns a marker embedding the text and the context
        label without calling the backend. On any backend failure logs a
        diagnostic and returns ``text`` unchanged.
        """
        if options.dry_run:
            return DRY_RUN_MARKER.format(label=context.label, text=text)

        try:
            return await self._request(text)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error(
                'Translation failed for text: "%s" in file: "%s": %s',
                normalize_for_display(text, max_length=80),
                context.file_path,
                e,
            )
            return text

    def _throttle(self):
        if self._semaphore is None:
            return contextlib.nullcontext()
        return self._semaphore

    async def _request(self, text: str) -> str:
        translated = text
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=1, min=self.retry_wait_min, max=self.retry_wait_max),
            reraise=True,
        ):
            with attempt:
                async with self._throttle():
                    response = await self.gateway.execute(
                        system_prompt=SYSTEM_PROMPT,
                        user_prompt=text,
                        config=self.config,
                    )
                translated = extract_translation(response.content)
        return translated
