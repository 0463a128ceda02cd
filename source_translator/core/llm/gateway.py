"""Unified LLM gateway.

Every backend request made by the translator goes through
``UnifiedLLMGateway.execute``. The gateway does not swallow errors; callers
decide how a failed call degrades.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from litellm import acompletion

from .runtime_config import LLMRuntimeConfig

logger = logging.getLogger(__name__)


class MalformedResponseError(ValueError):
    """Raised when the backend answers without usable content."""


@dataclass
class LLMResponse:
    """Standardized LLM response."""

    content: str
    model: str
    provider: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    latency_ms: int = 0

    # Raw response for debugging
    raw_response: Optional[Dict[str, Any]] = None


class UnifiedLLMGateway:
    """Gateway for chat-completion calls through LiteLLM.

    Usage:
        config = LLMRuntimeConfig.from_settings()
        response = await UnifiedLLMGateway.execute(
            system_prompt="You are a translator...",
            user_prompt="こんにちは",
            config=config,
        )
    """

    @classmethod
    async def execute(
        cls,
        system_prompt: str,
        user_prompt: str,
        config: LLMRuntimeConfig,
    ) -> LLMResponse:
        """Execute one LLM call with the given prompts and config.

        Raises:
            MalformedResponseError: If the response carries no choices/content
            Exception: Whatever litellm raises for transport/provider errors
        """
        start_time = time.time()

        kwargs = config.to_litellm_kwargs()
        kwargs["messages"] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        logger.debug(
            "LLM call: model=%s, provider=%s, temperature=%s, max_tokens=%s",
            config.model,
            config.provider,
            config.temperature,
            config.max_tokens,
        )

        response = await acompletion(**kwargs)

        if not getattr(response, "choices", None):
            raise MalformedResponseError("response has no choices")
        content = response.choices[0].message.content
        if not isinstance(content, str):
            raise MalformedResponseError("response has no text content")

        usage = getattr(response, "usage", None)
        latency_ms = int((time.time() - start_time) * 1000)

        result = LLMResponse(
            content=content,
            model=config.model,
            provider=config.provider,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            total_tokens=usage.total_tokens if usage else 0,
            latency_ms=latency_ms,
            raw_response=response.model_dump() if hasattr(response, "model_dump") else None,
        )

        logger.debug(
            "LLM response: tokens=%d, latency=%dms", result.total_tokens, latency_ms
        )

        return result
