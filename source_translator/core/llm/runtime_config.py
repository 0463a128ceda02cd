"""LLM runtime configuration.

Single source of truth for the parameters that reach ``litellm.acompletion``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from source_translator.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


@dataclass
class LLMRuntimeConfig:
    """Complete LLM configuration resolved for a translation run."""

    # Connection parameters
    provider: str
    model: str
    api_key: Optional[str] = None
    base_url: Optional[str] = None

    # Generation parameters
    temperature: float = 0.0
    max_tokens: int = 1024
    timeout: Optional[float] = None

    def get_litellm_model(self) -> str:
        """Get model string in LiteLLM format (provider/model)."""
        if self.provider == "openai" or "/" in self.model:
            return self.model
        return f"{self.provider}/{self.model}"

    def to_litellm_kwargs(self) -> Dict[str, Any]:
        """Convert to kwargs for litellm.acompletion()."""
        kwargs: Dict[str, Any] = {
            "model": self.get_litellm_model(),
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

        # Without an explicit key litellm reads the provider's own env var
        if self.api_key:
            kwargs["api_key"] = self.api_key

        if self.base_url:
            kwargs["api_base"] = self.base_url

        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        return kwargs

    def with_overrides(
        self,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> "LLMRuntimeConfig":
        """Create a copy with specific overrides applied."""
        return LLMRuntimeConfig(
            provider=self.provider,
            model=model if model is not None else self.model,
            api_key=self.api_key,
            base_url=self.base_url,
            temperature=temperature if temperature is not None else self.temperature,
            max_tokens=self.max_tokens,
            timeout=self.timeout,
        )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "LLMRuntimeConfig":
        """Resolve the runtime config from application settings."""
        settings = settings or default_settings
        config = cls(
            provider=settings.llm_provider,
            model=settings.llm_model,
            api_key=settings.llm_api_key,
            base_url=settings.llm_base_url,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.translation_timeout,
        )
        logger.debug(
            "Resolved LLM config: provider=%s, model=%s, base_url=%s",
            config.provider,
            config.model,
            config.base_url,
        )
        return config
