"""LLM integration package.

- LLMRuntimeConfig: parameters that reach the LLM call
- UnifiedLLMGateway: single entry point for chat completions (LiteLLM)
"""

from .gateway import LLMResponse, MalformedResponseError, UnifiedLLMGateway
from .runtime_config import LLMRuntimeConfig

__all__ = [
    "LLMResponse",
    "LLMRuntimeConfig",
    "MalformedResponseError",
    "UnifiedLLMGateway",
]
