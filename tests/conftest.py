"""Shared fixtures: fake translators and gateways, no network access."""

import asyncio
import os
from typing import Optional

# Keep litellm from fetching its model cost map over the network at import time.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

import pytest

from source_translator.config import Settings
from source_translator.core.llm import LLMResponse
from source_translator.core.translation import RunOptions, TranslationContext


class FakeTranslator:
    """Translator double that looks texts up in a glossary.

    Unknown texts come back as ``EN(<text>)``. Every call is recorded.
    """

    def __init__(self, glossary: Optional[dict] = None, delay: float = 0.0):
        self.glossary = glossary or {}
        self.delay = delay
        self.calls: list[tuple[str, RunOptions, TranslationContext]] = []

    async def translate(self, text, options, context):
        self.calls.append((text, options, context))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.glossary.get(text, f"EN({text})")


class FallbackTranslator:
    """Translator double that always degrades to the original text."""

    def __init__(self):
        self.calls = []

    async def translate(self, text, options, context):
        self.calls.append(text)
        return text


class FakeGateway:
    """Stands in for UnifiedLLMGateway; replies from a queue of contents or errors."""

    def __init__(self, replies=None, default="Hello"):
        self.replies = list(replies or [])
        self.default = default
        self.requests = []
        self.active = 0
        self.peak = 0

    async def execute(self, system_prompt, user_prompt, config):
        self.requests.append((system_prompt, user_prompt))
        self.active += 1
        self.peak = max(self.peak, self.active)
        try:
            await asyncio.sleep(0.01)
            reply = self.replies.pop(0) if self.replies else self.default
            if isinstance(reply, BaseException):
                raise reply
            return LLMResponse(content=reply, model=config.model, provider=config.provider)
        finally:
            self.active -= 1


@pytest.fixture
def fake_translator():
    return FakeTranslator(
        {
            "こんにちは": "Hello",
            "エラー": "Error",
            "画像": "Image",
            "説明": "Explanation",
            "テスト": "Test",
            "コメント": "Comment",
        }
    )


@pytest.fixture
def fallback_translator():
    return FallbackTranslator()


@pytest.fixture
def test_settings():
    return Settings(
        llm_provider="openai",
        llm_model="gpt-4o-mini",
        max_attempts=1,
        retry_wait_min=0,
        retry_wait_max=0,
        max_concurrent_requests=0,
    )


@pytest.fixture
def sample_jsx():
    return (
        "// エラー\n"
        "import React from 'react';\n"
        "\n"
        "export function App() {\n"
        '  const greeting = "こんにちは";\n'
        "  return (\n"
        '    <div title="画像">\n'
        "      テスト\n"
        "      {/* 説明 */}\n"
        "    </div>\n"
        "  );\n"
        "}\n"
    )


@pytest.fixture
def gateway_factory():
    return FakeGateway
