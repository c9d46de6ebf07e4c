from __future__ import annotations
from typing import Sequence

from plainlegal.llm.base import ChatMessage, GenerationClient, GenerationParams
from plainlegal.utils.config import AppConfig
from plainlegal.utils.exceptions import UpstreamError
from plainlegal.utils.logger import logger

PROVIDERS = ("openrouter", "gemini")


class UnavailableClient:
    """Stand-in used when no real client can be built; every call fails fast."""

    def __init__(self, reason: str):
        self.reason = reason

    async def generate(self, messages: Sequence[ChatMessage], params: GenerationParams) -> str:
        raise UpstreamError(None, self.reason)

    async def aclose(self) -> None:
        return None


def get_client(config: AppConfig) -> GenerationClient:
    """Client for ``config.provider``, or an UnavailableClient if it cannot be built.

    The caller owns the returned client and must ``aclose()`` it.
    """
    try:
        return build_client(config)
    except ValueError as e:
        logger.warning("Generation client unavailable (%s); all tasks will fall back", e)
        return UnavailableClient(str(e))


def build_client(config: AppConfig) -> GenerationClient:
    """Raises ValueError for an unknown provider or a missing API key."""
    if config.provider == "gemini":
        from plainlegal.llm.gemini import GeminiClient
        return GeminiClient(config)
    if config.provider == "openrouter":
        from plainlegal.llm.openrouter import OpenRouterClient
        return OpenRouterClient(config)
    raise ValueError(f"Unknown LLM provider '{config.provider}' (expected one of {', '.join(PROVIDERS)})")
