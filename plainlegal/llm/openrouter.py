from __future__ import annotations
from typing import Any, Dict, Optional, Sequence

import httpx

from plainlegal.llm.base import ChatMessage, GenerationParams
from plainlegal.utils.config import AppConfig
from plainlegal.utils.exceptions import GenerationTimeout, MalformedEnvelope, UpstreamError
from plainlegal.utils.logger import logger


class OpenRouterClient:
    """OpenAI-compatible chat-completions client (OpenRouter by default).

    The client owns one ``httpx.AsyncClient`` for its whole lifetime; use it as
    an async context manager or call ``aclose()`` when done. Tests can inject a
    pre-built ``http`` client (e.g. one backed by ``httpx.MockTransport``).
    """

    def __init__(self, config: AppConfig, http: Optional[httpx.AsyncClient] = None):
        if not config.openrouter_api_key and http is None:
            raise ValueError("OPENROUTER_API_KEY not set")
        self.config = config
        self.base_url = config.openrouter_base_url.rstrip("/")
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=config.request_timeout)

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.openrouter_api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.config.app_referer,
            "X-Title": self.config.app_title,
        }

    async def generate(self, messages: Sequence[ChatMessage], params: GenerationParams) -> str:
        body = {
            "model": params.model,
            "messages": [m.as_dict() for m in messages],
            "temperature": params.temperature,
            "max_tokens": params.max_tokens,
            "top_p": params.top_p,
        }
        try:
            rsp = await self.http.post(
                f"{self.base_url}/chat/completions",
                headers=self._headers(),
                json=body,
                timeout=params.timeout,
            )
        except httpx.TimeoutException as e:
            raise GenerationTimeout(params.timeout) from e
        except httpx.HTTPError as e:
            raise UpstreamError(None, str(e)) from e

        if rsp.status_code < 200 or rsp.status_code >= 300:
            logger.warning("Generation service returned %s: %s", rsp.status_code, rsp.text[:200])
            raise UpstreamError(rsp.status_code, rsp.text)
        return _extract_content(rsp)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "OpenRouterClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()


def _extract_content(rsp: httpx.Response) -> str:
    try:
        data: Any = rsp.json()
    except ValueError as e:
        raise MalformedEnvelope("response body is not JSON") from e
    try:
        message = data["choices"][0]["message"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedEnvelope("response has no choices[0].message") from e
    if not isinstance(message, dict):
        raise MalformedEnvelope("choices[0].message is not an object")
    content = message.get("content")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise MalformedEnvelope("message content is not text")
    return content
