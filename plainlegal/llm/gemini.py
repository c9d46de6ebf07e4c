from __future__ import annotations
import os
from typing import Any, Dict, List, Sequence

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from plainlegal.llm.base import ChatMessage, GenerationParams
from plainlegal.utils.config import AppConfig
from plainlegal.utils.exceptions import GenerationTimeout, MalformedEnvelope, UpstreamError


class GeminiClient:
    def __init__(self, config: AppConfig):
        api_key = config.google_api_key or os.getenv("GOOGLE_API_KEY")
        if not api_key:
            raise ValueError("GOOGLE_API_KEY not set")
        # genai.configure is SDK-global: the last key configured wins for every
        # GeminiClient in the process.
        genai.configure(api_key=api_key)
        self.config = config

    @staticmethod
    def _split_messages(messages: Sequence[ChatMessage]):
        system = "\n\n".join(m.content for m in messages if m.role == "system")
        contents: List[Dict[str, Any]] = []
        for m in messages:
            if m.role == "system":
                continue
            role = "model" if m.role == "assistant" else "user"
            contents.append({"role": role, "parts": [m.content]})
        return system or None, contents

    async def generate(self, messages: Sequence[ChatMessage], params: GenerationParams) -> str:
        system, contents = self._split_messages(messages)
        model = genai.GenerativeModel(params.model, system_instruction=system)
        try:
            rsp = await model.generate_content_async(
                contents,
                generation_config={
                    "temperature": params.temperature,
                    "top_p": params.top_p,
                    "max_output_tokens": params.max_tokens,
                },
                request_options={"timeout": params.timeout},
            )
        except google_exceptions.DeadlineExceeded as e:
            raise GenerationTimeout(params.timeout) from e
        except google_exceptions.GoogleAPICallError as e:
            status = int(e.code) if e.code is not None else None
            raise UpstreamError(status, str(e)) from e
        try:
            return rsp.text
        except ValueError as e:  # no candidate / blocked prompt
            raise MalformedEnvelope(f"Gemini returned no text: {e}") from e

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "GeminiClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
