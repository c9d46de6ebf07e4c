from __future__ import annotations
import os
from dataclasses import dataclass
from dotenv import load_dotenv

from plainlegal.llm.base import GenerationParams


@dataclass(frozen=True)
class AppConfig:
    provider: str = "openrouter"
    model: str = "qwen/qwen-2.5-72b-instruct"
    openrouter_api_key: str = ""
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    google_api_key: str = ""
    temperature: float = 0.3
    top_p: float = 0.9
    max_tokens: int = 1500
    request_timeout: float = 30.0
    max_concurrent_segments: int = 4
    min_input_chars: int = 50
    min_segment_chars: int = 30
    sentence_fallback_chars: int = 2000
    sentence_chunks: int = 3
    app_referer: str = "https://speaklegal.app"
    app_title: str = "Speak Legal App"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "AppConfig":
        load_dotenv()
        return cls(
            provider=os.getenv("LLM_PROVIDER", "openrouter").lower(),
            model=os.getenv("LLM_MODEL", "qwen/qwen-2.5-72b-instruct"),
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            openrouter_base_url=os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1"),
            google_api_key=os.getenv("GOOGLE_API_KEY", ""),
            temperature=float(os.getenv("TEMPERATURE", "0.3")),
            top_p=float(os.getenv("TOP_P", "0.9")),
            max_tokens=int(os.getenv("MAX_TOKENS", "1500")),
            request_timeout=float(os.getenv("REQUEST_TIMEOUT", "30")),
            max_concurrent_segments=int(os.getenv("MAX_CONCURRENT_SEGMENTS", "4")),
            min_input_chars=int(os.getenv("MIN_INPUT_CHARS", "50")),
            app_referer=os.getenv("APP_REFERER", "https://speaklegal.app"),
            app_title=os.getenv("APP_TITLE", "Speak Legal App"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def generation_params(self) -> GenerationParams:
        return GenerationParams(
            model=self.model,
            temperature=self.temperature,
            top_p=self.top_p,
            max_tokens=self.max_tokens,
            timeout=self.request_timeout,
        )
