"""Boundary contract for the external text-generation service.

A client takes role-tagged messages plus sampling parameters and returns the
raw text payload (an empty string is a valid answer) or raises one of
GenerationTimeout / UpstreamError / MalformedEnvelope. Every call is its own
coroutine, so cancelling one never touches another in flight.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Protocol, Sequence, runtime_checkable

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user"
    content: str

    def as_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class GenerationParams:
    model: str
    temperature: float = 0.3
    top_p: float = 0.9
    max_tokens: int = 1500
    timeout: float = DEFAULT_TIMEOUT


@runtime_checkable
class GenerationClient(Protocol):
    async def generate(self, messages: Sequence[ChatMessage], params: GenerationParams) -> str:
        ...

    async def aclose(self) -> None:
        ...
