import asyncio

import pytest
from google.api_core import exceptions as google_exceptions

from plainlegal.llm import gemini
from plainlegal.llm.base import ChatMessage, GenerationParams
from plainlegal.llm.gemini import GeminiClient
from plainlegal.utils.config import AppConfig
from plainlegal.utils.exceptions import GenerationTimeout, MalformedEnvelope, UpstreamError

PARAMS = GenerationParams(model="gemini-test", temperature=0.3, top_p=0.9, max_tokens=256, timeout=5.0)
MESSAGES = [ChatMessage("system", "You simplify."), ChatMessage("user", "Simplify this.")]


class StubResponse:
    def __init__(self, text=None):
        self._text = text

    @property
    def text(self):
        if self._text is None:
            raise ValueError("response has no candidates")
        return self._text


class StubModel:
    calls = []

    def __init__(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction

    async def generate_content_async(self, contents, generation_config=None, request_options=None):
        StubModel.calls.append({
            "model": self.model_name,
            "system": self.system_instruction,
            "contents": contents,
            "generation_config": generation_config,
            "request_options": request_options,
        })
        return StubModel.outcome()


@pytest.fixture
def stub_genai(monkeypatch):
    configured = {}
    monkeypatch.setattr(gemini.genai, "configure", lambda **kw: configured.update(kw))
    monkeypatch.setattr(gemini.genai, "GenerativeModel", StubModel)
    StubModel.calls = []
    StubModel.outcome = staticmethod(lambda: StubResponse("Plain words."))
    return configured


def call():
    client = GeminiClient(AppConfig(provider="gemini", google_api_key="g-key"))
    return asyncio.run(client.generate(MESSAGES, PARAMS))


def raising(exc):
    def outcome():
        raise exc
    return outcome


def test_success_passes_system_instruction_and_params(stub_genai):
    assert call() == "Plain words."
    assert stub_genai == {"api_key": "g-key"}
    sent = StubModel.calls[0]
    assert sent["model"] == "gemini-test"
    assert sent["system"] == "You simplify."
    assert sent["contents"] == [{"role": "user", "parts": ["Simplify this."]}]
    assert sent["generation_config"]["max_output_tokens"] == 256
    assert sent["request_options"] == {"timeout": 5.0}


def test_deadline_maps_to_timeout(stub_genai):
    StubModel.outcome = staticmethod(raising(google_exceptions.DeadlineExceeded("slow")))
    with pytest.raises(GenerationTimeout):
        call()


def test_api_error_maps_to_upstream_with_status(stub_genai):
    StubModel.outcome = staticmethod(raising(google_exceptions.ServiceUnavailable("down")))
    with pytest.raises(UpstreamError) as exc:
        call()
    assert exc.value.status == 503


def test_no_text_maps_to_malformed(stub_genai):
    StubModel.outcome = staticmethod(lambda: StubResponse(None))
    with pytest.raises(MalformedEnvelope):
        call()


def test_missing_key_raises(monkeypatch):
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(ValueError):
        GeminiClient(AppConfig(provider="gemini", google_api_key=""))
