import pytest

from sheetiq.core.errors import SheetIQError
from sheetiq.narrative.llm import (
    DEFAULT_SYSTEM_PROMPT,
    LLMClient,
    LLMConfigurationError,
    LLMRuntimeError,
)


@pytest.fixture
def openai_client(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    return LLMClient({"enabled": True, "provider": "openai", "timeout": 5})


def test_defaults_per_provider():
    assert LLMClient({}).model == "gpt-4o-mini"
    assert LLMClient({"provider": "gemini"}).model == "gemini-1.5-flash-latest"
    assert LLMClient({}).timeout == 15


def test_unsupported_provider(monkeypatch):
    with pytest.raises(LLMConfigurationError, match="anthropic"):
        LLMClient({"enabled": True, "provider": "anthropic"})


def test_missing_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)

    with pytest.raises(LLMConfigurationError, match="GEMINI_API_KEY"):
        LLMClient({"enabled": True, "provider": "gemini"})


def test_generate_strips_and_passes_system_prompt(openai_client, monkeypatch):
    seen = {}

    def fake_call(prompt, system):
        seen["system"] = system
        return "  Sales rise.  "

    monkeypatch.setattr(openai_client, "_call_openai", fake_call)

    assert openai_client.generate("Describe it") == "Sales rise."
    assert seen["system"] == DEFAULT_SYSTEM_PROMPT


def test_provider_failures_are_wrapped(openai_client, monkeypatch):
    def boom(prompt, system):
        raise TimeoutError("read timed out")

    monkeypatch.setattr(openai_client, "_call_openai", boom)

    with pytest.raises(LLMRuntimeError) as excinfo:
        openai_client.generate("Describe it")

    assert isinstance(excinfo.value, SheetIQError)
    assert "timed out" in str(excinfo.value)


def test_empty_response_rejected(openai_client, monkeypatch):
    monkeypatch.setattr(openai_client, "_call_openai", lambda prompt, system: "   ")

    with pytest.raises(LLMRuntimeError):
        openai_client.generate("Describe it")


def test_blank_prompt_rejected(openai_client):
    with pytest.raises(ValueError):
        openai_client.generate("  ")
