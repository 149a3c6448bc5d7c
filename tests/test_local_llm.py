import pytest

from dualmind.local_llm import LocalLLMError, call_ollama


@pytest.mark.asyncio
async def test_call_ollama_builds_payload(monkeypatch):
    captured: dict[str, object] = {}

    def fake_request(payload, base_url, timeout):
        captured["payload"] = payload
        captured["base_url"] = base_url
        captured["timeout"] = timeout
        return '{"action": "wait"}'

    monkeypatch.setattr("dualmind.local_llm._perform_ollama_request", fake_request)

    result = await call_ollama(
        prompt="  Decide the next action  ",
        llm_model="llama3.1",
        base_url="http://localhost:11434/",
        timeout=30,
    )

    assert result == '{"action": "wait"}'
    payload = captured["payload"]
    assert payload["model"] == "llama3.1"
    assert payload["prompt"] == "Decide the next action"
    assert payload["format"] == "json"
    assert payload["stream"] is False
    assert captured["base_url"] == "http://localhost:11434"
    assert captured["timeout"] == 30


@pytest.mark.asyncio
async def test_call_ollama_rejects_empty_prompt():
    with pytest.raises(LocalLLMError):
        await call_ollama(prompt="   ", llm_model="llama3.1")
