"""Utilities for calling a locally hosted Ollama server as the reasoning backend."""

from __future__ import annotations

import asyncio
import json
import os
from typing import Any
from urllib import error, request

DEFAULT_OLLAMA_BASE_URL = "http://127.0.0.1:11434"
_GENERATE_ENDPOINT = "/api/generate"


class LocalLLMError(RuntimeError):
    """Raised when a local LLM invocation fails."""


def _perform_ollama_request(
    payload: dict[str, Any],
    base_url: str,
    timeout: float,
) -> str:
    """Execute the blocking HTTP request against the Ollama REST API."""

    url = f"{base_url.rstrip('/')}{_GENERATE_ENDPOINT}"
    data = json.dumps(payload).encode("utf-8")
    req = request.Request(
        url,
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )

    try:
        with request.urlopen(req, timeout=timeout) as resp:
            raw = resp.read().decode("utf-8")
    except error.HTTPError as exc:
        body = exc.read().decode("utf-8", errors="ignore") if exc.fp else ""
        message = body or exc.reason
        raise LocalLLMError(
            f"Ollama generate request failed with status {exc.code}: {message}"
        ) from exc
    except error.URLError as exc:
        raise LocalLLMError(
            f"Could not reach Ollama at {url}: {exc.reason}"
        ) from exc

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LocalLLMError("Ollama returned a non-JSON envelope.") from exc

    content = parsed.get("response")
    if not content:
        raise LocalLLMError("Ollama response did not include generated text.")

    return content


async def call_ollama(
    *,
    prompt: str,
    llm_model: str,
    base_url: str | None = None,
    timeout: float = 120.0,
) -> str:
    """Send a single prompt to a local Ollama model and return the generated text.

    The request asks Ollama for JSON-formatted output so the response can be
    parsed directly into an AgentAction.
    """

    resolved_base = (
        base_url or os.getenv("OLLAMA_BASE_URL") or DEFAULT_OLLAMA_BASE_URL
    ).rstrip("/")

    prompt = prompt.strip()
    if not prompt:
        raise LocalLLMError("Cannot call Ollama with an empty prompt.")

    payload = {
        "model": llm_model,
        "prompt": prompt,
        "format": "json",
        "stream": False,
    }

    return await asyncio.to_thread(
        _perform_ollama_request,
        payload,
        resolved_base,
        timeout,
    )


__all__ = ["LocalLLMError", "call_ollama", "DEFAULT_OLLAMA_BASE_URL"]
