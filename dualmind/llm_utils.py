"""Helper utilities for reasoning-backend calls and response diagnostics."""

from __future__ import annotations

import asyncio
import re
from typing import Any, Callable, List

from mirascope import llm
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt

from dualmind.errors import ReasoningTransportError
from dualmind.local_llm import LocalLLMError, call_ollama
from dualmind.logging_utils import log_error


LLM_TIMEOUT_SECONDS = 120.0

_CODE_FENCE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?```$", re.DOTALL)


def _truncate_preview(value: Any, *, limit: int = 80) -> str:
    """Return a compact preview of the offending input value."""

    if value is None:
        return "null"
    text = repr(value)
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def summarize_validation_error(error: ValidationError) -> List[str]:
    """Convert a pydantic ValidationError into readable issue lines.

    Each line carries the field path in dot notation, the message, the error
    type and a short preview of the value that failed.
    """

    issues: List[str] = []
    for err in error.errors(include_url=False):  # pragma: no branch - typically small
        loc = ".".join(str(part) for part in err.get("loc", [])) or "root"
        details = f"{loc}: {err.get('msg', 'validation error')}"
        err_type = err.get("type")
        if err_type:
            details += f" [type={err_type}]"
        if "input" in err:
            preview = _truncate_preview(err.get("input"))
            if preview:
                details += f" | received={preview}"
        issues.append(details)

    if not issues:
        issues.append("root: response did not match the expected schema")
    return issues


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```) if present."""

    stripped = text.strip()
    match = _CODE_FENCE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


async def call_llm_raw(
    *,
    prompt: str,
    llm_provider: str,
    llm_model: str,
    base_url: str | None = None,
    timeout: float = LLM_TIMEOUT_SECONDS,
    max_attempts: int = 1,
) -> str:
    """Send ``prompt`` to the configured provider and return the raw response text.

    Every provider failure (network, HTTP status, auth, per-attempt timeout,
    empty body) is raised as ReasoningTransportError. With ``max_attempts > 1``
    transport failures are retried immediately; the default of one attempt
    means no retry, leaving the next scheduled tick to try again.
    """

    use_local_llm = llm_provider.lower() == "ollama"

    remote_invoke: Callable[[str], Any] | None = None
    if not use_local_llm:
        @llm.call(provider=llm_provider, model=llm_model, json_mode=True)
        async def _invoke(prompt_text: str) -> str:
            return prompt_text

        remote_invoke = _invoke

    async def _attempt() -> str:
        try:
            if use_local_llm:
                text = await asyncio.wait_for(
                    call_ollama(prompt=prompt, llm_model=llm_model, base_url=base_url, timeout=timeout),
                    timeout=timeout,
                )
            else:
                if remote_invoke is None:
                    raise RuntimeError("Remote LLM invoke is not initialized.")
                response = await asyncio.wait_for(remote_invoke(prompt), timeout=timeout)
                text = response.content
        except asyncio.TimeoutError as exc:
            raise ReasoningTransportError(
                f"call timed out after {timeout:g}s", provider=llm_provider
            ) from exc
        except LocalLLMError as exc:
            raise ReasoningTransportError(str(exc), provider=llm_provider) from exc
        except Exception as exc:  # provider SDKs raise their own exception hierarchies
            raise ReasoningTransportError(
                f"{type(exc).__name__}: {exc}", provider=llm_provider
            ) from exc

        if not text or not text.strip():
            raise ReasoningTransportError("empty response", provider=llm_provider)
        return text

    attempt_number = 0
    # Only transport failures are retried; reraise=True surfaces the last one.
    async for attempt in AsyncRetrying(
        retry=retry_if_exception_type(ReasoningTransportError),
        stop=stop_after_attempt(max(1, max_attempts)),
        reraise=True,
    ):
        with attempt:
            attempt_number += 1
            if attempt_number > 1:
                log_error(
                    f"Reasoning retry {attempt_number}/{max_attempts} after transport failure."
                )
            return await _attempt()

    raise RuntimeError("LLM retry mechanism exited unexpectedly")
