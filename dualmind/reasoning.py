"""
Reasoning backend contract and LLM-backed implementation.

The decision engine only needs "prompt in, raw text out (or a failure)". The
client does not parse; parse_action_response() turns the raw text into an
AgentAction so transport failures and malformed responses stay distinguishable.
"""

from __future__ import annotations

from typing import Optional, Protocol

from pydantic import ValidationError

from dualmind.config import Config
from dualmind.errors import MalformedResponseError
from dualmind.llm_utils import call_llm_raw, strip_code_fences, summarize_validation_error
from dualmind.logging_utils import debug_llm_enabled
from dualmind.schemas import AgentAction


class ReasoningClient(Protocol):
    """Protocol for the slow-path reasoning backend."""

    async def complete(self, prompt: str) -> str:
        """Return the backend's raw response text for ``prompt``.

        Implementations raise ReasoningTransportError when the call does not
        complete. They never parse the response.
        """
        ...


class LLMReasoningClient:
    """Reasoning client that asks an LLM provider for the next action.

    Hosted providers are reached through Mirascope; ``provider="ollama"`` talks
    to a local Ollama server instead.

    Example:
        client = LLMReasoningClient(provider="google", model="gemini-2.5-flash")
        raw = await client.complete(prompt)

    Args:
        provider: Provider name (e.g., "google", "openai", "anthropic", "ollama")
        model: Model identifier for that provider
        base_url: Ollama base URL (ignored for hosted providers)
        timeout: Per-attempt timeout in seconds
        max_attempts: Transport attempts per call (1 = no retry)
    """

    def __init__(
        self,
        *,
        provider: str,
        model: str,
        base_url: Optional[str] = None,
        timeout: float = 120.0,
        max_attempts: int = 1,
    ) -> None:
        if not provider or not model:
            raise ValueError(
                "LLMReasoningClient requires a provider and a model. "
                "Set LLM_PROVIDER and LLM_MODEL environment variables."
            )
        self.provider = provider
        self.model = model
        self.base_url = base_url
        self.timeout = timeout
        self.max_attempts = max_attempts

    @classmethod
    def from_config(cls) -> "LLMReasoningClient":
        """Build a client from Config.

        REASONING_TIMEOUT_SECONDS bounds the whole call (the engine enforces it),
        so each attempt gets an equal share of it.
        """
        attempts = max(1, Config.REASONING_MAX_ATTEMPTS)
        return cls(
            provider=Config.LLM_PROVIDER,
            model=Config.LLM_MODEL,
            base_url=Config.LOCAL_LLM_BASE_URL,
            timeout=Config.REASONING_TIMEOUT_SECONDS / attempts,
            max_attempts=attempts,
        )

    async def complete(self, prompt: str) -> str:
        debug_llm = debug_llm_enabled()
        if debug_llm:
            print(f"\n{'='*80}")
            print(f"[REASONING PROMPT] {self.provider}/{self.model}")
            print(f"{'-'*80}")
            print(prompt)
            print(f"{'='*80}\n")

        raw = await call_llm_raw(
            prompt=prompt,
            llm_provider=self.provider,
            llm_model=self.model,
            base_url=self.base_url,
            timeout=self.timeout,
            max_attempts=self.max_attempts,
        )

        if debug_llm:
            print(f"\n[REASONING RESPONSE]")
            print(f"{'-'*80}")
            print(raw)
            print(f"{'='*80}\n")

        return raw


def parse_action_response(raw: str) -> AgentAction:
    """Parse the backend's raw text into an AgentAction.

    Accepts a bare JSON object, optionally wrapped in a Markdown code fence.
    Unrecognized action kinds parse successfully; only structural problems
    (not JSON, missing ``action``, wrong types, confidence outside [0, 1])
    raise MalformedResponseError.
    """

    try:
        return AgentAction.model_validate_json(strip_code_fences(raw))
    except ValidationError as exc:
        raise MalformedResponseError(
            raw_payload=raw, issues=summarize_validation_error(exc)
        ) from exc


__all__ = ["ReasoningClient", "LLMReasoningClient", "parse_action_response"]
