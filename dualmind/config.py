"""
DualMind Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


class Config:
    """Application configuration loaded from environment variables."""

    # Reasoning backend (any Mirascope provider, or "ollama" for a local server)
    LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "google")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "gemini-2.5-flash")

    # API Keys
    GOOGLE_API_KEY: str | None = os.getenv("GOOGLE_API_KEY")
    ANTHROPIC_API_KEY: str | None = os.getenv("ANTHROPIC_API_KEY")
    OPENAI_API_KEY: str | None = os.getenv("OPENAI_API_KEY")

    # Base URL of a local Ollama server (only read when LLM_PROVIDER=ollama)
    LOCAL_LLM_BASE_URL: str | None = os.getenv("LOCAL_LLM_BASE_URL")

    # Decision timing
    FAST_INTERVAL_SECONDS: float = float(os.getenv("FAST_INTERVAL_SECONDS", "0.5"))
    SLOW_INTERVAL_SECONDS: float = float(os.getenv("SLOW_INTERVAL_SECONDS", "2.0"))

    # Decision engine tuning
    SIMILARITY_THRESHOLD: float = float(os.getenv("SIMILARITY_THRESHOLD", "0.8"))
    EPISODIC_CAPACITY: int = int(os.getenv("EPISODIC_CAPACITY", "5"))
    # Total budget for one reasoning call; LLMReasoningClient.from_config splits it
    # evenly across REASONING_MAX_ATTEMPTS
    REASONING_TIMEOUT_SECONDS: float = float(os.getenv("REASONING_TIMEOUT_SECONDS", "30"))
    REASONING_MAX_ATTEMPTS: int = int(os.getenv("REASONING_MAX_ATTEMPTS", "1"))
    # Unset means the behaviour cache grows for the lifetime of the process
    BEHAVIOUR_CACHE_CAPACITY: int | None = _optional_int("BEHAVIOUR_CACHE_CAPACITY")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are inconsistent."""
        # LLM_PROVIDER=ollama needs no key; LOCAL_LLM_BASE_URL falls back to the default port.
        if cls.LLM_PROVIDER == "google" and not cls.GOOGLE_API_KEY:
            raise ValueError("GOOGLE_API_KEY is required when using the 'google' provider")

        if cls.LLM_PROVIDER == "anthropic" and not cls.ANTHROPIC_API_KEY:
            raise ValueError("ANTHROPIC_API_KEY is required when using the 'anthropic' provider")

        if cls.LLM_PROVIDER == "openai" and not cls.OPENAI_API_KEY:
            raise ValueError(
                "OPENAI_API_KEY is required when using the 'openai' provider. "
                "For local LLMs, set LLM_PROVIDER=ollama instead."
            )

        if cls.FAST_INTERVAL_SECONDS <= 0 or cls.SLOW_INTERVAL_SECONDS <= 0:
            raise ValueError("FAST_INTERVAL_SECONDS and SLOW_INTERVAL_SECONDS must be positive")

        if not 0.0 <= cls.SIMILARITY_THRESHOLD <= 1.0:
            raise ValueError("SIMILARITY_THRESHOLD must be between 0 and 1")

        if cls.EPISODIC_CAPACITY < 1:
            raise ValueError("EPISODIC_CAPACITY must be >= 1")

        if cls.REASONING_MAX_ATTEMPTS < 1:
            raise ValueError("REASONING_MAX_ATTEMPTS must be >= 1")

        if cls.BEHAVIOUR_CACHE_CAPACITY is not None and cls.BEHAVIOUR_CACHE_CAPACITY < 1:
            raise ValueError("BEHAVIOUR_CACHE_CAPACITY must be >= 1 when set")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        cache_capacity = cls.BEHAVIOUR_CACHE_CAPACITY or "unbounded"
        lines = [
            "DualMind Configuration:",
            f"  LLM Provider: {cls.LLM_PROVIDER}",
            f"  LLM Model: {cls.LLM_MODEL}",
            f"  Fast Interval: {cls.FAST_INTERVAL_SECONDS}s",
            f"  Slow Interval: {cls.SLOW_INTERVAL_SECONDS}s",
            f"  Similarity Threshold: {cls.SIMILARITY_THRESHOLD}",
            f"  Episodic Capacity: {cls.EPISODIC_CAPACITY}",
            f"  Reasoning Timeout: {cls.REASONING_TIMEOUT_SECONDS}s over {cls.REASONING_MAX_ATTEMPTS} attempt(s)",
            f"  Behaviour Cache Capacity: {cache_capacity}",
        ]
        return "\n".join(lines)
