"""Exception types raised by the decision engine and reasoning clients.

None of these are fatal to the host process: the decision engine catches them
at the slow-path boundary, reports them and waits for the next scheduled tick.
"""

from __future__ import annotations

from typing import Sequence


class DualMindError(Exception):
    """Base class for all DualMind errors."""


class ReasoningTransportError(DualMindError):
    """Raised when the reasoning call fails to complete (network, HTTP, provider)."""

    def __init__(self, message: str, *, provider: str | None = None) -> None:
        self.provider = provider
        if provider:
            message = f"Reasoning backend '{provider}' failed: {message}"
        super().__init__(message)


class MalformedResponseError(DualMindError):
    """Raised when the reasoning backend returns text that is not a valid AgentAction.

    Carries the raw payload so the failure can be diagnosed from the log alone.
    """

    def __init__(self, *, raw_payload: str, issues: Sequence[str]) -> None:
        self.raw_payload = raw_payload
        self.issues = list(issues)
        message_lines = ["Reasoning response could not be parsed into an AgentAction."]
        message_lines.extend(f"  - {issue}" for issue in self.issues)
        message_lines.append(f"Response was: {raw_payload!r}")
        super().__init__("\n".join(message_lines))


__all__ = ["DualMindError", "ReasoningTransportError", "MalformedResponseError"]
