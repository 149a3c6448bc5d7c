"""Action executor contract.

The host engine owns movement, camera and speech. The decision engine only
relays commands; nothing it calls here returns a value it consumes.
"""

from __future__ import annotations

from typing import Protocol

from dualmind.logging_utils import log_reflex


class ActionExecutor(Protocol):
    """Protocol for the engine-owned sink that carries out decisions."""

    def move(self, x: float, y: float, z: float) -> None:
        """Walk toward the target coordinates."""
        ...

    def look(self, direction_x: float, direction_y: float) -> None:
        """Turn the view toward the given pitch/yaw direction."""
        ...

    def jump(self) -> None:
        ...

    def speak(self, text: str) -> None:
        """Say ``text`` (chat message, TTS, ...)."""
        ...


class LoggingActionExecutor:
    """Executor that only prints the commands it receives.

    Used by the example and as a stand-in while a host integration is wired up.
    """

    def move(self, x: float, y: float, z: float) -> None:
        log_reflex(f"[Executor] Moving to ({x:.1f}, {y:.1f}, {z:.1f})")

    def look(self, direction_x: float, direction_y: float) -> None:
        log_reflex(f"[Executor] Looking toward pitch/yaw: {direction_x}, {direction_y}")

    def jump(self) -> None:
        log_reflex("[Executor] Jumping")

    def speak(self, text: str) -> None:
        log_reflex(f"[Executor] Saying: {text}")
