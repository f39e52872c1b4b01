from __future__ import annotations

from typing import Protocol, runtime_checkable

from .types import LLMResponse


@runtime_checkable
class ChatAdapter(Protocol):
    """Minimal interface for a single-turn chat completion."""

    def complete(
        self,
        system: str,
        messages: list[str],
        *,
        max_output_tokens: int = 800,
        temperature: float = 0.4,
    ) -> LLMResponse:
        """Send user ``messages`` after ``system`` and return text + token usage."""
        raise NotImplementedError
