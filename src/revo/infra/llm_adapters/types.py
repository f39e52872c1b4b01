from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


# Public provider literal
Provider = Literal["openai", "anthropic", "groq"]


@dataclass
class TokenUsage:
    input_tokens: int | None = None
    output_tokens: int | None = None
    total_tokens: int | None = None


@dataclass
class LLMResponse:
    text: str
    usage: TokenUsage | None = None

    @property
    def total_tokens(self) -> int | None:
        return self.usage.total_tokens if self.usage is not None else None
