from __future__ import annotations

import anthropic

from .types import LLMResponse, TokenUsage


class AnthropicChatAdapter:
    """Anthropic Messages API adapter.

    - System prompt goes to the top-level ``system`` parameter
    - Only text content blocks are joined into the response text
    """

    def __init__(self, model: str, api_key: str) -> None:
        self.model = model
        self._client = anthropic.Anthropic(api_key=api_key)

    def complete(
        self,
        system: str,
        messages: list[str],
        *,
        max_output_tokens: int = 800,
        temperature: float = 0.4,
    ) -> LLMResponse:
        # consecutive user turns are merged into one
        content = "\n\n".join(messages)
        message = self._client.messages.create(
            model=self.model,
            max_tokens=max_output_tokens,
            temperature=temperature,
            system=system,
            messages=[{"role": "user", "content": content}],
        )
        texts: list[str] = []
        for block in message.content:
            if getattr(block, "type", None) == "text":
                texts.append(block.text)

        u = message.usage
        iu = u.input_tokens if u is not None else None
        ou = u.output_tokens if u is not None else None
        tt = (iu or 0) + (ou or 0) if (iu is not None or ou is not None) else None
        usage = TokenUsage(input_tokens=iu, output_tokens=ou, total_tokens=tt)
        return LLMResponse(text="".join(texts), usage=usage)
