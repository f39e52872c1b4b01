from __future__ import annotations

from openai import OpenAI

from .types import LLMResponse, TokenUsage


GROQ_BASE_URL = "https://api.groq.com/openai/v1"


class OpenAIChatAdapter:
    """OpenAI Chat Completions adapter.

    - Also serves OpenAI-compatible providers (Groq) through ``base_url``
    - Every entry of ``messages`` becomes one user message
    """

    def __init__(self, model: str, api_key: str, base_url: str | None = None) -> None:
        self.model = model
        self._client = OpenAI(api_key=api_key, base_url=base_url)

    def complete(
        self,
        system: str,
        messages: list[str],
        *,
        max_output_tokens: int = 800,
        temperature: float = 0.4,
    ) -> LLMResponse:
        chat = [{"role": "system", "content": system}]
        chat.extend({"role": "user", "content": m} for m in messages)

        completion = self._client.chat.completions.create(
            model=self.model,
            messages=chat,
            max_tokens=max_output_tokens,
            temperature=temperature,
        )
        text = ""
        if completion.choices:
            text = completion.choices[0].message.content or ""

        usage = None
        u = completion.usage
        if u is not None:
            usage = TokenUsage(
                input_tokens=u.prompt_tokens,
                output_tokens=u.completion_tokens,
                total_tokens=u.total_tokens or (u.prompt_tokens or 0) + (u.completion_tokens or 0),
            )
        return LLMResponse(text=text, usage=usage)
