from __future__ import annotations

from .anthropic_adapter import AnthropicChatAdapter
from .interface import ChatAdapter
from .openai_adapter import GROQ_BASE_URL, OpenAIChatAdapter
from .types import Provider


def get_adapter(provider: Provider, model: str, api_key: str) -> ChatAdapter:
    """Factory that returns an adapter for the requested provider/model."""
    if provider == "openai":
        return OpenAIChatAdapter(model, api_key)
    if provider == "groq":
        return OpenAIChatAdapter(model, api_key, base_url=GROQ_BASE_URL)
    if provider == "anthropic":
        return AnthropicChatAdapter(model, api_key)
    raise ValueError("provider must be 'openai', 'groq' or 'anthropic'")
