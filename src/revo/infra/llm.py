from __future__ import annotations

from .llm_adapters import LLMResponse, Provider, get_adapter
from ..core.ports import LoggerPort


class LLM:
    def __init__(self, *, provider: Provider, model: str, api_key: str | None, logger: LoggerPort) -> None:
        self._provider = provider
        self._model = model
        self._api_key = api_key
        self._logger = logger

    @property
    def model(self) -> str:
        return self._model

    @property
    def provider(self) -> Provider:
        return self._provider

    def complete(
        self,
        *,
        system: str,
        messages: list[str],
        max_output_tokens: int,
        temperature: float,
    ) -> LLMResponse:
        if not self._api_key:
            raise ValueError("LLM API key required via REVO_LLM__API_KEY")

        self._logger.info(
            "llm_input",
            type="llm_input",
            provider=self._provider,
            model=self._model,
            prompt_len=sum(len(m) for m in messages),
        )

        adapter = get_adapter(self._provider, self._model, self._api_key)
        resp = adapter.complete(
            system,
            messages,
            max_output_tokens=max_output_tokens,
            temperature=temperature,
        )

        usage = resp.usage
        if usage is not None:
            self._logger.info(
                "llm_usage",
                type="llm_usage",
                provider=self._provider,
                model=self._model,
                input_tokens=usage.input_tokens,
                output_tokens=usage.output_tokens,
                total_tokens=usage.total_tokens,
            )

        self._logger.info(
            "llm_output",
            type="llm_output",
            provider=self._provider,
            model=self._model,
            raw_text_len=len(resp.text),
        )
        return resp
