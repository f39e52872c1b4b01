from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Iterable, Mapping

from ..domain.prompt import (
    QUESTION_SYSTEM_PROMPT,
    SUMMARY_SYSTEM_PROMPT,
    build_question_context,
    build_summary_prompt,
)
from ..ports import LLMPort, LoggerPort


NO_SUMMARY = "No AI summary generated."
NO_ANSWER = "No answer generated."


@dataclass(frozen=True)
class SummaryResult:
    summary: str
    latency: str
    tokens: int
    model: str


class RepoExplainer:
    """Hands a sampled repository to the LLM for a summary or an answer."""

    def __init__(
        self,
        *,
        llm: LLMPort,
        logger: LoggerPort,
        summary_max_tokens: int = 850,
        summary_temperature: float = 0.4,
        answer_max_tokens: int = 600,
        answer_temperature: float = 0.3,
    ) -> None:
        self._llm = llm
        self._logger = logger
        self._summary_max_tokens = summary_max_tokens
        self._summary_temperature = summary_temperature
        self._answer_max_tokens = answer_max_tokens
        self._answer_temperature = answer_temperature

    def summarize(self, *, repo_summary: str, files: Iterable[Mapping[str, object]]) -> SummaryResult:
        """Produce a Markdown summary.

        Args:
            repo_summary: Preview text or a one-line repository description
            files: Dicts with ``path`` and ``content`` or ``snippet``

        Returns:
            Summary text with latency (seconds, two decimals), tokens and model
        """
        prompt = build_summary_prompt(repo_summary=repo_summary, files=files)
        start = time.monotonic()
        resp = self._llm.complete(
            system=SUMMARY_SYSTEM_PROMPT,
            messages=[prompt],
            max_output_tokens=self._summary_max_tokens,
            temperature=self._summary_temperature,
        )
        latency = f"{time.monotonic() - start:.2f}"
        tokens = resp.total_tokens or 0
        summary = (resp.text or "").strip() or NO_SUMMARY

        self._logger.info(
            "summary_generated",
            type="summary_generated",
            latency=latency,
            tokens=tokens,
            model=self._llm.model,
        )
        return SummaryResult(summary=summary, latency=latency, tokens=tokens, model=self._llm.model)

    def answer(self, *, summary: str, samples: Iterable[Mapping[str, object]], question: str) -> str:
        context = build_question_context(summary=summary, samples=samples)
        resp = self._llm.complete(
            system=QUESTION_SYSTEM_PROMPT,
            messages=[context, f"User question: {question}"],
            max_output_tokens=self._answer_max_tokens,
            temperature=self._answer_temperature,
        )
        self._logger.info("question_answered", type="question_answered", question_len=len(question))
        return (resp.text or "").strip() or NO_ANSWER
