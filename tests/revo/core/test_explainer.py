"""Tests for the LLM explainer service."""
import pytest

from revo.core.domain.prompt import QUESTION_SYSTEM_PROMPT, SUMMARY_SYSTEM_PROMPT
from revo.core.services import RepoExplainer
from revo.core.services.explainer import NO_ANSWER, NO_SUMMARY

from fakes import FakeLLM, FakeLogger


def _explainer(llm):
    return RepoExplainer(llm=llm, logger=FakeLogger())


def test_summarize():
    llm = FakeLLM(text="  ## Overview\nDemo  ", total_tokens=321)
    result = _explainer(llm).summarize(repo_summary="Repository: octo/demo", files=[{"path": "README.md", "snippet": "# d"}])

    assert result.summary == "## Overview\nDemo"
    assert result.tokens == 321
    assert result.model == "fake-model"
    assert float(result.latency) >= 0
    assert result.latency.count(".") == 1 and len(result.latency.split(".")[1]) == 2

    call = llm.calls[0]
    assert call["system"] == SUMMARY_SYSTEM_PROMPT
    assert call["max_output_tokens"] == 850
    assert call["temperature"] == 0.4
    assert "Repository: octo/demo" in call["messages"][0]


def test_summarize_defaults_on_empty_output():
    result = _explainer(FakeLLM(text="   ", total_tokens=None)).summarize(repo_summary="r", files=[])
    assert result.summary == NO_SUMMARY
    assert result.tokens == 0


def test_answer():
    llm = FakeLLM(text="It is a CLI.")
    answer = _explainer(llm).answer(summary="A demo.", samples=[{"path": "a.py", "snippet": "x"}], question="What is it?")

    assert answer == "It is a CLI."
    call = llm.calls[0]
    assert call["system"] == QUESTION_SYSTEM_PROMPT
    assert call["messages"][1] == "User question: What is it?"
    assert call["max_output_tokens"] == 600
    assert call["temperature"] == 0.3


def test_answer_default():
    assert _explainer(FakeLLM(text="")).answer(summary="s", samples=[], question="q") == NO_ANSWER


def test_llm_errors_propagate():
    with pytest.raises(RuntimeError):
        _explainer(FakeLLM(error=RuntimeError("rate limited"))).summarize(repo_summary="r", files=[])
