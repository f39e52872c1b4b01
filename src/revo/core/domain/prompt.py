from __future__ import annotations

from typing import Iterable, Mapping


SUMMARY_SYSTEM_PROMPT = (
    "You are REVO, a professional software architecture analyst. "
    "Always return clear, Markdown-formatted summaries."
)

QUESTION_SYSTEM_PROMPT = "You are REVO, an expert code explainer and architecture analyst."

SUMMARY_EXCERPT_CHARS = 800
QUESTION_EXCERPT_CHARS = 600


def _file_text(f: Mapping[str, object]) -> str:
    text = f.get("content") or f.get("snippet")
    return str(text) if text else ""


def build_summary_prompt(*, repo_summary: str, files: Iterable[Mapping[str, object]]) -> str:
    """Build the repository summary prompt from a preview and sample files."""
    sections = []
    for f in files:
        content = _file_text(f) or "No content provided."
        sections.append(f"\n### {f.get('path')}\n{content[:SUMMARY_EXCERPT_CHARS]}")
    formatted = "\n".join(sections) or "No files were provided for analysis."

    return (
        "You are **REVO**, an intelligent GitHub repository explainer and senior-level codebase analyst.\n"
        "Examine the provided repository context and produce a concise, well-structured Markdown summary.\n\n"
        "### 1. Overview\n"
        "Describe the purpose of the repository, what it does, and its main architecture.\n\n"
        "### 2. Components\n"
        "Highlight important files, modules, or configurations and their roles.\n\n"
        "### 3. Tech Stack\n"
        "Identify key languages, frameworks, or tools used.\n\n"
        "### 4. Insights (optional)\n"
        "If relevant, provide one or two key implementation insights or potential improvements.\n\n"
        "---\n\n"
        "#### Repository Summary\n"
        f"{repo_summary or 'No high-level summary provided.'}\n\n"
        "#### Sample Files\n"
        f"{formatted}\n"
    )


def build_question_context(*, summary: str, samples: Iterable[Mapping[str, object]]) -> str:
    """Build the grounding context for a follow-up question."""
    sections = [f"### {s.get('path')}\n{_file_text(s)[:QUESTION_EXCERPT_CHARS]}" for s in samples]
    formatted = "\n".join(sections) or "No files"
    return (
        "You are REVO, a professional GitHub repo analyst.\n"
        "Answer questions using the provided summary and file snippets as your only context.\n\n"
        "## Repository Summary\n"
        f"{summary}\n\n"
        "## Selected Files\n"
        f"{formatted}\n"
    )
