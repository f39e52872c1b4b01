"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from .session import RunOutcome
from ..core.services import SummaryResult


def format_outcome(outcome: RunOutcome) -> str:
    """Format a sampling run for human-readable CLI output.

    Args:
        outcome: Result or error of one run

    Returns:
        Formatted string for display
    """
    if not outcome.ok:
        return f"Error ({outcome.repository.slug}): {outcome.error}"

    payload = outcome.payload
    lines = []
    lines.append("=" * 80)
    lines.append("REPOSITORY SAMPLE")
    lines.append("=" * 80)
    lines.append("")
    lines.append(outcome.preview or "")

    lines.append("\n" + "-" * 80)
    lines.append(f"{'#':>3}  {'Path':<60} {'Chars':>8}")
    lines.append("-" * 80)
    for i, sample in enumerate(payload.samples, 1):
        path = sample.path
        # Keep long paths' tails, they carry the file name
        if len(path) > 60:
            path = "..." + path[-57:]
        lines.append(f"{i:>3}  {path:<60} {len(sample.snippet):>8,}")
    lines.append("-" * 80)

    if payload.metadata.description:
        lines.append(f"\nDescription: {payload.metadata.description}")

    return "\n".join(lines)


def format_summary(result: SummaryResult) -> str:
    lines = []
    lines.append(result.summary)
    lines.append("")
    lines.append(f"Model: {result.model} | Latency: {result.latency}s | Tokens: {result.tokens}")
    return "\n".join(lines)


def format_answer(question: str, answer: str) -> str:
    return f"Q: {question}\n\n{answer}"
