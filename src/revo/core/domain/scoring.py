from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Pattern

from .models import ScoredFile


EXCLUDE_SCORE = -999


@dataclass(frozen=True)
class ScoringTable:
    """Weighted substring patterns plus the junk and fallback predicates.

    Patterns are matched against the lower-cased path; every match adds its
    weight. A path matching ``junk_pattern`` always scores ``exclude_score``.
    """
    weights: tuple[tuple[str, int], ...]
    junk_pattern: Pattern[str]
    fallback_pattern: Pattern[str]
    exclude_score: int = EXCLUDE_SCORE


DEFAULT_SCORING_TABLE = ScoringTable(
    weights=(
        ("readme", 10),
        ("package.json", 10),
        ("requirements.txt", 10),
        ("setup.py", 10),
        ("pyproject.toml", 10),
        ("main.", 9),
        ("index.", 9),
        ("app.", 9),
        ("src/", 7),
        ("lib/", 7),
        ("core/", 7),
        ("backend/", 6),
        ("components/", 6),
        ("dockerfile", 5),
        (".github/workflows", 4),
        ("tests/", 4),
        ("docs/", 3),
        (".env.example", 3),
        ("makefile", 3),
        ("license", 2),
    ),
    junk_pattern=re.compile(r"\.(png|jpg|jpeg|gif|svg|ico|map|lock|zip|pdf|mp4|exe|dll)$", re.IGNORECASE),
    fallback_pattern=re.compile(r"\.(js|ts|py|java|go|md|json|yaml|yml)$", re.IGNORECASE),
)


def score_path(path: str, table: ScoringTable = DEFAULT_SCORING_TABLE) -> int:
    if table.junk_pattern.search(path):
        return table.exclude_score
    lowered = path.lower()
    return sum(weight for pattern, weight in table.weights if pattern in lowered)


class RelevanceScorer:
    """Ranks tree paths and selects the bounded subset worth sampling."""

    def __init__(self, *, table: ScoringTable = DEFAULT_SCORING_TABLE, sample_limit: int = 15) -> None:
        if sample_limit <= 0:
            raise ValueError("sample_limit must be positive")
        self._table = table
        self._sample_limit = sample_limit

    def rank(self, paths: Iterable[str]) -> list[ScoredFile]:
        """Score every path; positive scores first, descending, ties in input order."""
        scored = [ScoredFile(path=p, score=score_path(p, self._table)) for p in paths]
        # sorted() is stable, so equal scores keep tree order
        return sorted(scored, key=lambda f: f.score, reverse=True)

    def select(self, paths: Iterable[str]) -> list[str]:
        """Return at most ``sample_limit`` paths ordered by relevance.

        Falls back to common source/doc extensions in tree order when no
        path scores positively.
        """
        paths = list(paths)
        ranked = [f.path for f in self.rank(paths) if f.score > 0]
        if ranked:
            return ranked[: self._sample_limit]

        fallback = [
            p for p in paths
            if self._table.fallback_pattern.search(p) and not self._table.junk_pattern.search(p)
        ]
        return fallback[: self._sample_limit]
