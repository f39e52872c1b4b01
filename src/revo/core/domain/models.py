from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Literal


_SLUG_RE = re.compile(r"^([A-Za-z0-9_.\-]+)/([A-Za-z0-9_.\-]+?)(?:\.git)?/?$")


@dataclass(frozen=True)
class RepositoryIdentifier:
    """Identity of the repository a sampling run works on."""
    owner: str
    name: str

    @property
    def slug(self) -> str:
        """Returns owner/name format."""
        return f"{self.owner}/{self.name}"

    @property
    def url(self) -> str:
        """Returns GitHub HTTPS URL."""
        return f"https://github.com/{self.slug}"

    @classmethod
    def parse(cls, value: str) -> "RepositoryIdentifier":
        """Parse a repository notation.

        Accepts:
        - "owner/name"
        - "https://github.com/owner/name[.git]"
        - "git@github.com:owner/name[.git]"
        """
        text = value.strip()
        for prefix in ("https://github.com/", "http://github.com/", "git@github.com:"):
            if text.startswith(prefix):
                text = text[len(prefix):]
                break
        m = _SLUG_RE.match(text)
        if not m:
            raise ValueError(f"Invalid repository identifier: {value!r} (expected owner/name)")
        return cls(owner=m.group(1), name=m.group(2))


@dataclass(frozen=True)
class FileTreeEntry:
    path: str
    kind: Literal["blob", "tree"]

    @property
    def is_blob(self) -> bool:
        return self.kind == "blob"


@dataclass(frozen=True)
class ScoredFile:
    path: str
    score: int


@dataclass(frozen=True)
class FileSample:
    path: str
    snippet: str


@dataclass(frozen=True)
class RepoMetadata:
    """Descriptive projection of the provider's repository document."""
    name: str
    description: str | None = None
    stars: int = 0
    forks: int = 0
    language: str | None = None
    default_branch: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RepoMetadata":
        return cls(
            name=data.get("full_name") or data.get("name") or "",
            description=data.get("description"),
            stars=int(data.get("stargazers_count") or 0),
            forks=int(data.get("forks_count") or 0),
            language=data.get("language"),
            default_branch=data.get("default_branch") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "stars": self.stars,
            "forks": self.forks,
            "language": self.language,
            "branch": self.default_branch,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RepoMetadata":
        return cls(
            name=data.get("name") or "",
            description=data.get("description"),
            stars=int(data.get("stars") or 0),
            forks=int(data.get("forks") or 0),
            language=data.get("language"),
            default_branch=data.get("branch"),
        )


@dataclass(frozen=True)
class SampleBatch:
    """Best-effort collection result of the content fetcher."""
    samples: tuple[FileSample, ...]
    requested: int
    dropped: int


@dataclass(frozen=True)
class AnalysisPayload:
    repo: str
    metadata: RepoMetadata
    samples: tuple[FileSample, ...] = field(default_factory=tuple)

    @property
    def files_analyzed(self) -> int:
        return len(self.samples)

    def to_dict(self) -> dict[str, Any]:
        """Wire representation handed to the LLM proxy."""
        return {
            "repo": self.repo,
            "metadata": self.metadata.to_dict(),
            "filesAnalyzed": self.files_analyzed,
            "samples": [{"path": s.path, "snippet": s.snippet} for s in self.samples],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnalysisPayload":
        return cls(
            repo=data["repo"],
            metadata=RepoMetadata.from_dict(data.get("metadata") or {}),
            samples=tuple(FileSample(path=s["path"], snippet=s["snippet"]) for s in data.get("samples") or []),
        )


@dataclass(frozen=True)
class AnalysisRequest:
    """Inbound parameters of one sampling run."""
    repository: RepositoryIdentifier
    token: str | None = None
    sample_limit: int = 15
    max_snippet_length: int = 1000
    concurrency: int = 4

    def __post_init__(self) -> None:
        for name in ("sample_limit", "max_snippet_length", "concurrency"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
