"""In-memory implementations of the core ports."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from revo.core.domain.exceptions import MetadataUnavailableError


def repo_doc(
    name: str = "octo/demo",
    *,
    branch: Optional[str] = "main",
    language: Optional[str] = "Python",
    stars: int = 42,
    forks: int = 7,
    description: Optional[str] = "Demo repository",
) -> dict[str, Any]:
    return {
        "full_name": name,
        "description": description,
        "stargazers_count": stars,
        "forks_count": forks,
        "language": language,
        "default_branch": branch,
    }


def tree_doc(*paths: str, dirs: tuple[str, ...] = ()) -> dict[str, Any]:
    tree = [{"path": d, "type": "tree"} for d in dirs]
    tree.extend({"path": p, "type": "blob"} for p in paths)
    return {"sha": "t0", "tree": tree, "truncated": False}


class FakeGitHub:
    """GitHubPort over dictionaries.

    ``trees`` maps a ref (branch name or tree sha) to a tree document,
    ``commits`` maps a branch to a commit document and ``files`` maps a
    path to its raw text. A file value that is an Exception is raised.
    """

    def __init__(
        self,
        *,
        repo: Optional[dict[str, Any]] = None,
        repo_status: Optional[int] = None,
        trees: Optional[dict[str, Any]] = None,
        commits: Optional[dict[str, Any]] = None,
        files: Optional[dict[str, Any]] = None,
        delay: float = 0.0,
    ) -> None:
        self.repo = repo if repo is not None else repo_doc()
        self.repo_status = repo_status
        self.trees = trees or {}
        self.commits = commits or {}
        self.files = files or {}
        self.delay = delay
        self.calls: list[tuple] = []
        self.raw_calls: list[str] = []
        self.closed = False
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def get_repository(self, owner: str, name: str) -> dict[str, Any]:
        self.calls.append(("repo", owner, name))
        if self.repo_status is not None:
            raise MetadataUnavailableError(f"{owner}/{name}", status=self.repo_status)
        return self.repo

    def get_tree(self, owner: str, name: str, ref: str) -> Optional[dict[str, Any]]:
        self.calls.append(("tree", ref))
        return self.trees.get(ref)

    def get_commit(self, owner: str, name: str, ref: str) -> Optional[dict[str, Any]]:
        self.calls.append(("commit", ref))
        return self.commits.get(ref)

    def get_raw_file(self, owner: str, name: str, branch: str, path: str) -> Optional[str]:
        with self._lock:
            self.raw_calls.append(path)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            value = self.files.get(path)
            if isinstance(value, Exception):
                raise value
            return value
        finally:
            with self._lock:
                self.in_flight -= 1

    def close(self) -> None:
        self.closed = True


class FakeGitHubFactory:
    def __init__(self, github: FakeGitHub) -> None:
        self.github = github
        self.calls: list[dict[str, Any]] = []

    def __call__(self, *, token: Optional[str], pool_size: int) -> FakeGitHub:
        self.calls.append({"token": token, "pool_size": pool_size})
        return self.github


class FakeSource:
    """ContentSourcePort that records concurrency."""

    def __init__(self, files: dict[str, Any], delay: float = 0.0) -> None:
        self._gh = FakeGitHub(files=files, delay=delay)

    @property
    def calls(self) -> list[str]:
        return self._gh.raw_calls

    @property
    def max_in_flight(self) -> int:
        return self._gh.max_in_flight

    def fetch_text(self, path: str) -> Optional[str]:
        return self._gh.get_raw_file("o", "n", "main", path)


class FakeLogger:
    """LoggerPort that keeps every record."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def _add(self, level: str, message: str, fields: dict[str, Any]) -> None:
        with self._lock:
            self.records.append((level, message, fields))

    def debug(self, message: str, **fields: Any) -> None:
        self._add("debug", message, fields)

    def info(self, message: str, **fields: Any) -> None:
        self._add("info", message, fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._add("warning", message, fields)

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        self._add("error", message, fields)

    def exception(self, message: str, **fields: Any) -> None:
        self._add("exception", message, fields)

    def messages(self) -> list[str]:
        return [m for _, m, _ in self.records]

    def find(self, message: str) -> list[dict[str, Any]]:
        return [f for _, m, f in self.records if m == message]


@dataclass
class FakeCompletion:
    text: str
    total_tokens: Optional[int] = None


@dataclass
class FakeLLM:
    """LLMPort returning canned text and recording the calls."""
    text: str = "## Overview\nA demo."
    total_tokens: Optional[int] = 123
    model: str = "fake-model"
    error: Optional[Exception] = None
    calls: list[dict[str, Any]] = field(default_factory=list)

    def complete(self, *, system: str, messages: list[str], max_output_tokens: int, temperature: float) -> FakeCompletion:
        self.calls.append({
            "system": system,
            "messages": messages,
            "max_output_tokens": max_output_tokens,
            "temperature": temperature,
        })
        if self.error is not None:
            raise self.error
        return FakeCompletion(text=self.text, total_tokens=self.total_tokens)
