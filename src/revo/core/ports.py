from __future__ import annotations

from typing import Any, Dict, Optional, Protocol


class GitHubPort(Protocol):
    """Port for the code-hosting provider's REST API.

    Lookup methods return the decoded JSON document, or None when the
    request did not succeed.
    """

    def get_repository(self, owner: str, name: str) -> Dict[str, Any]:
        """Fetch repository metadata.

        Raises:
            MetadataUnavailableError: If the request does not succeed
        """
        ...

    def get_tree(self, owner: str, name: str, ref: str) -> Optional[Dict[str, Any]]:
        """Fetch the recursive tree for a branch name or tree sha."""
        ...

    def get_commit(self, owner: str, name: str, ref: str) -> Optional[Dict[str, Any]]:
        """Fetch the latest commit on a branch."""
        ...

    def get_raw_file(self, owner: str, name: str, branch: str, path: str) -> Optional[str]:
        """Fetch raw file content; None on a non-success status."""
        ...

    def close(self) -> None:
        ...


class GitHubFactoryPort(Protocol):
    """Builds a GitHub client for one run (token and pool size vary per run)."""

    def __call__(self, *, token: Optional[str], pool_size: int) -> GitHubPort:
        ...


class ContentSourcePort(Protocol):
    """Raw content retrieval bound to one repository and branch."""

    def fetch_text(self, path: str) -> Optional[str]:
        ...


class CompletionResult(Protocol):
    text: str
    total_tokens: Optional[int]


class LLMPort(Protocol):
    """Port for chat-completion inference."""

    model: str

    def complete(
        self,
        *,
        system: str,
        messages: list[str],
        max_output_tokens: int,
        temperature: float,
    ) -> CompletionResult:
        ...


class LoggerPort(Protocol):
    """Port for structured logging.

    Keyword fields are attached to the record as structured data.
    """

    def debug(self, message: str, **fields: Any) -> None:
        ...

    def info(self, message: str, **fields: Any) -> None:
        ...

    def warning(self, message: str, **fields: Any) -> None:
        ...

    def error(self, message: str, exc_info: bool = False, **fields: Any) -> None:
        ...

    def exception(self, message: str, **fields: Any) -> None:
        ...