"""Domain exceptions for revo."""

from __future__ import annotations


class RevoError(Exception):
    """Base class for errors that terminate a sampling run."""


class MetadataUnavailableError(RevoError):
    """Raised when the repository metadata request does not succeed.

    ``status`` carries the HTTP status code when one was received.
    """

    def __init__(self, slug: str, status: int | None = None, message: str | None = None) -> None:
        self.slug = slug
        self.status = status
        if message is None:
            if status is not None:
                message = f"GitHub metadata fetch failed ({status})"
            else:
                message = f"GitHub metadata fetch failed for {slug}"
        super().__init__(message)


class DefaultBranchUnavailableError(MetadataUnavailableError):
    """Raised when metadata carries no default branch (empty repository)."""

    def __init__(self, slug: str) -> None:
        super().__init__(slug, message=f"Repository {slug} has no default branch (empty repository?)")


class TreeUnavailableError(RevoError):
    """Raised when neither the branch tree nor the commit tree could be resolved."""

    def __init__(self, slug: str, branch: str) -> None:
        self.slug = slug
        self.branch = branch
        super().__init__("Could not retrieve repository tree.")


class WorkerStartError(RevoError):
    """Raised when the background worker cannot be started."""


class RunTimeoutError(RevoError):
    """Raised when a caller stops waiting for a run's message."""
