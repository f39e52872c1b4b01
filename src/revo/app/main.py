from __future__ import annotations

from typing import Any, Iterable, Mapping

from .config import AppConfig
from .container import Container
from .session import AnalysisSession, RunOutcome
from ..core.domain.exceptions import WorkerStartError
from ..core.domain.models import AnalysisRequest, RepositoryIdentifier
from ..core.services import SummaryResult


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def inline_only(**_: Any):
    """Worker factory that refuses to start, forcing inline execution."""
    raise WorkerStartError("Inline execution requested")


def _build_request(container: Container, repo: str, **overrides: Any) -> AnalysisRequest:
    sampling = container.config.sampling
    values = {
        "token": container.config.github.token(),
        "sample_limit": sampling.sample_limit(),
        "max_snippet_length": sampling.max_snippet_length(),
        "concurrency": sampling.concurrency(),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return AnalysisRequest(repository=RepositoryIdentifier.parse(repo), **values)


def run_analysis(
    container: Container,
    repo: str,
    *,
    token: str | None = None,
    sample_limit: int | None = None,
    max_snippet_length: int | None = None,
    concurrency: int | None = None,
    inline: bool = False,
) -> RunOutcome:
    """Sample one repository with an already initialized container."""
    request = _build_request(
        container,
        repo,
        token=token,
        sample_limit=sample_limit,
        max_snippet_length=max_snippet_length,
        concurrency=concurrency,
    )
    coordinator = container.coordinator(worker_factory=inline_only) if inline else container.coordinator()
    with AnalysisSession(coordinator=coordinator) as session:
        return session.analyze(request, timeout=container.config.sampling.run_timeout())


def analyze(
    repo: str,
    *,
    token: str | None = None,
    sample_limit: int | None = None,
    max_snippet_length: int | None = None,
    concurrency: int | None = None,
    inline: bool = False,
    config: AppConfig | None = None,
) -> RunOutcome:
    """Sample a repository and build its analysis payload.

    Args:
        repo: ``owner/name`` or a GitHub URL
        token: GitHub token override (optional, otherwise from config/env)
        sample_limit: Maximum number of sampled files
        max_snippet_length: Maximum characters per snippet
        concurrency: Concurrent content fetches
        inline: Skip the background worker and run on the calling thread
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        The run outcome; ``outcome.ok`` tells result from error

    Raises:
        ValueError: If ``repo`` is not a repository reference or a limit is not positive
        RunTimeoutError: If the run does not finish within the configured timeout
    """
    container = _create_container(config)
    try:
        return run_analysis(
            container,
            repo,
            token=token,
            sample_limit=sample_limit,
            max_snippet_length=max_snippet_length,
            concurrency=concurrency,
            inline=inline,
        )
    finally:
        container.shutdown_resources()


def summarize(
    repo_summary: str,
    files: Iterable[Mapping[str, object]],
    *,
    config: AppConfig | None = None,
) -> SummaryResult:
    """Ask the configured LLM for a Markdown summary of sampled files.

    Raises:
        ValueError: If no LLM API key is configured
    """
    container = _create_container(config)
    try:
        return container.explainer().summarize(repo_summary=repo_summary, files=files)
    finally:
        container.shutdown_resources()


def ask(
    question: str,
    *,
    summary: str,
    samples: Iterable[Mapping[str, object]],
    config: AppConfig | None = None,
) -> str:
    """Answer a question about a repository from its summary and samples.

    Raises:
        ValueError: If no LLM API key is configured
    """
    container = _create_container(config)
    try:
        return container.explainer().answer(summary=summary, samples=samples, question=question)
    finally:
        container.shutdown_resources()
