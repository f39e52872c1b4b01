from __future__ import annotations

import json
import logging

import typer
from dotenv import load_dotenv

from .cli_formatter import format_answer, format_outcome, format_summary
from .config import AppConfig
from .container import Container
from .main import run_analysis
from .session import RunOutcome
from ..core.domain.exceptions import RevoError
from ..infra.llm import LLM

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _container(config: AppConfig) -> Container:
    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


def _sample(container: Container, repo: str, **kwargs) -> RunOutcome:
    """Run one sampling run, mapping failures to exit code 1."""
    try:
        outcome = run_analysis(container, repo, **kwargs)
    except (ValueError, RevoError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    if not outcome.ok:
        typer.echo(f"Error: {outcome.error}", err=True)
        raise typer.Exit(code=1)
    return outcome


def _explainer(container: Container, provider: str | None, model: str | None):
    if provider or model:
        llm = LLM(
            provider=provider or container.config.llm.provider_name(),
            model=model or container.config.llm.model_name(),
            api_key=container.config.llm.api_key(),
            logger=container.logger(),
        )
        return container.explainer(llm=llm)
    return container.explainer()


def _require_llm_key(config: AppConfig) -> None:
    if not config.llm.api_key:
        typer.echo("Error: API key required via REVO_LLM__API_KEY", err=True)
        raise typer.Exit(code=2)


def _samples_of(outcome: RunOutcome) -> list[dict[str, str]]:
    return [{"path": s.path, "snippet": s.snippet} for s in outcome.payload.samples]


@app.command()
def analyze(
    repo: str = typer.Argument(..., help="Repository as OWNER/NAME or a GitHub URL"),
    sample_limit: int | None = typer.Option(None, "--sample-limit", "-n", help="Maximum number of sampled files"),
    max_snippet: int | None = typer.Option(None, "--max-snippet", help="Maximum characters per snippet"),
    concurrency: int | None = typer.Option(None, "--concurrency", "-c", help="Concurrent content fetches"),
    inline: bool = typer.Option(False, "--inline", help="Run without the background worker"),
    json_output: bool = typer.Option(False, "--json", help="Output the run message as JSON"),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level", case_sensitive=False),
):
    """Sample a repository and print its analysis payload."""
    level = logging._nameToLevel.get(log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)

    config = AppConfig()
    container = _container(config)
    try:
        outcome = _sample(
            container,
            repo,
            sample_limit=sample_limit,
            max_snippet_length=max_snippet,
            concurrency=concurrency,
            inline=inline,
        )
        if json_output:
            typer.echo(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))
        else:
            typer.echo(format_outcome(outcome))
    finally:
        container.shutdown_resources()


@app.command()
def summarize(
    repo: str = typer.Argument(..., help="Repository as OWNER/NAME or a GitHub URL"),
    provider: str | None = typer.Option(None, "--provider", case_sensitive=False, help="LLM provider"),
    model: str | None = typer.Option(None, "--model", help="Model name"),
    json_output: bool = typer.Option(False, "--json", help="Output the summary as JSON"),
):
    """Sample a repository and ask the LLM for a Markdown summary."""
    config = AppConfig()
    _require_llm_key(config)

    container = _container(config)
    try:
        outcome = _sample(container, repo)
        explainer = _explainer(container, provider, model)
        try:
            result = explainer.summarize(repo_summary=outcome.preview or "", files=_samples_of(outcome))
        except Exception as e:
            typer.echo(f"Error: AI service failure: {e}", err=True)
            raise typer.Exit(code=1)

        if json_output:
            typer.echo(json.dumps(
                {"summary": result.summary, "latency": result.latency, "tokens": result.tokens, "model": result.model},
                ensure_ascii=False,
                indent=2,
            ))
        else:
            typer.echo(format_summary(result))
    finally:
        container.shutdown_resources()


@app.command()
def ask(
    repo: str = typer.Argument(..., help="Repository as OWNER/NAME or a GitHub URL"),
    question: str = typer.Argument(..., help="Question about the repository"),
    provider: str | None = typer.Option(None, "--provider", case_sensitive=False, help="LLM provider"),
    model: str | None = typer.Option(None, "--model", help="Model name"),
):
    """Sample a repository, summarize it, then answer a question about it."""
    config = AppConfig()
    _require_llm_key(config)

    container = _container(config)
    try:
        outcome = _sample(container, repo)
        samples = _samples_of(outcome)
        explainer = _explainer(container, provider, model)
        try:
            summary = explainer.summarize(repo_summary=outcome.preview or "", files=samples)
            answer = explainer.answer(summary=summary.summary, samples=samples, question=question)
        except Exception as e:
            typer.echo(f"Error: AI service failure: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(format_answer(question, answer))
    finally:
        container.shutdown_resources()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port number"),
):
    """Serve the /analyzeRepo and /askRevo proxy endpoints."""
    import uvicorn

    from .server import create_app

    config = AppConfig()
    container = _container(config)
    try:
        typer.echo(f"Serving on http://{host or config.server.host}:{port or config.server.port}")
        uvicorn.run(
            create_app(container.explainer),
            host=host or config.server.host,
            port=port or config.server.port,
        )
    finally:
        container.shutdown_resources()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
