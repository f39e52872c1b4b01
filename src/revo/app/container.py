from __future__ import annotations

from dependency_injector import containers, providers

from .config import AppConfig
from ..core.services import ExecutionCoordinator, PayloadAssembler, RepoExplainer, SamplingPipeline
from ..core.domain.scoring import DEFAULT_SCORING_TABLE
from ..infra.github import GitHubClientFactory
from ..infra.llm import LLM
from ..infra.logging import RunLogger


class Container(containers.DeclarativeContainer):
    """DI container with Pydantic BaseSettings support."""

    config = providers.Configuration(pydantic_settings=[AppConfig()])

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        RunLogger,
        logs_dir=config.directories.logs_dir,
        json_file=config.logging.json_file,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        level=config.logging.level,
    )

    github_factory = providers.Singleton(
        GitHubClientFactory,
        default_token=config.github.token,
        api_base=config.github.api_base,
        raw_base=config.github.raw_base,
        timeout=config.github.timeout,
    )

    scoring_table = providers.Object(DEFAULT_SCORING_TABLE)

    assembler = providers.Singleton(PayloadAssembler)

    pipeline = providers.Factory(
        SamplingPipeline,
        github_factory=github_factory,
        logger=logger,
        scoring_table=scoring_table,
        assembler=assembler,
    )

    coordinator = providers.Factory(
        ExecutionCoordinator,
        pipeline=pipeline,
        logger=logger,
        inline_pause=config.sampling.inline_batch_pause,
        idle_delay=config.sampling.idle_delay,
    )

    llm = providers.Factory(
        LLM,
        provider=config.llm.provider_name,
        model=config.llm.model_name,
        api_key=config.llm.api_key,
        logger=logger,
    )

    explainer = providers.Factory(
        RepoExplainer,
        llm=llm,
        logger=logger,
        summary_max_tokens=config.llm.summary_max_tokens,
        summary_temperature=config.llm.summary_temperature,
        answer_max_tokens=config.llm.answer_max_tokens,
        answer_temperature=config.llm.answer_temperature,
    )
