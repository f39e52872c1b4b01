from __future__ import annotations

import threading
from typing import Optional

from ..domain.models import AnalysisRequest
from ..domain.scoring import DEFAULT_SCORING_TABLE, RelevanceScorer, ScoringTable
from ..ports import GitHubFactoryPort, GitHubPort, LoggerPort
from .content_fetcher import ContentFetcher, FetchSchedule
from .payload_assembler import AssembledPayload, PayloadAssembler
from .tree_resolver import TreeResolver


class BranchContentSource:
    """ContentSourcePort over raw file retrieval for one repository branch."""

    def __init__(self, *, github: GitHubPort, owner: str, name: str, branch: str) -> None:
        self._github = github
        self._owner = owner
        self._name = name
        self._branch = branch

    def fetch_text(self, path: str) -> Optional[str]:
        return self._github.get_raw_file(self._owner, self._name, self._branch, path)


class SamplingPipeline:
    """Runs one sampling run: tree, selection, contents, payload.

    Resolution errors propagate to the caller; per-file failures only shrink
    the sample set.
    """

    def __init__(
        self,
        *,
        github_factory: GitHubFactoryPort,
        logger: LoggerPort,
        scoring_table: ScoringTable = DEFAULT_SCORING_TABLE,
        assembler: Optional[PayloadAssembler] = None,
    ) -> None:
        self._github_factory = github_factory
        self._logger = logger
        self._table = scoring_table
        self._assembler = assembler or PayloadAssembler()

    def run(
        self,
        request: AnalysisRequest,
        *,
        schedule: FetchSchedule = FetchSchedule(),
        cancel: Optional[threading.Event] = None,
    ) -> AssembledPayload:
        """Execute the pipeline for one request.

        Args:
            request: Repository and limits for this run
            schedule: Fetch scheduling (single pool or paused batches)
            cancel: Set to abandon the run between fetches

        Returns:
            Assembled payload with preview
        """
        repo = request.repository
        self._logger.info(
            "run_started",
            type="run_started",
            repo=repo.slug,
            sample_limit=request.sample_limit,
            max_snippet_length=request.max_snippet_length,
            concurrency=request.concurrency,
            batch_size=schedule.batch_size,
        )

        github = self._github_factory(token=request.token, pool_size=request.concurrency)
        try:
            resolved = TreeResolver(github=github, logger=self._logger).resolve(repo)

            all_files = resolved.blob_paths
            selected = RelevanceScorer(table=self._table, sample_limit=request.sample_limit).select(all_files)
            self._logger.info(
                "files_selected",
                type="files_selected",
                total=len(all_files),
                selected=selected,
            )

            fetcher = ContentFetcher(
                source=BranchContentSource(github=github, owner=repo.owner, name=repo.name, branch=resolved.branch),
                concurrency=request.concurrency,
                max_snippet_length=request.max_snippet_length,
                logger=self._logger,
            )
            batch = fetcher.fetch(selected, schedule=schedule, cancel=cancel)
        finally:
            github.close()

        assembled = self._assembler.assemble(repository=repo, metadata=resolved.metadata, batch=batch)
        self._logger.info(
            "payload_assembled",
            type="payload_assembled",
            repo=repo.slug,
            files_analyzed=assembled.payload.files_analyzed,
            dropped=assembled.dropped,
        )
        return assembled
