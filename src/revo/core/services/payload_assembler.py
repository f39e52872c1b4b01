from __future__ import annotations

from dataclasses import dataclass

from ..domain.models import AnalysisPayload, RepoMetadata, RepositoryIdentifier, SampleBatch


@dataclass(frozen=True)
class AssembledPayload:
    payload: AnalysisPayload
    preview: str
    dropped: int = 0


class PayloadAssembler:
    """Merges metadata and samples into the handoff payload and its preview."""

    def assemble(
        self,
        *,
        repository: RepositoryIdentifier,
        metadata: RepoMetadata,
        batch: SampleBatch,
    ) -> AssembledPayload:
        payload = AnalysisPayload(repo=repository.slug, metadata=metadata, samples=batch.samples)
        return AssembledPayload(payload=payload, preview=self.preview(payload), dropped=batch.dropped)

    @staticmethod
    def preview(payload: AnalysisPayload) -> str:
        meta = payload.metadata
        return "\n".join([
            f"Repository: {payload.repo}",
            f"Language: {meta.language or '-'}",
            f"Stars: {meta.stars} | Forks: {meta.forks}",
            f"Files analyzed: {payload.files_analyzed}",
            f"Branch: {meta.default_branch or '-'}",
            "",
            "Ready for AI handoff",
        ])
