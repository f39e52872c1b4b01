from __future__ import annotations

from .tree_resolver import TreeResolver, ResolvedTree
from .content_fetcher import ContentFetcher, FetchSchedule
from .payload_assembler import PayloadAssembler, AssembledPayload
from .sampling_pipeline import SamplingPipeline, BranchContentSource
from .coordinator import ExecutionCoordinator, BackgroundWorker, RunTicket
from .explainer import RepoExplainer, SummaryResult

__all__ = [
    "TreeResolver",
    "ResolvedTree",
    "ContentFetcher",
    "FetchSchedule",
    "PayloadAssembler",
    "AssembledPayload",
    "SamplingPipeline",
    "BranchContentSource",
    "ExecutionCoordinator",
    "BackgroundWorker",
    "RunTicket",
    "RepoExplainer",
    "SummaryResult",
]
