from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..domain.exceptions import DefaultBranchUnavailableError, TreeUnavailableError
from ..domain.models import FileTreeEntry, RepoMetadata, RepositoryIdentifier
from ..ports import GitHubPort, LoggerPort


@dataclass(frozen=True)
class ResolvedTree:
    metadata: RepoMetadata
    branch: str
    entries: tuple[FileTreeEntry, ...]

    @property
    def blob_paths(self) -> list[str]:
        return [e.path for e in self.entries if e.is_blob]


def _usable_tree(doc: Optional[dict[str, Any]]) -> Optional[list[dict[str, Any]]]:
    if not doc:
        return None
    tree = doc.get("tree")
    if not isinstance(tree, list) or not tree:
        return None
    return tree


def _tree_sha(commit_doc: dict[str, Any]) -> Optional[str]:
    tree = (commit_doc.get("commit") or {}).get("tree")
    if isinstance(tree, dict):
        sha = tree.get("sha")
        return sha if isinstance(sha, str) and sha else None
    if isinstance(tree, str) and tree:
        return tree
    return None


class TreeResolver:
    """Resolves the complete default-branch file tree of a repository.

    Tries the tree by branch name first, then the tree referenced by the
    branch's latest commit. No partial trees are accepted.
    """

    def __init__(self, *, github: GitHubPort, logger: LoggerPort) -> None:
        self._github = github
        self._logger = logger

    def resolve(self, repository: RepositoryIdentifier) -> ResolvedTree:
        """Resolve metadata and the recursive tree.

        Raises:
            MetadataUnavailableError: If metadata cannot be fetched
            DefaultBranchUnavailableError: If metadata names no default branch
            TreeUnavailableError: If both tree strategies fail
        """
        owner, name = repository.owner, repository.name

        raw_meta = self._github.get_repository(owner, name)
        metadata = RepoMetadata.from_api(raw_meta)
        branch = metadata.default_branch
        if not branch:
            raise DefaultBranchUnavailableError(repository.slug)
        self._logger.info(
            "metadata_fetched",
            type="metadata_fetched",
            repo=repository.slug,
            branch=branch,
            language=metadata.language,
        )

        tree = _usable_tree(self._github.get_tree(owner, name, branch))
        strategy = "branch"

        if tree is None:
            self._logger.info("tree_fallback", type="tree_fallback", repo=repository.slug, branch=branch)
            commit = self._github.get_commit(owner, name, branch)
            sha = _tree_sha(commit) if commit else None
            if sha:
                tree = _usable_tree(self._github.get_tree(owner, name, sha))
                strategy = "commit"

        if tree is None:
            raise TreeUnavailableError(repository.slug, branch)

        entries = tuple(
            FileTreeEntry(path=item["path"], kind="blob" if item.get("type") == "blob" else "tree")
            for item in tree
            if isinstance(item, dict) and isinstance(item.get("path"), str)
        )
        self._logger.info(
            "tree_resolved",
            type="tree_resolved",
            repo=repository.slug,
            strategy=strategy,
            entries=len(entries),
        )
        return ResolvedTree(metadata=metadata, branch=branch, entries=entries)
