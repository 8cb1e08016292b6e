"""Read history from a real git repository."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Union

import git
from git import Repo

from gitgraph_layout.core.errors import InvalidHistoryError
from gitgraph_layout.models.history import HistoryCommit, HistoryData

if TYPE_CHECKING:
    from gitgraph_layout.core.gitgraph import GitgraphCore

logger = logging.getLogger(__name__)


def read_repository(
    repo_path: Union[str, Path], max_count: Optional[int] = None
) -> HistoryData:
    """Collect the history of all local branches, oldest commit first.

    With `max_count`, only the newest commits are kept; parents and refs
    falling outside that window are dropped.
    """
    try:
        repo = Repo(repo_path)
    except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
        raise InvalidHistoryError(f"Not a git repository: {repo_path}") from e

    head_name = _active_branch_name(repo)
    heads = sorted(repo.heads, key=lambda h: h.name != head_name)
    if not heads:
        return HistoryData()

    kwargs = {"topo_order": True}
    if max_count is not None:
        kwargs["max_count"] = max_count
    git_commits = list(repo.iter_commits([h.name for h in heads], **kwargs))
    git_commits.reverse()

    known = set()
    commits: List[HistoryCommit] = []
    for commit in git_commits:
        parents = [p.hexsha for p in commit.parents]
        if parents and parents[0] not in known:
            # Mainline cut off by max_count: start a new root
            parents = []
        body = commit.message.split("\n", 1)[1].strip() if "\n" in commit.message else ""
        commits.append(
            HistoryCommit(
                hash=commit.hexsha,
                parents=[p for p in parents if p in known],
                author=f"{commit.author.name} <{commit.author.email}>",
                subject=commit.summary,
                body=body,
            )
        )
        known.add(commit.hexsha)

    branches = _refs_in(known, {h.name: h.commit.hexsha for h in heads})
    tags = _refs_in(known, {t.name: t.commit.hexsha for t in repo.tags})
    logger.debug(
        "Read %d commits and %d branches from %s", len(commits), len(branches), repo_path
    )
    return HistoryData(
        commits=commits,
        branches=branches,
        tags=tags,
        head=head_name if head_name in branches else None,
    )


def load_repository(
    gitgraph: "GitgraphCore",
    repo_path: Union[str, Path],
    max_count: Optional[int] = None,
) -> "GitgraphCore":
    """Import the history of a git repository into `gitgraph`."""
    return gitgraph.import_history(read_repository(repo_path, max_count))


def _active_branch_name(repo: Repo) -> Optional[str]:
    try:
        return repo.active_branch.name
    except TypeError:
        # Detached HEAD
        return None


def _refs_in(known: set, refs: Dict[str, str]) -> Dict[str, str]:
    return {name: sha for name, sha in refs.items() if sha in known}
