"""Resolve which branches each commit belongs to."""

import logging
from typing import Dict, List, Sequence

from gitgraph_layout.core.branch import DELETED_BRANCH_NAME
from gitgraph_layout.core.refs import Refs
from gitgraph_layout.models.commit import Commit

logger = logging.getLogger(__name__)


def get_branches(commits: Sequence[Commit], refs: Refs) -> Dict[str, List[str]]:
    """Map each reachable commit hash to the branch names containing it.

    Branches are walked in ref insertion order, following first parents only,
    so the first name of each list is the first branch that discovered the
    commit.
    """
    by_hash = {commit.hash: commit for commit in commits}
    result: Dict[str, List[str]] = {}

    for branch in refs.get_all_names():
        if branch == "HEAD":
            continue

        tip = refs.get_commit(branch)
        if tip not in by_hash:
            logger.warning("Branch %s points to unknown commit %s", branch, tip)
            continue

        stack = [tip]
        while stack:
            current = by_hash[stack.pop()]
            names = result.setdefault(current.hash, [])
            if branch not in names:
                names.append(branch)
            if current.parents and current.parents[0] in by_hash:
                stack.append(current.parents[0])

    return result


def with_branches(
    commits: Sequence[Commit], refs: Refs
) -> List[Commit]:
    """Return copies of `commits` with their `branches` field filled."""
    branches = get_branches(commits, refs)
    return [
        commit.set_branches(branches.get(commit.hash) or [DELETED_BRANCH_NAME])
        for commit in commits
    ]
