"""Row assignment: which line of the graph each commit sits on."""

from collections import Counter
from enum import Enum
from typing import Dict, Optional, Sequence

from gitgraph_layout.core.refs import Refs
from gitgraph_layout.models.commit import Commit


class Mode(str, Enum):
    """Row assignment policy."""

    COMPACT = "compact"


class GraphRows:
    """One row per commit, in creation order."""

    def __init__(self, commits: Sequence[Commit]):
        self._rows: Dict[str, int] = {}
        self._compute_rows(commits)

    def _compute_rows(self, commits: Sequence[Commit]) -> None:
        for i, commit in enumerate(commits):
            self._rows[commit.hash] = i

    def get_row_of(self, commit_hash: str) -> int:
        return self._rows[commit_hash]

    def get_max_row(self) -> int:
        return max(self._rows.values(), default=-1)


class CompactGraphRows(GraphRows):
    """Rows where pass-through commits share the previous row.

    A commit shares the previous row when it has a single parent, that parent
    has no other child, and the commit carries neither ref nor tag.
    """

    def __init__(self, commits: Sequence[Commit], refs: Refs, tags: Refs):
        self._refs = refs
        self._tags = tags
        super().__init__(commits)

    def _compute_rows(self, commits: Sequence[Commit]) -> None:
        children = Counter(parent for c in commits for parent in c.parents)
        row = -1
        for commit in commits:
            if row < 0 or not self._is_pass_through(commit, children):
                row += 1
            self._rows[commit.hash] = row

    def _is_pass_through(self, commit: Commit, children: Counter) -> bool:
        return (
            len(commit.parents) == 1
            and children[commit.parents[0]] == 1
            and not self._refs.get_names(commit.hash)
            and not self._tags.get_names(commit.hash)
        )


def create_graph_rows(
    mode: Optional[Mode], commits: Sequence[Commit], refs: Refs, tags: Refs
) -> GraphRows:
    if mode == Mode.COMPACT:
        return CompactGraphRows(commits, refs, tags)
    return GraphRows(commits)
