"""Column (lane) assignment for display branches."""

from typing import Dict, Iterator, Sequence

from gitgraph_layout.models.commit import Commit


class GraphColumns:
    """Lanes in order of first appearance of each display branch."""

    def __init__(self, commits: Sequence[Commit]):
        self._columns: Dict[str, int] = {}
        for commit in commits:
            branch = commit.branch_to_display
            if branch is not None and branch not in self._columns:
                self._columns[branch] = len(self._columns)

    def get(self, branch_name: str) -> int:
        return self._columns[branch_name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)
