"""Rebuild the polylines drawn for each branch."""

from typing import Callable, Dict, List, Mapping, Optional, Sequence

from gitgraph_layout.core.branch import DELETED_BRANCH_NAME, Branch
from gitgraph_layout.models.commit import Commit
from gitgraph_layout.models.rendered import Waypoint

Path = List[Waypoint]


class BranchesPathsCalculator:
    """Compute, for every branch, the polylines linking its commits.

    Commits are grouped by display branch. Live branches get one group each;
    commits of deleted branches are grouped per run of consecutive commits,
    each run owned by a fresh placeholder from `create_deleted_branch`.

    Each group yields its lineage polylines (commits chained by first parent,
    starting from the parent the branch forked from) followed by one polyline
    per merge of the group into another branch.
    """

    def __init__(
        self,
        commits: Sequence[Commit],
        branches: Mapping[str, Branch],
        is_vertical: bool,
        create_deleted_branch: Callable[[], Branch],
    ):
        self.commits = commits
        self.branches = branches
        self.is_vertical = is_vertical
        self.create_deleted_branch = create_deleted_branch
        self.columns: Dict[Branch, int] = {}
        self._by_hash = {commit.hash: commit for commit in commits}

    def execute(self) -> Dict[Branch, List[Path]]:
        groups = self._group_commits()
        owner: Dict[str, Branch] = {
            commit.hash: branch
            for branch, members in groups.items()
            for commit in members
        }

        paths: Dict[Branch, List[Path]] = {
            branch: self._lineage_paths(members)
            for branch, members in groups.items()
        }
        for commit in self.commits:
            for parent_hash in commit.parents[1:]:
                parent = self._by_hash.get(parent_hash)
                if parent is not None:
                    paths[owner[parent.hash]].append(self._link(parent, commit))

        # Lane order keeps color cycling consistent with columns
        self.columns = {branch: members[0].column for branch, members in groups.items()}
        ordered = sorted(paths, key=lambda branch: self.columns[branch])
        return {branch: paths[branch] for branch in ordered}

    def _group_commits(self) -> Dict[Branch, List[Commit]]:
        groups: Dict[Branch, List[Commit]] = {}
        deleted_run: Optional[Branch] = None
        for commit in self.commits:
            name = commit.branch_to_display
            branch = self.branches.get(name) if name != DELETED_BRANCH_NAME else None
            if branch is None:
                if deleted_run is None:
                    deleted_run = self.create_deleted_branch()
                branch = deleted_run
            else:
                deleted_run = None
            groups.setdefault(branch, []).append(commit)
        return groups

    def _lineage_paths(self, members: Sequence[Commit]) -> List[Path]:
        paths: List[Path] = []
        previous: Optional[Commit] = None
        for commit in members:
            parent = self._by_hash.get(commit.parents[0]) if commit.parents else None
            if previous is not None and parent is previous:
                paths[-1].extend(self._link(previous, commit)[1:])
            elif parent is not None:
                paths.append(self._link(parent, commit))
            else:
                paths.append([self._waypoint(commit)])
            previous = commit
        return paths

    def _link(self, start: Commit, end: Commit) -> Path:
        """Polyline from `start` to `end`, bending once if lanes differ."""
        path = [self._waypoint(start)]
        if start.column != end.column:
            path.append(self._bend(start, end))
        path.append(self._waypoint(end))
        return path

    def _bend(self, start: Commit, end: Commit) -> Waypoint:
        # Stay in the lane of `start` until reaching the row of `end`
        if self.is_vertical:
            x, y = start.x, end.y
        else:
            x, y = end.x, start.y
        return Waypoint(x=x, y=y, row=end.row, column=start.column, bend=True)

    @staticmethod
    def _waypoint(commit: Commit) -> Waypoint:
        return Waypoint(x=commit.x, y=commit.y, row=commit.row, column=commit.column)
