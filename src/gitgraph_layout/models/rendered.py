"""Output models handed to rendering libraries."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .commit import Commit


class Waypoint(BaseModel):
    """One point of a branch polyline.

    `bend` marks synthetic points inserted so that a line changing lanes
    turns at a right angle instead of crossing lanes diagonally.
    """

    x: float
    y: float
    row: int
    column: int
    bend: bool = False

    model_config = {"frozen": True}


class BranchPath(BaseModel):
    """Everything needed to draw one branch."""

    branch_name: str
    column: int
    color: str
    segments: List[List[Waypoint]] = []

    @property
    def points(self) -> List[Waypoint]:
        """Waypoints of the lineage polyline."""
        return self.segments[0] if self.segments else []


class RenderedData(BaseModel):
    """Snapshot of the whole graph, ready to be drawn.

    `branches_paths` is keyed by branch object, in lane order.
    """

    commits: List[Commit]
    branches_paths: Dict[Any, BranchPath]
    commit_messages_x: float

    model_config = {"arbitrary_types_allowed": True}

    def get_commit(self, commit_hash: str) -> Optional[Commit]:
        return next((c for c in self.commits if c.hash == commit_hash), None)

    def get_path(self, branch_name: str) -> List[BranchPath]:
        """All paths drawn for a branch name (several for deleted runs)."""
        return [
            path
            for path in self.branches_paths.values()
            if path.branch_name == branch_name
        ]
