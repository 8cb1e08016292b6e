"""Commit model for the layout engine."""

import uuid
from typing import List, Optional

from pydantic import BaseModel, Field


def _new_hash() -> str:
    return uuid.uuid4().hex


class CommitStyle(BaseModel):
    """Explicit styling of a single commit."""

    color: Optional[str] = None

    model_config = {"frozen": True}


class Commit(BaseModel):
    """Represents a commit in the graph.

    Identity (`hash`, `parents`) and payload never change once the commit is
    in the store. Render fields are filled in by the updater methods, each of
    which returns a new instance and leaves the original untouched.
    """

    hash: str = Field(default_factory=_new_hash)
    parents: List[str] = []
    author: str = ""
    subject: str = ""
    body: str = ""
    style: CommitStyle = CommitStyle()

    # Render fields, recomputed on every pass
    branches: List[str] = []
    refs: List[str] = []
    tags: List[str] = []
    row: int = 0
    column: int = 0
    x: float = 0
    y: float = 0
    color: Optional[str] = None

    model_config = {"frozen": True}

    @property
    def hash_abbrev(self) -> str:
        return self.hash[:7]

    @property
    def branch_to_display(self) -> Optional[str]:
        """Name of the branch used to place and color this commit."""
        return self.branches[0] if self.branches else None

    def set_branches(self, branches: List[str]) -> "Commit":
        return self.model_copy(update={"branches": list(branches)})

    def set_refs(self, refs: List[str]) -> "Commit":
        return self.model_copy(update={"refs": list(refs)})

    def set_tags(self, tags: List[str]) -> "Commit":
        return self.model_copy(update={"tags": list(tags)})

    def set_position(self, row: int, column: int, x: float, y: float) -> "Commit":
        return self.model_copy(
            update={"row": row, "column": column, "x": x, "y": y}
        )

    def with_default_color(self, color: str) -> "Commit":
        """Return a copy colored with `color` unless explicitly styled."""
        return self.model_copy(update={"color": self.style.color or color})
