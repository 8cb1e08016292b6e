"""Branches: named lineages that create commits in the graph."""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional, Union

from pydantic import BaseModel

from gitgraph_layout.core.errors import (
    BranchNotFoundError,
    CurrentBranchDeletionError,
    DeletedBranchError,
)
from gitgraph_layout.models.commit import Commit, CommitStyle
from gitgraph_layout.models.template import BranchStyle

if TYPE_CHECKING:
    from gitgraph_layout.core.gitgraph import GitgraphCore

logger = logging.getLogger(__name__)

DELETED_BRANCH_NAME = "__deleted__"


class BranchOptions(BaseModel):
    """Normalized input of `GitgraphCore.branch()`."""

    name: str
    parent_commit_hash: Optional[str] = None
    style: Dict[str, Any] = {}
    commit_default_options: Dict[str, Any] = {}


class Branch:
    """A named lineage of commits.

    The branch never writes to the commit store directly: new commits go
    through `on_commit`, and `on_graph_update` tells the graph to notify its
    listeners once the whole operation is applied.
    """

    def __init__(
        self,
        gitgraph: "GitgraphCore",
        name: str,
        style: BranchStyle,
        on_commit: Callable[[Commit], None],
        on_graph_update: Callable[[], None],
        parent_commit_hash: Optional[str] = None,
        commit_default_options: Optional[Dict[str, Any]] = None,
    ):
        self.name = name
        self.style = style
        self.parent_commit_hash = parent_commit_hash
        self.commit_default_options = dict(commit_default_options or {})
        self._gitgraph = gitgraph
        self._on_commit = on_commit
        self._on_graph_update = on_graph_update

    @property
    def tip(self) -> Optional[str]:
        """Hash of the last commit of this branch, if any."""
        return self._gitgraph.refs.get_commit(self.name)

    def is_deleted(self) -> bool:
        return False

    def commit(self, subject: Optional[str] = None, **options: Any) -> "Branch":
        """Add a commit on top of this branch (as `git commit`).

        Accepted options: `hash`, `author`, `body`, `color`, `tag`. Missing
        ones come from the branch's commit defaults, then the graph defaults.
        """
        parent = self.tip or self.parent_commit_hash
        self._create_commit([parent] if parent else [], subject, options)
        self._on_graph_update()
        return self

    def merge(
        self,
        branch: Union["Branch", str],
        subject: Optional[str] = None,
        **options: Any,
    ) -> "Branch":
        """Merge another branch into this one (as `git merge --no-ff`)."""
        other = self._gitgraph.get_branch(branch)
        other_tip = other.tip
        if other_tip is None:
            raise BranchNotFoundError(other.name)

        parent = self.tip or self.parent_commit_hash
        parents = [parent, other_tip] if parent else [other_tip]
        self._create_commit(
            parents, subject or f"Merge branch {other.name}", options
        )
        self._on_graph_update()
        return self

    def checkout(self) -> "Branch":
        """Make this branch the current one and move HEAD to its tip."""
        self._gitgraph.current_branch = self
        head = self.tip or self.parent_commit_hash
        if head:
            self._gitgraph.refs.set("HEAD", head)
        else:
            self._gitgraph.refs.delete("HEAD")
        return self

    def delete(self) -> None:
        """Remove the branch; its commits then render as deleted history."""
        current = self._gitgraph.current_branch
        if current is not None and current.name == self.name:
            raise CurrentBranchDeletionError(self.name)

        self._gitgraph.refs.delete(self.name)
        if self._gitgraph.branches.get(self.name) is self:
            del self._gitgraph.branches[self.name]
        logger.debug("Deleted branch %s", self.name)
        self._on_graph_update()

    def _create_commit(self, parents, subject, options) -> Commit:
        defaults = self.commit_default_options
        color = options.get("color", defaults.get("color"))
        fields = {
            "parents": parents,
            "author": options.get(
                "author", defaults.get("author", self._gitgraph.author)
            ),
            "subject": subject or self._gitgraph.commit_message,
            "body": options.get("body", ""),
            "style": CommitStyle(color=color),
        }
        if options.get("hash"):
            fields["hash"] = options["hash"]
        commit = Commit(**fields)

        self._on_commit(commit)
        self._gitgraph.refs.set(self.name, commit.hash)
        if options.get("tag"):
            self._gitgraph.tags.set(options["tag"], commit.hash)
        self.checkout()
        return commit

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.name}')"


class DeletedBranch(Branch):
    """Placeholder owning commits whose branch no longer exists."""

    def __init__(
        self,
        gitgraph: "GitgraphCore",
        style: BranchStyle,
        on_graph_update: Callable[[], None],
    ):
        super().__init__(
            gitgraph,
            DELETED_BRANCH_NAME,
            style,
            on_commit=_refuse_commit,
            on_graph_update=on_graph_update,
        )

    def is_deleted(self) -> bool:
        return True

    def commit(self, subject: Optional[str] = None, **options: Any) -> "Branch":
        raise DeletedBranchError(self.name)

    def merge(self, branch, subject=None, **options) -> "Branch":
        raise DeletedBranchError(self.name)


def _refuse_commit(commit: Commit) -> None:
    raise DeletedBranchError(DELETED_BRANCH_NAME)
