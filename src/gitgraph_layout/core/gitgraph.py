"""Gitgraph core: owns the commit store and computes rendered data."""

import logging
from typing import Any, Callable, Dict, List, Optional, Set, Union

from pydantic import BaseModel

from gitgraph_layout.core.branch import (
    DELETED_BRANCH_NAME,
    Branch,
    BranchOptions,
    DeletedBranch,
)
from gitgraph_layout.core.columns import GraphColumns
from gitgraph_layout.core.errors import (
    BranchNotFoundError,
    InvalidHistoryError,
    UnresolvedRefError,
)
from gitgraph_layout.core.membership import with_branches
from gitgraph_layout.core.paths import BranchesPathsCalculator
from gitgraph_layout.core.position import Orientation, compute_position, is_vertical
from gitgraph_layout.core.refs import Refs
from gitgraph_layout.core.rows import Mode, create_graph_rows
from gitgraph_layout.models.commit import Commit
from gitgraph_layout.models.history import HistoryData
from gitgraph_layout.models.rendered import BranchPath, RenderedData
from gitgraph_layout.models.template import BranchStyle, Template, TemplateName, get_template

logger = logging.getLogger(__name__)


class GitgraphOptions(BaseModel):
    """Options of a graph, resolved once at construction."""

    template: Optional[Union[Template, TemplateName, str]] = None
    orientation: Optional[Orientation] = None
    reverse_arrow: bool = False
    init_commit_offset_x: float = 0
    init_commit_offset_y: float = 0
    mode: Optional[Mode] = None
    author: str = "Sergio Flores <saxo-guy@epic.com>"
    commit_message: str = "He doesn't like George Michael! Boooo!"


class GitgraphCore:
    """Commit graph with its branches, refs and tags.

    Rendering libraries subscribe to changes and pull a fresh snapshot with
    `get_rendered_data()` whenever they are notified.
    """

    def __init__(self, options: Optional[GitgraphOptions] = None, **kwargs: Any):
        if options is None:
            options = GitgraphOptions(**kwargs)
        self.options = options
        self.template: Template = get_template(options.template)
        self.orientation = options.orientation
        self.is_vertical = is_vertical(options.orientation)
        self.reverse_arrow = options.reverse_arrow
        self.init_commit_offset_x = options.init_commit_offset_x
        self.init_commit_offset_y = options.init_commit_offset_y
        self.mode = options.mode
        self.author = options.author
        self.commit_message = options.commit_message

        self.refs = Refs()
        self.tags = Refs()
        self.commits: List[Commit] = []
        self.branches: Dict[str, Branch] = {}
        self._hashes: Set[str] = set()
        self._listeners: List[Callable[[], None]] = []

        self.current_branch: Optional[Branch] = None
        self.current_branch = self.branch("master")

    # Rendering side

    def get_rendered_data(self) -> RenderedData:
        """Return everything a rendering library needs to draw the graph."""
        commits = self._compute_rendered_commits()
        columns = GraphColumns(commits)
        branches_paths = self._compute_branches_paths(commits)
        return RenderedData(
            commits=commits,
            branches_paths=branches_paths,
            commit_messages_x=len(columns) * self.template.branch.spacing,
        )

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call `listener` after every change; return a function to stop."""
        self._listeners.append(listener)
        subscribed = True

        def unsubscribe() -> None:
            nonlocal subscribed
            if not subscribed:
                return
            subscribed = False
            self._listeners.remove(listener)

        return unsubscribe

    # User side

    def branch(self, options: Union[str, BranchOptions, Dict[str, Any]]) -> Branch:
        """Create a new branch from HEAD (as `git branch`).

        Registering an existing name replaces the previous branch object.
        """
        branch = self._register_branch(_normalize_branch_options(options))
        self._next()
        return branch

    def commit(self, subject: Optional[str] = None, **options: Any) -> "GitgraphCore":
        """Commit on the current branch."""
        self.current_branch.commit(subject, **options)
        return self

    def tag(
        self,
        name: str,
        ref: Optional[Union[Commit, Branch, str]] = None,
    ) -> "GitgraphCore":
        """Tag a commit (as `git tag`).

        `ref` may be a commit, a commit hash or a branch name; by default
        the commit at HEAD is tagged.
        """
        if not ref:
            ref = self.refs.get_commit("HEAD")
            if ref is None:
                return self

        if isinstance(ref, Commit):
            commit_hash = ref.hash
        elif isinstance(ref, Branch):
            commit_hash = self._resolve_ref(ref.name)
        else:
            commit_hash = self._resolve_ref(ref)

        self.tags.set(name, commit_hash)
        logger.debug("Tagged %s as %s", commit_hash, name)
        self._next()
        return self

    def import_history(self, data: Union[HistoryData, Dict[str, Any]]) -> "GitgraphCore":
        """Append existing history, then point branches, tags and HEAD at it.

        Nothing is applied unless the whole history is consistent: every
        parent listed before its children and every ref pointing at a known
        commit.
        """
        history = HistoryData.model_validate(data)
        known = set(self._hashes)
        for entry in history.commits:
            if entry.hash in known:
                raise InvalidHistoryError(f"Duplicate commit {entry.hash}")
            missing = [p for p in entry.parents if p not in known]
            if missing:
                raise InvalidHistoryError(
                    f"Commit {entry.hash} has unknown parents: {', '.join(missing)}"
                )
            known.add(entry.hash)
        for name, commit_hash in {**history.branches, **history.tags}.items():
            if commit_hash not in known:
                raise InvalidHistoryError(f"Ref {name} points to unknown commit {commit_hash}")
        if history.head is not None and history.head not in history.branches:
            raise InvalidHistoryError(f"HEAD points to unknown branch {history.head}")

        for entry in history.commits:
            self.append_commit(Commit(**entry.model_dump()))
        for name, commit_hash in history.branches.items():
            if name not in self.branches:
                self._register_branch(BranchOptions(name=name))
            self.refs.set(name, commit_hash)
        for name, commit_hash in history.tags.items():
            self.tags.set(name, commit_hash)
        if history.head is not None:
            self.branches[history.head].checkout()

        logger.debug(
            "Imported %d commits and %d branches",
            len(history.commits),
            len(history.branches),
        )
        self._next()
        return self

    def get_branch(self, branch: Union[Branch, str]) -> Branch:
        if isinstance(branch, Branch):
            return branch
        try:
            return self.branches[branch]
        except KeyError as e:
            raise BranchNotFoundError(branch) from e

    def append_commit(self, commit: Commit) -> None:
        """Add a commit to the store; its parents must already be there."""
        if commit.hash in self._hashes:
            raise InvalidHistoryError(f"Duplicate commit {commit.hash}")
        missing = [p for p in commit.parents if p not in self._hashes]
        if missing:
            raise InvalidHistoryError(
                f"Commit {commit.hash} has unknown parents: {', '.join(missing)}"
            )

        self.commits.append(commit)
        self._hashes.add(commit.hash)
        logger.debug("Appended commit %s (%s)", commit.hash_abbrev, commit.subject)

    # Internals

    def _register_branch(self, options: BranchOptions) -> Branch:
        style = BranchStyle.model_validate(
            {**self.template.branch.model_dump(), **options.style}
        )
        branch = Branch(
            self,
            options.name,
            style,
            on_commit=self.append_commit,
            on_graph_update=self._next,
            parent_commit_hash=options.parent_commit_hash
            or self.refs.get_commit("HEAD"),
            commit_default_options=options.commit_default_options,
        )
        if branch.name in self.branches:
            logger.debug("Overwriting branch %s", branch.name)
            if self.current_branch is self.branches[branch.name]:
                self.current_branch = branch
        self.branches[branch.name] = branch
        logger.debug(
            "Registered branch %s from %s", branch.name, branch.parent_commit_hash
        )
        return branch

    def _resolve_ref(self, ref: str) -> str:
        if ref in self._hashes or self.refs.has_commit(ref):
            return ref
        if self.refs.has_name(ref):
            return self.refs.get_commit(ref)
        raise UnresolvedRefError(ref)

    def _next(self) -> None:
        """Tell each listener something changed."""
        for listener in list(self._listeners):
            listener()

    def _compute_rendered_commits(self) -> List[Commit]:
        commits = with_branches(self.commits, self.refs)
        columns = GraphColumns(commits)
        rows = create_graph_rows(self.mode, self.commits, self.refs, self.tags)
        max_row = rows.get_max_row()

        rendered = []
        for commit in commits:
            commit = commit.set_refs(self.refs.get_names(commit.hash))
            commit = commit.set_tags(self.tags.get_names(commit.hash))

            row = rows.get_row_of(commit.hash)
            column = columns.get(commit.branch_to_display)
            x, y = compute_position(
                row,
                column,
                self.orientation,
                self.template.branch.spacing,
                self.template.commit.spacing,
                self.init_commit_offset_x,
                self.init_commit_offset_y,
                max_row,
            )
            commit = commit.set_position(row, column, x, y)
            rendered.append(
                commit.with_default_color(
                    self._branch_color(commit.branch_to_display, column)
                )
            )
        return rendered

    def _compute_branches_paths(self, commits: List[Commit]) -> Dict[Branch, BranchPath]:
        calculator = BranchesPathsCalculator(
            commits,
            self.branches,
            self.is_vertical,
            lambda: DeletedBranch(self, self.template.branch, self._next),
        )
        paths = calculator.execute()
        return {
            branch: BranchPath(
                branch_name=branch.name,
                column=calculator.columns[branch],
                color=self._branch_color(branch.name, calculator.columns[branch]),
                segments=segments,
            )
            for branch, segments in paths.items()
        }

    def _branch_color(self, branch_name: str, column: int) -> str:
        branch = self.branches.get(branch_name)
        if branch is not None and branch_name != DELETED_BRANCH_NAME:
            explicit = branch.style.color
        else:
            explicit = self.template.branch.color
        colors = self.template.colors
        return explicit or colors[column % len(colors)]


def _normalize_branch_options(
    options: Union[str, BranchOptions, Dict[str, Any]]
) -> BranchOptions:
    if isinstance(options, str):
        return BranchOptions(name=options)
    if isinstance(options, BranchOptions):
        return options
    return BranchOptions.model_validate(options)
