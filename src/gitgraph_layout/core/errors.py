"""Exceptions raised by the layout engine."""


class GitgraphError(Exception):
    """Base class for all gitgraph errors."""


class UnresolvedRefError(GitgraphError):
    """A ref matches neither a known commit hash nor a known branch name."""

    def __init__(self, ref: str):
        self.ref = ref
        super().__init__(f'The ref "{ref}" does not exist')


class BranchNotFoundError(GitgraphError):
    """A branch has no commit to work with."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'The branch "{name}" has no commit')


class CurrentBranchDeletionError(GitgraphError):
    """The checked-out branch can't be deleted."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f'Cannot delete the checked out branch "{name}"'
        )


class InvalidHistoryError(GitgraphError):
    """Imported history is not in topological order."""


class UnknownTemplateError(GitgraphError):
    """No built-in template has this name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Unknown template "{name}"')


class DeletedBranchError(GitgraphError):
    """Deleted branches can't receive new commits."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Cannot commit on the deleted branch "{name}"')
