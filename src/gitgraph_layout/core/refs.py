"""Name to commit hash tables used for branch tips, HEAD and tags."""

from typing import Dict, List, Optional


class Refs:
    """Bidirectional name <-> commit hash table.

    A name points at one commit at a time; a commit can carry many names.
    Names keep their first insertion order even when moved to another commit.
    """

    def __init__(self):
        self._commit_per_name: Dict[str, str] = {}
        self._names_per_commit: Dict[str, List[str]] = {}

    def set(self, name: str, commit_hash: str) -> "Refs":
        """Point `name` at `commit_hash`, moving it if already set."""
        previous = self._commit_per_name.get(name)
        if previous == commit_hash:
            return self
        if previous is not None:
            self._remove_name_from(previous, name)

        self._names_per_commit.setdefault(commit_hash, []).append(name)
        self._commit_per_name[name] = commit_hash
        return self

    def delete(self, name: str) -> "Refs":
        if name in self._commit_per_name:
            self._remove_name_from(self._commit_per_name[name], name)
            del self._commit_per_name[name]
        return self

    def get_commit(self, name: str) -> Optional[str]:
        return self._commit_per_name.get(name)

    def get_names(self, commit_hash: str) -> List[str]:
        return list(self._names_per_commit.get(commit_hash, []))

    def get_all_names(self) -> List[str]:
        return list(self._commit_per_name)

    def has_commit(self, commit_hash: str) -> bool:
        return commit_hash in self._names_per_commit

    def has_name(self, name: str) -> bool:
        return name in self._commit_per_name

    def _remove_name_from(self, commit_hash: str, name: str) -> None:
        names = [n for n in self._names_per_commit.get(commit_hash, []) if n != name]
        if names:
            self._names_per_commit[commit_hash] = names
        else:
            self._names_per_commit.pop(commit_hash, None)

    def __len__(self) -> int:
        return len(self._commit_per_name)

    def __repr__(self) -> str:
        return f"Refs({self._commit_per_name!r})"
