"""Tests for importing existing history."""

import tempfile
from pathlib import Path

import pytest
from git import Repo

from gitgraph_layout.core.errors import InvalidHistoryError
from gitgraph_layout.core.gitgraph import GitgraphCore
from gitgraph_layout.core.history import load_repository, read_repository


@pytest.fixture
def temp_merge_repo():
    """Create a git repository with a feature branch merged into the default branch."""
    with tempfile.TemporaryDirectory() as temp_dir:
        project_path = Path(temp_dir)
        repo = Repo.init(project_path)

        with repo.config_writer() as config:
            config.set_value("user", "name", "Test User")
            config.set_value("user", "email", "test@example.com")

        (project_path / "README.md").write_text("# Test Project\n")
        repo.index.add(["README.md"])
        repo.index.commit("Initial commit")
        default_branch = repo.active_branch

        feature = repo.create_head("feature")
        feature.checkout()
        (project_path / "feature.py").write_text("print('feature')\n")
        repo.index.add(["feature.py"])
        repo.index.commit("Add feature\n\nWith a longer description.")

        default_branch.checkout()
        (project_path / "main.py").write_text("print('main')\n")
        repo.index.add(["main.py"])
        repo.index.commit("Add main")

        repo.index.commit(
            "Merge feature",
            parent_commits=(repo.head.commit, feature.commit),
        )
        repo.create_tag("v1.0")

        yield project_path, repo, default_branch.name


def test_read_repository(temp_merge_repo):
    """Test collecting commits oldest first with their refs."""
    project_path, repo, default_name = temp_merge_repo

    history = read_repository(project_path)

    assert len(history.commits) == 4
    assert history.commits[0].subject == "Initial commit"
    assert history.commits[-1].subject == "Merge feature"
    assert len(history.commits[-1].parents) == 2
    assert history.head == default_name
    assert list(history.branches) == [default_name, "feature"]
    assert history.tags == {"v1.0": repo.head.commit.hexsha}
    assert history.commits[0].author == "Test User <test@example.com>"

    feature_commit = next(c for c in history.commits if c.subject == "Add feature")
    assert feature_commit.body == "With a longer description."

    seen = set()
    for commit in history.commits:
        assert all(parent in seen for parent in commit.parents)
        seen.add(commit.hash)


def test_read_repository_max_count(temp_merge_repo):
    """Test truncated history."""
    project_path, _, _ = temp_merge_repo

    history = read_repository(project_path, max_count=2)

    assert len(history.commits) == 2
    assert history.commits[0].parents == []
    assert "v1.0" in history.tags


def test_read_not_a_repository():
    """Test that plain directories are rejected."""
    with tempfile.TemporaryDirectory() as temp_dir:
        with pytest.raises(InvalidHistoryError):
            read_repository(temp_dir)


def test_load_repository_layout(temp_merge_repo):
    """Test laying out an imported repository."""
    project_path, repo, default_name = temp_merge_repo
    gitgraph = GitgraphCore()

    load_repository(gitgraph, project_path)
    data = gitgraph.get_rendered_data()

    merge = data.get_commit(repo.head.commit.hexsha)
    assert merge.branch_to_display == default_name
    assert merge.column == 0
    assert merge.tags == ["v1.0"]
    assert max(c.row for c in data.commits) == 3
    assert data.get_commit(repo.heads.feature.commit.hexsha).column == 1
    assert gitgraph.current_branch.name == default_name
    assert gitgraph.refs.get_commit("HEAD") == merge.hash


def test_import_history_notifies_once():
    """Test a single notification for a whole import."""
    gitgraph = GitgraphCore()
    calls = []
    gitgraph.subscribe(lambda: calls.append(1))

    gitgraph.import_history(
        {
            "commits": [
                {"hash": "a", "subject": "root"},
                {"hash": "b", "parents": ["a"]},
            ],
            "branches": {"main": "b"},
            "tags": {"v1": "a"},
            "head": "main",
        }
    )

    assert calls == [1]
    assert gitgraph.current_branch.name == "main"
    assert gitgraph.tags.get_commit("v1") == "a"
    assert [c.hash for c in gitgraph.commits] == ["a", "b"]


@pytest.mark.parametrize(
    "data",
    [
        {"commits": [{"hash": "b", "parents": ["a"]}, {"hash": "a"}]},
        {"commits": [{"hash": "a"}, {"hash": "a"}]},
        {"commits": [{"hash": "a"}], "branches": {"main": "zzz"}},
        {"commits": [{"hash": "a"}], "tags": {"v1": "zzz"}},
        {"commits": [{"hash": "a"}], "head": "main"},
    ],
)
def test_import_invalid_history(data):
    """Test that inconsistent history is rejected without side effects."""
    gitgraph = GitgraphCore()

    with pytest.raises(InvalidHistoryError):
        gitgraph.import_history(data)

    assert gitgraph.commits == []
    assert gitgraph.refs.get_all_names() == []
    assert len(gitgraph.tags) == 0
