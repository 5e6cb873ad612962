"""Tests for git operations."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from git_wt.common.errors import GitCommandError, WtError
from git_wt.common.git import (
    WorktreeInfo,
    add_worktree,
    branch_exists,
    delete_branch,
    display_items,
    find_worktree_by_branch,
    format_branch,
    get_repo,
    is_branch_in_use,
    is_branch_merged,
    is_repo_dirty,
    list_worktrees,
    parse_worktree_porcelain,
    remove_worktree,
    run_git,
    run_git_checked,
)

PORCELAIN = """\
worktree /work/repo
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /work/.repo-wt/feature-auth
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feature/auth
locked

worktree /work/.repo-wt/detached
HEAD abcdef0123456789abcdef0123456789abcdef01
detached
prunable gitdir file points to non-existent location
"""


class TestRunGit:
    """Tests for run_git and run_git_checked."""

    def test_returns_stdout_on_success(self, tmp_git_repo: Path) -> None:
        result = run_git("status", "--porcelain", cwd=tmp_git_repo)
        assert result == ""

    def test_returns_none_on_failure(self, tmp_path: Path) -> None:
        assert run_git("status", cwd=tmp_path) is None

    def test_capture_false_returns_none(self, tmp_git_repo: Path) -> None:
        assert run_git("status", capture=False, cwd=tmp_git_repo) is None

    def test_checked_raises_with_stderr(self, tmp_path: Path) -> None:
        with pytest.raises(GitCommandError, match="not a git repository") as exc_info:
            run_git_checked("status", cwd=tmp_path)
        assert exc_info.value.args_list == ["status"]


class TestParsePorcelain:
    """Tests for parse_worktree_porcelain."""

    def test_parses_all_entries(self) -> None:
        worktrees = parse_worktree_porcelain(PORCELAIN)
        assert [wt.path for wt in worktrees] == [
            Path("/work/repo"),
            Path("/work/.repo-wt/feature-auth"),
            Path("/work/.repo-wt/detached"),
        ]

    def test_branch_prefix_stripped(self) -> None:
        worktrees = parse_worktree_porcelain(PORCELAIN)
        assert worktrees[1].branch == "feature/auth"
        assert worktrees[1].is_locked

    def test_detached_entry(self) -> None:
        wt = parse_worktree_porcelain(PORCELAIN)[2]
        assert wt.branch is None
        assert wt.is_detached
        assert wt.is_prunable
        assert wt.head.startswith("abcdef0")

    def test_bare_entry(self) -> None:
        worktrees = parse_worktree_porcelain("worktree /srv/repo.git\nbare\n")
        assert worktrees == [WorktreeInfo(path=Path("/srv/repo.git"), branch=None, is_bare=True)]

    def test_empty_output(self) -> None:
        assert parse_worktree_porcelain("") == []


class TestDisplayItems:
    """Tests for format_branch and display_items."""

    def test_detached_label(self) -> None:
        wt = parse_worktree_porcelain(PORCELAIN)[2]
        assert format_branch(wt) == "(detached: abcdef0)"

    def test_items(self) -> None:
        items = display_items(parse_worktree_porcelain(PORCELAIN))
        assert items == [
            "main\t/work/repo",
            "feature/auth\t/work/.repo-wt/feature-auth",
            "(detached: abcdef0)\t/work/.repo-wt/detached",
        ]


class TestRepository:
    """Tests against a real temporary repository."""

    def test_get_repo(self, tmp_git_repo: Path) -> None:
        repo = get_repo(tmp_git_repo)
        assert repo.root == tmp_git_repo
        assert repo.name == "test-repo"
        assert repo.parent == tmp_git_repo.parent

    def test_get_repo_from_linked_worktree(self, tmp_git_repo: Path) -> None:
        linked = tmp_git_repo.parent / "linked"
        add_worktree(linked, "feature", create_branch=True, cwd=tmp_git_repo)
        assert get_repo(linked).root == tmp_git_repo

    def test_get_repo_outside_repo(self, tmp_path: Path) -> None:
        with pytest.raises(WtError, match="Not in a git repository"):
            get_repo(tmp_path)

    def test_add_list_remove(self, tmp_git_repo: Path) -> None:
        path = tmp_git_repo.parent / "wt-feature"
        add_worktree(path, "feature", "main", create_branch=True, cwd=tmp_git_repo)

        worktrees = list_worktrees(tmp_git_repo)
        assert [wt.branch for wt in worktrees] == ["main", "feature"]
        assert find_worktree_by_branch("feature", cwd=tmp_git_repo).path == path
        assert is_branch_in_use("feature", tmp_git_repo, cwd=tmp_git_repo)
        assert not is_branch_in_use("feature", path, cwd=tmp_git_repo)

        remove_worktree(path, cwd=tmp_git_repo)
        assert find_worktree_by_branch("feature", cwd=tmp_git_repo) is None
        assert branch_exists("feature", cwd=tmp_git_repo)

    def test_existing_branch_checkout(self, tmp_git_repo: Path) -> None:
        subprocess.run(
            ["git", "branch", "existing"], cwd=tmp_git_repo, capture_output=True, check=True
        )
        path = tmp_git_repo.parent / "wt-existing"
        add_worktree(path, "existing", cwd=tmp_git_repo)
        assert find_worktree_by_branch("existing", cwd=tmp_git_repo).path == path

    def test_add_failure_raises(self, tmp_git_repo: Path) -> None:
        with pytest.raises(GitCommandError):
            add_worktree(tmp_git_repo.parent / "x", "no-such-branch", cwd=tmp_git_repo)

    def test_merged_branch_and_delete(self, tmp_git_repo: Path) -> None:
        subprocess.run(
            ["git", "branch", "merged"], cwd=tmp_git_repo, capture_output=True, check=True
        )
        assert is_branch_merged("merged", cwd=tmp_git_repo)
        delete_branch("merged", cwd=tmp_git_repo)
        assert not branch_exists("merged", cwd=tmp_git_repo)

    def test_is_repo_dirty(self, tmp_git_repo: Path) -> None:
        assert not is_repo_dirty(tmp_git_repo)
        (tmp_git_repo / "new.txt").write_text("x")
        assert is_repo_dirty(tmp_git_repo)
