"""Tests for `wt tmux new`."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from git_wt.cli import cli
from git_wt.common.errors import ValidationError
from git_wt.tm.cli import session_name_for


@pytest.fixture
def tmux(mocker: Any) -> Any:
    """Pretend tmux is installed and capture the session manager."""
    mocker.patch("git_wt.tm.cli.is_tmux_installed", return_value=True)
    manager_cls = mocker.patch("git_wt.tm.cli.TmuxManager")
    manager_cls.return_value.session_exists.return_value = False
    return manager_cls


def run_tmux(repo: Path, *args: str) -> Any:
    return CliRunner().invoke(cli, ["--repo", str(repo), "tmux", "new", *args])


class TestSessionName:
    """Tests for session_name_for."""

    def test_default(self) -> None:
        assert session_name_for("repo", "feature/auth") == "wt-repo-feature-auth"

    def test_custom_is_sanitized(self) -> None:
        assert session_name_for("repo", "x", "my session") == "my-session"

    def test_custom_empty_after_sanitizing(self) -> None:
        with pytest.raises(ValidationError):
            session_name_for("repo", "x", "///")


class TestTmuxNew:
    """Tests for the tmux new command."""

    def test_creates_worktrees_and_session(self, tmp_git_repo: Path, tmux: Any) -> None:
        result = run_tmux(tmp_git_repo, "exp", "--count", "3", "--no-attach")

        assert result.exit_code == 0, result.output
        base = tmp_git_repo.parent / ".test-repo-wt"
        assert all((base / f"exp-{i}").is_dir() for i in (1, 2, 3))

        tmux.assert_called_once_with("wt-test-repo-exp")
        manager = tmux.return_value
        panes = manager.create_session.call_args.args[0]
        assert [p.branch for p in panes] == ["exp-1", "exp-2", "exp-3"]
        assert manager.create_session.call_args.kwargs == {
            "layout": "tiled",
            "sync_panes": False,
        }
        manager.attach.assert_not_called()
        assert "tmux attach -t wt-test-repo-exp" in result.output

    def test_attaches_by_default(self, tmp_git_repo: Path, tmux: Any) -> None:
        result = run_tmux(tmp_git_repo, "solo", "--layout", "vertical", "--sync-panes")
        assert result.exit_code == 0, result.output
        manager = tmux.return_value
        assert manager.create_session.call_args.kwargs == {
            "layout": "vertical",
            "sync_panes": True,
        }
        manager.attach.assert_called_once()

    def test_replaces_existing_session(self, tmp_git_repo: Path, tmux: Any) -> None:
        tmux.return_value.session_exists.return_value = True
        result = run_tmux(tmp_git_repo, "exp", "--no-attach")
        assert result.exit_code == 0, result.output
        tmux.return_value.kill_session.assert_called_once()

    def test_invalid_layout(self, tmp_git_repo: Path, tmux: Any) -> None:
        result = run_tmux(tmp_git_repo, "exp", "--layout", "diagonal")
        assert result.exit_code == 1
        assert "Invalid layout: diagonal" in result.output
        tmux.assert_not_called()

    def test_count_must_be_positive(self, tmp_git_repo: Path, tmux: Any) -> None:
        result = run_tmux(tmp_git_repo, "exp", "--count", "0")
        assert result.exit_code == 1
        assert "--count must be at least 1" in result.output

    def test_tmux_missing(self, tmp_git_repo: Path, mocker: Any) -> None:
        mocker.patch("git_wt.tm.cli.is_tmux_installed", return_value=False)
        result = run_tmux(tmp_git_repo, "exp")
        assert result.exit_code == 1
        assert "tmux is not installed" in result.output
