"""Tests for tmux session construction."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from git_wt.common.errors import TmuxError
from git_wt.tm.manager import Pane, TmuxManager, tmux_layout


class FakeTmux:
    """Records tmux invocations; failing subcommands can be configured."""

    def __init__(self, *, fail: tuple[str, ...] = (), session_appears_after: int = 0) -> None:
        self.calls: list[list[str]] = []
        self.fail = fail
        self.session_appears_after = session_appears_after
        self._has_session_checks = 0

    def __call__(
        self, args: list[str], *, capture: bool = True
    ) -> subprocess.CompletedProcess[str]:
        self.calls.append(args)
        sub = args[1]
        code = 0
        if sub in self.fail:
            code = 1
        elif sub == "has-session":
            self._has_session_checks += 1
            code = 0 if self._has_session_checks > self.session_appears_after else 1
        return subprocess.CompletedProcess(args, code, stdout="", stderr="")

    def subcommands(self) -> list[str]:
        return [call[1] for call in self.calls]


PANES = [
    Pane(Path("/work/.repo-wt/exp-1"), "exp-1"),
    Pane(Path("/work/.repo-wt/exp-2"), "exp-2"),
    Pane(Path("/work/.repo-wt/exp-3"), "exp-3"),
]


class TestCreateSession:
    """Tests for TmuxManager.create_session."""

    def test_one_pane_per_worktree(self) -> None:
        tmux = FakeTmux()
        TmuxManager("wt-repo-exp", runner=tmux).create_session(PANES, shell="/bin/zsh")

        assert tmux.calls[0] == [
            "tmux", "new-session", "-d", "-s", "wt-repo-exp",
            "-c", "/work/.repo-wt/exp-1", "/bin/zsh",
        ]
        splits = [c for c in tmux.calls if c[1] == "split-window"]
        assert [c[5] for c in splits] == ["/work/.repo-wt/exp-2", "/work/.repo-wt/exp-3"]
        assert ["tmux", "select-layout", "-t", "wt-repo-exp", "tiled"] in tmux.calls
        assert "set-window-option" not in tmux.subcommands()

    def test_sync_panes(self) -> None:
        tmux = FakeTmux()
        TmuxManager("s", runner=tmux).create_session(PANES[:1], sync_panes=True, shell="sh")
        assert tmux.calls[-1] == [
            "tmux", "set-window-option", "-t", "s", "synchronize-panes", "on",
        ]

    def test_layout_alias(self) -> None:
        tmux = FakeTmux()
        TmuxManager("s", runner=tmux).create_session(PANES, layout="vertical", shell="sh")
        assert ["tmux", "select-layout", "-t", "s", "even-vertical"] in tmux.calls

    def test_empty_layout_skips_select(self) -> None:
        tmux = FakeTmux()
        TmuxManager("s", runner=tmux).create_session(PANES, layout="", shell="sh")
        assert "select-layout" not in tmux.subcommands()

    def test_layout_failure_is_not_fatal(self) -> None:
        tmux = FakeTmux(fail=("select-layout",))
        TmuxManager("s", runner=tmux).create_session(PANES, shell="sh")

    def test_shell_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SHELL", "/usr/bin/fish")
        tmux = FakeTmux()
        TmuxManager("s", runner=tmux).create_session(PANES[:1])
        assert tmux.calls[0][-1] == "/usr/bin/fish"

    def test_waits_for_session(self) -> None:
        sleeps: list[float] = []
        tmux = FakeTmux(session_appears_after=2)
        TmuxManager("s", runner=tmux, sleep=sleeps.append).create_session(
            PANES[:1], shell="sh"
        )
        assert len(sleeps) == 2

    def test_session_never_appears(self) -> None:
        tmux = FakeTmux(session_appears_after=100)
        manager = TmuxManager("s", runner=tmux, sleep=lambda _s: None)
        with pytest.raises(TmuxError, match="not created"):
            manager.create_session(PANES[:1], shell="sh")

    def test_new_session_failure(self) -> None:
        tmux = FakeTmux(fail=("new-session",))
        with pytest.raises(TmuxError, match="create tmux session"):
            TmuxManager("s", runner=tmux).create_session(PANES, shell="sh")

    def test_split_failure(self) -> None:
        tmux = FakeTmux(fail=("split-window",))
        with pytest.raises(TmuxError, match="pane 1"):
            TmuxManager("s", runner=tmux).create_session(PANES, shell="sh")

    def test_no_panes(self) -> None:
        with pytest.raises(TmuxError, match="No panes"):
            TmuxManager("s", runner=FakeTmux()).create_session([])


class TestSessionLifecycle:
    """Tests for exists/kill/attach."""

    def test_session_exists(self) -> None:
        assert TmuxManager("s", runner=FakeTmux()).session_exists()
        assert not TmuxManager("s", runner=FakeTmux(fail=("has-session",))).session_exists()

    def test_kill_ignores_errors(self) -> None:
        tmux = FakeTmux(fail=("kill-session",))
        TmuxManager("s", runner=tmux).kill_session()
        assert tmux.calls == [["tmux", "kill-session", "-t", "s"]]

    def test_attach_failure(self) -> None:
        tmux = FakeTmux(fail=("attach-session",))
        with pytest.raises(TmuxError, match="attach"):
            TmuxManager("s", runner=tmux).attach()


def test_tmux_layout_passthrough() -> None:
    assert tmux_layout("main-horizontal") == "main-horizontal"
    assert tmux_layout("horizontal") == "even-horizontal"
