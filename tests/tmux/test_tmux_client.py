"""Tests for tmux helpers.

All tmux invocations are mocked at subprocess.run.
"""

import subprocess
from unittest.mock import Mock, patch

import pytest

from jemach.core.exceptions import TmuxError
from jemach.tmux import (
    TmuxPane,
    find_julia_panes,
    get_current_session_id,
    get_or_create_julia_pane,
    is_in_tmux_session,
    is_tmux_available,
    list_panes,
    list_sessions,
    require_tmux_session,
    send_to_pane,
    setup_julia_workspace,
)


def _completed(returncode: int = 0, stdout: str = "", stderr: str = "") -> Mock:
    result = Mock()
    result.returncode = returncode
    result.stdout = stdout
    result.stderr = stderr
    return result


PANES_OUTPUT = "\n".join(
    [
        "%0\t0\t1\t120\t40\teditor\tnvim",
        "%1\t1\t0\t80\t40\tREPL: main\tjulia",
        "%2\t2\t0\t80\t20\tJulia scratch\tbash",
    ]
)


@pytest.fixture
def in_tmux(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TMUX", "/tmp/tmux-1000/default,123,0")


@pytest.fixture
def outside_tmux(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TMUX", raising=False)


class TestEnvironmentDetection:
    """Tests for availability and session detection."""

    def test_tmux_available(self) -> None:
        with patch("jemach.tmux.client.shutil.which", return_value="/usr/bin/tmux"):
            assert is_tmux_available()
        with patch("jemach.tmux.client.shutil.which", return_value=None):
            assert not is_tmux_available()

    def test_in_session(self, in_tmux: None) -> None:
        assert is_in_tmux_session()
        require_tmux_session()

    def test_not_in_session(self, outside_tmux: None) -> None:
        assert not is_in_tmux_session()
        with pytest.raises(TmuxError):
            require_tmux_session()

    def test_session_id(self, in_tmux: None) -> None:
        with patch("subprocess.run", return_value=_completed(stdout="$3\n")):
            assert get_current_session_id() == "$3"

    def test_session_id_outside_tmux(self, outside_tmux: None) -> None:
        with patch("subprocess.run") as mock_run:
            assert get_current_session_id() is None
        mock_run.assert_not_called()


class TestListing:
    """Tests for session and pane listing."""

    def test_list_sessions(self) -> None:
        with (
            patch("jemach.tmux.client.shutil.which", return_value="/usr/bin/tmux"),
            patch("subprocess.run", return_value=_completed(stdout="$0\tmain\n$1\tjulia-dev")),
        ):
            sessions = list_sessions()
        assert [(s.id, s.name) for s in sessions] == [("$0", "main"), ("$1", "julia-dev")]

    def test_list_sessions_server_not_running(self) -> None:
        with (
            patch("jemach.tmux.client.shutil.which", return_value="/usr/bin/tmux"),
            patch("subprocess.run", return_value=_completed(1, stderr="no server running")),
        ):
            assert list_sessions() == []

    def test_list_panes_parses_fields(self, in_tmux: None) -> None:
        with patch("subprocess.run", return_value=_completed(stdout=PANES_OUTPUT)):
            panes = list_panes()
        assert panes[1] == TmuxPane(
            id="%1",
            index=1,
            active=False,
            width=80,
            height=40,
            title="REPL: main",
            current_command="julia",
        )
        assert panes[0].active

    def test_list_panes_skips_malformed_lines(self, in_tmux: None) -> None:
        output = "garbage\n%4\tx\t0\t1\t1\tt\tjulia\n%5\t5\t0\t10\t10\tt\tjulia"
        with patch("subprocess.run", return_value=_completed(stdout=output)):
            panes = list_panes()
        assert [p.id for p in panes] == ["%5"]

    def test_list_panes_outside_tmux(self, outside_tmux: None) -> None:
        with patch("subprocess.run") as mock_run:
            assert list_panes() == []
        mock_run.assert_not_called()

    def test_list_panes_with_target(self, outside_tmux: None) -> None:
        with patch("subprocess.run", return_value=_completed(stdout=PANES_OUTPUT)) as mock_run:
            panes = list_panes(target="julia-dev")
        assert len(panes) == 3
        args = mock_run.call_args[0][0]
        assert args[:4] == ["tmux", "list-panes", "-t", "julia-dev"]

    def test_tmux_missing(self, in_tmux: None) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError):
            assert list_panes() == []

    def test_tmux_timeout(self, in_tmux: None) -> None:
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("tmux", 5)):
            assert list_panes() == []

    def test_find_julia_panes_matches_command_or_title(self, in_tmux: None) -> None:
        with patch("subprocess.run", return_value=_completed(stdout=PANES_OUTPUT)):
            panes = find_julia_panes()
        assert [p.id for p in panes] == ["%1", "%2"]


class TestSendAndCreate:
    """Tests for sending text and creating panes."""

    def test_send_to_pane(self) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            assert send_to_pane("%1", "x = 1")
        calls = [c[0][0] for c in mock_run.call_args_list]
        assert calls == [
            ["tmux", "send-keys", "-t", "%1", "-l", "x = 1"],
            ["tmux", "send-keys", "-t", "%1", "Enter"],
        ]

    def test_send_without_enter(self) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            assert send_to_pane("%1", "x", enter=False)
        assert mock_run.call_count == 1

    def test_send_failure(self) -> None:
        with patch("subprocess.run", return_value=_completed(1, stderr="can't find pane")):
            assert not send_to_pane("%9", "x")

    def test_get_existing_pane(self, in_tmux: None) -> None:
        with patch("subprocess.run", return_value=_completed(stdout=PANES_OUTPUT)) as mock_run:
            assert get_or_create_julia_pane() == "%1"
        assert mock_run.call_count == 1

    def test_create_pane_when_missing(self, in_tmux: None) -> None:
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [
                _completed(stdout="%0\t0\t1\t120\t40\teditor\tnvim"),
                _completed(stdout="%7"),
            ]
            assert get_or_create_julia_pane() == "%7"
        split_args = mock_run.call_args_list[1][0][0]
        assert split_args[:2] == ["tmux", "split-window"]
        assert split_args[-1] == "julia"

    def test_create_pane_failure(self, in_tmux: None) -> None:
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [_completed(stdout=""), _completed(1, stderr="no space")]
            assert get_or_create_julia_pane() is None


class TestSetupWorkspace:
    """Tests for setup_julia_workspace()."""

    def test_reuses_existing_session(self) -> None:
        with patch("subprocess.run", return_value=_completed()) as mock_run:
            assert setup_julia_workspace("dev")
        assert mock_run.call_count == 1
        assert mock_run.call_args[0][0] == ["tmux", "has-session", "-t", "dev"]

    @pytest.mark.parametrize(
        ("layout", "flag", "steps"),
        [
            ("horizontal", "-h", 2),
            ("vertical", "-v", 2),
            ("grid", "-h", 5),
        ],
    )
    def test_creates_session(self, layout: str, flag: str, steps: int) -> None:
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [_completed(1)] + [_completed()] * steps
            assert setup_julia_workspace("dev", layout)  # type: ignore[arg-type]
        calls = [c[0][0] for c in mock_run.call_args_list]
        assert calls[1] == ["tmux", "new-session", "-d", "-s", "dev"]
        assert calls[2] == ["tmux", "split-window", flag, "-t", "dev", "julia"]
        assert len(calls) == steps + 1

    def test_failure_stops(self) -> None:
        with patch("subprocess.run") as mock_run:
            mock_run.side_effect = [_completed(1), _completed(1, stderr="duplicate session")]
            assert not setup_julia_workspace("dev")
        assert mock_run.call_count == 2

    def test_unknown_layout(self) -> None:
        with pytest.raises(ValueError):
            setup_julia_workspace("dev", "diagonal")  # type: ignore[arg-type]
