"""tmux session and pane control for Julia REPL workflows.

Thin wrappers around the tmux CLI. Every command runs synchronously
through _run_tmux(), which never raises: failures are logged and
surface as empty lists, None or False so that editor integrations can
degrade gracefully when tmux is missing.
"""

import logging
import os
import shutil
import subprocess

from jemach.core.exceptions import TmuxError
from jemach.tmux.types import SplitLayout, TmuxPane, TmuxSession

logger = logging.getLogger(__name__)

# Default timeout for tmux commands
_TMUX_TIMEOUT = 5

# Fields are tab-separated: pane titles may contain ':'
_PANE_FORMAT = "\t".join(
    [
        "#{pane_id}",
        "#{pane_index}",
        "#{pane_active}",
        "#{pane_width}",
        "#{pane_height}",
        "#{pane_title}",
        "#{pane_current_command}",
    ]
)
_SESSION_FORMAT = "#{session_id}\t#{session_name}"

DEFAULT_NAME_FILTER = "julia"
DEFAULT_JULIA_COMMAND = "julia"
DEFAULT_SESSION_NAME = "julia-dev"


def _run_tmux(args: list[str]) -> tuple[int, str, str]:
    """Run a tmux command and return exit code, stdout, stderr.

    Args:
        args: tmux command arguments (without 'tmux' prefix).

    Returns:
        Tuple of (exit_code, stdout, stderr).

    """
    try:
        result = subprocess.run(
            ["tmux", *args],
            capture_output=True,
            text=True,
            timeout=_TMUX_TIMEOUT,
        )
        return result.returncode, result.stdout.strip(), result.stderr.strip()
    except subprocess.TimeoutExpired:
        return 1, "", "tmux command timed out"
    except FileNotFoundError:
        return 1, "", "tmux not found in PATH"


def is_tmux_available() -> bool:
    """Check if the tmux executable is on PATH."""
    return shutil.which("tmux") is not None


def is_in_tmux_session() -> bool:
    """Check if the current process runs inside a tmux session."""
    return bool(os.environ.get("TMUX"))


def require_tmux_session() -> None:
    """Ensure tmux is usable from the current process.

    Raises:
        TmuxError: If not running inside a tmux session.

    """
    if not is_in_tmux_session():
        raise TmuxError("Not in a tmux session")


def get_current_session_id() -> str | None:
    """Get the id of the attached tmux session, or None."""
    if not is_in_tmux_session():
        return None
    exit_code, stdout, stderr = _run_tmux(["display-message", "-p", "#{session_id}"])
    if exit_code != 0 or not stdout:
        logger.debug("Could not determine tmux session id: %s", stderr)
        return None
    return stdout


def list_sessions() -> list[TmuxSession]:
    """List all tmux sessions on the default server."""
    if not is_tmux_available():
        return []
    exit_code, stdout, stderr = _run_tmux(["list-sessions", "-F", _SESSION_FORMAT])
    if exit_code != 0:
        logger.debug("tmux list-sessions failed: %s", stderr)
        return []

    sessions: list[TmuxSession] = []
    for line in stdout.splitlines():
        if not line:
            continue
        session_id, _, name = line.partition("\t")
        sessions.append(TmuxSession(id=session_id, name=name))
    return sessions


def session_exists(session_name: str) -> bool:
    """Check if a session with the given name exists."""
    exit_code, _, _ = _run_tmux(["has-session", "-t", session_name])
    return exit_code == 0


def _parse_pane(line: str) -> TmuxPane | None:
    """Parse one ``list-panes`` line produced with _PANE_FORMAT."""
    parts = line.split("\t")
    if len(parts) != 7:
        logger.debug("Skipping malformed pane line: %r", line)
        return None
    pane_id, index, active, width, height, title, command = parts
    try:
        return TmuxPane(
            id=pane_id,
            index=int(index),
            active=active == "1",
            width=int(width),
            height=int(height),
            title=title,
            current_command=command,
        )
    except ValueError:
        logger.debug("Skipping pane line with non-numeric fields: %r", line)
        return None


def list_panes(target: str | None = None) -> list[TmuxPane]:
    """List panes in the current window (or in ``target``).

    Args:
        target: Optional tmux target (session or window). Defaults to
            the current window.

    Returns:
        Parsed panes; empty when not in tmux or on error.

    """
    if target is None and not is_in_tmux_session():
        return []

    args = ["list-panes", "-F", _PANE_FORMAT]
    if target is not None:
        args[1:1] = ["-t", target]

    exit_code, stdout, stderr = _run_tmux(args)
    if exit_code != 0:
        logger.debug("tmux list-panes failed: %s", stderr)
        return []

    panes: list[TmuxPane] = []
    for line in stdout.splitlines():
        if not line:
            continue
        pane = _parse_pane(line)
        if pane is not None:
            panes.append(pane)
    return panes


def find_julia_panes(name_filter: str = DEFAULT_NAME_FILTER) -> list[TmuxPane]:
    """Find panes whose command or title contains ``name_filter``."""
    return [pane for pane in list_panes() if pane.matches(name_filter)]


def send_to_pane(pane_id: str, text: str, enter: bool = True) -> bool:
    """Type text into a pane.

    Args:
        pane_id: Target pane id (e.g., "%3").
        text: Text sent literally (no key-name interpretation).
        enter: Whether to press Enter afterwards.

    Returns:
        True if all keys were sent.

    """
    exit_code, _, stderr = _run_tmux(["send-keys", "-t", pane_id, "-l", text])
    if exit_code != 0:
        logger.error("Failed to send text to pane %s: %s", pane_id, stderr)
        return False
    if enter:
        exit_code, _, stderr = _run_tmux(["send-keys", "-t", pane_id, "Enter"])
        if exit_code != 0:
            logger.error("Failed to send Enter to pane %s: %s", pane_id, stderr)
            return False
    logger.debug("Sent %d characters to pane %s", len(text), pane_id)
    return True


def get_or_create_julia_pane(
    name_filter: str = DEFAULT_NAME_FILTER,
    command: str = DEFAULT_JULIA_COMMAND,
) -> str | None:
    """Return the id of a Julia pane, splitting a new one if none exists.

    Args:
        name_filter: Substring identifying an interpreter pane.
        command: Command to start in a newly created pane.

    Returns:
        Pane id, or None if no pane exists and one could not be created.

    """
    panes = find_julia_panes(name_filter)
    if panes:
        return panes[0].id

    exit_code, stdout, stderr = _run_tmux(
        ["split-window", "-h", "-P", "-F", "#{pane_id}", command]
    )
    if exit_code != 0 or not stdout:
        logger.error("Failed to create %s pane: %s", command, stderr)
        return None
    logger.info("Created %s pane %s", command, stdout)
    return stdout


def setup_julia_workspace(
    session_name: str = DEFAULT_SESSION_NAME,
    split_layout: SplitLayout = "horizontal",
    command: str = DEFAULT_JULIA_COMMAND,
) -> bool:
    """Create a detached session with an editor pane and a Julia REPL pane.

    An existing session with the same name is reused as-is.

    Args:
        session_name: Name of the tmux session.
        split_layout: "horizontal" (side by side), "vertical" (stacked),
            or "grid" (four tiled panes, REPL in the second).
        command: REPL command to start.

    Returns:
        True if the workspace exists afterwards.

    Raises:
        ValueError: If split_layout is not a known layout.

    """
    if split_layout not in ("horizontal", "vertical", "grid"):
        raise ValueError(f"Unknown split layout: {split_layout!r}")

    if session_exists(session_name):
        logger.info("Session %s already exists, reusing it", session_name)
        return True

    steps: list[list[str]] = [["new-session", "-d", "-s", session_name]]
    if split_layout == "vertical":
        steps.append(["split-window", "-v", "-t", session_name, command])
    else:
        steps.append(["split-window", "-h", "-t", session_name, command])
    if split_layout == "grid":
        steps.append(["split-window", "-v", "-t", f"{session_name}:.0"])
        steps.append(["split-window", "-v", "-t", f"{session_name}:.2"])
        steps.append(["select-layout", "-t", session_name, "tiled"])

    for args in steps:
        exit_code, _, stderr = _run_tmux(args)
        if exit_code != 0:
            logger.error("tmux %s failed: %s", args[0], stderr)
            return False

    logger.info("Created %s workspace in session %s", split_layout, session_name)
    return True
