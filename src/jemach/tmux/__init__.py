"""tmux integration: pane discovery and code sending for Julia REPLs."""

from jemach.tmux.client import (
    find_julia_panes,
    get_current_session_id,
    get_or_create_julia_pane,
    is_in_tmux_session,
    is_tmux_available,
    list_panes,
    list_sessions,
    require_tmux_session,
    send_to_pane,
    session_exists,
    setup_julia_workspace,
)
from jemach.tmux.types import SplitLayout, TmuxPane, TmuxSession

__all__ = [
    "SplitLayout",
    "TmuxPane",
    "TmuxSession",
    "find_julia_panes",
    "get_current_session_id",
    "get_or_create_julia_pane",
    "is_in_tmux_session",
    "is_tmux_available",
    "list_panes",
    "list_sessions",
    "require_tmux_session",
    "send_to_pane",
    "session_exists",
    "setup_julia_workspace",
]
