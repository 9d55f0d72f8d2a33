"""Configuration models for jemach.

The option set is flat: backend choice, terminal geometry, workspace
behavior flags and debounce/cache timings. Field constraints here are
the hard limits; soft (warning-level) ranges live in
jemach.config.validator.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

BackendType = Literal["toggleterm", "vim-slime", "auto"]
SlimeTarget = Literal["tmux", "screen"]
TerminalDirection = Literal["horizontal", "vertical", "float"]
WorkspaceStyle = Literal["detailed", "compact"]


class SlimeDefaultConfig(BaseModel):
    """Default vim-slime target used when the backend is vim-slime."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    socket_name: str = Field(default="default", description="tmux socket name")
    target_pane: str = Field(default="{right-of}", description="tmux target pane")


class JemachConfig(BaseModel):
    """Complete jemach configuration.

    Attributes:
        backend: REPL backend ("toggleterm", "vim-slime" or "auto").
        slime_target: Multiplexer used by vim-slime.
        slime_default_config: Default vim-slime socket and pane.
        terminal_direction: Where the REPL terminal opens.
        terminal_size: Terminal size in lines/columns.
        workspace_width: Width of the workspace panel.
        workspace_style: Workspace panel rendering style.
        max_history_size: Number of REPL history entries kept.
        workspace_update_debounce: Debounce for workspace refresh (ms).
        cache_ttl: Lifetime of cached workspace data (ms).

    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    backend: BackendType = Field(default="auto", description="REPL backend")
    slime_target: SlimeTarget = Field(default="tmux", description="vim-slime target")
    slime_default_config: SlimeDefaultConfig = Field(default_factory=SlimeDefaultConfig)

    terminal_direction: TerminalDirection = Field(default="horizontal")
    terminal_size: int = Field(default=15, description="Terminal size")

    activate_project_on_start: bool = Field(default=True)
    auto_update_workspace: bool = Field(default=True)
    workspace_width: int = Field(default=50, description="Workspace panel width")
    workspace_style: WorkspaceStyle = Field(default="detailed")
    auto_save_workspace: bool = Field(default=False)
    save_on_exit: bool = Field(default=True)

    max_history_size: int = Field(default=500, ge=0)
    smart_block_detection: bool = Field(default=True)
    use_revise: bool = Field(default=True)

    workspace_update_debounce: int = Field(default=300, ge=0, description="Debounce in ms")
    use_cache: bool = Field(default=True)
    cache_ttl: int = Field(default=5000, ge=0, description="Cache lifetime in ms")


DEFAULT_CONFIG = JemachConfig()
