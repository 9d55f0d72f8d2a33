"""jemach - Julia development helpers for editors and tmux.

Lexical (line-level) analysis of Julia source: enclosing block detection,
block balance validation and indentation-based reformatting, plus a thin
tmux layer for sending code to Julia REPL panes.
"""

from jemach.julia import (
    Block,
    BlockKind,
    SyntaxReport,
    classify_opener,
    detect_block,
    detect_blocks,
    extract_variables,
    find_enclosing_block,
    format_code,
    is_terminator,
    validate_syntax,
)

__version__ = "1.0.0"

__all__ = [
    "Block",
    "BlockKind",
    "SyntaxReport",
    "classify_opener",
    "detect_block",
    "detect_blocks",
    "extract_variables",
    "find_enclosing_block",
    "format_code",
    "is_terminator",
    "validate_syntax",
]
