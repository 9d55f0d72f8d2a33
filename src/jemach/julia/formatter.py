"""Indentation-based reformatter for Julia source.

Each line is re-indented to ``indent_size * level`` spaces, where level
is the number of blocks open above it. Terminators dedent before they
are rendered, openers indent the lines after them. Unbalanced input is
not rejected: the level floors at zero.
"""

from __future__ import annotations

from collections.abc import Iterable

from jemach.julia.classifier import DEFAULT_CLASSIFIER, LineClassifier

__all__ = ["DEFAULT_INDENT_SIZE", "format_lines", "format_code"]

DEFAULT_INDENT_SIZE: int = 4


def format_lines(
    lines: Iterable[str],
    indent_size: int = DEFAULT_INDENT_SIZE,
    classifier: LineClassifier = DEFAULT_CLASSIFIER,
) -> list[str]:
    """Re-indent a sequence of lines by block depth.

    Args:
        lines: Source lines.
        indent_size: Spaces per nesting level.
        classifier: Opener/terminator table.

    Returns:
        Re-indented lines. Whitespace-only lines become empty strings.

    Raises:
        ValueError: If indent_size is negative.

    """
    if indent_size < 0:
        raise ValueError(f"indent_size must be non-negative, got {indent_size}")

    formatted: list[str] = []
    level = 0
    for line in lines:
        delta = classifier.depth_delta(line)
        if delta < 0:
            level = max(0, level - 1)

        stripped = line.strip()
        formatted.append(" " * (indent_size * level) + stripped if stripped else "")

        if delta > 0:
            level += 1
    return formatted


def format_code(
    code: str,
    indent_size: int = DEFAULT_INDENT_SIZE,
    classifier: LineClassifier = DEFAULT_CLASSIFIER,
) -> str:
    """Re-indent Julia source text.

    Example:
        >>> format_code("if a\\nx=1\\nend", indent_size=2)
        'if a\\n  x=1\\nend'

    """
    return "\n".join(format_lines(code.split("\n"), indent_size, classifier))
