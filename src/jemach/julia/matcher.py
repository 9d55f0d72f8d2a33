"""Block boundary finder.

Locates the innermost block enclosing a reference line (typically the
editor cursor) by scanning backward for its opener and forward for the
balanced terminator. Both scans track nesting depth so that closed
sibling blocks above or nested blocks below the reference are skipped.

Malformed input is an expected case: an unbalanced or missing block is
reported as None, never raised.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from jemach.julia.classifier import DEFAULT_CLASSIFIER, LineClassifier
from jemach.julia.types import Block, BlockKind

logger = logging.getLogger(__name__)

__all__ = ["find_enclosing_block", "detect_block", "detect_blocks"]


def _make_block(lines: Sequence[str], kind: BlockKind, start: int, end: int) -> Block:
    return Block(
        kind=kind,
        start_line=start,
        end_line=end,
        content="\n".join(lines[start : end + 1]),
    )


def _find_opener(
    lines: Sequence[str],
    start: int,
    classifier: LineClassifier,
) -> int | None:
    """Walk upward from ``start`` (inclusive) to the opener enclosing it.

    Terminators met on the way close sibling blocks, whose openers are
    skipped.
    """
    skip = 0
    for index in range(start, -1, -1):
        delta = classifier.depth_delta(lines[index])
        if delta < 0:
            skip += 1
        elif delta > 0:
            if skip == 0:
                return index
            skip -= 1
    return None


def _find_terminator(
    lines: Sequence[str],
    start: int,
    classifier: LineClassifier,
) -> int | None:
    """Walk downward from ``start`` with depth 1 until the depth reaches 0."""
    depth = 1
    for index in range(start, len(lines)):
        depth += classifier.depth_delta(lines[index])
        if depth == 0:
            return index
    return None


def find_enclosing_block(
    lines: Sequence[str],
    reference_line: int,
    classifier: LineClassifier = DEFAULT_CLASSIFIER,
) -> Block | None:
    """Find the innermost block enclosing ``reference_line``.

    A reference line that is itself an opener belongs to the block it
    opens; one that is a terminator belongs to the block it closes. A
    single-line block (``if x; y; end``) resolves to itself.

    Args:
        lines: Source lines (no line endings).
        reference_line: 0-indexed line to search around.
        classifier: Opener/terminator table.

    Returns:
        The enclosing Block, or None if the reference is out of range,
        no opener encloses it, or the block is never closed.

    """
    if not 0 <= reference_line < len(lines):
        return None

    current = lines[reference_line]
    if classifier.is_single_line_block(current):
        kind = classifier.classify(current)
        return _make_block(lines, kind, reference_line, reference_line)

    if classifier.is_terminator(current):
        # The terminator closes the block whose body ends just above it.
        start = _find_opener(lines, reference_line - 1, classifier)
        end: int | None = reference_line
    else:
        start = _find_opener(lines, reference_line, classifier)
        end = None

    if start is None:
        logger.debug("No opener encloses line %d", reference_line)
        return None

    if end is None:
        end = _find_terminator(lines, reference_line + 1, classifier)
    if end is None:
        logger.debug("Block opened at line %d is never closed", start)
        return None

    return _make_block(lines, classifier.classify(lines[start]), start, end)


def detect_block(
    code: str,
    cursor_line: int,
    classifier: LineClassifier = DEFAULT_CLASSIFIER,
) -> Block | None:
    """Find the block enclosing ``cursor_line`` in a source string."""
    return find_enclosing_block(code.split("\n"), cursor_line, classifier)


def detect_blocks(
    lines: Sequence[str],
    classifier: LineClassifier = DEFAULT_CLASSIFIER,
) -> list[Block]:
    """Collect the outermost balanced blocks of a file, top to bottom.

    Unclosed openers are skipped and scanning resumes on the next line.

    Args:
        lines: Source lines.
        classifier: Opener/terminator table.

    Returns:
        Blocks in line order; nested blocks are not listed separately.

    """
    blocks: list[Block] = []
    index = 0
    while index < len(lines):
        if classifier.classify_opener(lines[index]) is not None:
            block = find_enclosing_block(lines, index, classifier)
            if block is not None:
                blocks.append(block)
                index = block.end_line + 1
                continue
        index += 1
    return blocks
