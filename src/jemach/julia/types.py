"""Core data types for Julia block analysis.

Defines BlockKind, Block, and the validator result types used by the
classifier, matcher, validator and formatter. All values are created
fresh per call and never shared between invocations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BlockKind(str, Enum):
    """Kinds of Julia block openers recognized by the classifier.

    UNKNOWN means "no recognized opener". It is a valid classification
    result, not an error.
    """

    FUNCTION = "function"
    MACRO = "macro"
    MODULE = "module"
    STRUCT = "struct"
    MUTABLE_STRUCT = "mutable_struct"
    BEGIN = "begin"
    QUOTE = "quote"
    LET = "let"
    FOR = "for"
    WHILE = "while"
    IF = "if"
    TRY = "try"
    UNKNOWN = "unknown"


@dataclass(frozen=True, slots=True)
class Block:
    """A block of Julia source delimited by an opener and its terminator.

    Attributes:
        kind: Kind of the opener line.
        start_line: 0-indexed inclusive opener line.
        end_line: 0-indexed inclusive terminator line.
        content: Original text of lines [start_line, end_line] joined with "\\n".

    """

    kind: BlockKind
    start_line: int
    end_line: int
    content: str

    def __post_init__(self) -> None:
        if self.start_line > self.end_line:
            raise ValueError(
                f"start_line ({self.start_line}) must not exceed end_line ({self.end_line})"
            )

    @property
    def line_count(self) -> int:
        """Number of source lines covered by the block."""
        return self.end_line - self.start_line + 1

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "kind": self.kind.value,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "content": self.content,
        }


@dataclass(frozen=True, slots=True)
class OpenBlock:
    """An entry of the validator's open-block stack."""

    kind: BlockKind
    line: int


@dataclass(frozen=True, slots=True)
class SyntaxIssue:
    """A structural imbalance found by the validator.

    Attributes:
        line: 0-indexed line the issue refers to.
        message: Human-readable description.

    """

    line: int
    message: str


@dataclass
class SyntaxReport:
    """Result of a validation pass.

    Attributes:
        errors: Orphan terminators (line order), then unclosed blocks
            (outermost first).
        unclosed: Open-block stack left at end of input, outermost first.
        pushes: Number of openers pushed during the scan.
        pops: Number of successful pops during the scan.

    """

    errors: list[SyntaxIssue] = field(default_factory=list)
    unclosed: list[OpenBlock] = field(default_factory=list)
    pushes: int = 0
    pops: int = 0

    @property
    def valid(self) -> bool:
        """True iff no errors were found."""
        return not self.errors

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation."""
        return {
            "valid": self.valid,
            "errors": [{"line": e.line, "message": e.message} for e in self.errors],
            "unclosed": [{"kind": b.kind.value, "line": b.line} for b in self.unclosed],
        }


@dataclass(frozen=True, slots=True)
class Variable:
    """A top-level assignment target found in Julia source."""

    name: str
    line: int
