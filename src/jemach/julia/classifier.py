"""Line classifier for Julia block openers and terminators.

Classification is purely lexical: each line is stripped and tested
against an ordered table of opener rules. The first matching rule wins,
so more specific rules (``mutable struct``) must precede the rules whose
keyword they contain (``struct``).

The table is an explicit LineClassifier value so callers and tests can
inspect it or extend it with additional block kinds without touching
the matcher, validator or formatter.

Example:
    >>> from jemach.julia.classifier import classify_opener, is_terminator
    >>> classify_opener("mutable struct Point")
    <BlockKind.MUTABLE_STRUCT: 'mutable_struct'>
    >>> is_terminator("end,")
    True

"""

from __future__ import annotations

import re
from dataclasses import dataclass

from jemach.julia.types import BlockKind

__all__ = [
    "OpenerRule",
    "LineClassifier",
    "DEFAULT_CLASSIFIER",
    "DEFAULT_OPENER_RULES",
    "TERMINATOR_PATTERN",
    "classify_opener",
    "is_terminator",
    "is_single_line_block",
]

# `end` alone, `end` + separator (anything may follow), or `end  # comment`
TERMINATOR_PATTERN = re.compile(r"end(?:\s*[,;].*|\s+#.*)?")

# Opener that closes itself on the same line: `if x; y; end`
_TRAILING_END = re.compile(r"(?:;|\s)end\s*;?\Z")


def _with_argument(keyword: str) -> re.Pattern[str]:
    """Keyword followed by whitespace and at least one more token."""
    return re.compile(rf"{keyword}\s+\S")


def _whole_line(keyword: str) -> re.Pattern[str]:
    """Keyword with nothing else on the line."""
    return re.compile(rf"{keyword}\Z")


@dataclass(frozen=True, slots=True)
class OpenerRule:
    """A single opener rule: a kind and the pattern the stripped line must start with."""

    kind: BlockKind
    pattern: re.Pattern[str]

    def matches(self, stripped: str) -> bool:
        return self.pattern.match(stripped) is not None


DEFAULT_OPENER_RULES: tuple[OpenerRule, ...] = (
    OpenerRule(BlockKind.FUNCTION, _with_argument("function")),
    OpenerRule(BlockKind.MACRO, _with_argument("macro")),
    OpenerRule(BlockKind.MODULE, _with_argument("module")),
    OpenerRule(BlockKind.MUTABLE_STRUCT, _with_argument(r"mutable\s+struct")),
    OpenerRule(BlockKind.STRUCT, _with_argument("struct")),
    OpenerRule(BlockKind.BEGIN, _whole_line("begin")),
    OpenerRule(BlockKind.QUOTE, _whole_line("quote")),
    OpenerRule(BlockKind.LET, _with_argument("let")),
    OpenerRule(BlockKind.FOR, _with_argument("for")),
    OpenerRule(BlockKind.WHILE, _with_argument("while")),
    OpenerRule(BlockKind.IF, _with_argument("if")),
    OpenerRule(BlockKind.TRY, _whole_line("try")),
)


@dataclass(frozen=True, slots=True)
class LineClassifier:
    """Ordered opener table plus terminator pattern.

    Attributes:
        rules: Opener rules in priority order (first match wins).
        terminator: Pattern the whole stripped line must match to close a block.

    """

    rules: tuple[OpenerRule, ...] = DEFAULT_OPENER_RULES
    terminator: re.Pattern[str] = TERMINATOR_PATTERN

    def classify(self, line: str) -> BlockKind:
        """Return the opener kind of a line, or BlockKind.UNKNOWN."""
        stripped = line.strip()
        for rule in self.rules:
            if rule.matches(stripped):
                return rule.kind
        return BlockKind.UNKNOWN

    def classify_opener(self, line: str) -> BlockKind | None:
        """Return the opener kind of a line, or None if it opens nothing."""
        kind = self.classify(line)
        return None if kind is BlockKind.UNKNOWN else kind

    def is_terminator(self, line: str) -> bool:
        """Return True if the stripped line closes the innermost block."""
        return self.terminator.fullmatch(line.strip()) is not None

    def is_single_line_block(self, line: str) -> bool:
        """Return True for an opener closed on its own line (``if x; y; end``)."""
        if self.classify_opener(line) is None:
            return False
        return _TRAILING_END.search(line.strip()) is not None

    def depth_delta(self, line: str) -> int:
        """Effect of a line on nesting depth: +1 opener, -1 terminator, else 0.

        Single-line blocks are depth-neutral.
        """
        if self.is_terminator(line):
            return -1
        if self.classify_opener(line) is not None and not self.is_single_line_block(line):
            return 1
        return 0

    def extend(self, *rules: OpenerRule) -> LineClassifier:
        """Return a new classifier with ``rules`` tried before the existing ones."""
        return LineClassifier(rules=(*rules, *self.rules), terminator=self.terminator)

    @property
    def kinds(self) -> tuple[BlockKind, ...]:
        """Opener kinds in priority order."""
        return tuple(rule.kind for rule in self.rules)


DEFAULT_CLASSIFIER = LineClassifier()


def classify_opener(line: str, classifier: LineClassifier = DEFAULT_CLASSIFIER) -> BlockKind | None:
    """Return the block kind a line opens, or None.

    Args:
        line: Raw source line (leading/trailing whitespace ignored).
        classifier: Opener table to use.

    Returns:
        The first matching BlockKind in priority order, or None.

    """
    return classifier.classify_opener(line)


def is_terminator(line: str, classifier: LineClassifier = DEFAULT_CLASSIFIER) -> bool:
    """Return True if the line is a block terminator (``end``, ``end,``, ``end;``)."""
    return classifier.is_terminator(line)


def is_single_line_block(line: str, classifier: LineClassifier = DEFAULT_CLASSIFIER) -> bool:
    """Return True if the line opens and closes a block by itself."""
    return classifier.is_single_line_block(line)
