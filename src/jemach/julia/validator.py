"""Block balance validator for Julia source.

Runs a single forward pass through an explicit automaton that pushes
openers onto an open-block stack and pops it on terminators. Orphan
terminators and unclosed blocks are collected as SyntaxIssue values;
the validator never raises for malformed input.

Example:
    >>> from jemach.julia.validator import validate_syntax
    >>> report = validate_syntax("module M\\nx = 1")
    >>> report.valid
    False
    >>> report.errors[0].message
    'Unclosed module block opened at line 1'

"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from jemach.julia.classifier import DEFAULT_CLASSIFIER, LineClassifier
from jemach.julia.types import OpenBlock, SyntaxIssue, SyntaxReport

logger = logging.getLogger(__name__)

__all__ = [
    "ScanState",
    "BlockStackMachine",
    "validate_lines",
    "validate_syntax",
    "ORPHAN_TERMINATOR_MESSAGE",
]

ORPHAN_TERMINATOR_MESSAGE = "Unexpected 'end' without matching block opener"


class ScanState(Enum):
    """States of the validation automaton."""

    SCANNING = "scanning"
    FINISHED = "finished"


class BlockStackMachine:
    """Validation automaton with an open-block stack as side channel.

    Feed lines in order with feed(), then call finish() once to obtain
    the SyntaxReport. The stack is exposed read-only via ``stack`` so
    intermediate states can be inspected.
    """

    def __init__(self, classifier: LineClassifier = DEFAULT_CLASSIFIER) -> None:
        self._classifier = classifier
        self._stack: list[OpenBlock] = []
        self._errors: list[SyntaxIssue] = []
        self._pushes = 0
        self._pops = 0
        self.state = ScanState.SCANNING

    @property
    def stack(self) -> tuple[OpenBlock, ...]:
        """Currently open blocks, outermost first."""
        return tuple(self._stack)

    def feed(self, index: int, line: str) -> None:
        """Consume one line.

        Raises:
            RuntimeError: If called after finish().

        """
        if self.state is not ScanState.SCANNING:
            raise RuntimeError("BlockStackMachine already finished")

        delta = self._classifier.depth_delta(line)
        if delta > 0:
            self._stack.append(OpenBlock(kind=self._classifier.classify(line), line=index))
            self._pushes += 1
        elif delta < 0:
            if self._stack:
                self._stack.pop()
                self._pops += 1
            else:
                logger.debug("Orphan terminator at line %d", index)
                self._errors.append(SyntaxIssue(line=index, message=ORPHAN_TERMINATOR_MESSAGE))

    def finish(self) -> SyntaxReport:
        """Close the scan and report every block still open.

        Raises:
            RuntimeError: If called twice.

        """
        if self.state is not ScanState.SCANNING:
            raise RuntimeError("BlockStackMachine already finished")
        self.state = ScanState.FINISHED

        errors = list(self._errors)
        for block in self._stack:
            errors.append(
                SyntaxIssue(
                    line=block.line,
                    message=f"Unclosed {block.kind.value} block opened at line {block.line + 1}",
                )
            )
        return SyntaxReport(
            errors=errors,
            unclosed=list(self._stack),
            pushes=self._pushes,
            pops=self._pops,
        )


def validate_lines(
    lines: Iterable[str],
    classifier: LineClassifier = DEFAULT_CLASSIFIER,
) -> SyntaxReport:
    """Validate block balance of a line sequence."""
    machine = BlockStackMachine(classifier)
    for index, line in enumerate(lines):
        machine.feed(index, line)
    return machine.finish()


def validate_syntax(
    code: str,
    classifier: LineClassifier = DEFAULT_CLASSIFIER,
) -> SyntaxReport:
    """Validate block balance of Julia source text.

    Args:
        code: Source text; lines are split on "\\n".
        classifier: Opener/terminator table.

    Returns:
        SyntaxReport. An empty string is valid.

    """
    return validate_lines(code.split("\n"), classifier)
