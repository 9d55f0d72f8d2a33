"""Lexical Julia block analysis.

Line-level heuristics only: no tokenizer, grammar or AST. Strings,
comments and macros are not interpreted.

Public API:
    classify_opener / is_terminator: Line Classifier
    find_enclosing_block / detect_block / detect_blocks: Boundary Finder
    validate_syntax / validate_lines: Syntax Validator
    format_code / format_lines: Reformatter
    extract_variables: assignment targets
"""

from jemach.julia.classifier import (
    DEFAULT_CLASSIFIER,
    LineClassifier,
    OpenerRule,
    classify_opener,
    is_single_line_block,
    is_terminator,
)
from jemach.julia.formatter import format_code, format_lines
from jemach.julia.matcher import detect_block, detect_blocks, find_enclosing_block
from jemach.julia.types import Block, BlockKind, OpenBlock, SyntaxIssue, SyntaxReport, Variable
from jemach.julia.validator import BlockStackMachine, ScanState, validate_lines, validate_syntax
from jemach.julia.variables import extract_variables

__all__ = [
    "DEFAULT_CLASSIFIER",
    "Block",
    "BlockKind",
    "BlockStackMachine",
    "LineClassifier",
    "OpenBlock",
    "OpenerRule",
    "ScanState",
    "SyntaxIssue",
    "SyntaxReport",
    "Variable",
    "classify_opener",
    "detect_block",
    "detect_blocks",
    "extract_variables",
    "find_enclosing_block",
    "format_code",
    "format_lines",
    "is_single_line_block",
    "is_terminator",
    "validate_lines",
    "validate_syntax",
]
