"""Tests for the block balance validator."""

import pytest

from jemach.julia.types import BlockKind, OpenBlock
from jemach.julia.validator import (
    ORPHAN_TERMINATOR_MESSAGE,
    BlockStackMachine,
    ScanState,
    validate_lines,
    validate_syntax,
)


class TestValidateSyntax:
    """Tests for validate_syntax() / validate_lines()."""

    def test_empty_input_is_valid(self) -> None:
        report = validate_syntax("")
        assert report.valid
        assert report.errors == []

    def test_nested_balanced(self) -> None:
        report = validate_lines(["if a", "for b", "end", "end"])
        assert report.valid
        assert report.errors == []
        assert report.unclosed == []

    def test_orphan_terminator(self) -> None:
        report = validate_lines(["end"])
        assert not report.valid
        assert len(report.errors) == 1
        assert report.errors[0].line == 0
        assert report.errors[0].message == ORPHAN_TERMINATOR_MESSAGE

    def test_unclosed_block(self) -> None:
        report = validate_lines(["module M", "x = 1"])
        assert not report.valid
        assert len(report.errors) == 1
        assert report.errors[0].line == 0
        assert "Unclosed module block" in report.errors[0].message
        assert report.unclosed == [OpenBlock(BlockKind.MODULE, 0)]

    def test_scan_continues_after_orphan(self) -> None:
        report = validate_lines(["end", "if a", "x", "end", "end"])
        assert [e.line for e in report.errors] == [0, 4]
        assert all(e.message == ORPHAN_TERMINATOR_MESSAGE for e in report.errors)

    def test_unclosed_reported_outermost_first(self) -> None:
        report = validate_lines(["module M", "function f()", "if x", "end"])
        assert [e.line for e in report.errors] == [0, 1]
        assert "module" in report.errors[0].message
        assert "function" in report.errors[1].message
        assert [b.kind for b in report.unclosed] == [BlockKind.MODULE, BlockKind.FUNCTION]

    def test_orphans_before_unclosed(self) -> None:
        report = validate_lines(["end", "struct S"])
        assert [e.line for e in report.errors] == [0, 1]
        assert report.errors[0].message == ORPHAN_TERMINATOR_MESSAGE
        assert "Unclosed struct block opened at line 2" == report.errors[1].message

    def test_mutable_struct_label(self) -> None:
        report = validate_lines(["mutable struct Foo", "x::Int"])
        assert "mutable_struct" in report.errors[0].message

    def test_single_line_blocks_are_balanced(self) -> None:
        report = validate_syntax("if x; y; end\nfunction f(x) x + 1 end")
        assert report.valid
        assert report.pushes == 0

    def test_separator_terminators(self) -> None:
        code = "let x = 1\n    x\nend;\nbegin\n    y\nend, 2"
        assert validate_syntax(code).valid

    def test_realistic_file(self) -> None:
        code = """module Geometry

export Point, norm2

struct Point
    x::Float64
    y::Float64
end

function norm2(p::Point)
    s = 0.0
    for v in (p.x, p.y)
        s += v^2
    end
    return sqrt(s)
end

end
"""
        assert validate_syntax(code).valid


class TestValidatorCounters:
    """Push/pop counters match opener/terminator counts."""

    @pytest.mark.parametrize(
        ("lines", "pushes", "pops"),
        [
            (["if a", "end"], 1, 1),
            (["end", "end", "if a"], 1, 0),
            (["if a", "if b", "end", "end", "end"], 2, 2),
            (["begin", "try", "x"], 2, 0),
        ],
    )
    def test_counts(self, lines: list[str], pushes: int, pops: int) -> None:
        report = validate_lines(lines)
        assert report.pushes == pushes
        assert report.pops == pops


class TestBlockStackMachine:
    """Tests for the explicit automaton."""

    def test_stack_is_observable(self) -> None:
        machine = BlockStackMachine()
        machine.feed(0, "function f()")
        machine.feed(1, "    while true")
        assert machine.stack == (
            OpenBlock(BlockKind.FUNCTION, 0),
            OpenBlock(BlockKind.WHILE, 1),
        )
        machine.feed(2, "    end")
        assert machine.stack == (OpenBlock(BlockKind.FUNCTION, 0),)

    def test_state_transitions(self) -> None:
        machine = BlockStackMachine()
        assert machine.state is ScanState.SCANNING
        machine.finish()
        assert machine.state is ScanState.FINISHED

    def test_feed_after_finish_raises(self) -> None:
        machine = BlockStackMachine()
        machine.finish()
        with pytest.raises(RuntimeError):
            machine.feed(0, "end")
        with pytest.raises(RuntimeError):
            machine.finish()

    def test_report_to_dict(self) -> None:
        report = validate_lines(["module M"])
        assert report.to_dict() == {
            "valid": False,
            "errors": [{"line": 0, "message": "Unclosed module block opened at line 1"}],
            "unclosed": [{"kind": "module", "line": 0}],
        }
