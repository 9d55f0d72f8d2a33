"""Assignment target extraction for Julia source."""

from __future__ import annotations

import re

from jemach.julia.types import Variable

# `name = value`, but not `name == value` or `name => value`
_ASSIGNMENT = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_!]*)\s*=(?![=>])")


def extract_variables(code: str) -> list[Variable]:
    """Return simple assignment targets with their 0-indexed line.

    Args:
        code: Julia source text.

    Returns:
        Variables in line order (repeated assignments are repeated).

    """
    variables: list[Variable] = []
    for index, line in enumerate(code.split("\n")):
        match = _ASSIGNMENT.match(line)
        if match:
            variables.append(Variable(name=match.group(1), line=index))
    return variables
