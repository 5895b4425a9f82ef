"""Split stage contract.

Enforces the guarantee that after splitting, every line is trimmed and
non-blank, and no input line was lost or invented.
"""

import re
from typing import Sequence

from mrviz.contracts.base import require

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def assert_split(text: str, lines: Sequence[str]) -> None:
    """Enforce split stage contract.

    Parameters
    ----------
    text : str
        Raw input text given to the splitter

    lines : sequence of str
        Output of split_lines()

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    for i, line in enumerate(lines):
        require(
            isinstance(line, str) and line != "",
            f"Split contract violated: line {i} is empty"
        )
        require(
            line == line.strip(),
            f"Split contract violated: line {i} is not trimmed ({line!r})"
        )

    expected = sum(1 for raw in _LINE_BREAK_RE.split(text) if raw.strip())
    require(
        len(lines) == expected,
        f"Split contract violated: {len(lines)} lines emitted, expected {expected}"
    )
