"""The four transformation stages: split, map, shuffle, reduce.

Every function here is pure. Each consumes the previous stage's output and
can be re-derived from the original text at any time; only the opaque
record ids differ between runs.
"""

import re
import sys
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Sequence, Tuple, Union

__all__ = [
    'Record',
    'Group',
    'LineMode',
    'split_lines',
    'classify_line',
    'parse_number',
    'map_lines',
    'shuffle_records',
    'reduce_groups',
    'sum_values',
]

Number = Union[int, float]

# Finite decimal literal: optional sign, digits with optional fraction, optional exponent.
_INT_RE = re.compile(r"[+-]?\d+")
_NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Only these end a line; form feeds, \x85 and \u2028 stay inside it.
LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:9]}"


@dataclass(frozen=True)
class Record:
    """One key/value pair flowing through map, shuffle and reduce.

    ``id`` identifies the record for renderers only. It takes no part in
    equality or ordering.
    """
    key: str
    value: Number
    id: str = field(default="", compare=False)


@dataclass(frozen=True)
class Group:
    """A key and every mapped record carrying it, in input order."""
    key: str
    records: Tuple[Record, ...]

    @property
    def values(self) -> Tuple[Number, ...]:
        return tuple(record.value for record in self.records)


class LineMode(str, Enum):
    """How the mapper reads one line."""
    WORDS = "words"
    KEY_VALUE = "key_value"


def split_lines(text: str) -> Tuple[str, ...]:
    """Split raw text into trimmed, non-blank lines, keeping their order.

    Lines end at ``\\n``, ``\\r\\n`` or ``\\r`` only.
    """
    return tuple(line.strip() for line in LINE_BREAK_RE.split(text) if line.strip())


def parse_number(token: str):
    """Parse a strict decimal literal, or return None.

    Integer literals become ``int``; anything with a fraction or exponent
    becomes ``float``. ``nan``, ``inf``, hex and underscore forms are not
    numbers here, and neither is any literal whose magnitude does not fit
    in a float.
    """
    if _INT_RE.fullmatch(token):
        try:
            value = int(token)
        except ValueError:
            # longer than the interpreter's int string conversion limit
            return None
        if abs(value) > sys.float_info.max:
            return None
        return value
    if _NUMBER_RE.fullmatch(token):
        value = float(token)
        # 1e999 overflows to inf
        if value in (float("inf"), float("-inf")):
            return None
        return value
    return None


def classify_line(line: str) -> Tuple[LineMode, List[str]]:
    """Decide the map mode of one line and return it with the line's tokens.

    A line is KEY_VALUE when it has at least two tokens and the last one is
    a number. A single numeric token ("42") is deliberately a word: the
    key/value reading needs a key in front of the number.
    """
    tokens = line.split()
    if len(tokens) >= 2 and parse_number(tokens[-1]) is not None:
        return LineMode.KEY_VALUE, tokens
    return LineMode.WORDS, tokens


def map_lines(lines: Iterable[str]) -> Tuple[Record, ...]:
    """Turn lines into records, choosing the mode for each line on its own.

    Key/value lines yield one record (``"North 100"`` -> North:100). Word
    lines yield one record of value 1 per token, repeats included.
    """
    mapped: List[Record] = []
    for line_idx, line in enumerate(lines):
        mode, tokens = classify_line(line)
        if mode is LineMode.KEY_VALUE:
            value = parse_number(tokens[-1])
            key = " ".join(tokens[:-1])
            mapped.append(Record(key, value, _new_id(f"map-{line_idx}-0")))
        else:
            for word_idx, word in enumerate(tokens):
                mapped.append(Record(word, 1, _new_id(f"map-{line_idx}-{word_idx}")))
    return tuple(mapped)


def shuffle_records(records: Iterable[Record]) -> Tuple[Group, ...]:
    """Group records by exact key and order the groups by key.

    Keys compare ordinally (Python string order), case-sensitive. Records
    keep their relative order inside each group.
    """
    buckets = {}
    for record in records:
        buckets.setdefault(record.key, []).append(record)
    return tuple(Group(key, tuple(buckets[key])) for key in sorted(buckets))


def reduce_groups(groups: Sequence[Group]) -> Tuple[Record, ...]:
    """Sum each group's values into one record, keeping group order."""
    return tuple(
        Record(group.key, sum_values(group.values), _new_id(f"reduce-{idx}"))
        for idx, group in enumerate(groups)
    )


def sum_values(values: Iterable[Number]) -> Number:
    """Sum numbers the way the reducer does.

    All-integer input sums exactly as ``int``. As soon as one value is a
    float, every value is converted first, so an integer total beyond the
    float range never has to be converted and the sum overflows to ``inf``
    instead of raising.
    """
    values = list(values)
    if any(isinstance(v, float) for v in values):
        return sum(float(v) for v in values)
    return sum(values)
