"""Map stage contract.

Enforces the guarantee that after mapping, every record has a non-empty
key, a finite numeric value, and a unique id.
"""

import math
import sys
from numbers import Real
from typing import Sequence

from mrviz.contracts.base import require


def _fits_float(value) -> bool:
    if isinstance(value, int):
        return abs(value) <= sys.float_info.max
    return math.isfinite(value)


def assert_mapped(records: Sequence) -> None:
    """Enforce map stage contract.

    Parameters
    ----------
    records : sequence of Record
        Output of map_lines()

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    for i, record in enumerate(records):
        require(
            isinstance(record.key, str) and record.key != "",
            f"Map contract violated: record {i} has an empty key"
        )
        require(
            isinstance(record.value, Real) and not isinstance(record.value, bool),
            f"Map contract violated: record {i} value {record.value!r} is not numeric"
        )
        require(
            _fits_float(record.value),
            f"Map contract violated: record {i} value {record.value!r} is not a finite float-range number"
        )

    ids = [record.id for record in records]
    require(
        len(set(ids)) == len(ids),
        "Map contract violated: record ids are not unique"
    )
