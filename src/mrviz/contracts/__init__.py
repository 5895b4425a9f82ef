"""Pipeline contracts: fail-fast enforcement of stage invariants.

This package enforces semantic guarantees between pipeline stages.
Contracts fail immediately and loudly when pipeline stages don't produce
their promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate pipeline correctness
- Heuristics absorb odd input text
"""

from mrviz.contracts.failure import ContractViolation
from mrviz.contracts.base import require
from mrviz.contracts.split import assert_split
from mrviz.contracts.mapping import assert_mapped
from mrviz.contracts.shuffle import assert_shuffled
from mrviz.contracts.reduce import assert_reduced

__all__ = [
    "ContractViolation",
    "require",
    "assert_split",
    "assert_mapped",
    "assert_shuffled",
    "assert_reduced",
]
