"""Reduce stage contract.

Enforces the guarantee that reduction emits one summed record per group,
in group order.
"""

from typing import Sequence

from mrviz.contracts.base import require


def _expected_total(values):
    # Mixed int/float groups add as floats; int-only groups add exactly.
    if any(isinstance(v, float) for v in values):
        return sum(float(v) for v in values)
    return sum(values)


def assert_reduced(groups: Sequence, reduced: Sequence) -> None:
    """Enforce reduce stage contract.

    Parameters
    ----------
    groups : sequence of Group
        Input given to reduce_groups()

    reduced : sequence of Record
        Output of reduce_groups()

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    require(
        len(reduced) == len(groups),
        f"Reduce contract violated: {len(reduced)} records for {len(groups)} groups"
    )

    for group, record in zip(groups, reduced):
        require(
            record.key == group.key,
            f"Reduce contract violated: expected key {group.key!r}, got {record.key!r}"
        )
        expected = _expected_total([r.value for r in group.records])
        require(
            record.value == expected,
            f"Reduce contract violated: {record.key!r} sums to {record.value!r}, expected {expected!r}"
        )

    ids = [record.id for record in reduced]
    require(
        len(set(ids)) == len(ids),
        "Reduce contract violated: record ids are not unique"
    )
