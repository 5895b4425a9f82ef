"""Shuffle stage contract.

Enforces the guarantee that after shuffling, groups are unique, sorted by
key, non-empty, and together hold exactly the mapped records.
"""

from typing import Sequence

from mrviz.contracts.base import require


def assert_shuffled(records: Sequence, groups: Sequence) -> None:
    """Enforce shuffle stage contract.

    Parameters
    ----------
    records : sequence of Record
        Input given to shuffle_records()

    groups : sequence of Group
        Output of shuffle_records()

    Raises
    ------
    ContractViolation
        If any invariant is violated
    """
    keys = [group.key for group in groups]

    require(
        all(a < b for a, b in zip(keys, keys[1:])),
        "Shuffle contract violated: group keys are not strictly ascending"
    )
    require(
        set(keys) == {record.key for record in records},
        "Shuffle contract violated: group keys differ from mapped keys"
    )

    for group in groups:
        require(
            len(group.records) > 0,
            f"Shuffle contract violated: group {group.key!r} is empty"
        )
        require(
            all(record.key == group.key for record in group.records),
            f"Shuffle contract violated: group {group.key!r} holds a foreign key"
        )

    total = sum(len(group.records) for group in groups)
    require(
        total == len(records),
        f"Shuffle contract violated: {total} grouped records, expected {len(records)}"
    )
