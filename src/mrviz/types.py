"""Enumerations shared by the pipeline, the session, and the catalog."""

from enum import Enum

__all__ = ['Stage', 'STAGE_ORDER', 'Module']


class Stage(str, Enum):
    """Pipeline stages in display order.

    INPUT is the initial stage and OUTPUT the terminal one. Values are the
    canonical upper-case names so they serialize and parse cleanly.
    """
    INPUT = "INPUT"
    SPLIT = "SPLIT"
    MAP = "MAP"
    SHUFFLE = "SHUFFLE"
    REDUCE = "REDUCE"
    OUTPUT = "OUTPUT"

    @classmethod
    def parse(cls, value) -> "Stage":
        """Accept a Stage, its name in any case, or its 1-based position.

        Raises
        ------
        ValueError
            If ``value`` names no stage.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        if text.isdigit() and 1 <= int(text) <= len(STAGE_ORDER):
            return STAGE_ORDER[int(text) - 1]
        try:
            return cls(text.upper())
        except ValueError:
            raise ValueError(
                f"Unknown stage: {value!r} (expected one of {', '.join(s.value for s in cls)})"
            ) from None


STAGE_ORDER = tuple(Stage)


class Module(str, Enum):
    """Simulator modules. Only MAPREDUCE drives the pipeline."""
    HDFS = "HDFS"
    MAPREDUCE = "MAPREDUCE"
    YARN = "YARN"
    HBASE = "HBASE"
    HIVE = "HIVE"
