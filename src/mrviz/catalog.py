"""Static catalog: sample inputs, stage descriptions, module descriptions.

Nothing here is computed. The session reads presets from ``PRESETS`` and
renderers read titles and descriptions from ``STAGE_INFO`` and
``MODULE_INFO``.
"""

from dataclasses import dataclass
from typing import Dict

from mrviz.types import Module, Stage

__all__ = ['Preset', 'PRESETS', 'STAGE_INFO', 'MODULE_INFO', 'get_preset']


@dataclass(frozen=True)
class Preset:
    """A named sample input."""
    id: str
    name: str
    description: str
    data: str


@dataclass(frozen=True)
class Info:
    title: str
    desc: str


PRESETS: Dict[str, Preset] = {
    "word-count": Preset(
        id="word-count",
        name="Word Count",
        description='The "Hello World" of batch processing. Counts how often each word appears.',
        data="Apple Banana Apple\nBanana Cherry Apple\nCherry Date Date",
    ),
    "sales-agg": Preset(
        id="sales-agg",
        name="Sales Aggregation",
        description="Totals sales figures per region.",
        data="North 100\nSouth 200\nNorth 150\nEast 300\nSouth 50",
    ),
}

STAGE_INFO: Dict[Stage, Info] = {
    Stage.INPUT: Info(
        "Input Data",
        "Raw data ingestion. In a real cluster, this is typically a large file stored in HDFS.",
    ),
    Stage.SPLIT: Info(
        "Splitting",
        "Input data is split into fixed-size blocks (InputSplits) for parallel processing.",
    ),
    Stage.MAP: Info(
        "Mapping",
        "Mappers parse data and emit <Key, Value> pairs.",
    ),
    Stage.SHUFFLE: Info(
        "Shuffling",
        "System sorts and groups the Mapper outputs by Key, transferring them to Reducers.",
    ),
    Stage.REDUCE: Info(
        "Reducing",
        "Reducers aggregate the list of values for each unique Key.",
    ),
    Stage.OUTPUT: Info(
        "Final Output",
        "The processed results are written back to the storage system (e.g., HDFS).",
    ),
}

MODULE_INFO: Dict[Module, Info] = {
    Module.HDFS: Info(
        "HDFS (Hadoop Distributed File System)",
        "Distributed file system that splits large files into blocks and stores "
        "replicas across several nodes for fault tolerance.",
    ),
    Module.MAPREDUCE: Info(
        "MapReduce",
        "Distributed computing framework. Processes large data sets in a Map "
        "phase and a Reduce phase.",
    ),
    Module.YARN: Info(
        "YARN (Yet Another Resource Negotiator)",
        "Resource management layer. Schedules cluster resources and allocates "
        "them to the applications running on the cluster.",
    ),
    Module.HBASE: Info(
        "HBase",
        "Distributed, column-oriented NoSQL database built on HDFS for random, "
        "real-time reads and writes over very large tables.",
    ),
    Module.HIVE: Info(
        "Hive",
        "Data warehouse tool that maps structured files to tables and answers "
        "SQL queries by compiling them into batch jobs.",
    ),
}


def get_preset(preset_id: str) -> Preset:
    """Look up a preset by id.

    Raises
    ------
    KeyError
        If no preset has this id.
    """
    try:
        return PRESETS[preset_id]
    except KeyError:
        raise KeyError(f"Unknown preset: {preset_id!r} (known: {', '.join(PRESETS)})") from None
