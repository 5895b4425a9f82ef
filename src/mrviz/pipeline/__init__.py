"""Pipeline modules.

- stages: split, map, shuffle, reduce (pure functions)
- processor: memoized pipeline run with stage contracts
- sequencer: stage state machine and auto-play timer
- session: application state binding input, module, processor, sequencer
"""

from mrviz.pipeline.processor import PipelineProcessor, PipelineResult, run_pipeline
from mrviz.pipeline.sequencer import AutoPlayTimer, SequencerState, StageSequencer
from mrviz.pipeline.session import SimulatorSession

__all__ = [
    "PipelineProcessor",
    "PipelineResult",
    "run_pipeline",
    "AutoPlayTimer",
    "SequencerState",
    "StageSequencer",
    "SimulatorSession",
]
