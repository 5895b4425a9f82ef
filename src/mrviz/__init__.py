"""`mrviz` - a step-by-step MapReduce simulator.

Subpackages:
- pipeline: Stages, processor, sequencer, session
- contracts: Stage invariants
- schemas: Configuration
- visualization: Text rendering
- cli: Terminal runner
"""

__version__ = "0.1.0"
