"""Plain-text rendering of the simulator for terminals.

Turns a session (or a stage plus a PipelineResult) into a printable frame:
a stepper line, the stage title and description, and the stage's output as
a pandas table.
"""

import pandas as pd

from mrviz.catalog import MODULE_INFO, STAGE_INFO
from mrviz.pipeline.processor import PipelineResult
from mrviz.types import Module, Stage, STAGE_ORDER

__all__ = ['render_stepper', 'render_stage', 'render_module', 'render_session']


RULE = "=" * 60


def render_stepper(current: Stage, playing: bool = False) -> str:
    """One-line stepper, e.g. ``1. Input Data > [2. Splitting] > 3. Mapping ...``."""
    current = Stage.parse(current)
    parts = []
    for idx, stage in enumerate(STAGE_ORDER, start=1):
        label = f"{idx}. {STAGE_INFO[stage].title}"
        parts.append(f"[{label}]" if stage is current else label)
    line = " > ".join(parts)
    return f"{line}  (playing)" if playing else line


def _table(frame: pd.DataFrame, max_rows: int) -> str:
    if frame.empty:
        return "(empty)"
    return frame.to_string(index=False, max_rows=max_rows)


def _body(stage: Stage, result: PipelineResult, max_rows: int) -> str:
    if stage is Stage.INPUT:
        return result.text if result.text.strip() else "(no input)"

    if stage is Stage.SPLIT:
        frame = pd.DataFrame(
            {"block": [f"Split Block #{i}" for i in range(1, len(result.lines) + 1)],
             "line": list(result.lines)}
        )
        return _table(frame, max_rows)

    if stage is Stage.MAP:
        return _table(result.mapped_frame[["key", "value"]], max_rows)

    if stage is Stage.SHUFFLE:
        return _table(result.groups_frame, max_rows)

    table = _table(result.reduced_frame[["key", "value"]], max_rows)
    if stage is Stage.OUTPUT:
        return f"{table}\n\nEnd of Demo"
    return table


def render_stage(stage, result: PipelineResult, max_rows: int = 50, playing: bool = False) -> str:
    """Render one stage of ``result`` as a text frame."""
    stage = Stage.parse(stage)
    info = STAGE_INFO[stage]
    return "\n".join([
        RULE,
        render_stepper(stage, playing),
        RULE,
        info.title,
        info.desc,
        "",
        _body(stage, result, max_rows),
    ])


def render_module(module: Module) -> str:
    info = MODULE_INFO[Module(module)]
    return "\n".join([RULE, info.title, RULE, info.desc])


def render_session(session, max_rows: int = 50) -> str:
    """Render whatever the session currently shows."""
    if not session.is_mapreduce:
        return render_module(session.module)
    state = session.state()
    return render_stage(state.stage, session.result, max_rows=max_rows, playing=state.playing)
