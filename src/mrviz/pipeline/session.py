"""Simulator session: the state a presentation layer binds to.

Ties the raw input text, the selected module, the memoizing pipeline
processor and the stage sequencer together, and applies the cross-cutting
rules (switching modules stops auto-play, choosing a preset rewinds to
INPUT, only the MAPREDUCE module plays).
"""

import logging
from pathlib import Path
from typing import Optional

from mrviz.catalog import PRESETS, get_preset
from mrviz.pipeline.processor import PipelineProcessor, PipelineResult
from mrviz.pipeline.sequencer import SequencerState, StageSequencer
from mrviz.types import Module, Stage

__all__ = ['SimulatorSession']

logger = logging.getLogger(__name__)


class SimulatorSession:
    """Application state for one simulator.

    The session owns its sequencer and processor explicitly; nothing is
    shared across sessions.

    Example usage::

        from mrviz.schemas import resolve_config, ParamConfig

        config = resolve_config(ParamConfig())
        with SimulatorSession.from_config(config) as session:
            session.next()
            session.visible_output   # split lines
            session.select_preset("sales-agg")
            session.stage            # Stage.INPUT again

    Parameters
    ----------
    text : str, optional
        Initial input text. Defaults to the first preset.
    module : Module or str, optional
        Initially selected module (default: MAPREDUCE).
    sequencer : StageSequencer, optional
        Sequencer to own. Created with default timing if None.
    """

    def __init__(self, text: Optional[str] = None, module=Module.MAPREDUCE,
                 sequencer: Optional[StageSequencer] = None):
        self.sequencer = sequencer or StageSequencer()
        self.processor = PipelineProcessor()
        self._module = Module(str(getattr(module, "value", module)).upper())
        self._text = text if text is not None else next(iter(PRESETS.values())).data

    @classmethod
    def from_config(cls, config, timer_factory=None) -> "SimulatorSession":
        """Build a session from an InternalConfig.

        Input precedence: ``input.text`` > ``input.file`` > ``input.preset``.

        Raises
        ------
        FileNotFoundError
            If ``input.file`` is set and does not exist.
        """
        if config.input.text is not None:
            text = config.input.text
            source = "inline text"
        elif config.input.file is not None:
            path = Path(config.input.file).expanduser()
            if not path.exists():
                raise FileNotFoundError(f"Input file not found: {path}")
            text = path.read_text(encoding="utf-8")
            source = str(path)
        else:
            text = get_preset(config.input.preset).data
            source = f"preset {config.input.preset}"

        logger.info("Session input: %s", source)
        sequencer = StageSequencer.from_config(config, timer_factory=timer_factory)
        return cls(text=text, module=config.module, sequencer=sequencer)

    # ------------------------------------------------------------------
    # Inputs from the presentation layer
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self._text

    @property
    def module(self) -> Module:
        return self._module

    @property
    def is_mapreduce(self) -> bool:
        return self._module is Module.MAPREDUCE

    def set_input_text(self, text: str) -> bool:
        """Replace the input text. Only the MAPREDUCE module accepts edits.

        Returns
        -------
        bool
            True if the text was replaced.
        """
        if not self.is_mapreduce:
            logger.warning("Input is read-only in module %s", self._module.value)
            return False
        self._text = text
        return True

    def select_preset(self, preset_id: str):
        """Load a preset's text and rewind the sequencer to INPUT.

        Raises
        ------
        KeyError
            If no preset has this id.
        """
        preset = get_preset(preset_id)
        self._text = preset.data
        self.sequencer.reset()
        logger.info("Preset selected: %s", preset.id)
        return preset

    def select_module(self, module) -> Module:
        """Switch module. Auto-play always stops."""
        module = Module(str(getattr(module, "value", module)).upper())
        self.sequencer.stop_autoplay()
        if module is not self._module:
            logger.info("Module: %s -> %s", self._module.value, module.value)
        self._module = module
        return module

    @property
    def active_preset(self):
        """The preset whose text is loaded, or None after manual edits."""
        for preset in PRESETS.values():
            if preset.data == self._text:
                return preset
        return None

    # ------------------------------------------------------------------
    # Outputs to the presentation layer
    # ------------------------------------------------------------------

    @property
    def result(self) -> PipelineResult:
        """Pipeline result for the current text (recomputed only on change)."""
        return self.processor.process(self._text)

    @property
    def stage(self) -> Stage:
        return self.sequencer.stage

    @property
    def is_playing(self) -> bool:
        return self.sequencer.is_playing

    def state(self) -> SequencerState:
        return self.sequencer.state()

    @property
    def visible_output(self):
        """Output of the stage currently on screen."""
        return self.result.stage_output(self.sequencer.stage)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> Stage:
        return self.sequencer.next()

    def previous(self) -> Stage:
        return self.sequencer.previous()

    def reset(self) -> Stage:
        return self.sequencer.reset()

    def jump_to(self, stage) -> Stage:
        return self.sequencer.jump_to(stage)

    def toggle_autoplay(self) -> bool:
        """Flip auto-play; only the MAPREDUCE module plays."""
        if not self.is_mapreduce and not self.sequencer.is_playing:
            logger.info("Auto-play is only available in module %s", Module.MAPREDUCE.value)
            return False
        return self.sequencer.toggle_autoplay()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.sequencer.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
