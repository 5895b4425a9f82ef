"""CLIConfig: Command-line operational overrides.

Minimal configuration for operational parameters that commonly change
between runs: input source, playback mode, auto-play interval, verbosity.

This schema handles command-line arguments parsed by argparse.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator, model_validator
from mrviz.schemas.base import MrvizBaseModel


class CLIConfig(MrvizBaseModel):
    """Command-line configuration overrides.

    Operational-only settings that override user and param configs.
    Highest priority in config resolution.

    Notes
    -----
    If ``autoplay`` is requested but no playback mode is given, playback is
    set to "autoplay" (schema responsibility, not runtime).

    Usage
    -----
        cli_cfg = CLIConfig(preset="sales-agg", playback="interactive")

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    module: Optional[str] = None
    preset: Optional[str] = None
    input_text: Optional[str] = None
    input_file: Optional[str] = None
    playback: Optional[Literal["step", "autoplay", "interactive"]] = None
    autoplay: Optional[bool] = None
    autoplay_interval_sec: Optional[float] = Field(None, gt=0)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    @field_validator("module", mode="before")
    @classmethod
    def normalize_module_name(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @model_validator(mode="after")
    def infer_playback_from_autoplay(self):
        """If auto-play is requested without a playback mode, play automatically."""
        if self.playback is None and self.autoplay:
            self.playback = "autoplay"

        return self

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.module is not None:
            overrides["module"] = self.module

        input_overrides = {}
        if self.preset is not None:
            input_overrides["preset"] = self.preset
            # An explicit preset on the command line replaces file/text input
            input_overrides["text"] = None
            input_overrides["file"] = None
        if self.input_file is not None:
            input_overrides["file"] = self.input_file
        if self.input_text is not None:
            input_overrides["text"] = self.input_text

        if input_overrides:
            overrides["input"] = input_overrides

        sequencer_overrides = {}
        if self.autoplay is not None:
            sequencer_overrides["autoplay"] = self.autoplay
        if self.autoplay_interval_sec is not None:
            sequencer_overrides["autoplay_interval_sec"] = self.autoplay_interval_sec
        if sequencer_overrides:
            overrides["sequencer"] = sequencer_overrides

        if self.playback is not None:
            overrides["cli"] = {"playback": self.playback}

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
