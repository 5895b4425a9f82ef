"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases
for common naming patterns (e.g., PRESET → preset, MODULE → module).

UserConfig is intentionally minimal - users only specify what they want
to override from the expert defaults. Validation is lenient to accept
both uppercase and lowercase keys, integers where floats are expected, etc.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from mrviz.schemas.base import MrvizBaseModel


class UserInputConfig(MrvizBaseModel):
    """User-facing input config."""
    preset: Optional[str] = None
    text: Optional[str] = None
    file: Optional[str] = None


class UserSequencerConfig(MrvizBaseModel):
    """User-facing sequencer config."""
    autoplay_interval_sec: Optional[float] = None
    autoplay: Optional[bool] = None

    @field_validator("autoplay_interval_sec", mode="before")
    @classmethod
    def coerce_interval(cls, v):
        """Accept int or float for the interval."""
        if v is not None:
            return float(v)
        return v


class UserConfig(MrvizBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify
    what they want to override from ParamConfig defaults.

    This config is converted to internal overrides during resolution.

    Usage
    -----
        user_cfg = UserConfig(
            preset="sales-agg",
            autoplay_interval_sec=1,
            playback="autoplay",
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Module and input
    module: Optional[str] = Field(None, alias="MODULE")
    preset: Optional[str] = Field(None, alias="PRESET")
    input_text: Optional[str] = Field(None, alias="INPUT_TEXT")
    input_file: Optional[str] = Field(None, alias="INPUT_FILE")

    # Playback
    autoplay: Optional[bool] = Field(None, alias="AUTOPLAY")
    autoplay_interval_sec: Optional[float] = Field(None, alias="AUTOPLAY_INTERVAL_SEC")
    playback: Optional[Literal["step", "autoplay", "interactive"]] = Field(None, alias="PLAYBACK")
    max_rows: Optional[int] = Field(None, alias="MAX_ROWS")

    # Logging
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(None, alias="LOG_LEVEL")
    log_file: Optional[str] = Field(None, alias="LOG_FILE")

    # Nested overrides (advanced users)
    input: Optional[UserInputConfig] = None
    sequencer: Optional[UserSequencerConfig] = None

    model_config = MrvizBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("module", mode="before")
    @classmethod
    def normalize_module_name(cls, v):
        """Normalize module names to upper case."""
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper().strip()
        return v

    @field_validator("autoplay_interval_sec", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for numeric fields."""
        if v is not None:
            return float(v)
        return v

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides = {}

        if self.module is not None:
            overrides["module"] = self.module

        # Input section
        input_cfg = {}
        if self.preset is not None:
            input_cfg["preset"] = self.preset
        if self.input_text is not None:
            input_cfg["text"] = self.input_text
        if self.input_file is not None:
            input_cfg["file"] = self.input_file

        # Merge with explicit input config
        if self.input is not None:
            input_cfg.update(self.input.model_dump(exclude_none=True))

        if input_cfg:
            overrides["input"] = input_cfg

        # Sequencer section
        sequencer = {}
        if self.autoplay is not None:
            sequencer["autoplay"] = self.autoplay
        if self.autoplay_interval_sec is not None:
            sequencer["autoplay_interval_sec"] = self.autoplay_interval_sec

        if self.sequencer is not None:
            sequencer.update(self.sequencer.model_dump(exclude_none=True))

        if sequencer:
            overrides["sequencer"] = sequencer

        # CLI runtime section
        cli = {}
        if self.playback is not None:
            cli["playback"] = self.playback
        if self.max_rows is not None:
            cli["max_rows"] = self.max_rows
        if cli:
            overrides["cli"] = cli

        # Logging section
        logging_cfg = {}
        if self.log_level is not None:
            logging_cfg["level"] = self.log_level
        if self.log_file is not None:
            logging_cfg["log_file"] = self.log_file
        if logging_cfg:
            overrides["logging"] = logging_cfg

        return overrides
