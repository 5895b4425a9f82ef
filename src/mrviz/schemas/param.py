"""ParamConfig: Expert defaults for the mrviz simulator.

This module defines the complete default configuration. ALL simulator
parameters must have defaults here. No runtime code should define fallback
values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator
from mrviz.schemas.base import MrvizBaseModel


ModuleName = Literal["HDFS", "MAPREDUCE", "YARN", "HBASE", "HIVE"]
PlaybackMode = Literal["step", "autoplay", "interactive"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Nested Configuration Models
# =============================================================================

class InputConfig(MrvizBaseModel):
    """Where the raw input text comes from.

    ``text`` wins over ``file``, which wins over ``preset``.
    """
    preset: str = "word-count"
    text: Optional[str] = None
    file: Optional[str] = None


class SequencerConfig(MrvizBaseModel):
    """Stage sequencer and auto-play timing."""
    autoplay_interval_sec: float = Field(2.5, gt=0, description="Seconds between auto-play ticks")
    autoplay: bool = False

    @field_validator("autoplay_interval_sec", mode="before")
    @classmethod
    def coerce_interval_to_float(cls, v):
        """Allow int or float for the interval."""
        return float(v)


class CliRuntimeConfig(MrvizBaseModel):
    """Terminal playback settings."""
    playback: PlaybackMode = "step"
    max_rows: int = Field(50, ge=1, description="Rows shown per stage table")


class LoggingConfig(MrvizBaseModel):
    """Logging configuration."""
    level: LogLevel = "INFO"
    log_file: Optional[str] = None


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(MrvizBaseModel):
    """Complete expert configuration with all defaults.

    This is the single source of truth for all simulator parameters.
    Every tunable parameter MUST have a default here.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)

    Runtime code only sees InternalConfig.
    """

    module: ModuleName = "MAPREDUCE"
    input: InputConfig = Field(default_factory=InputConfig)
    sequencer: SequencerConfig = Field(default_factory=SequencerConfig)
    cli: CliRuntimeConfig = Field(default_factory=CliRuntimeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
