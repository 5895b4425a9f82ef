"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that simulator code depends on.

All .get() calls, fallback defaults, and validation logic are FORBIDDEN in
runtime code - everything is explicit here.
"""

from typing import Literal, Optional
from pydantic import Field, ConfigDict
from mrviz.schemas.base import MrvizBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalInputConfig(MrvizBaseModel):
    """Runtime input configuration.

    Note: at most one of text/file is used; text wins. The preset is always
    a known catalog id (validated in resolve_config()).
    """
    preset: str
    text: Optional[str]
    file: Optional[str]


class InternalSequencerConfig(MrvizBaseModel):
    """Runtime sequencer configuration."""
    autoplay_interval_sec: float = Field(gt=0)
    autoplay: bool


class InternalCliRuntimeConfig(MrvizBaseModel):
    """Runtime terminal playback configuration."""
    playback: Literal["step", "autoplay", "interactive"]
    max_rows: int = Field(ge=1)


class InternalLoggingConfig(MrvizBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    log_file: Optional[str]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(MrvizBaseModel):
    """Authoritative runtime configuration.

    This is the ONLY configuration schema that simulator code sees.
    It is fully validated, immutable, and contains explicit values for
    all parameters.

    Usage
    -----
    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.interval = config.sequencer.autoplay_interval_sec  # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO type checking
    - NO validation

    All of that happens during config resolution, not in runtime code.
    """

    module: Literal["HDFS", "MAPREDUCE", "YARN", "HBASE", "HIVE"]
    input: InternalInputConfig
    sequencer: InternalSequencerConfig
    cli: InternalCliRuntimeConfig
    logging: InternalLoggingConfig

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )
