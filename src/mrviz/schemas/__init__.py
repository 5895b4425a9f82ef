"""Pydantic configuration schemas for the mrviz simulator.

This module provides strictly typed configuration models for the
simulator. All configuration validation, coercion, and normalization
happens at schema validation time via Pydantic.

Exports
-------
resolve_config : function
    Single entrypoint for configuration resolution
InternalConfig : class
    Fully validated, authoritative runtime configuration
ParamConfig : class
    Expert defaults (complete)
UserConfig : class
    User-facing configuration (forgiving, minimal)
CLIConfig : class
    Command-line operational overrides
"""

from mrviz.schemas.resolve import resolve_config
from mrviz.schemas.internal import InternalConfig
from mrviz.schemas.param import ParamConfig
from mrviz.schemas.user import UserConfig
from mrviz.schemas.cli import CLIConfig

__all__ = [
    'resolve_config',
    'InternalConfig',
    'ParamConfig',
    'UserConfig',
    'CLIConfig',
]
