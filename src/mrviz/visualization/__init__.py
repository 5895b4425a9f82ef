"""Visualization modules.

- text: terminal rendering of stages and modules
"""

from mrviz.visualization.text import render_session, render_stage, render_stepper

__all__ = ["render_session", "render_stage", "render_stepper"]
