"""Command-line interface modules for the mrviz simulator.

This package contains core execution logic, making scripts/ optional and deletable.
"""

from mrviz.cli.run_simulation import run_simulation

__all__ = ['run_simulation']
