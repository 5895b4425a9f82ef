#!/usr/bin/env python3
"""``mrviz`` MapReduce Simulator Runner.

Usage:
    python scripts/run_simulator.py
    python scripts/run_simulator.py scripts/user_config.py
    python scripts/run_simulator.py scripts/user_config.py --preset sales-agg --autoplay
    python scripts/run_simulator.py --input-file words.txt --interactive

Note: User config in scripts/user_config.py, expert defaults in src/mrviz/schemas/param.py
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from mrviz.cli.run_simulation import main


if __name__ == "__main__":
    sys.exit(main())
