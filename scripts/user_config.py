"""mrviz User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the simulator. Defaults live in src/mrviz/schemas/param.py

Usage:
    python scripts/run_simulator.py scripts/user_config.py
    python scripts/run_simulator.py scripts/user_config.py --preset sales-agg
    python scripts/run_simulator.py scripts/user_config.py --interactive
"""

CONFIG = {
    # ========================================================================
    # MODULE & INPUT
    # ========================================================================
    "MODULE": "MAPREDUCE",    # HDFS, MAPREDUCE, YARN, HBASE or HIVE
    "PRESET": "word-count",   # "word-count" or "sales-agg"
    "INPUT_TEXT": None,       # Inline text; wins over INPUT_FILE and PRESET
    "INPUT_FILE": None,       # Path to a text file; wins over PRESET

    # ========================================================================
    # PLAYBACK
    # ========================================================================
    "PLAYBACK": "step",       # "step", "autoplay" or "interactive"
    "AUTOPLAY_INTERVAL_SEC": 2.5,  # Seconds between auto-play ticks
    "MAX_ROWS": 50,           # Rows shown per stage table

    # ========================================================================
    # LOGGING
    # ========================================================================
    "LOG_LEVEL": "INFO",
    "LOG_FILE": None,         # e.g. "logs/mrviz.log"
}
