"""Core simulator execution logic.

This module contains the actual terminal runner, separated from argument
parsing. Scripts are thin wrappers; this is the real implementation.
"""

import sys
import json
import logging
import argparse
import importlib.util
from pathlib import Path
from typing import Optional, Dict, Any, Iterable

from mrviz.catalog import PRESETS
from mrviz.pipeline.session import SimulatorSession
from mrviz.schemas import resolve_config, ParamConfig, UserConfig, CLIConfig, InternalConfig
from mrviz.types import Module
from mrviz.visualization.text import render_session, render_stage

__all__ = ['run_simulation', 'build_config', 'setup_logging', 'main']

logger = logging.getLogger(__name__)

HELP = """Commands:
  n, next            advance one stage
  p, prev            go back one stage
  r, reset           back to INPUT, stop auto-play
  j, jump STAGE      jump to a stage (name or 1-6), stop auto-play
  a, auto            toggle auto-play
  t, text TEXT       replace the input (use \\n between lines)
  s, show            show the current stage
  preset ID          load a preset (%s)
  module NAME        switch module (%s)
  h, help            this text
  q, quit            leave"""


def load_user_config_dict(config_path: str) -> dict:
    """Load user config dict from Python file.

    Returns the raw dict before Pydantic validation.

    Parameters
    ----------
    config_path : str
        Path to user config Python file containing CONFIG dict.

    Returns
    -------
    dict
        Raw user configuration dictionary.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If no CONFIG dict found in file.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    spec = importlib.util.spec_from_file_location("config_module", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Could not load config module from {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    # Find CONFIG dict
    for name in dir(module):
        if name.startswith('CONFIG'):
            obj = getattr(module, name)
            if isinstance(obj, dict):
                return obj

    raise ValueError(f"No CONFIG dict found in {path}")


def setup_logging(config: InternalConfig) -> None:
    """Configure the root logger from config.

    Replaces existing handlers with a console handler and, when
    ``logging.log_file`` is set, a file handler.
    """
    log_level = getattr(logging, config.logging.level.upper(), logging.INFO)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # Clear existing handlers and add new ones
    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    if config.logging.log_file:
        log_path = Path(config.logging.log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

    # Console handler (stderr, so frames on stdout stay clean)
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    root.addHandler(ch)

    logger.debug("Logging: level=%s, file=%s", config.logging.level, config.logging.log_file)


def build_config(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
) -> InternalConfig:
    """Resolve configuration (Param < User < CLI).

    Parameters
    ----------
    user_config_path : str, optional
        Python file with a CONFIG dict. Skipped if None.
    cli_args : dict, optional
        CLIConfig fields. None values are ignored.
    verbose : bool, optional
        Force DEBUG logging.
    """
    param_cfg = ParamConfig()  # Expert defaults

    if user_config_path:
        user_cfg = UserConfig.model_validate(load_user_config_dict(user_config_path))
    else:
        user_cfg = UserConfig()

    cli_args = dict(cli_args or {})
    if verbose and cli_args.get("log_level") is None:
        cli_args["log_level"] = "DEBUG"

    # Filter None values
    cli_dict = {k: v for k, v in cli_args.items() if v is not None}
    cli_cfg = CLIConfig.model_validate(cli_dict) if cli_dict else CLIConfig()

    return resolve_config(param_cfg, user_cfg, cli_cfg)


def _play_steps(session: SimulatorSession, max_rows: int) -> None:
    print(render_session(session, max_rows=max_rows))
    while not session.state().at_end:
        session.next()
        print()
        print(render_session(session, max_rows=max_rows))


def _play_auto(session: SimulatorSession, max_rows: int) -> None:
    def show(state):
        print()
        print(render_stage(state.stage, session.result, max_rows=max_rows, playing=state.playing))

    print(render_session(session, max_rows=max_rows))
    session.sequencer.add_listener(show)
    timer = session.sequencer.start_autoplay()
    try:
        while timer is not None and timer.is_alive():
            timer.join(timeout=0.5)
    except KeyboardInterrupt:
        logger.info("Interrupted (Ctrl+C)")
    finally:
        session.sequencer.remove_listener(show)
        session.close()


def _play_interactive(session: SimulatorSession, max_rows: int,
                      commands: Optional[Iterable[str]] = None) -> None:
    def show(state):
        print()
        print(render_stage(state.stage, session.result, max_rows=max_rows, playing=state.playing))

    def prompt_lines():
        while True:
            try:
                yield input("mrviz> ")
            except EOFError:
                return

    help_text = HELP % (", ".join(PRESETS), ", ".join(m.value for m in Module))
    print(render_session(session, max_rows=max_rows))
    print(help_text)

    # Every sequencer change (manual or auto-play tick) prints through the listener.
    session.sequencer.add_listener(show)
    commands = prompt_lines() if commands is None else commands
    try:
        for raw in commands:
            parts = raw.strip().split(maxsplit=1)
            if not parts:
                continue
            cmd, arg = parts[0].lower(), (parts[1] if len(parts) > 1 else "")

            if cmd in ("q", "quit", "exit"):
                break
            if cmd in ("h", "help", "?"):
                print(help_text)
                continue

            before = session.state()
            try:
                if cmd in ("n", "next"):
                    session.next()
                elif cmd in ("p", "prev", "previous"):
                    session.previous()
                elif cmd in ("r", "reset"):
                    session.reset()
                elif cmd in ("j", "jump"):
                    session.jump_to(arg)
                elif cmd in ("a", "auto", "play"):
                    session.toggle_autoplay()
                elif cmd in ("t", "text"):
                    if not session.set_input_text(arg.replace("\\n", "\n")):
                        print(f"Input is read-only in module {session.module.value}")
                        continue
                elif cmd == "preset":
                    session.select_preset(arg)
                elif cmd == "module":
                    session.select_module(arg)
                elif cmd not in ("s", "show"):
                    print(f"Unknown command: {cmd!r} (h for help)")
                    continue
            except (KeyError, ValueError) as e:
                print(f"Error: {e}")
                continue

            if cmd in ("s", "show", "module") or session.state() == before:
                print(render_session(session, max_rows=max_rows))
    except KeyboardInterrupt:
        logger.info("Interrupted (Ctrl+C)")
    finally:
        session.sequencer.remove_listener(show)
        session.close()


def run_simulation(
    user_config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    verbose: bool = False,
    commands: Optional[Iterable[str]] = None,
    timer_factory=None,
) -> SimulatorSession:
    """Run the simulator in the terminal.

    This is the core execution function. It:
    1. Loads and resolves configuration (Param < User < CLI)
    2. Configures logging
    3. Builds a SimulatorSession
    4. Plays the stages in the configured playback mode
       ("step", "autoplay", or "interactive")

    Parameters
    ----------
    user_config_path : str, optional
        Path to user config file (Python file with CONFIG dict).

    cli_args : dict, optional
        CLI argument overrides. Keys: module, preset, input_text,
        input_file, playback, autoplay, autoplay_interval_sec, log_level.

    verbose : bool, optional
        If True, enable DEBUG logging and print full resolved config.

    commands : iterable of str, optional
        Interactive commands to run instead of reading stdin.

    timer_factory : callable, optional
        Passed to the sequencer (testing).

    Returns
    -------
    SimulatorSession
        The closed session, for inspection.

    Raises
    ------
    FileNotFoundError
        If the config or input file does not exist.
    ValueError
        If configuration validation fails.

    Examples
    --------
    Step through the sales preset::

        run_simulation(cli_args={"preset": "sales-agg"})

    Auto-play a file, one stage per second::

        run_simulation(cli_args={"input_file": "words.txt",
                                 "playback": "autoplay",
                                 "autoplay_interval_sec": 1})
    """
    config = build_config(user_config_path, cli_args, verbose)
    setup_logging(config)

    session = SimulatorSession.from_config(config, timer_factory=timer_factory)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('=' * 60)

    playback = config.cli.playback
    if config.sequencer.autoplay and playback == "step":
        playback = "autoplay"
    logger.info("Playback: %s, module: %s", playback, session.module.value)

    max_rows = config.cli.max_rows
    if not session.is_mapreduce and playback != "interactive":
        print(render_session(session, max_rows=max_rows))
        session.close()
    elif playback == "autoplay":
        _play_auto(session, max_rows)
    elif playback == "interactive":
        _play_interactive(session, max_rows, commands)
    else:
        _play_steps(session, max_rows)
        session.close()

    return session


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Step through a MapReduce job in the terminal")
    parser.add_argument("config", nargs="?", help="Path to user config file (Python, CONFIG dict)")
    parser.add_argument("--preset", choices=sorted(PRESETS), help="Load a preset input")
    parser.add_argument("--input-file", help="Read input text from a file")
    parser.add_argument("--text", dest="input_text", help="Input text (use \\n between lines)")
    parser.add_argument("--module", choices=[m.value for m in Module], type=str.upper,
                        help="Module to show")
    playback = parser.add_mutually_exclusive_group()
    playback.add_argument("--step", dest="playback", action="store_const", const="step",
                          help="Print every stage in order (default)")
    playback.add_argument("--autoplay", dest="playback", action="store_const", const="autoplay",
                          help="Advance one stage per interval")
    playback.add_argument("--interactive", dest="playback", action="store_const", const="interactive",
                          help="Read navigation commands from stdin")
    parser.add_argument("--interval", dest="autoplay_interval_sec", type=float,
                        help="Seconds between auto-play ticks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    input_text = args.input_text
    if input_text is not None:
        input_text = input_text.replace("\\n", "\n")

    cli_args = {
        "preset": args.preset,
        "input_file": args.input_file,
        "input_text": input_text,
        "module": args.module,
        "playback": args.playback,
        "autoplay_interval_sec": args.autoplay_interval_sec,
    }

    try:
        run_simulation(args.config, cli_args=cli_args, verbose=args.verbose)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
