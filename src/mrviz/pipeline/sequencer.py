"""Stage sequencer: which pipeline stage is on screen, and auto-play.

A finite state machine over INPUT → SPLIT → MAP → SHUFFLE → REDUCE → OUTPUT
with manual navigation and an optional timer thread that advances one stage
per interval until OUTPUT is reached.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from mrviz.types import Stage, STAGE_ORDER

__all__ = ['AutoPlayTimer', 'SequencerState', 'StageSequencer']

logger = logging.getLogger(__name__)

_LAST = len(STAGE_ORDER) - 1


class AutoPlayTimer(threading.Thread):
    """Periodic tick source for auto-play.

    Calls ``on_tick(timer)`` every ``interval`` seconds until the callback
    returns False or stop() is called. Waiting happens on the stop event,
    so stop() takes effect immediately instead of after the current
    interval.

    Example usage (typically created by StageSequencer)::

        timer = AutoPlayTimer(2.5, sequencer_tick)
        timer.start()
        ...
        timer.stop()
        timer.join(timeout=5)
    """

    def __init__(self, interval: float, on_tick: Callable[["AutoPlayTimer"], bool],
                 name: str = "AutoPlayTimer"):
        super().__init__(name=name, daemon=True)
        self.interval = interval
        self._on_tick = on_tick
        self._stop_event = threading.Event()

    def stop(self):
        """Signal the timer to stop. Safe to call more than once."""
        self._stop_event.set()

    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self):
        """Tick loop (runs in thread). Do not call directly."""
        logger.debug("%s started (interval=%.2fs)", self.name, self.interval)
        while not self._stop_event.wait(self.interval):
            if not self._on_tick(self):
                break
        logger.debug("%s stopped", self.name)


@dataclass(frozen=True)
class SequencerState:
    """Snapshot of the sequencer, read in one locked step."""
    stage: Stage
    index: int
    playing: bool

    @property
    def at_start(self) -> bool:
        return self.index == 0

    @property
    def at_end(self) -> bool:
        return self.index == _LAST


class StageSequencer:
    """Owns the current stage and the auto-play timer.

    Transitions:

    - ``next()`` / ``previous()``: one step; no-op at either end. They do
      not stop auto-play.
    - ``jump_to(stage)`` / ``reset()``: go anywhere / back to INPUT; both
      cancel auto-play.
    - ``toggle_autoplay()``: start or stop the timer. Starting at OUTPUT
      does nothing.

    Manual calls and timer ticks serialize through one lock, so the stage
    and the playing flag always change together. At most one timer exists
    per sequencer; ticks from a cancelled timer are dropped. The tick that
    lands on OUTPUT also turns auto-play off, and the timer thread ends.

    Listeners registered with add_listener() receive a SequencerState after
    every change. They run outside the lock, on whichever thread made the
    change (the timer thread for auto-play ticks).

    Parameters
    ----------
    interval : float, optional
        Seconds between auto-play ticks (default: 2.5).
    timer_factory : callable, optional
        ``factory(interval, on_tick) -> timer`` where the timer has
        ``start()``, ``stop()``, ``join(timeout)`` and ``is_alive()``.
        Defaults to AutoPlayTimer. Allows injection for testing.
    """

    def __init__(self, interval: float = 2.5, timer_factory=None):
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = float(interval)
        self._timer_factory = timer_factory or AutoPlayTimer
        self._lock = threading.RLock()
        self._index = 0
        self._timer = None
        self._listeners: List[Callable[[SequencerState], None]] = []

    @classmethod
    def from_config(cls, config, timer_factory=None) -> "StageSequencer":
        """Build a sequencer from an InternalConfig."""
        return cls(interval=config.sequencer.autoplay_interval_sec, timer_factory=timer_factory)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def state(self) -> SequencerState:
        with self._lock:
            return self._snapshot()

    @property
    def stage(self) -> Stage:
        with self._lock:
            return STAGE_ORDER[self._index]

    @property
    def is_playing(self) -> bool:
        with self._lock:
            return self._timer is not None

    @property
    def timer(self):
        """The active auto-play timer, or None."""
        with self._lock:
            return self._timer

    def _snapshot(self) -> SequencerState:
        return SequencerState(STAGE_ORDER[self._index], self._index, self._timer is not None)

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, callback: Callable[[SequencerState], None]):
        """Register ``callback(state)`` for every change. Returns the callback."""
        with self._lock:
            self._listeners.append(callback)
        return callback

    def remove_listener(self, callback) -> None:
        with self._lock:
            if callback in self._listeners:
                self._listeners.remove(callback)

    def _notify(self, state: SequencerState) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for callback in listeners:
            try:
                callback(state)
            except Exception:
                logger.exception("Sequencer listener failed on %s", state.stage.value)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def next(self) -> Stage:
        """Advance one stage; stays put at OUTPUT."""
        return self._step(+1)

    def previous(self) -> Stage:
        """Go back one stage; stays put at INPUT."""
        return self._step(-1)

    def _step(self, delta: int) -> Stage:
        with self._lock:
            target = min(max(self._index + delta, 0), _LAST)
            changed = target != self._index
            self._index = target
            state = self._snapshot()
        if changed:
            logger.debug("Stage -> %s", state.stage.value)
            self._notify(state)
        return state.stage

    def jump_to(self, stage) -> Stage:
        """Go straight to ``stage`` (a Stage or its name) and cancel auto-play.

        Raises
        ------
        ValueError
            If ``stage`` names no stage.
        """
        stage = Stage.parse(stage)
        with self._lock:
            timer = self._detach_timer()
            target = STAGE_ORDER.index(stage)
            changed = target != self._index or timer is not None
            self._index = target
            state = self._snapshot()
        self._release(timer)
        if changed:
            logger.debug("Stage -> %s (jump)", state.stage.value)
            self._notify(state)
        return state.stage

    def reset(self) -> Stage:
        """Back to INPUT, auto-play off."""
        return self.jump_to(Stage.INPUT)

    # ------------------------------------------------------------------
    # Auto-play
    # ------------------------------------------------------------------

    def start_autoplay(self):
        """Start auto-play and return the timer handle.

        Idempotent: while already playing, returns the running timer
        without creating another. Returns None at OUTPUT, where there is
        nothing left to play.
        """
        with self._lock:
            if self._timer is not None:
                return self._timer
            timer = self._start_timer()
            state = self._snapshot()
        if timer is not None:
            self._started(state)
        return timer

    def stop_autoplay(self) -> bool:
        """Stop auto-play. Safe to call when not playing.

        Returns
        -------
        bool
            True if a running timer was stopped.
        """
        with self._lock:
            timer = self._detach_timer()
            state = self._snapshot()
        if timer is None:
            return False
        self._stopped(timer, state)
        return True

    def toggle_autoplay(self) -> bool:
        """Flip auto-play. Returns whether auto-play is now on.

        The playing check and the start or stop happen in one locked step,
        so a tick finishing auto-play concurrently cannot turn a stop into
        a fresh start.
        """
        with self._lock:
            stopped = self._detach_timer()
            started = self._start_timer() if stopped is None else None
            state = self._snapshot()
        if stopped is not None:
            self._stopped(stopped, state)
        elif started is not None:
            self._started(state)
        return state.playing

    def _start_timer(self):
        # Caller holds the lock and has checked that no timer is running.
        if self._index == _LAST:
            logger.debug("Auto-play not started: already at %s", Stage.OUTPUT.value)
            return None
        timer = self._timer_factory(self.interval, self._tick)
        self._timer = timer
        timer.start()
        return timer

    def _started(self, state: SequencerState) -> None:
        logger.info("Auto-play started at %s (every %.2fs)", state.stage.value, self.interval)
        self._notify(state)

    def _stopped(self, timer, state: SequencerState) -> None:
        self._release(timer)
        logger.info("Auto-play stopped at %s", state.stage.value)
        self._notify(state)

    def _tick(self, timer) -> bool:
        """Advance one stage for ``timer``. Returns False when the timer should end."""
        with self._lock:
            if timer is not self._timer:
                return False
            if self._index < _LAST:
                self._index += 1
            keep_going = self._index < _LAST
            if not keep_going:
                self._timer = None
            state = self._snapshot()
        logger.debug("Stage -> %s (auto-play)", state.stage.value)
        if not keep_going:
            logger.info("Auto-play finished at %s", state.stage.value)
        self._notify(state)
        return keep_going

    def _detach_timer(self):
        # Caller holds the lock.
        timer, self._timer = self._timer, None
        return timer

    def _release(self, timer) -> None:
        """Stop and join a detached timer. Called without the lock held."""
        if timer is None:
            return
        timer.stop()
        if timer is threading.current_thread():
            return
        timer.join(timeout=5)
        if timer.is_alive():
            logger.warning("Auto-play timer did not stop cleanly")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the timer. Call when the owner goes away."""
        self.stop_autoplay()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False
