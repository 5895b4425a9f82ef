"""Root-level pytest fixtures for the mrviz test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture, plus a manual timer so sequencer tests never sleep.
"""

import pytest

from mrviz.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults."""
    return ParamConfig()


@pytest.fixture
def internal_config(param_config):
    """Fully validated runtime configuration (no overrides)."""
    return resolve_config(param_config, None, None)


@pytest.fixture
def make_config(param_config):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs.

    Examples
    --------
    >>> def test_custom_interval(make_config):
    ...     config = make_config(autoplay_interval_sec=1)
    ...     assert config.sequencer.autoplay_interval_sec == 1.0
    """
    def _make(**user_overrides):
        """Create InternalConfig with user overrides."""
        if user_overrides:
            user = UserConfig(**user_overrides)
            return resolve_config(param_config, user, None)
        else:
            return resolve_config(param_config, None, None)

    return _make


# =============================================================================
# Timer Fixtures
# =============================================================================

class ManualTimer:
    """Stand-in for AutoPlayTimer that ticks only when the test says so."""

    def __init__(self, interval, on_tick):
        self.interval = interval
        self._on_tick = on_tick
        self.started = False
        self.stopped = False
        self.finished = False
        self.joins = 0

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def join(self, timeout=None):
        self.joins += 1

    def is_alive(self):
        return self.started and not (self.stopped or self.finished)

    def fire(self, force=False):
        """Deliver one tick, as the timer thread would after an interval.

        A stopped or finished timer delivers nothing unless ``force`` is set,
        which simulates a tick already in flight when the timer was cancelled.
        """
        if not force and not self.is_alive():
            return False
        keep_going = self._on_tick(self)
        if not keep_going:
            self.finished = True
        return keep_going


@pytest.fixture
def manual_timers():
    """Timer factory for StageSequencer; created timers are in ``.created``."""
    created = []

    def factory(interval, on_tick):
        timer = ManualTimer(interval, on_tick)
        created.append(timer)
        return timer

    factory.created = created
    return factory


# =============================================================================
# Filesystem Fixtures
# =============================================================================

@pytest.fixture
def temp_dir(tmp_path):
    """Temporary directory as a Path."""
    return tmp_path
