"""Tests for StageSequencer navigation and auto-play."""

import threading

import pytest

from mrviz.pipeline.sequencer import AutoPlayTimer, StageSequencer
from mrviz.types import Stage, STAGE_ORDER

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


@pytest.fixture
def sequencer(manual_timers):
    seq = StageSequencer(interval=2.5, timer_factory=manual_timers)
    yield seq
    seq.close()


class TestNavigation:
    """next / previous / jump_to / reset."""

    def test_starts_at_input(self, sequencer):
        state = sequencer.state()
        assert state.stage is Stage.INPUT
        assert state.at_start
        assert not state.playing

    def test_next_walks_every_stage_then_stops(self, sequencer):
        visited = [sequencer.next() for _ in range(5)]
        assert visited == list(STAGE_ORDER[1:])
        assert sequencer.state().at_end
        assert sequencer.next() is Stage.OUTPUT
        assert sequencer.next() is Stage.OUTPUT

    def test_previous_at_input_is_noop(self, sequencer):
        assert sequencer.previous() is Stage.INPUT

    def test_previous_steps_back(self, sequencer):
        sequencer.jump_to(Stage.REDUCE)
        assert sequencer.previous() is Stage.SHUFFLE

    def test_jump_accepts_names_and_numbers(self, sequencer):
        assert sequencer.jump_to("map") is Stage.MAP
        assert sequencer.jump_to("6") is Stage.OUTPUT
        assert sequencer.jump_to(Stage.SPLIT) is Stage.SPLIT

    def test_jump_unknown_stage(self, sequencer):
        with pytest.raises(ValueError, match="Unknown stage"):
            sequencer.jump_to("sort")
        assert sequencer.stage is Stage.INPUT

    def test_reset(self, sequencer):
        sequencer.jump_to(Stage.REDUCE)
        assert sequencer.reset() is Stage.INPUT

    def test_interval_must_be_positive(self):
        with pytest.raises(ValueError):
            StageSequencer(interval=0)

    def test_from_config(self, make_config, manual_timers):
        config = make_config(autoplay_interval_sec=1)
        seq = StageSequencer.from_config(config, timer_factory=manual_timers)
        assert seq.interval == 1.0


class TestAutoPlay:
    """Timer-driven advancing, driven by ManualTimer ticks."""

    def test_toggle_starts_and_stops(self, sequencer, manual_timers):
        assert sequencer.toggle_autoplay() is True
        assert sequencer.is_playing
        assert len(manual_timers.created) == 1
        timer = manual_timers.created[0]
        assert timer.started
        assert timer.interval == 2.5

        assert sequencer.toggle_autoplay() is False
        assert timer.stopped
        assert timer.joins == 1

    def test_start_is_idempotent(self, sequencer, manual_timers):
        first = sequencer.start_autoplay()
        assert sequencer.start_autoplay() is first
        assert len(manual_timers.created) == 1

    def test_ticks_advance_to_output_then_stop(self, sequencer, manual_timers):
        timer = sequencer.start_autoplay()
        for expected in STAGE_ORDER[1:-1]:
            assert timer.fire() is True
            assert sequencer.stage is expected
            assert sequencer.is_playing

        assert timer.fire() is False
        state = sequencer.state()
        assert state.stage is Stage.OUTPUT
        assert not state.playing
        assert sequencer.timer is None

    def test_autoplay_from_midway(self, sequencer):
        sequencer.jump_to(Stage.SHUFFLE)
        timer = sequencer.start_autoplay()
        timer.fire()
        assert sequencer.stage is Stage.REDUCE
        timer.fire()
        assert sequencer.stage is Stage.OUTPUT
        assert not sequencer.is_playing

    def test_tick_already_at_output_clears_flag(self, sequencer):
        sequencer.jump_to(Stage.REDUCE)
        timer = sequencer.start_autoplay()
        sequencer.next()
        assert sequencer.stage is Stage.OUTPUT
        assert sequencer.is_playing

        seen = []
        sequencer.add_listener(seen.append)
        assert timer.fire() is False
        state = sequencer.state()
        assert state.stage is Stage.OUTPUT
        assert not state.playing
        assert not sequencer.is_playing
        assert len(seen) == 1
        assert seen[0].stage is Stage.OUTPUT
        assert not seen[0].playing

    def test_toggle_after_finished_autoplay_does_not_restart(self, sequencer, manual_timers):
        timer = sequencer.start_autoplay()
        while timer.fire():
            pass
        assert sequencer.toggle_autoplay() is False
        assert len(manual_timers.created) == 1

    def test_toggle_notifies_once_per_flip(self, sequencer):
        seen = []
        sequencer.add_listener(seen.append)
        sequencer.toggle_autoplay()
        sequencer.toggle_autoplay()
        assert [s.playing for s in seen] == [True, False]

    def test_toggle_at_output_is_noop(self, sequencer, manual_timers):
        sequencer.jump_to(Stage.OUTPUT)
        assert sequencer.toggle_autoplay() is False
        assert sequencer.start_autoplay() is None
        assert manual_timers.created == []

    def test_manual_next_keeps_playing(self, sequencer):
        sequencer.start_autoplay()
        sequencer.next()
        assert sequencer.is_playing
        sequencer.previous()
        assert sequencer.is_playing

    def test_jump_cancels_autoplay(self, sequencer):
        timer = sequencer.start_autoplay()
        sequencer.jump_to(Stage.MAP)
        assert not sequencer.is_playing
        assert timer.stopped

    def test_reset_cancels_autoplay(self, sequencer):
        timer = sequencer.start_autoplay()
        timer.fire()
        sequencer.reset()
        assert sequencer.state().stage is Stage.INPUT
        assert not sequencer.is_playing

    def test_stale_tick_dropped(self, sequencer):
        timer = sequencer.start_autoplay()
        sequencer.reset()
        assert timer.fire(force=True) is False
        assert sequencer.stage is Stage.INPUT
        assert not sequencer.is_playing

    def test_stale_tick_from_replaced_timer(self, sequencer, manual_timers):
        old = sequencer.start_autoplay()
        sequencer.stop_autoplay()
        new = sequencer.start_autoplay()
        assert new is not old
        old.fire(force=True)
        assert sequencer.stage is Stage.INPUT
        new.fire()
        assert sequencer.stage is Stage.SPLIT

    def test_stop_when_idle(self, sequencer):
        assert sequencer.stop_autoplay() is False

    def test_close_stops_timer(self, manual_timers):
        with StageSequencer(timer_factory=manual_timers) as seq:
            timer = seq.start_autoplay()
        assert timer.stopped
        assert not seq.is_playing


class TestListeners:
    """State notifications."""

    def test_listener_sees_changes(self, sequencer):
        seen = []
        sequencer.add_listener(seen.append)
        sequencer.next()
        sequencer.next()
        sequencer.previous()
        assert [s.stage for s in seen] == [Stage.SPLIT, Stage.MAP, Stage.SPLIT]

    def test_no_notification_without_change(self, sequencer):
        seen = []
        sequencer.add_listener(seen.append)
        sequencer.previous()
        sequencer.reset()
        assert seen == []

    def test_autoplay_notifications(self, sequencer):
        seen = []
        sequencer.add_listener(seen.append)
        timer = sequencer.start_autoplay()
        while timer.fire():
            pass
        assert seen[0].playing and seen[0].stage is Stage.INPUT
        assert seen[-1].stage is Stage.OUTPUT
        assert not seen[-1].playing

    def test_failing_listener_does_not_break_sequencer(self, sequencer):
        def boom(state):
            raise RuntimeError("listener failure")

        seen = []
        sequencer.add_listener(boom)
        sequencer.add_listener(seen.append)
        assert sequencer.next() is Stage.SPLIT
        assert len(seen) == 1

    def test_remove_listener(self, sequencer):
        seen = []
        callback = sequencer.add_listener(seen.append)
        sequencer.remove_listener(callback)
        sequencer.remove_listener(callback)
        sequencer.next()
        assert seen == []


class TestAutoPlayTimer:
    """Real timer thread."""

    def test_real_autoplay_reaches_output(self):
        seq = StageSequencer(interval=0.01)
        timer = seq.start_autoplay()
        assert isinstance(timer, AutoPlayTimer)
        timer.join(timeout=5)
        assert not timer.is_alive()
        state = seq.state()
        assert state.stage is Stage.OUTPUT
        assert not state.playing

    def test_stop_interrupts_wait(self):
        ticks = []
        timer = AutoPlayTimer(60, lambda t: ticks.append(t) or True)
        timer.start()
        timer.stop()
        timer.join(timeout=5)
        assert not timer.is_alive()
        assert timer.stopped()
        assert ticks == []

    def test_stop_from_other_thread(self):
        seq = StageSequencer(interval=60)
        seq.start_autoplay()
        worker = threading.Thread(target=seq.stop_autoplay)
        worker.start()
        worker.join(timeout=5)
        assert not seq.is_playing
        assert seq.stage is Stage.INPUT
