"""Tests for SimulatorSession."""

import pytest

from mrviz.catalog import PRESETS, get_preset
from mrviz.pipeline.session import SimulatorSession
from mrviz.pipeline.sequencer import StageSequencer
from mrviz.types import Module, Stage

pytestmark = [pytest.mark.unit, pytest.mark.pipeline]


@pytest.fixture
def session(manual_timers):
    s = SimulatorSession(sequencer=StageSequencer(timer_factory=manual_timers))
    yield s
    s.close()


class TestSessionInputs:
    """Text, preset and module handling."""

    def test_defaults(self, session):
        assert session.text == next(iter(PRESETS.values())).data
        assert session.module is Module.MAPREDUCE
        assert session.active_preset.id == "word-count"
        assert session.stage is Stage.INPUT

    def test_set_input_text(self, session):
        assert session.set_input_text("x y x") is True
        assert session.active_preset is None
        assert session.result.pairs("reduce") == (("x", 2), ("y", 1))

    def test_set_input_text_does_not_move_stage(self, session):
        session.jump_to(Stage.MAP)
        session.set_input_text("a")
        assert session.stage is Stage.MAP
        assert session.result.pairs("map") == (("a", 1),)

    def test_select_preset_rewinds(self, session):
        session.jump_to(Stage.REDUCE)
        preset = session.select_preset("sales-agg")
        assert preset.id == "sales-agg"
        assert session.stage is Stage.INPUT
        assert session.text == get_preset("sales-agg").data

    def test_select_preset_stops_autoplay(self, session):
        session.toggle_autoplay()
        session.select_preset("sales-agg")
        assert not session.is_playing

    def test_unknown_preset(self, session):
        with pytest.raises(KeyError, match="Unknown preset"):
            session.select_preset("nope")

    def test_select_module_stops_autoplay(self, session):
        session.toggle_autoplay()
        assert session.select_module("hdfs") is Module.HDFS
        assert not session.is_playing
        assert not session.is_mapreduce

    def test_unknown_module(self, session):
        with pytest.raises(ValueError):
            session.select_module("spark")

    def test_input_read_only_outside_mapreduce(self, session):
        session.select_module(Module.YARN)
        original = session.text
        assert session.set_input_text("changed") is False
        assert session.text == original

    def test_no_autoplay_outside_mapreduce(self, session, manual_timers):
        session.select_module("HIVE")
        assert session.toggle_autoplay() is False
        assert manual_timers.created == []


class TestSessionOutputs:
    """Derived views."""

    def test_visible_output_follows_stage(self, session):
        assert session.visible_output == session.text
        session.next()
        assert session.visible_output == session.result.lines
        session.jump_to(Stage.OUTPUT)
        assert session.visible_output == session.result.reduced

    def test_result_is_memoized(self, session):
        assert session.result is session.result
        assert session.processor.runs == 1

    def test_navigation_passthrough(self, session):
        assert session.next() is Stage.SPLIT
        assert session.previous() is Stage.INPUT
        assert session.jump_to("shuffle") is Stage.SHUFFLE
        assert session.reset() is Stage.INPUT


class TestSessionFromConfig:
    """Input precedence: text > file > preset."""

    def test_preset(self, make_config, manual_timers):
        config = make_config(preset="sales-agg")
        with SimulatorSession.from_config(config, timer_factory=manual_timers) as s:
            assert s.text == get_preset("sales-agg").data

    def test_file(self, make_config, temp_dir):
        path = temp_dir / "words.txt"
        path.write_text("red blue\nred\n", encoding="utf-8")
        with SimulatorSession.from_config(make_config(input_file=str(path))) as s:
            assert s.result.pairs("reduce") == (("blue", 1), ("red", 2))

    def test_text_beats_file(self, make_config, temp_dir):
        path = temp_dir / "words.txt"
        path.write_text("from file", encoding="utf-8")
        config = make_config(input_file=str(path), input_text="from text")
        with SimulatorSession.from_config(config) as s:
            assert s.text == "from text"

    def test_missing_file(self, make_config, temp_dir):
        config = make_config(input_file=str(temp_dir / "missing.txt"))
        with pytest.raises(FileNotFoundError):
            SimulatorSession.from_config(config)

    def test_module_and_interval(self, make_config):
        config = make_config(module="hbase", autoplay_interval_sec=0.5)
        with SimulatorSession.from_config(config) as s:
            assert s.module is Module.HBASE
            assert s.sequencer.interval == 0.5
