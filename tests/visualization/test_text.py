"""Tests for terminal rendering."""

import pytest

from mrviz.catalog import MODULE_INFO, STAGE_INFO, get_preset
from mrviz.pipeline.processor import run_pipeline
from mrviz.pipeline.session import SimulatorSession
from mrviz.types import Module, Stage
from mrviz.visualization import render_session, render_stage, render_stepper
from mrviz.visualization.text import render_module

pytestmark = pytest.mark.unit


SALES = run_pipeline(get_preset("sales-agg").data)


class TestStepper:
    """One-line stage indicator."""

    def test_current_stage_bracketed(self):
        line = render_stepper(Stage.SPLIT)
        assert line.startswith("1. Input Data > [2. Splitting] > 3. Mapping")
        assert line.endswith("6. Final Output")

    def test_playing_marker(self):
        assert render_stepper("map", playing=True).endswith("(playing)")
        assert "(playing)" not in render_stepper("map")


class TestRenderStage:
    """Per-stage frames."""

    def test_header(self):
        frame = render_stage(Stage.MAP, SALES)
        assert STAGE_INFO[Stage.MAP].title in frame
        assert STAGE_INFO[Stage.MAP].desc in frame

    def test_input(self):
        assert "North 100" in render_stage(Stage.INPUT, SALES)

    def test_empty_input(self):
        frame = render_stage(Stage.INPUT, run_pipeline("  "))
        assert "(no input)" in frame

    def test_split_blocks(self):
        frame = render_stage(Stage.SPLIT, SALES)
        assert "Split Block #1" in frame
        assert "Split Block #5" in frame

    def test_shuffle_groups(self):
        frame = render_stage(Stage.SHUFFLE, SALES)
        assert "count" in frame
        assert "North" in frame

    def test_output(self):
        frame = render_stage(Stage.OUTPUT, SALES)
        assert "250" in frame
        assert "End of Demo" in frame
        assert "End of Demo" not in render_stage(Stage.REDUCE, SALES)

    def test_empty_tables(self):
        empty = run_pipeline("")
        assert "(empty)" in render_stage(Stage.MAP, empty)
        assert "(empty)" in render_stage(Stage.REDUCE, empty)

    def test_no_ids_shown(self):
        frame = render_stage(Stage.MAP, SALES)
        assert SALES.mapped[0].id not in frame

    def test_max_rows_truncates(self):
        result = run_pipeline("\n".join(f"w{i}" for i in range(30)))
        frame = render_stage(Stage.MAP, result, max_rows=4)
        assert "w0" in frame
        assert "w15" not in frame


class TestRenderSession:
    """Session-level rendering."""

    def test_mapreduce_session(self):
        with SimulatorSession() as session:
            session.next()
            assert "[2. Splitting]" in render_session(session)

    def test_other_module(self):
        with SimulatorSession(module=Module.HDFS) as session:
            frame = render_session(session)
        assert MODULE_INFO[Module.HDFS].title in frame
        assert frame == render_module(Module.HDFS)
