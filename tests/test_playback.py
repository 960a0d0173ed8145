"""Tests for PlaybackController: manual navigation, auto-play, cancellation."""
import threading
import time

import pytest

from algorithms import run_algorithm
from algorithms.step import Trace
from engine import PlaybackController, PlaybackState
from errors import IndexOutOfRange, InvalidPlaybackState


class Recorder:
    """on_step callback that remembers every emitted index."""

    def __init__(self):
        self.indices = []
        self.first = threading.Event()

    def __call__(self, step):
        self.indices.append(step.index)
        self.first.set()


@pytest.fixture
def trace(path_graph) -> Trace:
    return run_algorithm("bfs", path_graph, 0, 2)   # 7 steps


@pytest.fixture
def seen():
    return Recorder()


@pytest.fixture
def ctrl(seen):
    return PlaybackController(on_step=seen, interval=0)


# ---------------------------------------------------------------------------
# Load / unload
# ---------------------------------------------------------------------------
class TestLifecycle:
    def test_starts_empty(self, ctrl):
        assert ctrl.state == PlaybackState.EMPTY
        assert ctrl.trace is None
        assert ctrl.current_step is None
        assert ctrl.cursor == -1

    def test_load_emits_first_step(self, ctrl, seen, trace):
        step = ctrl.load(trace)
        assert step.index == 0
        assert seen.indices == [0]
        assert ctrl.state == PlaybackState.READY
        assert ctrl.current_step is trace[0]

    def test_unload(self, ctrl, trace):
        ctrl.load(trace)
        ctrl.unload()
        assert ctrl.state == PlaybackState.EMPTY
        assert ctrl.trace is None

    def test_navigation_without_trace(self, ctrl):
        with pytest.raises(InvalidPlaybackState):
            ctrl.step_forward()
        with pytest.raises(InvalidPlaybackState):
            ctrl.jump_to(0)
        with pytest.raises(InvalidPlaybackState):
            ctrl.play_from()

    def test_cancel_when_idle(self, ctrl, trace):
        assert ctrl.cancel() is False
        ctrl.load(trace)
        assert ctrl.cancel() is False


# ---------------------------------------------------------------------------
# Manual navigation
# ---------------------------------------------------------------------------
class TestNavigation:
    def test_forward_and_back(self, ctrl, seen, trace):
        ctrl.load(trace)
        assert ctrl.step_forward().index == 1
        assert ctrl.step_forward().index == 2
        assert ctrl.step_backward().index == 1
        assert seen.indices == [0, 1, 2, 1]

    def test_backward_at_start_is_noop(self, ctrl, seen, trace):
        ctrl.load(trace)
        assert ctrl.step_backward() is None
        assert ctrl.cursor == 0
        assert seen.indices == [0]

    def test_forward_at_end_is_noop(self, ctrl, seen, trace):
        ctrl.load(trace)
        ctrl.jump_to_end()
        assert ctrl.step_forward() is None
        assert ctrl.cursor == len(trace) - 1
        assert seen.indices == [0, len(trace) - 1]

    def test_jump_to_same_index_emits_again(self, ctrl, seen, trace):
        ctrl.load(trace)
        ctrl.jump_to(3)
        ctrl.jump_to(3)
        assert seen.indices == [0, 3, 3]
        assert ctrl.cursor == 3

    @pytest.mark.parametrize("index", [-1, 7, 100])
    def test_jump_out_of_range(self, ctrl, seen, trace, index):
        ctrl.load(trace)
        with pytest.raises(IndexOutOfRange):
            ctrl.jump_to(index)
        assert ctrl.cursor == 0
        assert seen.indices == [0]

    def test_rewind(self, ctrl, trace):
        ctrl.load(trace)
        ctrl.jump_to(5)
        assert ctrl.rewind().index == 0


# ---------------------------------------------------------------------------
# Auto-play
# ---------------------------------------------------------------------------
class TestAutoPlay:
    def test_play_to_end(self, ctrl, seen, trace):
        ctrl.load(trace)
        assert ctrl.play_from() is True
        assert seen.indices == [0, 0, 1, 2, 3, 4, 5, 6]
        assert ctrl.state == PlaybackState.READY
        assert ctrl.cursor == 6

    def test_play_from_middle(self, ctrl, seen, trace):
        ctrl.load(trace)
        ctrl.play_from(4)
        assert seen.indices == [0, 4, 5, 6]

    def test_play_from_last_step(self, ctrl, seen, trace):
        ctrl.load(trace)
        assert ctrl.play_from(6) is True
        assert seen.indices == [0, 6]

    def test_play_out_of_range(self, ctrl, trace):
        ctrl.load(trace)
        with pytest.raises(IndexOutOfRange):
            ctrl.play_from(7)
        assert ctrl.state == PlaybackState.READY

    def test_interval_is_waited_between_steps(self, seen, path_graph):
        ctrl = PlaybackController(on_step=seen, interval=0.05)
        ctrl.load(run_algorithm("bfs", path_graph, 0, 2))
        t0 = time.monotonic()
        ctrl.play_from(4)          # steps 4, 5, 6: two waits
        assert time.monotonic() - t0 >= 0.09

    def test_cancel_stops_background_play(self, ctrl, seen, trace):
        ctrl.load(trace)
        seen.first.clear()
        thread = ctrl.play_in_background(interval=5)
        assert ctrl.state == PlaybackState.ADVANCING
        assert seen.first.wait(2)

        assert ctrl.cancel() is True
        thread.join(2)
        assert not thread.is_alive()
        assert ctrl.state == PlaybackState.READY
        assert seen.indices == [0, 0]
        assert ctrl.cursor == 0

    def test_manual_navigation_refused_while_playing(self, ctrl, trace):
        ctrl.load(trace)
        thread = ctrl.play_in_background(interval=5)
        try:
            with pytest.raises(InvalidPlaybackState):
                ctrl.step_forward()
            with pytest.raises(InvalidPlaybackState):
                ctrl.jump_to(2)
            with pytest.raises(InvalidPlaybackState):
                ctrl.play_from()
        finally:
            ctrl.cancel()
            thread.join(2)

    def test_load_during_play_replaces_trace(self, ctrl, trace, weighted_triangle):
        ctrl.load(trace)
        thread = ctrl.play_in_background(interval=5)
        other = run_algorithm("dijkstra", weighted_triangle, 0, 1)
        ctrl.load(other)
        thread.join(2)
        assert not thread.is_alive()
        assert ctrl.trace is other
        assert ctrl.cursor == 0
        assert ctrl.state == PlaybackState.READY

    def test_unload_during_play(self, ctrl, trace):
        ctrl.load(trace)
        thread = ctrl.play_in_background(interval=5)
        ctrl.unload()
        thread.join(2)
        assert not thread.is_alive()
        assert ctrl.state == PlaybackState.EMPTY

    def test_callback_may_reenter_controller(self, trace):
        cursors = []
        ctrl = PlaybackController(interval=0)
        ctrl.on_step = lambda step: cursors.append(ctrl.cursor)
        ctrl.load(trace)
        ctrl.play_from()
        assert cursors == [0, 0, 1, 2, 3, 4, 5, 6]


class TestFailingCallback:
    @staticmethod
    def _failing_on(call_number):
        calls = []

        def on_step(step):
            calls.append(step.index)
            if len(calls) == call_number:
                raise RuntimeError("display went away")
        return on_step

    def test_play_from_returns_to_ready(self, trace):
        # call 1 is load(), calls 2.. are auto-play emissions
        ctrl = PlaybackController(on_step=self._failing_on(3), interval=0)
        ctrl.load(trace)
        with pytest.raises(RuntimeError):
            ctrl.play_from()
        assert ctrl.state == PlaybackState.READY
        assert ctrl.cursor == 1
        assert ctrl.step_forward().index == 2

    def test_background_play_returns_to_ready(self, trace):
        ctrl = PlaybackController(on_step=self._failing_on(3), interval=0)
        ctrl.load(trace)
        thread = ctrl.play_in_background()
        thread.join(2)
        assert not thread.is_alive()
        assert ctrl.state == PlaybackState.READY
        assert ctrl.jump_to(4).index == 4
        assert ctrl.play_from() is True
