"""
Unit tests for cooperative frame scheduling.
"""

from src.live_detection import scheduler as scheduler_module
from src.live_detection.scheduler import FrameScheduler, HighGuiFrameScheduler


class TestFrameScheduler:
    """Tests for FrameScheduler class."""

    def test_runs_callback_on_tick(self):
        scheduler = FrameScheduler()
        calls = []

        scheduler.request_frame(lambda: calls.append(1))

        assert calls == []
        assert scheduler.tick() == 1
        assert calls == [1]
        assert scheduler.pending == 0

    def test_handles_are_unique(self):
        scheduler = FrameScheduler()

        first = scheduler.request_frame(lambda: None)
        second = scheduler.request_frame(lambda: None)

        assert first != second

    def test_cancel(self):
        scheduler = FrameScheduler()
        calls = []
        handle = scheduler.request_frame(lambda: calls.append(1))

        scheduler.cancel_frame(handle)

        assert scheduler.tick() == 0
        assert calls == []

    def test_cancel_unknown_handle_ignored(self):
        scheduler = FrameScheduler()

        scheduler.cancel_frame(42)

        assert scheduler.pending == 0

    def test_requests_during_tick_are_deferred(self):
        """A callback rescheduling itself runs once per tick, not recursively."""
        scheduler = FrameScheduler()
        calls = []

        def loop():
            calls.append(len(calls))
            scheduler.request_frame(loop)

        scheduler.request_frame(loop)
        scheduler.tick()
        scheduler.tick()

        assert calls == [0, 1]
        assert scheduler.pending == 1


class TestHighGuiFrameScheduler:
    """Tests for HighGuiFrameScheduler class."""

    def test_wait_pumps_events_then_ticks(self, monkeypatch):
        delays = []

        def fake_wait_key(delay):
            delays.append(delay)
            return ord("c")

        monkeypatch.setattr(scheduler_module.cv2, "waitKey", fake_wait_key)
        scheduler = HighGuiFrameScheduler(delay_ms=5)
        calls = []
        scheduler.request_frame(lambda: calls.append(1))

        key = scheduler.wait()

        assert key == ord("c")
        assert delays == [5]
        assert calls == [1]
