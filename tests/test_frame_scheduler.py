from unittest.mock import MagicMock

import pytest

from frame_scheduler import FixedStepScheduler, TkFrameScheduler


def test_fixed_step_fires_with_advancing_clock():
    scheduler = FixedStepScheduler(frame_ms=10.0, start=100.0)
    seen = []
    scheduler.request_tick(seen.append)
    assert scheduler.has_pending
    assert scheduler.step() is True
    assert seen == [110.0]
    assert not scheduler.has_pending
    assert scheduler.step() is False
    assert scheduler.now == 120.0


def test_fixed_step_run_until_idle_follows_rescheduling():
    scheduler = FixedStepScheduler(frame_ms=5.0)
    seen = []

    def _tick(timestamp):
        seen.append(timestamp)
        if len(seen) < 4:
            scheduler.request_tick(_tick)

    scheduler.request_tick(_tick)
    assert scheduler.run_until_idle() == 4
    assert seen == [5.0, 10.0, 15.0, 20.0]
    assert scheduler.fired == 4


def test_fixed_step_cancel_is_idempotent():
    scheduler = FixedStepScheduler()
    handle = scheduler.request_tick(lambda timestamp: None)
    scheduler.cancel_tick(handle)
    scheduler.cancel_tick(handle)
    scheduler.cancel_tick(None)
    assert scheduler.cancelled == 1
    assert scheduler.run_until_idle() == 0


def test_fixed_step_allows_one_pending_request():
    scheduler = FixedStepScheduler()
    scheduler.request_tick(lambda timestamp: None)
    with pytest.raises(RuntimeError):
        scheduler.request_tick(lambda timestamp: None)


def test_fixed_step_run_until_idle_has_a_limit():
    scheduler = FixedStepScheduler()

    def _forever(timestamp):
        scheduler.request_tick(_forever)

    scheduler.request_tick(_forever)
    with pytest.raises(RuntimeError):
        scheduler.run_until_idle(max_frames=10)


def test_fixed_step_rejects_bad_frame_length():
    with pytest.raises(ValueError):
        FixedStepScheduler(frame_ms=0)


def test_tk_scheduler_uses_after_and_passes_milliseconds():
    widget = MagicMock()
    widget.after.return_value = "after#1"
    scheduler = TkFrameScheduler(widget, interval_ms=16, clock=lambda: 2.5)
    callback = MagicMock()

    handle = scheduler.request_tick(callback)

    assert handle == "after#1"
    delay, fire = widget.after.call_args.args
    assert delay == 16
    fire()
    callback.assert_called_once_with(2500.0)


def test_tk_scheduler_cancels_pending_request():
    widget = MagicMock()
    widget.after.return_value = "after#7"
    scheduler = TkFrameScheduler(widget)
    handle = scheduler.request_tick(MagicMock())

    scheduler.cancel_tick(handle)
    scheduler.cancel_tick(handle)

    widget.after_cancel.assert_called_once_with("after#7")


def test_tk_scheduler_ignores_fired_and_empty_handles():
    widget = MagicMock()
    widget.after.return_value = "after#2"
    scheduler = TkFrameScheduler(widget, clock=lambda: 0.0)
    handle = scheduler.request_tick(MagicMock())
    widget.after.call_args.args[1]()

    scheduler.cancel_tick(handle)
    scheduler.cancel_tick(None)

    widget.after_cancel.assert_not_called()
