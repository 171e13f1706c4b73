from __future__ import annotations

import pytest

from engine.core.frame_clock import FrameClock
from engine.runtime.driver import ClockDriver


class _Recorder:
    def __init__(self, log: list[str], name: str) -> None:
        self._log = log
        self._name = name

    def tick(self, dt: float) -> None:
        self._log.append(self._name)


def test_first_frame_is_always_pending(make_clock) -> None:
    driver = ClockDriver(make_clock(0.0, paused=True))
    assert driver.repaint_pending
    assert driver.consume_repaint() is True
    assert driver.consume_repaint() is False


def test_running_clock_requests_repaint_every_tick(make_clock) -> None:
    driver = ClockDriver(make_clock(0.0))
    driver.consume_repaint()
    driver.tick(1 / 60)
    assert driver.consume_repaint() is True
    driver.tick(1 / 60)
    assert driver.repaint_pending


def test_paused_clock_only_repaints_on_request(make_clock) -> None:
    driver = ClockDriver(make_clock(0.0, paused=True))
    driver.consume_repaint()
    driver.tick(1 / 60)
    assert driver.consume_repaint() is False
    driver.request_repaint()
    assert driver.consume_repaint() is True


def test_frame_clock_ticks_in_order_and_tracks_fps() -> None:
    log: list[str] = []
    clock = FrameClock([_Recorder(log, "a"), _Recorder(log, "b")])
    clock.tick(0.02)
    clock.tick(0.025)
    assert log == ["a", "b", "a", "b"]
    assert clock.frame_count == 2
    assert clock.fps == pytest.approx(40.0)
