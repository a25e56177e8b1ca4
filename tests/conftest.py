# tests/conftest.py
import copy
from unittest.mock import Mock

import pytest

from termspotter.Configuration import DEFAULT_CONFIG
from termspotter.LectureSession import LectureSession


class ManualTimer:
    """threading.Timer stand-in driven by ManualScheduler.advance()."""

    def __init__(self, due: float, function) -> None:
        self.due = due
        self.function = function
        self.daemon = False
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def is_pending(self) -> bool:
        return self.started and not self.cancelled and not self.fired


class ManualScheduler:
    """Fake clock plus timer factory.

    Timers fire in due order, on the calling thread, only when advance() moves
    the clock past their deadline.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[ManualTimer] = []

    def clock(self) -> float:
        return self.now

    def timer_factory(self, interval: float, function) -> ManualTimer:
        timer = ManualTimer(self.now + interval, function)
        self.timers.append(timer)
        return timer

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.timers if t.is_pending() and t.due <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due)
            self.now = timer.due
            timer.fired = True
            timer.function()
        self.now = target

    def pending(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.is_pending()]


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def config():
    return copy.deepcopy(DEFAULT_CONFIG)


@pytest.fixture
def subscriber():
    """Mock display surface implementing TermDisplaySubscriber."""
    surface = Mock()
    surface.on_term_surfaced = Mock()
    surface.on_display_cleared = Mock()
    return surface


@pytest.fixture
def session(config, scheduler, subscriber):
    """Started lecture session on the manual scheduler with a subscribed display."""
    lecture = LectureSession(
        config=config,
        timer_factory=scheduler.timer_factory,
        clock=scheduler.clock,
    )
    lecture.subscribe(subscriber)
    lecture.on_lecture_start()
    yield lecture
    lecture.close()
