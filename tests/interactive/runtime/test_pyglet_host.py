import pytest

from sierpix.core.frame_scheduler import FrameScheduler, SchedulerState
from sierpix.interactive.runtime.pyglet_host import PygletFrameHost


class _FakeClock:
    """pyglet.clock.Clock の schedule_once/unschedule だけを持つ偽物。"""

    def __init__(self) -> None:
        self.scheduled: list[tuple[object, float]] = []

    def schedule_once(self, func, delay: float) -> None:
        self.scheduled.append((func, delay))

    def unschedule(self, func) -> None:
        self.scheduled = [(f, d) for f, d in self.scheduled if f is not func]

    def tick(self, dt: float) -> None:
        due = list(self.scheduled)
        self.scheduled.clear()
        for func, _delay in due:
            func(dt)


def test_request_frame_schedules_once_at_refresh_interval():
    clock = _FakeClock()
    host = PygletFrameHost(clock=clock, refresh_rate=50.0)
    calls: list[int] = []

    token = host.request_frame(lambda: calls.append(1))

    assert len(clock.scheduled) == 1
    func, delay = clock.scheduled[0]
    assert func is token
    assert delay == pytest.approx(0.02)

    clock.tick(0.02)
    assert calls == [1]


def test_cancel_frame_unschedules_token():
    clock = _FakeClock()
    host = PygletFrameHost(clock=clock)
    calls: list[int] = []

    token = host.request_frame(lambda: calls.append(1))
    host.cancel_frame(token)
    clock.tick(1.0)

    assert calls == []
    assert clock.scheduled == []


def test_scheduler_runs_on_pyglet_host():
    clock = _FakeClock()
    now = [0.0]
    ticks: list[float] = []

    def tick() -> bool:
        ticks.append(now[0])
        return len(ticks) < 2

    scheduler = FrameScheduler(tick, fps=4.0, host=PygletFrameHost(clock=clock), now=lambda: now[0])
    scheduler.start()
    for _ in range(120):
        now[0] += 1.0 / 60.0
        clock.tick(1.0 / 60.0)

    assert len(ticks) == 2
    assert ticks[1] - ticks[0] >= 0.25
    assert scheduler.state is SchedulerState.STOPPED
    assert clock.scheduled == []


def test_rejects_non_positive_refresh_rate():
    with pytest.raises(ValueError):
        PygletFrameHost(clock=_FakeClock(), refresh_rate=0.0)
