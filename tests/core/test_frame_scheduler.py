"""fps 制限付きスケジューラ（`sierpix.core.frame_scheduler.FrameScheduler`）のテスト。"""

from __future__ import annotations

import pytest

from sierpix.core.frame_scheduler import FrameScheduler, SchedulerState


class _TickRecorder:
    def __init__(self, time, *, stop_after: int | None = None) -> None:
        self.time = time
        self.stop_after = stop_after
        self.times: list[float] = []

    def __call__(self) -> bool:
        self.times.append(self.time())
        if self.stop_after is None:
            return True
        return len(self.times) < self.stop_after


def test_start_moves_idle_to_running_with_one_request(fake_time, frame_host) -> None:
    scheduler = FrameScheduler(_TickRecorder(fake_time), fps=2.0, host=frame_host, now=fake_time)
    assert scheduler.state is SchedulerState.IDLE
    assert frame_host.pending == {}

    scheduler.start()
    assert scheduler.state is SchedulerState.RUNNING
    assert scheduler.is_running
    assert len(frame_host.pending) == 1
    assert scheduler.interval == pytest.approx(0.5)


def test_tick_rate_is_limited_to_fps(fake_time, frame_host) -> None:
    tick = _TickRecorder(fake_time)
    scheduler = FrameScheduler(tick, fps=2.0, host=frame_host, now=fake_time)
    scheduler.start()

    # 16ms ごとの描画機会を 5 秒分。
    frame_host.run_frames(int(5.0 / 0.016))

    assert len(tick.times) >= 9
    gaps = [b - a for a, b in zip(tick.times, tick.times[1:])]
    for gap in gaps:
        assert 0.5 <= gap <= 0.5 + 0.016 + 1e-9
    assert tick.times[0] <= 0.5 + 0.016 + 1e-9


def test_polling_continues_between_ticks(fake_time, frame_host) -> None:
    tick = _TickRecorder(fake_time)
    scheduler = FrameScheduler(tick, fps=2.0, host=frame_host, now=fake_time)
    scheduler.start()

    frame_host.run_frames(10)
    assert tick.times == []
    assert len(frame_host.pending) == 1


def test_stops_after_tick_returns_false(fake_time, frame_host) -> None:
    tick = _TickRecorder(fake_time, stop_after=3)
    scheduler = FrameScheduler(tick, fps=10.0, host=frame_host, now=fake_time)
    scheduler.start()

    frame_host.run_frames(200)

    assert len(tick.times) == 3
    assert scheduler.state is SchedulerState.STOPPED
    assert frame_host.pending == {}


def test_stopped_scheduler_resumes_only_on_explicit_start(fake_time, frame_host) -> None:
    tick = _TickRecorder(fake_time, stop_after=1)
    scheduler = FrameScheduler(tick, fps=10.0, host=frame_host, now=fake_time)
    scheduler.start()
    frame_host.run_frames(50)
    assert len(tick.times) == 1

    frame_host.run_frames(50)
    assert len(tick.times) == 1

    tick.stop_after = 2
    scheduler.start()
    assert scheduler.state is SchedulerState.RUNNING
    frame_host.run_frames(50)
    assert len(tick.times) == 2
    assert scheduler.state is SchedulerState.STOPPED


def test_cancel_withdraws_pending_request(fake_time, frame_host) -> None:
    tick = _TickRecorder(fake_time)
    scheduler = FrameScheduler(tick, fps=2.0, host=frame_host, now=fake_time)
    scheduler.start()
    frame_host.run_frames(40)
    count = len(tick.times)
    assert count >= 1

    scheduler.cancel()
    assert scheduler.state is SchedulerState.STOPPED
    assert frame_host.pending == {}

    frame_host.run_frames(500)
    assert len(tick.times) == count


def test_cancel_ignores_opportunity_already_delivered(fake_time, frame_host) -> None:
    tick = _TickRecorder(fake_time)
    scheduler = FrameScheduler(tick, fps=2.0, host=frame_host, now=fake_time)
    scheduler.start()
    stale = frame_host.last_callback
    assert stale is not None

    scheduler.cancel()
    fake_time.frame += 1000
    # ホストが取り消し前に配送を確定していたケース。
    stale()

    assert tick.times == []
    assert frame_host.pending == {}


def test_restart_keeps_single_outstanding_request(fake_time, frame_host) -> None:
    tick = _TickRecorder(fake_time)
    scheduler = FrameScheduler(tick, fps=2.0, host=frame_host, now=fake_time)

    scheduler.start()
    scheduler.start()
    scheduler.start()
    assert len(frame_host.pending) == 1
    assert frame_host.max_pending == 1

    frame_host.run_frames(int(2.0 / 0.016))
    gaps = [b - a for a, b in zip(tick.times, tick.times[1:])]
    assert all(gap >= 0.5 for gap in gaps)


def test_cancel_from_inside_tick_stops_chain(fake_time, frame_host) -> None:
    calls: list[int] = []
    scheduler: FrameScheduler

    def tick() -> bool:
        calls.append(1)
        scheduler.cancel()
        return True

    scheduler = FrameScheduler(tick, fps=10.0, host=frame_host, now=fake_time)
    scheduler.start()
    frame_host.run_frames(100)

    assert calls == [1]
    assert scheduler.state is SchedulerState.STOPPED
    assert frame_host.pending == {}


def test_cancel_before_start_stays_idle(fake_time, frame_host) -> None:
    scheduler = FrameScheduler(lambda: True, fps=2.0, host=frame_host, now=fake_time)
    scheduler.cancel()
    assert scheduler.state is SchedulerState.IDLE


def test_tick_exception_stops_scheduler_and_propagates(fake_time, frame_host) -> None:
    def tick() -> bool:
        raise RuntimeError("boom")

    scheduler = FrameScheduler(tick, fps=10.0, host=frame_host, now=fake_time)
    scheduler.start()
    with pytest.raises(RuntimeError, match="boom"):
        frame_host.run_frames(100)
    assert scheduler.state is SchedulerState.STOPPED
    assert frame_host.pending == {}


@pytest.mark.parametrize("fps", [0.0, -1.0])
def test_rejects_non_positive_fps(fps, fake_time, frame_host) -> None:
    with pytest.raises(ValueError):
        FrameScheduler(lambda: True, fps=fps, host=frame_host, now=fake_time)
