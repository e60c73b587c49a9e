# どこで: `src/sierpix/core/frame_scheduler.py`。
# 何を: ホストの「次の描画機会」を使って、目標 fps でコールバックを間引き実行する汎用スケジューラを提供する。
# なぜ: フラクタル固有の処理とタイミング制御を分離し、ホスト（pyglet / テスト用の偽物）を差し替え可能にするため。

from __future__ import annotations

import enum
import logging
import time
from typing import Callable, Protocol

_logger = logging.getLogger(__name__)


class FrameHost(Protocol):
    """「次の描画機会にコールバックを 1 回呼ぶ」要求とその取り消しを提供するホスト。"""

    def request_frame(self, callback: Callable[[], None]) -> object:
        """次の描画機会に `callback` を 1 回呼ぶよう要求し、取り消し用トークンを返す。"""
        ...

    def cancel_frame(self, token: object) -> None:
        """未実行の要求を取り消す。"""
        ...


class SchedulerState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class FrameScheduler:
    """fps 制限付きの繰り返し駆動器。

    Notes
    -----
    - 描画機会のたびに経過時間を調べ、`1 / fps` 秒以上経っていれば `tick()` を呼ぶ。
      足りなければ `tick()` は呼ばずに次の機会を要求し直す（sleep はしない）。
    - `tick()` が False を返したら以後の要求をやめ、STOPPED になる。再開は `start()` のみ。
    - 未処理の要求は常に高々 1 つ。`cancel()` 後は、ホスト側に配送済みの機会が残っていても
      `tick()` は二度と呼ばれない。
    """

    def __init__(
        self,
        tick: Callable[[], bool],
        *,
        fps: float,
        host: FrameHost,
        now: Callable[[], float] = time.perf_counter,
    ) -> None:
        _fps = float(fps)
        if _fps <= 0:
            raise ValueError("fps は正の値である必要がある")
        self._tick = tick
        self._fps = _fps
        self._host = host
        self._now = now

        self._state = SchedulerState.IDLE
        self._last_tick = 0.0
        self._pending: object | None = None
        # start/cancel ごとに進める。古いチェーンの機会が届いても無視するため。
        self._chain = 0

    @property
    def fps(self) -> float:
        return float(self._fps)

    @property
    def interval(self) -> float:
        """tick 間の最小間隔（秒）を返す。"""

        return 1.0 / float(self._fps)

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is SchedulerState.RUNNING

    def start(self) -> None:
        """現在時刻を基準に駆動を開始する（実行中なら古いチェーンを捨てて張り直す）。"""

        self._withdraw()
        self._chain += 1
        self._last_tick = float(self._now())
        self._state = SchedulerState.RUNNING
        _logger.debug("frame scheduler started: fps=%s", self._fps)
        self._request(self._chain)

    def cancel(self) -> None:
        """未処理の要求を取り消し、以後 `tick()` が呼ばれないようにする。"""

        self._withdraw()
        self._chain += 1
        if self._state is SchedulerState.RUNNING:
            self._state = SchedulerState.STOPPED
            _logger.debug("frame scheduler cancelled")

    def _withdraw(self) -> None:
        pending = self._pending
        self._pending = None
        if pending is not None:
            self._host.cancel_frame(pending)

    def _request(self, chain: int) -> None:
        def on_frame() -> None:
            self._on_frame(chain)

        self._pending = self._host.request_frame(on_frame)

    def _on_frame(self, chain: int) -> None:
        if chain != self._chain or self._state is not SchedulerState.RUNNING:
            return
        self._pending = None

        elapsed = float(self._now()) - self._last_tick
        if elapsed >= self.interval:
            try:
                keep_going = bool(self._tick())
            except Exception:
                self._state = SchedulerState.STOPPED
                raise
            self._last_tick = float(self._now())

            # tick() の中で cancel()/start() された場合は、そちらのチェーンに任せる。
            if chain != self._chain:
                return
            if not keep_going:
                self._state = SchedulerState.STOPPED
                return

        self._request(chain)


__all__ = ["FrameHost", "FrameScheduler", "SchedulerState"]
