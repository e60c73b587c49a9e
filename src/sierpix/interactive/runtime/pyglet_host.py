# どこで: `src/sierpix/interactive/runtime/pyglet_host.py`。
# 何を: pyglet.clock を「次の描画機会」ホストとして FrameScheduler に提供する。
# なぜ: スケジューラ本体を pyglet 非依存に保ち、ホスト側の差し替え（テストでは偽物）を可能にするため。

from __future__ import annotations

from typing import Any, Callable

import pyglet


class PygletFrameHost:
    """pyglet の clock 上で 1 回だけ呼ばれるコールバックを予約するホスト。

    Notes
    -----
    遅延 0 の `schedule_once` をコールバック内で張り直すと同じ tick で回り続け得るため、
    表示のリフレッシュ間隔（既定 1/60 秒）だけ遅らせて予約する。
    """

    def __init__(self, *, clock: Any | None = None, refresh_rate: float = 60.0) -> None:
        _rate = float(refresh_rate)
        if _rate <= 0:
            raise ValueError("refresh_rate は正の値である必要がある")
        self._clock = clock if clock is not None else pyglet.clock.get_default()
        self._delay = 1.0 / _rate

    def request_frame(self, callback: Callable[[], None]) -> object:
        def fire(_dt: float) -> None:
            callback()

        self._clock.schedule_once(fire, self._delay)
        return fire

    def cancel_frame(self, token: object) -> None:
        self._clock.unschedule(token)


__all__ = ["PygletFrameHost"]
