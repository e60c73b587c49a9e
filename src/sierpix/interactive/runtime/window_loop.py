# どこで: `src/sierpix/interactive/runtime/window_loop.py`。
# 何を: pyglet のウィンドウを app loop（`pyglet.app.run()`）で回す最小ランナーを提供する。
# なぜ: OS 依存のイベント配送を pyglet に任せ、手動 `dispatch_events()` 由来の入力取りこぼしを避けるため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import pyglet


@dataclass(frozen=True, slots=True)
class WindowTask:
    """1つの pyglet window と「flip しない描画関数」を束ねる。"""

    # 注: pyglet の Window 型は環境/バージョン差があるため Any に寄せる。
    window: Any

    # 1フレーム分の描画処理（back buffer へ描くだけ）。
    # `switch_to()` / `flip()` は pyglet（`Window.draw()`）が担当する前提。
    draw_frame: Callable[[], None]


class WindowLoop:
    """ウィンドウを表示リフレッシュ相当の頻度で再描画し続けるループ。

    世代の進行（2 fps 程度）は FrameScheduler が別途 pyglet.clock 上で管理する。
    ここは「キャンバス内容を画面へ出す」頻度だけを扱う。
    """

    def __init__(self, task: WindowTask, *, refresh_rate: float) -> None:
        self._task = task
        self._refresh_rate = float(refresh_rate)

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        task = self._task

        def request_exit(*_: object) -> None:
            # pyglet の on_close から呼ばれるコールバックは引数が来る場合があるため *args を受ける。
            pyglet.app.exit()

        task.window.push_handlers(on_close=request_exit)
        task.window.push_handlers(on_draw=task.draw_frame)

        def draw(dt: float) -> None:
            # 閉じられたウィンドウへ draw すると例外になり得るため、開いているときだけ描く。
            if task.window not in pyglet.app.windows:
                return
            task.window.draw(dt)

        if self._refresh_rate <= 0:
            pyglet.clock.schedule(draw)
        else:
            pyglet.clock.schedule_interval(draw, 1.0 / self._refresh_rate)

        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(draw)
